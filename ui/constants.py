#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Sequence, Tuple

from sim.topology import WORLD_SIZE

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (34, 92, 48)
    ROAD_COLOR: ColorRGB = (60, 60, 60)
    BOX_COLOR: ColorRGB = (70, 70, 70)
    LANE_DASH_COLOR: ColorRGB = (230, 230, 230)
    CENTER_LINE_COLOR: ColorRGB = (246, 191, 90)
    STOP_LINE_COLOR: ColorRGB = (245, 245, 245)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    HUD_TEXT_COLOR: ColorRGB = (220, 220, 220)
    HUD_DIM_COLOR: ColorRGB = (130, 130, 130)
    GO_COLOR: ColorRGB = (0, 230, 110)
    STOP_COLOR: ColorRGB = (255, 60, 60)
    LAMP_OFF_COLOR: ColorRGB = (50, 50, 50)
    LAMP_HOUSING_COLOR: ColorRGB = (18, 18, 18)
    PRIORITY_COLOR: ColorRGB = (255, 136, 0)
    PATH_ALPHA = 90

    WORLD_SIZE_PX = int(WORLD_SIZE)
    PANEL_WIDTH = 280

    CAR_LENGTH = 40
    CAR_WIDTH = 24
    DASH_LEN = 20
    DASH_GAP = 15
    STOP_LINE_WIDTH = 4
    LAMP_RADIUS = 7
    LAMP_CLEARANCE = 18
    """Distance from the outer lane edge to the signal head centre."""

    BEZIER_SAMPLES = 24

    LEGEND_ITEMS: Sequence[Tuple[str, ColorRGB]] = (
        ("GREEN", (0, 230, 110)),
        ("RED", (255, 60, 60)),
        ("PRIORITY", (255, 136, 0)),
    )

    HELP_LINES: Sequence[str] = (
        "SPACE  Pause/Resume",
        "R      Reset",
        "1-8    Arrival on spawn lane",
        "P      Toggle curve paths",
        "L      Toggle legend",
        "F12    Screenshot",
    )

    SCREENSHOT_DIR = "screenshots"

#!/usr/bin/env python3

from .types import ColorRGB, SignalHead
from .constants import ViewConstants
from .draw_road import RoadRenderer
from .draw_vehicles import VehicleRenderer
from .hud import HudRenderer
from .pygame_view import PygameJunctionView, run_pygame_view

__all__ = [
    "ColorRGB",
    "SignalHead",
    "ViewConstants",
    "RoadRenderer",
    "VehicleRenderer",
    "HudRenderer",
    "PygameJunctionView",
    "run_pygame_view",
]

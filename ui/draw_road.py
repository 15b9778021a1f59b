"""
ui/draw_road.py
===============
Renders the static junction: grass background, road surfaces, junction
box, lane dividers, stop lines, road labels and the two-lamp signal heads.

Geometry comes straight from :mod:`sim.topology`; world units are screen
pixels, so no camera transform is involved.
"""

from __future__ import annotations

from typing import List, Optional

import pygame

from sim.topology import (
    CENTER, LANE_WIDTH, ROAD_HALF_W,
    Axis, LANES, Road, lane_id,
)

from .helpers import render_text
from .types import SignalHead


class RoadRenderer:
    """Mixin that draws the road network and signals."""

    # ------------------------------------------------------------------ #
    #  Surfaces                                                            #
    # ------------------------------------------------------------------ #

    def draw_road(self, surface: pygame.Surface) -> None:
        lo = int(CENTER - ROAD_HALF_W)
        width = int(2 * ROAD_HALF_W)
        size = self.WORLD_SIZE_PX
        pygame.draw.rect(surface, self.BG_COLOR, (0, 0, size, size))
        pygame.draw.rect(surface, self.ROAD_COLOR, (lo, 0, width, size))
        pygame.draw.rect(surface, self.ROAD_COLOR, (0, lo, size, width))
        pygame.draw.rect(surface, self.BOX_COLOR, (lo, lo, width, width))

    # ------------------------------------------------------------------ #
    #  Lane markings                                                       #
    # ------------------------------------------------------------------ #

    def draw_lane_markings(self, surface: pygame.Surface) -> None:
        for road in Road:
            outgoing = LANES[lane_id(road, 1)]
            middle = LANES[lane_id(road, 2)]
            outer = LANES[lane_id(road, 3)]
            inbound = middle.direction
            near = CENTER - inbound.sign * ROAD_HALF_W
            far = CENTER - inbound.sign * CENTER
            start, end = min(near, far), max(near, far)

            divider = (outgoing.offset + middle.offset) / 2.0
            self._draw_arm_line(surface, middle.direction.axis, divider, start, end, dashed=False)
            between = (middle.offset + outer.offset) / 2.0
            self._draw_arm_line(surface, middle.direction.axis, between, start, end, dashed=True)

    def _draw_arm_line(
        self,
        surface: pygame.Surface,
        axis: Axis,
        offset: float,
        start: float,
        end: float,
        dashed: bool,
    ) -> None:
        color = self.LANE_DASH_COLOR if dashed else self.CENTER_LINE_COLOR
        segments = []
        if dashed:
            pos = start
            while pos < end:
                segments.append((pos, min(pos + self.DASH_LEN, end)))
                pos += self.DASH_LEN + self.DASH_GAP
        else:
            segments.append((start, end))
        for a, b in segments:
            if axis is Axis.VERTICAL:
                pygame.draw.line(surface, color, (offset, a), (offset, b), 2)
            else:
                pygame.draw.line(surface, color, (a, offset), (b, offset), 2)

    def draw_stop_lines(self, surface: pygame.Surface) -> None:
        half = LANE_WIDTH / 2.0
        for lane in LANES.values():
            if lane.stop_line is None:
                continue
            if lane.direction.axis is Axis.VERTICAL:
                a = (lane.offset - half, lane.stop_line)
                b = (lane.offset + half, lane.stop_line)
            else:
                a = (lane.stop_line, lane.offset - half)
                b = (lane.stop_line, lane.offset + half)
            pygame.draw.line(surface, self.STOP_LINE_COLOR, a, b, self.STOP_LINE_WIDTH)

    def draw_road_labels(self, surface: pygame.Surface) -> None:
        if self.font_title is None:
            return
        for road in Road:
            middle = LANES[lane_id(road, 2)]
            along = CENTER - middle.direction.sign * (CENTER - 30)
            outgoing = LANES[lane_id(road, 1)]
            cross = outgoing.offset + (outgoing.offset - middle.offset) * 1.6
            if middle.direction.axis is Axis.VERTICAL:
                pos = (int(cross), int(along))
            else:
                pos = (int(along), int(cross))
            render_text(surface, self.font_title, road.name, pos, self.HUD_TEXT_COLOR, "center")

    # ------------------------------------------------------------------ #
    #  Signals                                                             #
    # ------------------------------------------------------------------ #

    def signal_heads(self) -> List[SignalHead]:
        """One head per road, beside the outer incoming lane before the stop line."""
        heads = []
        for road in Road:
            middle = LANES[lane_id(road, 2)]
            outer = LANES[lane_id(road, 3)]
            assert outer.stop_line is not None
            side = 1.0 if outer.offset > middle.offset else -1.0
            cross = outer.offset + side * (LANE_WIDTH / 2.0 + self.LAMP_CLEARANCE)
            along = outer.stop_line - outer.direction.sign * self.LAMP_CLEARANCE
            if outer.direction.axis is Axis.VERTICAL:
                x, y = cross, along
            else:
                x, y = along, cross
            heads.append(SignalHead(road.name, int(x), int(y), outer.direction.axis is Axis.VERTICAL))
        return heads

    def draw_signals(self, surface: pygame.Surface, green_road: Optional[str]) -> None:
        r = self.LAMP_RADIUS
        for head in self.signal_heads():
            green = head.road == green_road
            if head.vertical:
                housing = pygame.Rect(head.x - r - 3, head.y - 2 * r - 5, 2 * r + 6, 4 * r + 10)
                red_at = (head.x, head.y - r - 1)
                green_at = (head.x, head.y + r + 1)
            else:
                housing = pygame.Rect(head.x - 2 * r - 5, head.y - r - 3, 4 * r + 10, 2 * r + 6)
                red_at = (head.x - r - 1, head.y)
                green_at = (head.x + r + 1, head.y)
            pygame.draw.rect(surface, self.LAMP_HOUSING_COLOR, housing, border_radius=4)
            pygame.draw.circle(surface, self.LAMP_OFF_COLOR if green else self.STOP_COLOR, red_at, r)
            pygame.draw.circle(surface, self.GO_COLOR if green else self.LAMP_OFF_COLOR, green_at, r)


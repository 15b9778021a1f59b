#!/usr/bin/env python3
"""Vehicle sprite rendering and maneuver curve overlay (mixin)."""

from __future__ import annotations

from typing import Tuple

import pygame

from sim.snapshot import VehicleState

from .helpers import bezier_points, bezier_tangent, direction_vector, draw_alpha_lines, heading_degrees
from .types import ColorRGB


class VehicleRenderer:
    """Mixin that draws vehicles and the curves of vehicles mid-maneuver."""

    # ------------------------------------------------------------------ #
    #  Public draw methods                                                 #
    # ------------------------------------------------------------------ #

    def draw_vehicle(self, surface: pygame.Surface, vehicle: VehicleState) -> None:
        w, h = self.CAR_LENGTH, self.CAR_WIDTH
        sprite = pygame.Surface((w, h), pygame.SRCALPHA)
        color: ColorRGB = vehicle.color

        # Body
        body = pygame.Rect(0, 0, w, h)
        pygame.draw.rect(sprite, color, body, border_radius=4)

        # Windshield
        ws_rect = pygame.Rect(w - 14, 3, 8, h - 6)
        r, g, b = color
        glass = (max(0, r - 70), max(0, g - 70), max(0, b - 70), 200)
        pygame.draw.rect(sprite, glass, ws_rect, border_radius=2)

        # Headlights
        hl_color = (255, 248, 200)
        pygame.draw.circle(sprite, hl_color, (w - 3, 4), 2)
        pygame.draw.circle(sprite, hl_color, (w - 3, h - 4), 2)

        # Border
        pygame.draw.rect(sprite, (235, 235, 235), body, width=1, border_radius=4)

        dx, dy = self._travel_vector(vehicle)
        rotated = pygame.transform.rotate(sprite, heading_degrees(dx, dy))
        dest = rotated.get_rect(center=(int(vehicle.x), int(vehicle.y)))
        surface.blit(rotated, dest)

    def draw_maneuver_path(self, surface: pygame.Surface, vehicle: VehicleState) -> None:
        if vehicle.curve is None:
            return
        source, control, end = vehicle.curve
        points = bezier_points(source, control, end, self.BEZIER_SAMPLES)
        r, g, b = vehicle.color
        draw_alpha_lines(surface, (r, g, b, self.PATH_ALPHA), points, width=3)

    # ------------------------------------------------------------------ #
    #  Helpers                                                             #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _travel_vector(vehicle: VehicleState) -> Tuple[float, float]:
        # the sprite follows the curve tangent, the simulated orientation
        # only flips when the maneuver completes
        if vehicle.curve is not None:
            source, control, end = vehicle.curve
            return bezier_tangent(source, control, end, vehicle.t)
        return direction_vector(vehicle.orientation)

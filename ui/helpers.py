"""
ui/helpers.py
=============
Pure utility functions shared across UI modules:
Bézier sampling, heading from orientation or curve tangent, alpha-surface
drawing and text rendering.
"""

from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pygame

Point = Tuple[float, float]

# ── Direction / heading ───────────────────────────────────────────────────────

_DIR_TO_VECTOR: Dict[str, Tuple[float, float]] = {
    "EAST":  (1.0, 0.0),
    "NORTH": (0.0, -1.0),
    "WEST":  (-1.0, 0.0),
    "SOUTH": (0.0, 1.0),
}


def heading_degrees(dx: float, dy: float) -> float:
    """Pygame rotation angle (CCW degrees) for a y-down travel vector."""
    return -math.degrees(math.atan2(dy, dx))


def direction_vector(orientation: str) -> Tuple[float, float]:
    return _DIR_TO_VECTOR.get(orientation.upper(), (1.0, 0.0))


# ── Bézier sampling ───────────────────────────────────────────────────────────

def bezier_points(p0: Point, p1: Point, p2: Point, n: int = 24) -> List[Tuple[int, int]]:
    """Sample a quadratic Bézier into *n* integer screen points."""
    t = np.linspace(0.0, 1.0, n)
    xs = (1 - t) ** 2 * p0[0] + 2 * (1 - t) * t * p1[0] + t ** 2 * p2[0]
    ys = (1 - t) ** 2 * p0[1] + 2 * (1 - t) * t * p1[1] + t ** 2 * p2[1]
    return [(int(round(x)), int(round(y))) for x, y in zip(xs, ys)]


def bezier_tangent(p0: Point, p1: Point, p2: Point, t: float) -> Tuple[float, float]:
    """Unit tangent of a quadratic Bézier at *t* (falls back to the chord)."""
    dx = 2 * (1 - t) * (p1[0] - p0[0]) + 2 * t * (p2[0] - p1[0])
    dy = 2 * (1 - t) * (p1[1] - p0[1]) + 2 * t * (p2[1] - p1[1])
    norm = math.hypot(dx, dy)
    if norm < 1e-8:
        dx, dy = p2[0] - p0[0], p2[1] - p0[1]
        norm = math.hypot(dx, dy) or 1.0
    return dx / norm, dy / norm


# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_lines(
    target: pygame.Surface,
    color: Tuple[int, ...],
    points: Sequence[Tuple[int, int]],
    width: int = 2,
) -> None:
    """Draw a semi-transparent open polyline (colour tuple with 4 channels)."""
    if len(points) < 2:
        return
    tmp = pygame.Surface(target.get_size(), pygame.SRCALPHA)
    pygame.draw.lines(tmp, color, False, points, width)
    target.blit(tmp, (0, 0))


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect

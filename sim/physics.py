#!/usr/bin/env python3
"""
sim/physics.py
==============
Low-level geometry helpers used by :mod:`sim.topology`,
:mod:`sim.kinematics` and :mod:`sim.maneuver`.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

import math
from typing import Tuple

Point = Tuple[float, float]


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def quadratic_bezier(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    """Evaluate the quadratic Bézier curve *p0 → p2* with control *p1* at *t*.

    Parameters
    ----------
    p0, p1, p2 : (float, float)
        Start, control and end points.
    t : float
        Curve parameter in ``[0, 1]``.
    """
    u = 1.0 - t
    x = u * u * p0[0] + 2.0 * u * t * p1[0] + t * t * p2[0]
    y = u * u * p0[1] + 2.0 * u * t * p1[1] + t * t * p2[1]
    return x, y


def axial_progress(x: float, y: float, dx: float, dy: float) -> float:
    """Distance already travelled along a unit axis direction.

    Larger values are further along.  Only one of *dx*, *dy* is non-zero
    for the junction's axis-aligned lanes.
    """
    return x * dx + y * dy


def signed_stop_distance(
    x: float, y: float, dx: float, dy: float, stop_line: float,
) -> float:
    """Signed distance from *(x, y)* to a stop line across the travel axis.

    Positive → the point has not yet reached the line.
    Zero / negative → the point is on or past it.

    Parameters
    ----------
    x, y : float
        Position in simulation units.
    dx, dy : float
        Unit travel direction (+1 / −1 / 0).
    stop_line : float
        Coordinate of the line along the travel axis.
    """
    if dx != 0:
        return (stop_line - x) * dx
    return (stop_line - y) * dy


def in_bounds(x: float, y: float, low: float, high: float) -> bool:
    """True while *(x, y)* lies inside the square ``[low, high]²``."""
    return low <= x <= high and low <= y <= high

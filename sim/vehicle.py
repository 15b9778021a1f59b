#!/usr/bin/env python3
"""
sim/vehicle.py
==============
Vehicle entity and its motion state.

A vehicle is either driving along its lane (:class:`Straight`) or
committed to a curve across the junction (:class:`Maneuvering`).  The two
states are separate types so a vehicle can never be half-turning.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from sim.physics import Point
from sim.topology import Direction, PathChoice

ColorRGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Straight:
    """Driving along the current lane's axis."""


@dataclass
class Maneuvering:
    """Following a quadratic Bézier from *source* through *control* to *end*.

    Attributes
    ----------
    source, control, end : (float, float)
        Curve points; *source* is the vehicle position when the maneuver
        was triggered.
    target_lane : int
        Lane the vehicle joins when the curve completes.
    target_orientation : Direction
        Orientation applied at completion (never mid-curve).
    rate : float
        Curve-parameter increment per tick.
    t : float
        Curve parameter in ``[0, 1]``.
    kind : str
        ``"right"``, ``"left"`` or ``"straight"``.
    """

    source: Point
    control: Point
    end: Point
    target_lane: int
    target_orientation: Direction
    rate: float
    t: float = 0.0
    kind: str = "straight"


Motion = Union[Straight, Maneuvering]


@dataclass
class Vehicle:
    """A single vehicle owned by :class:`~sim.registry.VehicleRegistry`.

    Attributes
    ----------
    id : int
        Stable identifier, never reused within a registry.
    lane : int
        Current lane id.
    x, y : float
        Position of the vehicle centre in simulation units.
    speed : float
        Advance per tick along the lane (constant).
    orientation : Direction
        Heading used for drawing; follows the lane.
    path_choice : PathChoice
        Route decision made at spawn time.
    color : (int, int, int)
        Body colour for the view.
    motion : Straight or Maneuvering
    """

    id: int
    lane: int
    x: float
    y: float
    speed: float
    orientation: Direction
    path_choice: PathChoice = PathChoice.STRAIGHT
    color: ColorRGB = (86, 168, 255)
    motion: Motion = field(default_factory=Straight)

    @property
    def position(self) -> Point:
        return self.x, self.y

    @property
    def is_maneuvering(self) -> bool:
        return isinstance(self.motion, Maneuvering)

    @property
    def maneuver(self) -> Optional[Maneuvering]:
        if isinstance(self.motion, Maneuvering):
            return self.motion
        return None

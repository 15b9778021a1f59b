#!/usr/bin/env python3
"""
sim/snapshot.py
===============
Read-only view of one simulation tick.

The view layer, the HTTP surface and the tests all consume this shape
instead of poking at live :class:`~sim.world.World` internals, so the tick
thread can keep mutating its state while a frame is being drawn.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from sim.physics import Point
from sim.vehicle import ColorRGB, Vehicle
from sim.topology import road_of_lane


@dataclass(frozen=True)
class VehicleState:
    """Immutable copy of one vehicle."""

    id: int
    x: float
    y: float
    lane: int
    road: str
    orientation: str
    maneuvering: bool
    color: ColorRGB
    curve: Optional[Tuple[Point, Point, Point]] = None
    """(source, control, end) while maneuvering."""
    t: float = 0.0
    kind: Optional[str] = None

    @classmethod
    def of(cls, vehicle: Vehicle) -> "VehicleState":
        maneuver = vehicle.maneuver
        return cls(
            id=vehicle.id,
            x=vehicle.x,
            y=vehicle.y,
            lane=vehicle.lane,
            road=road_of_lane(vehicle.lane).name,
            orientation=vehicle.orientation.value,
            maneuvering=maneuver is not None,
            color=vehicle.color,
            curve=(maneuver.source, maneuver.control, maneuver.end) if maneuver else None,
            t=maneuver.t if maneuver else 0.0,
            kind=maneuver.kind if maneuver else None,
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "lane": self.lane,
            "road": self.road,
            "orientation": self.orientation,
            "maneuvering": self.maneuvering,
            "color": list(self.color),
            "curve": [list(p) for p in self.curve] if self.curve else None,
            "t": self.t,
            "kind": self.kind,
        }


@dataclass(frozen=True)
class SimulationSnapshot:
    """Everything the view needs to draw one frame."""

    tick: int = 0
    now_ms: float = 0.0
    signal: str = "A"
    current_phase: str = "A"
    target_phase: str = "A"
    clearing: bool = False
    priority_road: Optional[str] = None
    queue_depths: Dict[str, int] = field(default_factory=dict)
    vehicles: List[VehicleState] = field(default_factory=list)
    pending_arrivals: int = 0
    deferred_lane: Optional[int] = None
    feed_metrics: Dict[str, int] = field(default_factory=dict)

    @property
    def green_road(self) -> Optional[str]:
        """Road name holding right-of-way, ``None`` during clearance."""
        return None if self.clearing else self.signal

    def as_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "now_ms": self.now_ms,
            "signal": self.signal,
            "current_phase": self.current_phase,
            "target_phase": self.target_phase,
            "clearing": self.clearing,
            "priority_road": self.priority_road,
            "queue_depths": dict(self.queue_depths),
            "vehicles": [v.as_dict() for v in self.vehicles],
            "pending_arrivals": self.pending_arrivals,
            "deferred_lane": self.deferred_lane,
            "feed_metrics": dict(self.feed_metrics),
        }

#!/usr/bin/env python3
"""
sim/topology.py
===============
Static lane topology of the four-road junction.

Twelve lanes are grouped into four roads of three lanes each.  Lane
``id`` belongs to road ``(id - 1) // 3``; inside a road, lane ``k = 1`` is
the outgoing lane (leaving the junction, never a spawn target) and lanes
``k = 2, 3`` are incoming lanes controlled by the road's signal.

Layout (screen coordinates, y grows downward, right-hand traffic)::

                  A3 A2 A1
                  ↓  ↓  ↑            A = north arm, heading SOUTH
        D1 ←  ┌──────────┐  ← C3
        D2 →  │   box    │  ← C2    C = east arm,  heading WEST
        D3 →  └──────────┘  → C1    D = west arm,  heading EAST
                  ↓  ↑  ↑
                  B1 B2 B3           B = south arm, heading NORTH

Turn rules are expressed as quadratic Bézier control / end points.  The
middle incoming lane either shifts across the box into the opposite
road's outgoing lane or turns left, depending on the vehicle's random
path choice; the outer incoming lane always turns right.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from sim.physics import Point, axial_progress, signed_stop_distance

# ── Geometry ──────────────────────────────────────────────────────────────────
WORLD_SIZE: float = 800.0
CENTER: float = WORLD_SIZE / 2.0
ROAD_WIDTH: float = 150.0
LANE_WIDTH: float = 50.0
ROAD_HALF_W: float = ROAD_WIDTH / 2.0
STOP_LINE_SETBACK: float = 20.0   # stop line distance outside the junction box
APPROACH_LENGTH: float = 320.0    # spawn point distance before the stop line
TRIGGER_DEPTH: float = 10.0       # turn trigger window just past the stop line

LANES_PER_ROAD: int = 3


class Axis(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Direction(Enum):
    """Travel direction of a lane, in screen coordinates."""

    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"

    @property
    def vector(self) -> Tuple[float, float]:
        return _DIR_VECTORS[self]

    @property
    def axis(self) -> Axis:
        if self in (Direction.NORTH, Direction.SOUTH):
            return Axis.VERTICAL
        return Axis.HORIZONTAL

    @property
    def sign(self) -> float:
        """+1 when travelling toward growing coordinates, −1 otherwise."""
        dx, dy = self.vector
        return dx + dy

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE_DIR[self]


_DIR_VECTORS: Dict[Direction, Tuple[float, float]] = {
    Direction.NORTH: (0.0, -1.0),
    Direction.SOUTH: (0.0, 1.0),
    Direction.EAST: (1.0, 0.0),
    Direction.WEST: (-1.0, 0.0),
}

_OPPOSITE_DIR: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


class Road(Enum):
    """The four roads, in cyclic phase order."""

    A = 0
    B = 1
    C = 2
    D = 3

    def next(self) -> "Road":
        return Road((self.value + 1) % len(Road))

    def cycle_after(self) -> List["Road"]:
        """The other three roads in cyclic order, starting after this one."""
        return [Road((self.value + i) % len(Road)) for i in range(1, len(Road))]


class PathChoice(Enum):
    """Random per-vehicle route decision made at spawn time."""

    STRAIGHT = "straight"
    TURN = "turn"


@dataclass(frozen=True)
class TriggerZone:
    """Axis-aligned window that starts a maneuver when a vehicle enters it."""

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    def contains(self, x: float, y: float) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max


@dataclass(frozen=True)
class TurnRule:
    """One maneuver available from a lane.

    Attributes
    ----------
    trigger : TriggerZone
        Window that starts the maneuver.
    target_lane : int
        Lane the vehicle ends in.
    control_point, end_point : (float, float)
        Quadratic Bézier control point and end point.
    choice : PathChoice or None
        Only vehicles with this path choice take the rule; ``None`` means
        every vehicle does.
    kind : str
        ``"right"``, ``"left"`` or ``"straight"`` (for logs and the UI).
    """

    trigger: TriggerZone
    target_lane: int
    control_point: Point
    end_point: Point
    choice: Optional[PathChoice] = None
    kind: str = "straight"

    def applies_to(self, choice: PathChoice) -> bool:
        return self.choice is None or self.choice is choice


@dataclass(frozen=True)
class Lane:
    """Immutable per-topology lane record."""

    id: int
    road: Road
    direction: Direction
    offset: float
    """Cross-axis coordinate of the lane centre line."""
    stop_line: Optional[float] = None
    """Travel-axis coordinate of the stop line (``None`` for outgoing lanes)."""
    spawn_point: Optional[Point] = None
    """Entry position for new vehicles (``None`` for non-source lanes)."""
    turn_rules: Tuple[TurnRule, ...] = ()

    @property
    def is_source(self) -> bool:
        return self.spawn_point is not None

    @property
    def is_incoming(self) -> bool:
        return self.stop_line is not None

    def point_at(self, along: float) -> Point:
        """Point on the lane centre line at travel-axis coordinate *along*."""
        if self.direction.axis is Axis.VERTICAL:
            return self.offset, along
        return along, self.offset

    def progress(self, x: float, y: float) -> float:
        dx, dy = self.direction.vector
        return axial_progress(x, y, dx, dy)

    def stop_distance(self, x: float, y: float) -> Optional[float]:
        if self.stop_line is None:
            return None
        dx, dy = self.direction.vector
        return signed_stop_distance(x, y, dx, dy, self.stop_line)


# ── Road layout ───────────────────────────────────────────────────────────────
# road → (incoming heading, side sign of the outgoing lane offset)
_ROAD_LAYOUT: Dict[Road, Tuple[Direction, int]] = {
    Road.A: (Direction.SOUTH, 1),
    Road.B: (Direction.NORTH, -1),
    Road.C: (Direction.WEST, 1),
    Road.D: (Direction.EAST, -1),
}

# Roads on the incoming driver's right / left / straight ahead.
_RIGHT_OF: Dict[Road, Road] = {Road.A: Road.D, Road.B: Road.C, Road.C: Road.A, Road.D: Road.B}
_LEFT_OF: Dict[Road, Road] = {Road.A: Road.C, Road.B: Road.D, Road.C: Road.B, Road.D: Road.A}
_OPPOSITE_OF: Dict[Road, Road] = {Road.A: Road.B, Road.B: Road.A, Road.C: Road.D, Road.D: Road.C}


def lane_id(road: Road, k: int) -> int:
    """Lane identifier of the *k*-th lane (1..3) of *road*."""
    return road.value * LANES_PER_ROAD + k


def road_of_lane(lane: int) -> Road:
    return Road((lane - 1) // LANES_PER_ROAD)


def _stop_coord(inbound: Direction) -> float:
    return CENTER - inbound.sign * (ROAD_HALF_W + STOP_LINE_SETBACK)


def _exit_coord(outbound: Direction) -> float:
    return CENTER + outbound.sign * (ROAD_HALF_W + STOP_LINE_SETBACK)


def _base_lanes() -> Dict[int, Lane]:
    lanes: Dict[int, Lane] = {}
    for road, (inbound, side) in _ROAD_LAYOUT.items():
        for k in range(1, LANES_PER_ROAD + 1):
            offset = CENTER + side * LANE_WIDTH * (2 - k)
            if k == 1:
                lane = Lane(lane_id(road, k), road, inbound.opposite, offset)
            else:
                stop = _stop_coord(inbound)
                lane = Lane(lane_id(road, k), road, inbound, offset, stop_line=stop)
                lane = replace(lane, spawn_point=lane.point_at(stop - inbound.sign * APPROACH_LENGTH))
            lanes[lane.id] = lane
    return lanes


def _trigger_for(lane: Lane) -> TriggerZone:
    assert lane.stop_line is not None
    a = lane.stop_line
    b = lane.stop_line + lane.direction.sign * TRIGGER_DEPTH
    lo, hi = min(a, b), max(a, b)
    half = LANE_WIDTH / 2.0
    if lane.direction.axis is Axis.VERTICAL:
        return TriggerZone(lane.offset - half, lo, lane.offset + half, hi)
    return TriggerZone(lo, lane.offset - half, hi, lane.offset + half)


def _rule_into(
    source: Lane,
    target: Lane,
    choice: Optional[PathChoice],
    kind: str,
) -> TurnRule:
    end = target.point_at(_exit_coord(target.direction))
    if source.direction.axis is target.direction.axis:
        control = source.point_at(CENTER)
    elif source.direction.axis is Axis.VERTICAL:
        control = (source.offset, target.offset)
    else:
        control = (target.offset, source.offset)
    return TurnRule(_trigger_for(source), target.id, control, end, choice, kind)


def _build_lanes() -> Dict[int, Lane]:
    lanes = _base_lanes()
    for road in Road:
        middle = lanes[lane_id(road, 2)]
        outer = lanes[lane_id(road, 3)]
        straight_to = lanes[lane_id(_OPPOSITE_OF[road], 1)]
        left_to = lanes[lane_id(_LEFT_OF[road], 1)]
        right_to = lanes[lane_id(_RIGHT_OF[road], 1)]
        lanes[middle.id] = replace(middle, turn_rules=(
            _rule_into(middle, straight_to, PathChoice.STRAIGHT, "straight"),
            _rule_into(middle, left_to, PathChoice.TURN, "left"),
        ))
        lanes[outer.id] = replace(outer, turn_rules=(
            _rule_into(outer, right_to, None, "right"),
        ))
    return lanes


LANES: Dict[int, Lane] = _build_lanes()

SOURCE_LANES: Tuple[int, ...] = tuple(sorted(lane.id for lane in LANES.values() if lane.is_source))

ROAD_LANES: Dict[Road, Tuple[int, ...]] = {
    road: tuple(lane_id(road, k) for k in range(1, LANES_PER_ROAD + 1)) for road in Road
}


def lane_for(lane: Any) -> Optional[Lane]:
    """Look up a lane by id; anything that is not a valid id gives ``None``."""
    if isinstance(lane, bool) or not isinstance(lane, int):
        return None
    return LANES.get(lane)


def incoming_lanes(road: Road) -> List[Lane]:
    return [LANES[i] for i in ROAD_LANES[road] if LANES[i].is_incoming]


def all_turn_rules() -> List[Tuple[Lane, TurnRule]]:
    """Every (source lane, rule) pair of the topology."""
    return [(lane, rule) for lane in LANES.values() for rule in lane.turn_rules]

#!/usr/bin/env python3
"""
sim/registry.py
===============
Arena-style vehicle storage.

Vehicles live in a dict keyed by a stable, never-reused integer id.  Per-lane
views are plain lists rebuilt from scratch every tick, ordered lead first,
so nothing holds a reference across structural changes.
"""

from __future__ import annotations

import itertools
import logging
import random
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from sim.physics import in_bounds
from sim.topology import LANES, Lane, PathChoice, Road, incoming_lanes, lane_for
from sim.traffic_policy import SimulationPolicy
from sim.vehicle import Vehicle

log = logging.getLogger("registry")

# Vehicle palette (same order as ViewConstants.DEFAULT_VEHICLE_COLORS)
VEHICLE_COLORS: Sequence[Tuple[int, int, int]] = (
    (86, 168, 255),
    (255, 88, 88),
    (100, 226, 170),
    (246, 191, 90),
    (180, 120, 255),
    (255, 160, 100),
)


class VehicleRegistry:
    """Owns every active :class:`~sim.vehicle.Vehicle`.

    Parameters
    ----------
    policy : SimulationPolicy or None
        Tunable constants; uses defaults when *None*.
    rng : random.Random or None
        Source of path choices and colours (seed it for reproducible runs).
    """

    def __init__(
        self,
        policy: Optional[SimulationPolicy] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.policy = policy or SimulationPolicy()
        self._rng = rng or random.Random()
        self._vehicles: Dict[int, Vehicle] = {}
        self._ids = itertools.count(1)
        self._lane_index: Dict[int, List[Vehicle]] = {lane: [] for lane in LANES}

    # ── container protocol ────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._vehicles)

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(list(self._vehicles.values()))

    def __contains__(self, vehicle_id: object) -> bool:
        return vehicle_id in self._vehicles

    def get(self, vehicle_id: int) -> Optional[Vehicle]:
        return self._vehicles.get(vehicle_id)

    # ── spawn / remove ────────────────────────────────────────────────────

    def spawn(self, lane_id: Any) -> Optional[int]:
        """Create a vehicle at the spawn point of *lane_id*.

        Non-source lanes and anything that is not a lane id are a no-op
        and return ``None``.
        """
        lane = lane_for(lane_id)
        if lane is None or lane.spawn_point is None:
            log.debug("spawn_ignored lane=%r", lane_id)
            return None

        choice = (
            PathChoice.TURN
            if self._rng.random() < self.policy.turn_probability
            else PathChoice.STRAIGHT
        )
        vehicle_id = next(self._ids)
        x, y = lane.spawn_point
        vehicle = Vehicle(
            id=vehicle_id,
            lane=lane.id,
            x=x,
            y=y,
            speed=self.policy.base_speed,
            orientation=lane.direction,
            path_choice=choice,
            color=self._rng.choice(VEHICLE_COLORS),
        )
        self._vehicles[vehicle_id] = vehicle
        self._lane_index[lane.id].append(vehicle)
        log.info("spawn id=%d lane=%d path=%s", vehicle_id, lane.id, choice.value)
        return vehicle_id

    def entry_clear(self, lane_id: Any) -> bool:
        """True unless the lane's tail vehicle sits within the minimum gap
        of the spawn point.  Invalid lanes report clear (spawn ignores them)."""
        lane = lane_for(lane_id)
        if lane is None or lane.spawn_point is None:
            return True
        entry = lane.progress(*lane.spawn_point)
        for vehicle in self._vehicles.values():
            if vehicle.lane != lane.id or vehicle.is_maneuvering:
                continue
            if lane.progress(vehicle.x, vehicle.y) - entry < self.policy.min_gap:
                return False
        return True

    def remove(self, vehicle_id: int) -> bool:
        vehicle = self._vehicles.pop(vehicle_id, None)
        if vehicle is None:
            return False
        view = self._lane_index.get(vehicle.lane)
        if view is not None and vehicle in view:
            view.remove(vehicle)
        return True

    def clear(self) -> None:
        self._vehicles.clear()
        self.rebuild_lane_index()

    # ── per-lane views ────────────────────────────────────────────────────

    def rebuild_lane_index(self) -> None:
        """Group vehicles by lane, lead vehicle (furthest travelled) first."""
        index: Dict[int, List[Vehicle]] = {lane: [] for lane in LANES}
        for vehicle in self._vehicles.values():
            index[vehicle.lane].append(vehicle)
        for lane_id, view in index.items():
            lane = LANES[lane_id]
            view.sort(key=lambda v, ln=lane: ln.progress(v.x, v.y), reverse=True)
        self._lane_index = index

    def lane_view(self, lane_id: int) -> List[Vehicle]:
        """Ordered vehicles of a lane as of the last index rebuild."""
        return list(self._lane_index.get(lane_id, []))

    # ── queries ───────────────────────────────────────────────────────────

    def queued_count(self, road: Road) -> int:
        """Straight-moving vehicles near the stop lines of *road*."""
        band = self.policy.stop_band_half_width
        reach = self.policy.queue_detection_distance
        count = 0
        lanes = {lane.id: lane for lane in incoming_lanes(road)}
        for vehicle in self._vehicles.values():
            lane = lanes.get(vehicle.lane)
            if lane is None or vehicle.is_maneuvering:
                continue
            d = lane.stop_distance(vehicle.x, vehicle.y)
            if d is not None and -band <= d <= reach:
                count += 1
        return count

    def queued_by_road(self) -> Dict[Road, int]:
        return {road: self.queued_count(road) for road in Road}

    def despawn_out_of_bounds(self) -> List[int]:
        """Remove every vehicle outside the despawn envelope."""
        gone = [
            v.id for v in self._vehicles.values()
            if not in_bounds(v.x, v.y, self.policy.despawn_min, self.policy.despawn_max)
        ]
        for vehicle_id in gone:
            self.remove(vehicle_id)
            log.debug("despawn id=%d", vehicle_id)
        return gone

    def lane(self, vehicle: Vehicle) -> Lane:
        return LANES[vehicle.lane]

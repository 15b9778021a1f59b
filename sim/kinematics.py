#!/usr/bin/env python3
"""
sim/kinematics.py
=================
Per-tick straight-line motion with gap keeping and stop-line checks.

Lanes are processed lead vehicle first, so a follower always measures its
gap against where the vehicle ahead has already moved this tick.  A
vehicle committed to a maneuver is handed to :mod:`sim.maneuver` and skips
both checks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sim.maneuver import advance_maneuver, start_maneuver
from sim.phase_controller import Phase
from sim.registry import VehicleRegistry
from sim.topology import LANES, Lane
from sim.traffic_policy import SimulationPolicy
from sim.vehicle import Vehicle

log = logging.getLogger("kinematics")


@dataclass
class StepReport:
    """What happened during one :meth:`KinematicsEngine.step`."""

    advanced: int = 0
    held_at_stop_line: int = 0
    held_for_gap: int = 0
    maneuvers_started: int = 0
    maneuvers_completed: int = 0
    despawned: List[int] = field(default_factory=list)


class KinematicsEngine:
    """Moves every vehicle of a :class:`~sim.registry.VehicleRegistry`.

    Parameters
    ----------
    registry : VehicleRegistry
        Vehicles to move; borrowed for the duration of each step.
    policy : SimulationPolicy or None
        Tunable constants; defaults to the registry's policy.
    """

    def __init__(
        self,
        registry: VehicleRegistry,
        policy: Optional[SimulationPolicy] = None,
    ) -> None:
        self.registry = registry
        self.policy = policy or registry.policy

    def step(self, phase: Phase) -> StepReport:
        """Advance all vehicles one tick under the signal *phase*."""
        report = StepReport()
        self.registry.rebuild_lane_index()

        for lane in LANES.values():
            ahead: Optional[Vehicle] = None
            for vehicle in self.registry.lane_view(lane.id):
                if vehicle.is_maneuvering:
                    if advance_maneuver(vehicle):
                        report.maneuvers_completed += 1
                elif self._try_advance(vehicle, lane, ahead, phase, report):
                    report.advanced += 1
                    if self._check_triggers(vehicle, lane):
                        report.maneuvers_started += 1
                ahead = vehicle

        report.despawned = self.registry.despawn_out_of_bounds()
        return report

    # ── straight motion ───────────────────────────────────────────────────

    def _try_advance(
        self,
        vehicle: Vehicle,
        lane: Lane,
        ahead: Optional[Vehicle],
        phase: Phase,
        report: StepReport,
    ) -> bool:
        if self._held_by_signal(vehicle, lane, phase):
            report.held_at_stop_line += 1
            return False

        dx, dy = lane.direction.vector
        nx = vehicle.x + dx * vehicle.speed
        ny = vehicle.y + dy * vehicle.speed

        if ahead is not None:
            gap = lane.progress(ahead.x, ahead.y) - lane.progress(nx, ny)
            if gap < self.policy.min_gap:
                report.held_for_gap += 1
                return False

        vehicle.x, vehicle.y = nx, ny
        return True

    def _held_by_signal(self, vehicle: Vehicle, lane: Lane, phase: Phase) -> bool:
        d = lane.stop_distance(vehicle.x, vehicle.y)
        if d is None or abs(d) > self.policy.stop_band_half_width:
            return False
        return phase.road is not lane.road

    # ── turn triggers ─────────────────────────────────────────────────────

    def _check_triggers(self, vehicle: Vehicle, lane: Lane) -> bool:
        for rule in lane.turn_rules:
            if not rule.applies_to(vehicle.path_choice):
                continue
            if rule.trigger.contains(vehicle.x, vehicle.y):
                start_maneuver(
                    vehicle,
                    LANES[rule.target_lane],
                    rule.control_point,
                    rule.end_point,
                    self.policy,
                    kind=rule.kind,
                )
                return True
        return False

#!/usr/bin/env python3
"""
sim/world.py
============
The junction world: owns the registry, the phase controller and the
kinematics engine, and runs them in a fixed order once per tick.

Tick pipeline
-------------
1. take at most one lane arrival (the deferred one first) and spawn it,
2. count queued vehicles per road,
3. let the :class:`~sim.phase_controller.PhaseController` pick the phase,
4. move every vehicle with the :class:`~sim.kinematics.KinematicsEngine`,
5. publish a :class:`~sim.snapshot.SimulationSnapshot`.

An arrival whose lane entry is still occupied is not dropped: it stays at
the head of the line and is retried on the next tick, and later arrivals
wait behind it.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from feed.arrival_queue import ArrivalQueue
from sim.kinematics import KinematicsEngine, StepReport
from sim.phase_controller import Phase, PhaseController
from sim.registry import VehicleRegistry
from sim.snapshot import SimulationSnapshot, VehicleState
from sim.topology import Road, lane_for
from sim.traffic_policy import SimulationPolicy

log = logging.getLogger("world")


class World:
    """Four-road signalized junction.

    Parameters
    ----------
    policy : SimulationPolicy or None
        Tunable constants; uses defaults when *None*.
    seed : int or None
        Random seed for path choices and colours.
    arrivals : ArrivalQueue or None
        Source of lane arrivals; a private queue is created when *None*.
    initial_road : Road
        Road holding right-of-way at start.
    """

    def __init__(
        self,
        policy: Optional[SimulationPolicy] = None,
        seed: Optional[int] = None,
        arrivals: Optional[ArrivalQueue] = None,
        initial_road: Road = Road.A,
    ) -> None:
        self.policy = policy or SimulationPolicy()
        self.arrivals = arrivals if arrivals is not None else ArrivalQueue()
        self._seed = seed
        self._initial_road = initial_road
        self._init_state()

    # ── initialisation / reset ────────────────────────────────────────────

    def _init_state(self) -> None:
        self.registry = VehicleRegistry(self.policy, random.Random(self._seed))
        self.controller = PhaseController(self.policy, self._initial_road)
        self.kinematics = KinematicsEngine(self.registry, self.policy)
        self.tick_count = 0
        self.now_ms = 0.0
        self.last_report = StepReport()
        self._deferred: Optional[int] = None
        self._signal = self.controller.signal

    def reset(self) -> None:
        """Drop every vehicle and pending arrival, restart the controller."""
        self.arrivals.clear()
        self._init_state()
        log.info("world_reset")

    # ── queries ───────────────────────────────────────────────────────────

    @property
    def signal(self) -> Phase:
        """Phase applied on the most recent tick."""
        return self._signal

    @property
    def deferred_lane(self) -> Optional[int]:
        """Arrival held at the head of the line because its lane entry is busy."""
        return self._deferred

    def vehicle_count(self) -> int:
        return len(self.registry)

    # ── arrivals ──────────────────────────────────────────────────────────

    def seed_vehicles(self, lanes: Iterable[int]) -> int:
        """Spawn one vehicle per lane in *lanes* immediately.

        Lanes whose entry is occupied, or that are not source lanes, are
        skipped.  Returns the number of vehicles spawned.
        """
        spawned = 0
        for lane_id in lanes:
            if self.registry.entry_clear(lane_id) and self.registry.spawn(lane_id) is not None:
                spawned += 1
        return spawned

    def _take_arrival(self) -> None:
        lane_id = self._deferred
        if lane_id is None:
            lane_id = self.arrivals.try_get()
        if lane_id is None:
            return

        if lane_for(lane_id) is None:
            self._deferred = None
            log.debug("arrival_ignored lane=%r", lane_id)
            return

        if not self.registry.entry_clear(lane_id):
            if self._deferred is None:
                log.debug("arrival_deferred lane=%d", lane_id)
            self._deferred = lane_id
            return

        self._deferred = None
        self.registry.spawn(lane_id)

    # ── tick ──────────────────────────────────────────────────────────────

    def tick(self, now_ms: float) -> StepReport:
        """Run one tick at monotonic time *now_ms* (milliseconds)."""
        self.tick_count += 1
        self.now_ms = now_ms

        self._take_arrival()
        depths = self.registry.queued_by_road()
        self._signal = self.controller.advance(now_ms, depths)
        report = self.kinematics.step(self._signal)
        self.last_report = report

        if report.despawned:
            log.debug("tick=%d despawned=%s", self.tick_count, report.despawned)
        return report

    # ── snapshot ──────────────────────────────────────────────────────────

    def snapshot(self) -> SimulationSnapshot:
        """Immutable copy of the state after the latest tick."""
        controller = self.controller
        depths = self.registry.queued_by_road()
        return SimulationSnapshot(
            tick=self.tick_count,
            now_ms=self.now_ms,
            signal=self._signal.value,
            current_phase=controller.current_phase.value,
            target_phase=controller.target_phase.value,
            clearing=controller.is_clearing,
            priority_road=controller.priority_road.name if controller.priority_road else None,
            queue_depths={road.name: depths[road] for road in Road},
            vehicles=[VehicleState.of(v) for v in self.registry],
            pending_arrivals=len(self.arrivals),
            deferred_lane=self._deferred,
            feed_metrics=self.arrivals.metrics.report(),
        )

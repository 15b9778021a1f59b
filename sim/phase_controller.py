#!/usr/bin/env python3
"""
sim/phase_controller.py
=======================
Adaptive signal controller for the four-road junction.

The controller is a two-state machine:

* :class:`Steady` — ``current_phase == target_phase``, one road flows.
* :class:`Clearing` — every road is stopped while the clearance timer
  runs; afterwards the target phase is committed.

Target selection, in order of precedence:

1. **Priority preemption.**  A road whose queued count reaches the high
   water mark becomes the priority road and the target, immediately.  It
   is released only once its count falls to the low water mark, so counts
   hovering in between never toggle it.
2. **Dwell.**  Without priority, the current phase is held for the dwell
   time since the last transition.
3. **Cyclic scan.**  After the dwell, the first other road (in cyclic
   order after the current one) with any queued vehicle wins; with no
   waiting vehicles anywhere the next road in the cycle is taken anyway.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from sim.topology import Road
from sim.traffic_policy import SimulationPolicy

log = logging.getLogger("phase")


class Phase(Enum):
    """Right-of-way phase of the junction."""

    ALL_STOPPED = "ALL_STOPPED"
    ROAD_A = "A"
    ROAD_B = "B"
    ROAD_C = "C"
    ROAD_D = "D"

    @classmethod
    def for_road(cls, road: Road) -> "Phase":
        return cls(road.name)

    @property
    def road(self) -> Optional[Road]:
        if self is Phase.ALL_STOPPED:
            return None
        return Road[self.value]


@dataclass(frozen=True)
class Steady:
    """Traffic flows on the current phase."""


@dataclass(frozen=True)
class Clearing:
    """All-stopped clearance in progress since *started_ms*."""

    started_ms: float


ControllerState = Union[Steady, Clearing]


class PhaseController:
    """Chooses the active phase every tick.

    Parameters
    ----------
    policy : SimulationPolicy or None
        Dwell, clearance and water marks; uses defaults when *None*.
    initial_road : Road
        Road holding right-of-way when the controller starts.
    """

    def __init__(
        self,
        policy: Optional[SimulationPolicy] = None,
        initial_road: Road = Road.A,
    ) -> None:
        self.policy = policy or SimulationPolicy()
        self._current = Phase.for_road(initial_road)
        self._target = self._current
        self._state: ControllerState = Steady()
        self._last_transition_ms: Optional[float] = None
        self._priority_road: Optional[Road] = None

    # ── read-only state ───────────────────────────────────────────────────

    @property
    def current_phase(self) -> Phase:
        return self._current

    @property
    def target_phase(self) -> Phase:
        return self._target

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def is_clearing(self) -> bool:
        return isinstance(self._state, Clearing)

    @property
    def signal(self) -> Phase:
        """Externally visible phase: ``ALL_STOPPED`` throughout clearance."""
        return Phase.ALL_STOPPED if self.is_clearing else self._current

    @property
    def priority_road(self) -> Optional[Road]:
        return self._priority_road

    @property
    def last_transition_ms(self) -> Optional[float]:
        return self._last_transition_ms

    # ── tick ──────────────────────────────────────────────────────────────

    def advance(self, now_ms: float, queue_depth_by_road: Mapping[Road, int]) -> Phase:
        """Update the state machine and return the active signal.

        Parameters
        ----------
        now_ms : float
            Monotonic time in milliseconds.
        queue_depth_by_road : Mapping[Road, int]
            Queued (waiting, not maneuvering) vehicles per road; missing
            roads count as zero.
        """
        if self._last_transition_ms is None:
            self._last_transition_ms = now_ms

        self._update_priority(queue_depth_by_road)

        if isinstance(self._state, Clearing):
            if self._priority_road is not None:
                preempt = Phase.for_road(self._priority_road)
                if preempt is not self._target:
                    log.info("clearing_retarget %s -> %s", self._target.value, preempt.value)
                    self._target = preempt
            if now_ms - self._state.started_ms < self.policy.clearance_ms:
                return Phase.ALL_STOPPED
            self._commit(now_ms)

        target = self._select_target(now_ms, queue_depth_by_road)
        if target is not self._current:
            self._begin_clearing(target, now_ms)
        return self.signal

    # ── internals ─────────────────────────────────────────────────────────

    def _current_road(self) -> Road:
        road = self._current.road
        assert road is not None
        return road

    def _update_priority(self, depth: Mapping[Road, int]) -> None:
        if self._priority_road is not None:
            if depth.get(self._priority_road, 0) > self.policy.priority_low_water:
                return
            log.info(
                "priority_released road=%s depth=%d",
                self._priority_road.name, depth.get(self._priority_road, 0),
            )
            self._priority_road = None

        scan = self._current_road().cycle_after() + [self._current_road()]
        candidates = [r for r in scan if depth.get(r, 0) >= self.policy.priority_high_water]
        if not candidates:
            return
        # max() keeps the first of equal depths, i.e. cyclic scan order
        self._priority_road = max(candidates, key=lambda r: depth.get(r, 0))
        log.info(
            "priority_raised road=%s depth=%d",
            self._priority_road.name, depth.get(self._priority_road, 0),
        )

    def _select_target(self, now_ms: float, depth: Mapping[Road, int]) -> Phase:
        if self._priority_road is not None:
            return Phase.for_road(self._priority_road)

        assert self._last_transition_ms is not None
        if now_ms - self._last_transition_ms < self.policy.dwell_ms:
            return self._current

        current = self._current_road()
        for road in current.cycle_after():
            if depth.get(road, 0) > 0:
                return Phase.for_road(road)
        return Phase.for_road(current.next())

    def _begin_clearing(self, target: Phase, now_ms: float) -> None:
        self._target = target
        self._state = Clearing(started_ms=now_ms)
        log.info("clearing_start %s -> %s at=%.0f", self._current.value, target.value, now_ms)

    def _commit(self, now_ms: float) -> None:
        log.info("phase_commit %s -> %s at=%.0f", self._current.value, self._target.value, now_ms)
        self._current = self._target
        self._state = Steady()
        self._last_transition_ms = now_ms

    def as_dict(self) -> Dict[str, Any]:
        return {
            "signal": self.signal.value,
            "current_phase": self._current.value,
            "target_phase": self._target.value,
            "clearing": self.is_clearing,
            "priority_road": self._priority_road.name if self._priority_road else None,
            "last_transition_ms": self._last_transition_ms,
        }

#!/usr/bin/env python3
"""
Tests for the adaptive phase controller: dwell, cyclic scan, all-stopped
clearance and priority preemption with hysteresis.
"""

from __future__ import annotations

import random
import unittest

from sim.phase_controller import Clearing, Phase, PhaseController, Steady
from sim.topology import Road


class PhaseEnumTests(unittest.TestCase):
    def test_road_mapping(self) -> None:
        self.assertIs(Phase.for_road(Road.C), Phase.ROAD_C)
        self.assertIs(Phase.ROAD_D.road, Road.D)
        self.assertIsNone(Phase.ALL_STOPPED.road)


class DwellAndCycleTests(unittest.TestCase):
    def test_starts_steady_on_road_a(self) -> None:
        ctrl = PhaseController()
        self.assertIs(ctrl.advance(0.0, {}), Phase.ROAD_A)
        self.assertIsInstance(ctrl.state, Steady)
        self.assertEqual(ctrl.last_transition_ms, 0.0)

    def test_holds_current_phase_until_dwell_elapses(self) -> None:
        ctrl = PhaseController()
        ctrl.advance(0.0, {})
        self.assertIs(ctrl.advance(2999.0, {Road.C: 2}), Phase.ROAD_A)
        self.assertIs(ctrl.advance(3000.0, {Road.C: 2}), Phase.ALL_STOPPED)
        self.assertIs(ctrl.target_phase, Phase.ROAD_C)
        self.assertIsInstance(ctrl.state, Clearing)

    def test_scan_picks_first_waiting_road_in_cycle_order(self) -> None:
        ctrl = PhaseController()
        ctrl.advance(0.0, {})
        ctrl.advance(3000.0, {Road.A: 4, Road.C: 1, Road.D: 5})
        self.assertIs(ctrl.target_phase, Phase.ROAD_C)

    def test_commits_after_clearance_and_resets_dwell(self) -> None:
        ctrl = PhaseController()
        ctrl.advance(0.0, {})
        ctrl.advance(3000.0, {Road.B: 1})
        self.assertIs(ctrl.advance(3999.0, {Road.B: 1}), Phase.ALL_STOPPED)
        self.assertIs(ctrl.advance(4000.0, {Road.B: 1}), Phase.ROAD_B)
        self.assertEqual(ctrl.last_transition_ms, 4000.0)
        self.assertIs(ctrl.advance(6999.0, {Road.C: 3}), Phase.ROAD_B)

    def test_idle_junction_keeps_cycling(self) -> None:
        ctrl = PhaseController()
        greens = []
        now = 0.0
        while now < 20000.0:
            signal = ctrl.advance(now, {})
            if signal is not Phase.ALL_STOPPED and (not greens or greens[-1] is not signal):
                greens.append(signal)
            now += 16.0
        self.assertEqual(
            greens[:5],
            [Phase.ROAD_A, Phase.ROAD_B, Phase.ROAD_C, Phase.ROAD_D, Phase.ROAD_A],
        )


class ClearanceTests(unittest.TestCase):
    def test_all_stopped_separates_every_change(self) -> None:
        ctrl = PhaseController()
        rng = random.Random(3)
        now = 0.0
        last_green = None
        stopped_since = None
        changes = 0
        for _ in range(6000):
            depths = {road: rng.randint(0, 8) for road in Road}
            signal = ctrl.advance(now, depths)
            if signal is Phase.ALL_STOPPED:
                if stopped_since is None:
                    stopped_since = now
            else:
                if last_green is not None and signal is not last_green:
                    self.assertIsNotNone(stopped_since, "phase switched without clearance")
                    self.assertGreaterEqual(now - stopped_since, 1000.0)
                    changes += 1
                stopped_since = None
                last_green = signal
            now += 16.0
        self.assertGreater(changes, 0)

    def test_clearing_flag_matches_phase_mismatch(self) -> None:
        ctrl = PhaseController()
        now = 0.0
        for step in range(1000):
            ctrl.advance(now, {Road((step // 200) % 4): 1})
            if not ctrl.is_clearing:
                self.assertIs(ctrl.current_phase, ctrl.target_phase)
            now += 16.0


class PriorityTests(unittest.TestCase):
    def _with_priority_on_c(self) -> PhaseController:
        ctrl = PhaseController()
        ctrl.advance(0.0, {})
        self.assertIs(ctrl.advance(100.0, {Road.C: 6}), Phase.ALL_STOPPED)
        self.assertIs(ctrl.priority_road, Road.C)
        self.assertIs(ctrl.advance(1100.0, {Road.C: 6}), Phase.ROAD_C)
        return ctrl

    def test_high_water_preempts_dwell(self) -> None:
        ctrl = self._with_priority_on_c()
        self.assertIs(ctrl.current_phase, Phase.ROAD_C)

    def test_below_high_water_does_not_preempt(self) -> None:
        ctrl = PhaseController()
        ctrl.advance(0.0, {})
        self.assertIs(ctrl.advance(100.0, {Road.C: 5}), Phase.ROAD_A)
        self.assertIsNone(ctrl.priority_road)

    def test_priority_held_between_water_marks(self) -> None:
        ctrl = self._with_priority_on_c()
        now = 1100.0
        for depth in (5, 4, 5, 4, 4, 5):
            now += 2000.0
            self.assertIs(ctrl.advance(now, {Road.C: depth, Road.D: 2}), Phase.ROAD_C)
            self.assertIs(ctrl.priority_road, Road.C)

    def test_priority_released_at_low_water(self) -> None:
        ctrl = self._with_priority_on_c()
        self.assertIs(ctrl.advance(1200.0, {Road.C: 3}), Phase.ROAD_C)
        self.assertIsNone(ctrl.priority_road)

    def test_highest_count_wins(self) -> None:
        ctrl = PhaseController()
        ctrl.advance(0.0, {})
        ctrl.advance(10.0, {Road.B: 6, Road.D: 9})
        self.assertIs(ctrl.priority_road, Road.D)

    def test_ties_follow_cycle_order_after_current(self) -> None:
        ctrl = PhaseController(initial_road=Road.C)
        ctrl.advance(0.0, {})
        ctrl.advance(10.0, {Road.B: 7, Road.D: 7, Road.A: 7})
        self.assertIs(ctrl.priority_road, Road.D)

    def test_clearance_retargets_to_new_priority(self) -> None:
        ctrl = PhaseController()
        ctrl.advance(0.0, {})
        ctrl.advance(3000.0, {Road.B: 1})
        self.assertIs(ctrl.target_phase, Phase.ROAD_B)
        self.assertIs(ctrl.advance(3500.0, {Road.B: 1, Road.D: 6}), Phase.ALL_STOPPED)
        self.assertIs(ctrl.target_phase, Phase.ROAD_D)
        # the clearance timer is not restarted by the retarget
        self.assertIs(ctrl.advance(4000.0, {Road.D: 6}), Phase.ROAD_D)

    def test_as_dict(self) -> None:
        ctrl = self._with_priority_on_c()
        state = ctrl.as_dict()
        self.assertEqual(state["signal"], "C")
        self.assertEqual(state["priority_road"], "C")
        self.assertFalse(state["clearing"])


if __name__ == "__main__":
    unittest.main()

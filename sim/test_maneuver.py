#!/usr/bin/env python3
"""
Tests for Bézier maneuvers across the junction box.
"""

from __future__ import annotations

import math
import unittest

from sim.maneuver import advance_maneuver, curve_rate, start_maneuver
from sim.topology import LANES, all_turn_rules
from sim.traffic_policy import SimulationPolicy
from sim.vehicle import Straight, Vehicle


def _vehicle_on_stop_line(lane_id: int) -> Vehicle:
    lane = LANES[lane_id]
    x, y = lane.point_at(lane.stop_line)
    return Vehicle(id=1, lane=lane_id, x=x, y=y, speed=2.0, orientation=lane.direction)


class ManeuverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.policy = SimulationPolicy()

    def test_every_rule_completes_on_its_end_point(self) -> None:
        rules = all_turn_rules()
        self.assertEqual(len(rules), 12)
        for lane, rule in rules:
            with self.subTest(lane=lane.id, kind=rule.kind):
                vehicle = _vehicle_on_stop_line(lane.id)
                self.assertTrue(rule.trigger.contains(vehicle.x, vehicle.y))
                target = LANES[rule.target_lane]
                maneuver = start_maneuver(
                    vehicle, target, rule.control_point, rule.end_point, self.policy, rule.kind
                )
                limit = math.ceil(1.0 / maneuver.rate) + 1
                ticks = 0
                while not advance_maneuver(vehicle):
                    ticks += 1
                    self.assertLess(ticks, limit)
                self.assertEqual(vehicle.position, rule.end_point)
                self.assertEqual(vehicle.lane, target.id)
                self.assertIs(vehicle.orientation, target.direction)
                self.assertIsInstance(vehicle.motion, Straight)

    def test_orientation_only_changes_at_completion(self) -> None:
        lane, rule = next((ln, r) for ln, r in all_turn_rules() if r.kind == "right")
        vehicle = _vehicle_on_stop_line(lane.id)
        start_maneuver(vehicle, LANES[rule.target_lane], rule.control_point, rule.end_point, self.policy)
        for _ in range(3):
            self.assertFalse(advance_maneuver(vehicle))
            self.assertIs(vehicle.orientation, lane.direction)
            self.assertEqual(vehicle.lane, lane.id)

    def test_curve_stays_inside_hull(self) -> None:
        for lane, rule in all_turn_rules():
            vehicle = _vehicle_on_stop_line(lane.id)
            source = vehicle.position
            start_maneuver(vehicle, LANES[rule.target_lane], rule.control_point, rule.end_point, self.policy)
            xs = (source[0], rule.control_point[0], rule.end_point[0])
            ys = (source[1], rule.control_point[1], rule.end_point[1])
            while not advance_maneuver(vehicle):
                self.assertTrue(min(xs) - 1e-9 <= vehicle.x <= max(xs) + 1e-9)
                self.assertTrue(min(ys) - 1e-9 <= vehicle.y <= max(ys) + 1e-9)

    def test_rate_scales_with_chord(self) -> None:
        short = curve_rate((0.0, 0.0), (30.0, 40.0), self.policy)
        long = curve_rate((0.0, 0.0), (60.0, 80.0), self.policy)
        self.assertAlmostEqual(short, 4.0 / (50.0 * 1.15))
        self.assertAlmostEqual(short, 2.0 * long)

    def test_zero_length_curve_has_finite_rate(self) -> None:
        rate = curve_rate((100.0, 100.0), (100.0, 100.0), self.policy)
        self.assertTrue(math.isfinite(rate))
        self.assertAlmostEqual(rate, 4.0 / 1.15)

    def test_advance_on_straight_vehicle_is_noop(self) -> None:
        vehicle = _vehicle_on_stop_line(2)
        self.assertFalse(advance_maneuver(vehicle))
        self.assertEqual(vehicle.position, (400.0, 305.0))


if __name__ == "__main__":
    unittest.main()

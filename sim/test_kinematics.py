#!/usr/bin/env python3
"""
Tests for straight-line motion: stop-line holds, gap keeping, turn
triggers and despawning.
"""

from __future__ import annotations

import random
import unittest

from sim.kinematics import KinematicsEngine
from sim.phase_controller import Phase
from sim.registry import VehicleRegistry
from sim.topology import LANES, Direction, PathChoice


def _engine(seed: int = 0) -> KinematicsEngine:
    return KinematicsEngine(VehicleRegistry(rng=random.Random(seed)))


class StopLineTests(unittest.TestCase):
    def test_red_light_holds_inside_band(self) -> None:
        engine = _engine()
        vid = engine.registry.spawn(2)
        vehicle = engine.registry.get(vid)
        for _ in range(400):
            engine.step(Phase.ROAD_B)
            self.assertLessEqual(vehicle.y, 305.0)
        self.assertEqual(vehicle.y, 301.0)
        self.assertFalse(vehicle.is_maneuvering)

    def test_all_stopped_holds_every_road(self) -> None:
        engine = _engine()
        ids = [engine.registry.spawn(lane) for lane in (2, 5, 8, 11)]
        for _ in range(400):
            engine.step(Phase.ALL_STOPPED)
        for vid in ids:
            vehicle = engine.registry.get(vid)
            lane = LANES[vehicle.lane]
            self.assertEqual(lane.stop_distance(vehicle.x, vehicle.y), 4.0)

    def test_held_vehicle_leaves_on_green(self) -> None:
        engine = _engine()
        vid = engine.registry.spawn(3)
        for _ in range(200):
            engine.step(Phase.ROAD_C)
        report = engine.step(Phase.ROAD_A)
        self.assertEqual(report.advanced, 1)
        self.assertEqual(engine.registry.get(vid).y, 303.0)


class GapTests(unittest.TestCase):
    def test_follower_stops_behind_leader(self) -> None:
        engine = _engine()
        first = engine.registry.spawn(2)
        for _ in range(30):
            engine.step(Phase.ROAD_B)
        self.assertTrue(engine.registry.entry_clear(2))
        second = engine.registry.spawn(2)
        for _ in range(400):
            engine.step(Phase.ROAD_B)
        self.assertEqual(engine.registry.get(first).y, 301.0)
        self.assertEqual(engine.registry.get(second).y, 255.0)

    def test_queue_keeps_minimum_gap(self) -> None:
        engine = _engine(7)
        registry = engine.registry
        for _ in range(600):
            if registry.entry_clear(5):
                registry.spawn(5)
            engine.step(Phase.ROAD_A)
            registry.rebuild_lane_index()
            lane = LANES[5]
            view = registry.lane_view(5)
            for lead, follower in zip(view, view[1:]):
                gap = lane.progress(lead.x, lead.y) - lane.progress(follower.x, follower.y)
                self.assertGreaterEqual(gap, 45.0)
        self.assertGreater(len(registry), 5)


class TurnTests(unittest.TestCase):
    def test_right_turn_lands_on_target_lane(self) -> None:
        engine = _engine()
        vid = engine.registry.spawn(3)
        vehicle = engine.registry.get(vid)
        started = False
        for _ in range(200):
            report = engine.step(Phase.ROAD_A)
            if report.maneuvers_started:
                started = True
                self.assertEqual((vehicle.x, vehicle.y), (350.0, 305.0))
            if report.maneuvers_completed:
                break
        self.assertTrue(started)
        self.assertFalse(vehicle.is_maneuvering)
        self.assertEqual(vehicle.lane, 10)
        self.assertEqual((vehicle.x, vehicle.y), (305.0, 350.0))
        self.assertIs(vehicle.orientation, Direction.WEST)

    def test_middle_lane_follows_path_choice(self) -> None:
        engine = _engine()
        straight = engine.registry.spawn(2)
        engine.registry.get(straight).path_choice = PathChoice.STRAIGHT
        for _ in range(400):
            engine.step(Phase.ROAD_A)
            if engine.registry.get(straight).lane != 2:
                break
        self.assertEqual(engine.registry.get(straight).lane, 4)

        engine = _engine()
        turning = engine.registry.spawn(2)
        engine.registry.get(turning).path_choice = PathChoice.TURN
        for _ in range(400):
            engine.step(Phase.ROAD_A)
            if engine.registry.get(turning).lane != 2:
                break
        self.assertEqual(engine.registry.get(turning).lane, 7)


class DespawnTests(unittest.TestCase):
    def test_removed_on_the_tick_it_leaves_bounds(self) -> None:
        engine = _engine()
        vid = engine.registry.spawn(2)
        vehicle = engine.registry.get(vid)
        vehicle.lane = 1
        vehicle.x, vehicle.y = 450.0, -98.0
        vehicle.orientation = Direction.NORTH

        report = engine.step(Phase.ALL_STOPPED)
        self.assertEqual(vehicle.y, -100.0)
        self.assertIn(vid, engine.registry)
        self.assertEqual(report.despawned, [])

        report = engine.step(Phase.ALL_STOPPED)
        self.assertEqual(report.despawned, [vid])
        self.assertNotIn(vid, engine.registry)


if __name__ == "__main__":
    unittest.main()

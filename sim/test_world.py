#!/usr/bin/env python3
"""
Tests for the world tick pipeline: arrival consumption, deferral,
snapshots and reset.
"""

from __future__ import annotations

import unittest

from feed.arrival_queue import ArrivalQueue
from sim.phase_controller import Phase
from sim.world import World


class ArrivalTests(unittest.TestCase):
    def test_one_arrival_per_tick_in_fifo_order(self) -> None:
        world = World(seed=1)
        for lane in (2, 5, 8):
            world.arrivals.put(lane)
        world.tick(0.0)
        self.assertEqual(world.vehicle_count(), 1)
        world.tick(16.0)
        world.tick(32.0)
        lanes = [v.lane for v in sorted(world.registry, key=lambda v: v.id)]
        self.assertEqual(lanes, [2, 5, 8])
        self.assertEqual(len(world.arrivals), 0)

    def test_invalid_arrivals_are_dropped(self) -> None:
        world = World(seed=1)
        for lane in (0, 1, 13, 10):
            world.arrivals.put(lane)
        for step in range(4):
            world.tick(step * 16.0)
        self.assertEqual(world.vehicle_count(), 0)
        self.assertIsNone(world.deferred_lane)
        self.assertEqual(len(world.arrivals), 0)

    def test_blocked_arrival_is_deferred_not_dropped(self) -> None:
        world = World(seed=2)
        for lane in (2, 2, 5):
            world.arrivals.put(lane)
        world.tick(0.0)
        world.tick(16.0)
        self.assertEqual(world.deferred_lane, 2)
        self.assertEqual(world.vehicle_count(), 1)
        # later arrivals wait behind the deferred one
        self.assertEqual(len(world.arrivals), 1)

        now = 32.0
        while world.deferred_lane is not None:
            world.tick(now)
            now += 16.0
            self.assertLess(now, 2000.0)
        self.assertEqual(world.vehicle_count(), 2)
        world.tick(now)
        self.assertEqual(world.vehicle_count(), 3)
        self.assertEqual(len(world.arrivals), 0)

    def test_shared_queue(self) -> None:
        queue = ArrivalQueue()
        world = World(arrivals=queue)
        queue.put(12)
        world.tick(0.0)
        self.assertEqual([v.lane for v in world.registry], [12])
        self.assertEqual(queue.metrics.dequeued, 1)

    def test_seed_vehicles_skips_busy_and_invalid_lanes(self) -> None:
        world = World(seed=3)
        self.assertEqual(world.seed_vehicles([2, 2, 5, 7, 42]), 2)
        self.assertEqual(world.vehicle_count(), 2)


class CycleTests(unittest.TestCase):
    def test_one_seeded_vehicle_per_road_keeps_cycling(self) -> None:
        world = World(seed=6)
        self.assertEqual(world.seed_vehicles((2, 5, 8, 11)), 4)
        greens = []
        now = 0.0
        while now < 24000.0:
            world.tick(now)
            road = world.signal.road
            if road is not None and (not greens or greens[-1] is not road):
                greens.append(road)
            now += 16.0
        self.assertEqual([r.name for r in greens[:5]], ["A", "B", "C", "D", "A"])
        self.assertEqual(world.vehicle_count(), 0)


class SnapshotTests(unittest.TestCase):
    def test_snapshot_reflects_tick(self) -> None:
        world = World(seed=4)
        world.arrivals.put(9)
        world.arrivals.put(3)
        world.tick(0.0)
        snap = world.snapshot()
        self.assertEqual(snap.tick, 1)
        self.assertEqual(snap.signal, "A")
        self.assertEqual(snap.green_road, "A")
        self.assertFalse(snap.clearing)
        self.assertEqual(snap.pending_arrivals, 1)
        self.assertEqual(snap.queue_depths, {"A": 0, "B": 0, "C": 0, "D": 0})
        self.assertEqual(len(snap.vehicles), 1)
        state = snap.vehicles[0]
        self.assertEqual((state.lane, state.road, state.orientation), (9, "C", "WEST"))
        self.assertEqual((state.x, state.y), (813.0, 350.0))

        data = snap.as_dict()
        self.assertEqual(data["vehicles"][0]["lane"], 9)
        self.assertEqual(data["feed_metrics"]["enqueued"], 2)
        self.assertIsNone(data["priority_road"])

    def test_snapshot_during_clearance(self) -> None:
        world = World(seed=4)
        world.tick(0.0)
        world.tick(3000.0)
        snap = world.snapshot()
        self.assertIs(world.signal, Phase.ALL_STOPPED)
        self.assertTrue(snap.clearing)
        self.assertIsNone(snap.green_road)
        self.assertEqual((snap.current_phase, snap.target_phase), ("A", "B"))


class ResetTests(unittest.TestCase):
    def test_reset_clears_everything(self) -> None:
        world = World(seed=5)
        for lane in (2, 5, 8, 11):
            world.arrivals.put(lane)
        for step in range(3):
            world.tick(step * 1500.0)
        world.reset()
        self.assertEqual(world.vehicle_count(), 0)
        self.assertEqual(len(world.arrivals), 0)
        self.assertEqual(world.tick_count, 0)
        self.assertIsNone(world.deferred_lane)
        self.assertIs(world.signal, Phase.ROAD_A)
        world.arrivals.put(2)
        world.tick(0.0)
        self.assertEqual([v.id for v in world.registry], [1])


if __name__ == "__main__":
    unittest.main()

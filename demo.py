#!/usr/bin/env python3
"""
Quick demo — runs the Pygame view with an in-process arrival producer so
you can watch the junction without starting the listener or the traffic
generator.

Usage:
    python3 demo.py [--interval 0.6] [--seed 7]
"""

import argparse
import logging
import random
import threading
from typing import Optional

from feed.utils import random_lane
from logging_setup import setup_logging
from sim.sim_bridge import SimBridge
from sim.topology import SOURCE_LANES


class DemoProducer:
    """Puts a random spawn lane on the bridge's arrival queue every *interval_s*."""

    def __init__(self, bridge: SimBridge, interval_s: float = 0.6, seed: Optional[int] = None):
        self.bridge = bridge
        self.interval_s = interval_s
        self._rng = random.Random(seed)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, daemon=True, name="DemoProducer")

    def start(self):
        self._thread.start()

    def stop(self):
        self._stop.set()
        self._thread.join(timeout=2.0)

    def _loop(self):
        while not self._stop.wait(self.interval_s):
            if not self.bridge.is_paused():
                self.bridge.enqueue_arrival(random_lane(SOURCE_LANES, self._rng))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Junction demo with synthetic arrivals.")
    parser.add_argument("--interval", type=float, default=0.6)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    setup_logging(logging.INFO, phase_debug=False)

    from ui import run_pygame_view

    bridge = SimBridge(random_seed=args.seed, seed_lanes=SOURCE_LANES)
    producer = DemoProducer(bridge, args.interval, args.seed)

    print("Starting demo with synthetic arrivals...")
    print("Controls: SPACE=pause  R=reset  1-8=arrival  P=paths  L=legend  F12=screenshot")
    bridge.start()
    producer.start()
    try:
        run_pygame_view(bridge)
    finally:
        producer.stop()
        bridge.stop()

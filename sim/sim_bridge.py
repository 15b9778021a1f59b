"""
sim/sim_bridge.py
=================
Background-thread orchestrator around :class:`sim.world.World`.  The UI
and the HTTP surface poll the bridge for the latest snapshot without
blocking the tick.

Public API consumed by :mod:`ui.pygame_view` and :mod:`api.server`
------------------------------------------------------------------
* ``get_snapshot()``          → ``SimulationSnapshot``
* ``enqueue_arrival(lane)``   → ``int``
* ``arrivals``                → ``ArrivalQueue``
* ``reset()``                 → ``None``
* ``set_paused(bool)``        → ``None``
* ``is_paused()``             → ``bool``
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Iterable, Optional

from feed.arrival_queue import ArrivalQueue
from sim.snapshot import SimulationSnapshot
from sim.traffic_policy import SimulationPolicy
from sim.world import World

log = logging.getLogger("sim_bridge")


class SimBridge:
    """Simulation orchestrator running in a background thread.

    The thread calls :meth:`tick` at ``tick_rate_hz`` with the bridge
    clock (milliseconds of :func:`time.perf_counter` since start) and
    caches the resulting snapshot for the reader threads.

    Parameters
    ----------
    tick_rate_hz : float
        Simulation ticks per second.
    arrivals : ArrivalQueue or None
        Queue shared with the arrival listener.
    random_seed : int or None
        Seed for reproducibility.
    policy : SimulationPolicy or None
        Tunable constants.
    seed_lanes : iterable of int
        Lanes that get one vehicle each at start and after every reset.
    """

    def __init__(
        self,
        tick_rate_hz: float = 60.0,
        arrivals: Optional[ArrivalQueue] = None,
        random_seed: Optional[int] = None,
        policy: Optional[SimulationPolicy] = None,
        seed_lanes: Iterable[int] = (),
    ) -> None:
        self._tick_rate_hz = tick_rate_hz
        self._seed_lanes = tuple(seed_lanes)
        self._world = World(policy=policy, seed=random_seed, arrivals=arrivals)
        self._world.seed_vehicles(self._seed_lanes)

        self._lock = threading.Lock()
        self._tick_lock = threading.Lock()
        self._snapshot: SimulationSnapshot = self._world.snapshot()

        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._paused = False
        self._t0 = time.perf_counter()

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the background simulation thread."""
        if self._running:
            return
        self._running = True
        self._t0 = time.perf_counter()
        self._thread = threading.Thread(
            target=self._loop, daemon=True, name="SimBridge"
        )
        self._thread.start()
        log.info("SimBridge started at %.1f Hz", self._tick_rate_hz)

    def stop(self) -> None:
        """Signal the thread to stop and wait for it to join."""
        self._running = False
        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None
        log.info("SimBridge stopped")

    # ── Reader API ────────────────────────────────────────────────────────────

    @property
    def world(self) -> World:
        return self._world

    @property
    def arrivals(self) -> ArrivalQueue:
        return self._world.arrivals

    def get_snapshot(self) -> SimulationSnapshot:
        with self._lock:
            return self._snapshot

    def enqueue_arrival(self, lane_id: int) -> int:
        """Queue an arrival as if it came over the wire; returns queue depth."""
        return self._world.arrivals.put(lane_id)

    def reset(self) -> None:
        """Clear the world and reseed the configured lanes."""
        with self._tick_lock:
            self._world.reset()
            self._world.seed_vehicles(self._seed_lanes)
            snapshot = self._world.snapshot()
        with self._lock:
            self._snapshot = snapshot
        log.info("SimBridge reset")

    def set_paused(self, paused: bool) -> None:
        """Pause / unpause the simulation tick."""
        self._paused = paused
        log.info("SimBridge %s", "paused" if paused else "resumed")

    def is_paused(self) -> bool:
        return self._paused

    # ── Background loop ───────────────────────────────────────────────────────

    def now_ms(self) -> float:
        return (time.perf_counter() - self._t0) * 1000.0

    def tick(self, now_ms: Optional[float] = None) -> SimulationSnapshot:
        """Advance the world once and publish the new snapshot."""
        with self._tick_lock:
            self._world.tick(self.now_ms() if now_ms is None else now_ms)
            snapshot = self._world.snapshot()
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def _loop(self) -> None:
        dt = 1.0 / self._tick_rate_hz
        while self._running:
            t0 = time.perf_counter()
            if not self._paused:
                try:
                    self.tick()
                except Exception:
                    log.exception("SimBridge tick error")
            time.sleep(max(0.0, dt - (time.perf_counter() - t0)))

#!/usr/bin/env python3
"""
main.py
=======
Entry point: arrival listener + simulation thread + Pygame view.

Usage::

    python main.py                       # window, listener on 127.0.0.1:5000
    python main.py --api                 # also serve the HTTP API on :8000
    python main.py --headless --ticks 600
    python -m feed.generator             # in another terminal

Environment overrides (flags win over the environment)::

    JUNCTION_TICK_RATE_HZ, JUNCTION_FEED_HOST, JUNCTION_FEED_PORT,
    JUNCTION_API_HOST, JUNCTION_API_PORT, JUNCTION_SEED,
    JUNCTION_SEED_LANES (comma separated), JUNCTION_LOG_LEVEL
"""

import argparse
import logging
import os
import time
from typing import Optional, Sequence, Tuple

import config
from feed import ArrivalListener, ArrivalQueue
from logging_setup import setup_logging
from sim.sim_bridge import SimBridge

log = logging.getLogger("main")


def _env(name: str, default):
    """Read ``JUNCTION_<name>`` converted to the type of *default*."""
    raw = os.environ.get(f"JUNCTION_{name}")
    if raw is None or raw == "":
        return default
    if isinstance(default, tuple):
        return tuple(int(part) for part in raw.split(",") if part.strip())
    if default is None:
        return int(raw)
    return type(default)(raw)


def _lanes(text: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in text.split(",") if part.strip())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Adaptive four-road junction simulator.")
    parser.add_argument("--headless", action="store_true", help="run without the Pygame window")
    parser.add_argument("--ticks", type=int, default=None,
                        help="headless only: stop after N ticks (default: run until Ctrl-C)")
    parser.add_argument("--tick-rate", type=float, default=_env("TICK_RATE_HZ", config.DEFAULT_TICK_RATE_HZ))
    parser.add_argument("--host", default=_env("FEED_HOST", config.FEED_HOST), help="arrival listener host")
    parser.add_argument("--port", type=int, default=_env("FEED_PORT", config.FEED_PORT), help="arrival listener port")
    parser.add_argument("--no-listener", action="store_true", help="do not open the arrival socket")
    parser.add_argument("--api", action="store_true", help="serve the HTTP API")
    parser.add_argument("--api-host", default=_env("API_HOST", config.API_HOST))
    parser.add_argument("--api-port", type=int, default=_env("API_PORT", config.API_PORT))
    parser.add_argument("--seed", type=int, default=_env("SEED", None))
    parser.add_argument("--seed-lanes", type=_lanes, default=_env("SEED_LANES", config.DEFAULT_SEED_LANES),
                        help="comma separated lanes that get one vehicle at start")
    parser.add_argument("--log-level", default=_env("LOG_LEVEL", "INFO"))
    return parser


def _run_headless(bridge: SimBridge, ticks: Optional[int]) -> None:
    bridge.start()
    last_report = time.monotonic()
    try:
        while ticks is None or bridge.get_snapshot().tick < ticks:
            time.sleep(0.1)
            if time.monotonic() - last_report >= 5.0:
                snap = bridge.get_snapshot()
                log.info(
                    "tick=%d signal=%s vehicles=%d queues=%s",
                    snap.tick, snap.signal, len(snap.vehicles), snap.queue_depths,
                )
                last_report = time.monotonic()
    except KeyboardInterrupt:
        log.info("Shutting down...")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, str(args.log_level).upper(), logging.INFO))

    arrivals = ArrivalQueue()
    listener = None
    if not args.no_listener:
        listener = ArrivalListener(arrivals, args.host, args.port, config.FEED_BUFFER_SIZE)
        if not listener.start():
            log.warning("running without arrivals from the network")

    bridge = SimBridge(
        tick_rate_hz=args.tick_rate,
        arrivals=arrivals,
        random_seed=args.seed,
        seed_lanes=args.seed_lanes,
    )

    if args.api:
        from api.server import start_server_thread
        start_server_thread(bridge, args.api_host, args.api_port)

    try:
        if args.headless:
            _run_headless(bridge, args.ticks)
        else:
            from ui import run_pygame_view
            bridge.start()
            run_pygame_view(bridge, height=config.WINDOW_HEIGHT, fps=config.TARGET_FPS)
    finally:
        bridge.stop()
        if listener is not None:
            listener.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

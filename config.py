#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf and never imports from
other project packages.
"""

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_TICK_RATE_HZ: float = 60.0
DEFAULT_SEED_LANES: tuple = (2, 5, 8, 11)

# ── Arrival feed defaults ────────────────────────────────────────────────────
FEED_HOST: str = "127.0.0.1"
FEED_PORT: int = 5000
FEED_BUFFER_SIZE: int = 100
GENERATOR_INTERVAL_S: float = 1.0

# ── HTTP API defaults ────────────────────────────────────────────────────────
API_HOST: str = "127.0.0.1"
API_PORT: int = 8000

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_HEIGHT: int = 800
TARGET_FPS: int = 60

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_FILE: str = "junction.log"
PHASE_DEBUG_LOG_FILE: str = "phase_debug.log"

#!/usr/bin/env python3
"""
sim/traffic_policy.py
=====================
Fixed design parameters for the junction simulation.  Every constant
lives in the frozen :class:`SimulationPolicy` dataclass so that tests can
build a policy with shorter timers without touching code.

Distances are in simulation units (1 unit = 1 pixel of the 800×800
view), speeds in units per tick and timers in milliseconds.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: longitudinal motion, stop-line enforcement, phase
    controller, maneuver timing, spawn / despawn envelope.
    """

    # ── Longitudinal motion ───────────────────────────────────────────────
    base_speed: float = 2.0
    """Distance a vehicle advances per accepted tick."""

    min_gap: float = 45.0
    """Minimum following distance between consecutive vehicles in a lane."""

    # ── Stop-line enforcement ─────────────────────────────────────────────
    stop_band_half_width: float = 5.0
    """Half width of the band straddling a stop line where red holds a vehicle."""

    queue_detection_distance: float = 200.0
    """Vehicles this close to their stop line count toward the queue depth."""

    # ── Phase controller ──────────────────────────────────────────────────
    dwell_ms: float = 3000.0
    """Minimum time a phase stays active before a non-priority change."""

    clearance_ms: float = 1000.0
    """All-stopped interval enforced between two traffic-bearing phases."""

    priority_high_water: int = 6
    """Queued count at which a road preempts the cycle."""

    priority_low_water: int = 3
    """Queued count at or below which a held priority is released."""

    # ── Maneuver timing ───────────────────────────────────────────────────
    acceleration_factor: float = 2.0
    """Speed multiplier while a vehicle is committed to crossing the box."""

    curve_length_fudge: float = 1.15
    """Ratio between a typical curve's arc length and its chord."""

    min_curve_length: float = 1.0
    """Lower clamp on the chord length used to derive the curve rate."""

    turn_probability: float = 0.5
    """Chance that a middle-lane vehicle picks the perpendicular turn."""

    # ── Spawn / despawn envelope ──────────────────────────────────────────
    despawn_min: float = -100.0
    """Lower bound (both axes) of the area in which vehicles are kept."""

    despawn_max: float = 900.0
    """Upper bound (both axes) of the area in which vehicles are kept."""

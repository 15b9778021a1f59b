#!/usr/bin/env python3
"""
sim/maneuver.py
===============
Curved lane-change / turn subsystem.

A maneuver is one quadratic Bézier from the vehicle's position at trigger
time, through a control point, to an end point on the target lane.  The
curve parameter grows by a fixed rate each tick; at ``t >= 1`` the vehicle
is pinned to the end point and switches lane and orientation in one step.
"""

from __future__ import annotations

import logging

from sim.physics import Point, distance, quadratic_bezier
from sim.topology import Lane
from sim.traffic_policy import SimulationPolicy
from sim.vehicle import Maneuvering, Straight, Vehicle

log = logging.getLogger("kinematics")


def curve_rate(source: Point, end: Point, policy: SimulationPolicy) -> float:
    """Curve-parameter increment per tick for a curve from *source* to *end*.

    The chord is clamped to ``policy.min_curve_length`` so a degenerate
    curve still yields a finite rate.
    """
    chord = max(distance(source, end), policy.min_curve_length)
    return (policy.base_speed * policy.acceleration_factor) / (
        chord * policy.curve_length_fudge
    )


def start_maneuver(
    vehicle: Vehicle,
    target_lane: Lane,
    control_point: Point,
    end_point: Point,
    policy: SimulationPolicy,
    kind: str = "straight",
) -> Maneuvering:
    """Commit *vehicle* to a curve ending on *target_lane*."""
    source = vehicle.position
    maneuver = Maneuvering(
        source=source,
        control=control_point,
        end=end_point,
        target_lane=target_lane.id,
        target_orientation=target_lane.direction,
        rate=curve_rate(source, end_point, policy),
        kind=kind,
    )
    vehicle.motion = maneuver
    log.debug(
        "maneuver_start id=%d lane=%d -> %d kind=%s rate=%.4f",
        vehicle.id, vehicle.lane, target_lane.id, kind, maneuver.rate,
    )
    return maneuver


def advance_maneuver(vehicle: Vehicle) -> bool:
    """Advance *vehicle* one tick along its curve.

    Returns
    -------
    bool
        True when the maneuver completed on this tick.
    """
    maneuver = vehicle.maneuver
    if maneuver is None:
        return False

    maneuver.t += maneuver.rate
    if maneuver.t < 1.0:
        vehicle.x, vehicle.y = quadratic_bezier(
            maneuver.source, maneuver.control, maneuver.end, maneuver.t,
        )
        return False

    maneuver.t = 1.0
    vehicle.x, vehicle.y = maneuver.end
    vehicle.lane = maneuver.target_lane
    vehicle.orientation = maneuver.target_orientation
    vehicle.motion = Straight()
    log.debug("maneuver_done id=%d lane=%d", vehicle.id, vehicle.lane)
    return True

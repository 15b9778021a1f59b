"""
sim — Simulation core
=====================

Modules
-------
world
    :class:`World` tick pipeline: arrival, spawn, controller, kinematics.
phase_controller
    :class:`PhaseController` adaptive signal state machine.
kinematics
    :class:`KinematicsEngine` straight motion, gap and stop-line checks.
maneuver
    Quadratic-Bézier lane changes and turns.
registry
    :class:`VehicleRegistry` vehicle storage and per-lane views.
topology
    Static lanes, roads, stop lines and turn rules.
vehicle
    :class:`Vehicle` and its ``Straight`` / ``Maneuvering`` motion states.
snapshot
    :class:`SimulationSnapshot` read-only per-tick view.
traffic_policy
    :class:`SimulationPolicy` tunable constants.
sim_bridge
    :class:`SimBridge` background-thread orchestrator.
physics
    Low-level geometry helpers.
"""

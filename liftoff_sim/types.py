"""
Liftoff Telemetry Replay - Type Definitions

This module provides TypedDict definitions for structured records,
improving type safety and IDE support.
"""

from typing import TypedDict

from .vector import Vector3


class TelemetryRecord(TypedDict):
    """One line of the telemetry file."""
    time: float  # Mission elapsed time (s)
    velocity: float  # Speed (m/s)
    altitude: float  # Altitude (km in the file, m once ingested)


class ThrottleCommand(TypedDict):
    """Return type for the rocket model's throttle logic."""
    throttle: float  # Per-engine throttle (0.0 to 1.0)
    thrust_direction: Vector3  # Unit vector along the velocity error
    delta_v: Vector3  # Velocity error to the target profile (m/s)
    accel: float  # Acceleration needed to close the error in one step (m/s^2)

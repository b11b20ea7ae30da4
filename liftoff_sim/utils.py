"""
Liftoff Telemetry Replay - Utility Functions

This module contains shared utility functions used across multiple modules.
"""

import math

from . import constants as C


def km_to_m(km: float) -> float:
    """Convert kilometers to meters."""
    return km * 1000.0


def signum(x: float) -> int:
    """Return -1 if negative, 1 if positive, 0 if 0."""
    return (x > 0) - (x < 0)


def to_ticks(seconds: float, ticks_per_sec: float = C.TICKS_PER_SEC) -> int:
    """
    Convert a duration in seconds to simulation ticks.

    Args:
        seconds: Duration (s)
        ticks_per_sec: Simulation rate (Hz)

    Returns:
        Number of whole ticks
    """
    return int(round(seconds * ticks_per_sec))


def is_nan(*values: float) -> bool:
    """True if any of the values is NaN."""
    return any(math.isnan(v) for v in values)


def step_count(duration: float, time_step: float) -> int:
    """Number of ticks i with i * time_step < duration."""
    if time_step <= 0:
        raise ValueError(f"Time step must be positive, got {time_step}")
    return max(0, int(math.ceil(duration / time_step - 1e-9)))

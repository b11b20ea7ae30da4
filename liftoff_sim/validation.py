"""
Liftoff Telemetry Replay - Validation Checks

This module implements consistency checks on reconstructed profiles and
fitted curves:
- Forced-point exactness of fitted polynomials
- Velocity sufficiency (can the velocity reach the next altitude sample?)
- Mass bounds for the force-driven model

Checks raise ValidationError on violation.
"""

import math
from typing import Iterable, Optional

from . import constants as C
from .profile import FlightProfile


class ValidationError(Exception):
    """Raised when a consistency check fails."""
    pass


class ReconciliationError(ValidationError):
    """Raised when the altitude/velocity reconciliation does not converge."""
    pass


def check_forced_points(poly, forced_points: Iterable, tolerance: float = None) -> bool:
    """
    Verify a polynomial passes through each forced point.

    Args:
        poly: Polynomial with val(t)
        forced_points: Iterable of (time, value)
        tolerance: Allowed residual relative to max(1, |value|)

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if tolerance is None:
        tolerance = C.FORCED_POINT_TOL

    for t, value in forced_points:
        residual = abs(poly.val(t) - value)
        if residual > tolerance * max(1.0, abs(value)):
            raise ValidationError(
                f"Forced point violation at t={t:g}: "
                f"expected {value:.6f}, got {poly.val(t):.6f} "
                f"(residual {residual:.2e})"
            )
    return True


def find_velocity_shortfall(profile: FlightProfile, total_steps: int,
                            after: float = 0.0) -> Optional[float]:
    """
    Find the first time at which the velocity cannot reach the next altitude.

    A shortfall is v(t) < (alt(t) - alt(t - dt)) / dt. Only times strictly
    after the given time are reported; NaN samples are skipped.

    Args:
        profile: Profile to scan
        total_steps: Number of grid steps to scan
        after: Ignore shortfalls at or before this time

    Returns:
        Time of the first shortfall, or None if the profile is consistent
    """
    dt = profile.time_step
    last_t = 0.0
    last_alt = 0.0
    for i in range(total_steps):
        t = i * dt
        alt = profile.get_altitude(t)
        v = profile.get_velocity(t)

        if i > 0 and not (math.isnan(alt) or math.isnan(v) or math.isnan(last_alt)):
            target_v = (alt - last_alt) / (t - last_t)
            if v < target_v and after < t:
                return t

        last_t = t
        last_alt = alt

    return None


def check_velocity_supports_altitude(profile: FlightProfile, total_steps: int,
                                     after: float = 0.0) -> bool:
    """
    Verify the velocity series can produce every altitude step.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    t = find_velocity_shortfall(profile, total_steps, after)
    if t is not None:
        raise ValidationError(
            f"Velocity shortfall at t={t:.2f}s: "
            f"v={profile.get_velocity(t):.1f} m/s cannot reach "
            f"altitude {profile.get_altitude(t):.1f} m"
        )
    return True


def check_mass_valid(m: float, dry_mass: float) -> bool:
    """
    Check that mass is physically valid.

    Args:
        m: Vehicle mass (kg)
        dry_mass: Dry mass limit (kg)

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if m < dry_mass - C.ZERO_TOLERANCE:
        raise ValidationError(
            f"Mass below dry mass: m = {m:.1f} kg, dry = {dry_mass:.1f} kg"
        )
    return True

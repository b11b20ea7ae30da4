"""Tests for validation module."""
import math

import pytest

from liftoff_sim.polynomial import ForcedPoint, Polynomial
from liftoff_sim.profile import FlightProfile
from liftoff_sim.validation import (
    ReconciliationError, ValidationError, check_forced_points, check_mass_valid,
    check_velocity_supports_altitude, find_velocity_shortfall,
)


def make_profile(velocities, altitudes, dt=1.0):
    p = FlightProfile(dt)
    for i, (v, alt) in enumerate(zip(velocities, altitudes)):
        p.put_velocity(i * dt, v)
        p.put_altitude(i * dt, alt)
    return p


def test_forced_points_pass():
    p = Polynomial([1.0, 0.0])
    assert check_forced_points(p, [ForcedPoint(2.0, 2.0)])


def test_forced_points_fail():
    p = Polynomial([1.0, 0.0])
    with pytest.raises(ValidationError):
        check_forced_points(p, [ForcedPoint(2.0, 2.5)])


def test_shortfall_detected():
    p = make_profile([0, 10, 10, 10], [0, 5, 30, 35])
    assert find_velocity_shortfall(p, 4) == 2.0
    with pytest.raises(ValidationError):
        check_velocity_supports_altitude(p, 4)


def test_shortfall_after_cutoff():
    p = make_profile([0, 10, 10, 10], [0, 5, 30, 35])
    assert find_velocity_shortfall(p, 4, after=2.0) is None


def test_consistent_profile():
    p = make_profile([0, 10, 10, 10], [0, 10, 20, 30])
    assert find_velocity_shortfall(p, 4) is None
    assert check_velocity_supports_altitude(p, 4)


def test_nan_samples_skipped():
    p = make_profile([0, math.nan, 10, 10], [0, 50, 60, 65])
    assert find_velocity_shortfall(p, 4) is None


def test_mass_valid():
    assert check_mass_valid(1000.0, 500.0)
    with pytest.raises(ValidationError):
        check_mass_valid(400.0, 500.0)


def test_reconciliation_error_is_validation_error():
    assert issubclass(ReconciliationError, ValidationError)

"""Tests for engines and propellant bookkeeping."""
import pytest

from liftoff_sim import constants as C
from liftoff_sim.integrators import Body
from liftoff_sim.mass import (
    Engine, Rocket, compute_mass_flow_rate, create_engines, is_propellant_exhausted,
)
from liftoff_sim.validation import check_mass_valid


def test_engine_throttle_clamped():
    e = Engine(1000.0, 300.0)
    e.set_throttle(1.5)
    assert e.throttle == 1.0
    e.set_throttle(-0.5)
    assert e.throttle == 0.0
    assert Engine(1000.0, 300.0, throttle=2.0).throttle == 1.0


def test_engine_thrust_and_flow():
    e = Engine(C.MERLIN_MAX_THRUST, C.MERLIN_ISP, throttle=0.5)
    assert e.thrust == pytest.approx(0.5 * C.MERLIN_MAX_THRUST)
    assert e.prop_flow_rate == pytest.approx(e.thrust / (C.MERLIN_ISP * C.G0))


def test_create_engines():
    engines = create_engines()
    assert len(engines) == C.MERLIN_COUNT
    assert all(e.throttle == 0.0 for e in engines)
    assert compute_mass_flow_rate(engines) == 0.0


def test_rocket_mass_is_dry_plus_prop():
    r = Rocket(500.0, 300.0)
    assert r.get_mass() == 800.0
    assert r.get_prop_mass() == 300.0


def test_mass_conservation_with_floor():
    """Draining r kg/s for N ticks removes N*dt*r until only dry mass is left."""
    rocket = Rocket(500.0, 300.0)
    body = Body(rocket, derivative_order=3, time_step=0.5)
    rate = 40.0

    for n in range(1, 31):
        body.tick()
        rocket.drain_propellant(rate * body.time_step)
        expected = max(800.0 - n * body.time_step * rate, 500.0)
        assert rocket.get_mass() == pytest.approx(expected)
        assert check_mass_valid(rocket.get_mass(), rocket.dry_mass)

    assert is_propellant_exhausted(rocket)


def test_set_mass_keeps_propellant():
    """Stage separation rewrites the dry mass only."""
    r = Rocket(1000.0, 200.0)
    r.set_mass(700.0)
    assert r.get_prop_mass() == 200.0
    assert r.dry_mass == 500.0
    assert r.get_mass() == 700.0


def test_rocket_throttle_and_thrust():
    r = Rocket(100.0, 100.0, create_engines(3, 1000.0, 300.0))
    r.set_throttle(0.25)
    assert r.total_thrust() == pytest.approx(750.0)
    assert len(r.get_engines()) == 3


def test_rocket_rejects_negative_masses():
    with pytest.raises(ValueError):
        Rocket(-1.0, 10.0)

"""Tests for edge cases and boundary conditions."""

import math
import unittest

from liftoff_sim import constants as C
from liftoff_sim import forces
from liftoff_sim.control import PIDFController, adjust_velocity
from liftoff_sim.integrators import create_force_driven_body
from liftoff_sim.polynomial import fit
from liftoff_sim.profile import FlightProfile, TimeSeries
from liftoff_sim.reconstruction import setup_flight_profile
from liftoff_sim.vector import Vector3


class TestAtmosphereEdgeCases(unittest.TestCase):
    """Edge case tests for atmosphere model."""

    def test_negative_altitude(self):
        """Negative altitude should be treated as zero."""
        self.assertAlmostEqual(forces.calc_pressure_earth(-1000.0),
                               forces.calc_pressure_earth(0.0))

    def test_band_boundaries_continuous(self):
        """Pressure is nearly continuous across the model bands."""
        for h in (11000.0, 25000.0):
            below = forces.calc_pressure_earth(h - 1.0)
            above = forces.calc_pressure_earth(h)
            self.assertLess(abs(below - above) / above, 0.05)

    def test_high_altitude_density_small(self):
        self.assertLess(forces.calc_rho_earth(80000.0), 1e-4)


class TestProfileEdgeCases(unittest.TestCase):
    """Edge cases for sparse or degenerate telemetry."""

    def test_single_sample(self):
        raw = FlightProfile(1.0)
        raw.put_velocity(0.0, 0.0)
        raw.put_altitude(0.0, 0.0)
        fitted = FlightProfile(1.0)
        events = setup_flight_profile(raw, fitted)
        self.assertTrue(all(math.isinf(t) for t in events))
        self.assertEqual(fitted.get_altitude(0.0), 0.0)

    def test_empty_raw_profile(self):
        fitted = FlightProfile(1.0)
        setup_flight_profile(FlightProfile(1.0), fitted)
        self.assertTrue(fitted.is_empty())

    def test_nan_time_query(self):
        s = TimeSeries({0.0: 1.0, 1.0: 2.0})
        self.assertTrue(math.isnan(s.get(math.nan)))

    def test_fit_constant(self):
        p = fit(0, [0.0, 1.0, 2.0], [3.0, 5.0, 7.0])
        self.assertAlmostEqual(p.val(10.0), 5.0)

    def test_fit_single_point(self):
        p = fit(4, [7.0], [2.5])
        self.assertEqual(p.degree, 0)
        self.assertAlmostEqual(p.val(100.0), 2.5)


class TestControlEdgeCases(unittest.TestCase):
    """Edge cases for velocity decomposition."""

    def test_zero_speed(self):
        pidf = PIDFController(1.0)
        pidf.set_setpoint(100.0)
        v = adjust_velocity(pidf, Vector3.zero(), 0.0)
        self.assertEqual(v.magnitude(), 0.0)

    def test_zero_error(self):
        pidf = PIDFController(1.0)
        pidf.set_setpoint(100.0)
        pidf.set_last_state(100.0)
        v = adjust_velocity(pidf, Vector3.zero(), 30.0)
        self.assertEqual(v, Vector3(30.0, 0.0, 0.0))


class TestIntegratorEdgeCases(unittest.TestCase):
    """Edge cases for the motion integrator."""

    def test_ground_contact_balances_weight(self):
        """Below ground the normal force cancels every downward force."""
        body = create_force_driven_body(100.0, derivative_order=3, time_step=1.0)
        f = body.dynamics.forces
        f[C.FORCE_WEIGHT] = forces.compute_weight_force(100.0)
        f[C.FORCE_NORMAL] = forces.compute_normal_force(Vector3(0.0, -1.0, 0.0), f)
        body.tick()
        self.assertAlmostEqual(body.acceleration.y, 0.0)
        self.assertAlmostEqual(body.velocity.y, 0.0)

    def test_nan_force_propagates(self):
        body = create_force_driven_body(1.0, derivative_order=3)
        body.dynamics.forces[C.FORCE_DRAG] = Vector3(math.nan, 0.0, 0.0)
        body.tick()
        self.assertTrue(math.isnan(body.velocity.x))


if __name__ == '__main__':
    unittest.main()

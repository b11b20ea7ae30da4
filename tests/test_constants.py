import math

import pytest
import liftoff_sim.constants as C

def test_gravity():
    assert C.G0 == pytest.approx(9.80665)

def test_vehicle_masses():
    assert C.TOTAL_MASS == pytest.approx(C.ROCKET_DRY_MASS + C.ROCKET_PROP_MASS)
    assert C.STAGE1_FUEL_MASS > C.STAGE2_FUEL_MASS > C.PAYLOAD_MASS

def test_engines():
    assert C.MERLIN_COUNT == 9
    assert C.MERLIN_MAX_THRUST > 0
    assert C.MERLIN_ISP > 0

def test_aero():
    assert C.F9_A == pytest.approx(math.pi * 2.6 ** 2)
    assert 0 < C.F9_CD < 1

def test_timing():
    assert C.TIME_STEP == pytest.approx(1.0 / C.TICKS_PER_SEC)
    assert C.MECO_TIME < C.SIM_DURATION <= C.MAX_TIME
    assert C.DERIVATIVE_ORDER >= 3

def test_force_names_unique():
    assert len(set(C.FORCE_NAMES)) == len(C.FORCE_NAMES) == 4

def test_print_parameters(capsys):
    C.print_parameters()
    assert "MECO" in capsys.readouterr().out

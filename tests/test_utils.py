import math

import pytest
from liftoff_sim import utils

def test_km_to_m():
    assert utils.km_to_m(1.5) == 1500.0

def test_signum():
    assert utils.signum(-3.2) == -1
    assert utils.signum(0.0) == 0
    assert utils.signum(7) == 1

def test_to_ticks():
    assert utils.to_ticks(155.0) == 155
    assert utils.to_ticks(1.0, ticks_per_sec=10.0) == 10

def test_is_nan():
    assert utils.is_nan(1.0, math.nan)
    assert not utils.is_nan(1.0, 2.0)
    assert not utils.is_nan()

def test_step_count():
    assert utils.step_count(10.0, 1.0) == 10
    assert utils.step_count(1.0, 0.1) == 10
    assert utils.step_count(0.0, 1.0) == 0

def test_step_count_bad_step():
    with pytest.raises(ValueError):
        utils.step_count(10.0, 0.0)

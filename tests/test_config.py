"""Tests for config module."""
from dataclasses import replace

import pytest
from liftoff_sim import config
from liftoff_sim import constants as C


def test_simulation_config_defaults():
    """Test that default config uses constants values."""
    cfg = config.SimulationConfig()
    assert cfg.time_step == C.TIME_STEP
    assert cfg.max_time == C.MAX_TIME
    assert cfg.base_fit_order == C.BASE_FIT_ORDER
    assert cfg.meco_time == C.MECO_TIME
    assert cfg.max_reconcile_iterations is None


def test_simulation_config_frozen():
    """Test that config is immutable (frozen)."""
    cfg = config.SimulationConfig()
    with pytest.raises(Exception):  # FrozenInstanceError
        cfg.time_step = 0.5


def test_derived_masses():
    cfg = config.create_default_config()
    assert cfg.total_mass == pytest.approx(C.TOTAL_MASS)
    assert cfg.upper_mass == pytest.approx(
        C.STAGE2_DRY_MASS + C.STAGE2_FUEL_MASS + C.PAYLOAD_MASS
    )


def test_total_steps():
    cfg = config.SimulationConfig(time_step=0.5, max_time=10.0)
    assert cfg.total_steps == 20


def test_create_test_config():
    """Test create_test_config factory function."""
    cfg = config.create_test_config()
    assert cfg.time_step == 1.0
    assert cfg.max_time == 30.0
    assert cfg.verbose is False


def test_create_test_config_overrides():
    cfg = config.create_test_config(time_step=0.25, engine_count=3)
    assert cfg.time_step == 0.25
    assert cfg.engine_count == 3


def test_replace_creates_new_config():
    cfg = config.create_default_config()
    other = replace(cfg, meco_time=100.0)
    assert other.meco_time == 100.0
    assert cfg.meco_time == C.MECO_TIME

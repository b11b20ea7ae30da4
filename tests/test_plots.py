"""
Unit tests for plot generation.

Plots are rendered with the Agg backend into a temporary directory.
"""

import os

import pytest

from liftoff_sim.config import create_test_config
from liftoff_sim.main import FlightLog, run_mission
from liftoff_sim.plotting import generate_all_plots, plot_flight_log
from liftoff_sim.profile import FlightProfile


@pytest.fixture
def mission_result(tmp_path):
    raw = FlightProfile(1.0)
    for t, v, alt in [(0, 0, 0), (10, 100, 1000), (20, 150, 5000)]:
        raw.put_velocity(t, v)
        raw.put_altitude(t, alt)
    return run_mission(create_test_config(), raw=raw)


def test_generate_all_plots(mission_result, tmp_path):
    out = tmp_path / "plots"
    paths = generate_all_plots(mission_result, str(out))
    assert len(paths) == 3
    for path in paths:
        assert os.path.isfile(path)
        assert os.path.getsize(path) > 0


def test_plot_flight_log(mission_result, tmp_path):
    path = plot_flight_log(mission_result.rocket_log, str(tmp_path), 'rocket', 'Rocket')
    assert path.endswith('rocket.png')
    assert os.path.isfile(path)


def test_empty_logs_are_skipped(mission_result, tmp_path):
    mission_result.replay_log = FlightLog()
    mission_result.rocket_log = FlightLog()
    paths = generate_all_plots(mission_result, str(tmp_path))
    assert len(paths) == 1

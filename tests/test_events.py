"""Tests for engine event detection."""
import math

import pytest

from liftoff_sim.events import event_time, find_event_time, find_mission_events
from liftoff_sim.profile import TimeSeries


def make_series(values, dt=1.0):
    return TimeSeries({i * dt: v for i, v in enumerate(values)})


# Rise, coast down, relight, cut off again
MISSION = [0, 0, 10, 20, 30, 25, 20, 22, 30, 40, 40, 38]


def test_mission_events():
    times, indices = find_mission_events(make_series(MISSION))
    assert indices == [5, 7, 10]
    assert times == [5.0, 7.0, 10.0]


def test_pad_plateau_is_not_an_event():
    """Zero velocity before liftoff does not count as the end of a climb."""
    s = make_series([0, 0, 0, 5, 10, 9])
    assert find_event_time(1, s, rising=True) == 5


def test_missing_event_returns_sentinel():
    s = make_series([0, 1, 2, 3])
    idx = find_event_time(1, s, rising=True)
    assert idx == len(s)
    assert event_time(s, idx) == math.inf


def test_never_returns_before_cursor():
    s = make_series(MISSION)
    for cursor in range(len(MISSION)):
        for rising in (True, False):
            assert find_event_time(cursor, s, rising) >= cursor


def test_all_events_missing_on_monotone_climb():
    times, indices = find_mission_events(make_series([0, 10, 100, 150]))
    assert all(math.isinf(t) for t in times)
    assert indices == [4, 4, 4]


def test_empty_series():
    times, _ = find_mission_events(TimeSeries())
    assert all(math.isinf(t) for t in times)


def test_nan_samples_are_skipped():
    s = make_series([0, 5, float('nan'), 10, 8])
    assert find_event_time(1, s, rising=True) == 4


def test_event_time_lookup():
    s = make_series([1, 2, 3], dt=0.5)
    assert event_time(s, 2) == pytest.approx(1.0)

"""Tests for telemetry ingestion."""
import logging

import pytest

from liftoff_sim.profile import FlightProfile
from liftoff_sim.telemetry import iter_records, parse_record, parse_telem


def write_lines(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_parse_record():
    rec = parse_record('{"time": 12, "velocity": 85.3, "altitude": 0.4}')
    assert rec == {"time": 12.0, "velocity": 85.3, "altitude": 0.4}


@pytest.mark.parametrize("line", [
    "not json",
    "[1, 2, 3]",
    '{"time": 1, "velocity": 2}',
    '{"time": "a", "velocity": 2, "altitude": 3}',
])
def test_parse_record_rejects_bad_lines(line):
    with pytest.raises(ValueError):
        parse_record(line)


def test_parse_telem_converts_altitude(tmp_path):
    path = write_lines(tmp_path / "data.json", [
        '{"time": 0, "velocity": 0, "altitude": 0}',
        '{"time": 10, "velocity": 100, "altitude": 1}',
        '{"time": 20, "velocity": 150, "altitude": 5}',
    ])
    raw = FlightProfile(1.0)
    assert parse_telem(raw, path) == 3
    assert raw.get_altitude(20.0) == 5000.0
    assert raw.get_velocity(10.0) == 100.0


def test_malformed_lines_are_skipped(tmp_path, caplog):
    path = write_lines(tmp_path / "data.json", [
        '{"time": 0, "velocity": 0, "altitude": 0}',
        'garbage',
        '',
        '{"time": 1, "velocity": 10, "altitude": 0.01}',
    ])
    with caplog.at_level(logging.WARNING):
        records = list(iter_records(path))
    assert len(records) == 2
    assert "malformed" in caplog.text


def test_missing_file_leaves_profile_empty(tmp_path, caplog):
    raw = FlightProfile(1.0)
    with caplog.at_level(logging.WARNING):
        assert parse_telem(raw, tmp_path / "missing.json") == 0
    assert raw.is_empty()
    assert "Cannot find file" in caplog.text

import pytest
from liftoff_sim import types
from liftoff_sim.vector import Vector3

def test_telemetry_record_typeddict():
    rec = types.TelemetryRecord(time=10.0, velocity=100.0, altitude=1.0)
    assert rec["time"] == 10.0
    assert rec["altitude"] == 1.0

def test_throttle_command_typeddict():
    cmd = types.ThrottleCommand(
        throttle=0.5,
        thrust_direction=Vector3(0.0, 1.0, 0.0),
        delta_v=Vector3(0.0, 3.0, 0.0),
        accel=3.0
    )
    assert cmd["throttle"] == 0.5
    assert isinstance(cmd["thrust_direction"], Vector3)

"""
Liftoff Telemetry Replay - Flight Profiles

Time-keyed sample storage:
- TimeSeries: ordered (time -> value) map with linear interpolation
- FlightProfile: velocity + altitude series sharing one time step
- VelocityFlightProfile: (vx, vy) series handed from the replay pass to
  the rocket model pass

Queries outside the observed time domain return NaN.
"""

import bisect
import math
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np


class TimeSeries:
    """
    Ordered mapping from time to value.

    Keys are unique and iterated in ascending order. Arbitrary sample times
    are accepted; the reconstruction pipeline only writes multiples of its
    time step.
    """

    def __init__(self, samples: Optional[Dict[float, float]] = None):
        self._times: List[float] = []
        self._values: Dict[float, float] = {}
        if samples:
            for t, v in samples.items():
                self.put(t, v)

    def put(self, t: float, value: float) -> None:
        t = float(t)
        if t not in self._values:
            bisect.insort(self._times, t)
        self._values[t] = float(value)

    def get(self, t: float) -> float:
        """
        Value at time t: exact at a key, linearly interpolated between keys,
        NaN outside [first, last] or when empty.
        """
        value = self._values.get(t)
        if value is not None:
            return value

        times = self._times
        if not times or t < times[0] or t > times[-1] or math.isnan(t):
            return math.nan

        i = bisect.bisect_left(times, t)
        t0 = times[i - 1]
        t1 = times[i]
        v0 = self._values[t0]
        v1 = self._values[t1]
        return v0 + (v1 - v0) * (t - t0) / (t1 - t0)

    def times(self) -> List[float]:
        return list(self._times)

    def values(self) -> List[float]:
        return [self._values[t] for t in self._times]

    def items(self) -> List[Tuple[float, float]]:
        return [(t, self._values[t]) for t in self._times]

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Times and values as numpy arrays."""
        return (np.array(self._times, dtype=np.float64),
                np.array(self.values(), dtype=np.float64))

    @property
    def first_time(self) -> float:
        return self._times[0] if self._times else math.nan

    @property
    def last_time(self) -> float:
        return self._times[-1] if self._times else math.nan

    def copy(self) -> 'TimeSeries':
        other = TimeSeries()
        other._times = list(self._times)
        other._values = dict(self._values)
        return other

    def clear(self) -> None:
        self._times.clear()
        self._values.clear()

    def __len__(self) -> int:
        return len(self._times)

    def __iter__(self) -> Iterator[float]:
        return iter(self._times)

    def __contains__(self, t: float) -> bool:
        return t in self._values

    def __repr__(self) -> str:
        if not self._times:
            return "TimeSeries(empty)"
        return (f"TimeSeries(n={len(self)}, "
                f"t=[{self._times[0]:g}, {self._times[-1]:g}])")


class FlightProfile:
    """
    Velocity and altitude series sharing a fixed time step.

    Also carries a replay cursor (current_time) so the profile can be
    stepped through tick by tick.

    Attributes:
        velocity: Speed over time (m/s)
        altitude: Altitude over time (m)
    """

    def __init__(self, time_step: float):
        if time_step <= 0:
            raise ValueError(f"Time step must be positive, got {time_step}")
        self._time_step = float(time_step)
        self.current_time = 0.0
        self.velocity = TimeSeries()
        self.altitude = TimeSeries()

    @property
    def time_step(self) -> float:
        return self._time_step

    def put_velocity(self, time: float, velocity: float) -> None:
        self.velocity.put(time, velocity)

    def put_altitude(self, time: float, altitude: float) -> None:
        self.altitude.put(time, altitude)

    def get_velocity(self, time: Optional[float] = None) -> float:
        """Velocity at time (defaults to the replay cursor), NaN if unknown."""
        return self.velocity.get(self.current_time if time is None else time)

    def get_altitude(self, time: Optional[float] = None) -> float:
        """Altitude at time (defaults to the replay cursor), NaN if unknown."""
        return self.altitude.get(self.current_time if time is None else time)

    def step(self) -> None:
        """Advance the replay cursor by one time step."""
        self.current_time += self._time_step

    def reset(self) -> None:
        """Rewind the replay cursor."""
        self.current_time = 0.0

    def is_empty(self) -> bool:
        return len(self.velocity) == 0 and len(self.altitude) == 0

    def copy(self) -> 'FlightProfile':
        other = FlightProfile(self._time_step)
        other.current_time = self.current_time
        other.velocity = self.velocity.copy()
        other.altitude = self.altitude.copy()
        return other

    def __repr__(self) -> str:
        return (f"FlightProfile(dt={self._time_step:g}, "
                f"velocity={self.velocity!r}, altitude={self.altitude!r})")


class VelocityFlightProfile:
    """Horizontal/vertical velocity components over time (m/s)."""

    def __init__(self, time_step: float):
        if time_step <= 0:
            raise ValueError(f"Time step must be positive, got {time_step}")
        self._time_step = float(time_step)
        self.vx = TimeSeries()
        self.vy = TimeSeries()

    @property
    def time_step(self) -> float:
        return self._time_step

    def put_vx(self, time: float, vx: float) -> None:
        self.vx.put(time, vx)

    def put_vy(self, time: float, vy: float) -> None:
        self.vy.put(time, vy)

    def get_vx(self, time: float) -> float:
        return self.vx.get(time)

    def get_vy(self, time: float) -> float:
        return self.vy.get(time)

    def __len__(self) -> int:
        return len(self.vx)

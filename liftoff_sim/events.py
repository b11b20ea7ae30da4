"""
Liftoff Telemetry Replay - Engine Event Detection

Finds engine cutoff/restart boundaries as trend reversals in the velocity
series:
  - MECO:  velocity stops rising   (main engine cutoff)
  - SES:   velocity stops falling  (second engine start)
  - SECO:  velocity stops rising   (second engine cutoff)

Scanning is cursor based: each call starts where the previous one stopped.
"""

import logging
import math
from typing import List, Tuple

from .profile import TimeSeries

logger = logging.getLogger(__name__)


def find_event_time(cursor: int, series: TimeSeries, rising: bool) -> int:
    """
    Scan forward for the point where the trend stops going the given way.

    With rising=True the series must first increase at least once after the
    cursor; the returned index is the first sample that then fails to
    increase (plateau or drop). rising=False mirrors this for a decreasing
    series. Leading samples that do not follow the trend (e.g. zero velocity
    on the pad) do not count as an event.

    Args:
        cursor: Index to start scanning from (compared against cursor - 1)
        series: Time-ordered series
        rising: Direction of the trend that is expected to end

    Returns:
        Index of the event sample, or len(series) if none was found
    """
    values = series.values()
    n = len(values)
    start = max(cursor, 1)

    trending = False
    for i in range(start, n):
        delta = values[i] - values[i - 1]
        if math.isnan(delta):
            continue

        following = delta > 0 if rising else delta < 0
        if following:
            trending = True
        elif trending:
            return i

    return n


def event_time(series: TimeSeries, index: int) -> float:
    """Time of the sample at index; +inf for the end-of-series sentinel."""
    times = series.times()
    if index >= len(times):
        return math.inf
    return times[index]


def find_mission_events(series: TimeSeries) -> Tuple[List[float], List[int]]:
    """
    Detect MECO, SES and SECO in a velocity series.

    Returns:
        (event times, event indices); events that were not found are +inf
        with index len(series)
    """
    meco = find_event_time(1, series, rising=True)
    ses = find_event_time(meco, series, rising=False)
    seco = find_event_time(ses, series, rising=True)

    indices = [meco, ses, seco]
    times = [event_time(series, i) for i in indices]

    for name, t in zip(("MECO", "SES", "SECO"), times):
        if math.isinf(t):
            logger.warning(f"{name} not found in velocity profile")
        else:
            logger.info(f"{name} detected at t={t:.2f}s")

    return times, indices

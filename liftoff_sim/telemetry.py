"""
Liftoff Telemetry Replay - Telemetry Ingestion

Reads SpaceXtract-style telemetry: one JSON object per line,

    {"time": 12.0, "velocity": 85.3, "altitude": 0.4}

with time in seconds, velocity in m/s and altitude in km. Altitude is
stored in meters.
"""

import json
import logging
from pathlib import Path
from typing import Iterator, Union

from .profile import FlightProfile
from .types import TelemetryRecord
from .utils import km_to_m

logger = logging.getLogger(__name__)


def parse_record(line: str) -> TelemetryRecord:
    """
    Parse one telemetry line.

    Raises:
        ValueError: If the line is not a JSON object with numeric
                    time, velocity and altitude fields
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        return TelemetryRecord(
            time=float(data["time"]),
            velocity=float(data["velocity"]),
            altitude=float(data["altitude"]),
        )
    except KeyError as e:
        raise ValueError(f"Missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise ValueError(f"Non-numeric field: {e}") from e


def iter_records(path: Union[str, Path]) -> Iterator[TelemetryRecord]:
    """Yield the valid records of a telemetry file, skipping bad lines."""
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield parse_record(line)
            except ValueError as e:
                logger.warning(f"{path}:{lineno}: skipping malformed record ({e})")


def parse_telem(raw: FlightProfile, path: Union[str, Path]) -> int:
    """
    Load a telemetry file into a raw profile.

    A missing or unreadable file is reported and leaves the profile empty.

    Args:
        raw: Profile to fill
        path: Telemetry file path

    Returns:
        Number of records loaded
    """
    path = Path(path)
    if not path.is_file():
        logger.warning(f"Cannot find file '{path}'")
        return 0

    count = 0
    try:
        for record in iter_records(path):
            raw.put_velocity(record["time"], record["velocity"])
            raw.put_altitude(record["time"], km_to_m(record["altitude"]))
            count += 1
    except OSError as e:
        logger.warning(f"Cannot read file '{path}': {e}")

    logger.info(f"Loaded {count} telemetry records from {path}")
    return count

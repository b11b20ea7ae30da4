"""
Liftoff Telemetry Replay - Flight Profile Reconstruction

Turns sparse, noisy telemetry into a smooth and self-consistent profile:

1. Fill-in:       linear interpolation onto the time-step grid
2. Segmentation:  MECO/SES/SECO split the mission into legs 0..3
3. Leg fit:       constrained least squares on legs 0 and 2, forced against
                  the boundary samples of leg 1
4. Leg-1 refit:   interpolating polynomial through the last samples of leg 0
                  and the first samples of leg 2 (continuous through the
                  third finite-difference derivative)
5. Reconcile:     replace altitude with the velocity integral until the
                  velocity is sufficient to reach every altitude sample
"""

import bisect
import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from . import constants as C
from .events import find_mission_events
from .polynomial import fit, force, lip
from .profile import FlightProfile, TimeSeries
from .utils import step_count
from .validation import ReconciliationError, find_velocity_shortfall

logger = logging.getLogger(__name__)


def interp_lin(dest: TimeSeries, raw: TimeSeries, time_step: float) -> None:
    """
    Linearly interpolate raw samples onto every multiple of time_step.

    Only grid times inside [first raw time, last raw time] are written, so
    queries outside the observed range stay NaN.

    Args:
        dest: Series to write the grid values into
        raw: Sparse source samples
        time_step: Grid spacing (s)
    """
    if time_step <= 0:
        raise ValueError(f"Time step must be positive, got {time_step}")
    if len(raw) == 0:
        return

    times, values = raw.to_arrays()
    k_first = int(math.ceil(times[0] / time_step - 1e-9))
    k_last = int(math.floor(times[-1] / time_step + 1e-9))
    if k_last < k_first:
        return

    grid = np.arange(k_first, k_last + 1) * time_step
    # np.interp clamps at the ends, which absorbs round-off in k * time_step
    filled = np.interp(grid, times, values)
    for t, v in zip(grid, filled):
        dest.put(float(t), float(v))


def collect(series: TimeSeries,
            events: Sequence[float]) -> Tuple[List[List[float]], List[List[float]]]:
    """
    Split a series into legs at the event times.

    Leg k holds samples with events[k-1] <= t < events[k]; NaN samples are
    dropped.

    Returns:
        (times per leg, values per leg), len(events) + 1 legs each
    """
    n_legs = len(events) + 1
    times: List[List[float]] = [[] for _ in range(n_legs)]
    legs: List[List[float]] = [[] for _ in range(n_legs)]

    for t, v in series.items():
        if math.isnan(v):
            continue
        leg = bisect.bisect_right(events, t)
        times[leg].append(t)
        legs[leg].append(v)

    return times, legs


def setup_flight_profile(raw: FlightProfile, fitted: FlightProfile,
                         base_order: int = C.BASE_FIT_ORDER,
                         leg_multiplicity: int = C.LEG_FORCE_MULTIPLICITY,
                         lip_multiplicity: int = C.LIP_FORCE_MULTIPLICITY) -> List[float]:
    """
    Interpolate, segment and curve-fit the raw telemetry into fitted.

    Args:
        raw: Raw telemetry profile
        fitted: Profile to write the conditioned data into
        base_order: Least-squares order before forced-point inflation
        leg_multiplicity: Leg-1 boundary samples forced onto legs 0 and 2
        lip_multiplicity: Samples taken from legs 0 and 2 to interpolate leg 1

    Returns:
        Event times [MECO, SES, SECO]; +inf for events that were not found
    """
    dt = fitted.time_step

    interp_lin(fitted.velocity, raw.velocity, dt)
    events, _ = find_mission_events(fitted.velocity)

    interp_lin(fitted.altitude, raw.altitude, dt)
    altitude = fitted.altitude
    times, legs = collect(altitude, events)

    # Step 1: least-squares fit of legs 0 and 2, each forced against the
    # adjacent end of leg 1. The leg after SECO keeps its interpolated data.
    for leg in range(len(events)):
        if leg == 1 or not times[leg]:
            continue

        if leg == 0:
            forced = force(altitude, times[1], leg_multiplicity)
        else:
            forced = force(altitude, times[1], -leg_multiplicity)

        poly = fit(base_order + len(forced), times[leg], legs[leg], forced)
        logger.debug(f"Leg {leg}: {len(times[leg])} samples, "
                     f"{len(forced)} forced, degree {poly.degree}")

        for t in times[leg]:
            fitted.put_altitude(t, max(poly.val(t), 0.0))

    # Step 2: leg 1 is interpolated from the already fitted neighbours
    if times[1] and times[0] and times[2]:
        forced = (force(altitude, times[0], -lip_multiplicity) +
                  force(altitude, times[2], lip_multiplicity))
        lip_fit = lip(forced)
        for t in times[1]:
            fitted.put_altitude(t, lip_fit.val(t))
    elif times[1]:
        logger.warning("Leg 1 has no fitted neighbour on both sides; "
                       "keeping interpolated altitude")

    return events


def adjust_altitude(orig: FlightProfile, fitted: FlightProfile,
                    break_even: float, max_time: float) -> None:
    """
    Pull the altitude onto the velocity integral up to a break-even time.

    Before break_even the altitude becomes the Euler integral of velocity.
    From break_even on, the original altitude increments are replayed on top
    of the integral so the rest of the profile connects to it; this stops
    as soon as the translated value is no longer below the fitted curve.

    Args:
        orig: Profile snapshot taken before reconciliation
        fitted: Profile being reconciled (modified in place)
        break_even: Time at which the integral and the altitude reconnect
        max_time: End of the integration range
    """
    dt = fitted.time_step
    last_t = 0.0
    last_alt = 0.0
    v_integral = 0.0
    for i in range(step_count(max_time, dt)):
        t = i * dt
        alt = fitted.get_altitude(t)
        v = fitted.get_velocity(t)

        # Euler integration of velocity
        if not math.isnan(v):
            v_integral += v * dt

        if t < break_even:
            fitted.put_altitude(t, v_integral)
            last_alt = v_integral
        else:
            target_error = orig.get_altitude(t) - orig.get_altitude(last_t)
            target_alt = last_alt + target_error
            if math.isnan(target_alt) or math.isnan(alt) or target_alt >= alt:
                break

            fitted.put_altitude(t, target_alt)
            last_alt = target_alt

        last_t = t


def reconcile_profile(orig: FlightProfile, fitted: FlightProfile,
                      max_time: float,
                      max_iterations: Optional[int] = None) -> int:
    """
    Fixed-point loop making velocity and altitude mutually consistent.

    Repeatedly finds the first velocity shortfall after the last corrected
    time and re-runs adjust_altitude with it as break-even. Every correction
    moves the corrected time strictly forward on the grid, so the loop ends
    after at most one correction per time step.

    Args:
        orig: Profile snapshot taken before reconciliation
        fitted: Profile being reconciled (modified in place)
        max_time: End of the scanned range (s)
        max_iterations: Correction ceiling; defaults to the step count

    Returns:
        Number of corrections applied

    Raises:
        ReconciliationError: If the ceiling is exceeded
    """
    total_steps = step_count(max_time, fitted.time_step)
    if max_iterations is None:
        max_iterations = total_steps

    last_corrected_time = 0.0
    iterations = 0
    while True:
        violation = find_velocity_shortfall(fitted, total_steps, after=last_corrected_time)
        if violation is None:
            break

        iterations += 1
        if iterations > max_iterations:
            raise ReconciliationError(
                f"Altitude reconciliation did not converge within "
                f"{max_iterations} corrections (last shortfall at t={violation:.2f}s)"
            )

        logger.debug(f"Reconciling altitude: break-even t={violation:.2f}s")
        last_corrected_time = violation
        adjust_altitude(orig, fitted, violation, max_time)

    logger.info(f"Altitude reconciled after {iterations} corrections "
                f"(last break-even t={last_corrected_time:.2f}s)")
    return iterations

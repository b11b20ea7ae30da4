"""
Liftoff Telemetry Replay - Polynomial Curve Fitting

This module implements the constrained least-squares polynomial fit used to
smooth each leg of the flight profile:

    minimize   ||A c - b||²
    subject to C c = d

solved in normal-equations (KKT) form:

    | 2AᵀA  Cᵀ | | c |   | 2Aᵀb |
    |  C    0  | | λ | = |  d   |

A holds the Vandermonde rows of the free samples, C the rows of the forced
points. Time is normalised to roughly [-1, 1] before building either matrix
so high orders over a several-hundred-second leg stay well conditioned.
"""

from typing import Iterable, List, NamedTuple, Sequence, Tuple

import numpy as np

from .linalg import SingularSystemError, solve_linear_system


class ForcedPoint(NamedTuple):
    """A (time, value) pair the fitted curve must pass through exactly."""
    time: float
    value: float


class Polynomial:
    """
    Polynomial in normalised time u = (t - shift) / scale.

    Coefficients are ordered highest power first (numpy.polyval order).
    Instances are immutable after construction.
    """

    def __init__(self, coefficients: Sequence[float], shift: float = 0.0,
                 scale: float = 1.0):
        coefficients = np.array(coefficients, dtype=np.float64)
        if coefficients.ndim != 1 or coefficients.size == 0:
            raise ValueError("Polynomial needs at least one coefficient")
        if scale == 0.0:
            raise ValueError("Polynomial time scale must be non-zero")
        coefficients.setflags(write=False)
        self._coefficients = coefficients
        self._shift = float(shift)
        self._scale = float(scale)

    @property
    def coefficients(self) -> np.ndarray:
        return self._coefficients

    @property
    def shift(self) -> float:
        return self._shift

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def degree(self) -> int:
        return self._coefficients.size - 1

    def val(self, t):
        """Evaluate at time t (scalar or array)."""
        u = (np.asarray(t, dtype=np.float64) - self._shift) / self._scale
        result = np.polyval(self._coefficients, u)
        if np.ndim(result) == 0:
            return float(result)
        return result

    __call__ = val

    def derivative(self) -> 'Polynomial':
        """d/dt of this polynomial."""
        if self.degree == 0:
            return Polynomial([0.0], self._shift, self._scale)
        return Polynomial(np.polyder(self._coefficients) / self._scale,
                          self._shift, self._scale)

    def __repr__(self) -> str:
        return (f"Polynomial(degree={self.degree}, shift={self._shift:g}, "
                f"scale={self._scale:g})")


def _normalisation(times: np.ndarray) -> Tuple[float, float]:
    """Shift/scale mapping the given times onto [-1, 1]."""
    lo = float(np.min(times))
    hi = float(np.max(times))
    shift = 0.5 * (lo + hi)
    scale = 0.5 * (hi - lo)
    if scale <= 0.0:
        scale = 1.0
    return shift, scale


def fit(order: int, times: Sequence[float], values: Sequence[float],
        forced_points: Iterable[ForcedPoint] = ()) -> Polynomial:
    """
    Least-squares polynomial fit with exact forced points.

    Each forced point consumes one degree of freedom, so callers pass an
    order already inflated by len(forced_points).

    Args:
        order: Polynomial degree
        times: Sample times
        values: Sample values
        forced_points: Points the curve must pass through exactly

    Returns:
        Fitted polynomial

    Raises:
        ValueError: If there is no input or the inputs are inconsistent
        SingularSystemError: If the system is degenerate
    """
    times = np.asarray(times, dtype=np.float64)
    values = np.asarray(values, dtype=np.float64)
    forced = list(forced_points)

    if times.shape != values.shape or times.ndim != 1:
        raise ValueError(
            f"times and values must be 1-D and equal length, "
            f"got {times.shape} and {values.shape}"
        )
    if order < 0:
        raise ValueError(f"Polynomial order must be non-negative, got {order}")

    n_total = times.size + len(forced)
    if n_total == 0:
        raise ValueError("Cannot fit a polynomial to empty input")

    # Not enough samples for the requested order
    if order + 1 > n_total:
        order = n_total - 1

    n_coeffs = order + 1
    n_forced = len(forced)
    if n_forced > n_coeffs:
        raise SingularSystemError(
            f"{n_forced} forced points over-constrain a degree {order} polynomial"
        )

    forced_t = np.array([p.time for p in forced], dtype=np.float64)
    forced_v = np.array([p.value for p in forced], dtype=np.float64)

    shift, scale = _normalisation(np.concatenate([times, forced_t]))

    a = np.vander((times - shift) / scale, n_coeffs)
    c = np.vander((forced_t - shift) / scale, n_coeffs)

    size = n_coeffs + n_forced
    kkt = np.zeros((size, size))
    kkt[:n_coeffs, :n_coeffs] = 2.0 * (a.T @ a)
    kkt[:n_coeffs, n_coeffs:] = c.T
    kkt[n_coeffs:, :n_coeffs] = c

    rhs = np.concatenate([2.0 * (a.T @ values), forced_v])

    solution = solve_linear_system(kkt, rhs)
    return Polynomial(solution[:n_coeffs], shift, scale)


def lip(forced_points: Iterable[ForcedPoint]) -> Polynomial:
    """
    Lagrange-style interpolating polynomial through the forced points only.

    The degree is len(forced_points) - 1, so the curve is fully determined
    by the continuity requirements at both ends of a leg.

    Raises:
        ValueError: If no points are given
        SingularSystemError: If two points share a time
    """
    forced = list(forced_points)
    if not forced:
        raise ValueError("Cannot interpolate through zero points")

    t = np.array([p.time for p in forced], dtype=np.float64)
    v = np.array([p.value for p in forced], dtype=np.float64)

    shift, scale = _normalisation(t)
    vander = np.vander((t - shift) / scale, len(forced))
    coefficients = solve_linear_system(vander, v)
    return Polynomial(coefficients, shift, scale)


def force(series, leg_times: Sequence[float], multiplicity: int) -> List[ForcedPoint]:
    """
    Select boundary samples of a leg as forced points.

    Passing through |multiplicity| consecutive grid samples pins the value
    and the finite-difference derivatives up to order |multiplicity| - 1.

    Args:
        series: TimeSeries (or anything with get(t)) holding the values
        leg_times: Ordered times of the leg
        multiplicity: Positive anchors at the start of the leg,
                      negative at its end

    Returns:
        Forced points in ascending time order
    """
    if multiplicity == 0 or not leg_times:
        return []

    count = abs(multiplicity)
    if multiplicity > 0:
        selected = leg_times[:count]
    else:
        selected = leg_times[-count:]

    return [ForcedPoint(float(t), float(series.get(t))) for t in selected]

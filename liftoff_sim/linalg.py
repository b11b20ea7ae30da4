"""
Liftoff Telemetry Replay - Linear Algebra

Dense linear system solver used by the polynomial fitter. A singular system
means the fit inputs were degenerate (duplicate times, too few distinct
samples), which the caller cannot recover from.
"""

import numpy as np


class SingularSystemError(ValueError):
    """Raised when a linear system has no unique solution."""
    pass


def solve_linear_system(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Solve a x = b for a square system.

    Args:
        a: Coefficient matrix (n x n)
        b: Right-hand side (n,)

    Returns:
        Solution vector x (n,)

    Raises:
        ValueError: If the shapes do not match
        SingularSystemError: If the matrix is rank deficient
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"Matrix must be square, got shape {a.shape}")
    if b.shape != (a.shape[0],):
        raise ValueError(f"Right-hand side must have shape ({a.shape[0]},), got {b.shape}")
    if not np.all(np.isfinite(a)) or not np.all(np.isfinite(b)):
        raise ValueError("Linear system contains non-finite values")

    # np.linalg.solve only raises on exact singularity; duplicate rows in
    # floating point slip through, so check the rank explicitly
    rank = np.linalg.matrix_rank(a)
    if rank < a.shape[0]:
        raise SingularSystemError(
            f"Singular system: rank {rank} < {a.shape[0]}"
        )

    try:
        return np.linalg.solve(a, b)
    except np.linalg.LinAlgError as e:
        raise SingularSystemError(str(e)) from e

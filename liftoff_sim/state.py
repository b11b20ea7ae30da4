"""
Liftoff Telemetry Replay - Motion State

This module defines the motion state owned by a body: the position and a
fixed number of its time derivatives (velocity, acceleration, jerk, ...).
"""

from dataclasses import dataclass, field
from typing import List, Optional

from . import constants as C
from .vector import Vector3


@dataclass
class MotionState:
    """
    Position and derivative history for one body.

    Attributes:
        derivatives: [position, velocity, acceleration, jerk, ...]
        time_step: Fixed integration step (s)
        t: Simulation time (s)
    """

    derivatives: List[Vector3] = field(
        default_factory=lambda: [Vector3.zero() for _ in range(C.DERIVATIVE_ORDER)]
    )
    time_step: float = C.TIME_STEP
    t: float = 0.0

    def __post_init__(self):
        """Validate derivative order and time step."""
        if len(self.derivatives) < 2:
            raise ValueError(
                f"Need at least position and velocity, got {len(self.derivatives)} derivatives"
            )
        if self.time_step <= 0:
            raise ValueError(f"Time step must be positive, got {self.time_step}")
        self.derivatives = list(self.derivatives)

    @property
    def order(self) -> int:
        """Number of tracked derivatives, position included."""
        return len(self.derivatives)

    @property
    def position(self) -> Vector3:
        return self.derivatives[0]

    @property
    def velocity(self) -> Vector3:
        return self.derivatives[1]

    @property
    def acceleration(self) -> Vector3:
        return self.derivatives[2] if self.order > 2 else Vector3.zero()

    @property
    def jerk(self) -> Vector3:
        return self.derivatives[3] if self.order > 3 else Vector3.zero()

    def copy(self) -> 'MotionState':
        """Create a copy of the state (Vector3 is immutable)."""
        return MotionState(list(self.derivatives), self.time_step, self.t)

    def __str__(self) -> str:
        """Human-readable state summary."""
        return (
            f"MotionState(t={self.t:.2f}s, "
            f"p={self.position}, "
            f"v={self.velocity.magnitude():.1f}m/s)"
        )


def create_initial_state(order: int = C.DERIVATIVE_ORDER,
                         time_step: float = C.TIME_STEP,
                         position: Optional[Vector3] = None) -> MotionState:
    """
    Create a state at rest.

    Args:
        order: Number of derivatives including position
        time_step: Integration step (s)
        position: Starting position (origin if None)
    """
    derivatives = [Vector3.zero() for _ in range(order)]
    if position is not None and order > 0:
        derivatives[0] = position
    return MotionState(derivatives=derivatives, time_step=time_step, t=0.0)

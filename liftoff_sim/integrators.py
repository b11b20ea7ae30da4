"""
Liftoff Telemetry Replay - Motion Integration

A Body owns a MotionState and advances it one fixed step per tick:

    pre_compute()     snapshot the derivative history, clear overrides
    compute_forces()  force dynamics only: acceleration = sum(F) / m
    compute_motion()  velocity from the dynamics, position += v * dt
    post_compute()    backward-difference cascade for acceleration, jerk, ...

The dynamics are a strategy chosen at construction:
- ForceDynamics:    Newtonian, named force set and a (draining) mass
- VelocityDynamics: kinematic, velocity is commanded every tick

Both share the finite-difference post step.
"""

from typing import Dict, Optional, Sequence

from . import constants as C
from .state import MotionState, create_initial_state
from .vector import Vector3, vector_sum


class VelocityDynamics:
    """Velocity set from outside each tick; no mass or force bookkeeping."""

    def compute_acceleration(self, state: MotionState) -> Optional[Vector3]:
        return None

    def advance_velocity(self, state: MotionState) -> Vector3:
        # Hold the last commanded velocity
        return state.velocity


class ForceDynamics:
    """
    Newtonian dynamics over a named force set.

    Callers assign forces by name before each compute step:
        dynamics.forces['weight'] = Vector3(0, -g * m, 0)
    """

    def __init__(self, mass: float, force_names: Sequence[str] = C.FORCE_NAMES):
        if mass < 0:
            raise ValueError(f"Mass must be non-negative, got {mass}")
        self._mass = float(mass)
        self.forces: Dict[str, Vector3] = {name: Vector3.zero() for name in force_names}

    def get_mass(self) -> float:
        return self._mass

    def set_mass(self, mass: float) -> None:
        self._mass = max(float(mass), 0.0)

    def drain_propellant(self, drain_mass: float) -> None:
        """Remove mass, floored at zero."""
        self._mass = max(self._mass - drain_mass, 0.0)

    def net_force(self) -> Vector3:
        return vector_sum(self.forces.values())

    def compute_acceleration(self, state: MotionState) -> Optional[Vector3]:
        """Newton's second law; zero for a massless body."""
        m = self.get_mass()
        if m < C.ZERO_TOLERANCE:
            return Vector3.zero()
        return self.net_force() / m

    def advance_velocity(self, state: MotionState) -> Vector3:
        return state.velocity + state.acceleration * state.time_step


class Body:
    """
    Rigid body integrated with a fixed step and N tracked derivatives.

    Attributes:
        state: Motion state owned by this body
        dynamics: ForceDynamics or VelocityDynamics
    """

    def __init__(self, dynamics, derivative_order: int = C.DERIVATIVE_ORDER,
                 time_step: float = C.TIME_STEP,
                 position: Optional[Vector3] = None):
        if derivative_order < 2:
            raise ValueError(
                f"Derivative order must be at least 2, got {derivative_order}"
            )
        if isinstance(dynamics, ForceDynamics) and derivative_order < 3:
            raise ValueError("Force dynamics need an acceleration slot (order >= 3)")
        self.dynamics = dynamics
        self.state = create_initial_state(derivative_order, time_step, position)
        self._last = list(self.state.derivatives)
        self._velocity_set = False

    @property
    def d_mot(self) -> tuple:
        """Read-only view of [position, velocity, acceleration, jerk, ...]."""
        return tuple(self.state.derivatives)

    @property
    def time_step(self) -> float:
        return self.state.time_step

    @property
    def position(self) -> Vector3:
        return self.state.position

    @property
    def velocity(self) -> Vector3:
        return self.state.velocity

    @property
    def acceleration(self) -> Vector3:
        return self.state.acceleration

    @property
    def jerk(self) -> Vector3:
        return self.state.jerk

    def get_mass(self) -> float:
        """Mass of a force-driven body; NaN for kinematic bodies."""
        get_mass = getattr(self.dynamics, "get_mass", None)
        return get_mass() if get_mass is not None else float("nan")

    def pre_compute(self) -> None:
        """Snapshot the derivative history before this tick's update."""
        self._last = list(self.state.derivatives)
        self._velocity_set = False

    def set_velocity(self, velocity: Vector3) -> None:
        """Override the velocity for this tick."""
        self.state.derivatives[1] = velocity
        self._velocity_set = True

    def compute_forces(self) -> None:
        """Write the dynamics' acceleration into the acceleration slot."""
        accel = self.dynamics.compute_acceleration(self.state)
        if accel is not None and self.state.order > 2:
            self.state.derivatives[2] = accel

    def compute_motion(self) -> None:
        """Advance velocity (unless overridden) and integrate position."""
        state = self.state
        if not self._velocity_set:
            state.derivatives[1] = self.dynamics.advance_velocity(state)
        state.derivatives[0] = state.position + state.velocity * state.time_step

    def post_compute(self) -> None:
        """
        Backward-difference cascade for the higher derivatives.

        d_k = (d_{k-1} - d_{k-1}^prev) / dt for k >= 2, so an overridden
        velocity flows into acceleration and jerk consistently.
        """
        state = self.state
        dt = state.time_step
        for k in range(2, state.order):
            state.derivatives[k] = (state.derivatives[k - 1] - self._last[k - 1]) / dt
        state.t += dt

    def tick(self) -> None:
        """Run one full integration step."""
        self.pre_compute()
        self.compute_forces()
        self.compute_motion()
        self.post_compute()


def create_force_driven_body(mass: float, derivative_order: int = C.DERIVATIVE_ORDER,
                             time_step: float = C.TIME_STEP) -> Body:
    """Body under Newtonian dynamics with the default named force set."""
    return Body(ForceDynamics(mass), derivative_order, time_step)


def create_velocity_driven_body(derivative_order: int = C.DERIVATIVE_ORDER,
                                time_step: float = C.TIME_STEP) -> Body:
    """Body whose velocity is commanded every tick."""
    return Body(VelocityDynamics(), derivative_order, time_step)

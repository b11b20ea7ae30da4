"""
Liftoff Telemetry Replay - Velocity Control

This module implements:
- PIDF controller state (setpoint, last measured state, gains)
- Velocity decomposition: turn an altitude error and a speed magnitude
  into horizontal and vertical velocity components
"""

import math

from .utils import signum
from .vector import Vector3


class PIDFController:
    """
    Proportional-integral-derivative-feedforward controller.

    The replay pass only uses the error and time step; the full output is
    available for closed-loop use.

    Attributes:
        setpoint: Target value (altitude, m)
        last_state: Most recent measured value
    """

    def __init__(self, time_step: float, kp: float = 0.0, ki: float = 0.0,
                 kd: float = 0.0, kf: float = 0.0):
        if time_step <= 0:
            raise ValueError(f"Time step must be positive, got {time_step}")
        self._time_step = float(time_step)
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.kf = kf
        self.setpoint = 0.0
        self.last_state = 0.0
        self._integral = 0.0
        self._last_error = None

    def get_time_step(self) -> float:
        return self._time_step

    def get_setpoint(self) -> float:
        return self.setpoint

    def set_setpoint(self, setpoint: float) -> None:
        self.setpoint = setpoint

    def get_last_state(self) -> float:
        return self.last_state

    def set_last_state(self, state: float) -> None:
        self.last_state = state

    def compute_error(self) -> float:
        """setpoint - last_state."""
        return self.setpoint - self.last_state

    def compute_output(self) -> float:
        """
        PIDF control law.

        u = Kp * e + Ki * ∫e dt + Kd * de/dt + Kf * setpoint
        """
        error = self.compute_error()
        self._integral += error * self._time_step

        if self._last_error is None:
            derivative = 0.0
        else:
            derivative = (error - self._last_error) / self._time_step
        self._last_error = error

        return (self.kp * error + self.ki * self._integral +
                self.kd * derivative + self.kf * self.setpoint)

    def reset(self) -> None:
        """Clear integral and derivative memory."""
        self._integral = 0.0
        self._last_error = None


def adjust_velocity(pidf: PIDFController, current_velocity: Vector3,
                    mag_v: float) -> Vector3:
    """
    Split a speed into horizontal and vertical components.

    The vertical component is the velocity needed to close the altitude
    error within one time step, limited to the speed itself; the horizontal
    component makes up the rest so |result| == |mag_v| (Pythagoras).

    Args:
        pidf: Controller holding setpoint (target altitude) and last state
        current_velocity: Current velocity vector (unused by the rule,
                          kept for closed-loop variants)
        mag_v: Speed to decompose (m/s)

    Returns:
        Velocity vector (x horizontal, y vertical)
    """
    if pidf.get_setpoint() == 0:
        # Zero setpoint: on the pad, so climb straight up
        return Vector3(0.0, mag_v, 0.0)

    target_y = pidf.compute_error() / pidf.get_time_step()

    # More vertical velocity needed than available: all of it goes up
    limit = abs(mag_v)
    if abs(target_y) > limit:
        target_y = signum(target_y) * limit

    target_x = math.sqrt(max(mag_v * mag_v - target_y * target_y, 0.0))
    return Vector3(target_x, target_y, 0.0)

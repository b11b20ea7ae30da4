"""
Liftoff Telemetry Replay - Engines and propellant mass.
"""

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from . import constants as C
from .integrators import ForceDynamics


@dataclass
class Engine:
    """
    Rocket engine with a throttle setting.

    Attributes:
        max_thrust: Thrust at full throttle (N)
        specific_impulse: Isp (s)
        throttle: Throttle setting, clamped to [0, 1]
    """

    max_thrust: float
    specific_impulse: float
    throttle: float = 0.0
    g0: float = C.G0

    def __post_init__(self):
        self.set_throttle(self.throttle)

    def set_throttle(self, throttle: float) -> None:
        self.throttle = float(np.clip(throttle, 0.0, 1.0))

    @property
    def thrust(self) -> float:
        """Current thrust (N)."""
        return self.max_thrust * self.throttle

    @property
    def prop_flow_rate(self) -> float:
        """Propellant mass flow at the current throttle (kg/s)."""
        return self.thrust / (self.specific_impulse * self.g0)


class Rocket(ForceDynamics):
    """
    Force-driven vehicle whose mass is dry mass plus remaining propellant.

    Propellant only ever decreases (drain_propellant, floored at zero).
    """

    def __init__(self, dry_mass: float, prop_mass: float,
                 engines: Sequence[Engine] = ()):
        if dry_mass < 0 or prop_mass < 0:
            raise ValueError(
                f"Masses must be non-negative, got dry={dry_mass}, prop={prop_mass}"
            )
        super().__init__(dry_mass + prop_mass)
        self.dry_mass = float(dry_mass)
        self.prop_mass = float(prop_mass)
        self.engines: List[Engine] = list(engines)

    def get_mass(self) -> float:
        return self.dry_mass + self.prop_mass

    def get_prop_mass(self) -> float:
        return self.prop_mass

    def set_mass(self, mass: float) -> None:
        """Set the total mass (e.g. stage separation), keeping the propellant."""
        self.dry_mass = max(float(mass) - self.prop_mass, 0.0)

    def drain_propellant(self, drain_mass: float) -> None:
        self.prop_mass = max(self.prop_mass - drain_mass, 0.0)

    def get_engines(self) -> List[Engine]:
        return self.engines

    def total_thrust(self) -> float:
        """Sum of engine thrust (N)."""
        return sum(e.thrust for e in self.engines)

    def set_throttle(self, throttle: float) -> None:
        for e in self.engines:
            e.set_throttle(throttle)


def compute_mass_flow_rate(engines: Sequence[Engine]) -> float:
    """Total propellant flow of the engines at their current throttle (kg/s)."""
    return sum(e.prop_flow_rate for e in engines)


def is_propellant_exhausted(rocket: Rocket) -> bool:
    """True if no propellant remains."""
    return rocket.get_prop_mass() <= 0.0


def create_engines(count: int = C.MERLIN_COUNT,
                   max_thrust: float = C.MERLIN_MAX_THRUST,
                   specific_impulse: float = C.MERLIN_ISP,
                   g0: float = C.G0) -> List[Engine]:
    """A cluster of identical engines, throttled to zero."""
    return [Engine(max_thrust, specific_impulse, 0.0, g0) for _ in range(count)]

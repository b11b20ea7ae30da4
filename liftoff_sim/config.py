"""
Liftoff Telemetry Replay - Configuration

This module provides a SimulationConfig dataclass for dependency injection,
allowing different mission and solver parameters to be passed without
modifying global constants.
"""

from dataclasses import dataclass
from typing import Optional

from . import constants as C
from .utils import step_count


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable configuration for simulation parameters.

    Using frozen=True ensures configs cannot be accidentally modified.
    Create new configs via dataclass replace() if needed.

    Section grouping:
      1. Simulation timing
      2. Curve fitting / reconciliation
      3. Vehicle masses
      4. Propulsion
      5. Aerodynamics
      6. Mission events
      7. Files
      8. Misc
    """

    # ── 1. Simulation timing ─────────────────────────────────────────────
    time_step: float = C.TIME_STEP
    max_time: float = C.MAX_TIME
    sim_duration: float = C.SIM_DURATION
    derivative_order: int = C.DERIVATIVE_ORDER

    # ── 2. Curve fitting / reconciliation ────────────────────────────────
    base_fit_order: int = C.BASE_FIT_ORDER
    leg_force_multiplicity: int = C.LEG_FORCE_MULTIPLICITY
    lip_force_multiplicity: int = C.LIP_FORCE_MULTIPLICITY
    # None -> one correction per time step at most
    max_reconcile_iterations: Optional[int] = None

    # ── 3. Vehicle masses ────────────────────────────────────────────────
    stage1_dry_mass: float = C.STAGE1_DRY_MASS
    stage1_fuel_mass: float = C.STAGE1_FUEL_MASS
    stage2_dry_mass: float = C.STAGE2_DRY_MASS
    stage2_fuel_mass: float = C.STAGE2_FUEL_MASS
    payload_mass: float = C.PAYLOAD_MASS

    # ── 4. Propulsion ────────────────────────────────────────────────────
    engine_max_thrust: float = C.MERLIN_MAX_THRUST
    engine_isp: float = C.MERLIN_ISP
    engine_count: int = C.MERLIN_COUNT

    # ── 5. Aerodynamics ──────────────────────────────────────────────────
    drag_coefficient: float = C.F9_CD
    frontal_area: float = C.F9_A
    g0: float = C.G0

    # ── 6. Mission events ────────────────────────────────────────────────
    meco_time: float = C.MECO_TIME

    # ── 7. Files ─────────────────────────────────────────────────────────
    telemetry_path: str = C.TELEMETRY_PATH

    # ── 8. Misc ──────────────────────────────────────────────────────────
    verbose: bool = True

    @property
    def total_mass(self) -> float:
        """Lift-off mass of the full stack (kg)."""
        return (self.stage1_dry_mass + self.stage1_fuel_mass +
                self.stage2_dry_mass + self.stage2_fuel_mass +
                self.payload_mass)

    @property
    def upper_mass(self) -> float:
        """Mass dropped at stage separation (kg)."""
        return self.stage2_dry_mass + self.stage2_fuel_mass + self.payload_mass

    @property
    def total_steps(self) -> int:
        """Number of replay/reconciliation steps."""
        return step_count(self.max_time, self.time_step)


def create_default_config() -> SimulationConfig:
    """Create a SimulationConfig with default values from constants."""
    return SimulationConfig()


def create_test_config(time_step: float = 1.0, max_time: float = 30.0,
                       sim_duration: float = 20.0,
                       **overrides) -> SimulationConfig:
    """Create a fast config suitable for testing.

    Any keyword arg accepted by SimulationConfig can be passed as an override.
    """
    defaults = dict(time_step=time_step, max_time=max_time,
                    sim_duration=sim_duration, verbose=False)
    defaults.update(overrides)
    return SimulationConfig(**defaults)

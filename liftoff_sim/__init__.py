"""
Liftoff Telemetry Replay Package

Reconstructs a smooth flight profile from sparse launch telemetry and
drives a multi-derivative rigid-body integrator with it.

Modules:
    - constants: Physical constants and vehicle parameters
    - config: Simulation configuration
    - polynomial: Constrained least-squares fitting
    - profile: Time series and flight profiles
    - events: MECO/SES/SECO detection
    - reconstruction: Profile conditioning and reconciliation
    - integrators: Force- and velocity-driven bodies
    - mass: Engines and propellant bookkeeping
    - forces: Atmosphere, drag, weight, normal and thrust forces
    - control: PIDF controller and velocity decomposition
    - telemetry: Telemetry file ingestion
    - validation: Consistency checks
    - main: Two-pass mission driver
"""

from .config import SimulationConfig, create_default_config, create_test_config
from .integrators import Body, ForceDynamics, VelocityDynamics
from .main import FlightLog, MissionResult, run_mission
from .profile import FlightProfile, TimeSeries, VelocityFlightProfile
from .vector import Vector3

__version__ = "1.0.0"

__all__ = [
    'Body',
    'FlightLog',
    'FlightProfile',
    'ForceDynamics',
    'MissionResult',
    'SimulationConfig',
    'TimeSeries',
    'Vector3',
    'VelocityDynamics',
    'VelocityFlightProfile',
    'create_default_config',
    'create_test_config',
    'run_mission',
]

"""
Liftoff Telemetry Replay - Physical Constants and Vehicle Parameters

This module defines the physical constants, vehicle specifications and
solver defaults used throughout the simulation.

VALUES FROM: SpaceX JCSAT-18/KACIFIC1 replay (Falcon 9 Block 5)
"""

import math

# =============================================================================
# EARTH PARAMETERS
# =============================================================================

# Standard gravitational acceleration at sea level (m/s^2)
G0 = 9.80665

# =============================================================================
# VEHICLE PARAMETERS
# Source: https://www.spaceflightinsider.com/hangar/falcon-9/
# =============================================================================

STAGE1_DRY_MASS = 25600.0    # kg
STAGE1_FUEL_MASS = 395700.0  # kg
STAGE2_DRY_MASS = 3900.0     # kg
STAGE2_FUEL_MASS = 92670.0   # kg
PAYLOAD_MASS = 6800.0        # kg

TOTAL_MASS = (STAGE1_DRY_MASS + STAGE1_FUEL_MASS +
              STAGE2_DRY_MASS + STAGE2_FUEL_MASS + PAYLOAD_MASS)

# Everything that is not first stage propellant rides along until MECO
ROCKET_DRY_MASS = STAGE1_DRY_MASS + STAGE2_DRY_MASS + PAYLOAD_MASS + STAGE2_FUEL_MASS
ROCKET_PROP_MASS = STAGE1_FUEL_MASS

# =============================================================================
# AERODYNAMICS
# =============================================================================

# Coefficient of drag (subsonic, at launch)
F9_CD = 0.25

# Frontal surface area (m^2), 5.2 m fairing diameter
F9_A = math.pi * 2.6 * 2.6

# =============================================================================
# PROPULSION - Merlin 1D
# =============================================================================

MERLIN_MAX_THRUST = 854000.0  # N at sea level
MERLIN_ISP = 282.0            # s
MERLIN_COUNT = 9

# =============================================================================
# MISSION EVENTS
# =============================================================================

MECO_TIME = 155.0  # s

# =============================================================================
# SIMULATION PARAMETERS
# =============================================================================

TICKS_PER_SEC = 1.0
TIME_STEP = 1.0 / TICKS_PER_SEC  # s

# Time range for the replay pass and the velocity/altitude reconciliation
MAX_TIME = 500.0  # s

# Duration of the rocket model pass
SIM_DURATION = 400.0  # s

# Position, velocity, acceleration, jerk
DERIVATIVE_ORDER = 4

# =============================================================================
# CURVE FITTING
# =============================================================================

# Least-squares order for each leg before forced-point inflation
BASE_FIT_ORDER = 4

# Boundary samples shared between leg 1 and its neighbours
LEG_FORCE_MULTIPLICITY = 1

# Boundary samples used to interpolate leg 1 (value, slope, curvature)
LIP_FORCE_MULTIPLICITY = 3

# Forced-point residual tolerance (relative to max(1, |value|))
FORCED_POINT_TOL = 1e-6

# =============================================================================
# FORCES
# =============================================================================

FORCE_WEIGHT = "weight"
FORCE_NORMAL = "normal"
FORCE_DRAG = "drag"
FORCE_THRUST = "thrust"

FORCE_NAMES = (FORCE_WEIGHT, FORCE_NORMAL, FORCE_DRAG, FORCE_THRUST)

# =============================================================================
# TOLERANCES
# =============================================================================

ZERO_TOLERANCE = 1e-12

# =============================================================================
# FILES
# =============================================================================

TELEMETRY_PATH = "./data/data.json"


# =============================================================================
# PARAMETER SUMMARY (for logging)
# =============================================================================

def print_parameters():
    """Print key simulation parameters."""
    print("=" * 60)
    print("LIFTOFF TELEMETRY REPLAY - PARAMETERS")
    print("=" * 60)
    print(f"Lift-off mass:       {TOTAL_MASS:,.0f} kg")
    print(f"Stage 1 propellant:  {STAGE1_FUEL_MASS:,.0f} kg")
    print(f"Engines:             {MERLIN_COUNT} x {MERLIN_MAX_THRUST/1000:.0f} kN, Isp {MERLIN_ISP:.0f} s")
    print(f"Drag:                Cd={F9_CD}, A={F9_A:.2f} m^2")
    print(f"MECO:                t={MECO_TIME:.0f} s")
    print(f"Time step:           {TIME_STEP} s")
    print("=" * 60)

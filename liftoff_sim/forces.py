"""
Liftoff Telemetry Replay - Force Computations

This module implements the forces acting on the vehicle in the vertical
plane (x downrange, y up):
- Earth atmosphere (NASA GRC piecewise model)
- Aerodynamic drag
- Weight and ground normal force
- Thrust along a commanded direction
"""

import math
from typing import Mapping

from . import constants as C
from .vector import Vector3


# =============================================================================
# ATMOSPHERE MODEL (NASA Glenn Research Center, Earth atmosphere model)
# https://www.grc.nasa.gov/WWW/K-12/airplane/atmosmet.html
# =============================================================================

def _rho_ideal_state(p: float, T: float) -> float:
    """Density from pressure (kPa) and temperature (deg C)."""
    return p / (0.2869 * (T + 273.1))


def _temperature_pressure(altitude: float) -> tuple:
    """(temperature deg C, pressure kPa) at altitude (m)."""
    h = max(0.0, float(altitude))
    if h >= 25000.0:
        # Upper stratosphere
        T = -131.21 + 0.00299 * h
        p = 2.488 * ((T + 273.1) / 216.6) ** -11.388
    elif h >= 11000.0:
        # Lower stratosphere
        T = -56.46
        p = 22.65 * math.exp(1.73 - 0.000157 * h)
    else:
        # Troposphere
        T = 15.04 - 0.00649 * h
        p = 101.29 * ((T + 273.1) / 288.08) ** 5.256
    return T, p


def calc_pressure_earth(altitude: float) -> float:
    """
    Atmospheric pressure.

    Args:
        altitude: Altitude above sea level (m); negative treated as 0

    Returns:
        Pressure (kPa)
    """
    return _temperature_pressure(altitude)[1]


def calc_rho_earth(altitude: float) -> float:
    """
    Atmospheric density.

    Args:
        altitude: Altitude above sea level (m); negative treated as 0

    Returns:
        Density (kg/m^3)
    """
    T, p = _temperature_pressure(altitude)
    return _rho_ideal_state(p, T)


# =============================================================================
# DRAG
# https://www.grc.nasa.gov/WWW/K-12/airplane/drageq.html
# =============================================================================

def calc_drag(cd: float, rho: float, v: float, area: float) -> float:
    """Drag equation D = Cd * rho * v^2 / 2 * A (N)."""
    return cd * rho * v * v / 2.0 * area


def calc_drag_earth(cd: float, altitude: float, v: float, area: float) -> float:
    """Drag magnitude at altitude for speed v (N)."""
    return calc_drag(cd, calc_rho_earth(altitude), v, area)


def compute_drag_force(position: Vector3, velocity: Vector3,
                       cd: float = C.F9_CD, area: float = C.F9_A) -> Vector3:
    """
    Drag vector opposing the velocity.

    Returns the zero vector when the body is at rest.
    """
    v_mag = velocity.magnitude()
    if v_mag == 0.0 or math.isnan(v_mag):
        return Vector3.zero()
    drag = calc_drag_earth(cd, position.y, v_mag, area)
    return Vector3(-velocity.x * drag / v_mag, -velocity.y * drag / v_mag, 0.0)


# =============================================================================
# WEIGHT / NORMAL / THRUST
# =============================================================================

def compute_weight_force(mass: float, g0: float = C.G0) -> Vector3:
    """Weight in the vertical plane (N)."""
    return Vector3(0.0, -g0 * mass, 0.0)


def compute_normal_force(position: Vector3, forces: Mapping[str, Vector3],
                         exclude: str = C.FORCE_NORMAL) -> Vector3:
    """
    Ground reaction force.

    Below ground level the ground pushes back against every downward force
    component; above ground there is no contact.
    """
    normal_y = 0.0
    if position.y < 0.0:
        for name, force in forces.items():
            if name == exclude:
                continue
            if force.y < 0.0:
                normal_y -= force.y
    return Vector3(0.0, normal_y, 0.0)


def compute_thrust_force(thrust: float, direction: Vector3) -> Vector3:
    """
    Thrust vector along a direction.

    A zero (or NaN) direction falls back to straight up.
    """
    unit = direction.normalized()
    if unit.magnitude() == 0.0 or math.isnan(unit.magnitude()):
        return Vector3(0.0, thrust, 0.0)
    return unit * thrust

"""
Liftoff Telemetry Replay - Main Entry Point

Two simulation passes, each stepping on its own thread:

1. Telemetry replay: the telemetry is conditioned into a smooth profile and
   replayed through a velocity-driven body. The speed is split into
   horizontal/vertical components so the body tracks the altitude, which
   yields a (vx, vy) velocity profile.
2. Rocket model: a force-driven rocket with real masses and engines is
   throttled to follow that velocity profile.

Pass 2 waits on pass 1's completion signal before it reads the profile.

Coordinate frame: x downrange, y altitude (vertical plane).
"""

import logging
import math
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from . import constants as C
from .config import SimulationConfig, create_default_config
from .control import PIDFController, adjust_velocity
from .forces import (
    calc_drag_earth, compute_drag_force, compute_normal_force,
    compute_thrust_force, compute_weight_force,
)
from .integrators import Body, create_velocity_driven_body
from .mass import Rocket, compute_mass_flow_rate, create_engines, is_propellant_exhausted
from .profile import FlightProfile, VelocityFlightProfile
from .reconstruction import reconcile_profile, setup_flight_profile
from .sync import CompletionSignal, RepaintSignal
from .telemetry import parse_telem
from .types import ThrottleCommand
from .utils import is_nan, step_count
from .vector import Vector3

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class FlightLog:
    """Container for per-tick simulation data."""
    time: List[float] = field(default_factory=list)
    position_x: List[float] = field(default_factory=list)
    position_y: List[float] = field(default_factory=list)
    velocity_x: List[float] = field(default_factory=list)
    velocity_y: List[float] = field(default_factory=list)
    speed: List[float] = field(default_factory=list)
    acceleration: List[float] = field(default_factory=list)
    jerk: List[float] = field(default_factory=list)
    mass: List[float] = field(default_factory=list)
    throttle: List[float] = field(default_factory=list)
    drag: List[float] = field(default_factory=list)

    def append(self, t: float, body: Body, mass: float = math.nan,
               throttle: float = math.nan, drag: float = math.nan):
        """Log data from current timestep."""
        self.time.append(t)
        self.position_x.append(body.position.x)
        self.position_y.append(body.position.y)
        self.velocity_x.append(body.velocity.x)
        self.velocity_y.append(body.velocity.y)
        self.speed.append(body.velocity.magnitude())
        self.acceleration.append(body.acceleration.magnitude())
        self.jerk.append(body.jerk.magnitude())
        self.mass.append(mass)
        self.throttle.append(throttle)
        self.drag.append(drag)

    def __len__(self) -> int:
        return len(self.time)

    def as_matrix(self) -> np.ndarray:
        """
        Plot data as an (n, 4, 2) array.

        Channels: position (downrange, altitude), speed, |acceleration| and
        |jerk|, the last three as (time, value).
        """
        n = len(self.time)
        data = np.zeros((n, 4, 2))
        if n == 0:
            return data
        t = np.asarray(self.time)
        data[:, 0, 0] = self.position_x
        data[:, 0, 1] = self.position_y
        data[:, 1, 0] = t
        data[:, 1, 1] = self.speed
        data[:, 2, 0] = t
        data[:, 2, 1] = self.acceleration
        data[:, 3, 0] = t
        data[:, 3, 1] = self.jerk
        return data


@dataclass
class MissionResult:
    """Results of both simulation passes."""
    raw: FlightProfile
    fitted: FlightProfile
    profile: VelocityFlightProfile
    events: List[float] = field(default_factory=list)
    corrections: int = 0
    replay_log: FlightLog = field(default_factory=FlightLog)
    rocket_log: FlightLog = field(default_factory=FlightLog)


def build_flight_profile(raw: FlightProfile,
                         config: Optional[SimulationConfig] = None
                         ) -> Tuple[FlightProfile, List[float], int]:
    """
    Condition raw telemetry into a reconciled flight profile.

    Returns:
        (fitted profile, event times, reconciliation corrections)
    """
    cfg = config or create_default_config()
    fitted = FlightProfile(cfg.time_step)
    events = setup_flight_profile(
        raw, fitted,
        base_order=cfg.base_fit_order,
        leg_multiplicity=cfg.leg_force_multiplicity,
        lip_multiplicity=cfg.lip_force_multiplicity,
    )

    # Snapshot before reconciliation; its altitude increments are replayed
    # after each break-even
    orig = fitted.copy()
    corrections = reconcile_profile(orig, fitted, cfg.max_time,
                                    cfg.max_reconcile_iterations)
    return fitted, events, corrections


def run_telemetry_profile(fitted: FlightProfile, profile: VelocityFlightProfile,
                          config: Optional[SimulationConfig] = None,
                          latch: Optional[CompletionSignal] = None,
                          repaint: Optional[RepaintSignal] = None) -> FlightLog:
    """
    Replay the conditioned profile through a velocity-driven body.

    Args:
        fitted: Reconciled flight profile
        profile: Receives the body's (vx, vy) per tick
        config: Simulation configuration
        latch: Released when the replay ends (also on error)
        repaint: Notified with the tick index after every tick

    Returns:
        Per-tick log of the replay
    """
    cfg = config or create_default_config()
    dt = cfg.time_step
    body = create_velocity_driven_body(cfg.derivative_order, dt)
    pidf = PIDFController(dt)
    log = FlightLog()

    try:
        for i in range(cfg.total_steps):
            t = i * dt

            body.pre_compute()
            pidf.set_last_state(body.position.y)

            telem_velocity = fitted.get_velocity(t)
            telem_alt = fitted.get_altitude(t)
            if not is_nan(telem_velocity, telem_alt):
                pidf.set_setpoint(telem_alt)
                body.set_velocity(adjust_velocity(pidf, body.velocity, telem_velocity))

            # Vertical drag this velocity would see (diagnostic only)
            drag_y = calc_drag_earth(cfg.drag_coefficient, body.position.y,
                                     body.velocity.y, cfg.frontal_area)

            body.compute_motion()
            body.post_compute()

            log.append(t, body, drag=drag_y)
            profile.put_vx(t, body.velocity.x)
            profile.put_vy(t, body.velocity.y)

            if repaint is not None:
                repaint.notify(i)
    finally:
        if latch is not None:
            latch.release()

    logger.info(f"Telemetry replay complete: {len(log)} ticks, "
                f"final altitude {body.position.y/1000:.2f} km, "
                f"downrange {body.position.x/1000:.2f} km")
    return log


def compute_throttle_command(rocket: Rocket, velocity: Vector3,
                             vx: float, vy: float, dt: float) -> ThrottleCommand:
    """
    Throttle needed to reach the target velocity within one step.

    Args:
        rocket: Vehicle (mass and engines)
        velocity: Current velocity
        vx, vy: Target velocity components (m/s)
        dt: Time step (s)
    """
    delta_v = Vector3(vx - velocity.x, vy - velocity.y, 0.0)
    accel = delta_v.magnitude() / dt

    engines = rocket.get_engines()
    throttle = 0.0
    if engines:
        force_per_engine = rocket.get_mass() * accel / len(engines)
        throttle = float(np.clip(force_per_engine / engines[0].max_thrust, 0.0, 1.0))

    return {
        'throttle': throttle,
        'thrust_direction': delta_v.normalized(),
        'delta_v': delta_v,
        'accel': accel,
    }


def run_test_rocket(profile: VelocityFlightProfile,
                    config: Optional[SimulationConfig] = None,
                    latch: Optional[CompletionSignal] = None,
                    repaint: Optional[RepaintSignal] = None) -> FlightLog:
    """
    Fly a force-driven rocket model along the replayed velocity profile.

    Args:
        profile: Target (vx, vy) profile from the replay pass
        config: Simulation configuration
        latch: Waited on before the profile is read
        repaint: Notified with the tick index after every tick

    Returns:
        Per-tick log of the model
    """
    if latch is not None:
        latch.wait()

    cfg = config or create_default_config()
    dt = cfg.time_step

    engines = create_engines(cfg.engine_count, cfg.engine_max_thrust,
                             cfg.engine_isp, cfg.g0)
    rocket = Rocket(cfg.total_mass - cfg.stage1_fuel_mass, cfg.stage1_fuel_mass, engines)
    body = Body(rocket, cfg.derivative_order, dt)
    forces = rocket.forces

    # On the pad: weight balanced by the ground
    forces[C.FORCE_WEIGHT] = compute_weight_force(rocket.get_mass(), cfg.g0)
    forces[C.FORCE_NORMAL] = Vector3(0.0, cfg.g0 * rocket.get_mass(), 0.0)

    log = FlightLog()
    separated = False
    depleted = False

    logger.info(f"Starting rocket model: mass={rocket.get_mass():.0f}kg, "
                f"engines={len(engines)}, duration={cfg.sim_duration}s")

    for i in range(step_count(cfg.sim_duration, dt)):
        t = i * dt

        body.pre_compute()
        p = body.position
        v = body.velocity

        # Ground contact
        if p.y < 0.0 and v.y < 0.0:
            body.set_velocity(Vector3.zero())
        forces[C.FORCE_NORMAL] = compute_normal_force(p, forces)

        forces[C.FORCE_WEIGHT] = compute_weight_force(rocket.get_mass(), cfg.g0)
        forces[C.FORCE_DRAG] = compute_drag_force(p, v, cfg.drag_coefficient,
                                                  cfg.frontal_area)

        if not depleted and is_propellant_exhausted(rocket):
            logger.info(f"{t:.2f}s: No propellant")
            depleted = True
            rocket.set_throttle(0.0)

        vx = profile.get_vx(t)
        vy = profile.get_vy(t)
        command = None
        if not depleted and not is_nan(vx, vy):
            command = compute_throttle_command(rocket, v, vx, vy, dt)
            rocket.set_throttle(command['throttle'])

        if not separated and t >= cfg.meco_time:
            logger.info(f"MECO at t={t:.2f}s: remaining propellant = "
                        f"{rocket.get_prop_mass():.1f} kg")
            # Second stage and payload leave
            rocket.set_mass(rocket.get_mass() - cfg.upper_mass)
            separated = True

        if t > cfg.meco_time:
            rocket.set_throttle(0.0)

        thrust_net = rocket.total_thrust()
        rocket.drain_propellant(compute_mass_flow_rate(engines) * dt)

        direction = command['thrust_direction'] if command is not None else Vector3(0.0, 1.0, 0.0)
        forces[C.FORCE_THRUST] = compute_thrust_force(thrust_net, direction)

        body.compute_forces()
        body.compute_motion()
        body.post_compute()

        throttle = engines[0].throttle if engines else 0.0
        log.append(t, body, mass=rocket.get_mass(), throttle=throttle,
                   drag=forces[C.FORCE_DRAG].magnitude())

        if repaint is not None:
            repaint.notify(i)

    logger.info(f"Rocket model complete: {len(log)} ticks, "
                f"final altitude {body.position.y/1000:.2f} km, "
                f"mass {rocket.get_mass():.0f} kg")
    return log


def run_mission(config: Optional[SimulationConfig] = None,
                telemetry_path: Optional[str] = None,
                raw: Optional[FlightProfile] = None,
                replay_repaint: Optional[RepaintSignal] = None,
                rocket_repaint: Optional[RepaintSignal] = None) -> MissionResult:
    """
    Run the telemetry replay and the rocket model on two threads.

    Args:
        config: Simulation configuration
        telemetry_path: Telemetry file (defaults to config.telemetry_path);
                        ignored when raw is given
        raw: Pre-loaded raw telemetry
        replay_repaint: Tick notifications for the replay pass
        rocket_repaint: Tick notifications for the rocket pass

    Returns:
        MissionResult with profiles and logs of both passes
    """
    cfg = config or create_default_config()
    start = time.time()

    if raw is None:
        raw = FlightProfile(cfg.time_step)
        parse_telem(raw, telemetry_path or cfg.telemetry_path)

    result = MissionResult(raw=raw, fitted=FlightProfile(cfg.time_step),
                           profile=VelocityFlightProfile(cfg.time_step))
    latch = CompletionSignal()
    errors: List[BaseException] = []

    def replay_pass():
        try:
            fitted, events, corrections = build_flight_profile(raw, cfg)
            result.fitted = fitted
            result.events = events
            result.corrections = corrections
            result.replay_log = run_telemetry_profile(
                fitted, result.profile, cfg, latch, replay_repaint
            )
        except Exception as e:
            logger.error(f"Telemetry replay failed: {e}", exc_info=True)
            errors.append(e)
        finally:
            latch.release()

    def rocket_pass():
        try:
            result.rocket_log = run_test_rocket(result.profile, cfg, latch, rocket_repaint)
        except Exception as e:
            logger.error(f"Rocket model failed: {e}", exc_info=True)
            errors.append(e)

    threads = [
        threading.Thread(target=replay_pass, name="telemetry-replay"),
        threading.Thread(target=rocket_pass, name="rocket-model"),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    if errors:
        raise errors[0]

    logger.info(f"Mission complete in {time.time() - start:.2f}s")
    return result


def print_summary(result: MissionResult) -> None:
    """Print a short summary of both passes."""
    print("\n" + "=" * 60)
    print("MISSION SUMMARY")
    print("=" * 60)
    names = ("MECO", "SES", "SECO")
    for name, t in zip(names, result.events):
        shown = "not found" if math.isinf(t) else f"{t:.1f} s"
        print(f"{name:5s}: {shown}")
    print(f"Reconciliation corrections: {result.corrections}")
    for label, log in (("Replay", result.replay_log), ("Model", result.rocket_log)):
        if len(log) == 0:
            print(f"{label}: no data")
            continue
        print(f"{label}: t={log.time[-1]:.0f}s, "
              f"alt={log.position_y[-1]/1000:.2f}km, "
              f"downrange={log.position_x[-1]/1000:.2f}km, "
              f"v={log.speed[-1]:.1f}m/s")
    print("=" * 60 + "\n")

"""
Trajectory Integrator
=====================
Fixed-step 4th-order Runge-Kutta integration of the point-mass equations
of motion in the line-of-sight frame:

    dx/dt = v
    dv/dt = a(v)  (from compute_acceleration)

State is [x, y, z, vx, vy, vz] in feet and fps. The bullet leaves the bore
``sight_height`` below the sight line, inclined by the bore angle. The loop
stops once downrange distance reaches the farthest requested distance, or
earlier on the iteration cap, on falling below the minimum velocity, or on
a non-finite state.

Output: a Trajectory holding every integration sample. Each call builds
a fresh, read-only Trajectory; nothing is shared between calls.
"""

import math
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import numpy as np

from .atmosphere import AtmosphericConditions, STANDARD_ATMOSPHERE
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .exceptions import OutOfRangeDistance
from .logger import logger
from .projectile import AmmoConfig, ShotParameters, compute_acceleration
from .units import FEET_PER_YARD, INCHES_PER_FOOT


class TrajectoryPoint(NamedTuple):
    """One trajectory sample."""
    distance: float   # yd downrange
    time: float       # s
    velocity: float   # fps
    drop: float       # in, relative to the sight line (− below)
    windage: float    # in, lateral drift (+ right)
    energy: float     # ft-lb


# Termination reasons
STOP_DISTANCE = 'distance'
STOP_ITERATIONS = 'iteration_cap'
STOP_VELOCITY = 'minimum_velocity'
STOP_NON_FINITE = 'non_finite'


@dataclass
class Trajectory:
    """Complete integration output."""
    ammo: AmmoConfig
    atmosphere: AtmosphericConditions
    shot: Optional[ShotParameters]
    bore_angle: float         # rad, relative to the sight line
    dt: float                 # timestep used
    stop_reason: str

    # Arrays, each of shape (N,)
    time: np.ndarray
    x: np.ndarray             # ft downrange
    y: np.ndarray             # ft from the sight line
    z: np.ndarray             # ft crossrange
    vx: np.ndarray
    vy: np.ndarray
    vz: np.ndarray
    speed: np.ndarray

    def __len__(self) -> int:
        return len(self.time)

    @property
    def distance(self) -> np.ndarray:
        """Downrange distance of every sample (yd)."""
        return self.x / FEET_PER_YARD

    @property
    def drop(self) -> np.ndarray:
        """Height relative to the sight line (in)."""
        return self.y * INCHES_PER_FOOT

    @property
    def windage(self) -> np.ndarray:
        """Lateral drift (in)."""
        return self.z * INCHES_PER_FOOT

    @property
    def energy(self) -> np.ndarray:
        return 0.5 * self.ammo.mass_slugs * self.speed ** 2

    @property
    def max_distance(self) -> float:
        """Farthest integrated distance (yd)."""
        return float(self.x[-1]) / FEET_PER_YARD

    @property
    def flight_time(self) -> float:
        return float(self.time[-1])

    @property
    def max_ordinate(self) -> float:
        """Highest point above the sight line (in)."""
        return float(np.max(self.y)) * INCHES_PER_FOOT

    @property
    def max_ordinate_distance(self) -> float:
        """Distance (yd) of the highest point above the sight line."""
        return float(self.x[int(np.argmax(self.y))]) / FEET_PER_YARD

    @property
    def points(self) -> List[TrajectoryPoint]:
        """Every sample as a TrajectoryPoint, in increasing distance."""
        return [
            TrajectoryPoint(float(d), float(t), float(v), float(dr), float(w), float(e))
            for d, t, v, dr, w, e in zip(self.distance, self.time, self.speed,
                                         self.drop, self.windage, self.energy)
        ]

    def at_distance(self, distance: float) -> TrajectoryPoint:
        """
        Interpolated sample at ``distance`` yd.

        Raises OutOfRangeDistance past the last sample; never extrapolates.
        """
        target_ft = distance * FEET_PER_YARD
        if target_ft > self.x[-1]:
            raise OutOfRangeDistance(distance, self.max_distance)
        if target_ft < 0.0:
            raise ValueError(f"distance must be >= 0, got {distance!r}")

        i = int(np.searchsorted(self.x, target_ft, side='left'))
        if self.x[i] == target_ft or i == 0:
            return self._point(i)

        # Linear interpolation between the bracketing samples
        frac = (target_ft - self.x[i - 1]) / (self.x[i] - self.x[i - 1])

        def lerp(arr):
            return float(arr[i - 1] + frac * (arr[i] - arr[i - 1]))

        speed = lerp(self.speed)
        return TrajectoryPoint(
            distance=distance,
            time=lerp(self.time),
            velocity=speed,
            drop=lerp(self.y) * INCHES_PER_FOOT,
            windage=lerp(self.z) * INCHES_PER_FOOT,
            energy=self.ammo.energy(speed),
        )

    def _point(self, i: int) -> TrajectoryPoint:
        speed = float(self.speed[i])
        return TrajectoryPoint(
            distance=float(self.x[i]) / FEET_PER_YARD,
            time=float(self.time[i]),
            velocity=speed,
            drop=float(self.y[i]) * INCHES_PER_FOOT,
            windage=float(self.z[i]) * INCHES_PER_FOOT,
            energy=self.ammo.energy(speed),
        )

    def summary(self) -> str:
        """Human-readable summary string."""
        end = self._point(len(self) - 1)
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY — {self.ammo.drag_model} BC {self.ammo.ballistic_coefficient:<24.3f}║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Muzzle vel   : {self.ammo.muzzle_velocity:>10.0f} fps{'':<22s} ║",
            f"║  Bore angle   : {math.degrees(self.bore_angle) * 60:>10.2f} MOA{'':<22s} ║",
            f"║  Timestep     : {self.dt:<36.4f} ║",
            f"║  Stop reason  : {self.stop_reason:<36s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Range        : {end.distance:>10.1f} yd{'':<23s} ║",
            f"║  Flight time  : {end.time:>10.3f} s{'':<24s} ║",
            f"║  Velocity     : {end.velocity:>10.0f} fps{'':<22s} ║",
            f"║  Energy       : {end.energy:>10.0f} ft-lb{'':<20s} ║",
            f"║  Drop         : {end.drop:>10.1f} in{'':<23s} ║",
            f"║  Drift        : {end.windage:>10.1f} in{'':<23s} ║",
            f"║  Max ordinate : {self.max_ordinate:>10.2f} in{'':<23s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def _rk4_step(pos, vel, dt, accel):
    """Advance [pos, vel] by one RK4 step of ``dt``."""
    k1v = accel(vel)
    k1x = vel

    k2x = vel + 0.5 * dt * k1v
    k2v = accel(k2x)

    k3x = vel + 0.5 * dt * k2v
    k3v = accel(k3x)

    k4x = vel + dt * k3v
    k4v = accel(k4x)

    pos = pos + (dt / 6.0) * (k1x + 2 * k2x + 2 * k3x + k4x)
    vel = vel + (dt / 6.0) * (k1v + 2 * k2v + 2 * k3v + k4v)
    return pos, vel


def integrate_trajectory(ammo: AmmoConfig, bore_angle: float, max_distance: float,
                         sight_height: float,
                         atmosphere: AtmosphericConditions = STANDARD_ATMOSPHERE,
                         shot: Optional[ShotParameters] = None,
                         config: Optional[EngineConfig] = None) -> Trajectory:
    """
    Integrate from the muzzle to ``max_distance`` yards.

    Parameters
    ----------
    ammo : AmmoConfig
    bore_angle : float
        Launch angle (rad) relative to the sight line.
    max_distance : float
        Farthest distance (yd) the trajectory must reach.
    sight_height : float
        Sight above bore (in); the bullet starts this far below the sight line.
    atmosphere : AtmosphericConditions
    shot : ShotParameters, optional
        Wind, incline and Coriolis inputs. None means a level, windless shot.
    config : EngineConfig, optional
    """
    cfg = config or DEFAULT_ENGINE_CONFIG
    dt = cfg.time_step

    if shot is not None:
        gravity = shot.gravity_vector(cfg.gravity)
        wind = shot.wind_vector()
        omega = shot.earth_rotation_vector()
    else:
        gravity = np.array([0.0, -cfg.gravity, 0.0])
        wind = np.zeros(3)
        omega = None

    sos = atmosphere.speed_of_sound
    ratio = atmosphere.density_ratio

    def accel(v):
        return compute_acceleration(v, ammo, sos, ratio, gravity, wind, omega)

    pos = np.array([0.0, -sight_height / INCHES_PER_FOOT, 0.0])
    vel = ammo.muzzle_velocity * np.array([math.cos(bore_angle), math.sin(bore_angle), 0.0])
    t = 0.0

    target_ft = max_distance * FEET_PER_YARD
    history = [(t, pos, vel)]
    iterations = 0
    stop_reason = STOP_DISTANCE

    while pos[0] < target_ft:
        if iterations >= cfg.max_iterations:
            stop_reason = STOP_ITERATIONS
            logger.warning(f"Integrator hit the iteration cap ({cfg.max_iterations}) "
                           f"at {pos[0] / FEET_PER_YARD:.1f} yd")
            break
        if math.sqrt(float(np.dot(vel, vel))) < cfg.minimum_velocity:
            stop_reason = STOP_VELOCITY
            logger.warning(f"Velocity fell below {cfg.minimum_velocity:.0f} fps "
                           f"at {pos[0] / FEET_PER_YARD:.1f} yd")
            break

        new_pos, new_vel = _rk4_step(pos, vel, dt, accel)
        if not (np.all(np.isfinite(new_pos)) and np.all(np.isfinite(new_vel))):
            stop_reason = STOP_NON_FINITE
            logger.warning(f"Non-finite state at {pos[0] / FEET_PER_YARD:.1f} yd")
            break

        pos, vel = new_pos, new_vel
        iterations += 1
        t = iterations * dt
        history.append((t, pos, vel))

    logger.debug(f"Integrated {iterations} steps to {pos[0] / FEET_PER_YARD:.1f} yd ({stop_reason})")
    return _build_trajectory(history, ammo, atmosphere, shot, bore_angle, dt, stop_reason)


def _build_trajectory(history, ammo, atmosphere, shot, bore_angle, dt, stop_reason):
    """Convert history list to a read-only Trajectory."""
    times, positions, velocities = zip(*history)

    positions = np.array(positions)
    velocities = np.array(velocities)

    arrays = {
        'time': np.array(times),
        'x': positions[:, 0],
        'y': positions[:, 1],
        'z': positions[:, 2],
        'vx': velocities[:, 0],
        'vy': velocities[:, 1],
        'vz': velocities[:, 2],
        'speed': np.sqrt(np.sum(velocities ** 2, axis=1)),
    }
    for arr in arrays.values():
        arr.flags.writeable = False

    return Trajectory(
        ammo=ammo,
        atmosphere=atmosphere,
        shot=shot,
        bore_angle=bore_angle,
        dt=dt,
        stop_reason=stop_reason,
        **arrays,
    )

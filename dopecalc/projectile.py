"""
Rifle, Ammunition & Shot Definitions; Forces
============================================
Immutable, validated value objects describing one firing solution request,
and the acceleration acting on the bullet:

  - Gravity (rotated into the line-of-sight frame for inclined shots)
  - Aerodynamic drag from the G1/G7 tables (air-relative velocity)
  - Wind effects (air mass velocity: crosswind drift, head/tail drag change)
  - Coriolis effect (Earth's rotation), when latitude and azimuth are given

Coordinate system (line-of-sight frame, feet):
  x = downrange along the sight line
  y = perpendicular to the sight line, up positive
  z = crossrange, right positive looking downrange
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import GRAVITY_FPS2
from .drag_model import ALL_MODELS, drag_deceleration
from .units import (
    DistanceUnit, FEET_PER_YARD, GRAINS_PER_POUND, mph_to_fps, to_yards,
)
from .validation import (
    AZIMUTH_RANGE, BARREL_LENGTH_RANGE, BC_RANGE, BULLET_WEIGHT_RANGE,
    DISTANCE_RANGE, LATITUDE_RANGE, MUZZLE_VELOCITY_RANGE, SHOT_ANGLE_RANGE,
    SIGHT_HEIGHT_RANGE, WIND_DIRECTION_RANGE, WIND_SPEED_RANGE,
    ZERO_DISTANCE_RANGE, check_range, check_twist_rate, parse_twist_rate,
    validate_all,
)


# ── Earth rotation parameters ─────────────────────────────────────────────
EARTH_ROTATION_RATE = 7.2921e-5  # rad/s


@dataclass(frozen=True)
class RifleConfig:
    """
    Rifle and sight geometry.

    Twist rate is carried for the calling application; spin drift is not
    modeled by this engine.
    """
    sight_height: float               # in, scope centre over bore
    zero_distance: float              # yd
    twist_rate: str = "1:10"          # "1:N", inches per turn
    barrel_length: float = 24.0       # in

    def __post_init__(self):
        validate_all([
            check_range(self.sight_height, SIGHT_HEIGHT_RANGE, "sight_height"),
            check_range(self.zero_distance, ZERO_DISTANCE_RANGE, "zero_distance"),
            check_twist_rate(self.twist_rate),
            check_range(self.barrel_length, BARREL_LENGTH_RANGE, "barrel_length"),
        ])

    @property
    def twist_inches(self) -> float:
        """Barrel length for one full turn of rifling (in)."""
        return parse_twist_rate(self.twist_rate)


@dataclass(frozen=True)
class AmmoConfig:
    """Load data: muzzle velocity, BC against a standard drag function, weight."""
    muzzle_velocity: float            # fps
    ballistic_coefficient: float      # lb/in², relative to drag_model
    drag_model: str = 'G1'            # 'G1' or 'G7'
    bullet_weight: float = 168.0      # grains

    def __post_init__(self):
        model = str(getattr(self.drag_model, 'value', self.drag_model)).upper()
        errors = [
            check_range(self.muzzle_velocity, MUZZLE_VELOCITY_RANGE, "muzzle_velocity"),
            check_range(self.ballistic_coefficient, BC_RANGE, "ballistic_coefficient"),
            check_range(self.bullet_weight, BULLET_WEIGHT_RANGE, "bullet_weight"),
        ]
        if model not in ALL_MODELS:
            errors.append(f"drag_model must be one of {sorted(ALL_MODELS)}, got {self.drag_model!r}")
        validate_all(errors)
        object.__setattr__(self, 'drag_model', model)

    @property
    def mass_slugs(self) -> float:
        return self.bullet_weight / GRAINS_PER_POUND / GRAVITY_FPS2

    def energy(self, velocity: float) -> float:
        """Kinetic energy (ft-lb) at ``velocity`` fps: ½ m v²."""
        return 0.5 * self.mass_slugs * velocity * velocity


def crosswind_component(wind_speed: float, wind_direction: float) -> float:
    """
    Crosswind (same unit as ``wind_speed``) from a clock-face direction.

    Direction is where the wind comes FROM: 0° = 12 o'clock (headwind),
    90° = 3 o'clock (full value from the right). Positive = from the right.
    """
    return wind_speed * math.sin(math.radians(wind_direction))


def headwind_component(wind_speed: float, wind_direction: float) -> float:
    """Range wind component; positive = headwind, negative = tailwind."""
    return wind_speed * math.cos(math.radians(wind_direction))


@dataclass(frozen=True)
class ShotParameters:
    """
    One shot: distance, incline, wind and (optionally) position for Coriolis.
    """
    distance: float                       # in ``distance_unit``
    angle: float = 0.0                    # deg, incline; + uphill
    wind_speed: float = 0.0               # mph
    wind_direction: float = 90.0          # deg, clock face, wind FROM
    distance_unit: str = 'yards'          # 'yards' or 'meters'
    latitude: Optional[float] = None      # deg, + north
    azimuth: Optional[float] = None       # deg, direction of fire from north

    def __post_init__(self):
        errors = [
            check_range(self.distance, DISTANCE_RANGE, "distance"),
            check_range(self.angle, SHOT_ANGLE_RANGE, "angle"),
            check_range(self.wind_speed, WIND_SPEED_RANGE, "wind_speed"),
            check_range(self.wind_direction, WIND_DIRECTION_RANGE, "wind_direction"),
        ]
        try:
            unit = DistanceUnit(getattr(self.distance_unit, 'value', self.distance_unit))
        except ValueError:
            errors.append(f"distance_unit must be 'yards' or 'meters', got {self.distance_unit!r}")
            unit = None
        if (self.latitude is None) != (self.azimuth is None):
            errors.append("latitude and azimuth must be given together")
        elif self.latitude is not None:
            errors.append(check_range(self.latitude, LATITUDE_RANGE, "latitude"))
            errors.append(check_range(self.azimuth, AZIMUTH_RANGE, "azimuth"))
        validate_all(errors)
        object.__setattr__(self, 'distance_unit', unit.value)

    @property
    def distance_yards(self) -> float:
        return to_yards(self.distance, self.distance_unit)

    @property
    def distance_feet(self) -> float:
        return self.distance_yards * FEET_PER_YARD

    @property
    def crosswind(self) -> float:
        """Crosswind (mph), + from the right."""
        return crosswind_component(self.wind_speed, self.wind_direction)

    @property
    def headwind(self) -> float:
        """Range wind (mph), + headwind."""
        return headwind_component(self.wind_speed, self.wind_direction)

    @property
    def has_coriolis(self) -> bool:
        return self.latitude is not None

    def wind_vector(self) -> np.ndarray:
        """
        Air mass velocity [wx, wy, wz] (fps) in the line-of-sight frame.

        A headwind moves air toward the shooter (−x); wind from the right
        moves air toward the left (−z).
        """
        return np.array([
            -mph_to_fps(self.headwind),
            0.0,
            -mph_to_fps(self.crosswind),
        ])

    def gravity_vector(self, gravity: float = GRAVITY_FPS2) -> np.ndarray:
        """Gravity [gx, gy, gz] (ft/s²) in the line-of-sight frame."""
        incline = math.radians(self.angle)
        return np.array([-gravity * math.sin(incline), -gravity * math.cos(incline), 0.0])

    def earth_rotation_vector(self) -> Optional[np.ndarray]:
        """
        Earth's angular velocity (rad/s) in the line-of-sight frame,
        or None when no firing position is given.
        """
        if not self.has_coriolis:
            return None
        lat = math.radians(self.latitude)
        azim = math.radians(self.azimuth)
        return EARTH_ROTATION_RATE * np.array([
            math.cos(lat) * math.cos(azim),    # downrange component
            math.sin(lat),                     # vertical component
            -math.cos(lat) * math.sin(azim),   # crossrange component
        ])


def compute_acceleration(velocity: np.ndarray, ammo: AmmoConfig,
                         speed_of_sound: float, density_ratio: float,
                         gravity: np.ndarray, wind: np.ndarray,
                         omega: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Total acceleration acting on the bullet.

    Parameters
    ----------
    velocity : [vx, vy, vz] in fps (ground frame)
    ammo : AmmoConfig (BC and drag function)
    speed_of_sound : fps
    density_ratio : air density relative to standard
    gravity : [gx, gy, gz] in ft/s²
    wind : air mass velocity [wx, wy, wz] in fps
    omega : Earth's rotation vector, or None to skip Coriolis

    Returns
    -------
    acceleration : np.ndarray [ax, ay, az] in ft/s²
    """
    # ── 1. Aerodynamic drag on the air-relative velocity ──────────────────
    v_rel = velocity - wind
    speed = math.sqrt(float(np.dot(v_rel, v_rel)))
    if speed > 0.0:
        decel = drag_deceleration(speed, speed_of_sound, ammo.ballistic_coefficient,
                                  density_ratio, ammo.drag_model)
        a_drag = -decel * v_rel / speed
    else:
        a_drag = np.zeros(3)

    # ── 2. Coriolis acceleration = -2 (Ω × v) ─────────────────────────────
    if omega is not None:
        return gravity + a_drag - 2.0 * np.cross(omega, velocity)

    return gravity + a_drag

"""
Unit Conversions
================
Pure conversions used at the engine boundary. Internally the engine works
in feet, inches, fps, °F and inHg; callers may speak yards or meters and
MIL or MOA. Every conversion happens here, once, on the way in or out.

Angular corrections use the shooter's linear relations:
  1 MOA subtends 1.047 in at 100 yd  →  MOA = in / yd × 95.5
  1 MIL subtends 3.6 in at 100 yd    →  MIL = in / yd × 27.78
"""

from enum import Enum


# ── Linear ────────────────────────────────────────────────────────────────
YARDS_TO_METERS   = 0.9144
FEET_TO_METERS    = 0.3048
INCHES_TO_CM      = 2.54
FEET_PER_YARD     = 3.0
INCHES_PER_FOOT   = 12.0
INCHES_PER_YARD   = 36.0

# ── Velocity ──────────────────────────────────────────────────────────────
FPS_TO_MPS        = 0.3048
MPH_TO_FPS        = 5280.0 / 3600.0

# ── Angular ───────────────────────────────────────────────────────────────
MOA_INCHES_AT_100YD = 1.047
MIL_INCHES_AT_100YD = 3.6
MIL_TO_MOA          = MIL_INCHES_AT_100YD / MOA_INCHES_AT_100YD

# ── Other ─────────────────────────────────────────────────────────────────
INHG_TO_MBAR      = 33.8639
GRAINS_TO_GRAMS   = 0.06479891
GRAINS_PER_POUND  = 7000.0


class DistanceUnit(str, Enum):
    YARDS = 'yards'
    METERS = 'meters'


class AngularUnit(str, Enum):
    MIL = 'MIL'
    MOA = 'MOA'


def yards_to_meters(yards: float) -> float:
    return yards * YARDS_TO_METERS


def meters_to_yards(meters: float) -> float:
    return meters / YARDS_TO_METERS


def feet_to_meters(feet: float) -> float:
    return feet * FEET_TO_METERS


def meters_to_feet(meters: float) -> float:
    return meters / FEET_TO_METERS


def fps_to_mps(fps: float) -> float:
    return fps * FPS_TO_MPS


def mps_to_fps(mps: float) -> float:
    return mps / FPS_TO_MPS


def mph_to_fps(mph: float) -> float:
    return mph * MPH_TO_FPS


def inches_to_cm(inches: float) -> float:
    return inches * INCHES_TO_CM


def cm_to_inches(cm: float) -> float:
    return cm / INCHES_TO_CM


def mil_to_moa(mil: float) -> float:
    return mil * MIL_TO_MOA


def moa_to_mil(moa: float) -> float:
    return moa / MIL_TO_MOA


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32.0) * 5.0 / 9.0


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9.0 / 5.0 + 32.0


def inhg_to_mbar(inhg: float) -> float:
    return inhg * INHG_TO_MBAR


def mbar_to_inhg(mbar: float) -> float:
    return mbar / INHG_TO_MBAR


def grains_to_grams(grains: float) -> float:
    return grains * GRAINS_TO_GRAMS


def grams_to_grains(grams: float) -> float:
    return grams / GRAINS_TO_GRAMS


def to_yards(distance: float, unit) -> float:
    """Normalize a caller distance (yards or meters) to yards."""
    return meters_to_yards(distance) if DistanceUnit(unit) is DistanceUnit.METERS else float(distance)


def from_yards(yards: float, unit) -> float:
    """Express a distance in yards in the caller's unit."""
    return yards_to_meters(yards) if DistanceUnit(unit) is DistanceUnit.METERS else float(yards)


def convert_distance(value: float, from_unit, to_unit) -> float:
    return from_yards(to_yards(value, from_unit), to_unit)


def convert_angular(value: float, from_unit, to_unit) -> float:
    from_unit, to_unit = AngularUnit(from_unit), AngularUnit(to_unit)
    if from_unit is to_unit:
        return value
    return mil_to_moa(value) if from_unit is AngularUnit.MIL else moa_to_mil(value)


def _inches_per_unit(distance_yards: float, unit) -> float:
    per_100 = MIL_INCHES_AT_100YD if AngularUnit(unit) is AngularUnit.MIL else MOA_INCHES_AT_100YD
    return per_100 * distance_yards / 100.0


def inches_to_correction(inches: float, distance_yards: float, unit) -> float:
    """
    Angular size of ``inches`` seen from ``distance_yards``.

    Returns 0.0 at non-positive distance (the muzzle).
    """
    if distance_yards <= 0:
        return 0.0
    return inches / _inches_per_unit(distance_yards, unit)


def correction_to_inches(correction: float, distance_yards: float, unit) -> float:
    """Linear size in inches of an angular ``correction`` at ``distance_yards``."""
    return correction * _inches_per_unit(distance_yards, unit)


def correction_to_clicks(correction: float, click_value: float) -> int:
    """Nearest whole number of turret clicks for a correction."""
    if click_value <= 0:
        raise ValueError(f"click_value must be > 0, got {click_value!r}")
    return int(round(correction / click_value))

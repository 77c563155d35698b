"""
Input Range Validation
======================
Ranges the calling application enforces on its rifle / ammunition /
environment forms. The engine does not clamp anything: value objects run
these checks once at construction and reject the whole record with a
single InvalidConfiguration listing every offending field.
"""

import math
import re
from typing import Iterable, List, Optional, Tuple

from .exceptions import InvalidConfiguration


# ── Assumed ranges (lower, upper, lower_inclusive, upper_inclusive) ───────
TEMPERATURE_RANGE     = (-50.0, 150.0, True, True)      # °F
PRESSURE_RANGE        = (20.0, 35.0, True, True)        # inHg
HUMIDITY_RANGE        = (0.0, 100.0, True, True)        # %
ALTITUDE_RANGE        = (-1000.0, 30000.0, True, True)  # ft

MUZZLE_VELOCITY_RANGE = (0.0, 5000.0, False, True)      # fps
BC_RANGE              = (0.0, 1.0, False, True)
BULLET_WEIGHT_RANGE   = (0.0, 1000.0, False, True)      # grains

SIGHT_HEIGHT_RANGE    = (0.0, 10.0, False, True)        # in
ZERO_DISTANCE_RANGE   = (0.0, 1000.0, False, True)      # yd
BARREL_LENGTH_RANGE   = (0.0, 50.0, False, True)        # in

DISTANCE_RANGE        = (0.0, 3000.0, False, True)      # yd or m
WIND_SPEED_RANGE      = (0.0, 100.0, True, True)        # mph
WIND_DIRECTION_RANGE  = (0.0, 360.0, True, False)       # deg
SHOT_ANGLE_RANGE      = (-90.0, 90.0, True, True)       # deg
LATITUDE_RANGE        = (-90.0, 90.0, True, True)       # deg
AZIMUTH_RANGE         = (0.0, 360.0, True, False)       # deg

TWIST_RATE_PATTERN = re.compile(r'^1:(\d+(?:\.\d+)?)$')


def _format_bounds(bounds: Tuple[float, float, bool, bool]) -> str:
    low, high, low_inc, high_inc = bounds
    return f"{'[' if low_inc else '('}{low:g}, {high:g}{']' if high_inc else ')'}"


def check_range(value: float, bounds: Tuple[float, float, bool, bool],
                field_name: str) -> Optional[str]:
    """Return an error message if ``value`` falls outside ``bounds``, else None."""
    low, high, low_inc, high_inc = bounds
    try:
        number = float(value)
    except (TypeError, ValueError):
        return f"{field_name} must be a number, got {value!r}"
    if math.isnan(number) or math.isinf(number):
        return f"{field_name} must be finite, got {value!r}"

    below = number < low if low_inc else number <= low
    above = number > high if high_inc else number >= high
    if below or above:
        return f"{field_name}={number:g} outside {_format_bounds(bounds)}"
    return None


def parse_twist_rate(twist_rate: str) -> Optional[float]:
    """Inches per turn from a ``"1:N"`` twist string, or None if malformed."""
    match = TWIST_RATE_PATTERN.match(twist_rate.strip()) if isinstance(twist_rate, str) else None
    return float(match.group(1)) if match else None


def check_twist_rate(twist_rate: str, field_name: str = "twist_rate") -> Optional[str]:
    if parse_twist_rate(twist_rate) is None:
        return f"{field_name} must look like '1:N', got {twist_rate!r}"
    return None


def validate_all(checks: Iterable[Optional[str]]) -> None:
    """
    Raise InvalidConfiguration if any check produced a message.

    ``checks`` is an iterable of results from check_range / check_twist_rate.
    """
    errors: List[str] = [msg for msg in checks if msg]
    if errors:
        raise InvalidConfiguration(errors)

"""
Atmospheric Model
=================
Turns raw environmental readings (°F, inHg, % RH, ft) into the physical
quantities every downstream stage needs:

  - speed of sound (fps), a function of absolute temperature only
  - air density (lb/ft³) with a moist-air correction
  - density ratio relative to the standard atmosphere
    (29.92 inHg, 59 °F, 0 % humidity, sea level)
  - pressure altitude and density altitude (ft)

Humidity correction: partial pressures of dry air and water vapour from
the Magnus saturation formula, each through the ideal gas law.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

import numpy as np

from .validation import (
    ALTITUDE_RANGE, HUMIDITY_RANGE, PRESSURE_RANGE, TEMPERATURE_RANGE,
    check_range, validate_all,
)


# ── Standard atmosphere (sea level) ───────────────────────────────────────
STANDARD_TEMPERATURE = 59.0        # °F
STANDARD_PRESSURE    = 29.92       # inHg
STANDARD_HUMIDITY    = 0.0         # %
STANDARD_ALTITUDE    = 0.0         # ft
LAPSE_RATE_F_PER_FT  = 0.00356     # °F/ft  (3.56 °F per 1000 ft)
FEET_PER_INHG        = 1000.0      # pressure-altitude rule of thumb
DENSITY_ALT_PER_F    = 120.0       # ft of density altitude per °F

# Humidity assumed for field readings that omit it
DEFAULT_READING_HUMIDITY = 50.0   # %

# ── Physical constants ────────────────────────────────────────────────────
RANKINE_OFFSET       = 459.67
SPEED_OF_SOUND_COEF  = 49.0223     # fps/√°R  = sqrt(γ R) for dry air
R_DRY_AIR            = 287.058     # J/(kg·K)
R_WATER_VAPOUR       = 461.495     # J/(kg·K)
PA_PER_INHG          = 3386.389
KGM3_TO_LBFT3        = 0.06242796


def fahrenheit_to_kelvin(temperature: float) -> float:
    return (temperature - 32.0) * 5.0 / 9.0 + 273.15


def speed_of_sound(temperature: float) -> float:
    """
    Speed of sound (fps) at ``temperature`` °F.

    c = sqrt(γ R T) with T in Rankine; ≈1116 fps at 59 °F.
    """
    return SPEED_OF_SOUND_COEF * np.sqrt(temperature + RANKINE_OFFSET)


def isa_temperature(altitude: float) -> float:
    """Standard-atmosphere temperature (°F) at ``altitude`` ft."""
    return STANDARD_TEMPERATURE - LAPSE_RATE_F_PER_FT * altitude


def pressure_altitude(pressure: float, altitude: float) -> float:
    """Pressure altitude (ft): ``altitude + 1000 × (29.92 − pressure)``."""
    return altitude + FEET_PER_INHG * (STANDARD_PRESSURE - pressure)


def density_altitude(temperature: float, pressure: float, altitude: float) -> float:
    """
    Density altitude (ft), full precision.

    pressure altitude + 120 ft for every °F above the standard temperature
    at the station altitude. Round only for display.
    """
    deviation = temperature - isa_temperature(altitude)
    return pressure_altitude(pressure, altitude) + DENSITY_ALT_PER_F * deviation


def saturation_vapour_pressure(temperature: float) -> float:
    """Saturation vapour pressure (Pa) over water, Magnus formula."""
    t_c = (temperature - 32.0) * 5.0 / 9.0
    return 610.78 * 10.0 ** (7.5 * t_c / (t_c + 237.3))


def air_density(temperature: float, pressure: float, humidity: float = 0.0) -> float:
    """
    Moist-air density (lb/ft³).

    ρ = P_dry / (R_d T) + e / (R_v T), with e = RH × e_sat(T).
    Humid air is lighter than dry air at the same pressure and temperature.
    """
    T = fahrenheit_to_kelvin(temperature)
    P = pressure * PA_PER_INHG
    e = saturation_vapour_pressure(temperature) * humidity / 100.0
    rho = (P - e) / (R_DRY_AIR * T) + e / (R_WATER_VAPOUR * T)
    return rho * KGM3_TO_LBFT3


STANDARD_DENSITY = air_density(STANDARD_TEMPERATURE, STANDARD_PRESSURE, STANDARD_HUMIDITY)


def density_ratio(temperature: float, pressure: float, humidity: float = 0.0) -> float:
    """Air density relative to the standard atmosphere (1.0 at standard)."""
    return air_density(temperature, pressure, humidity) / STANDARD_DENSITY


@dataclass(frozen=True)
class AtmosphericConditions:
    """
    Environmental readings at the firing point.

    Only the raw readings are stored; everything else is derived on access.
    Construction rejects values outside the ranges the calling application
    guarantees.
    """
    temperature: float = STANDARD_TEMPERATURE   # °F
    pressure: float = STANDARD_PRESSURE         # inHg
    humidity: float = STANDARD_HUMIDITY         # %
    altitude: float = STANDARD_ALTITUDE         # ft

    def __post_init__(self):
        validate_all([
            check_range(self.temperature, TEMPERATURE_RANGE, "temperature"),
            check_range(self.pressure, PRESSURE_RANGE, "pressure"),
            check_range(self.humidity, HUMIDITY_RANGE, "humidity"),
            check_range(self.altitude, ALTITUDE_RANGE, "altitude"),
        ])

    @property
    def speed_of_sound(self) -> float:
        return float(speed_of_sound(self.temperature))

    @property
    def air_density(self) -> float:
        return air_density(self.temperature, self.pressure, self.humidity)

    @property
    def density_ratio(self) -> float:
        return density_ratio(self.temperature, self.pressure, self.humidity)

    @property
    def pressure_altitude(self) -> float:
        return pressure_altitude(self.pressure, self.altitude)

    @property
    def density_altitude(self) -> float:
        return density_altitude(self.temperature, self.pressure, self.altitude)

    @property
    def density_altitude_display(self) -> int:
        """Density altitude rounded to the nearest foot."""
        return int(round(self.density_altitude))

    def to_dict(self) -> Dict[str, float]:
        return {
            'temperature': self.temperature,
            'pressure': self.pressure,
            'humidity': self.humidity,
            'altitude': self.altitude,
            'pressure_altitude': self.pressure_altitude,
            'density_altitude': self.density_altitude,
            'air_density': self.air_density,
            'density_ratio': self.density_ratio,
            'speed_of_sound': self.speed_of_sound,
        }


STANDARD_ATMOSPHERE = AtmosphericConditions()


def calculate_atmospheric_conditions(
        raw: Union[Mapping[str, Any], AtmosphericConditions]) -> AtmosphericConditions:
    """
    Build AtmosphericConditions from raw readings.

    ``raw`` is a mapping with ``temperature`` and ``pressure`` and optional
    ``humidity`` (50 % when missing) and ``altitude`` (sea level when
    missing), or an existing AtmosphericConditions which is returned as is.
    """
    if isinstance(raw, AtmosphericConditions):
        return raw
    return AtmosphericConditions(
        temperature=float(raw['temperature']),
        pressure=float(raw['pressure']),
        humidity=float(raw.get('humidity', DEFAULT_READING_HUMIDITY)),
        altitude=float(raw.get('altitude', STANDARD_ALTITUDE)),
    )


# ── Vectorized standard profile ───────────────────────────────────────────
def atmosphere_profile(alt_array: np.ndarray) -> dict:
    """
    Standard-atmosphere profile for an array of altitudes (ft).
    Returns dict with keys: 'altitude', 'temperature', 'pressure',
    'density_ratio', 'speed_of_sound'.
    """
    alt_array = np.asarray(alt_array, dtype=float)
    T = STANDARD_TEMPERATURE - LAPSE_RATE_F_PER_FT * alt_array
    P = STANDARD_PRESSURE * (1.0 - 6.8756e-6 * alt_array) ** 5.2559
    ratio = np.array([density_ratio(t, p) for t, p in zip(T, P)])
    return {
        'altitude': alt_array,
        'temperature': T,
        'pressure': P,
        'density_ratio': ratio,
        'speed_of_sound': speed_of_sound(T),
    }


if __name__ == "__main__":
    # Quick verification print
    print("Standard Atmosphere (imperial)")
    print("=" * 62)
    print(f"{'Alt (ft)':>10} {'T (°F)':>8} {'P (inHg)':>10} {'ρ/ρ0':>8} {'a (fps)':>9}")
    print("-" * 62)
    profile = atmosphere_profile(np.array([0, 1000, 2500, 5000, 7500, 10000]))
    for h, t, p, r, a in zip(*(profile[k] for k in
                               ('altitude', 'temperature', 'pressure',
                                'density_ratio', 'speed_of_sound'))):
        print(f"{h:>10.0f} {t:>8.2f} {p:>10.2f} {r:>8.4f} {a:>9.1f}")

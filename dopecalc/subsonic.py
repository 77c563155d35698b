"""
Subsonic / Transonic Analysis
=============================
Post-processing of a computed trajectory's velocity-vs-distance samples:

  - Mach at every sample from the ambient speed of sound
  - flight regime at the target (supersonic ≥ M1.2, subsonic ≤ M0.8,
    transonic between)
  - first downrange crossing of M1.2, M1.0 and M0.8, linearly interpolated
    between the bracketing samples
  - an advisory when the bullet goes transonic before or at the target

The companion estimators at the bottom (will_remain_supersonic,
estimate_max_supersonic_range) are APPROXIMATIONS: they assume exponential
velocity decay v(d) ≈ v0 · exp(−k·d) with k = 0.0002 / BC per yard, which
is not derived from the G1/G7 tables the integrator uses. Use them only
where no integrated trajectory is available.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .atmosphere import STANDARD_TEMPERATURE, speed_of_sound
from .drag_model import (
    SONIC, TRANSONIC_LOWER, TRANSONIC_UPPER, FlightRegime, get_flight_regime,
)
from .integrator import Trajectory

__all__ = [
    'SONIC', 'TRANSONIC_LOWER', 'TRANSONIC_UPPER', 'STANDARD_SPEED_OF_SOUND',
    'DECAY_CONSTANT', 'FlightRegime', 'SubsonicTransitionResult',
    'get_flight_regime', 'calculate_mach', 'is_subsonic', 'is_transonic',
    'analyze_subsonic_transition', 'will_remain_supersonic',
    'estimate_max_supersonic_range', 'get_supersonic_margin', 'get_mach_margin',
]

STANDARD_SPEED_OF_SOUND = float(speed_of_sound(STANDARD_TEMPERATURE))   # ≈1116.45 fps
DECAY_CONSTANT = 0.0002   # k × BC, per yard (heuristic)

# Fraction of the target distance before which a sonic crossing is "early"
EARLY_TRANSITION_FRACTION = 0.7


@dataclass(frozen=True)
class SubsonicTransitionResult:
    goes_subsonic: bool
    transonic_distance: Optional[float]         # yd, M1.0 crossing
    subsonic_distance: Optional[float]          # yd, M0.8 crossing
    max_supersonic_distance: Optional[float]    # yd, M1.2 crossing
    flight_regime: FlightRegime                 # at the target
    mach_at_target: float
    velocity_at_target: float                   # fps
    speed_of_sound: float                       # fps
    warning: Optional[str]
    max_supersonic_range_estimate: Optional[float] = None   # yd, approximate


def calculate_mach(velocity: float, speed_of_sound: float) -> float:
    """Mach number; a non-positive speed of sound falls back to the standard value."""
    if speed_of_sound <= 0:
        return velocity / STANDARD_SPEED_OF_SOUND
    return velocity / speed_of_sound


def is_subsonic(velocity: float, temperature: float = STANDARD_TEMPERATURE) -> bool:
    """True below Mach 1 at ``temperature`` °F."""
    return calculate_mach(velocity, speed_of_sound(temperature)) < SONIC


def is_transonic(velocity: float, temperature: float = STANDARD_TEMPERATURE) -> bool:
    mach = calculate_mach(velocity, speed_of_sound(temperature))
    return TRANSONIC_LOWER < mach < TRANSONIC_UPPER


# ── Trajectory post-processing ────────────────────────────────────────────

def _samples(trajectory) -> List[Tuple[float, float]]:
    """(distance yd, velocity fps) pairs from any supported trajectory form."""
    if isinstance(trajectory, Trajectory):
        return list(zip(trajectory.distance.tolist(), trajectory.speed.tolist()))
    samples = []
    for point in trajectory:
        if isinstance(point, Mapping):
            samples.append((float(point['distance']), float(point['velocity'])))
        else:
            samples.append((float(point.distance), float(point.velocity)))
    return samples


def _crossing(prev, curr, prev_mach, curr_mach, threshold) -> float:
    """Distance where Mach falls through ``threshold`` between two samples."""
    ratio = (threshold - curr_mach) / (prev_mach - curr_mach)
    return curr[0] - ratio * (curr[0] - prev[0])


def _transition_warning(goes_subsonic, transonic_distance, regime, mach, target_distance):
    if goes_subsonic:
        if transonic_distance < target_distance * EARLY_TRANSITION_FRACTION:
            return (f"Bullet goes subsonic at {round(transonic_distance)} yards, well before "
                    f"the {target_distance:g} yard target. Accuracy may be significantly "
                    f"degraded.")
        return (f"Bullet transitions to subsonic at {round(transonic_distance)} yards. "
                f"Consider using ammunition with higher muzzle velocity for better "
                f"accuracy at this distance.")
    if regime is FlightRegime.TRANSONIC:
        return (f"Bullet is in transonic zone (Mach {mach:.2f}) at {target_distance:g} "
                f"yards. Some instability possible.")
    return None


def analyze_subsonic_transition(
        trajectory: Union[Trajectory, Iterable[Any]],
        temperature: float = STANDARD_TEMPERATURE,
        target_distance: float = 0.0,
        muzzle_velocity: Optional[float] = None,
        ballistic_coefficient: Optional[float] = None) -> SubsonicTransitionResult:
    """
    Classify flight regime at ``target_distance`` and locate Mach crossings.

    Parameters
    ----------
    trajectory : Trajectory or iterable of points
        Samples in increasing distance. Points may be TrajectoryPoint-like
        objects or mappings with ``distance`` (yd) and ``velocity`` (fps).
        An empty sequence gives a degenerate, warning-free result.
    temperature : float
        Ambient °F, sets the speed of sound.
    target_distance : float
        Yards.
    muzzle_velocity, ballistic_coefficient : float, optional
        When both are given, the approximate maximum supersonic range is
        attached to the result.
    """
    sos = float(speed_of_sound(temperature))
    samples = _samples(trajectory)

    target = next((p for p in samples if p[0] >= target_distance),
                  samples[-1] if samples else None)
    velocity_at_target = target[1] if target is not None else 0.0
    mach_at_target = calculate_mach(velocity_at_target, sos)
    regime = get_flight_regime(mach_at_target)

    crossings = {TRANSONIC_UPPER: None, SONIC: None, TRANSONIC_LOWER: None}
    for prev, curr in zip(samples, samples[1:]):
        prev_mach = calculate_mach(prev[1], sos)
        curr_mach = calculate_mach(curr[1], sos)
        for threshold, found in crossings.items():
            if found is None and prev_mach >= threshold > curr_mach:
                crossings[threshold] = _crossing(prev, curr, prev_mach, curr_mach, threshold)

    transonic_distance = crossings[SONIC]
    goes_subsonic = transonic_distance is not None and transonic_distance <= target_distance

    estimate = None
    if muzzle_velocity is not None and ballistic_coefficient is not None:
        estimate = estimate_max_supersonic_range(muzzle_velocity, ballistic_coefficient,
                                                 temperature)

    return SubsonicTransitionResult(
        goes_subsonic=goes_subsonic,
        transonic_distance=transonic_distance,
        subsonic_distance=crossings[TRANSONIC_LOWER],
        max_supersonic_distance=crossings[TRANSONIC_UPPER],
        flight_regime=regime,
        mach_at_target=mach_at_target,
        velocity_at_target=velocity_at_target,
        speed_of_sound=sos,
        warning=_transition_warning(goes_subsonic, transonic_distance, regime,
                                    mach_at_target, target_distance),
        max_supersonic_range_estimate=estimate,
    )


# ── Approximate estimators (no trajectory needed) ─────────────────────────

def _decay_rate(bc: float) -> float:
    return DECAY_CONSTANT / bc


def estimated_velocity(muzzle_velocity: float, bc: float, distance: float) -> float:
    """Approximate velocity (fps) at ``distance`` yd: v0 · exp(−0.0002 · d / BC)."""
    return muzzle_velocity * math.exp(-_decay_rate(bc) * distance)


def will_remain_supersonic(muzzle_velocity: float, bc: float, distance: float,
                           temperature: float = STANDARD_TEMPERATURE) -> bool:
    """Approximate: is the bullet still at or above Mach 1 at ``distance`` yd?"""
    velocity = estimated_velocity(muzzle_velocity, bc, distance)
    return calculate_mach(velocity, speed_of_sound(temperature)) >= SONIC


def estimate_max_supersonic_range(muzzle_velocity: float, bc: float,
                                  temperature: float = STANDARD_TEMPERATURE) -> float:
    """
    Approximate distance (yd) at which the bullet reaches Mach 1.

    Inverts the exponential decay: d = −ln(c / v0) / k. Returns 0 when the
    muzzle velocity is already subsonic.
    """
    ratio = float(speed_of_sound(temperature)) * SONIC / muzzle_velocity
    if ratio >= 1:
        return 0.0
    return max(0.0, -math.log(ratio) / _decay_rate(bc))


def get_supersonic_margin(velocity: float, temperature: float = STANDARD_TEMPERATURE) -> float:
    """Velocity above (+) or below (−) the speed of sound, fps."""
    return velocity - float(speed_of_sound(temperature))


def get_mach_margin(velocity: float, temperature: float = STANDARD_TEMPERATURE) -> float:
    """Mach above (+) or below (−) Mach 1."""
    return calculate_mach(velocity, speed_of_sound(temperature)) - SONIC

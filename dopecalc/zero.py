"""
Zero Solver
===========
Finds the bore elevation (relative to the sight line) that puts the bullet
back on the sight line at the rifle's zero distance.

The vertical miss at the zero distance is a smooth, increasing function of
the bore angle: negative at 0 rad (the bore sits below the sight and the
bullet falls), positive at the upper bracket. Brent's method on that
bracket converges in a handful of level, windless integrations.
"""

import math
from typing import Optional

from scipy.optimize import brentq

from .atmosphere import AtmosphericConditions, STANDARD_ATMOSPHERE
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .exceptions import OutOfRangeDistance, ZeroSolveFailure
from .integrator import integrate_trajectory
from .logger import logger
from .projectile import AmmoConfig, RifleConfig
from .units import INCHES_PER_YARD


def zero_miss(angle: float, rifle: RifleConfig, ammo: AmmoConfig,
              atmosphere: AtmosphericConditions = STANDARD_ATMOSPHERE,
              config: Optional[EngineConfig] = None) -> float:
    """Vertical miss (in, + above the sight line) at the zero distance for ``angle`` rad."""
    trajectory = integrate_trajectory(ammo, angle, rifle.zero_distance, rifle.sight_height,
                                      atmosphere=atmosphere, config=config)
    return trajectory.at_distance(rifle.zero_distance).drop


def find_zero_angle(rifle: RifleConfig, ammo: AmmoConfig,
                    atmosphere: AtmosphericConditions = STANDARD_ATMOSPHERE,
                    config: Optional[EngineConfig] = None) -> float:
    """
    Bore angle (rad) zeroing ``rifle`` / ``ammo`` at ``rifle.zero_distance``.

    Parameters
    ----------
    rifle : RifleConfig
    ammo : AmmoConfig
    atmosphere : AtmosphericConditions
        Conditions the rifle is zeroed in.
    config : EngineConfig, optional
        ``zero_tolerance`` (in), ``zero_max_iterations`` and
        ``zero_max_angle`` (upper search bracket, rad) are used here.

    Raises
    ------
    ZeroSolveFailure
        When no angle in [0, zero_max_angle] brings the miss within
        tolerance in the allowed iterations. Never returns a stale angle.
    """
    cfg = config or DEFAULT_ENGINE_CONFIG
    calls = {'n': 0, 'angle': None, 'miss': None}

    def miss(angle):
        calls['n'] += 1
        calls['angle'] = angle
        try:
            calls['miss'] = zero_miss(angle, rifle, ammo, atmosphere, cfg)
        except OutOfRangeDistance as exc:
            raise ZeroSolveFailure(rifle.zero_distance, angle, None, calls['n'],
                                   f"trajectory ends at {exc.max_distance:.1f} yd") from exc
        logger.debug(f"Zero trial {calls['n']}: angle={angle:.7f} rad, "
                     f"miss={calls['miss']:+.5f} in")
        return calls['miss']

    # An angular step of xtol moves the impact about xtol × distance (in)
    xtol = 0.1 * cfg.zero_tolerance / (rifle.zero_distance * INCHES_PER_YARD)

    try:
        angle, result = brentq(miss, 0.0, cfg.zero_max_angle, xtol=xtol,
                               maxiter=cfg.zero_max_iterations,
                               full_output=True, disp=False)
    except ValueError as exc:
        # f(a) and f(b) share a sign: the zero is not bracketed
        raise ZeroSolveFailure(rifle.zero_distance, calls['angle'], calls['miss'],
                               calls['n'], "zero distance not reachable within the "
                               f"angle bracket [0, {cfg.zero_max_angle}] rad") from exc

    if not result.converged:
        raise ZeroSolveFailure(rifle.zero_distance, angle, calls['miss'], result.iterations,
                               result.flag)

    final_miss = zero_miss(angle, rifle, ammo, atmosphere, cfg)
    if not math.isfinite(final_miss) or abs(final_miss) > cfg.zero_tolerance:
        raise ZeroSolveFailure(rifle.zero_distance, angle, final_miss, result.iterations,
                               f"miss exceeds tolerance {cfg.zero_tolerance} in")

    logger.debug(f"Zeroed at {rifle.zero_distance:.0f} yd: {angle:.7f} rad "
                 f"({math.degrees(angle) * 60:.2f} MOA) in {result.iterations} iterations")
    return angle

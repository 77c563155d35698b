"""
Wind Table Generator
====================
Reference table of wind drift and windage hold for a grid of distances and
wind speeds, with the wind direction held fixed for the whole table
(full-value 90° by default).

Each wind speed needs one integration out to the farthest distance; every
distance in the grid is then read off that trajectory. Cells share no
mutable state, so the per-speed integrations may run on a thread pool
with results identical to a sequential run.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .atmosphere import AtmosphericConditions, STANDARD_ATMOSPHERE
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .exceptions import InvalidConfiguration
from .integrator import integrate_trajectory
from .logger import logger
from .projectile import (
    AmmoConfig, RifleConfig, ShotParameters, crosswind_component, headwind_component,
)
from .solution import assemble_solution
from .units import DistanceUnit
from .zero import find_zero_angle

__all__ = [
    'DEFAULT_WIND_SPEEDS', 'WindTableEntry', 'generate_wind_table',
    'crosswind_component', 'headwind_component',
]

DEFAULT_WIND_SPEEDS = (0.0, 5.0, 10.0, 15.0, 20.0)   # mph


@dataclass(frozen=True)
class WindTableEntry:
    distance: float          # in the table's distance unit
    wind_speed: float        # mph
    wind_direction: float    # deg, clock face, wind FROM
    windage_mil: float       # + dial right
    windage_moa: float
    wind_drift: float        # in, + right

    @property
    def key(self):
        return self.distance, self.wind_speed


def _check_unique(values, name):
    if len(set(values)) != len(values):
        raise InvalidConfiguration([f"{name} must not repeat"])


def generate_wind_table(rifle: RifleConfig, ammo: AmmoConfig, distances: Sequence[float],
                        atmosphere: AtmosphericConditions = STANDARD_ATMOSPHERE,
                        wind_speeds: Sequence[float] = DEFAULT_WIND_SPEEDS,
                        wind_direction: float = 90.0,
                        distance_unit: str = DistanceUnit.YARDS.value,
                        config: Optional[EngineConfig] = None,
                        max_workers: Optional[int] = None) -> List[WindTableEntry]:
    """
    One entry per (distance, wind speed), ordered by distance then speed
    in the order given.

    Parameters
    ----------
    distances : sequence of float
        Target distances in ``distance_unit``; must be unique.
    wind_speeds : sequence of float
        Wind speeds (mph); must be unique.
    wind_direction : float
        Clock-face direction the wind comes from, shared by every cell.
    max_workers : int, optional
        Evaluate wind speeds on a thread pool of this size.
    """
    distances = list(distances)
    wind_speeds = list(wind_speeds)
    _check_unique(distances, "distances")
    _check_unique(wind_speeds, "wind_speeds")
    if not distances or not wind_speeds:
        return []

    cfg = config or DEFAULT_ENGINE_CONFIG
    farthest = max(distances)
    shots = [
        ShotParameters(distance=farthest, wind_speed=speed, wind_direction=wind_direction,
                       distance_unit=distance_unit)
        for speed in wind_speeds
    ]
    for d in distances:
        ShotParameters(distance=d, distance_unit=distance_unit)

    zero_angle = find_zero_angle(rifle, ammo, atmosphere, cfg)

    def integrate(shot):
        return integrate_trajectory(ammo, zero_angle, shot.distance_yards, rifle.sight_height,
                                    atmosphere=atmosphere, shot=shot, config=cfg)

    if max_workers:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            trajectories = list(pool.map(integrate, shots))
    else:
        trajectories = [integrate(shot) for shot in shots]

    table = []
    for d in distances:
        for speed, trajectory in zip(wind_speeds, trajectories):
            solution = assemble_solution(trajectory, d, distance_unit)
            table.append(WindTableEntry(
                distance=d,
                wind_speed=speed,
                wind_direction=wind_direction,
                windage_mil=solution.windage_correction.mil,
                windage_moa=solution.windage_correction.moa,
                wind_drift=solution.windage,
            ))

    logger.debug(f"Wind table: {len(distances)} distances x {len(wind_speeds)} speeds "
                 f"= {len(table)} entries")
    return table

"""
Ballistic Solution
==================
Turns an integrated trajectory into what goes on the turrets: angular
elevation and windage corrections in both MIL and MOA, plus drop, drift,
remaining velocity/energy and time of flight at the target.

Sign convention: a positive correction means dial up (elevation) or right
(windage). A bullet striking low or left therefore gets a positive value.

Distances come in yards or meters and are normalized to yards once, here;
results report the distance back in the caller's unit.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional

from .atmosphere import AtmosphericConditions, STANDARD_ATMOSPHERE
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .exceptions import InvalidConfiguration
from .integrator import Trajectory, integrate_trajectory
from .logger import logger
from .projectile import AmmoConfig, RifleConfig, ShotParameters
from .units import AngularUnit, DistanceUnit, inches_to_correction, to_yards
from .zero import find_zero_angle


class Correction(NamedTuple):
    """One angular correction in both scope units."""
    mil: float
    moa: float

    @classmethod
    def from_inches(cls, inches: float, distance_yards: float) -> 'Correction':
        return cls(
            mil=inches_to_correction(inches, distance_yards, AngularUnit.MIL),
            moa=inches_to_correction(inches, distance_yards, AngularUnit.MOA),
        )

    def in_unit(self, unit) -> float:
        return self.mil if AngularUnit(unit) is AngularUnit.MIL else self.moa


@dataclass(frozen=True)
class BallisticSolution:
    distance: float                   # in ``distance_unit``
    distance_unit: str
    distance_yards: float
    elevation_correction: Correction  # + dial up
    windage_correction: Correction    # + dial right
    drop: float                       # in, relative to the sight line
    windage: float                    # in, wind drift (+ right)
    velocity: float                   # fps at target
    energy: float                     # ft-lb at target
    time_of_flight: float             # s
    zero_angle: float                 # rad, bore relative to the sight line
    max_ordinate: float               # in above the sight line
    max_ordinate_distance: float      # yd
    trajectory: Optional[Trajectory] = field(default=None, compare=False, repr=False)

    def correction(self, unit) -> tuple:
        """(elevation, windage) in ``unit`` ('MIL' or 'MOA')."""
        return (self.elevation_correction.in_unit(unit),
                self.windage_correction.in_unit(unit))

    def summary(self) -> str:
        e_mil, w_mil = self.correction(AngularUnit.MIL)
        e_moa, w_moa = self.correction(AngularUnit.MOA)
        return (
            f"{self.distance:.0f} {self.distance_unit}: "
            f"elev {e_mil:+.2f} MIL / {e_moa:+.2f} MOA, "
            f"wind {w_mil:+.2f} MIL / {w_moa:+.2f} MOA, "
            f"drop {self.drop:.1f} in, drift {self.windage:.1f} in, "
            f"{self.velocity:.0f} fps, {self.energy:.0f} ft-lb, "
            f"TOF {self.time_of_flight:.3f} s"
        )


def assemble_solution(trajectory: Trajectory, distance: float,
                      distance_unit: str = DistanceUnit.YARDS.value,
                      include_trajectory: bool = False) -> BallisticSolution:
    """
    Solution at ``distance`` (in ``distance_unit``) from an integrated trajectory.

    Raises OutOfRangeDistance when ``distance`` lies past the last sample.
    """
    unit = DistanceUnit(distance_unit)
    distance_yards = to_yards(distance, unit)
    point = trajectory.at_distance(distance_yards)

    return BallisticSolution(
        distance=distance,
        distance_unit=unit.value,
        distance_yards=distance_yards,
        elevation_correction=Correction.from_inches(-point.drop, distance_yards),
        windage_correction=Correction.from_inches(-point.windage, distance_yards),
        drop=point.drop,
        windage=point.windage,
        velocity=point.velocity,
        energy=point.energy,
        time_of_flight=point.time,
        zero_angle=trajectory.bore_angle,
        max_ordinate=trajectory.max_ordinate,
        max_ordinate_distance=trajectory.max_ordinate_distance,
        trajectory=trajectory if include_trajectory else None,
    )


def solve(rifle: RifleConfig, ammo: AmmoConfig, shot: ShotParameters,
          atmosphere: AtmosphericConditions = STANDARD_ATMOSPHERE,
          config: Optional[EngineConfig] = None,
          include_trajectory: bool = False) -> BallisticSolution:
    """
    Complete firing solution for one shot.

    The rifle is zeroed in ``atmosphere``, then the shot is integrated with
    its wind, incline and (when given) Coriolis inputs out to the target.

    Raises
    ------
    ZeroSolveFailure
        The zero could not be found.
    OutOfRangeDistance
        Integration stopped (velocity floor, iteration cap) short of the target.
    """
    cfg = config or DEFAULT_ENGINE_CONFIG
    zero_angle = find_zero_angle(rifle, ammo, atmosphere, cfg)
    trajectory = integrate_trajectory(ammo, zero_angle, shot.distance_yards, rifle.sight_height,
                                      atmosphere=atmosphere, shot=shot, config=cfg)
    return assemble_solution(trajectory, shot.distance, shot.distance_unit, include_trajectory)


def dope_table(rifle: RifleConfig, ammo: AmmoConfig, distances: Iterable[float],
               atmosphere: AtmosphericConditions = STANDARD_ATMOSPHERE,
               wind_speed: float = 0.0, wind_direction: float = 90.0, angle: float = 0.0,
               distance_unit: str = DistanceUnit.YARDS.value,
               config: Optional[EngineConfig] = None) -> List[BallisticSolution]:
    """
    Range card: one solution per distance, in the order given.

    A single integration out to the farthest distance serves every row; each
    row's drop, drift and corrections match ``solve`` at that distance.
    """
    distances = list(distances)
    if not distances:
        return []
    if len(set(distances)) != len(distances):
        raise InvalidConfiguration(["distances must not repeat"])

    cfg = config or DEFAULT_ENGINE_CONFIG
    farthest = ShotParameters(distance=max(distances), angle=angle, wind_speed=wind_speed,
                              wind_direction=wind_direction, distance_unit=distance_unit)
    # Validate every row up front
    for d in distances:
        ShotParameters(distance=d, angle=angle, wind_speed=wind_speed,
                       wind_direction=wind_direction, distance_unit=distance_unit)

    zero_angle = find_zero_angle(rifle, ammo, atmosphere, cfg)
    trajectory = integrate_trajectory(ammo, zero_angle, farthest.distance_yards,
                                      rifle.sight_height, atmosphere=atmosphere,
                                      shot=farthest, config=cfg)
    logger.debug(f"DOPE table: {len(distances)} rows from one integration "
                 f"to {farthest.distance_yards:.0f} yd")
    return [assemble_solution(trajectory, d, distance_unit) for d in distances]

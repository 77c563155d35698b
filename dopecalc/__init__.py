"""
DOPE Calculator — Exterior Ballistics Engine
============================================
Computes firing solutions for rifle fire from a rifle/ammunition profile,
atmospheric conditions and a target distance:
  - Atmosphere: speed of sound, moist-air density ratio, density altitude
  - G1 / G7 standard drag functions (Cd vs Mach)
  - Zero solver for the bore angle at the rifle's zero distance
  - RK4 point-mass trajectory with wind, incline and optional Coriolis
  - Elevation / windage corrections in MIL and MOA, DOPE and wind tables
  - Supersonic → transonic → subsonic transition analysis

Every entry point is a pure function of its inputs; nothing is cached or
shared between calls.
"""

from .atmosphere import (
    AtmosphericConditions, STANDARD_ATMOSPHERE,
    speed_of_sound, calculate_atmospheric_conditions, density_altitude,
)
from .config import EngineConfig, DEFAULT_ENGINE_CONFIG, create_engine_config, load_engine_config
from .drag_model import DragModel, FlightRegime, drag_coefficient, analyze_drag
from .exceptions import BallisticsError, InvalidConfiguration, ZeroSolveFailure, OutOfRangeDistance
from .integrator import Trajectory, TrajectoryPoint, integrate_trajectory
from .logger import logger, enable_file_logging, disable_file_logging
from .projectile import RifleConfig, AmmoConfig, ShotParameters
from .solution import BallisticSolution, Correction, solve, dope_table
from .subsonic import (
    SubsonicTransitionResult, analyze_subsonic_transition,
    get_flight_regime, calculate_mach,
    will_remain_supersonic, estimate_max_supersonic_range,
    get_supersonic_margin, get_mach_margin,
)
from .units import AngularUnit, DistanceUnit
from .wind_table import WindTableEntry, generate_wind_table
from .zero import find_zero_angle

__version__ = "1.0.0"
__all__ = [
    'AtmosphericConditions', 'STANDARD_ATMOSPHERE',
    'speed_of_sound', 'calculate_atmospheric_conditions', 'density_altitude',
    'EngineConfig', 'DEFAULT_ENGINE_CONFIG', 'create_engine_config', 'load_engine_config',
    'DragModel', 'FlightRegime', 'drag_coefficient', 'analyze_drag',
    'BallisticsError', 'InvalidConfiguration', 'ZeroSolveFailure', 'OutOfRangeDistance',
    'Trajectory', 'TrajectoryPoint', 'integrate_trajectory',
    'logger', 'enable_file_logging', 'disable_file_logging',
    'RifleConfig', 'AmmoConfig', 'ShotParameters',
    'BallisticSolution', 'Correction', 'solve', 'dope_table',
    'SubsonicTransitionResult', 'analyze_subsonic_transition',
    'get_flight_regime', 'calculate_mach',
    'will_remain_supersonic', 'estimate_max_supersonic_range',
    'get_supersonic_margin', 'get_mach_margin',
    'AngularUnit', 'DistanceUnit',
    'WindTableEntry', 'generate_wind_table',
    'find_zero_angle',
]

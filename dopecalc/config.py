"""
Engine Configuration
====================
Numerical knobs shared by the zero solver and the trajectory integrator.

There is no process-wide mutable configuration: every entry point takes an
optional ``config`` argument and falls back to DEFAULT_ENGINE_CONFIG.
Overrides are merged over the defaults from a plain mapping or from the
``[engine]`` table of a TOML file.
"""

import tomllib
from dataclasses import asdict, dataclass, fields
from numbers import Real
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .exceptions import InvalidConfiguration


GRAVITY_FPS2 = 32.174  # ft/s²

_INTEGER_SETTINGS = ("max_iterations", "zero_max_iterations")


@dataclass(frozen=True)
class EngineConfig:
    time_step: float = 0.001          # s, fixed RK4 step
    max_iterations: int = 100_000     # integrator hard cap
    zero_tolerance: float = 0.001     # in, allowed miss at the zero distance
    zero_max_iterations: int = 50
    zero_max_angle: float = 0.1       # rad, upper bracket of the zero search
    minimum_velocity: float = 50.0    # fps, integration stops below this
    gravity: float = GRAVITY_FPS2     # ft/s²

    def __post_init__(self):
        errors = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in _INTEGER_SETTINGS:
                if isinstance(value, bool) or not isinstance(value, int):
                    errors.append(f"{f.name} must be an integer, got {value!r}")
                    continue
            elif isinstance(value, bool) or not isinstance(value, Real):
                errors.append(f"{f.name} must be a number, got {value!r}")
                continue
            if not value > 0:
                errors.append(f"{f.name} must be > 0, got {value!r}")
        if isinstance(self.time_step, Real) and self.time_step > 0.01:
            errors.append(f"time_step must be <= 0.01 s, got {self.time_step!r}")
        if errors:
            raise InvalidConfiguration(errors)


DEFAULT_ENGINE_CONFIG = EngineConfig()


def create_engine_config(overrides: Optional[Mapping[str, Any]] = None) -> EngineConfig:
    """Merge a partial mapping of settings over the defaults."""
    config = asdict(DEFAULT_ENGINE_CONFIG)
    if overrides:
        unknown = sorted(set(overrides) - set(config))
        if unknown:
            raise InvalidConfiguration([f"unknown engine setting '{key}'" for key in unknown])
        config.update({k: v for k, v in overrides.items() if v is not None})
    return EngineConfig(**config)


def load_engine_config(path: Union[str, Path]) -> EngineConfig:
    """
    Read engine settings from the ``[engine]`` table of a TOML file.

    A file without that table yields the defaults.
    """
    with open(path, 'rb') as fp:
        data = tomllib.load(fp)
    return create_engine_config(data.get('engine', {}))

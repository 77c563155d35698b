"""
Aerodynamic Drag Model
======================
Standard reference drag functions for small-arms projectiles:

- G1 — flat-base reference projectile (most published BCs)
- G7 — long boat-tail reference projectile (modern long-range bullets)

Cd vs Mach tables are the standard published G1/G7 functions. Lookup is
linear between the two bracketing Mach values; Mach values outside a table
clamp to the nearest endpoint instead of extrapolating. Tables are
immutable module data, so identical inputs always give bit-identical Cd.

Deceleration from drag (ft/s²):

    a = k × (ρ/ρ0) × Cd(M) × v²,    k = 2.08551e-4 / BC

where 2.08551e-4 folds the reference projectile's mass/area and the
standard air density into imperial units.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union

import numpy as np


# ══════════════════════════════════════════════════════════════════════════
#  Cd vs Mach tables: standard G1 / G7 drag functions
# ══════════════════════════════════════════════════════════════════════════

G1_DATA = {
    'name': 'G1 (flat base)',
    'mach': [
        0.0, 0.05, 0.1, 0.15, 0.2, 0.25, 0.3, 0.35, 0.4, 0.45,
        0.5, 0.55, 0.6, 0.7, 0.725, 0.75, 0.775, 0.8, 0.825, 0.85,
        0.875, 0.9, 0.925, 0.95, 0.975, 1.0, 1.025, 1.05, 1.075, 1.1,
        1.125, 1.15, 1.2, 1.25, 1.3, 1.35, 1.4, 1.45, 1.5, 1.55,
        1.6, 1.65, 1.7, 1.75, 1.8, 1.85, 1.9, 1.95, 2.0, 2.05,
        2.1, 2.15, 2.2, 2.25, 2.3, 2.35, 2.4, 2.45, 2.5, 2.6,
        2.7, 2.8, 2.9, 3.0, 3.1, 3.2, 3.3, 3.4, 3.5, 3.6,
        3.7, 3.8, 3.9, 4.0, 4.2, 4.4, 4.6, 4.8, 5.0,
    ],
    'cd': [
        0.2629, 0.2558, 0.2487, 0.2413, 0.2344, 0.2278, 0.2214, 0.2155, 0.2104, 0.2061,
        0.2032, 0.2020, 0.2034, 0.2165, 0.2230, 0.2313, 0.2417, 0.2546, 0.2706, 0.2901,
        0.3136, 0.3415, 0.3734, 0.4084, 0.4448, 0.4805, 0.5136, 0.5427, 0.5677, 0.5883,
        0.6053, 0.6191, 0.6393, 0.6518, 0.6589, 0.6621, 0.6625, 0.6607, 0.6573, 0.6528,
        0.6474, 0.6413, 0.6347, 0.6280, 0.6210, 0.6141, 0.6072, 0.6003, 0.5934, 0.5867,
        0.5804, 0.5743, 0.5685, 0.5630, 0.5577, 0.5527, 0.5481, 0.5438, 0.5397, 0.5325,
        0.5264, 0.5211, 0.5168, 0.5133, 0.5105, 0.5084, 0.5067, 0.5054, 0.5040, 0.5030,
        0.5022, 0.5016, 0.5010, 0.5006, 0.4998, 0.4995, 0.4992, 0.4990, 0.4988,
    ],
}

G7_DATA = {
    'name': 'G7 (boat tail)',
    'mach': [
        0.0, 0.05, 0.1, 0.15, 0.2, 0.25, 0.3, 0.35, 0.4, 0.45,
        0.5, 0.55, 0.6, 0.65, 0.7, 0.725, 0.75, 0.775, 0.8, 0.825,
        0.85, 0.875, 0.9, 0.925, 0.95, 0.975, 1.0, 1.025, 1.05, 1.075,
        1.1, 1.125, 1.15, 1.2, 1.25, 1.3, 1.35, 1.4, 1.5, 1.55,
        1.6, 1.65, 1.7, 1.75, 1.8, 1.85, 1.9, 1.95, 2.0, 2.05,
        2.1, 2.15, 2.2, 2.25, 2.3, 2.35, 2.4, 2.45, 2.5, 2.55,
        2.6, 2.65, 2.7, 2.75, 2.8, 2.85, 2.9, 2.95, 3.0, 3.1,
        3.2, 3.3, 3.4, 3.5, 3.6, 3.7, 3.8, 3.9, 4.0, 4.2,
        4.4, 4.6, 4.8, 5.0,
    ],
    'cd': [
        0.1198, 0.1197, 0.1196, 0.1194, 0.1193, 0.1194, 0.1194, 0.1194, 0.1193, 0.1193,
        0.1194, 0.1193, 0.1194, 0.1197, 0.1202, 0.1207, 0.1215, 0.1226, 0.1242, 0.1266,
        0.1306, 0.1368, 0.1464, 0.1660, 0.2054, 0.2993, 0.3803, 0.4015, 0.4043, 0.4034,
        0.4014, 0.3987, 0.3955, 0.3884, 0.3810, 0.3732, 0.3657, 0.3580, 0.3440, 0.3376,
        0.3315, 0.3260, 0.3209, 0.3160, 0.3117, 0.3078, 0.3042, 0.3010, 0.2980, 0.2951,
        0.2922, 0.2892, 0.2864, 0.2835, 0.2807, 0.2779, 0.2752, 0.2725, 0.2697, 0.2670,
        0.2643, 0.2615, 0.2588, 0.2561, 0.2533, 0.2506, 0.2479, 0.2451, 0.2424, 0.2368,
        0.2313, 0.2258, 0.2205, 0.2154, 0.2106, 0.2060, 0.2017, 0.1975, 0.1935, 0.1861,
        0.1793, 0.1730, 0.1672, 0.1618,
    ],
}

ALL_MODELS = {
    'G1': G1_DATA,
    'G7': G7_DATA,
}

# Drag constant for BC in lb/in² and velocity in fps → ft/s²
DRAG_CONSTANT = 2.08551e-4

# BCs are published for supersonic flight; reference Mach for BC adjustment
BC_REFERENCE_MACH = 2.0

# |dCd/dM| above which flight is flagged as unstable
UNSTABLE_DRAG_RATE = 0.05


# ══════════════════════════════════════════════════════════════════════════
#  Flight regimes
# ══════════════════════════════════════════════════════════════════════════

TRANSONIC_UPPER = 1.2   # Mach ≥ this: supersonic
TRANSONIC_LOWER = 0.8   # Mach ≤ this: subsonic
SONIC = 1.0


class FlightRegime(str, Enum):
    SUPERSONIC = 'supersonic'
    TRANSONIC = 'transonic'
    SUBSONIC = 'subsonic'


def get_flight_regime(mach: float) -> FlightRegime:
    """
    Classify a Mach number.

    supersonic: M ≥ 1.2, subsonic: M ≤ 0.8, transonic in between.
    """
    if mach >= TRANSONIC_UPPER:
        return FlightRegime.SUPERSONIC
    if mach <= TRANSONIC_LOWER:
        return FlightRegime.SUBSONIC
    return FlightRegime.TRANSONIC


# ══════════════════════════════════════════════════════════════════════════
#  Table lookup
# ══════════════════════════════════════════════════════════════════════════

class DragModel:
    """
    Drag coefficient table for one standard drag function.

    Linear interpolation over the Cd vs Mach data, clamped to the table
    endpoints outside its Mach range.
    """

    def __init__(self, model_key: str = 'G7'):
        """
        Parameters
        ----------
        model_key : str
            'G1' or 'G7'
        """
        key = str(getattr(model_key, 'value', model_key)).upper()
        if key not in ALL_MODELS:
            raise ValueError(
                f"Unknown drag model '{model_key}'. "
                f"Available: {list(ALL_MODELS.keys())}"
            )

        data = ALL_MODELS[key]
        self.name = data['name']
        self.model_key = key

        self._mach = np.array(data['mach'], dtype=float)
        self._cd = np.array(data['cd'], dtype=float)
        self._mach.flags.writeable = False
        self._cd.flags.writeable = False

    @property
    def mach_range(self) -> Tuple[float, float]:
        return float(self._mach[0]), float(self._mach[-1])

    @property
    def table(self) -> Tuple[np.ndarray, np.ndarray]:
        """Read-only (mach, cd) arrays."""
        return self._mach, self._cd

    def cd(self, mach: float) -> float:
        """Return drag coefficient at the given Mach number."""
        # np.interp returns the tabulated value on an exact Mach match
        # and clamps to the endpoint values outside the table.
        return float(np.interp(mach, self._mach, self._cd))

    def cd_array(self, mach_array: np.ndarray) -> np.ndarray:
        """Vectorized Cd lookup."""
        return np.interp(np.asarray(mach_array, dtype=float), self._mach, self._cd)

    def __repr__(self) -> str:
        return f"DragModel('{self.model_key}')"


_MODELS: Dict[str, DragModel] = {key: DragModel(key) for key in ALL_MODELS}


def get_drag_model(model: Union[str, DragModel]) -> DragModel:
    """Shared read-only table for 'G1' / 'G7' (or a DragModel passed through)."""
    if isinstance(model, DragModel):
        return model
    key = str(getattr(model, 'value', model)).upper()
    if key not in _MODELS:
        raise ValueError(f"Unknown drag model '{model}'. Available: {list(_MODELS)}")
    return _MODELS[key]


def drag_coefficient(mach: float, model: Union[str, DragModel]) -> float:
    """Cd of standard drag function ``model`` at ``mach``."""
    return get_drag_model(model).cd(mach)


def drag_deceleration(speed: float, speed_of_sound: float, bc: float,
                      density_ratio: float, model: Union[str, DragModel]) -> float:
    """
    Magnitude of drag deceleration (ft/s²) at air-relative ``speed`` (fps).

    a = (2.08551e-4 / BC) × (ρ/ρ0) × Cd(v / c) × v²
    """
    if speed <= 0.0:
        return 0.0
    cd = drag_coefficient(speed / speed_of_sound, model)
    return DRAG_CONSTANT / bc * density_ratio * cd * speed * speed


# ══════════════════════════════════════════════════════════════════════════
#  Drag analysis helpers
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DragAnalysis:
    """Drag characteristics at one velocity."""
    mach: float
    regime: FlightRegime
    cd: float
    cd_change_rate: float   # dCd/dM, sampled over 0.01 Mach
    bc_adjustment: float    # multiply published BC by this
    is_unstable: bool
    description: str


def drag_change_rate(mach: float, model: Union[str, DragModel], delta: float = 0.01) -> float:
    """Central-difference dCd/dM over ``delta`` Mach centred on ``mach``."""
    table = get_drag_model(model)
    return (table.cd(mach + delta / 2) - table.cd(mach - delta / 2)) / delta


def subsonic_bc_adjustment(mach: float, model: Union[str, DragModel]) -> float:
    """
    Factor on a published BC at ``mach``.

    BC is inversely proportional to Cd, so the factor is Cd(M2.0) / Cd(M);
    below the reference Mach the bullet behaves as if its BC were lower.
    """
    table = get_drag_model(model)
    cd_current = table.cd(mach)
    if cd_current <= 0:
        return 1.0
    return table.cd(BC_REFERENCE_MACH) / cd_current


def effective_bc(published_bc: float, velocity: float, model: Union[str, DragModel],
                 speed_of_sound: float) -> float:
    """Published BC adjusted to the drag regime at ``velocity``."""
    return published_bc * subsonic_bc_adjustment(velocity / speed_of_sound, model)


def drag_ratio(mach_from: float, mach_to: float, model: Union[str, DragModel]) -> float:
    """Cd(mach_to) / Cd(mach_from)."""
    table = get_drag_model(model)
    cd_from = table.cd(mach_from)
    if cd_from <= 0:
        return 1.0
    return table.cd(mach_to) / cd_from


def max_drag_mach(model: Union[str, DragModel]) -> Tuple[float, float]:
    """(Mach, Cd) of the tabulated drag peak."""
    mach, cd = get_drag_model(model).table
    i = int(np.argmax(cd))
    return float(mach[i]), float(cd[i])


def analyze_drag(velocity: float, model: Union[str, DragModel],
                 speed_of_sound: float) -> DragAnalysis:
    """Summarize drag behaviour of a bullet at ``velocity`` fps."""
    mach = velocity / speed_of_sound
    regime = get_flight_regime(mach)
    cd = drag_coefficient(mach, model)
    rate = drag_change_rate(mach, model)
    adjustment = subsonic_bc_adjustment(mach, model)
    unstable = abs(rate) > UNSTABLE_DRAG_RATE

    if regime is FlightRegime.SUPERSONIC:
        description = f"Supersonic flight (Mach {mach:.2f}). Drag is stable and predictable."
    elif regime is FlightRegime.SUBSONIC:
        description = (f"Subsonic flight (Mach {mach:.2f}). BC effectiveness reduced to "
                       f"{adjustment * 100:.0f}% of published value.")
    elif unstable:
        description = (f"Transonic zone (Mach {mach:.2f}). Drag is changing rapidly - "
                       f"accuracy may be degraded.")
    else:
        description = (f"Transonic zone (Mach {mach:.2f}). Bullet transitioning between "
                       f"flight regimes.")

    return DragAnalysis(
        mach=mach,
        regime=regime,
        cd=cd,
        cd_change_rate=rate,
        bc_adjustment=adjustment,
        is_unstable=unstable,
        description=description,
    )


if __name__ == "__main__":
    print("Drag Model — Cd vs Mach for G1 / G7")
    print("=" * 50)
    print(f"{'Mach':>6} {'G1':>8} {'G7':>8}")
    for m in [0.5, 0.8, 0.9, 1.0, 1.2, 1.5, 2.0, 2.5, 3.0]:
        print(f"{m:>6.2f} {drag_coefficient(m, 'G1'):>8.4f} {drag_coefficient(m, 'G7'):>8.4f}")
    for key in ALL_MODELS:
        m, c = max_drag_mach(key)
        print(f"  {key} peak drag: Cd={c:.4f} at Mach {m:.3f}")

"""
Unit Tests for the Wind Table Generator
=======================================
Run: python -m pytest tests/ -v
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dopecalc.exceptions import InvalidConfiguration
from dopecalc.projectile import AmmoConfig, RifleConfig, ShotParameters
from dopecalc.solution import solve
from dopecalc.wind_table import (
    DEFAULT_WIND_SPEEDS, crosswind_component, generate_wind_table, headwind_component,
)


RIFLE = RifleConfig(sight_height=1.5, zero_distance=100)
AMMO = AmmoConfig(muzzle_velocity=2650, ballistic_coefficient=0.462, drag_model='G1',
                  bullet_weight=168)
DISTANCES = [200, 400, 600]
SPEEDS = [0, 5, 10, 20]


@pytest.fixture(scope='module')
def table():
    return generate_wind_table(RIFLE, AMMO, DISTANCES, wind_speeds=SPEEDS, wind_direction=90)


class TestComponents:

    def test_full_value(self):
        assert crosswind_component(10, 90) == pytest.approx(10.0)
        assert crosswind_component(10, 270) == pytest.approx(-10.0)

    def test_headwind_and_tailwind(self):
        assert headwind_component(10, 0) == pytest.approx(10.0)
        assert headwind_component(10, 180) == pytest.approx(-10.0)
        assert crosswind_component(10, 0) == pytest.approx(0.0)

    def test_quartering(self):
        assert crosswind_component(10, 45) == pytest.approx(7.0711, abs=1e-4)
        assert headwind_component(10, 45) == pytest.approx(7.0711, abs=1e-4)


class TestWindTable:

    def test_completeness(self, table):
        assert len(table) == len(DISTANCES) * len(SPEEDS)
        keys = {entry.key for entry in table}
        assert len(keys) == len(table)
        assert keys == {(d, s) for d in DISTANCES for s in SPEEDS}

    def test_order_distance_then_speed(self, table):
        assert [(e.distance, e.wind_speed) for e in table] == \
            [(d, s) for d in DISTANCES for s in SPEEDS]

    def test_no_wind_no_drift(self, table):
        for entry in table:
            if entry.wind_speed == 0:
                assert entry.wind_drift == 0.0
                assert entry.windage_mil == 0.0

    def test_drift_grows_with_speed_and_distance(self, table):
        cells = {entry.key: entry for entry in table}
        for d in DISTANCES:
            drifts = [abs(cells[(d, s)].wind_drift) for s in SPEEDS]
            assert drifts == sorted(drifts)
        for s in SPEEDS[1:]:
            drifts = [abs(cells[(d, s)].wind_drift) for d in DISTANCES]
            assert drifts[0] < drifts[1] < drifts[2]

    def test_drift_roughly_linear_in_speed(self, table):
        cells = {entry.key: entry for entry in table}
        ratio = cells[(600, 20)].wind_drift / cells[(600, 10)].wind_drift
        assert ratio == pytest.approx(2.0, rel=0.02)

    def test_matches_solve(self, table):
        cell = next(e for e in table if e.key == (400, 10))
        sol = solve(RIFLE, AMMO, ShotParameters(distance=400, wind_speed=10, wind_direction=90))
        assert cell.wind_drift == pytest.approx(sol.windage, abs=1e-9)
        assert cell.windage_mil == pytest.approx(sol.windage_correction.mil, abs=1e-9)
        assert cell.windage_moa == pytest.approx(sol.windage_correction.moa, abs=1e-9)

    def test_parallel_identical(self, table):
        parallel = generate_wind_table(RIFLE, AMMO, DISTANCES, wind_speeds=SPEEDS,
                                       wind_direction=90, max_workers=3)
        assert parallel == table

    def test_direction_recorded(self):
        entries = generate_wind_table(RIFLE, AMMO, [300], wind_speeds=[10], wind_direction=45)
        assert entries[0].wind_direction == 45
        full = generate_wind_table(RIFLE, AMMO, [300], wind_speeds=[10], wind_direction=90)
        assert abs(entries[0].wind_drift) < abs(full[0].wind_drift)

    def test_default_speeds(self):
        entries = generate_wind_table(RIFLE, AMMO, [300])
        assert [e.wind_speed for e in entries] == list(DEFAULT_WIND_SPEEDS)

    def test_empty_inputs(self):
        assert generate_wind_table(RIFLE, AMMO, [], wind_speeds=SPEEDS) == []
        assert generate_wind_table(RIFLE, AMMO, DISTANCES, wind_speeds=[]) == []

    def test_duplicate_keys_rejected(self):
        with pytest.raises(InvalidConfiguration):
            generate_wind_table(RIFLE, AMMO, [200, 200], wind_speeds=SPEEDS)
        with pytest.raises(InvalidConfiguration):
            generate_wind_table(RIFLE, AMMO, DISTANCES, wind_speeds=[5, 5])


if __name__ == "__main__":
    pytest.main([__file__, '-v'])

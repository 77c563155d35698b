"""
Unit Tests for Unit Conversions
===============================
Run: python -m pytest tests/ -v
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dopecalc.units import (
    AngularUnit, DistanceUnit, celsius_to_fahrenheit, convert_angular,
    convert_distance, correction_to_clicks, correction_to_inches,
    fahrenheit_to_celsius, from_yards, grains_to_grams, inches_to_correction,
    inhg_to_mbar, meters_to_yards, mil_to_moa, moa_to_mil, mph_to_fps,
    to_yards, yards_to_meters,
)


class TestLinear:

    def test_yards_meters(self):
        assert yards_to_meters(100) == pytest.approx(91.44)
        assert meters_to_yards(91.44) == pytest.approx(100.0)

    def test_to_yards_normalizes(self):
        assert to_yards(100, 'meters') == pytest.approx(109.3613, rel=1e-5)
        assert to_yards(100, DistanceUnit.YARDS) == 100.0

    def test_from_yards(self):
        assert from_yards(100, 'meters') == pytest.approx(91.44)

    def test_convert_distance(self):
        assert convert_distance(500, 'yards', 'meters') == pytest.approx(457.2)
        assert convert_distance(500, 'meters', 'meters') == pytest.approx(500.0)

    def test_unknown_unit_rejected(self):
        with pytest.raises(ValueError):
            to_yards(100, 'furlongs')


class TestOther:

    def test_mph_to_fps(self):
        assert mph_to_fps(60) == pytest.approx(88.0)

    def test_temperature(self):
        assert fahrenheit_to_celsius(212) == pytest.approx(100.0)
        assert celsius_to_fahrenheit(-40) == pytest.approx(-40.0)

    def test_pressure(self):
        assert inhg_to_mbar(29.92) == pytest.approx(1013.2, abs=0.1)

    def test_mass(self):
        assert grains_to_grams(168) == pytest.approx(10.886, abs=0.001)


class TestAngular:

    def test_moa_at_100_yards(self):
        assert inches_to_correction(1.047, 100, 'MOA') == pytest.approx(1.0)

    def test_mil_at_100_yards(self):
        assert inches_to_correction(3.6, 100, 'MIL') == pytest.approx(1.0)

    def test_shooter_rule_constants(self):
        """MOA = in / yd × 95.5 and MIL = in / yd × 27.78."""
        assert inches_to_correction(10, 500, 'MOA') == pytest.approx(10 / 500 * 95.5, rel=1e-3)
        assert inches_to_correction(10, 500, 'MIL') == pytest.approx(10 / 500 * 27.78, rel=1e-3)

    def test_zero_distance_gives_zero(self):
        assert inches_to_correction(5.0, 0, 'MIL') == 0.0

    @pytest.mark.parametrize('distance', [1.0, 100.0, 537.5, 2000.0])
    def test_moa_inches_round_trip(self, distance):
        for moa in (0.25, 3.7, -12.0):
            inches = correction_to_inches(moa, distance, AngularUnit.MOA)
            assert inches_to_correction(inches, distance, AngularUnit.MOA) == pytest.approx(moa)

    def test_mil_moa(self):
        assert mil_to_moa(1.0) == pytest.approx(3.438, abs=0.001)
        assert moa_to_mil(mil_to_moa(2.5)) == pytest.approx(2.5)
        assert convert_angular(1.0, 'MIL', 'MIL') == 1.0
        assert convert_angular(3.438, 'MOA', 'MIL') == pytest.approx(1.0, abs=0.001)

    def test_clicks(self):
        assert correction_to_clicks(2.3, 0.1) == 23
        assert correction_to_clicks(-1.0, 0.25) == -4
        with pytest.raises(ValueError):
            correction_to_clicks(1.0, 0)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])

"""
Unit Tests for the G1 / G7 Drag Model
=====================================
Run: python -m pytest tests/ -v
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dopecalc.drag_model import (
    ALL_MODELS, DRAG_CONSTANT, DragModel, FlightRegime, G1_DATA, G7_DATA,
    analyze_drag, drag_coefficient, drag_deceleration, drag_ratio,
    effective_bc, get_drag_model, get_flight_regime, max_drag_mach,
    subsonic_bc_adjustment,
)


class TestTables:

    @pytest.mark.parametrize('data', [G1_DATA, G7_DATA])
    def test_table_shape(self, data):
        assert len(data['mach']) == len(data['cd'])
        assert len(data['mach']) >= 77
        assert np.all(np.diff(data['mach']) > 0)

    def test_tables_read_only(self):
        mach, cd = get_drag_model('G1').table
        with pytest.raises(ValueError):
            cd[0] = 1.0

    def test_unknown_model_rejected(self):
        with pytest.raises(ValueError):
            DragModel('G8')
        with pytest.raises(ValueError):
            drag_coefficient(1.0, 'G2')

    def test_model_key_case_insensitive(self):
        assert drag_coefficient(1.5, 'g7') == drag_coefficient(1.5, 'G7')


class TestLookup:

    @pytest.mark.parametrize('key', list(ALL_MODELS))
    def test_exact_at_tabulated_mach(self, key):
        """Every tabulated Mach returns its tabulated Cd, bit for bit."""
        data = ALL_MODELS[key]
        for mach, cd in zip(data['mach'], data['cd']):
            assert drag_coefficient(mach, key) == cd

    def test_midpoint_is_linear_average(self):
        mach, cd = G1_DATA['mach'], G1_DATA['cd']
        for i in (0, 13, 25, 40, len(mach) - 2):
            mid = (mach[i] + mach[i + 1]) / 2
            assert drag_coefficient(mid, 'G1') == pytest.approx((cd[i] + cd[i + 1]) / 2)

    def test_clamps_outside_table(self):
        assert drag_coefficient(-0.5, 'G1') == G1_DATA['cd'][0]
        assert drag_coefficient(7.0, 'G1') == G1_DATA['cd'][-1]
        assert drag_coefficient(9.0, 'G7') == G7_DATA['cd'][-1]

    def test_deterministic(self):
        values = [drag_coefficient(m, 'G7') for m in np.linspace(0.3, 3.3, 50)]
        again = [drag_coefficient(m, 'G7') for m in np.linspace(0.3, 3.3, 50)]
        assert values == again

    def test_transonic_drag_rise(self):
        for key in ALL_MODELS:
            assert drag_coefficient(1.1, key) > drag_coefficient(0.7, key)

    def test_g7_lower_drag_than_g1(self):
        for mach in (0.5, 1.0, 2.0, 3.0):
            assert drag_coefficient(mach, 'G7') < drag_coefficient(mach, 'G1')

    def test_vectorized_matches_scalar(self):
        model = get_drag_model('G1')
        machs = np.array([0.9, 1.3, 2.75])
        np.testing.assert_array_equal(model.cd_array(machs), [model.cd(m) for m in machs])


class TestPublishedValues:
    """Spot values of the standard G1 / G7 drag functions."""

    @pytest.mark.parametrize('mach, cd', [
        (0.5, 0.2032), (0.9, 0.3415), (1.0, 0.4805), (1.2, 0.6393),
        (1.4, 0.6625), (2.0, 0.5934), (3.0, 0.5133),
    ])
    def test_g1(self, mach, cd):
        assert drag_coefficient(mach, 'G1') == cd

    @pytest.mark.parametrize('mach, cd', [
        (0.5, 0.1194), (0.9, 0.1464), (1.0, 0.3803), (1.05, 0.4043),
        (1.2, 0.3884), (2.0, 0.2980), (5.0, 0.1618),
    ])
    def test_g7(self, mach, cd):
        assert drag_coefficient(mach, 'G7') == cd

    def test_table_sizes(self):
        assert len(G1_DATA['mach']) == 79
        assert len(G7_DATA['mach']) == 84

    def test_g7_peaks_just_past_mach_1(self):
        mach, cd = max_drag_mach('G7')
        assert mach == 1.05
        assert cd == 0.4043

    def test_g7_falls_off_supersonic(self):
        g7 = [drag_coefficient(m, 'G7') for m in (1.2, 2.0, 3.0)]
        assert g7[0] > g7[1] > g7[2]

    def test_g1_peak(self):
        assert max_drag_mach('G1') == (1.4, 0.6625)


class TestDeceleration:

    def test_formula(self):
        sos = 1116.45
        expected = DRAG_CONSTANT / 0.5 * 1.0 * drag_coefficient(2650 / sos, 'G1') * 2650 ** 2
        assert drag_deceleration(2650, sos, 0.5, 1.0, 'G1') == pytest.approx(expected)

    def test_zero_at_rest(self):
        assert drag_deceleration(0.0, 1116.45, 0.5, 1.0, 'G1') == 0.0

    def test_denser_air_more_drag(self):
        thin = drag_deceleration(2500, 1116.45, 0.5, 0.8, 'G7')
        thick = drag_deceleration(2500, 1116.45, 0.5, 1.1, 'G7')
        assert thick > thin

    def test_higher_bc_less_drag(self):
        assert (drag_deceleration(2500, 1116.45, 0.6, 1.0, 'G1')
                < drag_deceleration(2500, 1116.45, 0.3, 1.0, 'G1'))


class TestFlightRegime:

    def test_thresholds(self):
        assert get_flight_regime(1.2) is FlightRegime.SUPERSONIC
        assert get_flight_regime(1.19) is FlightRegime.TRANSONIC
        assert get_flight_regime(0.8) is FlightRegime.SUBSONIC
        assert get_flight_regime(0.81) is FlightRegime.TRANSONIC

    def test_string_values(self):
        assert get_flight_regime(2.0) == "supersonic"
        assert get_flight_regime(1.0) == "transonic"
        assert get_flight_regime(0.5) == "subsonic"


class TestAnalysis:

    def test_supersonic_analysis(self):
        a = analyze_drag(2650, 'G1', 1116.45)
        assert a.regime is FlightRegime.SUPERSONIC
        assert a.mach == pytest.approx(2650 / 1116.45)
        assert "Supersonic" in a.description

    def test_transonic_unstable(self):
        """The drag rise near Mach 1 is steep enough to flag."""
        a = analyze_drag(1116.45, 'G1', 1116.45)
        assert a.regime is FlightRegime.TRANSONIC
        assert a.is_unstable
        assert a.cd_change_rate > 0

    def test_subsonic_reports_bc_adjustment(self):
        a = analyze_drag(800, 'G1', 1116.45)
        assert a.regime is FlightRegime.SUBSONIC
        assert a.bc_adjustment == pytest.approx(subsonic_bc_adjustment(a.mach, "G1"))
        assert "Subsonic" in a.description

    def test_bc_adjustment_unity_at_reference(self):
        assert subsonic_bc_adjustment(2.0, 'G1') == pytest.approx(1.0)

    def test_effective_bc(self):
        sos = 1116.45
        assert effective_bc(0.5, 2.0 * sos, 'G7', sos) == pytest.approx(0.5)

    def test_drag_ratio(self):
        assert drag_ratio(2.0, 2.0, 'G1') == pytest.approx(1.0)
        assert drag_ratio(0.7, 1.1, 'G1') > 1.0

    def test_max_drag_mach(self):
        mach, cd = max_drag_mach('G1')
        assert 1.0 < mach < 2.0
        assert cd == max(G1_DATA['cd'])


if __name__ == "__main__":
    pytest.main([__file__, '-v'])

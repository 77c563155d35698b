"""
Unit Tests for Subsonic / Transonic Analysis
============================================
Run: python -m pytest tests/ -v
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dopecalc.atmosphere import speed_of_sound
from dopecalc.integrator import TrajectoryPoint, integrate_trajectory
from dopecalc.projectile import AmmoConfig, RifleConfig
from dopecalc.subsonic import (
    STANDARD_SPEED_OF_SOUND, FlightRegime, analyze_subsonic_transition,
    calculate_mach, estimate_max_supersonic_range, get_flight_regime,
    get_mach_margin, get_supersonic_margin, is_subsonic, is_transonic,
    will_remain_supersonic,
)
from dopecalc.zero import find_zero_angle


# .308 175gr SMK velocities every 100 yd out to 1700 yd (1120 fps at 1600, 1020 at 1700)
VELOCITIES_308_175 = [
    2650, 2541, 2434, 2330, 2228, 2129, 2032, 1938, 1846,
    1756, 1668, 1581, 1495, 1409, 1321, 1228, 1120, 1020,
]


def make_trajectory(velocities, step=100):
    return [{'distance': i * step, 'velocity': v} for i, v in enumerate(velocities)]


class TestRegime:

    def test_thresholds(self):
        assert get_flight_regime(1.2) == "supersonic"
        assert get_flight_regime(1.19) == "transonic"
        assert get_flight_regime(0.8) == "subsonic"
        assert get_flight_regime(0.81) == "transonic"

    def test_calculate_mach(self):
        assert calculate_mach(2250.0, 1125.0) == pytest.approx(2.0)

    def test_mach_falls_back_to_standard(self):
        assert calculate_mach(STANDARD_SPEED_OF_SOUND, 0) == pytest.approx(1.0)
        assert STANDARD_SPEED_OF_SOUND == pytest.approx(1116.45, abs=0.1)

    def test_is_subsonic(self):
        assert is_subsonic(1000, 59)
        assert not is_subsonic(1500, 59)

    def test_is_subsonic_temperature(self):
        """1100 fps is supersonic in cold air and subsonic in hot air."""
        assert not is_subsonic(1100, -20)
        assert is_subsonic(1100, 100)

    def test_is_transonic(self):
        assert is_transonic(1000, 59)
        assert is_transonic(1200, 59)
        assert not is_transonic(1500, 59)
        assert not is_transonic(800, 59)


class TestWorkedExample:
    """The .308 175gr long-range case."""

    def test_supersonic_at_1000(self):
        result = analyze_subsonic_transition(make_trajectory(VELOCITIES_308_175), 59, 1000)
        assert result.goes_subsonic is False
        assert result.flight_regime is FlightRegime.SUPERSONIC
        assert result.warning is None

    def test_goes_subsonic_by_1700(self):
        result = analyze_subsonic_transition(make_trajectory(VELOCITIES_308_175), 59, 1700)
        assert result.goes_subsonic is True
        assert 1500 < result.transonic_distance < 1700
        assert result.flight_regime is FlightRegime.TRANSONIC
        assert result.velocity_at_target == 1020
        assert "Consider" in result.warning

    def test_crossings_interpolated(self):
        result = analyze_subsonic_transition(make_trajectory(VELOCITIES_308_175), 59, 1700)
        sos = speed_of_sound(59)
        m_prev, m_curr = 1120 / sos, 1020 / sos
        expected = 1700 - (1.0 - m_curr) / (m_prev - m_curr) * 100
        assert result.transonic_distance == pytest.approx(expected)
        assert 1300 < result.max_supersonic_distance < 1400
        assert result.subsonic_distance is None

    def test_speed_of_sound_reported(self):
        result = analyze_subsonic_transition(make_trajectory(VELOCITIES_308_175), 59, 1000)
        assert result.speed_of_sound == pytest.approx(speed_of_sound(59))


class TestTransitionCases:

    def test_staying_supersonic(self):
        traj = make_trajectory([2800, 2600, 2400, 2200, 2000, 1800, 1600, 1400])
        result = analyze_subsonic_transition(traj, 59, 500)
        assert not result.goes_subsonic
        assert result.mach_at_target > 1.2
        assert result.warning is None

    def test_going_subsonic(self):
        traj = make_trajectory([2800, 2400, 2000, 1600, 1200, 1000, 900, 850])
        result = analyze_subsonic_transition(traj, 59, 700)
        assert result.goes_subsonic
        assert result.transonic_distance < 700
        assert result.warning is not None

    def test_early_transition_warning(self):
        traj = make_trajectory([1500, 1300, 1100, 950, 850, 800, 780, 760])
        result = analyze_subsonic_transition(traj, 59, 700)
        assert "well before" in result.warning
        assert result.subsonic_distance is not None

    def test_transonic_advisory_without_crossing(self):
        traj = make_trajectory([2800, 2000, 1500, 1300, 1200])
        result = analyze_subsonic_transition(traj, 59, 400)
        assert not result.goes_subsonic
        assert result.flight_regime is FlightRegime.TRANSONIC
        assert "transonic zone" in result.warning

    def test_target_beyond_last_point(self):
        traj = make_trajectory([2800, 2400, 2000])
        result = analyze_subsonic_transition(traj, 59, 900)
        assert result.velocity_at_target == 2000

    def test_empty_trajectory(self):
        result = analyze_subsonic_transition([], 59, 500)
        assert result.goes_subsonic is False
        assert result.velocity_at_target == 0
        assert result.transonic_distance is None
        assert result.subsonic_distance is None
        assert result.max_supersonic_distance is None
        assert result.warning is None

    def test_accepts_trajectory_points(self):
        points = [TrajectoryPoint(i * 100.0, 0.0, v, 0.0, 0.0, 0.0)
                  for i, v in enumerate(VELOCITIES_308_175)]
        from_points = analyze_subsonic_transition(points, 59, 1700)
        from_dicts = analyze_subsonic_transition(make_trajectory(VELOCITIES_308_175), 59, 1700)
        assert from_points == from_dicts

    def test_estimate_attached(self):
        result = analyze_subsonic_transition(make_trajectory(VELOCITIES_308_175), 59, 1000,
                                             muzzle_velocity=2650, ballistic_coefficient=0.505)
        assert result.max_supersonic_range_estimate == pytest.approx(
            estimate_max_supersonic_range(2650, 0.505, 59))

    def test_integrated_trajectory(self):
        rifle = RifleConfig(sight_height=1.5, zero_distance=100)
        ammo = AmmoConfig(muzzle_velocity=2650, ballistic_coefficient=0.462, drag_model='G1')
        traj = integrate_trajectory(ammo, find_zero_angle(rifle, ammo), 1200, 1.5)
        result = analyze_subsonic_transition(traj, 59, 1200)
        assert result.goes_subsonic
        assert 800 < result.transonic_distance < 1200


class TestIntegratedTransition:
    """.308 175gr SMK (G1 0.505 / G7 0.243) at 2650 fps, standard sea-level air."""

    RIFLE = RifleConfig(sight_height=1.5, zero_distance=100)

    def crossing(self, ammo):
        traj = integrate_trajectory(ammo, find_zero_angle(self.RIFLE, ammo), 1500, 1.5)
        return traj, analyze_subsonic_transition(traj, 59, 1500)

    def test_g1_load_goes_transonic_near_1150(self):
        ammo = AmmoConfig(muzzle_velocity=2650, ballistic_coefficient=0.505, drag_model='G1',
                          bullet_weight=175)
        traj, result = self.crossing(ammo)
        assert result.goes_subsonic
        assert 1050 < result.transonic_distance < 1250
        assert 1150 < traj.at_distance(1000).velocity < 1320

    def test_g1_and_g7_descriptions_agree(self):
        """Published G1 and G7 BCs for one bullet predict similar transonic ranges."""
        g1 = AmmoConfig(2650, 0.505, 'G1', 175)
        g7 = AmmoConfig(2650, 0.243, 'G7', 175)
        d_g1 = self.crossing(g1)[1].transonic_distance
        d_g7 = self.crossing(g7)[1].transonic_distance
        assert d_g7 == pytest.approx(d_g1, rel=0.25)


class TestApproximations:

    def test_remains_supersonic(self):
        assert will_remain_supersonic(2650, 0.505, 500, 59)
        assert not will_remain_supersonic(2650, 0.400, 2500, 59)

    def test_bc_matters(self):
        assert will_remain_supersonic(2650, 0.600, 2000, 59)
        assert not will_remain_supersonic(2650, 0.200, 2000, 59)

    def test_max_range_reasonable(self):
        assert 1000 < estimate_max_supersonic_range(2650, 0.505, 59) < 3000

    def test_max_range_trends(self):
        assert (estimate_max_supersonic_range(2650, 0.6)
                > estimate_max_supersonic_range(2650, 0.3))
        assert (estimate_max_supersonic_range(3000, 0.45)
                > estimate_max_supersonic_range(2400, 0.45))
        assert (estimate_max_supersonic_range(2650, 0.45, 20)
                > estimate_max_supersonic_range(2650, 0.45, 100))

    def test_subsonic_at_muzzle(self):
        assert estimate_max_supersonic_range(900, 0.45, 59) == 0

    def test_margins(self):
        assert get_supersonic_margin(1500, 59) > 0
        assert get_supersonic_margin(900, 59) < 0
        assert get_mach_margin(speed_of_sound(59) * 1.5, 59) == pytest.approx(0.5)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])

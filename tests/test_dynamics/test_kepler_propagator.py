"""
Unit tests for the analytic Keplerian propagator.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from dataclasses import replace

import pytest
import numpy as np
from scipy.integrate import solve_ivp

from orbit_sim.dynamics.kepler_propagator import (KeplerPropagator, KeplerianState,
                                                  propagate_kepler)
from orbit_sim.dynamics.orbital_elements import state_to_elements
from orbit_sim.utils.constants import EARTH_MASS, EARTH_MU, TWO_PI


def angle_difference(a, b):
    """Signed difference a - b wrapped to [-pi, pi)."""
    return (a - b + np.pi) % TWO_PI - np.pi


def two_body_rhs(t, y):
    r = y[:3]
    a = -EARTH_MU * r / np.linalg.norm(r)**3
    return np.concatenate([y[3:], a])


def reference_state(position, velocity, duration):
    sol = solve_ivp(two_body_rhs, (0.0, duration),
                    np.concatenate([position, velocity]),
                    method='DOP853', rtol=1e-10, atol=1e-3)
    return sol.y[:3, -1], sol.y[3:, -1]


STATES = {
    'inclined_eccentric': (np.array([7.0e6, 1.0e6, 5.0e5]),
                           np.array([-500.0, 6500.0, 3500.0])),
    'polar_circular': (np.array([7.0e6, 0.0, 0.0]),
                       np.array([0.0, 0.0, np.sqrt(EARTH_MU / 7.0e6)])),
    'equatorial_circular': (np.array([0.0, 8.0e6, 0.0]),
                            np.array([-np.sqrt(EARTH_MU / 8.0e6), 0.0, 0.0])),
    'retrograde_equatorial': (np.array([7.5e6, 2.0e6, 0.0]),
                              np.array([2000.0, -7800.0, 0.0])),
    'eccentric_past_apoapsis': (np.array([-2.0e7, -3.0e6, 1.0e6]),
                                np.array([1500.0, -3000.0, 200.0])),
}


class TestKeplerPropagator:
    """Test cases for KeplerPropagator."""

    def setup_method(self):
        self.propagator = KeplerPropagator()

    @pytest.mark.parametrize("name", sorted(STATES))
    def test_zero_step_reconstructs_state(self, name):
        r0, v0 = STATES[name]
        elements = state_to_elements(r0, v0, EARTH_MASS)

        state = self.propagator.propagate(elements, EARTH_MASS, 0.0)

        assert isinstance(state, KeplerianState)
        assert np.linalg.norm(state.position - r0) < 1e-6 * np.linalg.norm(r0)
        assert np.linalg.norm(state.velocity - v0) < 1e-6 * np.linalg.norm(v0)

    def test_circular_orbit_full_period(self):
        r0, v0 = STATES['polar_circular']
        elements = state_to_elements(r0, v0, EARTH_MASS)

        state = self.propagator.propagate(elements, EARTH_MASS, elements.orbital_period)

        np.testing.assert_allclose(state.position, r0, atol=1e-4)
        np.testing.assert_allclose(state.velocity, v0, atol=1e-7)

    def test_circular_orbit_half_period_is_antipodal(self):
        r0, v0 = STATES['equatorial_circular']
        elements = state_to_elements(r0, v0, EARTH_MASS)

        state = self.propagator.propagate(elements, EARTH_MASS, elements.orbital_period / 2)

        np.testing.assert_allclose(state.position, -r0, atol=1e-4)
        np.testing.assert_allclose(state.velocity, -v0, atol=1e-7)

    def test_circular_orbit_keeps_radius_and_speed(self):
        r0, v0 = STATES['polar_circular']
        r = np.linalg.norm(r0)
        elements = state_to_elements(r0, v0, EARTH_MASS)

        for dt in [100.0, 1234.5, 4000.0]:
            state = self.propagator.propagate(elements, EARTH_MASS, dt)
            assert np.linalg.norm(state.position) == pytest.approx(r, rel=1e-4)
            assert np.linalg.norm(state.velocity) == pytest.approx(np.sqrt(EARTH_MU / r), rel=1e-4)

    def test_open_orbits_decline(self):
        r0 = np.array([7.0e6, 0.0, 0.0])
        hyperbolic = state_to_elements(r0, np.array([0.0, 12000.0, 0.0]), EARTH_MASS)
        parabolic = state_to_elements(
            r0, np.array([0.0, np.sqrt(2 * EARTH_MU / 7.0e6), 0.0]), EARTH_MASS)

        assert not self.propagator.is_applicable(hyperbolic)
        assert not self.propagator.is_applicable(parabolic)
        assert self.propagator.propagate(hyperbolic, EARTH_MASS, 10.0) is None
        assert self.propagator.propagate(parabolic, EARTH_MASS, 10.0) is None

    def test_matches_numerical_integration(self):
        r0, v0 = STATES['inclined_eccentric']
        elements = state_to_elements(r0, v0, EARTH_MASS)

        state = self.propagator.propagate(elements, EARTH_MASS, 1000.0)
        r_ref, v_ref = reference_state(r0, v0, 1000.0)

        assert np.linalg.norm(state.position - r_ref) < 1.0
        assert np.linalg.norm(state.velocity - v_ref) < 1e-2

    def test_conserves_shape_of_orbit(self):
        r0, v0 = STATES['eccentric_past_apoapsis']
        elements = state_to_elements(r0, v0, EARTH_MASS)

        state = self.propagator.propagate(elements, EARTH_MASS, 3000.0)
        after = state_to_elements(state.position, state.velocity, EARTH_MASS)

        assert after.semi_major_axis == pytest.approx(elements.semi_major_axis, rel=1e-8)
        assert after.eccentricity == pytest.approx(elements.eccentricity, abs=1e-8)
        assert np.cos(after.true_anomaly) == pytest.approx(np.cos(state.true_anomaly), abs=1e-6)
        assert np.sin(after.true_anomaly) == pytest.approx(np.sin(state.true_anomaly), abs=1e-6)

    def test_stepwise_propagation_matches_single_step(self):
        r0, v0 = STATES['inclined_eccentric']
        elements = state_to_elements(r0, v0, EARTH_MASS)

        single = self.propagator.propagate(elements, EARTH_MASS, 1000.0)

        stepped = elements
        for _ in range(10):
            state = self.propagator.propagate(stepped, EARTH_MASS, 100.0)
            stepped = replace(stepped, true_anomaly=state.true_anomaly)

        assert np.linalg.norm(state.position - single.position) < 0.1
        assert abs(angle_difference(stepped.true_anomaly, single.true_anomaly)) < 1e-7

    def test_module_function(self):
        r0, v0 = STATES['inclined_eccentric']
        elements = state_to_elements(r0, v0, EARTH_MASS)

        state = propagate_kepler(elements, EARTH_MASS, 500.0)
        expected = self.propagator.propagate(elements, EARTH_MASS, 500.0)

        np.testing.assert_allclose(state.position, expected.position)


if __name__ == "__main__":
    pytest.main([__file__])

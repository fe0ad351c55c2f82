"""
Unit tests for surface collision resolution.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import pytest
import numpy as np
from orbit_sim.dynamics.collision import (CollisionResolver, CollisionResult,
                                          resolve_surface_collision)
from orbit_sim.utils.constants import EARTH_RADIUS


class TestCollisionResolver:
    """Test cases for CollisionResolver."""

    def setup_method(self):
        self.resolver = CollisionResolver()
        self.center = np.zeros(3)

    def test_relocates_above_surface(self):
        position = np.array([6.0e6, 1.0e6, -5.0e5])
        result = self.resolver.resolve(position, self.center, EARTH_RADIUS,
                                       np.array([-1000.0, 0.0, 0.0]))

        assert isinstance(result, CollisionResult)
        assert np.linalg.norm(result.position) == pytest.approx(
            1.01 * EARTH_RADIUS, abs=1e-9 * EARTH_RADIUS)
        # Same radial direction as the penetrating position
        np.testing.assert_allclose(result.normal, position / np.linalg.norm(position))
        assert result.penetration_depth == pytest.approx(
            EARTH_RADIUS - np.linalg.norm(position))

    def test_inward_velocity_is_reflected_and_damped(self):
        velocity = np.array([-3000.0, 400.0, 0.0])
        result = self.resolver.resolve(np.array([6.0e6, 0.0, 0.0]), self.center,
                                       EARTH_RADIUS, velocity)

        assert np.dot(result.velocity, result.normal) > 0
        assert np.linalg.norm(result.velocity) == pytest.approx(
            0.5 * np.linalg.norm(velocity))
        # Tangential component kept, scaled by the damping factor
        np.testing.assert_allclose(result.velocity, [1500.0, 200.0, 0.0])

    def test_outward_velocity_only_damped(self):
        velocity = np.array([100.0, 50.0, 0.0])
        result = self.resolver.resolve(np.array([6.0e6, 0.0, 0.0]), self.center,
                                       EARTH_RADIUS, velocity)

        np.testing.assert_allclose(result.velocity, 0.5 * velocity)

    def test_tangential_velocity_stays_tangential(self):
        velocity = np.array([0.0, 7000.0, 0.0])
        result = self.resolver.resolve(np.array([6.0e6, 0.0, 0.0]), self.center,
                                       EARTH_RADIUS, velocity)

        assert np.dot(result.velocity, result.normal) == 0.0
        np.testing.assert_allclose(result.velocity, [0.0, 3500.0, 0.0])
        assert np.linalg.norm(result.position) == pytest.approx(1.01 * EARTH_RADIUS)

    def test_no_collision_outside_or_on_surface(self):
        velocity = np.array([0.0, -100.0, 0.0])

        assert self.resolver.resolve(np.array([7.0e6, 0.0, 0.0]), self.center,
                                     EARTH_RADIUS, velocity) is None
        assert self.resolver.resolve(np.array([0.0, EARTH_RADIUS, 0.0]), self.center,
                                     EARTH_RADIUS, velocity) is None

    def test_offset_central_body(self):
        center = np.array([1.0e7, -2.0e7, 3.0e6])
        position = center + np.array([0.0, 0.0, 1.0e6])
        result = self.resolver.resolve(position, center, EARTH_RADIUS,
                                       np.array([0.0, 0.0, -10.0]))

        np.testing.assert_allclose(result.position - center, [0.0, 0.0, 1.01 * EARTH_RADIUS])
        np.testing.assert_allclose(result.velocity, [0.0, 0.0, 5.0])

    def test_custom_parameters(self):
        resolver = CollisionResolver(offset_factor=1.1, damping=1.0)
        result = resolver.resolve([1.0, 0.0, 0.0], [0.0, 0.0, 0.0], 2.0, [-4.0, 0.0, 0.0])

        np.testing.assert_allclose(result.position, [2.2, 0.0, 0.0])
        np.testing.assert_allclose(result.velocity, [4.0, 0.0, 0.0])

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            CollisionResolver(offset_factor=1.0)
        with pytest.raises(ValueError):
            CollisionResolver(damping=-0.1)
        with pytest.raises(ValueError):
            CollisionResolver(damping=1.5)

    def test_module_function_uses_defaults(self):
        result = resolve_surface_collision([0.0, 0.0, 1.0e6], np.zeros(3), EARTH_RADIUS,
                                           [0.0, 0.0, -2.0])

        assert result.position[2] == pytest.approx(1.01 * EARTH_RADIUS)
        assert result.velocity[2] == pytest.approx(1.0)


if __name__ == "__main__":
    pytest.main([__file__])

"""
Unit tests for central body and spacecraft models.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import pytest
import numpy as np
from orbit_sim.simulation.bodies import CentralBody, Spacecraft
from orbit_sim.utils.constants import EARTH_MASS, EARTH_MU, EARTH_RADIUS


def periapsis_state(r_p=7.0e6, e=0.5):
    v_p = np.sqrt(EARTH_MU * (1 + e) / r_p)
    return np.array([r_p, 0.0, 0.0]), np.array([0.0, v_p, 0.0])


class TestCentralBody:
    """Test cases for CentralBody."""

    def test_defaults(self):
        earth = CentralBody()

        assert earth.name == "Earth"
        assert earth.mass == EARTH_MASS
        assert earth.radius == EARTH_RADIUS
        np.testing.assert_array_equal(earth.position, np.zeros(3))
        assert earth.mu == pytest.approx(EARTH_MU)

    @pytest.mark.parametrize("kwargs", [
        {'mass': 0.0},
        {'radius': -1.0},
        {'rotation_period': 0.0},
        {'position': [1.0, 2.0]},
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            CentralBody(**kwargs)

    def test_rotation_wraps(self):
        earth = CentralBody(rotation_period=100.0)

        earth.update(25.0)
        assert earth.rotation_angle == pytest.approx(np.pi / 2)

        earth.update(100.0)
        assert earth.rotation_angle == pytest.approx(np.pi / 2)
        assert 0.0 <= earth.rotation_angle < 2 * np.pi

    def test_altitude_and_distance(self):
        body = CentralBody(position=[1.0e6, 0.0, 0.0])
        point = [1.0e6, 7.0e6, 0.0]

        assert body.distance_to(point) == pytest.approx(7.0e6)
        assert body.altitude(point) == pytest.approx(7.0e6 - EARTH_RADIUS)

    def test_characteristic_velocities(self):
        earth = CentralBody()

        assert earth.circular_orbit_velocity(7.0e6) == pytest.approx(np.sqrt(EARTH_MU / 7.0e6))
        assert earth.escape_velocity(7.0e6) == pytest.approx(np.sqrt(2 * EARTH_MU / 7.0e6))


class TestSpacecraft:
    """Test cases for Spacecraft."""

    def setup_method(self):
        self.earth = CentralBody()
        position, velocity = periapsis_state()
        self.spacecraft = Spacecraft(position, velocity)

    def test_defaults(self):
        craft = Spacecraft()

        assert craft.mass == 1000.0
        assert craft.thrust == 2000.0
        assert not craft.thrust_active
        np.testing.assert_array_equal(craft.direction, [0.0, 0.0, 1.0])
        np.testing.assert_array_equal(craft.position, np.zeros(3))

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            Spacecraft(mass=0.0)
        with pytest.raises(ValueError):
            Spacecraft(thrust=-1.0)
        with pytest.raises(ValueError):
            Spacecraft(direction=[0.0, 0.0, 0.0])

    def test_state_accessors_return_copies(self):
        position = self.spacecraft.position
        position[0] = 0.0

        assert self.spacecraft.position[0] == pytest.approx(7.0e6)

    def test_direction_normalized(self):
        self.spacecraft.direction = [0.0, 3.0, 4.0]
        np.testing.assert_allclose(self.spacecraft.direction, [0.0, 0.6, 0.8])

    def test_thrust_acceleration(self):
        np.testing.assert_array_equal(self.spacecraft.thrust_acceleration(), np.zeros(3))

        self.spacecraft.set_thrust(True)
        np.testing.assert_allclose(self.spacecraft.thrust_acceleration(), [0.0, 0.0, 2.0])

    def test_element_cache_reused_until_state_changes(self):
        first = self.spacecraft.orbital_elements(self.earth)
        assert self.spacecraft.elements_valid(self.earth)
        assert self.spacecraft.orbital_elements(self.earth) is first

        self.spacecraft.velocity = [0.0, 8000.0, 0.0]
        assert not self.spacecraft.elements_valid(self.earth)
        assert self.spacecraft.orbital_elements(self.earth) is not first

    def test_every_write_bumps_version(self):
        version = self.spacecraft.state_version

        self.spacecraft.position = [7.1e6, 0.0, 0.0]
        self.spacecraft.set_state([7.2e6, 0.0, 0.0], [0.0, 7000.0, 0.0])
        self.spacecraft.apply_impulse([0.0, 1.0, 0.0])

        assert self.spacecraft.state_version == version + 3

    def test_force_recompute(self):
        first = self.spacecraft.orbital_elements(self.earth)
        second = self.spacecraft.orbital_elements(self.earth, force_recompute=True)

        assert second is not first
        assert second.eccentricity == pytest.approx(first.eccentricity)

    def test_cache_invalid_for_other_body(self):
        self.spacecraft.orbital_elements(self.earth)
        moon = CentralBody(name="Moon", mass=7.342e22, radius=1.7374e6)

        assert not self.spacecraft.elements_valid(moon)

    def test_moving_body_invalidates_cache(self):
        first = self.spacecraft.orbital_elements(self.earth)

        self.earth.position = np.array([1.0e6, 0.0, 0.0])

        assert not self.spacecraft.elements_valid(self.earth)
        moved = self.spacecraft.orbital_elements(self.earth)
        assert moved is not first
        assert moved.periapsis == pytest.approx(6.0e6, rel=1e-9)

    def test_in_place_body_move_invalidates_cache(self):
        self.spacecraft.orbital_elements(self.earth)

        self.earth.position[2] += 10.0

        assert not self.spacecraft.elements_valid(self.earth)

    def test_elements_relative_to_body_position(self):
        body = CentralBody(position=[1.0e7, 0.0, 0.0])
        position, velocity = periapsis_state()
        craft = Spacecraft(position + body.position, velocity)

        elements = craft.orbital_elements(body)
        assert elements.eccentricity == pytest.approx(0.5, rel=1e-9)
        assert elements.periapsis == pytest.approx(7.0e6, rel=1e-9)

    def test_keplerian_update_keeps_cache_valid(self):
        elements = self.spacecraft.orbital_elements(self.earth)
        version = self.spacecraft.state_version

        self.spacecraft.apply_keplerian_update([0.0, 8.0e6, 0.0], [-7000.0, 0.0, 0.0],
                                               elements, self.earth)

        assert self.spacecraft.state_version == version + 1
        assert self.spacecraft.elements_valid(self.earth)
        assert self.spacecraft.orbital_elements(self.earth) is elements

    def test_periapsis_burn_raises_eccentricity(self):
        """200 kN for 1 s on a 20 t spacecraft at periapsis of an e=0.5 orbit."""
        position, velocity = periapsis_state(e=0.5)
        craft = Spacecraft(position, velocity, mass=20000.0, thrust=200000.0,
                           direction=velocity)
        before = craft.orbital_elements(self.earth)
        assert before.eccentricity == pytest.approx(0.5, rel=1e-9)

        craft.set_thrust(True)
        craft.apply_impulse(craft.thrust_acceleration() * 1.0)
        after = craft.orbital_elements(self.earth)

        assert craft.speed == pytest.approx(np.linalg.norm(velocity) + 10.0)
        assert after.eccentricity > before.eccentricity
        assert after.apoapsis > before.apoapsis
        assert after.periapsis == pytest.approx(before.periapsis, rel=1e-9)


if __name__ == "__main__":
    pytest.main([__file__])

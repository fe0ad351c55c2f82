"""
Central Body and Spacecraft Models

The central body is a fixed gravitating sphere. The spacecraft owns the
Cartesian state and the cached orbital elements derived from it; every
direct write to the state invalidates that cache.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from ..dynamics.forces import circular_orbit_velocity, escape_velocity
from ..dynamics.orbital_elements import OrbitalElements, state_to_elements
from ..utils.constants import (DEFAULT_SPACECRAFT_MASS,
                               DEFAULT_SPACECRAFT_THRUST, EARTH_MASS,
                               EARTH_RADIUS, EARTH_ROTATION_PERIOD,
                               GRAVITATIONAL_CONSTANT, TWO_PI, Z_AXIS)
from ..utils.math_utils import as_vector, normalize, wrap_to_2pi

logger = logging.getLogger(__name__)


@dataclass
class CentralBody:
    """
    Gravitating body at the centre of the simulation.

    Attributes:
        name: Body name
        mass: Mass [kg]
        radius: Mean radius [m]
        position: Fixed position in the reference frame [m]
        rotation_period: Sidereal rotation period [s] (cosmetic only)
        rotation_angle: Current rotation angle [rad] (cosmetic only)
    """
    name: str = "Earth"
    mass: float = EARTH_MASS
    radius: float = EARTH_RADIUS
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation_period: float = EARTH_ROTATION_PERIOD
    rotation_angle: float = 0.0

    def __post_init__(self):
        """Validate body parameters."""
        if self.mass <= 0:
            raise ValueError("Central body mass must be positive")
        if self.radius <= 0:
            raise ValueError("Central body radius must be positive")
        if self.rotation_period <= 0:
            raise ValueError("Rotation period must be positive")
        self.position = as_vector(self.position)

    @property
    def mu(self) -> float:
        """Gravitational parameter [m³/s²]."""
        return GRAVITATIONAL_CONSTANT * self.mass

    def update(self, delta_time: float) -> None:
        """Advance the cosmetic rotation."""
        self.rotation_angle = wrap_to_2pi(
            self.rotation_angle + TWO_PI / self.rotation_period * delta_time)

    def distance_to(self, position: np.ndarray) -> float:
        return float(np.linalg.norm(np.asarray(position, dtype=float) - self.position))

    def altitude(self, position: np.ndarray) -> float:
        """Height above the mean surface [m]."""
        return self.distance_to(position) - self.radius

    def escape_velocity(self, distance: float) -> float:
        """Escape velocity at ``distance`` from the centre [m/s]."""
        return escape_velocity(self.mu, distance)

    def circular_orbit_velocity(self, distance: float) -> float:
        """Circular orbit speed at ``distance`` from the centre [m/s]."""
        return circular_orbit_velocity(self.mu, distance)


class Spacecraft:
    """
    Spacecraft point mass with a main engine along its forward axis.

    Position and velocity are real-world SI values in the reference frame.
    The orbital element cache is stamped with the state version it was
    computed from; any write through the public setters bumps the version.
    """

    def __init__(self, position=None, velocity=None,
                 mass: float = DEFAULT_SPACECRAFT_MASS,
                 thrust: float = DEFAULT_SPACECRAFT_THRUST,
                 direction=None):
        """
        Initialize spacecraft.

        Args:
            position: Initial position [m]
            velocity: Initial velocity [m/s]
            mass: Spacecraft mass [kg]
            thrust: Main engine thrust [N]
            direction: Forward unit vector (defaults to +z)
        """
        if mass <= 0:
            raise ValueError("Spacecraft mass must be positive")
        if thrust < 0:
            raise ValueError("Thrust must be non-negative")

        self.mass = mass
        self.thrust = thrust
        self.thrust_active = False

        self._position = as_vector(position if position is not None else np.zeros(3))
        self._velocity = as_vector(velocity if velocity is not None else np.zeros(3))
        self._direction = Z_AXIS.copy()
        if direction is not None:
            self.direction = direction

        # Orbital element cache
        self._state_version = 0
        self._elements: Optional[OrbitalElements] = None
        self._elements_version = -1
        self._elements_origin: Optional[np.ndarray] = None

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value) -> None:
        self._position = as_vector(value)
        self.invalidate_elements()

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity.copy()

    @velocity.setter
    def velocity(self, value) -> None:
        self._velocity = as_vector(value)
        self.invalidate_elements()

    @property
    def direction(self) -> np.ndarray:
        """Forward unit vector."""
        return self._direction.copy()

    @direction.setter
    def direction(self, value) -> None:
        vector = as_vector(value)
        if np.linalg.norm(vector) == 0:
            raise ValueError("Direction must be a non-zero vector")
        self._direction = normalize(vector)

    @property
    def state_version(self) -> int:
        return self._state_version

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self._velocity))

    def set_thrust(self, active: bool) -> None:
        self.thrust_active = bool(active)

    def thrust_acceleration(self) -> np.ndarray:
        """Engine acceleration F/m along the forward axis [m/s²]."""
        if not self.thrust_active:
            return np.zeros(3)
        return self._direction * (self.thrust / self.mass)

    def set_state(self, position, velocity) -> None:
        """Overwrite position and velocity together."""
        self._position = as_vector(position)
        self._velocity = as_vector(velocity)
        self.invalidate_elements()

    def apply_impulse(self, delta_v) -> None:
        """Instantaneous velocity change [m/s]."""
        self._velocity = self._velocity + as_vector(delta_v)
        self.invalidate_elements()

    def invalidate_elements(self) -> None:
        """Mark the cached orbital elements stale."""
        self._state_version += 1

    def elements_valid(self, central_body: CentralBody) -> bool:
        """Cache matches the current state, central mass and body position."""
        return (self._elements is not None
                and self._elements_version == self._state_version
                and self._elements.central_mass == central_body.mass
                and np.array_equal(self._elements_origin, central_body.position))

    def orbital_elements(self, central_body: CentralBody,
                         force_recompute: bool = False) -> OrbitalElements:
        """
        Orbital elements relative to ``central_body``, recomputed if stale.

        Args:
            central_body: Body the orbit is computed around
            force_recompute: Ignore the cache

        Returns:
            Orbital elements
        """
        if force_recompute or not self.elements_valid(central_body):
            self._elements = state_to_elements(
                self._position - central_body.position,
                self._velocity,
                central_body.mass
            )
            self._elements_version = self._state_version
            self._elements_origin = central_body.position.copy()
            logger.debug("Recomputed orbital elements (e=%.6f, a=%.1f m)",
                         self._elements.eccentricity,
                         self._elements.semi_major_axis)
        return self._elements

    def apply_keplerian_update(self, position, velocity,
                               elements: OrbitalElements,
                               central_body: CentralBody) -> None:
        """
        Write a Keplerian step back as one unit.

        State and elements are replaced together so the cache stays valid
        for the next analytic step.
        """
        self._position = as_vector(position)
        self._velocity = as_vector(velocity)
        self._state_version += 1
        self._elements = elements
        self._elements_version = self._state_version
        self._elements_origin = central_body.position.copy()

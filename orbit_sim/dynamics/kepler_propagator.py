"""
Analytic Keplerian Propagation

Advances an elliptical orbit by a time step through the mean anomaly and
Kepler's equation, then rebuilds the Cartesian state from the perifocal
frame.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..utils.constants import (GRAVITATIONAL_CONSTANT, KEPLER_MAX_ITERATIONS,
                               KEPLER_TOLERANCE)
from ..utils.math_utils import perifocal_to_reference_matrix, wrap_to_2pi
from .orbital_elements import (OrbitalElements, eccentric_to_true_anomaly,
                               solve_kepler_equation, true_to_mean_anomaly)


@dataclass(eq=False)
class KeplerianState:
    """
    State returned by the Keplerian propagator.

    Attributes:
        position: Position relative to the central body [m]
        velocity: Velocity relative to the central body [m/s]
        true_anomaly: True anomaly at the new epoch [rad]
    """
    position: np.ndarray
    velocity: np.ndarray
    true_anomaly: float


class KeplerPropagator:
    """Two-body propagator for closed orbits."""

    def __init__(self, tolerance: float = KEPLER_TOLERANCE,
                 max_iterations: int = KEPLER_MAX_ITERATIONS):
        """
        Initialize propagator.

        Args:
            tolerance: Kepler solver step tolerance [rad]
            max_iterations: Kepler solver iteration cap
        """
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    @staticmethod
    def is_applicable(elements: OrbitalElements) -> bool:
        """Keplerian propagation needs a finite positive a and e < 1."""
        return elements.is_elliptical

    def propagate(self, elements: OrbitalElements, central_mass: float,
                  delta_time: float) -> Optional[KeplerianState]:
        """
        Advance the orbit by ``delta_time``.

        Args:
            elements: Orbital elements at the current epoch
            central_mass: Mass of the central body [kg]
            delta_time: Time step [s]

        Returns:
            New state, or None when the orbit is not elliptical and the
            caller has to integrate numerically instead
        """
        if not self.is_applicable(elements):
            return None

        mu = GRAVITATIONAL_CONSTANT * central_mass
        a = elements.semi_major_axis
        e = elements.eccentricity

        # Advance mean anomaly
        n = np.sqrt(mu / a**3)
        M = wrap_to_2pi(true_to_mean_anomaly(elements.true_anomaly, e) + n * delta_time)

        # Solve for new eccentric anomaly and true anomaly
        E = solve_kepler_equation(M, e, self.tolerance, self.max_iterations)
        f = eccentric_to_true_anomaly(E, e)

        # Orbit equation
        p = a * (1 - e**2)
        r = p / (1 + e * np.cos(f))
        h = np.sqrt(mu * p)

        # Position and velocity in perifocal frame
        r_pqw = np.array([
            r * np.cos(f),
            r * np.sin(f),
            0.0
        ])
        v_pqw = np.array([
            -mu / h * np.sin(f),
            mu / h * (e + np.cos(f)),
            0.0
        ])

        # Perifocal to reference frame
        rotation = perifocal_to_reference_matrix(
            elements.longitude_of_ascending_node,
            elements.inclination,
            elements.argument_of_periapsis
        )

        return KeplerianState(
            position=rotation @ r_pqw,
            velocity=rotation @ v_pqw,
            true_anomaly=f
        )


def propagate_kepler(elements: OrbitalElements, central_mass: float,
                     delta_time: float) -> Optional[KeplerianState]:
    """Propagate with the default solver settings."""
    return KeplerPropagator().propagate(elements, central_mass, delta_time)

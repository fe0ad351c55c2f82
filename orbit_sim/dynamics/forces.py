"""
Two-Body Gravitational Force Model

This module implements Newtonian gravity between two point masses and the
related scalar quantities used by the propagation controller and the
display layer.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import numpy as np

from ..utils.constants import GRAVITATIONAL_CONSTANT


def compute_gravitational_force(mass1: float, mass2: float,
                                position1: np.ndarray,
                                position2: np.ndarray) -> np.ndarray:
    """
    Calculate the gravitational force exerted on object 1 by object 2.

    Args:
        mass1: Mass of the first object [kg]
        mass2: Mass of the second object [kg]
        position1: Position of the first object [m]
        position2: Position of the second object [m]

    Returns:
        Force vector on object 1, pointing toward object 2 [N].
        Coincident positions give a NaN vector.
    """
    separation = np.asarray(position2, dtype=float) - np.asarray(position1, dtype=float)
    distance = np.linalg.norm(separation)

    with np.errstate(divide='ignore', invalid='ignore'):
        force_magnitude = GRAVITATIONAL_CONSTANT * mass1 * mass2 / distance**2
        return force_magnitude * separation / distance


def gravitational_acceleration(mu: float, relative_position: np.ndarray) -> np.ndarray:
    """
    Two-body acceleration toward the central body.

    Args:
        mu: Gravitational parameter of the central body [m³/s²]
        relative_position: Position relative to the central body [m]

    Returns:
        Acceleration vector [m/s²]
    """
    r = np.linalg.norm(relative_position)
    with np.errstate(divide='ignore', invalid='ignore'):
        return -mu * relative_position / r**3


def escape_velocity(mu: float, distance: float) -> float:
    """Escape velocity at ``distance`` from the centre [m/s]."""
    return float(np.sqrt(2.0 * mu / distance))


def circular_orbit_velocity(mu: float, distance: float) -> float:
    """Circular orbit speed at ``distance`` from the centre [m/s]."""
    return float(np.sqrt(mu / distance))


def specific_orbital_energy(mu: float, position: np.ndarray,
                            velocity: np.ndarray) -> float:
    """Specific mechanical energy v²/2 - μ/r [J/kg]."""
    r = np.linalg.norm(position)
    v = np.linalg.norm(velocity)
    return float(v**2 / 2 - mu / r)

"""
Mathematical Utilities for Orbital Mechanics

This module provides the angle and frame helpers used by the orbital
element solver and the Keplerian propagator.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import numpy as np
from .constants import TWO_PI


def wrap_to_2pi(angle: float) -> float:
    """
    Wrap angle to [0, 2π) range.

    Args:
        angle: Input angle [rad]

    Returns:
        Wrapped angle [rad]
    """
    wrapped = angle - TWO_PI * np.floor(angle / TWO_PI)
    # Rounding can land exactly on 2π for tiny negative inputs
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return float(wrapped)


def as_vector(vector) -> np.ndarray:
    """Return a float copy of a 3-element vector."""
    array = np.array(vector, dtype=float)
    if array.shape != (3,):
        raise ValueError("Input must be a 3D vector")
    return array


def normalize(vector: np.ndarray) -> np.ndarray:
    """
    Return the unit vector along ``vector``.

    A zero vector yields NaN components; callers guard against it.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return vector / np.linalg.norm(vector)


def reflect(vector: np.ndarray, normal: np.ndarray) -> np.ndarray:
    """Reflect ``vector`` about the plane with unit ``normal``."""
    return vector - 2.0 * np.dot(vector, normal) * normal


def perifocal_to_reference_matrix(raan: float, inclination: float,
                                  arg_periapsis: float) -> np.ndarray:
    """
    Rotation matrix from the perifocal frame to the reference frame.

    Equivalent to Rz(Ω) @ Rx(i) @ Rz(ω), the 3-1-3 Euler sequence, but with
    the coefficients written out so no intermediate matrices are built.

    Args:
        raan: Longitude of the ascending node Ω [rad]
        inclination: Inclination i [rad]
        arg_periapsis: Argument of periapsis ω [rad]

    Returns:
        Rotation matrix [3x3]
    """
    cos_raan, sin_raan = np.cos(raan), np.sin(raan)
    cos_i, sin_i = np.cos(inclination), np.sin(inclination)
    cos_w, sin_w = np.cos(arg_periapsis), np.sin(arg_periapsis)

    return np.array([
        [cos_raan * cos_w - sin_raan * sin_w * cos_i,
         -cos_raan * sin_w - sin_raan * cos_w * cos_i,
         sin_raan * sin_i],
        [sin_raan * cos_w + cos_raan * sin_w * cos_i,
         -sin_raan * sin_w + cos_raan * cos_w * cos_i,
         -cos_raan * sin_i],
        [sin_w * sin_i,
         cos_w * sin_i,
         cos_i]
    ])

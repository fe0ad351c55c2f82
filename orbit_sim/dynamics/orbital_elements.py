"""
Orbital Elements and Anomaly Conversions

This module implements the orbital element representation used by the
simulator, orbit determination from a Cartesian state, and the conversions
between true, eccentric and mean anomaly (including the Kepler equation
solver).

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import warnings
from dataclasses import dataclass
from typing import Dict

import numpy as np

from ..utils.constants import (CIRCULAR_TOLERANCE, EQUATORIAL_TOLERANCE,
                               GRAVITATIONAL_CONSTANT,
                               HIGH_ECCENTRICITY_THRESHOLD,
                               KEPLER_MAX_ITERATIONS, KEPLER_TOLERANCE,
                               PARABOLIC_TOLERANCE, PI, TWO_PI, Z_AXIS)
from ..utils.math_utils import (as_vector, normalize,
                                perifocal_to_reference_matrix, wrap_to_2pi)


class KeplerConvergenceWarning(RuntimeWarning):
    """Newton-Raphson iteration for Kepler's equation ran out of iterations."""


@dataclass(eq=False)
class OrbitalElements:
    """
    Osculating orbital elements of a two-body orbit.

    Attributes:
        eccentricity: Eccentricity [-]
        semi_major_axis: Semi-major axis [m] (inf if parabolic, < 0 if hyperbolic)
        periapsis: Periapsis distance [m]
        apoapsis: Apoapsis distance [m] (inf if e >= 1)
        orbital_period: Orbital period [s] (inf if not elliptical)
        specific_energy: Specific orbital energy [J/kg]
        angular_momentum: Specific angular momentum vector h [m²/s]
        eccentricity_vector: Eccentricity vector [-]
        orbital_plane_normal: Unit normal of the orbital plane
        inclination: Inclination [rad]
        longitude_of_ascending_node: Longitude of ascending node [rad]
        argument_of_periapsis: Argument of periapsis [rad]
        true_anomaly: True anomaly [rad]
        central_mass: Mass of the central body the elements refer to [kg]
    """
    eccentricity: float
    semi_major_axis: float
    periapsis: float
    apoapsis: float
    orbital_period: float
    specific_energy: float
    angular_momentum: np.ndarray
    eccentricity_vector: np.ndarray
    orbital_plane_normal: np.ndarray
    inclination: float
    longitude_of_ascending_node: float
    argument_of_periapsis: float
    true_anomaly: float
    central_mass: float

    def __post_init__(self):
        """Validate orbital elements after initialization."""
        if self.eccentricity < 0:
            raise ValueError("Eccentricity must be non-negative")
        if self.central_mass <= 0:
            raise ValueError("Central mass must be positive")

        # Normalize angles
        self.longitude_of_ascending_node = wrap_to_2pi(self.longitude_of_ascending_node)
        self.argument_of_periapsis = wrap_to_2pi(self.argument_of_periapsis)
        self.true_anomaly = wrap_to_2pi(self.true_anomaly)

    @property
    def mu(self) -> float:
        """Gravitational parameter of the central body [m³/s²]."""
        return GRAVITATIONAL_CONSTANT * self.central_mass

    @property
    def angular_momentum_magnitude(self) -> float:
        """Specific angular momentum magnitude [m²/s]."""
        return float(np.linalg.norm(self.angular_momentum))

    @property
    def semi_latus_rectum(self) -> float:
        """Semi-latus rectum p = h²/μ [m]."""
        return self.angular_momentum_magnitude**2 / self.mu

    @property
    def is_parabolic(self) -> bool:
        return abs(self.eccentricity - 1.0) < PARABOLIC_TOLERANCE

    @property
    def is_hyperbolic(self) -> bool:
        return self.eccentricity >= 1.0 and not self.is_parabolic

    @property
    def is_elliptical(self) -> bool:
        """True when the orbit is closed and Kepler's equation applies."""
        return (self.eccentricity < 1.0
                and np.isfinite(self.semi_major_axis)
                and self.semi_major_axis > 0)

    @property
    def mean_motion(self) -> float:
        """Mean motion [rad/s], NaN for open orbits."""
        if not self.is_elliptical:
            return float('nan')
        return float(np.sqrt(self.mu / self.semi_major_axis**3))

    def eccentric_anomaly(self) -> float:
        """Eccentric anomaly [rad]."""
        return true_to_eccentric_anomaly(self.true_anomaly, self.eccentricity)

    def mean_anomaly(self) -> float:
        """Mean anomaly [rad]."""
        return true_to_mean_anomaly(self.true_anomaly, self.eccentricity)

    def radius(self) -> float:
        """Current radius from the orbit equation [m]."""
        return self.semi_latus_rectum / (1 + self.eccentricity * np.cos(self.true_anomaly))

    def velocity_magnitude(self) -> float:
        """Current speed from the vis-viva equation [m/s]."""
        r = self.radius()
        return float(np.sqrt(self.mu * (2 / r - 1 / self.semi_major_axis)))

    def summary(self) -> Dict[str, float]:
        """Quantities exposed to the display layer."""
        return {
            'eccentricity': self.eccentricity,
            'semi_major_axis': self.semi_major_axis,
            'periapsis': self.periapsis,
            'apoapsis': self.apoapsis,
            'orbital_period': self.orbital_period,
            'true_anomaly': self.true_anomaly,
            'inclination': self.inclination,
            'longitude_of_ascending_node': self.longitude_of_ascending_node,
            'argument_of_periapsis': self.argument_of_periapsis,
        }


def state_to_elements(position: np.ndarray, velocity: np.ndarray,
                      central_mass: float) -> OrbitalElements:
    """
    Convert a Cartesian state to orbital elements.

    Args:
        position: Position relative to the central body [m]
        velocity: Velocity relative to the central body [m/s]
        central_mass: Mass of the central body [kg]

    Returns:
        Orbital elements
    """
    r_vec = as_vector(position)
    v_vec = as_vector(velocity)
    mu = GRAVITATIONAL_CONSTANT * central_mass

    r = np.linalg.norm(r_vec)
    v = np.linalg.norm(v_vec)

    # Specific energy
    energy = v**2 / 2 - mu / r

    # Angular momentum vector
    h_vec = np.cross(r_vec, v_vec)
    h = np.linalg.norm(h_vec)
    plane_normal = normalize(h_vec)

    # Eccentricity vector
    e_vec = np.cross(v_vec, h_vec) / mu - r_vec / r
    e = float(np.linalg.norm(e_vec))

    # Semi-major axis
    if abs(e - 1.0) < PARABOLIC_TOLERANCE:
        a = np.inf
    else:
        a = -mu / (2 * energy)

    # p/(1+e) equals a(1-e) and stays finite for parabolic orbits
    p = h**2 / mu
    periapsis = p / (1 + e)

    closed = e < 1.0 and np.isfinite(a) and a > 0
    apoapsis = a * (1 + e) if closed else np.inf
    period = TWO_PI * np.sqrt(a**3 / mu) if closed else np.inf

    # Inclination
    inclination = np.arccos(np.clip(plane_normal[2], -1, 1))

    # Node vector
    n_vec = np.cross(Z_AXIS, plane_normal)
    n = np.linalg.norm(n_vec)

    equatorial = n < EQUATORIAL_TOLERANCE
    circular = e < CIRCULAR_TOLERANCE
    retrograde = plane_normal[2] < 0

    # Longitude of ascending node
    if equatorial:
        raan = 0.0
    else:
        raan = np.arccos(np.clip(n_vec[0] / n, -1, 1))
        if n_vec[1] < 0:
            raan = TWO_PI - raan

    # Argument of periapsis
    if circular:
        arg_periapsis = 0.0
    elif equatorial:
        # Longitude of periapsis, measured against the direction of motion
        # when the orbit is retrograde (i = π flips the y axis)
        arg_periapsis = np.arctan2(e_vec[1], e_vec[0])
        if retrograde:
            arg_periapsis = -arg_periapsis
    else:
        arg_periapsis = np.arccos(np.clip(np.dot(n_vec, e_vec) / (n * e), -1, 1))
        if e_vec[2] < 0:
            arg_periapsis = TWO_PI - arg_periapsis

    # True anomaly
    if not circular:
        f = np.arccos(np.clip(np.dot(e_vec, r_vec) / (e * r), -1, 1))
        if np.dot(r_vec, v_vec) < 0:
            f = TWO_PI - f
    elif not equatorial:
        # Circular orbit - use argument of latitude
        f = np.arccos(np.clip(np.dot(n_vec, r_vec) / (n * r), -1, 1))
        if r_vec[2] < 0:
            f = TWO_PI - f
    else:
        # Circular equatorial - use true longitude
        f = np.arctan2(r_vec[1], r_vec[0])
        if retrograde:
            f = -f

    return OrbitalElements(
        eccentricity=e,
        semi_major_axis=float(a),
        periapsis=float(periapsis),
        apoapsis=float(apoapsis),
        orbital_period=float(period),
        specific_energy=float(energy),
        angular_momentum=h_vec,
        eccentricity_vector=e_vec,
        orbital_plane_normal=plane_normal,
        inclination=float(inclination),
        longitude_of_ascending_node=float(raan),
        argument_of_periapsis=float(arg_periapsis),
        true_anomaly=float(f),
        central_mass=central_mass,
    )


def _check_elliptic(eccentricity: float) -> None:
    if not (0 <= eccentricity < 1):
        raise ValueError("Eccentricity must be in range [0, 1)")


def true_to_eccentric_anomaly(true_anomaly: float, eccentricity: float) -> float:
    """
    Convert true anomaly to eccentric anomaly.

    Args:
        true_anomaly: True anomaly [rad]
        eccentricity: Orbital eccentricity (0 <= e < 1)

    Returns:
        Eccentric anomaly in [0, 2π) [rad]
    """
    _check_elliptic(eccentricity)
    sin_E = np.sqrt(1 - eccentricity**2) * np.sin(true_anomaly)
    cos_E = eccentricity + np.cos(true_anomaly)
    return wrap_to_2pi(np.arctan2(sin_E, cos_E))


def true_to_mean_anomaly(true_anomaly: float, eccentricity: float) -> float:
    """
    Convert true anomaly to mean anomaly through the eccentric anomaly.

    Args:
        true_anomaly: True anomaly [rad]
        eccentricity: Orbital eccentricity (0 <= e < 1)

    Returns:
        Mean anomaly in [0, 2π) [rad]
    """
    E = true_to_eccentric_anomaly(true_anomaly, eccentricity)
    return wrap_to_2pi(E - eccentricity * np.sin(E))


def eccentric_to_true_anomaly(eccentric_anomaly: float, eccentricity: float) -> float:
    """
    Convert eccentric anomaly to true anomaly.

    Args:
        eccentric_anomaly: Eccentric anomaly [rad]
        eccentricity: Orbital eccentricity (0 <= e < 1)

    Returns:
        True anomaly in [0, 2π) [rad]
    """
    _check_elliptic(eccentricity)
    sin_f = np.sqrt(1 - eccentricity**2) * np.sin(eccentric_anomaly)
    cos_f = np.cos(eccentric_anomaly) - eccentricity
    return wrap_to_2pi(np.arctan2(sin_f, cos_f))


def solve_kepler_equation(mean_anomaly: float, eccentricity: float,
                          tolerance: float = KEPLER_TOLERANCE,
                          max_iterations: int = KEPLER_MAX_ITERATIONS) -> float:
    """
    Solve Kepler's equation E - e sin(E) = M using Newton-Raphson.

    If the iteration cap is reached a ``KeplerConvergenceWarning`` is issued
    and the last estimate is returned.

    Args:
        mean_anomaly: Mean anomaly [rad]
        eccentricity: Orbital eccentricity (0 <= e < 1)
        tolerance: Convergence tolerance on the Newton step [rad]
        max_iterations: Maximum number of iterations

    Returns:
        Eccentric anomaly in [0, 2π) [rad]
    """
    _check_elliptic(eccentricity)
    M = wrap_to_2pi(mean_anomaly)

    # Initial guess
    E = PI if eccentricity > HIGH_ECCENTRICITY_THRESHOLD else M

    for _ in range(max_iterations):
        f = E - eccentricity * np.sin(E) - M
        df = 1 - eccentricity * np.cos(E)

        delta_E = -f / df
        E += delta_E

        if abs(delta_E) < tolerance:
            return wrap_to_2pi(E)

    warnings.warn(
        f"Kepler equation did not converge after {max_iterations} iterations "
        f"(M={M:.6f}, e={eccentricity:.6f})",
        KeplerConvergenceWarning,
        stacklevel=2,
    )
    return wrap_to_2pi(E)


def mean_to_eccentric_anomaly(mean_anomaly: float, eccentricity: float,
                              tolerance: float = KEPLER_TOLERANCE,
                              max_iterations: int = KEPLER_MAX_ITERATIONS) -> float:
    """Eccentric anomaly for a given mean anomaly [rad]."""
    return solve_kepler_equation(mean_anomaly, eccentricity, tolerance, max_iterations)


def orbit_path_points(elements: OrbitalElements, num_points: int = 200) -> np.ndarray:
    """
    Sample the closed orbit as a polyline.

    Args:
        elements: Orbital elements
        num_points: Number of segments around the ellipse

    Returns:
        Array of shape (num_points + 1, 3) relative to the central body [m];
        empty (0, 3) array when the orbit is not elliptical
    """
    if not elements.is_elliptical:
        return np.empty((0, 3))

    a = elements.semi_major_axis
    e = elements.eccentricity
    b = a * np.sqrt(1 - e**2)

    # Parametrize by eccentric anomaly, focus at the origin
    E = np.linspace(0.0, TWO_PI, num_points + 1)
    perifocal = np.column_stack([
        a * (np.cos(E) - e),
        b * np.sin(E),
        np.zeros_like(E)
    ])

    rotation = perifocal_to_reference_matrix(
        elements.longitude_of_ascending_node,
        elements.inclination,
        elements.argument_of_periapsis
    )
    return perifocal @ rotation.T

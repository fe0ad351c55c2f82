"""
Dynamics Module

Two-body force model, orbit determination, analytic propagation and
surface collision handling.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from .forces import (
    compute_gravitational_force,
    gravitational_acceleration,
    escape_velocity,
    circular_orbit_velocity,
    specific_orbital_energy
)

from .orbital_elements import (
    OrbitalElements,
    KeplerConvergenceWarning,
    state_to_elements,
    true_to_eccentric_anomaly,
    true_to_mean_anomaly,
    eccentric_to_true_anomaly,
    solve_kepler_equation,
    mean_to_eccentric_anomaly,
    orbit_path_points
)

from .kepler_propagator import (
    KeplerPropagator,
    KeplerianState,
    propagate_kepler
)

from .collision import (
    CollisionResolver,
    CollisionResult,
    resolve_surface_collision
)

__all__ = [
    # Force model
    'compute_gravitational_force',
    'gravitational_acceleration',
    'escape_velocity',
    'circular_orbit_velocity',
    'specific_orbital_energy',

    # Orbital elements
    'OrbitalElements',
    'KeplerConvergenceWarning',
    'state_to_elements',
    'true_to_eccentric_anomaly',
    'true_to_mean_anomaly',
    'eccentric_to_true_anomaly',
    'solve_kepler_equation',
    'mean_to_eccentric_anomaly',
    'orbit_path_points',

    # Keplerian propagation
    'KeplerPropagator',
    'KeplerianState',
    'propagate_kepler',

    # Collisions
    'CollisionResolver',
    'CollisionResult',
    'resolve_surface_collision'
]

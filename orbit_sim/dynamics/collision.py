"""
Surface Collision Handling

Detects when the spacecraft has penetrated the central body and computes
an inelastic rebound state on the surface.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..utils.constants import COLLISION_DAMPING, COLLISION_OFFSET_FACTOR
from ..utils.math_utils import reflect


@dataclass(eq=False)
class CollisionResult:
    """
    Rebound state after a surface collision.

    Attributes:
        position: Relocated position just above the surface [m]
        velocity: Reflected and damped velocity [m/s]
        normal: Outward surface normal at the impact point
        penetration_depth: How far below the surface the object was [m]
    """
    position: np.ndarray
    velocity: np.ndarray
    normal: np.ndarray
    penetration_depth: float


class CollisionResolver:
    """Sphere collision with inelastic rebound."""

    def __init__(self, offset_factor: float = COLLISION_OFFSET_FACTOR,
                 damping: float = COLLISION_DAMPING):
        """
        Initialize resolver.

        Args:
            offset_factor: Rebound distance as a multiple of the body radius
            damping: Fraction of the reflected velocity kept (0-1)
        """
        if offset_factor <= 1.0:
            raise ValueError("Offset factor must place the object above the surface")
        if not (0.0 <= damping <= 1.0):
            raise ValueError("Damping must be in range [0, 1]")

        self.offset_factor = offset_factor
        self.damping = damping

    def resolve(self, position: np.ndarray, central_position: np.ndarray,
                central_radius: float,
                velocity: np.ndarray) -> Optional[CollisionResult]:
        """
        Check for interpenetration and compute the rebound.

        Only an inward velocity is reflected. A velocity that is already
        outward, or exactly tangential (zero normal component), is damped
        without reflection, so the outward component stays >= 0.

        Args:
            position: Object position [m]
            central_position: Central body position [m]
            central_radius: Central body radius [m]
            velocity: Object velocity [m/s]

        Returns:
            Rebound state, or None if the object is outside the body
        """
        center = np.asarray(central_position, dtype=float)
        offset = np.asarray(position, dtype=float) - center
        distance = np.linalg.norm(offset)

        if distance >= central_radius:
            return None

        normal = offset / distance
        new_position = center + normal * (central_radius * self.offset_factor)

        velocity = np.asarray(velocity, dtype=float)
        if np.dot(velocity, normal) < 0:
            new_velocity = reflect(velocity, normal)
        else:
            # Already leaving the surface
            new_velocity = velocity.copy()

        return CollisionResult(
            position=new_position,
            velocity=new_velocity * self.damping,
            normal=normal,
            penetration_depth=float(central_radius - distance)
        )


def resolve_surface_collision(position: np.ndarray, central_position: np.ndarray,
                              central_radius: float,
                              velocity: np.ndarray) -> Optional[CollisionResult]:
    """Resolve a collision with the default offset and damping."""
    return CollisionResolver().resolve(position, central_position, central_radius, velocity)

"""
Propagation Controller

Per-frame physics orchestration: chooses between analytic (Keplerian) and
numerical propagation, subdivides thrust under time acceleration, resolves
surface collisions, and keeps the spacecraft's orbital element cache
consistent with its state.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional

import numpy as np

from ..dynamics.collision import CollisionResolver
from ..dynamics.forces import compute_gravitational_force
from ..dynamics.kepler_propagator import KeplerPropagator
from ..dynamics.orbital_elements import OrbitalElements
from ..utils.scaling import ScaleConverter
from .bodies import CentralBody, Spacecraft
from .config import PropagationConfig, create_default_propagation_config

logger = logging.getLogger(__name__)


class PropagationMode(Enum):
    """Propagation model used on a tick."""
    IDLE = "idle"
    NUMERICAL = "numerical"
    KEPLERIAN = "keplerian"


@dataclass(eq=False)
class TickResult:
    """Outcome of one physics tick."""

    mode: PropagationMode
    position: np.ndarray   # m
    velocity: np.ndarray   # m/s
    time_step: float       # simulated seconds covered by the tick
    substeps: int
    collided: bool
    elapsed_time: float    # simulated seconds since start


class PropagationController:
    """
    Frame-driven two-body propagation with time acceleration.

    The controller owns no global state: the spacecraft, the central body,
    the display scale converter and the configuration are all injected.
    """

    def __init__(self, spacecraft: Spacecraft,
                 central_body: Optional[CentralBody],
                 scale: ScaleConverter,
                 config: Optional[PropagationConfig] = None):
        """
        Initialize controller.

        Args:
            spacecraft: Spacecraft whose state is propagated
            central_body: Gravitating body, or None for free flight
            scale: Real-world <-> display unit converter
            config: Controller configuration
        """
        self.spacecraft = spacecraft
        self.central_body = central_body
        self.scale = scale
        self.config = config if config is not None else create_default_propagation_config()

        self.propagator = KeplerPropagator(self.config.kepler_tolerance,
                                           self.config.kepler_max_iterations)
        self.collision_resolver = CollisionResolver(self.config.collision_offset_factor,
                                                    self.config.collision_damping)

        self.time_acceleration = self.config.time_acceleration_levels[0]
        self.elapsed_time = 0.0
        self.mode = PropagationMode.IDLE if central_body is None else PropagationMode.NUMERICAL
        self._collision_latched = False

    # ------------------------------------------------------------------
    # Time acceleration
    # ------------------------------------------------------------------

    def set_time_acceleration(self, factor: float) -> None:
        """Select a warp level; it applies from the next tick."""
        if factor not in self.config.time_acceleration_levels:
            raise ValueError(
                f"Time acceleration {factor} not in {self.config.time_acceleration_levels}")
        if factor != self.time_acceleration:
            logger.info("Time acceleration %gx -> %gx", self.time_acceleration, factor)
        self.time_acceleration = factor

    def increase_time_acceleration(self) -> float:
        levels = self.config.time_acceleration_levels
        index = levels.index(self.time_acceleration)
        self.set_time_acceleration(levels[min(index + 1, len(levels) - 1)])
        return self.time_acceleration

    def decrease_time_acceleration(self) -> float:
        levels = self.config.time_acceleration_levels
        index = levels.index(self.time_acceleration)
        self.set_time_acceleration(levels[max(index - 1, 0)])
        return self.time_acceleration

    # ------------------------------------------------------------------
    # External state changes
    # ------------------------------------------------------------------

    def set_central_body(self, central_body: Optional[CentralBody]) -> None:
        """Swap the central body; cached elements no longer apply."""
        self.central_body = central_body
        self.spacecraft.invalidate_elements()
        self._set_mode(PropagationMode.IDLE if central_body is None
                       else PropagationMode.NUMERICAL)

    def set_thrust(self, active: bool) -> None:
        self.spacecraft.set_thrust(active)

    def set_direction(self, direction) -> None:
        """Forward unit vector from the orientation model."""
        self.spacecraft.direction = direction

    def reposition(self, display_position) -> None:
        """Move the spacecraft to a position given in display units."""
        self.spacecraft.position = self.scale.vector_to_real_units(display_position)

    def set_display_velocity(self, display_velocity) -> None:
        """Set the spacecraft velocity from display units."""
        self.spacecraft.velocity = self.scale.vector_to_real_units(display_velocity)

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    def display_position(self) -> np.ndarray:
        return self.scale.vector_to_sim_units(self.spacecraft.position)

    def display_velocity(self) -> np.ndarray:
        return self.scale.vector_to_sim_units(self.spacecraft.velocity)

    def altitude(self) -> Optional[float]:
        """Height above the central body surface [m]."""
        if self.central_body is None:
            return None
        return self.central_body.altitude(self.spacecraft.position)

    def orbital_elements(self) -> Optional[OrbitalElements]:
        """Current (cached or recomputed) orbital elements."""
        if self.central_body is None:
            return None
        return self.spacecraft.orbital_elements(self.central_body)

    def orbit_summary(self) -> Optional[Dict[str, float]]:
        """Orbit quantities for the display layer, in SI units."""
        elements = self.orbital_elements()
        return elements.summary() if elements is not None else None

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, delta_time: float) -> TickResult:
        """
        Advance the simulation by one frame.

        Args:
            delta_time: Wall-clock frame time [s]

        Returns:
            Tick result
        """
        if delta_time < 0:
            raise ValueError("delta_time must be non-negative")

        warped_dt = delta_time * self.time_acceleration
        self.elapsed_time += warped_dt

        if self.central_body is None:
            self._set_mode(PropagationMode.IDLE)
            substeps = self._integrate(delta_time, warped_dt, with_gravity=False)
            return self._result(warped_dt, substeps, collided=False)

        self.central_body.update(warped_dt)

        latched = self._collision_latched
        self._collision_latched = False

        # A state set from outside may already be inside the body
        if self._resolve_collision():
            return self._result(warped_dt, 0, collided=True)

        substeps = 0
        if not latched and self._keplerian_allowed():
            substeps = self._keplerian_step(warped_dt)

        if substeps == 0:
            self._set_mode(PropagationMode.NUMERICAL)
            substeps = self._integrate(delta_time, warped_dt, with_gravity=True)

        collided = self._resolve_collision()
        return self._result(warped_dt, substeps, collided)

    def _keplerian_allowed(self) -> bool:
        """Conditions for analytic propagation on this tick."""
        if self.spacecraft.thrust_active or self.time_acceleration <= 1:
            return False

        elements = self.spacecraft.orbital_elements(self.central_body)
        if not self.propagator.is_applicable(elements):
            return False
        if (self.config.require_periapsis_clearance
                and elements.periapsis <= self.central_body.radius):
            return False
        return True

    def _keplerian_step(self, warped_dt: float) -> int:
        """Analytic step; returns 0 when the propagator declines."""
        body = self.central_body
        force_recompute = self.mode is not PropagationMode.KEPLERIAN
        elements = self.spacecraft.orbital_elements(body, force_recompute=force_recompute)

        state = self.propagator.propagate(elements, body.mass, warped_dt)
        if state is None:
            return 0

        self._set_mode(PropagationMode.KEPLERIAN)
        self.spacecraft.apply_keplerian_update(
            body.position + state.position,
            state.velocity,
            replace(elements, true_anomaly=state.true_anomaly),
            body
        )
        return 1

    def _integrate(self, delta_time: float, warped_dt: float, with_gravity: bool) -> int:
        """
        Semi-implicit Euler integration over the warped frame.

        The engine impulse covers the unwarped frame time and is applied on
        the first substep only.
        """
        spacecraft = self.spacecraft
        if self.time_acceleration > 1:
            substeps = self.config.substep_count(self.time_acceleration, warped_dt)
        else:
            substeps = 1
        h = warped_dt / substeps

        position = spacecraft.position
        velocity = spacecraft.velocity
        thrust_delta_v = spacecraft.thrust_acceleration() * delta_time

        for step in range(substeps):
            if with_gravity:
                force = compute_gravitational_force(
                    spacecraft.mass, self.central_body.mass,
                    position, self.central_body.position)
                velocity = velocity + force / spacecraft.mass * h
            if step == 0:
                velocity = velocity + thrust_delta_v
            position = position + velocity * h

        spacecraft.set_state(position, velocity)
        return substeps

    def _resolve_collision(self) -> bool:
        body = self.central_body
        spacecraft = self.spacecraft
        result = self.collision_resolver.resolve(
            spacecraft.position, body.position, body.radius, spacecraft.velocity)
        if result is None:
            return False

        logger.warning("Collision with %s detected (penetration %.1f m)",
                       body.name, result.penetration_depth)
        spacecraft.set_state(result.position, result.velocity)
        self._collision_latched = True
        self._set_mode(PropagationMode.NUMERICAL)
        return True

    def _set_mode(self, mode: PropagationMode) -> None:
        if mode is not self.mode:
            logger.info("Propagation mode %s -> %s", self.mode.value, mode.value)
            self.mode = mode

    def _result(self, time_step: float, substeps: int, collided: bool) -> TickResult:
        return TickResult(
            mode=self.mode,
            position=self.spacecraft.position,
            velocity=self.spacecraft.velocity,
            time_step=time_step,
            substeps=substeps,
            collided=collided,
            elapsed_time=self.elapsed_time
        )

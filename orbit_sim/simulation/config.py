"""
Propagation Configuration

Tunable parameters of the propagation controller, with JSON persistence.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import json
import math
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from ..utils.constants import (COLLISION_DAMPING, COLLISION_OFFSET_FACTOR,
                               DEFAULT_SCALE_FACTOR, DEFAULT_SUBSTEP_BUDGET,
                               KEPLER_MAX_ITERATIONS, KEPLER_TOLERANCE,
                               MAX_THRUST_SUBSTEPS, TIME_ACCELERATION_LEVELS)


@dataclass
class PropagationConfig:
    """Configuration for the propagation controller."""

    # Time acceleration
    time_acceleration_levels: Tuple[float, ...] = TIME_ACCELERATION_LEVELS

    # Numerical integration under time acceleration
    max_substeps: int = MAX_THRUST_SUBSTEPS
    max_substep_duration: Optional[float] = None  # s, None keeps max_substeps
    substep_budget: int = DEFAULT_SUBSTEP_BUDGET

    # Kepler solver
    kepler_tolerance: float = KEPLER_TOLERANCE
    kepler_max_iterations: int = KEPLER_MAX_ITERATIONS

    # Collision handling
    collision_offset_factor: float = COLLISION_OFFSET_FACTOR
    collision_damping: float = COLLISION_DAMPING

    # Opt-in: only go analytic when the orbit clears the surface
    require_periapsis_clearance: bool = False

    # Display
    display_scale_factor: float = DEFAULT_SCALE_FACTOR

    def __post_init__(self):
        """Validate configuration."""
        self.time_acceleration_levels = tuple(sorted(self.time_acceleration_levels))
        if not self.time_acceleration_levels:
            raise ValueError("At least one time acceleration level is required")
        if self.time_acceleration_levels[0] <= 0:
            raise ValueError("Time acceleration levels must be positive")
        if self.max_substeps < 1:
            raise ValueError("max_substeps must be at least 1")
        if self.max_substep_duration is not None and self.max_substep_duration <= 0:
            raise ValueError("max_substep_duration must be positive")
        if self.substep_budget < self.max_substeps:
            raise ValueError("substep_budget must not be below max_substeps")
        if self.kepler_tolerance <= 0 or self.kepler_max_iterations < 1:
            raise ValueError("Invalid Kepler solver settings")
        if self.display_scale_factor <= 0:
            raise ValueError("Display scale factor must be positive")

    def substep_count(self, time_acceleration: float, warped_dt: float) -> int:
        """
        Number of integration substeps for one warped frame.

        Grows with the warp factor up to ``max_substeps``; when
        ``max_substep_duration`` is set it may grow further, up to
        ``substep_budget``, to keep each substep short.
        """
        count = min(self.max_substeps, max(1, math.ceil(time_acceleration)))
        if self.max_substep_duration is not None and warped_dt > 0:
            needed = math.ceil(warped_dt / self.max_substep_duration)
            count = max(count, min(self.substep_budget, needed))
        return count

    def to_dict(self) -> Dict[str, Any]:
        config_dict = asdict(self)
        config_dict['time_acceleration_levels'] = list(self.time_acceleration_levels)
        return config_dict

    def save(self, path: Union[str, Path]) -> None:
        """Write configuration as JSON."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PropagationConfig":
        """Read configuration from JSON; missing keys keep their defaults."""
        with open(path, 'r') as f:
            data = json.load(f)

        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        if 'time_acceleration_levels' in data:
            data['time_acceleration_levels'] = tuple(data['time_acceleration_levels'])
        return cls(**data)


def create_default_propagation_config() -> PropagationConfig:
    """Create default propagation configuration."""
    return PropagationConfig()

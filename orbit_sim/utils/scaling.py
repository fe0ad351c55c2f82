"""
Display Scale Conversion

Converts between real-world SI quantities and simulation display units.
Length, velocity, acceleration and force all share one linear factor, so a
single pair of conversions covers every quantity.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from dataclasses import dataclass, field
from typing import Union

import numpy as np

from .constants import DEFAULT_SCALE_FACTOR

Quantity = Union[float, np.ndarray]


@dataclass(frozen=True)
class ScaleConverter:
    """
    Linear real-world <-> display unit conversion.

    Attributes:
        scale_factor: Display units per real-world unit
    """
    scale_factor: float = DEFAULT_SCALE_FACTOR
    inverse_scale_factor: float = field(init=False, repr=False)

    def __post_init__(self):
        """Validate the factor and cache its reciprocal."""
        if not np.isfinite(self.scale_factor) or self.scale_factor <= 0:
            raise ValueError("Scale factor must be positive and finite")
        object.__setattr__(self, 'inverse_scale_factor', 1.0 / self.scale_factor)

    def to_sim_units(self, real: Quantity) -> Quantity:
        """Convert a real-world scalar or array to display units."""
        return real * self.scale_factor

    def to_real_units(self, sim: Quantity) -> Quantity:
        """Convert a display-unit scalar or array to real-world units."""
        return sim * self.inverse_scale_factor

    def vector_to_sim_units(self, real_vector) -> np.ndarray:
        """Return a new display-unit vector."""
        return np.asarray(real_vector, dtype=float) * self.scale_factor

    def vector_to_real_units(self, sim_vector) -> np.ndarray:
        """Return a new real-world vector."""
        return np.asarray(sim_vector, dtype=float) * self.inverse_scale_factor

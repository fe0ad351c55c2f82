"""
Physical and Mathematical Constants for Orbital Mechanics

This module contains fundamental constants used throughout the orbital
simulation core.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import numpy as np

# Universal Constants
GRAVITATIONAL_CONSTANT = 6.67430e-11  # Gravitational constant [m³/(kg⋅s²)]

# Earth Physical Constants
EARTH_MASS = 5.972e24          # Earth mass [kg]
EARTH_RADIUS = 6.371e6         # Earth mean radius [m]
EARTH_ROTATION_PERIOD = 86400.0  # Cosmetic rotation period [s]
EARTH_MU = GRAVITATIONAL_CONSTANT * EARTH_MASS  # [m³/s²]

# Mathematical Constants
PI = np.pi
TWO_PI = 2.0 * np.pi

# Reference Frame
Z_AXIS = np.array([0.0, 0.0, 1.0])

# Orbit Classification Tolerances
PARABOLIC_TOLERANCE = 1e-4     # |e - 1| below this is treated as parabolic
CIRCULAR_TOLERANCE = 1e-6      # e below this is treated as circular
EQUATORIAL_TOLERANCE = 1e-6    # |node vector| below this is equatorial

# Kepler Solver Parameters
KEPLER_TOLERANCE = 1e-10       # Newton step size tolerance [rad]
KEPLER_MAX_ITERATIONS = 30
HIGH_ECCENTRICITY_THRESHOLD = 0.8  # Above this the solver starts at E = π

# Collision Parameters
COLLISION_OFFSET_FACTOR = 1.01  # Rebound position as a multiple of the radius
COLLISION_DAMPING = 0.5         # Velocity retained after a rebound

# Spacecraft Defaults
DEFAULT_SPACECRAFT_MASS = 1000.0    # [kg]
DEFAULT_SPACECRAFT_THRUST = 2000.0  # [N]

# Propagation Parameters
TIME_ACCELERATION_LEVELS = (1, 2, 5, 10, 50, 100, 1000)
MAX_THRUST_SUBSTEPS = 10
DEFAULT_SUBSTEP_BUDGET = 1000

# Display Scaling
DEFAULT_SCALE_FACTOR = 0.001  # Simulation display units per meter

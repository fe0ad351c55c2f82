"""
Simulation Framework Module

This module provides the per-frame propagation controller, the central
body and spacecraft models, configuration, and trajectory recording and
plotting.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

from .bodies import (
    CentralBody,
    Spacecraft
)

from .config import (
    PropagationConfig,
    create_default_propagation_config
)

from .controller import (
    PropagationController,
    PropagationMode,
    TickResult
)

from .visualization import (
    TrajectoryData,
    TrajectoryRecorder,
    TrajectoryVisualizer,
    run_simulation
)

__all__ = [
    # Bodies
    'CentralBody',
    'Spacecraft',

    # Configuration
    'PropagationConfig',
    'create_default_propagation_config',

    # Controller
    'PropagationController',
    'PropagationMode',
    'TickResult',

    # Recording and plots
    'TrajectoryData',
    'TrajectoryRecorder',
    'TrajectoryVisualizer',
    'run_simulation'
]

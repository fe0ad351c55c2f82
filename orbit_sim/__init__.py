"""
Orbital Simulation Core

Two-body orbital mechanics for an interactive spacecraft simulator:
orbit determination, Keplerian and numerical propagation, surface
collisions, and time-accelerated propagation control.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

__version__ = "1.0.0"
__author__ = "Arthur Allex Feliphe Barbosa Moreno"
__email__ = "arthur.moreno@ime.eb.br"

from .dynamics.orbital_elements import OrbitalElements, state_to_elements
from .dynamics.kepler_propagator import KeplerPropagator
from .simulation.bodies import CentralBody, Spacecraft
from .simulation.controller import PropagationController, PropagationMode
from .utils.scaling import ScaleConverter
from .utils.constants import *

"""Constants, math helpers and display scaling shared across the package."""

from .constants import *
from .math_utils import *
from .scaling import ScaleConverter

"""Core definitions shared by all manoptax modules."""

from .config import SolverConfig
from .constants import NumericalConstants, SolverDefaults
from .errors import ConfigurationError, ManoptaxError, StepsizeError, StepsizeSearchError

__all__ = [
    "ConfigurationError",
    "ManoptaxError",
    "NumericalConstants",
    "SolverConfig",
    "SolverDefaults",
    "StepsizeError",
    "StepsizeSearchError",
]

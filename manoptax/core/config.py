"""Process-wide solver configuration."""

import logging
from typing import Any, ClassVar

from .constants import NumericalConstants, SolverDefaults
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_DEFAULTS: dict[str, Any] = {
    "validate_points": True,
    "point_atol": NumericalConstants.VALIDATION_TOLERANCE,
    "debug_stream": None,
    "armijo_max_backtracks": SolverDefaults.ARMIJO_MAX_BACKTRACKS,
}


class SolverConfig:
    """Central configuration read by the solvers at run time."""

    # Manage configuration through class variables
    _config: ClassVar[dict[str, Any]] = dict(_DEFAULTS)

    @classmethod
    def configure(cls, **kwargs: Any) -> None:
        """Update solver configuration.

        Args:
            **kwargs: Configuration parameters
                - validate_points: Check the initial point before iterating
                - point_atol: Tolerance used by that check
                - debug_stream: Text stream debug output is written to
                  (``None`` means ``sys.stdout`` at print time)
                - armijo_max_backtracks: Default cap of the Armijo search

        Raises:
            ConfigurationError: If an unknown key is given.
        """
        unknown = sorted(set(kwargs) - set(_DEFAULTS))
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}. Available keys: {', '.join(sorted(_DEFAULTS))}",
                parameter_name=unknown[0],
                received_value=kwargs[unknown[0]],
            )
        logger.debug(f"Updating solver configuration: {kwargs}")
        cls._config.update(kwargs)

    @classmethod
    def get(cls, key: str) -> Any:
        """Return a single configuration value."""
        return cls._config[key]

    @classmethod
    def get_config(cls) -> dict[str, Any]:
        """Get current configuration.

        Returns:
            Copy of the current configuration dictionary
        """
        return cls._config.copy()

    @classmethod
    def reset_config(cls) -> None:
        """Reset configuration to default."""
        cls._config = dict(_DEFAULTS)

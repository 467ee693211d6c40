"""Exception classes for the manoptax solver framework.

Errors fall into three groups:

- configuration errors, raised before the first iteration,
- stepsize errors, raised when a stepsize rule cannot produce a usable step,
- oracle errors, which are whatever the cost, gradient or proximal map raise.

Oracle errors are not wrapped; they propagate out of the solver unchanged.
"""

from typing import Any


class ManoptaxError(Exception):
    """Base exception class for manoptax errors."""

    pass


class ConfigurationError(ManoptaxError):
    """Raised when a solver, problem or option is configured incorrectly.

    This error is raised when:
    - The initial point is missing or not a point on the manifold
    - A cost, gradient or proximal map is not callable
    - A debug or record token list contains an unknown token
    - Stepsize or stopping criterion parameters are out of range
    """

    def __init__(self, message: str, parameter_name: str | None = None, received_value: Any = None):
        """Initialize ConfigurationError.

        Args:
            message: Error description.
            parameter_name: Name of the offending parameter.
            received_value: The value that was rejected.
        """
        super().__init__(message)
        self.parameter_name = parameter_name
        self.received_value = received_value


class StepsizeError(ManoptaxError):
    """Raised when a stepsize rule returns a negative or non-finite step."""

    def __init__(self, message: str, stepsize: float | None = None, iteration: int | None = None):
        """Initialize StepsizeError.

        Args:
            message: Error description.
            stepsize: The rejected step length.
            iteration: Iteration at which the step was computed.
        """
        super().__init__(message)
        self.stepsize = stepsize
        self.iteration = iteration


class StepsizeSearchError(StepsizeError):
    """Raised when a line search exhausts its backtracking budget.

    This is not a convergence signal. The iterate the search started from is
    attached so that callers can decide what to do with it.
    """

    def __init__(
        self,
        message: str,
        stepsize: float | None = None,
        iteration: int | None = None,
        iterate: Any = None,
        backtracks: int | None = None,
    ):
        """Initialize StepsizeSearchError.

        Args:
            message: Error description.
            stepsize: The last trial step that was rejected.
            iteration: Iteration at which the search ran.
            iterate: The point the search started from.
            backtracks: Number of contractions performed.
        """
        super().__init__(message, stepsize=stepsize, iteration=iteration)
        self.iterate = iterate
        self.backtracks = backtracks

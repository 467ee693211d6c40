"""Stepsize rules.

A stepsize rule is called as ``stepsize(problem, options, iteration)`` and
returns the length of the step the solver takes in that iteration.
"""

import logging
import math

from ..core.config import SolverConfig
from ..core.constants import SolverDefaults
from ..core.errors import ConfigurationError, StepsizeSearchError
from .problem import get_cost, get_gradient
from .retraction import resolve_retraction

logger = logging.getLogger(__name__)


def _validate_number(value, name: str, low: float, high: float | None = None, *, closed_low: bool = False) -> float:
    """Check ``low < value (< high)`` and return the value as float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigurationError(
            f"Parameter '{name}' must be a finite number, got {value!r}", parameter_name=name, received_value=value
        )
    too_low = value < low if closed_low else value <= low
    too_high = high is not None and value >= high
    if too_low or too_high:
        bounds = f"[{low}, " if closed_low else f"({low}, "
        bounds += f"{high})" if high is not None else "inf)"
        raise ConfigurationError(
            f"Parameter '{name}' must lie in {bounds}, got {value}", parameter_name=name, received_value=value
        )
    return float(value)


class Stepsize:
    """Base class of stepsize rules."""

    #: Whether the rule evaluates the gradient of the cost.
    requires_gradient = False

    def __call__(self, problem, options, iteration: int) -> float:
        raise NotImplementedError("Subclasses must implement the step computation")

    def compute_step(self, problem, options, iteration: int) -> float:
        """Alias of calling the rule."""
        return self(problem, options, iteration)


class ConstantStepsize(Stepsize):
    """Return the same step length in every iteration."""

    def __init__(self, length: float = SolverDefaults.CONSTANT_STEPSIZE):
        self.length = _validate_number(length, "length", 0.0, closed_low=True)

    def __call__(self, problem, options, iteration: int) -> float:
        return self.length

    def __repr__(self) -> str:
        return f"ConstantStepsize({self.length})"


class DecreasingStepsize(Stepsize):
    """Step length ``(length - k * subtrahend) * factor^k / k^exponent`` in iteration k.

    With the defaults the step is constant; ``exponent=1`` gives the harmonic
    schedule ``length / k``.
    """

    def __init__(
        self, length: float = 1.0, factor: float = 1.0, subtrahend: float = 0.0, exponent: float = 0.0
    ):
        self.length = _validate_number(length, "length", 0.0)
        self.factor = _validate_number(factor, "factor", 0.0)
        self.subtrahend = _validate_number(subtrahend, "subtrahend", 0.0, closed_low=True)
        self.exponent = _validate_number(exponent, "exponent", 0.0, closed_low=True)

    def __call__(self, problem, options, iteration: int) -> float:
        k = max(iteration, 1)
        return (self.length - k * self.subtrahend) * self.factor**k / k**self.exponent

    def __repr__(self) -> str:
        return (
            f"DecreasingStepsize(length={self.length}, factor={self.factor}, "
            f"subtrahend={self.subtrahend}, exponent={self.exponent})"
        )


class ArmijoLinesearch(Stepsize):
    """Backtracking line search along the negative gradient.

    Starting from ``initial_stepsize`` the trial step s is multiplied by
    ``contraction_factor`` until

        f(R_x(-s grad f(x))) <= f(x) - sufficient_decrease * s * <grad f(x), grad f(x)>_x

    holds. The search gives up after ``max_backtracks`` contractions and raises
    :class:`StepsizeSearchError`; an unaccepted step is never returned.

    Args:
        initial_stepsize: First trial step.
        retraction: ``"exp"``, ``"retr"`` or a callable ``(M, x, v) -> y``.
        contraction_factor: Factor in (0, 1) applied to rejected steps.
        sufficient_decrease: Constant in (0, 1) of the decrease condition.
        max_backtracks: Contraction budget; defaults to
            ``SolverConfig`` ``armijo_max_backtracks``.

    Example:
        >>> stepsize = ArmijoLinesearch(1.0, "exp", 0.99, 0.5)
    """

    requires_gradient = True

    def __init__(
        self,
        initial_stepsize: float = SolverDefaults.ARMIJO_INITIAL_STEPSIZE,
        retraction="exp",
        contraction_factor: float = SolverDefaults.ARMIJO_CONTRACTION_FACTOR,
        sufficient_decrease: float = SolverDefaults.ARMIJO_SUFFICIENT_DECREASE,
        max_backtracks: int | None = None,
    ):
        self.initial_stepsize = _validate_number(initial_stepsize, "initial_stepsize", 0.0)
        self.retraction = retraction
        self._retract = resolve_retraction(retraction)
        self.contraction_factor = _validate_number(contraction_factor, "contraction_factor", 0.0, 1.0)
        self.sufficient_decrease = _validate_number(sufficient_decrease, "sufficient_decrease", 0.0, 1.0)
        if max_backtracks is not None and (
            isinstance(max_backtracks, bool) or not isinstance(max_backtracks, int) or max_backtracks < 0
        ):
            raise ConfigurationError(
                f"Parameter 'max_backtracks' must be a non-negative integer, got {max_backtracks!r}",
                parameter_name="max_backtracks",
                received_value=max_backtracks,
            )
        self.max_backtracks = max_backtracks

    def __call__(self, problem, options, iteration: int) -> float:
        manifold = problem.manifold
        x = options.x
        gradient = getattr(options, "gradient", None)
        if gradient is None:
            gradient = get_gradient(problem, x)
        max_backtracks = self.max_backtracks
        if max_backtracks is None:
            max_backtracks = SolverConfig.get("armijo_max_backtracks")

        f0 = float(get_cost(problem, x))
        squared_norm = float(manifold.inner(x, gradient, gradient))
        step = self.initial_stepsize
        if squared_norm == 0.0:
            # stationary point, any step leaves x in place
            return step
        for backtracks in range(max_backtracks + 1):
            candidate = self._retract(manifold, x, -step * gradient)
            if float(get_cost(problem, candidate)) <= f0 - self.sufficient_decrease * step * squared_norm:
                logger.debug(f"Armijo step {step:.6g} accepted after {backtracks} backtracks (iteration {iteration})")
                return step
            if backtracks < max_backtracks:
                step *= self.contraction_factor

        raise StepsizeSearchError(
            f"Armijo line search found no sufficient decrease within {max_backtracks} backtracks "
            f"(iteration {iteration}, last trial step {step:.6g})",
            stepsize=step,
            iteration=iteration,
            iterate=x,
            backtracks=max_backtracks,
        )

    def __repr__(self) -> str:
        return (
            f"ArmijoLinesearch(initial_stepsize={self.initial_stepsize}, retraction={self.retraction!r}, "
            f"contraction_factor={self.contraction_factor}, sufficient_decrease={self.sufficient_decrease})"
        )


__all__ = ["ArmijoLinesearch", "ConstantStepsize", "DecreasingStepsize", "Stepsize"]

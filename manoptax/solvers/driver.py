"""The generic iteration loop shared by all solvers.

A solver only knows how to initialize its options and how to perform one
iteration. :func:`solve` runs the loop around it: it checks the stopping
criterion after every iteration, keeps the iteration counter and the change
between iterates and calls the hooks of the debug and record decorators.
"""

import logging
import math
from typing import Any

import jax.numpy as jnp

from ..core.config import SolverConfig
from ..core.errors import ConfigurationError, StepsizeError
from ..core.type_system import ManifoldPoint
from ..plans.debug import DebugAction, DebugOptions, debug_factory
from ..plans.options import Options, OptionsDecorator, get_options, get_solver_result, iter_decorators
from ..plans.problem import Problem
from ..plans.record import RecordOptions

logger = logging.getLogger(__name__)


class Solver:
    """Base class of solvers.

    Subclasses implement :meth:`initialize` and :meth:`step`. Both receive the
    innermost options and update them in place.
    """

    def initialize(self, problem: Problem, options: Options) -> None:
        """Prepare the options before the first iteration."""

    def step(self, problem: Problem, options: Options, iteration: int) -> None:
        """Perform iteration ``iteration`` (counted from 1)."""
        raise NotImplementedError("Subclasses must implement the solver step")

    def result(self, options: Options | OptionsDecorator) -> ManifoldPoint:
        """Return the result of a finished run."""
        return get_solver_result(options)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def check_stepsize(stepsize: Any, iteration: int, allow_zero: bool = True) -> float:
    """Reject step lengths a solver cannot use.

    Args:
        stepsize: Value returned by a stepsize rule.
        iteration: Current iteration, reported in the error.
        allow_zero: Whether a zero step is acceptable.

    Returns:
        The step length as float.

    Raises:
        StepsizeError: If the step is negative, not finite or (unless
            allowed) zero.
    """
    value = float(stepsize)
    if not math.isfinite(value) or value < 0 or (value == 0 and not allow_zero):
        raise StepsizeError(
            f"Stepsize rule returned an unusable step {value} in iteration {iteration}",
            stepsize=value,
            iteration=iteration,
        )
    return value


def _validate_initial_point(problem: Problem, options: Options) -> None:
    if options.x is None:
        raise ConfigurationError("An initial point is required", parameter_name="x")
    try:
        options.x = jnp.asarray(options.x)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Initial point cannot be converted to an array: {e}", parameter_name="x", received_value=options.x
        ) from e
    if not SolverConfig.get("validate_points"):
        return
    atol = SolverConfig.get("point_atol")
    if not bool(problem.manifold.validate_point(options.x, atol)):
        raise ConfigurationError(
            f"Initial point does not lie on {problem.manifold!r}", parameter_name="x", received_value=options.x
        )


def solve(problem: Problem, options: Options | OptionsDecorator, solver: Solver) -> Options | OptionsDecorator:
    """Run a solver until its stopping criterion fires.

    Before the first iteration the iteration counter is set to 0, the solver
    is initialized, the decorators see the initial state and the stopping
    criterion is asked once, which also resets it. Then every iteration

    1. performs the solver step,
    2. stores the iteration number and the distance between old and new iterate,
    3. runs the decorator hooks, outermost first,
    4. checks the stopping criterion.

    When the criterion fires, its reason is stored in ``options.stop_reason``
    and the stop hooks run.

    Args:
        problem: The problem to solve.
        options: Options of the run, possibly wrapped in debug and record decorators.
        solver: The algorithm.

    Returns:
        The options passed in, updated in place.

    Raises:
        ConfigurationError: If the initial point is missing or invalid.
        StepsizeError: If the stepsize rule fails.
    """
    state = get_options(options)
    _validate_initial_point(problem, state)
    decorators = list(iter_decorators(options))
    criterion = state.stopping_criterion

    state.iteration = 0
    state.last_change = 0.0
    state.stop_reason = ""
    solver.initialize(problem, state)
    for decorator in decorators:
        decorator.on_start(problem, state)
    logger.debug(f"Starting {solver!r} on {problem.manifold!r} with {criterion!r}")

    iteration = 0
    stop = criterion(problem, state, iteration)
    while not stop:
        iteration += 1
        previous = state.x
        solver.step(problem, state, iteration)
        state.iteration = iteration
        state.last_change = float(problem.manifold.dist(previous, state.x))
        for decorator in decorators:
            decorator.on_iteration(problem, state, iteration)
        logger.debug(f"Iteration {iteration}: change {state.last_change:.6g}")
        stop = criterion(problem, state, iteration)

    state.stop_reason = criterion.reason
    logger.info(f"{solver!r} stopped after {iteration} iterations: {state.stop_reason}")
    for decorator in decorators:
        decorator.on_stop(problem, state, iteration)
    return options


def build_options(options_type: type[Options], x0: ManifoldPoint, stepsize, stopping_criterion, **kwargs) -> Options:
    """Create options, keeping the type's defaults for rules that are not given."""
    if stepsize is not None:
        kwargs["stepsize"] = stepsize
    if stopping_criterion is not None:
        kwargs["stopping_criterion"] = stopping_criterion
    return options_type(x0, **kwargs)


def decorate_options(
    options: Options | OptionsDecorator,
    debug: DebugAction | list | None = None,
    record: Any = None,
    io: Any = None,
) -> Options | OptionsDecorator:
    """Wrap options with record and debug decorators.

    The record decorator is placed inside the debug decorator, so in every
    iteration debug output is written before values are recorded.

    Args:
        options: Options to decorate.
        debug: Debug action or token list, see :func:`debug_factory`.
        record: Record action or token list, see :func:`record_factory`.
        io: Stream for debug output created from a token list.

    Returns:
        The decorated options, or ``options`` itself if neither is given.
    """
    if record:
        options = RecordOptions(options, record)
    if debug:
        if not isinstance(debug, DebugAction):
            debug = debug_factory(debug, io=io)
        options = DebugOptions(options, debug)
    return options


__all__ = ["Solver", "build_options", "check_stepsize", "decorate_options", "solve"]

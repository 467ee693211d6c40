"""Cyclic proximal point algorithm.

For a cost ``f = Σ_{i=1}^c f_i`` given by the proximal maps of its summands,
one iteration (a sweep) applies all maps once, in declared order, each to
the result of the previous one:

    x <- prox_{λ_k / c · f_i}(x),    i = 1, ..., c.

The parameters λ_k come from the stepsize rule of the options; by default
``λ_k = λ / k``, a square-summable but not summable sequence.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ..core.errors import ConfigurationError
from ..core.type_system import CostFunction, ManifoldPoint, ProximalMap
from ..plans.debug import DebugAction
from ..plans.options import CyclicProximalPointOptions
from ..plans.problem import ProximalProblem, get_proximal_map
from ..plans.stepsize import DecreasingStepsize, Stepsize
from ..plans.stopping_criterion import StoppingCriterion
from .driver import Solver, build_options, check_stepsize, decorate_options, solve
from .results import SolverResult

logger = logging.getLogger(__name__)

_EVALUATION_ORDERS = ("LinearOrder",)


class CyclicProximalPoint(Solver):
    """Cyclic proximal point algorithm on a :class:`ProximalProblem`."""

    def initialize(self, problem: ProximalProblem, options: CyclicProximalPointOptions) -> None:
        if options.evaluation_order not in _EVALUATION_ORDERS:
            raise ConfigurationError(
                f"Unknown evaluation order '{options.evaluation_order}'. "
                f"Available orders: {', '.join(_EVALUATION_ORDERS)}",
                parameter_name="evaluation_order",
                received_value=options.evaluation_order,
            )
        if getattr(options.stepsize, "requires_gradient", False):
            raise ConfigurationError(
                f"{type(options.stepsize).__name__} needs a gradient, which a proximal problem does not provide",
                parameter_name="stepsize",
                received_value=options.stepsize,
            )

    def step(self, problem: ProximalProblem, options: CyclicProximalPointOptions, iteration: int) -> None:
        lambda_ = check_stepsize(options.stepsize(problem, options, iteration), iteration, allow_zero=False)
        options.last_stepsize = lambda_
        weight = lambda_ / problem.number_of_proxes
        x = options.x
        # Gauss-Seidel: each map acts on the output of the previous one
        for i in range(problem.number_of_proxes):
            x = get_proximal_map(problem, weight, x, i)
        options.x = x


def cyclic_proximal_point(
    manifold: Any,
    cost: CostFunction,
    proximal_maps: Sequence[ProximalMap],
    x0: ManifoldPoint,
    *,
    lambda_: float = 1.0,
    stepsize: Stepsize | None = None,
    stopping_criterion: StoppingCriterion | None = None,
    debug: DebugAction | Iterable[Any] | None = None,
    record: Any = None,
    return_options: bool = False,
) -> ManifoldPoint | SolverResult:
    """Minimize a sum of functions given by their proximal maps.

    Args:
        manifold: Manifold the cost is defined on.
        cost: Cost ``f(M, x)``, used for debug and record output.
        proximal_maps: Maps ``(M, λ, x) -> prox_{λ f_i}(x)`` in the order
            they are applied.
        x0: Initial point.
        lambda_: Initial parameter λ of the default schedule ``λ_k = λ / k``.
        stepsize: Rule producing λ_k; overrides ``lambda_``.
        stopping_criterion: By default ``StopAfterIteration(5000) |
            StopWhenChangeLess(1e-12)``.
        debug: Debug action or token list.
        record: Record action or token list.
        return_options: Return a :class:`SolverResult` instead of the point.

    Returns:
        The final iterate, or a :class:`SolverResult` if ``return_options``.

    Raises:
        ConfigurationError: For invalid inputs.
        StepsizeError: If the schedule produces a non-positive λ_k.

    Example:
        >>> x = cyclic_proximal_point(M, mean_distance_cost(data),
        ...                           distance_proximal_maps(data), data[0],
        ...                           debug=["Iteration", " | ", "Cost", "\\n", 50, "Stop"])
    """
    problem = ProximalProblem(manifold, cost, proximal_maps)
    if stepsize is None:
        stepsize = DecreasingStepsize(lambda_, exponent=1.0)
    options = build_options(CyclicProximalPointOptions, x0, stepsize, stopping_criterion)
    options = decorate_options(options, debug=debug, record=record)
    logger.debug(f"Cyclic proximal point with {problem.number_of_proxes} proximal maps and {stepsize!r}")
    solve(problem, options, CyclicProximalPoint())
    if return_options:
        return SolverResult.from_options(problem, options)
    return options.x


__all__ = ["CyclicProximalPoint", "cyclic_proximal_point"]

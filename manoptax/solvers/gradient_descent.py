"""Riemannian gradient descent.

Starting from x_0 the algorithm iterates

    x_{k+1} = R_{x_k}(-s_k grad f(x_k)),

where R is the exponential map or a retraction and s_k is produced by a
stepsize rule, for example a constant step or an Armijo line search.
"""

from collections.abc import Iterable
from typing import Any

from ..core.type_system import CostFunction, GradientFunction, ManifoldPoint, Retraction
from ..plans.debug import DebugAction
from ..plans.options import GradientDescentOptions
from ..plans.problem import GradientProblem, get_gradient
from ..plans.retraction import resolve_retraction
from ..plans.stepsize import Stepsize
from ..plans.stopping_criterion import StoppingCriterion
from .driver import Solver, build_options, check_stepsize, decorate_options, solve
from .results import SolverResult


class GradientDescent(Solver):
    """Gradient descent on a :class:`GradientProblem`.

    The gradient at the current iterate is kept in ``options.gradient``; it
    is computed in :meth:`initialize` and refreshed after every step, so
    stepsize rules and stopping criteria always see the gradient at ``x``.
    """

    def initialize(self, problem: GradientProblem, options: GradientDescentOptions) -> None:
        self._retract = resolve_retraction(options.retraction)
        options.gradient = get_gradient(problem, options.x)

    def step(self, problem: GradientProblem, options: GradientDescentOptions, iteration: int) -> None:
        stepsize = check_stepsize(options.stepsize(problem, options, iteration), iteration)
        options.last_stepsize = stepsize
        options.x = self._retract(problem.manifold, options.x, -stepsize * options.gradient)
        options.gradient = get_gradient(problem, options.x)


def gradient_descent(
    manifold: Any,
    cost: CostFunction,
    gradient: GradientFunction,
    x0: ManifoldPoint,
    *,
    stepsize: Stepsize | None = None,
    stopping_criterion: StoppingCriterion | None = None,
    retraction: str | Retraction = "exp",
    debug: DebugAction | Iterable[Any] | None = None,
    record: Any = None,
    return_options: bool = False,
) -> ManifoldPoint | SolverResult:
    """Minimize a cost on a manifold with gradient descent.

    Args:
        manifold: Manifold the cost is defined on.
        cost: Cost ``f(M, x)``.
        gradient: Riemannian gradient ``grad f(M, x)``.
        x0: Initial point.
        stepsize: Stepsize rule, by default ``ConstantStepsize(1.0)``.
        stopping_criterion: By default ``StopAfterIteration(100)``.
        retraction: ``"exp"``, ``"retr"`` or a callable ``(M, x, v) -> y``.
        debug: Debug action or token list.
        record: Record action or token list.
        return_options: Return a :class:`SolverResult` instead of the point.

    Returns:
        The final iterate, or a :class:`SolverResult` if ``return_options``.

    Raises:
        ConfigurationError: For invalid inputs.
        StepsizeError: If the stepsize rule fails.

    Example:
        >>> M = Sphere(2)
        >>> x = gradient_descent(M, mean_squared_distance_cost(data),
        ...                      mean_squared_distance_gradient(data), data[0])
    """
    problem = GradientProblem(manifold, cost, gradient)
    options = build_options(GradientDescentOptions, x0, stepsize, stopping_criterion, retraction=retraction)
    options = decorate_options(options, debug=debug, record=record)
    solve(problem, options, GradientDescent())
    if return_options:
        return SolverResult.from_options(problem, options)
    return options.x


__all__ = ["GradientDescent", "gradient_descent"]

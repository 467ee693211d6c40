"""Problem definitions: the static part of an optimization run.

A problem bundles everything that does not change while a solver iterates:
the manifold, the cost and the oracles of the algorithm. Problems are frozen
and may be shared by any number of runs.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..core.errors import ConfigurationError
from ..core.type_system import CostFunction, GradientFunction, ManifoldPoint, ProximalMap, TangentVector


def _require_callable(value: Any, name: str) -> None:
    if not callable(value):
        raise ConfigurationError(
            f"'{name}' must be callable, got {type(value).__name__}", parameter_name=name, received_value=value
        )


@dataclass(frozen=True)
class Problem:
    """A cost function on a manifold.

    Attributes:
        manifold: Manifold the cost is defined on.
        cost: Cost ``f(M, x)``.
    """

    manifold: Any
    cost: CostFunction

    def __post_init__(self):
        if self.manifold is None:
            raise ConfigurationError("A manifold is required", parameter_name="manifold")
        _require_callable(self.cost, "cost")


@dataclass(frozen=True)
class GradientProblem(Problem):
    """A differentiable cost with its Riemannian gradient ``grad f(M, x)``."""

    gradient: GradientFunction = None

    def __post_init__(self):
        super().__post_init__()
        _require_callable(self.gradient, "gradient")


@dataclass(frozen=True)
class ProximalProblem(Problem):
    """A cost ``f = Σ f_i`` given by the proximal maps of its summands.

    The maps are stored in declared order; solvers apply them in that order.
    """

    proximal_maps: tuple[ProximalMap, ...] = field(default=())

    def __post_init__(self):
        super().__post_init__()
        if isinstance(self.proximal_maps, Iterable) and not isinstance(self.proximal_maps, str):
            object.__setattr__(self, "proximal_maps", tuple(self.proximal_maps))
        if not isinstance(self.proximal_maps, tuple) or not self.proximal_maps:
            raise ConfigurationError(
                "At least one proximal map is required",
                parameter_name="proximal_maps",
                received_value=self.proximal_maps,
            )
        for i, prox in enumerate(self.proximal_maps):
            _require_callable(prox, f"proximal_maps[{i}]")

    @property
    def number_of_proxes(self) -> int:
        """Number of summands of the cost."""
        return len(self.proximal_maps)


def get_cost(problem: Problem, x: ManifoldPoint) -> float:
    """Evaluate the cost of problem at x."""
    return problem.cost(problem.manifold, x)


def get_gradient(problem: GradientProblem, x: ManifoldPoint) -> TangentVector:
    """Evaluate the gradient of problem at x."""
    return problem.gradient(problem.manifold, x)


def get_proximal_map(problem: ProximalProblem, lambda_: float, x: ManifoldPoint, i: int) -> ManifoldPoint:
    """Evaluate the i-th proximal map of problem with parameter lambda_ at x."""
    return problem.proximal_maps[i](problem.manifold, lambda_, x)


__all__ = [
    "GradientProblem",
    "Problem",
    "ProximalProblem",
    "get_cost",
    "get_gradient",
    "get_proximal_map",
]

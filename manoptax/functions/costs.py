"""Cost functions and oracles for the Riemannian centre of mass and median.

Given data points d_1, ..., d_n the centre of mass minimizes
``F(y) = 1/(2n) Σ d(y, d_i)^2`` and the median minimizes
``G(y) = 1/n Σ d(y, d_i)``. The factories below close over the data and
return oracles with the ``(manifold, ...)`` signature the solvers expect.
"""

from collections.abc import Sequence

from ..core.type_system import CostFunction, GradientFunction, ManifoldPoint, ProximalMap
from .gradients import grad_distance
from .proximal_maps import prox_distance


def _as_tuple(data: Sequence[ManifoldPoint]) -> tuple[ManifoldPoint, ...]:
    points = tuple(data)
    if not points:
        raise ValueError("At least one data point is required")
    return points


def mean_squared_distance_cost(data: Sequence[ManifoldPoint]) -> CostFunction:
    """Return ``F(M, y) = 1/(2n) Σ d(y, d_i)^2``."""
    points = _as_tuple(data)
    n = len(points)

    def cost(manifold, y):
        return sum(manifold.dist(y, d) ** 2 for d in points) / (2 * n)

    return cost


def mean_squared_distance_gradient(data: Sequence[ManifoldPoint]) -> GradientFunction:
    """Return ``grad F(M, y) = 1/n Σ grad_distance(M, d_i, y)``."""
    points = _as_tuple(data)
    n = len(points)

    def gradient(manifold, y):
        return sum(grad_distance(manifold, d, y) for d in points) / n

    return gradient


def mean_distance_cost(data: Sequence[ManifoldPoint]) -> CostFunction:
    """Return ``G(M, y) = 1/n Σ d(y, d_i)``."""
    points = _as_tuple(data)
    n = len(points)

    def cost(manifold, y):
        return sum(manifold.dist(y, d) for d in points) / n

    return cost


def distance_proximal_maps(data: Sequence[ManifoldPoint]) -> list[ProximalMap]:
    """Return one proximal map ``(M, λ, y) -> prox_{λ d(d_i, ·)}(y)`` per data point.

    The maps do not include the ``1/n`` weight of the median cost; the cyclic
    proximal point solver divides λ by the number of maps.
    """
    points = _as_tuple(data)

    def make_prox(d):
        def prox(manifold, lambda_, y):
            return prox_distance(manifold, lambda_, d, y, 1)

        return prox

    return [make_prox(d) for d in points]


__all__ = [
    "distance_proximal_maps",
    "mean_distance_cost",
    "mean_squared_distance_cost",
    "mean_squared_distance_gradient",
]

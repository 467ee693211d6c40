"""Type aliases for manoptax.

Points and tangent vectors are JAX arrays; the callables below describe the
oracles a problem is built from. All oracles receive the manifold first so
that the same function can be reused on manifolds of different dimension.
"""

from collections.abc import Callable
from typing import Any

from jaxtyping import Array, Float

# Type aliases for common manifold objects
ManifoldPoint = Float[Array, "... dim"]
"""Type alias for points on a Riemannian manifold."""

TangentVector = Float[Array, "... dim"]
"""Type alias for tangent vectors on a Riemannian manifold."""

CostFunction = Callable[[Any, ManifoldPoint], Any]
"""Cost ``f(M, x)`` returning a real scalar."""

GradientFunction = Callable[[Any, ManifoldPoint], TangentVector]
"""Riemannian gradient ``grad f(M, x)``."""

ProximalMap = Callable[[Any, float, ManifoldPoint], ManifoldPoint]
"""Proximal map ``prox_{λ f}(M, λ, x)``."""

Retraction = Callable[[Any, ManifoldPoint, TangentVector], ManifoldPoint]
"""Retraction ``R(M, x, v)`` mapping a tangent vector back onto the manifold."""

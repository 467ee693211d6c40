"""Riemannian gradients of distance-based cost terms."""

import jax.numpy as jnp

from ..core.type_system import ManifoldPoint, TangentVector


def grad_distance(manifold, y: ManifoldPoint, x: ManifoldPoint, p: int = 2) -> TangentVector:
    """Gradient of ``f(x) = d(x, y)^p / p`` with respect to x.

    For ``p = 2`` this is ``-log_x(y)``; for other exponents the logarithm is
    rescaled by ``d(x, y)^(p - 2)``.

    Args:
        manifold: Manifold x and y live on.
        y: Fixed reference point.
        x: Point at which the gradient is evaluated.
        p: Exponent of the distance.

    Returns:
        The Riemannian gradient at x.
    """
    log_xy = manifold.log(x, y)
    if p == 2:
        return -log_xy
    d = manifold.dist(x, y)
    # d^(p-2) is undefined at d = 0 for p < 2; the gradient is taken as zero there
    scale = jnp.where(d > 0, jnp.power(jnp.maximum(d, 1e-300), p - 2), 0.0)
    return -scale * log_xy


__all__ = ["grad_distance"]

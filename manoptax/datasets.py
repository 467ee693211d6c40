"""Synthetic data on manifolds.

All randomness comes from an explicitly passed JAX PRNG key; there is no
global seed.
"""

import jax.random as jr
from jaxtyping import Array

from .core.type_system import ManifoldPoint


def noisy_points(manifold, center: ManifoldPoint, n: int, sigma: float, key: Array) -> list[ManifoldPoint]:
    """Sample n points scattered around center.

    Each point is ``exp_center(v)`` for a Gaussian tangent vector v with
    standard deviation sigma.

    Args:
        manifold: Manifold to sample on.
        center: Point the samples scatter around.
        n: Number of samples.
        sigma: Standard deviation of the tangent noise.
        key: JAX PRNG key.

    Returns:
        List of n points on the manifold.

    Example:
        >>> import jax
        >>> import jax.numpy as jnp
        >>> from manoptax.manifolds import Sphere
        >>> M = Sphere(2)
        >>> x = jnp.array([1.0, 0.0, 1.0]) / jnp.sqrt(2.0)
        >>> data = noisy_points(M, x, 100, jnp.pi / 8, jax.random.key(42))
    """
    if n < 1:
        raise ValueError(f"Number of samples must be positive, got {n}")
    keys = jr.split(key, n)
    return [manifold.exp(center, manifold.random_tangent(k, center, sigma)) for k in keys]


__all__ = ["noisy_points"]

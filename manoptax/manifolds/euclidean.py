"""Euclidean space manifold."""

import jax.numpy as jnp
import jax.random as jr
from jaxtyping import Array

from ..core.constants import NumericalConstants
from .base import Manifold


class Euclidean(Manifold):
    """Euclidean space R^n with flat metric.

    This is the trivial manifold where:
    - exp_x(v) = retr_x(v) = x + v
    - log_x(y) = y - x
    - dist(x, y) = ||y - x||

    Useful as a baseline and for checking solvers against classical results.
    """

    def __init__(self, n: int):
        if n < 1:
            raise ValueError(f"Euclidean dimension must be positive, got {n}")
        self._n = n

    def exp(self, x: Array, v: Array) -> Array:
        return x + v

    def log(self, x: Array, y: Array) -> Array:
        return y - x

    def retr(self, x: Array, v: Array) -> Array:
        return x + v

    def proj(self, x: Array, v: Array) -> Array:
        return v

    def inner(self, x: Array, u: Array, v: Array) -> Array:
        return jnp.dot(u, v)

    def dist(self, x: Array, y: Array) -> Array:
        return jnp.linalg.norm(y - x)

    def random_point(self, key: Array) -> Array:
        return jr.normal(key, (self._n,))

    def random_tangent(self, key: Array, x: Array, sigma: float = 1.0) -> Array:
        return sigma * jr.normal(key, x.shape)

    def validate_point(self, x: Array, atol: float = NumericalConstants.VALIDATION_TOLERANCE) -> bool:
        """Validate shape and finiteness of x."""
        x = jnp.asarray(x)
        return x.shape == (self._n,) and bool(jnp.all(jnp.isfinite(x)))

    @property
    def dimension(self) -> int:
        return self._n

    @property
    def ambient_dimension(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"Euclidean({self._n})"

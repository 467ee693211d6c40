"""Implementation of the sphere manifold S^n with its Riemannian geometry.

This module provides operations for optimization on the unit sphere, the
manifold used for spherical means and medians of directional data.
"""

import jax.numpy as jnp
import jax.random as jr
from jaxtyping import Array

from ..core.constants import NumericalConstants
from .base import Manifold


class Sphere(Manifold):
    """Sphere manifold S^n embedded in R^(n+1) with the canonical Riemannian metric.

    The n-dimensional sphere S^n consists of all unit vectors in R^(n+1), i.e.,
    all points x ∈ R^(n+1) such that ||x|| = 1.
    """

    def __init__(self, n: int = 2):
        """Initialize sphere manifold S^n.

        Args:
            n: Dimension of the sphere (default: 2 for S^2 embedded in R^3)

        Raises:
            ValueError: If n < 1 (sphere dimension must be positive)
        """
        if n < 1:
            raise ValueError(f"Sphere dimension must be positive, got {n}")
        self._n = n
        self._ambient_dim = n + 1

    def proj(self, x: Array, v: Array) -> Array:
        """Project vector v onto the tangent space of the sphere at point x.

        The tangent space at x consists of all vectors orthogonal to x.
        """
        return v - jnp.dot(x, v) * x

    def exp(self, x: Array, v: Array) -> Array:
        """Compute the exponential map on the sphere.

        For the sphere, the exponential map corresponds to following a great circle
        in the direction of the tangent vector v.
        """
        v_norm = jnp.linalg.norm(v)
        # Handle numerical stability for small vectors
        safe_norm = jnp.maximum(v_norm, NumericalConstants.EPSILON)
        y = jnp.cos(v_norm) * x + jnp.sin(v_norm) * v / safe_norm
        # Renormalize to keep rounding errors from accumulating over many steps
        return y / jnp.linalg.norm(y)

    def log(self, x: Array, y: Array) -> Array:
        """Compute the logarithmic map on the sphere.

        Returns the tangent vector at x that points toward y along the geodesic,
        scaled to the geodesic distance. Antipodal points have no unique
        logarithm; the projected difference direction is used there.
        """
        v = self.proj(x, y - x)
        v_norm = jnp.linalg.norm(v)
        safe_norm = jnp.maximum(v_norm, NumericalConstants.EPSILON)
        theta = self.dist(x, y)
        return jnp.where(v_norm > NumericalConstants.EPSILON, theta * v / safe_norm, jnp.zeros_like(x))

    def retr(self, x: Array, v: Array) -> Array:
        """Compute the retraction on the sphere by normalization of x + v."""
        y = x + v
        return y / jnp.linalg.norm(y)

    def inner(self, x: Array, u: Array, v: Array) -> Array:
        """Compute the Riemannian inner product, the ambient dot product."""
        return jnp.dot(u, v)

    def dist(self, x: Array, y: Array) -> Array:
        """Compute the geodesic distance between points on the sphere.

        Uses ``2 arcsin(||x - y|| / 2)``, which stays accurate for nearby
        points where ``arccos(<x, y>)`` loses precision.
        """
        chord = jnp.clip(jnp.linalg.norm(x - y) / 2.0, 0.0, 1.0)
        return 2.0 * jnp.arcsin(chord)

    def random_point(self, key: Array) -> Array:
        """Generate a uniformly distributed point on the sphere."""
        samples = jr.normal(key, (self.ambient_dimension,))
        return samples / jnp.linalg.norm(samples)

    def random_tangent(self, key: Array, x: Array, sigma: float = 1.0) -> Array:
        """Generate a Gaussian tangent vector at x with standard deviation sigma."""
        ambient = sigma * jr.normal(key, x.shape)
        return self.proj(x, ambient)

    def validate_point(self, x: Array, atol: float = NumericalConstants.VALIDATION_TOLERANCE) -> bool:
        """Validate that x is a unit vector of the right size."""
        x = jnp.asarray(x)
        if x.shape != (self.ambient_dimension,):
            return False
        return bool(jnp.allclose(jnp.linalg.norm(x), 1.0, atol=atol))

    @property
    def dimension(self) -> int:
        """Dimension of the sphere (n for S^n)."""
        return self._n

    @property
    def ambient_dimension(self) -> int:
        """Ambient space dimension (n+1 for S^n)."""
        return self._ambient_dim

    def __repr__(self) -> str:
        """String representation of the sphere."""
        return f"Sphere({self._n})"

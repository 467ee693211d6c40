"""Abstract base class for the manifolds the solvers operate on.

The solver framework only consumes the operations defined here. Concrete
geometry lives in the subclasses; any object providing the same methods can be
passed to a solver.
"""

import jax.numpy as jnp
from jaxtyping import Array

from ..core.constants import NumericalConstants
from ..core.errors import ManoptaxError
from ..core.type_system import ManifoldPoint, TangentVector


class ManifoldError(ManoptaxError):
    """Base exception for manifold-related errors."""

    pass


class InvalidPointError(ManifoldError):
    """Exception for points that do not lie on the manifold."""

    def __init__(self, message: str, point: Array | None = None, constraint_value: float | None = None):
        """Initialize InvalidPointError with constraint violation information."""
        super().__init__(message)
        self.point = point
        self.constraint_value = constraint_value


class Manifold:
    """Abstract base class for Riemannian manifolds.

    This class defines the operations required by the solvers: exponential and
    logarithmic maps, a retraction, the metric and the geodesic distance.
    """

    def exp(self, x: ManifoldPoint, v: TangentVector) -> ManifoldPoint:
        """Apply the exponential map to move from point x along tangent vector v.

        Args:
            x: Point on the manifold.
            v: Tangent vector at x.

        Returns:
            The point reached by following the geodesic from x in direction v.
        """
        raise NotImplementedError("Subclasses must implement exponential map")

    def log(self, x: ManifoldPoint, y: ManifoldPoint) -> TangentVector:
        """Apply the logarithmic map to find the tangent vector that maps x to y.

        Args:
            x: Starting point on the manifold.
            y: Target point on the manifold.

        Returns:
            The tangent vector v at x such that exp(x, v) = y.
        """
        raise NotImplementedError("Subclasses must implement logarithmic map")

    def retr(self, x: ManifoldPoint, v: TangentVector) -> ManifoldPoint:
        """Apply a retraction, a first order approximation of the exponential map.

        Args:
            x: Point on the manifold.
            v: Tangent vector at x.

        Returns:
            The point reached by the retraction from x in direction v.
        """
        raise NotImplementedError("Subclasses must implement retraction")

    def proj(self, x: ManifoldPoint, v: Array) -> TangentVector:
        """Project a vector from ambient space to the tangent space at point x."""
        raise NotImplementedError("Subclasses must implement projection operation")

    def inner(self, x: ManifoldPoint, u: TangentVector, v: TangentVector) -> Array:
        """Compute the Riemannian inner product between tangent vectors u and v at point x."""
        raise NotImplementedError("Subclasses must implement Riemannian inner product")

    def dist(self, x: ManifoldPoint, y: ManifoldPoint) -> Array:
        """Compute the Riemannian distance between points x and y on the manifold.

        Args:
            x: First point on the manifold.
            y: Second point on the manifold.

        Returns:
            The geodesic distance between x and y.
        """
        return self.norm(x, self.log(x, y))

    def norm(self, x: ManifoldPoint, v: TangentVector) -> Array:
        """Compute the norm ||v||_x of tangent vector v at point x."""
        return jnp.sqrt(jnp.maximum(self.inner(x, v, v), 0.0))

    def zero_vector(self, x: ManifoldPoint) -> TangentVector:
        """Return the zero tangent vector at x."""
        return jnp.zeros_like(x)

    def random_point(self, key: Array) -> ManifoldPoint:
        """Generate a random point on the manifold from an explicit PRNG key."""
        raise NotImplementedError("Subclasses must implement random point generation")

    def random_tangent(self, key: Array, x: ManifoldPoint, sigma: float = 1.0) -> TangentVector:
        """Generate a Gaussian tangent vector at x with standard deviation sigma."""
        raise NotImplementedError("Subclasses must implement random tangent generation")

    def validate_point(self, x: ManifoldPoint, atol: float = NumericalConstants.VALIDATION_TOLERANCE) -> bool:
        """Validate that x is a valid point on the manifold.

        Args:
            x: Point to validate.
            atol: Absolute tolerance for validation.

        Returns:
            True if x is on the manifold, False otherwise.
        """
        raise NotImplementedError("Point validation not implemented")

    def check_point(self, x: ManifoldPoint, atol: float = NumericalConstants.VALIDATION_TOLERANCE) -> None:
        """Raise InvalidPointError if x is not a point on the manifold."""
        if not self.validate_point(x, atol):
            raise InvalidPointError(f"Point is not on {self!r} (atol={atol})", point=x)

    @property
    def dimension(self) -> int:
        """Intrinsic dimension of the manifold."""
        raise NotImplementedError("Subclasses must define manifold dimension")

    @property
    def ambient_dimension(self) -> int:
        """Dimension of the ambient space."""
        raise NotImplementedError("Subclasses must define ambient dimension")

    def __repr__(self) -> str:
        """String representation of the manifold."""
        return f"{self.__class__.__name__}()"

"""Manifolds the solvers can run on."""

from .base import InvalidPointError, Manifold, ManifoldError
from .euclidean import Euclidean
from .sphere import Sphere


def create_sphere(n: int = 2) -> Sphere:
    """Create a sphere manifold S^n with dimension validation.

    Args:
        n: The dimension of the sphere (default: 2 for S^2)

    Returns:
        Sphere: A sphere manifold instance

    Raises:
        ValueError: If dimension is not a positive integer
        TypeError: If n is not an integer

    Examples:
        >>> sphere = create_sphere(3)  # Creates S^3
        >>> sphere = create_sphere()   # Creates S^2 (default)
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f"Sphere dimension must be an integer, got {type(n)}")
    if n <= 0:
        raise ValueError(f"Sphere dimension must be positive, got {n}")
    return Sphere(n=n)


def create_euclidean(n: int) -> Euclidean:
    """Create the Euclidean space R^n with dimension validation."""
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f"Euclidean dimension must be an integer, got {type(n)}")
    if n <= 0:
        raise ValueError(f"Euclidean dimension must be positive, got {n}")
    return Euclidean(n=n)


__all__ = [
    "Euclidean",
    "InvalidPointError",
    "Manifold",
    "ManifoldError",
    "Sphere",
    "create_euclidean",
    "create_sphere",
]

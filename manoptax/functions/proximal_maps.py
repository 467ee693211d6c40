"""Proximal maps of distance-based cost terms.

Both maps move x along the geodesic towards the reference point; they only
differ in how far.
"""

from ..core.errors import ConfigurationError
from ..core.type_system import ManifoldPoint


def prox_distance(manifold, lambda_: float, f: ManifoldPoint, x: ManifoldPoint, p: int = 2) -> ManifoldPoint:
    """Proximal map of ``φ(y) = λ d(f, y)^p / p`` at x.

    Args:
        manifold: Manifold the points live on.
        lambda_: Proximal parameter λ > 0.
        f: Reference point of the distance term.
        x: Point the proximal map is evaluated at.
        p: Exponent, either 1 or 2.

    Returns:
        The point ``exp_x(t log_x(f))`` with ``t = λ / (1 + λ)`` for ``p = 2`` and
        ``t = min(λ / d(f, x), 1)`` for ``p = 1``.

    Raises:
        ConfigurationError: If p is neither 1 nor 2 or λ is not positive.
    """
    if lambda_ <= 0:
        raise ConfigurationError(f"Proximal parameter must be positive, got {lambda_}", "lambda_", lambda_)
    if p == 2:
        t = lambda_ / (1.0 + lambda_)
    elif p == 1:
        d = float(manifold.dist(f, x))
        t = 1.0 if d <= lambda_ else lambda_ / d
    else:
        raise ConfigurationError(f"Proximal map of the distance is only available for p = 1, 2; got p = {p}", "p", p)
    return manifold.exp(x, t * manifold.log(x, f))


__all__ = ["prox_distance"]

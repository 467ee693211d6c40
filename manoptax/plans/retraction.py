"""Selection of the map that moves a point along a tangent vector."""

from ..core.errors import ConfigurationError
from ..core.type_system import Retraction

_NAMED_RETRACTIONS: dict[str, Retraction] = {
    "exp": lambda manifold, x, v: manifold.exp(x, v),
    "retr": lambda manifold, x, v: manifold.retr(x, v),
}


def resolve_retraction(retraction: str | Retraction) -> Retraction:
    """Turn a retraction name or callable into a callable ``(M, x, v) -> y``.

    Args:
        retraction: ``"exp"`` for the exponential map, ``"retr"`` for the
            manifold's own retraction, or a callable with that signature.

    Raises:
        ConfigurationError: If the name is unknown or the value is neither a
            string nor callable.
    """
    if isinstance(retraction, str):
        try:
            return _NAMED_RETRACTIONS[retraction]
        except KeyError:
            raise ConfigurationError(
                f"Unknown retraction '{retraction}'. Available retractions: {', '.join(_NAMED_RETRACTIONS)}",
                parameter_name="retraction",
                received_value=retraction,
            ) from None
    if callable(retraction):
        return retraction
    raise ConfigurationError(
        f"Retraction must be a name or a callable, got {type(retraction).__name__}",
        parameter_name="retraction",
        received_value=retraction,
    )


__all__ = ["resolve_retraction"]

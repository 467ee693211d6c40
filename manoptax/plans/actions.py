"""Vocabulary shared by debug and record actions.

Debug and record output is described by a flat list of tokens, for example::

    ["Iteration", " | ", "x", " | ", "Change", " | ", "Cost", "\\n", 50, "Stop"]

Names of :class:`Token` members select an action, other strings are printed
verbatim (debug only) and a positive integer sets the cadence, "every N-th
iteration", of all tokens that follow it until the next integer. ``Stop``
always acts once, when the solver stops.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..core.errors import ConfigurationError


class Token(Enum):
    """Symbolic names of the quantities actions can print or record."""

    ITERATION = "Iteration"
    COST = "Cost"
    CHANGE = "Change"
    ITERATE = "x"
    STOP = "Stop"
    GRADIENT_NORM = "GradientNorm"
    STEPSIZE = "Stepsize"


@dataclass(frozen=True)
class Cadence:
    """When an action acts.

    Attributes:
        every: Act in iterations divisible by ``every``.
        at_stop: Act only once, when the solver stops.
    """

    every: int = 1
    at_stop: bool = False

    def __post_init__(self):
        if isinstance(self.every, bool) or not isinstance(self.every, int) or self.every < 1:
            raise ConfigurationError(
                f"Cadence must be a positive integer, got {self.every!r}",
                parameter_name="every",
                received_value=self.every,
            )

    def matches(self, iteration: int, stopped: bool = False) -> bool:
        """Return whether an action with this cadence acts now."""
        if self.at_stop or stopped:
            return self.at_stop and stopped
        return iteration % self.every == 0


EVERY_ITERATION = Cadence()
AT_STOP = Cadence(at_stop=True)


def as_token(value: Any) -> Token | None:
    """Return the token a value names, or None for anything else."""
    if isinstance(value, Token):
        return value
    if isinstance(value, str):
        try:
            return Token(value)
        except ValueError:
            return None
    return None


def parse_tokens(
    tokens: Iterable[Any],
    build: Callable[[Token, Cadence], Any],
    action_type: type,
    literal: Callable[[str, Cadence], Any] | None = None,
) -> list[Any]:
    """Translate a token list into actions.

    Args:
        tokens: The token list, see the module docstring.
        build: Creates the action for a token with a given cadence.
        action_type: Ready-made actions of this type are passed through unchanged.
        literal: Creates an action printing free text; None if free text is not allowed.

    Returns:
        The actions in declaration order.

    Raises:
        ConfigurationError: For booleans, non-positive integers, unknown names
            and values of any other type.
    """
    if isinstance(tokens, (str, Token)):
        tokens = [tokens]
    cadence = EVERY_ITERATION
    actions = []
    for token in tokens:
        if isinstance(token, bool):
            raise ConfigurationError(f"Invalid token {token!r}", parameter_name="tokens", received_value=token)
        if isinstance(token, int):
            if token < 1:
                raise ConfigurationError(
                    f"Cadence tokens must be positive integers, got {token}",
                    parameter_name="tokens",
                    received_value=token,
                )
            cadence = Cadence(every=token)
            continue
        if isinstance(token, action_type):
            actions.append(token)
            continue
        symbol = as_token(token)
        if symbol is not None:
            actions.append(build(symbol, AT_STOP if symbol is Token.STOP else cadence))
        elif isinstance(token, str) and literal is not None:
            actions.append(literal(token, cadence))
        else:
            available = ", ".join(t.value for t in Token)
            raise ConfigurationError(
                f"Unknown token {token!r}. Available tokens: {available}",
                parameter_name="tokens",
                received_value=token,
            )
    return actions


__all__ = ["AT_STOP", "EVERY_ITERATION", "Cadence", "Token", "as_token", "parse_tokens"]

"""Debug output attached to a solver run.

Debug actions print information about the iterations of a solver. They are
collected in a :class:`DebugGroup` and attached to options with
:class:`DebugOptions`; the solver code itself never prints.

Example:
    >>> debug = debug_factory(["Iteration", " | ", "Cost", "\\n", "Stop"])
    >>> options = DebugOptions(GradientDescentOptions(x0), debug)
"""

import sys
from collections.abc import Iterable
from typing import Any, TextIO

import numpy as np

from ..core.config import SolverConfig
from .actions import AT_STOP, EVERY_ITERATION, Cadence, Token, parse_tokens
from .options import Options, OptionsDecorator
from .problem import get_cost


class DebugAction:
    """Base class of debug actions.

    An action decides for itself whether to print in a given iteration
    (:meth:`should_act`). Actions that remember values from earlier
    iterations refresh that memory in :meth:`update`, which runs after every
    iteration whether the action printed or not.

    Args:
        cadence: When to print.
        io: Stream to print to; defaults to the configured ``debug_stream``
            or ``sys.stdout``.
    """

    token: Token | None = None

    def __init__(self, cadence: Cadence = EVERY_ITERATION, io: TextIO | None = None):
        self.cadence = cadence
        self.io = io

    @property
    def stream(self) -> TextIO:
        """The stream output goes to."""
        if self.io is not None:
            return self.io
        configured = SolverConfig.get("debug_stream")
        return configured if configured is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)

    def should_act(self, iteration: int, stopped: bool = False) -> bool:
        return self.cadence.matches(iteration, stopped)

    def act(self, problem, options: Options, iteration: int) -> None:
        """Print; subclasses implement this."""

    def update(self, problem, options: Options, iteration: int) -> None:
        """Refresh the memory of the action."""

    def __call__(self, problem, options: Options, iteration: int, stopped: bool = False) -> None:
        if self.should_act(iteration, stopped):
            self.act(problem, options, iteration)
        if not stopped:
            self.update(problem, options, iteration)


class DebugGroup(DebugAction):
    """An ordered sequence of debug actions, run in declaration order.

    Each member applies its own cadence; groups can be nested.
    """

    def __init__(self, actions: Iterable[DebugAction] = ()):
        super().__init__()
        self.actions = list(actions)

    def should_act(self, iteration: int, stopped: bool = False) -> bool:
        return any(action.should_act(iteration, stopped) for action in self.actions)

    def update(self, problem, options: Options, iteration: int) -> None:
        for action in self.actions:
            action.update(problem, options, iteration)

    def __call__(self, problem, options: Options, iteration: int, stopped: bool = False) -> None:
        for action in self.actions:
            action(problem, options, iteration, stopped)

    def __repr__(self) -> str:
        return f"DebugGroup({self.actions!r})"


class DebugEvery(DebugAction):
    """Run an action (or group) only every ``every``-th iteration.

    The wrapped action still refreshes its memory in the skipped iterations,
    and stop-only members still print when the solver stops.
    """

    def __init__(self, action: DebugAction, every: int):
        super().__init__(Cadence(every=every))
        self.action = action

    def should_act(self, iteration: int, stopped: bool = False) -> bool:
        if stopped:
            return self.action.should_act(iteration, stopped)
        return self.cadence.matches(iteration) and self.action.should_act(iteration)

    def update(self, problem, options: Options, iteration: int) -> None:
        self.action.update(problem, options, iteration)

    def __call__(self, problem, options: Options, iteration: int, stopped: bool = False) -> None:
        if stopped or self.cadence.matches(iteration):
            self.action(problem, options, iteration, stopped)
        else:
            self.action.update(problem, options, iteration)


class DebugDivider(DebugAction):
    """Print a fixed text."""

    def __init__(self, text: str = " | ", cadence: Cadence = EVERY_ITERATION, io: TextIO | None = None):
        super().__init__(cadence, io)
        self.text = text

    def act(self, problem, options, iteration):
        self.write(self.text)

    def __repr__(self) -> str:
        return f"DebugDivider({self.text!r})"


class DebugIteration(DebugAction):
    """Print the iteration number, ``Initial`` before the first iteration."""

    token = Token.ITERATION

    def act(self, problem, options, iteration):
        self.write("Initial" if iteration == 0 else f"# {iteration}")


class DebugCost(DebugAction):
    """Print the cost of the current iterate."""

    token = Token.COST

    def __init__(self, cadence: Cadence = EVERY_ITERATION, io: TextIO | None = None, prefix: str = "F(x): "):
        super().__init__(cadence, io)
        self.prefix = prefix

    def act(self, problem, options, iteration):
        self.write(f"{self.prefix}{float(get_cost(problem, options.x)):.6g}")


class DebugChange(DebugAction):
    """Print the distance between the current and the previous iterate.

    The previous iterate is kept by the action, so the change refers to the
    last iteration even when printing only every few iterations.
    """

    token = Token.CHANGE

    def __init__(self, cadence: Cadence = EVERY_ITERATION, io: TextIO | None = None, prefix: str = "Last Change: "):
        super().__init__(cadence, io)
        self.prefix = prefix
        self.previous: Any = None

    def act(self, problem, options, iteration):
        if iteration > 0 and self.previous is not None:
            change = float(problem.manifold.dist(self.previous, options.x))
            self.write(f"{self.prefix}{change:.6g}")

    def update(self, problem, options, iteration):
        self.previous = options.x


class DebugIterate(DebugAction):
    """Print the current iterate."""

    token = Token.ITERATE

    def act(self, problem, options, iteration):
        self.write(f"x: {np.array2string(np.asarray(options.x), precision=6)}")


class DebugGradientNorm(DebugAction):
    """Print the norm of the last gradient, if the solver computes one."""

    token = Token.GRADIENT_NORM

    def act(self, problem, options, iteration):
        gradient = getattr(options, "gradient", None)
        if gradient is not None:
            self.write(f"|grad f(x)|: {float(problem.manifold.norm(options.x, gradient)):.6g}")


class DebugStepsize(DebugAction):
    """Print the step length of the last iteration."""

    token = Token.STEPSIZE

    def act(self, problem, options, iteration):
        if iteration > 0:
            self.write(f"s: {options.last_stepsize:.6g}")


class DebugStoppingCriterion(DebugAction):
    """Print the reason the solver stopped; acts only at the stop."""

    token = Token.STOP

    def __init__(self, cadence: Cadence = AT_STOP, io: TextIO | None = None):
        super().__init__(cadence, io)

    def act(self, problem, options, iteration):
        if options.stop_reason:
            self.write(f"{options.stop_reason}\n")


_DEBUG_ACTIONS: dict[Token, type[DebugAction]] = {
    Token.ITERATION: DebugIteration,
    Token.COST: DebugCost,
    Token.CHANGE: DebugChange,
    Token.ITERATE: DebugIterate,
    Token.STOP: DebugStoppingCriterion,
    Token.GRADIENT_NORM: DebugGradientNorm,
    Token.STEPSIZE: DebugStepsize,
}


def debug_factory(tokens: Iterable[Any], io: TextIO | None = None) -> DebugGroup:
    """Build a debug group from a token list.

    Args:
        tokens: Token names or :class:`Token` members, free text, cadence
            integers and ready-made :class:`DebugAction` objects.
        io: Stream all created actions print to.

    Returns:
        A group running the actions in declaration order.

    Raises:
        ConfigurationError: If the list contains an invalid token.

    Example:
        >>> group = debug_factory(["Iteration", " | ", "Cost", "\\n", 10, "Stop"])
    """
    actions = parse_tokens(
        tokens,
        build=lambda token, cadence: _DEBUG_ACTIONS[token](cadence=cadence, io=io),
        action_type=DebugAction,
        literal=lambda text, cadence: DebugDivider(text, cadence=cadence, io=io),
    )
    return DebugGroup(actions)


class DebugOptions(OptionsDecorator):
    """Options decorated with debug output.

    Args:
        options: Options (or another decorator) to wrap.
        debug: A debug action, usually a :class:`DebugGroup`, or a token list
            passed to :func:`debug_factory`.
    """

    def __init__(self, options: Options | OptionsDecorator, debug: DebugAction | Iterable[Any]):
        super().__init__(options)
        self.debug = debug if isinstance(debug, DebugAction) else debug_factory(debug)

    def on_start(self, problem, options: Options) -> None:
        self.debug(problem, options, 0)

    def on_iteration(self, problem, options: Options, iteration: int) -> None:
        self.debug(problem, options, iteration)

    def on_stop(self, problem, options: Options, iteration: int) -> None:
        self.debug(problem, options, iteration, stopped=True)


__all__ = [
    "DebugAction",
    "DebugChange",
    "DebugCost",
    "DebugDivider",
    "DebugEvery",
    "DebugGradientNorm",
    "DebugGroup",
    "DebugIterate",
    "DebugIteration",
    "DebugOptions",
    "DebugStepsize",
    "DebugStoppingCriterion",
    "debug_factory",
]

"""Recording values during a solver run.

Record actions capture a value per iteration. A :class:`RecordGroup` collects
the values of its members into an append-only log of tuples, one entry per
iteration in which at least one member captured a value. Nothing is recorded
for the initial point.

Example:
    >>> options = decorate_options(options, record=["Iteration", "Cost"])
    >>> solve(problem, options, GradientDescent())
    >>> get_record(options)
    [(1, 0.31), (2, 0.12), ...]
"""

from collections.abc import Iterable
from typing import Any

from ..core.errors import ConfigurationError
from .actions import AT_STOP, EVERY_ITERATION, Cadence, Token, as_token, parse_tokens
from .options import Options, OptionsDecorator, iter_decorators
from .problem import get_cost


class RecordAction:
    """Base class of record actions.

    Attributes:
        cadence: When to capture.
        recorded_values: Values captured so far, in iteration order.
    """

    token: Token | None = None

    def __init__(self, cadence: Cadence = EVERY_ITERATION):
        self.cadence = cadence
        self.recorded_values: list[Any] = []

    def should_act(self, iteration: int, stopped: bool = False) -> bool:
        if stopped:
            return self.cadence.matches(iteration, stopped)
        return iteration > 0 and self.cadence.matches(iteration)

    def capture(self, problem, options: Options, iteration: int) -> Any:
        """Return the value to record; subclasses implement this."""
        raise NotImplementedError("Subclasses must implement capture")

    def update(self, problem, options: Options, iteration: int) -> None:
        """Refresh the memory of the action."""

    def reset(self) -> None:
        self.recorded_values = []

    def __call__(self, problem, options: Options, iteration: int, stopped: bool = False) -> list[Any]:
        """Capture if the cadence matches and return the values captured by this call."""
        captured = []
        if self.should_act(iteration, stopped):
            value = self.capture(problem, options, iteration)
            self.recorded_values.append(value)
            captured.append(value)
        if not stopped:
            self.update(problem, options, iteration)
        return captured


class RecordIteration(RecordAction):
    token = Token.ITERATION

    def capture(self, problem, options, iteration):
        return iteration


class RecordCost(RecordAction):
    token = Token.COST

    def capture(self, problem, options, iteration):
        return float(get_cost(problem, options.x))


class RecordChange(RecordAction):
    """Record the distance between the current and the previous iterate."""

    token = Token.CHANGE

    def __init__(self, cadence: Cadence = EVERY_ITERATION):
        super().__init__(cadence)
        self.previous: Any = None

    def capture(self, problem, options, iteration):
        if self.previous is None:
            return float(options.last_change)
        return float(problem.manifold.dist(self.previous, options.x))

    def update(self, problem, options, iteration):
        self.previous = options.x


class RecordIterate(RecordAction):
    token = Token.ITERATE

    def capture(self, problem, options, iteration):
        return options.x


class RecordGradientNorm(RecordAction):
    """Record the norm of the gradient, ``nan`` for solvers without one."""

    token = Token.GRADIENT_NORM

    def capture(self, problem, options, iteration):
        gradient = getattr(options, "gradient", None)
        if gradient is None:
            return float("nan")
        return float(problem.manifold.norm(options.x, gradient))


class RecordStepsize(RecordAction):
    token = Token.STEPSIZE

    def capture(self, problem, options, iteration):
        return float(options.last_stepsize)


class RecordStoppingReason(RecordAction):
    """Record the stopping reason once, when the solver stops."""

    token = Token.STOP

    def __init__(self, cadence: Cadence = AT_STOP):
        super().__init__(cadence)

    def capture(self, problem, options, iteration):
        return options.stop_reason


class RecordGroup(RecordAction):
    """An ordered sequence of record actions sharing one log.

    Each log entry is a tuple with the values captured in one call, in the
    declaration order of the members. Members that did not capture are left
    out of the tuple; calls in which no member captured add no entry.

    Args:
        actions: Members of the group.
    """

    def __init__(self, actions: Iterable[RecordAction] = ()):
        super().__init__()
        self.actions = list(actions)

    @property
    def log(self) -> list[tuple[Any, ...]]:
        """The entries recorded so far."""
        return self.recorded_values

    def should_act(self, iteration: int, stopped: bool = False) -> bool:
        return any(action.should_act(iteration, stopped) for action in self.actions)

    def update(self, problem, options: Options, iteration: int) -> None:
        for action in self.actions:
            action.update(problem, options, iteration)

    def reset(self) -> None:
        super().reset()
        for action in self.actions:
            action.reset()

    def __call__(self, problem, options: Options, iteration: int, stopped: bool = False) -> list[Any]:
        captured = []
        for action in self.actions:
            captured.extend(action(problem, options, iteration, stopped))
        if not captured:
            return []
        entry = tuple(captured)
        self.recorded_values.append(entry)
        return [entry]

    def values(self, token: Token | str) -> list[Any]:
        """Return the values recorded by the first member recording ``token``.

        Raises:
            ConfigurationError: If no member records that token.
        """
        symbol = as_token(token)
        for action in self.actions:
            if symbol is not None and action.token is symbol:
                return list(action.recorded_values)
            if isinstance(action, RecordGroup):
                try:
                    return action.values(token)
                except ConfigurationError:
                    continue
        raise ConfigurationError(
            f"Nothing recorded for token {token!r}", parameter_name="token", received_value=token
        )

    def __repr__(self) -> str:
        return f"RecordGroup({self.actions!r})"


class RecordEvery(RecordAction):
    """Run an action only every ``every``-th iteration.

    The wrapped action still refreshes its memory in the skipped iterations.
    """

    def __init__(self, action: RecordAction, every: int):
        super().__init__(Cadence(every=every))
        self.action = action
        self.token = action.token

    @property
    def recorded_values(self) -> list[Any]:
        return self.action.recorded_values

    @recorded_values.setter
    def recorded_values(self, values: list[Any]) -> None:
        # set by RecordAction.__init__ before the wrapped action exists
        if hasattr(self, "action"):
            self.action.recorded_values = values

    def should_act(self, iteration: int, stopped: bool = False) -> bool:
        if stopped:
            return self.action.should_act(iteration, stopped)
        return self.cadence.matches(iteration) and self.action.should_act(iteration)

    def update(self, problem, options: Options, iteration: int) -> None:
        self.action.update(problem, options, iteration)

    def reset(self) -> None:
        self.action.reset()

    def __call__(self, problem, options: Options, iteration: int, stopped: bool = False) -> list[Any]:
        if stopped or self.cadence.matches(iteration):
            return self.action(problem, options, iteration, stopped)
        self.action.update(problem, options, iteration)
        return []


_RECORD_ACTIONS: dict[Token, type[RecordAction]] = {
    Token.ITERATION: RecordIteration,
    Token.COST: RecordCost,
    Token.CHANGE: RecordChange,
    Token.ITERATE: RecordIterate,
    Token.STOP: RecordStoppingReason,
    Token.GRADIENT_NORM: RecordGradientNorm,
    Token.STEPSIZE: RecordStepsize,
}


def record_factory(tokens: Iterable[Any]) -> RecordGroup:
    """Build a record group from a token list.

    Args:
        tokens: Token names or :class:`Token` members, cadence integers and
            ready-made :class:`RecordAction` objects. Free text is not allowed.

    Returns:
        A group whose log holds one tuple per recorded iteration.

    Raises:
        ConfigurationError: If the list contains an invalid token.
    """
    actions = parse_tokens(
        tokens,
        build=lambda token, cadence: _RECORD_ACTIONS[token](cadence=cadence),
        action_type=RecordAction,
    )
    return RecordGroup(actions)


class RecordOptions(OptionsDecorator):
    """Options decorated with recording.

    Args:
        options: Options (or another decorator) to wrap.
        record: A :class:`RecordGroup` or a token list passed to
            :func:`record_factory`.
    """

    def __init__(self, options: Options | OptionsDecorator, record: RecordAction | Iterable[Any]):
        super().__init__(options)
        if isinstance(record, RecordGroup):
            self.record = record
        elif isinstance(record, RecordAction):
            self.record = RecordGroup([record])
        else:
            self.record = record_factory(record)

    def on_start(self, problem, options: Options) -> None:
        self.record.reset()
        self.record.update(problem, options, 0)

    def on_iteration(self, problem, options: Options, iteration: int) -> None:
        self.record(problem, options, iteration)

    def on_stop(self, problem, options: Options, iteration: int) -> None:
        self.record(problem, options, iteration, stopped=True)

    def get_record(self, token: Token | str | None = None) -> list[Any]:
        """Return the log, or the values recorded for one token."""
        if token is None:
            return list(self.record.log)
        return self.record.values(token)


def get_record(options: Any, token: Token | str | None = None) -> list[Any]:
    """Return what was recorded during a run.

    Args:
        options: Decorated options or a solver result carrying them.
        token: If given, only the values of that token.

    Returns:
        The list of log tuples, or the list of values for ``token``.

    Raises:
        ConfigurationError: If nothing was recorded.
    """
    if not isinstance(options, (Options, OptionsDecorator)):
        options = getattr(options, "options", options)
    for decorator in iter_decorators(options):
        if isinstance(decorator, RecordOptions):
            return decorator.get_record(token)
    raise ConfigurationError("These options carry no record", parameter_name="options")


__all__ = [
    "RecordAction",
    "RecordChange",
    "RecordCost",
    "RecordEvery",
    "RecordGradientNorm",
    "RecordGroup",
    "RecordIterate",
    "RecordIteration",
    "RecordOptions",
    "RecordStepsize",
    "RecordStoppingReason",
    "get_record",
    "record_factory",
]

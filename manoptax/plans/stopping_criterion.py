"""Stopping criteria and their boolean combinations.

A criterion is called as ``criterion(problem, options, iteration)`` after
every iteration and returns whether the solver should stop. When it fires it
sets :attr:`StoppingCriterion.reason` to a human readable explanation; the
reason is left untouched on calls that do not fire. Calling a criterion with
``iteration == 0`` resets it, so one instance can be reused across runs.

Criteria combine into trees with :func:`stop_when_all` and
:func:`stop_when_any` (or the ``&`` and ``|`` operators). A combination
evaluates every child on each call, all with the same arguments.
"""

import math
import time
from typing import Any

from ..core.errors import ConfigurationError


class StoppingCriterion:
    """Base class of stopping criteria.

    Attributes:
        reason: Explanation set the last time the criterion fired.
        at_iteration: Iteration at which the criterion started to hold
            without interruption, ``-1`` while it does not hold.
    """

    def __init__(self) -> None:
        self.reason = ""
        self.at_iteration = -1

    def check(self, problem, options, iteration: int) -> bool:
        """Return whether the criterion holds; subclasses implement this."""
        raise NotImplementedError("Subclasses must implement the stopping check")

    def describe(self, problem, options, iteration: int) -> str:
        """Return the reason text for a firing criterion."""
        return f"{self.__class__.__name__} was satisfied."

    def reset(self) -> None:
        """Forget the state of a previous run."""
        self.reason = ""
        self.at_iteration = -1

    def __call__(self, problem, options, iteration: int) -> bool:
        if iteration == 0:
            self.reset()
        if self.check(problem, options, iteration):
            if self.at_iteration < 0:
                self.at_iteration = iteration
            self.reason = self.describe(problem, options, iteration)
            return True
        self.at_iteration = -1
        return False

    def evaluate(self, problem, options, iteration: int) -> tuple[bool, str]:
        """Evaluate the criterion and return ``(stop, reason)``."""
        stop = self(problem, options, iteration)
        return stop, self.reason if stop else ""

    def __and__(self, other: "StoppingCriterion") -> "StopWhenAll":
        return stop_when_all(self, other)

    def __or__(self, other: "StoppingCriterion") -> "StopWhenAny":
        return stop_when_any(self, other)


class StopAfterIteration(StoppingCriterion):
    """Stop once ``max_iterations`` iterations have been performed."""

    def __init__(self, max_iterations: int):
        super().__init__()
        if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations < 0:
            raise ConfigurationError(
                f"Maximal number of iterations must be a non-negative integer, got {max_iterations!r}",
                parameter_name="max_iterations",
                received_value=max_iterations,
            )
        self.max_iterations = max_iterations

    def check(self, problem, options, iteration: int) -> bool:
        return iteration >= self.max_iterations

    def describe(self, problem, options, iteration: int) -> str:
        return f"The algorithm reached its maximal number of iterations ({self.max_iterations})."

    def __repr__(self) -> str:
        return f"StopAfterIteration({self.max_iterations})"


def _validate_threshold(threshold: Any, name: str) -> float:
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)) or not threshold > 0:
        raise ConfigurationError(
            f"Parameter '{name}' must be a positive number, got {threshold!r}",
            parameter_name=name,
            received_value=threshold,
        )
    return float(threshold)


class StopWhenGradientNormLess(StoppingCriterion):
    """Stop when the norm of the current gradient drops below ``threshold``.

    Requires options with a ``gradient`` attribute; the criterion does not
    hold while no gradient has been computed.
    """

    def __init__(self, threshold: float):
        super().__init__()
        self.threshold = _validate_threshold(threshold, "threshold")
        self._last_norm = math.inf

    def check(self, problem, options, iteration: int) -> bool:
        gradient = getattr(options, "gradient", None)
        if gradient is None:
            return False
        self._last_norm = float(problem.manifold.norm(options.x, gradient))
        return self._last_norm < self.threshold

    def describe(self, problem, options, iteration: int) -> str:
        return (
            f"The algorithm reached approximately critical point after {iteration} iterations; "
            f"the gradient norm ({self._last_norm:.6g}) is less than {self.threshold}."
        )

    def __repr__(self) -> str:
        return f"StopWhenGradientNormLess({self.threshold})"


class StopWhenChangeLess(StoppingCriterion):
    """Stop when the distance between the last two iterates drops below ``threshold``.

    The criterion never holds before the first iteration.
    """

    def __init__(self, threshold: float):
        super().__init__()
        self.threshold = _validate_threshold(threshold, "threshold")

    def check(self, problem, options, iteration: int) -> bool:
        return iteration > 0 and options.last_change < self.threshold

    def describe(self, problem, options, iteration: int) -> str:
        return (
            f"The algorithm performed a step with a change ({options.last_change:.6g}) "
            f"less than {self.threshold}."
        )

    def __repr__(self) -> str:
        return f"StopWhenChangeLess({self.threshold})"


class StopAfter(StoppingCriterion):
    """Stop once ``seconds`` of wall-clock time have passed since iteration 0."""

    def __init__(self, seconds: float):
        super().__init__()
        self.seconds = _validate_threshold(seconds, "seconds")
        self._start: float | None = None
        self._elapsed = 0.0

    def reset(self) -> None:
        super().reset()
        self._start = time.monotonic()

    def check(self, problem, options, iteration: int) -> bool:
        if self._start is None:
            self._start = time.monotonic()
        self._elapsed = time.monotonic() - self._start
        return self._elapsed >= self.seconds

    def describe(self, problem, options, iteration: int) -> str:
        return f"The algorithm ran for {self._elapsed:.3f} seconds and exceeded its limit of {self.seconds} seconds."

    def __repr__(self) -> str:
        return f"StopAfter({self.seconds})"


class StopWhenFlagSet(StoppingCriterion):
    """Stop when an external flag is raised.

    Args:
        flag: Object with an ``is_set()`` method such as :class:`threading.Event`,
            or a callable without arguments returning a bool.
    """

    def __init__(self, flag: Any):
        super().__init__()
        if not (hasattr(flag, "is_set") or callable(flag)):
            raise ConfigurationError(
                "Flag must provide is_set() or be callable", parameter_name="flag", received_value=flag
            )
        self.flag = flag

    def check(self, problem, options, iteration: int) -> bool:
        if hasattr(self.flag, "is_set"):
            return bool(self.flag.is_set())
        return bool(self.flag())

    def describe(self, problem, options, iteration: int) -> str:
        return f"The algorithm was stopped externally after {iteration} iterations."

    def __repr__(self) -> str:
        return f"StopWhenFlagSet({self.flag!r})"


class _CriterionSet(StoppingCriterion):
    """Shared structure of the combinations."""

    def __init__(self, *criteria: StoppingCriterion):
        super().__init__()
        if len(criteria) == 1 and isinstance(criteria[0], (list, tuple)):
            criteria = tuple(criteria[0])
        if not criteria:
            raise ConfigurationError("At least one stopping criterion is required", parameter_name="criteria")
        for criterion in criteria:
            if not isinstance(criterion, StoppingCriterion):
                raise ConfigurationError(
                    f"Expected a StoppingCriterion, got {type(criterion).__name__}",
                    parameter_name="criteria",
                    received_value=criterion,
                )
        self.criteria = tuple(criteria)

    def reset(self) -> None:
        super().reset()
        for criterion in self.criteria:
            criterion.reset()

    def _evaluate_children(self, problem, options, iteration: int) -> list[bool]:
        # every child sees the same snapshot, no short-circuiting
        return [criterion(problem, options, iteration) for criterion in self.criteria]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(repr(c) for c in self.criteria)})"


class StopWhenAll(_CriterionSet):
    """Stop when all criteria hold.

    The reason is taken from the child that started to hold last, so it names
    the condition that completed the conjunction. Ties go to the leftmost child.
    """

    def __call__(self, problem, options, iteration: int) -> bool:
        if iteration == 0:
            self.reset()
        if all(self._evaluate_children(problem, options, iteration)):
            last = max(self.criteria, key=lambda c: c.at_iteration)
            if self.at_iteration < 0:
                self.at_iteration = iteration
            self.reason = last.reason
            return True
        self.at_iteration = -1
        return False


class StopWhenAny(_CriterionSet):
    """Stop when at least one criterion holds.

    The reason joins the reasons of all children that fired, in declaration order.
    """

    def __call__(self, problem, options, iteration: int) -> bool:
        if iteration == 0:
            self.reset()
        results = self._evaluate_children(problem, options, iteration)
        if any(results):
            if self.at_iteration < 0:
                self.at_iteration = iteration
            self.reason = "\n".join(c.reason for c, fired in zip(self.criteria, results) if fired)
            return True
        self.at_iteration = -1
        return False


def stop_when_all(*criteria: StoppingCriterion) -> StopWhenAll:
    """Combine criteria into one that stops when all of them hold."""
    return StopWhenAll(*criteria)


def stop_when_any(*criteria: StoppingCriterion) -> StopWhenAny:
    """Combine criteria into one that stops when any of them holds."""
    return StopWhenAny(*criteria)


__all__ = [
    "StopAfter",
    "StopAfterIteration",
    "StopWhenAll",
    "StopWhenAny",
    "StopWhenChangeLess",
    "StopWhenFlagSet",
    "StopWhenGradientNormLess",
    "StoppingCriterion",
    "stop_when_all",
    "stop_when_any",
]

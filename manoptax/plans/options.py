"""Options: the dynamic part of an optimization run.

Options hold the current iterate, the iteration counter and the rules that
steer the algorithm (stopping criterion, stepsize). One options object belongs
to exactly one run and is updated in place by the solver.

Debug and record output is attached by wrapping options in an
:class:`OptionsDecorator`. Decorators forward attribute reads to the options
they wrap, so code that only reads options works on either.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from ..core.constants import SolverDefaults
from ..core.type_system import ManifoldPoint, Retraction, TangentVector
from .stepsize import ConstantStepsize, DecreasingStepsize, Stepsize
from .stopping_criterion import StopAfterIteration, StoppingCriterion, StopWhenChangeLess, stop_when_any


@dataclass
class Options:
    """State shared by all solvers.

    Attributes:
        x: Current iterate.
        stopping_criterion: Criterion checked after every iteration.
        stepsize: Rule producing the step length of each iteration.
        iteration: Number of completed iterations.
        last_change: Distance between the last two iterates.
        last_stepsize: Step length used in the last iteration.
        stop_reason: Reason reported by the stopping criterion once stopped.
    """

    x: ManifoldPoint
    stopping_criterion: StoppingCriterion = field(
        default_factory=lambda: StopAfterIteration(SolverDefaults.MAX_ITERATIONS)
    )
    stepsize: Stepsize = field(default_factory=lambda: ConstantStepsize(SolverDefaults.CONSTANT_STEPSIZE))
    iteration: int = 0
    last_change: float = 0.0
    last_stepsize: float = 0.0
    stop_reason: str = ""


@dataclass
class GradientDescentOptions(Options):
    """Options of Riemannian gradient descent.

    Attributes:
        gradient: Gradient at the current iterate, set by the solver.
        retraction: ``"exp"``, ``"retr"`` or a callable ``(M, x, v) -> y``.
    """

    gradient: TangentVector | None = None
    retraction: str | Retraction = "exp"


@dataclass
class CyclicProximalPointOptions(Options):
    """Options of the cyclic proximal point algorithm.

    The stepsize rule produces the parameter λ_k of sweep k; the default is
    ``λ_k = 1 / k``.

    Attributes:
        evaluation_order: Order in which the proximal maps are applied. Only
            ``"LinearOrder"``, the declared order, is supported.
    """

    stopping_criterion: StoppingCriterion = field(
        default_factory=lambda: stop_when_any(
            StopAfterIteration(SolverDefaults.PROXIMAL_MAX_ITERATIONS),
            StopWhenChangeLess(SolverDefaults.PROXIMAL_MIN_CHANGE),
        )
    )
    stepsize: Stepsize = field(
        default_factory=lambda: DecreasingStepsize(SolverDefaults.PROXIMAL_LAMBDA, exponent=1.0)
    )
    evaluation_order: str = "LinearOrder"


class OptionsDecorator:
    """Base class for objects that wrap options and observe a run.

    Subclasses override the hooks; the driver calls them on every decorator
    in the chain, outermost first. Hooks receive the innermost options and
    must not modify them.
    """

    def __init__(self, options: "Options | OptionsDecorator"):
        self.options = options

    def __getattr__(self, name: str) -> Any:
        if name == "options":
            raise AttributeError(name)
        return getattr(self.options, name)

    def on_start(self, problem, options: Options) -> None:
        """Called once after the solver has been initialized."""

    def on_iteration(self, problem, options: Options, iteration: int) -> None:
        """Called after every iteration."""

    def on_stop(self, problem, options: Options, iteration: int) -> None:
        """Called once when the stopping criterion fired."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.options!r})"


def get_options(options: Options | OptionsDecorator) -> Options:
    """Return the innermost options of a decorator chain."""
    while isinstance(options, OptionsDecorator):
        options = options.options
    return options


def iter_decorators(options: Options | OptionsDecorator) -> Iterator[OptionsDecorator]:
    """Yield the decorators of a chain from the outermost inwards."""
    while isinstance(options, OptionsDecorator):
        yield options
        options = options.options


def get_solver_result(options: Options | OptionsDecorator) -> ManifoldPoint:
    """Return the current iterate, which is the result once a run stopped."""
    return get_options(options).x


__all__ = [
    "CyclicProximalPointOptions",
    "GradientDescentOptions",
    "Options",
    "OptionsDecorator",
    "get_options",
    "get_solver_result",
    "iter_decorators",
]

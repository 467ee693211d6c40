"""Result object returned by the solver entry points."""

import dataclasses
from typing import Any

from jaxtyping import Array

from ..plans.options import Options, OptionsDecorator, get_options, iter_decorators
from ..plans.problem import Problem, get_cost
from ..plans.record import RecordOptions


@dataclasses.dataclass
class SolverResult:
    """Outcome of a finished solver run.

    Attributes:
        point: Final iterate.
        cost: Cost at the final iterate.
        stop_reason: Reason reported by the stopping criterion.
        iteration_count: Number of iterations performed.
        options: The (possibly decorated) options of the run.
        record: Log of the record chain, ``None`` if nothing was recorded.
    """

    point: Array
    cost: float
    stop_reason: str
    iteration_count: int
    options: Options | OptionsDecorator
    record: list[tuple[Any, ...]] | None = None

    @classmethod
    def from_options(cls, problem: Problem, options: Options | OptionsDecorator) -> "SolverResult":
        """Collect the result of a run from its options."""
        inner = get_options(options)
        record = None
        for decorator in iter_decorators(options):
            if isinstance(decorator, RecordOptions):
                record = decorator.get_record()
                break
        return cls(
            point=inner.x,
            cost=float(get_cost(problem, inner.x)),
            stop_reason=inner.stop_reason,
            iteration_count=inner.iteration,
            options=options,
            record=record,
        )

    @property
    def x(self) -> Array:
        """Alias for point."""
        return self.point

    @property
    def fun(self) -> float:
        """Alias for cost."""
        return self.cost

    @property
    def niter(self) -> int:
        """Alias for iteration_count."""
        return self.iteration_count

    @property
    def message(self) -> str:
        """Alias for stop_reason."""
        return self.stop_reason


__all__ = ["SolverResult"]

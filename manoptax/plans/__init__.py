"""Building blocks of a solver run: problems, options, stepsizes, stopping criteria, debug and record."""

from .actions import AT_STOP, EVERY_ITERATION, Cadence, Token
from .debug import (
    DebugAction,
    DebugChange,
    DebugCost,
    DebugDivider,
    DebugEvery,
    DebugGradientNorm,
    DebugGroup,
    DebugIterate,
    DebugIteration,
    DebugOptions,
    DebugStepsize,
    DebugStoppingCriterion,
    debug_factory,
)
from .options import (
    CyclicProximalPointOptions,
    GradientDescentOptions,
    Options,
    OptionsDecorator,
    get_options,
    get_solver_result,
)
from .problem import GradientProblem, Problem, ProximalProblem, get_cost, get_gradient, get_proximal_map
from .record import (
    RecordAction,
    RecordChange,
    RecordCost,
    RecordEvery,
    RecordGradientNorm,
    RecordGroup,
    RecordIterate,
    RecordIteration,
    RecordOptions,
    RecordStepsize,
    RecordStoppingReason,
    get_record,
    record_factory,
)
from .retraction import resolve_retraction
from .stepsize import ArmijoLinesearch, ConstantStepsize, DecreasingStepsize, Stepsize
from .stopping_criterion import (
    StopAfter,
    StopAfterIteration,
    StoppingCriterion,
    StopWhenAll,
    StopWhenAny,
    StopWhenChangeLess,
    StopWhenFlagSet,
    StopWhenGradientNormLess,
    stop_when_all,
    stop_when_any,
)

__all__ = [
    "AT_STOP",
    "EVERY_ITERATION",
    "ArmijoLinesearch",
    "Cadence",
    "ConstantStepsize",
    "CyclicProximalPointOptions",
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
    "DecreasingStepsize",
    "GradientDescentOptions",
    "GradientProblem",
    "Options",
    "OptionsDecorator",
    "Problem",
    "ProximalProblem",
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
    "Stepsize",
    "StopAfter",
    "StopAfterIteration",
    "StopWhenAll",
    "StopWhenAny",
    "StopWhenChangeLess",
    "StopWhenFlagSet",
    "StopWhenGradientNormLess",
    "StoppingCriterion",
    "Token",
    "debug_factory",
    "get_cost",
    "get_gradient",
    "get_options",
    "get_proximal_map",
    "get_record",
    "get_solver_result",
    "record_factory",
    "resolve_retraction",
    "stop_when_all",
    "stop_when_any",
]

"""manoptax: a JAX-native framework for optimization on Riemannian manifolds.

A problem (manifold, cost and oracles) is kept apart from the options of a
run (iterate, stepsize rule, stopping criterion) and from the solver that
performs the iterations. Debug output and recording are attached to the
options and never touch the algorithms.

Quick start:
    >>> import jax.numpy as jnp
    >>> import manoptax as mx
    >>>
    >>> M = mx.create_sphere(2)
    >>> data = mx.noisy_points(M, jnp.array([0.0, 0.0, 1.0]), 10, 0.3, mx.random.PRNGKey(42))
    >>> x = mx.gradient_descent(
    ...     M,
    ...     mx.mean_squared_distance_cost(data),
    ...     mx.mean_squared_distance_gradient(data),
    ...     data[0],
    ...     stopping_criterion=mx.StopAfterIteration(200) | mx.StopWhenGradientNormLess(1e-8),
    ...     debug=["Iteration", " | ", "Cost", "\\n", 25, "Stop"],
    ... )

Median on the sphere with the cyclic proximal point algorithm:
    >>> result = mx.cyclic_proximal_point(
    ...     M,
    ...     mx.mean_distance_cost(data),
    ...     mx.distance_proximal_maps(data),
    ...     data[0],
    ...     record=["Iteration", "Change", "Cost"],
    ...     return_options=True,
    ... )
    >>> result.niter, result.message
"""

__version__ = "0.1.0"
__author__ = "manoptax Contributors"

# JAX utilities
import jax.random as random

from .core import (
    ConfigurationError,
    ManoptaxError,
    SolverConfig,
    StepsizeError,
    StepsizeSearchError,
)
from .datasets import noisy_points
from .functions import (
    distance_proximal_maps,
    grad_distance,
    mean_distance_cost,
    mean_squared_distance_cost,
    mean_squared_distance_gradient,
    prox_distance,
)

# Manifold implementations and factory functions
from .manifolds import Euclidean, Manifold, Sphere, create_euclidean, create_sphere

# Problems, options and their building blocks
from .plans import (
    ArmijoLinesearch,
    ConstantStepsize,
    CyclicProximalPointOptions,
    DebugOptions,
    DecreasingStepsize,
    GradientDescentOptions,
    GradientProblem,
    Options,
    Problem,
    ProximalProblem,
    RecordOptions,
    StopAfter,
    StopAfterIteration,
    StopWhenAll,
    StopWhenAny,
    StopWhenChangeLess,
    StopWhenFlagSet,
    StopWhenGradientNormLess,
    Token,
    debug_factory,
    get_record,
    get_solver_result,
    record_factory,
    stop_when_all,
    stop_when_any,
)

# Solvers
from .solvers import (
    CyclicProximalPoint,
    GradientDescent,
    SolverResult,
    cyclic_proximal_point,
    decorate_options,
    gradient_descent,
    solve,
)


def configure(**kwargs) -> None:
    """Update the process-wide solver configuration.

    Example:
        >>> import manoptax as mx
        >>> mx.configure(armijo_max_backtracks=50)
    """
    SolverConfig.configure(**kwargs)


def get_config() -> dict:
    """Get current solver configuration."""
    return SolverConfig.get_config()


def reset_config() -> None:
    """Reset the solver configuration to its defaults."""
    SolverConfig.reset_config()


__all__ = [
    "ArmijoLinesearch",
    "ConfigurationError",
    "ConstantStepsize",
    "CyclicProximalPoint",
    "CyclicProximalPointOptions",
    "DebugOptions",
    "DecreasingStepsize",
    "Euclidean",
    "GradientDescent",
    "GradientDescentOptions",
    "GradientProblem",
    "Manifold",
    "ManoptaxError",
    "Options",
    "Problem",
    "ProximalProblem",
    "RecordOptions",
    "SolverConfig",
    "SolverResult",
    "Sphere",
    "StepsizeError",
    "StepsizeSearchError",
    "StopAfter",
    "StopAfterIteration",
    "StopWhenAll",
    "StopWhenAny",
    "StopWhenChangeLess",
    "StopWhenFlagSet",
    "StopWhenGradientNormLess",
    "Token",
    "__author__",
    "__version__",
    "configure",
    "create_euclidean",
    "create_sphere",
    "cyclic_proximal_point",
    "debug_factory",
    "decorate_options",
    "distance_proximal_maps",
    "get_config",
    "get_record",
    "get_solver_result",
    "grad_distance",
    "gradient_descent",
    "mean_distance_cost",
    "mean_squared_distance_cost",
    "mean_squared_distance_gradient",
    "noisy_points",
    "prox_distance",
    "random",
    "record_factory",
    "reset_config",
    "solve",
    "stop_when_all",
    "stop_when_any",
]

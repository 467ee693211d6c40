"""Configuration constants for the manoptax library.

This module defines numerical constants and solver defaults used throughout
the library to ensure consistent behavior and eliminate magic numbers.
"""


class NumericalConstants:
    """Numerical constants for stability and tolerance in mathematical operations.

    These constants are used throughout the library for numerical comparisons,
    convergence criteria, and stability checks in manifold operations.
    """

    EPSILON: float = 1e-10
    """Numerical stability threshold for small value detection."""

    RTOL: float = 1e-8
    """Relative tolerance for numerical comparisons."""

    ATOL: float = 1e-10
    """Absolute tolerance for numerical comparisons."""

    VALIDATION_TOLERANCE: float = 1e-6
    """Tolerance for validating points on manifolds."""


class SolverDefaults:
    """Default parameters of the solvers and their stepsize rules.

    The gradient descent defaults are deliberately simple: a constant step of
    length one and a cap of one hundred iterations.
    """

    MAX_ITERATIONS: int = 100
    """Iteration cap used by gradient descent when no criterion is given."""

    CONSTANT_STEPSIZE: float = 1.0
    """Step length of the default constant stepsize."""

    ARMIJO_INITIAL_STEPSIZE: float = 1.0
    """First trial step of the Armijo line search."""

    ARMIJO_CONTRACTION_FACTOR: float = 0.95
    """Factor applied to a rejected Armijo trial step."""

    ARMIJO_SUFFICIENT_DECREASE: float = 0.1
    """Constant of the Armijo sufficient decrease condition."""

    ARMIJO_MAX_BACKTRACKS: int = 100
    """Number of contractions after which the Armijo search gives up."""

    PROXIMAL_LAMBDA: float = 1.0
    """Scale of the cyclic proximal point parameter schedule."""

    PROXIMAL_MAX_ITERATIONS: int = 5000
    """Iteration cap of the cyclic proximal point default criterion."""

    PROXIMAL_MIN_CHANGE: float = 1e-12
    """Change threshold of the cyclic proximal point default criterion."""

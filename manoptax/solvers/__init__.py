"""Solvers for optimization problems on Riemannian manifolds.

Components:
- The generic iteration loop (solve, Solver) and option decoration
- Gradient descent
- The cyclic proximal point algorithm
"""

from .cyclic_proximal_point import CyclicProximalPoint, cyclic_proximal_point
from .driver import Solver, build_options, check_stepsize, decorate_options, solve
from .gradient_descent import GradientDescent, gradient_descent
from .results import SolverResult

__all__ = [
    "CyclicProximalPoint",
    "GradientDescent",
    "Solver",
    "SolverResult",
    "build_options",
    "check_stepsize",
    "cyclic_proximal_point",
    "decorate_options",
    "gradient_descent",
    "solve",
]

"""Tests for the generic solver loop."""

import io
import logging
import math

import jax.numpy as jnp
import pytest

from manoptax.core.config import SolverConfig
from manoptax.core.errors import ConfigurationError, StepsizeError
from manoptax.plans import (
    ConstantStepsize,
    DebugOptions,
    GradientDescentOptions,
    GradientProblem,
    Options,
    OptionsDecorator,
    RecordOptions,
    Stepsize,
    StopAfterIteration,
    StopWhenChangeLess,
    get_options,
)
from manoptax.solvers import GradientDescent, Solver, check_stepsize, decorate_options, solve


class Shift(Solver):
    """Moves the iterate by a fixed vector in every iteration."""

    def __init__(self, shift):
        self.shift = shift
        self.initialized = 0

    def initialize(self, problem, options):
        self.initialized += 1

    def step(self, problem, options, iteration):
        options.x = options.x + self.shift


class Tracer(OptionsDecorator):
    """Appends every hook call to a shared list."""

    def __init__(self, options, name, calls):
        super().__init__(options)
        self.name = name
        self.calls = calls

    def on_start(self, problem, options):
        self.calls.append((self.name, "start", options.iteration))

    def on_iteration(self, problem, options, iteration):
        self.calls.append((self.name, "iteration", iteration))

    def on_stop(self, problem, options, iteration):
        self.calls.append((self.name, "stop", iteration))


class Fixed(Stepsize):
    def __init__(self, value):
        self.value = value

    def __call__(self, problem, options, iteration):
        return self.value


@pytest.fixture
def problem(euclidean):
    return GradientProblem(euclidean, lambda M, x: jnp.sum(x**2), lambda M, x: 2 * x)


def test_loop_counts_iterations_and_change(problem):
    options = Options(jnp.zeros(2), stopping_criterion=StopAfterIteration(3))
    solver = Shift(jnp.array([3.0, 4.0]))
    solve(problem, options, solver)
    assert solver.initialized == 1
    assert options.iteration == 3
    assert options.last_change == pytest.approx(5.0)
    assert jnp.allclose(options.x, jnp.array([9.0, 12.0]))
    assert options.stop_reason == "The algorithm reached its maximal number of iterations (3)."


def test_criterion_checked_before_first_iteration(problem):
    options = Options(jnp.zeros(2), stopping_criterion=StopAfterIteration(0))
    solve(problem, options, Shift(jnp.ones(2)))
    assert options.iteration == 0
    assert jnp.array_equal(options.x, jnp.zeros(2))


def test_change_criterion_stops_stationary_solver(problem):
    options = Options(jnp.ones(2), stopping_criterion=StopAfterIteration(10) | StopWhenChangeLess(1e-9))
    solve(problem, options, Shift(jnp.zeros(2)))
    assert options.iteration == 1
    assert "change" in options.stop_reason


def test_hooks_run_outermost_first(problem):
    calls = []
    options = Options(jnp.zeros(2), stopping_criterion=StopAfterIteration(1))
    decorated = Tracer(Tracer(options, "inner", calls), "outer", calls)
    solve(problem, decorated, Shift(jnp.ones(2)))
    assert calls == [
        ("outer", "start", 0),
        ("inner", "start", 0),
        ("outer", "iteration", 1),
        ("inner", "iteration", 1),
        ("outer", "stop", 1),
        ("inner", "stop", 1),
    ]


def test_decorate_options_places_debug_outside_record():
    options = Options(jnp.zeros(2))
    decorated = decorate_options(options, debug=["Iteration"], record=["Iteration"])
    assert isinstance(decorated, DebugOptions)
    assert isinstance(decorated.options, RecordOptions)
    assert get_options(decorated) is options
    assert decorate_options(options) is options


def test_solver_reuses_criterion_across_runs(problem):
    criterion = StopAfterIteration(2)
    first = Options(jnp.zeros(2), stopping_criterion=criterion)
    solve(problem, first, Shift(jnp.ones(2)))
    second = Options(jnp.zeros(2), stopping_criterion=criterion)
    solve(problem, second, Shift(jnp.ones(2)))
    assert second.iteration == 2


def test_missing_initial_point(problem):
    with pytest.raises(ConfigurationError, match="initial point"):
        solve(problem, Options(None), Shift(jnp.ones(2)))


def test_invalid_initial_point(sphere):
    problem = GradientProblem(sphere, lambda M, x: 0.0, lambda M, x: jnp.zeros(3))
    with pytest.raises(ConfigurationError, match="does not lie on Sphere"):
        solve(problem, GradientDescentOptions(jnp.array([1.0, 1.0, 0.0])), GradientDescent())


def test_point_validation_can_be_disabled(sphere):
    SolverConfig.configure(validate_points=False)
    problem = GradientProblem(sphere, lambda M, x: 0.0, lambda M, x: jnp.zeros(3))
    options = GradientDescentOptions(jnp.array([1.0, 1.0, 0.0]), stopping_criterion=StopAfterIteration(0))
    solve(problem, options, GradientDescent())
    assert options.iteration == 0


@pytest.mark.parametrize("value", [-0.1, math.nan, math.inf])
def test_unusable_stepsize_raises(problem, value):
    options = GradientDescentOptions(jnp.ones(2), stepsize=Fixed(value))
    with pytest.raises(StepsizeError) as excinfo:
        solve(problem, options, GradientDescent())
    assert excinfo.value.iteration == 1


def test_check_stepsize():
    assert check_stepsize(0.0, 1) == 0.0
    with pytest.raises(StepsizeError):
        check_stepsize(0.0, 1, allow_zero=False)


def test_oracle_errors_propagate(euclidean):
    def broken_gradient(manifold, x):
        raise RuntimeError("gradient failed")

    problem = GradientProblem(euclidean, lambda M, x: 0.0, broken_gradient)
    with pytest.raises(RuntimeError, match="gradient failed"):
        solve(problem, GradientDescentOptions(jnp.ones(2)), GradientDescent())


def test_logs_stop(problem, caplog):
    caplog.set_level(logging.INFO, logger="manoptax.solvers.driver")
    options = Options(jnp.zeros(2), stopping_criterion=StopAfterIteration(2))
    solve(problem, options, Shift(jnp.ones(2)))
    assert any("stopped after 2 iterations" in record.message for record in caplog.records)


def test_debug_written_before_record(problem):
    stream = io.StringIO()
    options = GradientDescentOptions(
        jnp.ones(2), stepsize=ConstantStepsize(0.25), stopping_criterion=StopAfterIteration(2)
    )
    decorated = decorate_options(options, debug=["Iteration", "\n", "Stop"], record=["Iteration"], io=stream)
    solve(problem, decorated, GradientDescent())
    assert stream.getvalue() == (
        "Initial\n# 1\n# 2\nThe algorithm reached its maximal number of iterations (2).\n"
    )
    assert decorated.options.get_record() == [(1,), (2,)]


def test_list_initial_point_is_converted(sphere):
    problem = GradientProblem(sphere, lambda M, x: -x[2], lambda M, x: sphere.proj(x, jnp.array([0.0, 0.0, -1.0])))
    options = GradientDescentOptions([0.0, 1.0, 0.0], stopping_criterion=StopAfterIteration(2))
    solve(problem, options, GradientDescent())
    assert isinstance(options.x, jnp.ndarray)
    assert options.iteration == 2
    assert float(sphere.dist(options.x, jnp.array([0.0, 1.0, 0.0]))) > 0


def test_ragged_initial_point(problem):
    with pytest.raises(ConfigurationError, match="cannot be converted"):
        solve(problem, GradientDescentOptions([[1.0, 0.0], [1.0]]), GradientDescent())

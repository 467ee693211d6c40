"""Tests for stopping criteria and their combinations."""

import threading

import jax.numpy as jnp
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from manoptax.core.errors import ConfigurationError
from manoptax.plans import (
    GradientDescentOptions,
    GradientProblem,
    Options,
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


class Scripted(StoppingCriterion):
    """Criterion that returns a fixed answer per iteration."""

    def __init__(self, answers, name="Scripted"):
        super().__init__()
        self.answers = answers
        self.name = name
        self.calls = 0

    def check(self, problem, options, iteration):
        self.calls += 1
        return self.answers[iteration]

    def describe(self, problem, options, iteration):
        return f"{self.name} at {iteration}"


@pytest.fixture
def options():
    return Options(jnp.zeros(2))


class TestStopAfterIteration:
    """Tests for StopAfterIteration."""

    def test_fires_at_maximum(self, options):
        criterion = StopAfterIteration(3)
        assert [criterion(None, options, k) for k in range(5)] == [False, False, False, True, True]
        assert criterion.reason == "The algorithm reached its maximal number of iterations (3)."
        assert criterion.at_iteration == 3

    def test_zero_fires_before_first_iteration(self, options):
        assert StopAfterIteration(0)(None, options, 0)

    @pytest.mark.parametrize("value", [-1, 2.5, True, "10"])
    def test_rejects_invalid_maximum(self, value):
        with pytest.raises(ConfigurationError):
            StopAfterIteration(value)

    def test_evaluate_returns_reason(self, options):
        criterion = StopAfterIteration(1)
        assert criterion.evaluate(None, options, 0) == (False, "")
        stop, reason = criterion.evaluate(None, options, 1)
        assert stop
        assert "maximal number of iterations" in reason


class TestAtoms:
    """Tests for the remaining atomic criteria."""

    def test_gradient_norm(self, euclidean):
        problem = GradientProblem(euclidean, lambda M, x: 0.0, lambda M, x: x)
        options = GradientDescentOptions(jnp.zeros(2))
        criterion = StopWhenGradientNormLess(1e-3)
        assert not criterion(problem, options, 1)
        options.gradient = jnp.array([1e-4, 0.0])
        assert criterion(problem, options, 2)
        assert "critical point" in criterion.reason
        options.gradient = jnp.array([1.0, 0.0])
        assert not criterion(problem, options, 3)

    def test_change_less_ignores_initial_point(self, options):
        criterion = StopWhenChangeLess(1e-6)
        options.last_change = 0.0
        assert not criterion(None, options, 0)
        assert criterion(None, options, 1)
        assert "change" in criterion.reason

    def test_change_less_rejects_non_positive_threshold(self):
        with pytest.raises(ConfigurationError):
            StopWhenChangeLess(0.0)

    def test_stop_after_time(self, options, monkeypatch):
        now = [100.0]
        monkeypatch.setattr("manoptax.plans.stopping_criterion.time.monotonic", lambda: now[0])
        criterion = StopAfter(5.0)
        assert not criterion(None, options, 0)
        now[0] = 104.0
        assert not criterion(None, options, 1)
        now[0] = 105.5
        assert criterion(None, options, 2)
        assert "5.0 seconds" in criterion.reason

    def test_flag_event(self, options):
        event = threading.Event()
        criterion = StopWhenFlagSet(event)
        assert not criterion(None, options, 1)
        event.set()
        assert criterion(None, options, 2)
        assert "stopped externally" in criterion.reason

    def test_flag_callable(self, options):
        assert StopWhenFlagSet(lambda: True)(None, options, 1)

    def test_flag_rejects_other_values(self):
        with pytest.raises(ConfigurationError):
            StopWhenFlagSet(3)


class TestCombinations:
    """Tests for StopWhenAll and StopWhenAny."""

    def test_operators_build_combinations(self):
        a, b = StopAfterIteration(1), StopAfterIteration(2)
        assert isinstance(a & b, StopWhenAll)
        assert isinstance(a | b, StopWhenAny)
        assert (a | b).criteria == (a, b)

    def test_functional_constructors_accept_lists(self):
        a, b, c = StopAfterIteration(1), StopAfterIteration(2), StopAfterIteration(3)
        assert stop_when_all([a, b, c]).criteria == (a, b, c)
        assert stop_when_any(a, b, c).criteria == (a, b, c)

    def test_rejects_empty_and_foreign_members(self):
        with pytest.raises(ConfigurationError):
            stop_when_any()
        with pytest.raises(ConfigurationError):
            stop_when_all(StopAfterIteration(1), "max")

    def test_any_evaluates_all_children(self, options):
        a = Scripted({1: True}, "a")
        b = Scripted({1: True}, "b")
        criterion = a | b
        assert criterion(None, options, 1)
        assert a.calls == b.calls == 1
        assert criterion.reason == "a at 1\nb at 1"

    def test_any_reason_lists_only_fired_children(self, options):
        criterion = Scripted({1: False}, "a") | Scripted({1: True}, "b")
        assert criterion(None, options, 1)
        assert criterion.reason == "b at 1"

    def test_all_reason_from_child_that_completed(self, options):
        a = Scripted({1: True, 2: True, 3: True}, "a")
        b = Scripted({1: False, 2: False, 3: True}, "b")
        criterion = a & b
        assert not criterion(None, options, 1)
        assert not criterion(None, options, 2)
        assert criterion(None, options, 3)
        assert criterion.reason == "b at 3"

    def test_all_ties_go_to_leftmost_child(self, options):
        criterion = Scripted({1: True}, "a") & Scripted({1: True}, "b")
        assert criterion(None, options, 1)
        assert criterion.reason == "a at 1"

    def test_reason_survives_non_firing_calls(self, options):
        criterion = Scripted({1: True, 2: False}, "a")
        criterion(None, options, 1)
        criterion(None, options, 2)
        assert criterion.reason == "a at 1"
        assert criterion.at_iteration == -1

    def test_iteration_zero_resets_tree(self, options):
        inner = Scripted({0: False, 1: True}, "a")
        criterion = stop_when_any(inner, StopAfterIteration(10))
        criterion(None, options, 1)
        assert inner.reason == "a at 1"
        criterion(None, options, 0)
        assert inner.reason == ""
        assert criterion.reason == ""


answers = st.lists(st.booleans(), min_size=1, max_size=6)


@settings(max_examples=50, deadline=None)
@given(answers, answers)
def test_combinations_are_boolean_and_or(first, second):
    options = Options(jnp.zeros(2))
    for iteration, (x, y) in enumerate(zip(first, second), start=1):
        a = Scripted({iteration: x})
        b = Scripted({iteration: y})
        assert (a & b)(None, options, iteration) == (x and y)
        a = Scripted({iteration: x})
        b = Scripted({iteration: y})
        assert (a | b)(None, options, iteration) == (x or y)


@settings(max_examples=50, deadline=None)
@given(st.integers(min_value=0, max_value=50), st.integers(min_value=0, max_value=50))
def test_iteration_caps_combine_to_min_and_max(n, m):
    """(After n | After m) fires first at min(n, m), (After n & After m) at max(n, m)."""
    options = Options(jnp.zeros(2))
    either = StopAfterIteration(n) | StopAfterIteration(m)
    both = StopAfterIteration(n) & StopAfterIteration(m)
    first_either = next(k for k in range(101) if either(None, options, k))
    first_both = next(k for k in range(101) if both(None, options, k))
    assert first_either == min(n, m)
    assert first_both == max(n, m)

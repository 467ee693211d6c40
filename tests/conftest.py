"""Configuration for pytest test suite."""

import os
import sys

import jax
import jax.numpy as jnp
import pytest

# Add the parent directory to sys.path to enable imports from the manoptax package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

jax.config.update("jax_enable_x64", True)

from manoptax.core.config import SolverConfig  # noqa: E402
from manoptax.manifolds import Euclidean, Sphere  # noqa: E402


def pytest_addoption(parser):
    """Add command-line options to pytest."""
    parser.addoption("--run-slow", action="store_true", default=False, help="run slow tests")


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is specified."""
    if config.getoption("--run-slow"):
        # --run-slow given in cli: do not skip slow tests
        return

    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def reset_solver_config():
    """Every test starts from the default configuration."""
    SolverConfig.reset_config()
    yield
    SolverConfig.reset_config()


@pytest.fixture
def key():
    """JAX random key for testing."""
    return jax.random.key(42)


@pytest.fixture
def sphere():
    """The two-sphere S^2."""
    return Sphere(2)


@pytest.fixture
def euclidean():
    """The plane R^2."""
    return Euclidean(2)


@pytest.fixture
def triangle_points():
    """Three points on S^2 around the north pole, 120 degrees apart."""
    angles = 2.0 * jnp.pi * jnp.arange(1, 4) / 3.0
    points = [jnp.array([0.5 * jnp.cos(a), 0.5 * jnp.sin(a), 1.0]) for a in angles]
    return [p / jnp.linalg.norm(p) for p in points]


@pytest.fixture
def north_pole():
    """The point (0, 0, 1) on S^2."""
    return jnp.array([0.0, 0.0, 1.0])

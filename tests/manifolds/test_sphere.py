"""Tests for the sphere manifold."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from manoptax.core.errors import ManoptaxError
from manoptax.manifolds import InvalidPointError, Sphere, create_sphere


@st.composite
def sphere_point_and_tangent(draw, n=2):
    """Generate a point on S^n and a tangent vector at it."""
    coords = draw(
        st.lists(
            st.floats(min_value=-10.0, max_value=10.0, allow_nan=False, allow_infinity=False),
            min_size=n + 1,
            max_size=n + 1,
        )
    )
    point = jnp.array(coords)
    point_norm = jnp.linalg.norm(point)
    assume(point_norm > 1e-3)
    point = point / point_norm

    tangent_coords = draw(
        st.lists(
            st.floats(min_value=-1.0, max_value=1.0, allow_nan=False, allow_infinity=False),
            min_size=n + 1,
            max_size=n + 1,
        )
    )
    tangent_raw = jnp.array(tangent_coords)
    tangent = tangent_raw - jnp.dot(tangent_raw, point) * point
    return point, tangent


def test_proj_is_orthogonal(sphere, north_pole):
    v = sphere.proj(north_pole, jnp.array([1.0, 2.0, 3.0]))
    np.testing.assert_allclose(v, jnp.array([1.0, 2.0, 0.0]))
    assert jnp.abs(jnp.dot(v, north_pole)) < 1e-12


def test_exp_follows_great_circle(sphere, north_pole):
    v = jnp.array([jnp.pi / 2, 0.0, 0.0])
    np.testing.assert_allclose(sphere.exp(north_pole, v), jnp.array([1.0, 0.0, 0.0]), atol=1e-12)


def test_exp_zero_vector_is_identity(sphere, north_pole):
    np.testing.assert_allclose(sphere.exp(north_pole, sphere.zero_vector(north_pole)), north_pole)


def test_log_of_same_point_is_zero(sphere, north_pole):
    np.testing.assert_allclose(sphere.log(north_pole, north_pole), jnp.zeros(3))


def test_log_length_is_distance(sphere, north_pole):
    y = jnp.array([1.0, 0.0, 0.0])
    v = sphere.log(north_pole, y)
    np.testing.assert_allclose(sphere.norm(north_pole, v), jnp.pi / 2, atol=1e-12)
    np.testing.assert_allclose(sphere.dist(north_pole, y), jnp.pi / 2, atol=1e-12)


def test_dist_of_antipodal_points(sphere, north_pole):
    np.testing.assert_allclose(sphere.dist(north_pole, -north_pole), jnp.pi, atol=1e-12)


def test_retr_stays_on_sphere(sphere, north_pole):
    y = sphere.retr(north_pole, jnp.array([0.3, -0.4, 0.0]))
    assert sphere.validate_point(y)


def test_random_point_and_tangent(sphere, key):
    key_point, key_tangent = jax.random.split(key)
    x = sphere.random_point(key_point)
    v = sphere.random_tangent(key_tangent, x, sigma=0.5)
    assert sphere.validate_point(x)
    assert jnp.abs(sphere.inner(x, x, v)) < 1e-10


def test_validate_point_rejects_wrong_shape_and_norm(sphere):
    assert not sphere.validate_point(jnp.array([1.0, 0.0]))
    assert not sphere.validate_point(jnp.array([1.0, 1.0, 0.0]))


def test_check_point_raises(sphere):
    with pytest.raises(InvalidPointError):
        sphere.check_point(jnp.array([2.0, 0.0, 0.0]))


def test_invalid_point_is_a_manoptax_error(sphere):
    with pytest.raises(ManoptaxError):
        sphere.check_point(jnp.array([0.0, 0.0, 0.5]))


def test_dimensions_and_repr():
    sphere = Sphere(3)
    assert sphere.dimension == 3
    assert sphere.ambient_dimension == 4
    assert repr(sphere) == "Sphere(3)"


class TestCreateSphere:
    """Tests for the sphere factory."""

    def test_default_dimension(self):
        assert create_sphere().dimension == 2

    def test_rejects_non_integer(self):
        with pytest.raises(TypeError):
            create_sphere(2.0)

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError, match="positive"):
            create_sphere(0)


@settings(max_examples=25, deadline=None)
@given(sphere_point_and_tangent())
def test_exp_log_roundtrip_property(data):
    """log_x(exp_x(v)) = v for tangent vectors shorter than pi."""
    sphere = Sphere(2)
    x, v = data
    assume(float(jnp.linalg.norm(v)) < 3.0)
    y = sphere.exp(x, v)
    assert sphere.validate_point(y)
    np.testing.assert_allclose(sphere.log(x, y), v, atol=1e-6)


@settings(max_examples=25, deadline=None)
@given(sphere_point_and_tangent(), sphere_point_and_tangent())
def test_dist_is_symmetric_property(first, second):
    sphere = Sphere(2)
    x, _ = first
    y, _ = second
    np.testing.assert_allclose(sphere.dist(x, y), sphere.dist(y, x), atol=1e-12)

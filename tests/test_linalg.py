"""Unit tests for the homogeneous point/vector helpers and transforms."""

import math

import numpy as np
import pytest

from core.linalg import (
    DegenerateTransformError,
    cross,
    inverse,
    magnitude,
    normalize,
    point,
    reflect,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    vector,
    view_transform,
)

SQRT2_2 = math.sqrt(2.0) / 2.0


class TestVectors:
    """Tests for point and vector arithmetic."""

    def test_point_and_vector_w(self):
        assert point(1, 2, 3)[3] == 1.0
        assert vector(1, 2, 3)[3] == 0.0

    def test_normalize_gives_unit_length(self):
        v = normalize(vector(1, 2, 3))
        assert magnitude(v) == pytest.approx(1.0)
        assert v[3] == 0.0

    def test_cross_product(self):
        np.testing.assert_allclose(cross(vector(1, 2, 3), vector(2, 3, 4)), vector(-1, 2, -1))

    def test_reflect_at_45_degrees(self):
        np.testing.assert_allclose(
            reflect(vector(1, -1, 0), vector(0, 1, 0)), vector(1, 1, 0))

    def test_reflect_off_slanted_surface(self):
        np.testing.assert_allclose(
            reflect(vector(0, -1, 0), vector(SQRT2_2, SQRT2_2, 0)),
            vector(1, 0, 0), atol=1e-9)


class TestTransforms:
    """Tests for the 4x4 transform builders."""

    def test_translation_moves_points_not_vectors(self):
        m = translation(5, -3, 2)
        np.testing.assert_allclose(m @ point(-3, 4, 5), point(2, 1, 7))
        np.testing.assert_allclose(m @ vector(-3, 4, 5), vector(-3, 4, 5))

    def test_scaling(self):
        np.testing.assert_allclose(scaling(2, 3, 4) @ point(-4, 6, 8), point(-8, 18, 32))

    def test_rotations(self):
        np.testing.assert_allclose(rotation_x(math.pi / 2) @ point(0, 1, 0), point(0, 0, 1), atol=1e-9)
        np.testing.assert_allclose(rotation_y(math.pi / 2) @ point(0, 0, 1), point(1, 0, 0), atol=1e-9)
        np.testing.assert_allclose(rotation_z(math.pi / 2) @ point(0, 1, 0), point(-1, 0, 0), atol=1e-9)

    def test_shearing(self):
        np.testing.assert_allclose(shearing(1, 0, 0, 0, 0, 0) @ point(2, 3, 4), point(5, 3, 4))

    def test_inverse_round_trip(self):
        m = translation(1, 2, 3) @ rotation_y(0.3) @ scaling(2, 2, 2)
        np.testing.assert_allclose(m @ inverse(m), np.identity(4), atol=1e-9)

    def test_singular_transform_raises(self):
        with pytest.raises(DegenerateTransformError):
            inverse(scaling(1, 0, 1))

    def test_degenerate_transform_is_value_error(self):
        with pytest.raises(ValueError):
            inverse(np.zeros((4, 4)))


class TestViewTransform:
    """Tests for the camera orientation matrix."""

    def test_default_orientation_is_identity(self):
        m = view_transform(point(0, 0, 0), point(0, 0, -1), vector(0, 1, 0))
        np.testing.assert_allclose(m, np.identity(4), atol=1e-9)

    def test_looking_in_positive_z_mirrors(self):
        m = view_transform(point(0, 0, 0), point(0, 0, 1), vector(0, 1, 0))
        np.testing.assert_allclose(m, scaling(-1, 1, -1), atol=1e-9)

    def test_moves_the_world(self):
        m = view_transform(point(0, 0, 8), point(0, 0, 0), vector(0, 1, 0))
        np.testing.assert_allclose(m, translation(0, 0, -8), atol=1e-9)

    def test_arbitrary_view(self):
        m = view_transform(point(1, 3, 2), point(4, -2, 8), vector(1, 1, 0))
        expected = np.array([
            [-0.50709, 0.50709, 0.67612, -2.36643],
            [0.76772, 0.60609, 0.12122, -2.82843],
            [-0.35857, 0.59761, -0.71714, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])
        np.testing.assert_allclose(m, expected, atol=1e-4)

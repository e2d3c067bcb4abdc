"""Unit tests for the pinhole camera."""

import math

import numpy as np
import pytest

from core.camera import Camera
from core.linalg import point, rotation_y, translation, vector, view_transform

SQRT2_2 = math.sqrt(2.0) / 2.0


class TestCameraGeometry:
    """Tests for the derived canvas dimensions."""

    def test_horizontal_canvas_pixel_size(self):
        assert Camera(200, 125, math.pi / 2).pixel_size == pytest.approx(0.01)

    def test_vertical_canvas_pixel_size(self):
        assert Camera(125, 200, math.pi / 2).pixel_size == pytest.approx(0.01)

    def test_default_transform(self):
        camera = Camera(160, 120, math.pi / 2)
        np.testing.assert_allclose(camera.transform, np.identity(4))


class TestRayForPixel:
    """Tests for camera rays."""

    def test_through_center(self):
        ray = Camera(201, 101, math.pi / 2).ray_for_pixel(100, 50)
        np.testing.assert_allclose(ray.origin, point(0, 0, 0))
        np.testing.assert_allclose(ray.direction, vector(0, 0, -1), atol=1e-9)

    def test_through_corner(self):
        ray = Camera(201, 101, math.pi / 2).ray_for_pixel(0, 0)
        np.testing.assert_allclose(ray.origin, point(0, 0, 0))
        np.testing.assert_allclose(ray.direction, vector(0.66519, 0.33259, -0.66851), atol=1e-5)

    def test_transformed_camera(self):
        camera = Camera(201, 101, math.pi / 2, rotation_y(math.pi / 4) @ translation(0, -2, 5))
        ray = camera.ray_for_pixel(100, 50)
        np.testing.assert_allclose(ray.origin, point(0, 2, -5), atol=1e-9)
        np.testing.assert_allclose(ray.direction, vector(SQRT2_2, 0, -SQRT2_2), atol=1e-9)

    def test_rays_are_unit_length(self):
        camera = Camera(11, 11, math.pi / 2,
                        view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0)))
        for x, y in [(0, 0), (5, 5), (10, 3)]:
            d = camera.ray_for_pixel(x, y).direction
            assert np.linalg.norm(d[:3]) == pytest.approx(1.0)

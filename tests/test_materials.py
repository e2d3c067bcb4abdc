"""Unit tests for materials and procedural patterns."""

import numpy as np
import pytest

from core.linalg import point, scaling, translation
from core.materials import (
    BLACK,
    GLASS,
    WHITE,
    BlendPattern,
    CheckersPattern,
    GradientPattern,
    Material,
    PlainPattern,
    RingGradientPattern,
    RingPattern,
    StripePattern,
    TestPattern,
    VACUUM,
    color,
)

PLAIN_WHITE = PlainPattern(WHITE)
PLAIN_BLACK = PlainPattern(BLACK)


class TestMaterial:
    """Tests for material defaults."""

    def test_defaults(self):
        m = Material()
        np.testing.assert_allclose(m.pattern.color_at(point(3, 4, 5)), WHITE)
        assert m.ambient == 0.1
        assert m.diffuse == 0.9
        assert m.specular == 0.9
        assert m.shininess == 200.0
        assert m.reflective == 0.0
        assert m.transparency == 0.0
        assert m.refractive_index == VACUUM

    def test_plain_shortcut(self):
        m = Material.plain(color(1, 0, 0), refractive_index=GLASS)
        np.testing.assert_allclose(m.pattern.color_at(point(0, 0, 0)), [1, 0, 0])
        assert m.refractive_index == GLASS


class TestStripes:
    """Tests for the stripe pattern."""

    @pytest.mark.parametrize("x, expected", [
        (0.0, WHITE), (0.9, WHITE), (1.0, BLACK), (-0.1, BLACK), (-1.0, BLACK), (-1.1, WHITE),
    ])
    def test_alternates_in_x(self, x, expected):
        pattern = StripePattern(PLAIN_WHITE, PLAIN_BLACK)
        np.testing.assert_allclose(pattern.color_at(point(x, 0, 0)), expected)

    @pytest.mark.parametrize("p", [point(0, 1, 0), point(0, 2, 0), point(0, 0, 1), point(0, 0, 2)])
    def test_constant_in_y_and_z(self, p):
        pattern = StripePattern(PLAIN_WHITE, PLAIN_BLACK)
        np.testing.assert_allclose(pattern.color_at(p), WHITE)

    def test_pattern_transform(self):
        pattern = StripePattern(PLAIN_WHITE, PLAIN_BLACK, scaling(2, 2, 2))
        np.testing.assert_allclose(pattern.color_at(point(1.5, 0, 0)), WHITE)


class TestOtherMixtures:
    """Tests for gradient, ring, checkers and blend patterns."""

    @pytest.mark.parametrize("x, expected", [
        (0.0, WHITE), (0.25, color(0.75, 0.75, 0.75)), (0.5, color(0.5, 0.5, 0.5)),
        (0.75, color(0.25, 0.25, 0.25)),
    ])
    def test_gradient(self, x, expected):
        pattern = GradientPattern(PLAIN_WHITE, PLAIN_BLACK)
        np.testing.assert_allclose(pattern.color_at(point(x, 0, 0)), expected)

    @pytest.mark.parametrize("p, expected", [
        (point(0, 0, 0), WHITE), (point(1, 0, 0), BLACK), (point(0, 0, 1), BLACK),
        (point(0.708, 0, 0.708), BLACK),
    ])
    def test_ring(self, p, expected):
        pattern = RingPattern(PLAIN_WHITE, PLAIN_BLACK)
        np.testing.assert_allclose(pattern.color_at(p), expected)

    def test_ring_gradient(self):
        pattern = RingGradientPattern(PLAIN_WHITE, PLAIN_BLACK)
        np.testing.assert_allclose(pattern.color_at(point(0, 1.5, 0)), color(0.5, 0.5, 0.5))

    @pytest.mark.parametrize("p, expected", [
        (point(0, 0, 0), WHITE), (point(0.99, 0, 0), WHITE), (point(1.01, 0, 0), BLACK),
        (point(0, 0.99, 0), WHITE), (point(0, 1.01, 0), BLACK),
        (point(0, 0, 0.99), WHITE), (point(0, 0, 1.01), BLACK),
    ])
    def test_checkers(self, p, expected):
        pattern = CheckersPattern(PLAIN_WHITE, PLAIN_BLACK)
        np.testing.assert_allclose(pattern.color_at(p), expected)

    def test_blend_averages(self):
        pattern = BlendPattern(PLAIN_WHITE, PLAIN_BLACK)
        np.testing.assert_allclose(pattern.color_at(point(3, 2, 1)), color(0.5, 0.5, 0.5))

    def test_nested_patterns(self):
        inner = StripePattern(PlainPattern(color(1, 0, 0)), PLAIN_BLACK)
        pattern = CheckersPattern(inner, PLAIN_WHITE, translation(0.5, 0, 0))
        np.testing.assert_allclose(pattern.color_at(point(0.6, 0, 0)), [1, 0, 0])


def test_test_pattern_returns_point():
    np.testing.assert_allclose(TestPattern().color_at(point(1, 2, 3)), [1, 2, 3])

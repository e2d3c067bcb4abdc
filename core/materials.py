"""
Surface materials and procedural colour patterns
"""
import math
import numpy as np
from dataclasses import dataclass, field

from core.linalg import IDENTITY, inverse

# Refractive indices
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.52
DIAMOND = 2.417


def color(r: float, g: float, b: float) -> np.ndarray:
    return np.array([r, g, b], dtype=np.float64)


BLACK = color(0.0, 0.0, 0.0)
WHITE = color(1.0, 1.0, 1.0)


class Pattern:
    """Base class for patterns evaluated at a material-space point"""

    def color_at(self, p: np.ndarray) -> np.ndarray:
        raise NotImplementedError


class PlainPattern(Pattern):
    __slots__ = ['color']

    def __init__(self, c: np.ndarray):
        self.color = np.asarray(c, dtype=np.float64)

    def color_at(self, p: np.ndarray) -> np.ndarray:
        return self.color


class TestPattern(Pattern):
    """Debug pattern returning the lookup point itself as a colour"""
    __test__ = False

    def color_at(self, p: np.ndarray) -> np.ndarray:
        return color(p[0], p[1], p[2])


class MixturePattern(Pattern):
    """Two sub-patterns combined in the pattern's own frame"""

    def __init__(self, left: Pattern, right: Pattern, transform: np.ndarray = IDENTITY):
        self.left = left
        self.right = right
        self.transform_inv = inverse(transform)

    def color_at(self, p: np.ndarray) -> np.ndarray:
        return self.mix(self.transform_inv @ p)

    def mix(self, p: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def _interpolate(self, p: np.ndarray, fraction: float) -> np.ndarray:
        left = self.left.color_at(p)
        right = self.right.color_at(p)
        return left + (right - left) * fraction


class StripePattern(MixturePattern):
    def mix(self, p):
        if math.floor(p[0]) % 2 == 0:
            return self.left.color_at(p)
        return self.right.color_at(p)


class GradientPattern(MixturePattern):
    def mix(self, p):
        return self._interpolate(p, p[0] - math.floor(p[0]))


class RingPattern(MixturePattern):
    def mix(self, p):
        if math.floor(math.sqrt(p[0] * p[0] + p[2] * p[2])) % 2 == 0:
            return self.left.color_at(p)
        return self.right.color_at(p)


class RingGradientPattern(MixturePattern):
    def mix(self, p):
        distance = math.sqrt(p[0] * p[0] + p[1] * p[1] + p[2] * p[2])
        return self._interpolate(p, distance - math.floor(distance))


class CheckersPattern(MixturePattern):
    def mix(self, p):
        if (math.floor(p[0]) + math.floor(p[1]) + math.floor(p[2])) % 2 == 0:
            return self.left.color_at(p)
        return self.right.color_at(p)


class BlendPattern(MixturePattern):
    def mix(self, p):
        return (self.left.color_at(p) + self.right.color_at(p)) / 2.0


@dataclass
class Material:
    """Phong material with reflection and refraction coefficients"""
    pattern: Pattern = field(default_factory=lambda: PlainPattern(WHITE))
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM

    @classmethod
    def plain(cls, c: np.ndarray, **kwargs) -> 'Material':
        return cls(pattern=PlainPattern(c), **kwargs)

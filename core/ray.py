"""
Ray with homogeneous origin/direction
"""
import numpy as np
from dataclasses import dataclass


@dataclass
class Ray:
    origin: np.ndarray  # [4], w = 1
    direction: np.ndarray  # [4], w = 0

    def position(self, t: float) -> np.ndarray:
        return self.origin + self.direction * t

    def transform(self, matrix: np.ndarray) -> 'Ray':
        return Ray(matrix @ self.origin, matrix @ self.direction)

"""
Axis-aligned bounding boxes used to prune group traversal
"""
import itertools
import numpy as np
from typing import Tuple

from config import EPSILON


def slab_interval(origin: float, direction: float, lo: float, hi: float) -> Tuple[float, float]:
    """Entry/exit parameters of a ray against the slab lo <= x <= hi on one axis"""
    if abs(direction) < EPSILON:
        # Parallel: the whole line is inside the slab or none of it is
        if lo <= origin <= hi:
            return -np.inf, np.inf
        return np.inf, -np.inf

    t0 = (lo - origin) / direction
    t1 = (hi - origin) / direction
    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


class BoundingBox:
    """Immutable box; every operation returns a new instance"""
    __slots__ = ['min', 'max']

    def __init__(self, minimum, maximum):
        self.min = np.array(minimum[:3], dtype=np.float64)
        self.max = np.array(maximum[:3], dtype=np.float64)

    @classmethod
    def empty(cls) -> 'BoundingBox':
        return cls((np.inf, np.inf, np.inf), (-np.inf, -np.inf, -np.inf))

    def __repr__(self):
        return f"BoundingBox(min={self.min.tolist()}, max={self.max.tolist()})"

    def is_empty(self) -> bool:
        return bool(np.any(self.min > self.max))

    def insert(self, point) -> 'BoundingBox':
        p = np.asarray(point[:3], dtype=np.float64)
        return BoundingBox(np.minimum(self.min, p), np.maximum(self.max, p))

    def union(self, other: 'BoundingBox') -> 'BoundingBox':
        if other.is_empty():
            return self
        return self.insert(other.min).insert(other.max)

    def contains(self, point) -> bool:
        p = np.asarray(point[:3])
        return bool(np.all(self.min <= p) and np.all(p <= self.max))

    def encloses(self, other: 'BoundingBox') -> bool:
        return self.contains(other.min) and self.contains(other.max)

    def transform(self, matrix: np.ndarray) -> 'BoundingBox':
        """Box around the eight transformed corners.

        A zero matrix entry contributes nothing even against an infinite
        extent. An axis whose coordinate becomes undefined (inf - inf) is
        treated as unbounded.
        """
        if self.is_empty():
            return self

        linear = matrix[:3, :3]
        offset = matrix[:3, 3]
        box = BoundingBox.empty()
        unbounded = np.zeros(3, dtype=bool)

        with np.errstate(invalid='ignore'):
            for corner in itertools.product(*zip(self.min, self.max)):
                terms = np.where(linear == 0.0, 0.0, linear * np.array(corner))
                mapped = terms.sum(axis=1) + offset
                unbounded |= np.isnan(mapped)
                box = box.insert(np.where(np.isnan(mapped), 0.0, mapped))

        box.min[unbounded] = -np.inf
        box.max[unbounded] = np.inf
        return box

    def intersects(self, ray) -> bool:
        if self.is_empty():
            return False

        tmin, tmax = -np.inf, np.inf
        for axis in range(3):
            t0, t1 = slab_interval(ray.origin[axis], ray.direction[axis],
                                   self.min[axis], self.max[axis])
            tmin = max(tmin, t0)
            tmax = min(tmax, t1)
            if tmin > tmax:
                return False
        return True

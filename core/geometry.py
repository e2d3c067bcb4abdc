"""
Closed-form primitive geometry in local space.

Every primitive offers the same three operations:

* ``intersect(ray)`` returns a list of ``(t, u, v)`` tuples. ``u`` and ``v``
  are only set for triangles. Negative ``t`` values are kept; hit selection
  filters them later.
* ``normal(point, u=None, v=None)`` returns the local surface normal.
* ``bbox()`` returns the local :class:`BoundingBox`.
"""
import math
import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from accelerators.bounding_box import BoundingBox, slab_interval
from config import EPSILON
from core.linalg import cross, dot, normalize, point, vector
from core.ray import Ray

Root = Tuple[float, Optional[float], Optional[float]]

ORIGIN = point(0.0, 0.0, 0.0)
UNIT_BOX = ((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))


def _quadratic(a: float, b: float, c: float) -> List[Root]:
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return []
    root = math.sqrt(discriminant)
    t0 = (-b - root) / (2.0 * a)
    t1 = (-b + root) / (2.0 * a)
    if t0 > t1:
        t0, t1 = t1, t0
    return [(t0, None, None), (t1, None, None)]


def _within_cap(ray: Ray, t: float, radius: float) -> bool:
    x = ray.origin[0] + t * ray.direction[0]
    z = ray.origin[2] + t * ray.direction[2]
    return x * x + z * z <= radius * radius


def _cap_roots(ray: Ray, minimum: float, maximum: float,
               lower_radius: float, upper_radius: float) -> List[Root]:
    """Hits against the discs closing y = minimum and y = maximum"""
    if abs(ray.direction[1]) < EPSILON:
        return []

    roots = []
    t = (minimum - ray.origin[1]) / ray.direction[1]
    if _within_cap(ray, t, lower_radius):
        roots.append((t, None, None))
    t = (maximum - ray.origin[1]) / ray.direction[1]
    if _within_cap(ray, t, upper_radius):
        roots.append((t, None, None))
    return roots


def _in_y_range(ray: Ray, roots: List[Root], minimum: float, maximum: float) -> List[Root]:
    kept = []
    for root in roots:
        y = ray.origin[1] + root[0] * ray.direction[1]
        if minimum < y < maximum:
            kept.append(root)
    return kept


@dataclass(frozen=True)
class Sphere:
    """Unit sphere centred at the origin"""

    def intersect(self, ray: Ray) -> List[Root]:
        sphere_to_ray = ray.origin - ORIGIN
        a = dot(ray.direction, ray.direction)
        b = 2.0 * dot(ray.direction, sphere_to_ray)
        c = dot(sphere_to_ray, sphere_to_ray) - 1.0
        return _quadratic(a, b, c)

    def normal(self, p: np.ndarray, u: float = None, v: float = None) -> np.ndarray:
        return vector(p[0], p[1], p[2])

    def bbox(self) -> BoundingBox:
        return BoundingBox(*UNIT_BOX)


@dataclass(frozen=True)
class Plane:
    """The xz plane"""

    def intersect(self, ray: Ray) -> List[Root]:
        if abs(ray.direction[1]) < EPSILON:
            return []
        return [(-ray.origin[1] / ray.direction[1], None, None)]

    def normal(self, p: np.ndarray, u: float = None, v: float = None) -> np.ndarray:
        return vector(0.0, 1.0, 0.0)

    def bbox(self) -> BoundingBox:
        return BoundingBox((-np.inf, 0.0, -np.inf), (np.inf, 0.0, np.inf))


@dataclass(frozen=True)
class Cube:
    """Axis-aligned cube spanning -1..1 on every axis"""

    def intersect(self, ray: Ray) -> List[Root]:
        tmin, tmax = -np.inf, np.inf
        for axis in range(3):
            t0, t1 = slab_interval(ray.origin[axis], ray.direction[axis], -1.0, 1.0)
            tmin = max(tmin, t0)
            tmax = min(tmax, t1)

        if tmin > tmax:
            return []
        return [(tmin, None, None), (tmax, None, None)]

    def normal(self, p: np.ndarray, u: float = None, v: float = None) -> np.ndarray:
        ax, ay, az = abs(p[0]), abs(p[1]), abs(p[2])
        largest = max(ax, ay, az)
        if largest == ax:
            return vector(p[0], 0.0, 0.0)
        if largest == ay:
            return vector(0.0, p[1], 0.0)
        return vector(0.0, 0.0, p[2])

    def bbox(self) -> BoundingBox:
        return BoundingBox(*UNIT_BOX)


@dataclass(frozen=True)
class Cylinder:
    """Unit-radius cylinder around the y axis, truncated to minimum < y < maximum"""
    minimum: float = -np.inf
    maximum: float = np.inf
    closed: bool = False

    def intersect(self, ray: Ray) -> List[Root]:
        dx, dz = ray.direction[0], ray.direction[2]
        ox, oz = ray.origin[0], ray.origin[2]

        roots = []
        a = dx * dx + dz * dz
        if abs(a) >= EPSILON:
            b = 2.0 * ox * dx + 2.0 * oz * dz
            c = ox * ox + oz * oz - 1.0
            roots = _in_y_range(ray, _quadratic(a, b, c), self.minimum, self.maximum)

        if self.closed:
            roots.extend(_cap_roots(ray, self.minimum, self.maximum, 1.0, 1.0))
        return roots

    def normal(self, p: np.ndarray, u: float = None, v: float = None) -> np.ndarray:
        distance = p[0] * p[0] + p[2] * p[2]
        if distance < 1.0 and p[1] >= self.maximum - EPSILON:
            return vector(0.0, 1.0, 0.0)
        if distance < 1.0 and p[1] <= self.minimum + EPSILON:
            return vector(0.0, -1.0, 0.0)
        return vector(p[0], 0.0, p[2])

    def bbox(self) -> BoundingBox:
        if self.closed:
            return BoundingBox((-1.0, self.minimum, -1.0), (1.0, self.maximum, 1.0))
        return BoundingBox((-1.0, -np.inf, -1.0), (1.0, np.inf, 1.0))


@dataclass(frozen=True)
class Cone:
    """Double cone x^2 + z^2 = y^2, truncated to minimum < y < maximum"""
    minimum: float = -np.inf
    maximum: float = np.inf
    closed: bool = False

    def intersect(self, ray: Ray) -> List[Root]:
        dx, dy, dz = ray.direction[0], ray.direction[1], ray.direction[2]
        ox, oy, oz = ray.origin[0], ray.origin[1], ray.origin[2]

        a = dx * dx - dy * dy + dz * dz
        b = 2.0 * ox * dx - 2.0 * oy * dy + 2.0 * oz * dz
        c = ox * ox - oy * oy + oz * oz

        if abs(a) < EPSILON:
            # Ray parallel to one of the cone halves: b*t + c = 0
            roots = [] if abs(b) < EPSILON else [(-c / b, None, None)]
        else:
            roots = _quadratic(a, b, c)
        roots = _in_y_range(ray, roots, self.minimum, self.maximum)

        if self.closed:
            roots.extend(_cap_roots(ray, self.minimum, self.maximum,
                                    abs(self.minimum), abs(self.maximum)))
        return roots

    def normal(self, p: np.ndarray, u: float = None, v: float = None) -> np.ndarray:
        distance = p[0] * p[0] + p[2] * p[2]
        if distance < self.maximum * self.maximum and p[1] >= self.maximum - EPSILON:
            return vector(0.0, 1.0, 0.0)
        if distance < self.minimum * self.minimum and p[1] <= self.minimum + EPSILON:
            return vector(0.0, -1.0, 0.0)
        if distance < EPSILON * EPSILON and abs(p[1]) < EPSILON:
            # Apex: the lateral derivative vanishes, fall back to the axis
            return vector(0.0, 1.0, 0.0) if p[1] >= 0.0 else vector(0.0, -1.0, 0.0)

        y = math.sqrt(distance)
        if p[1] > 0.0:
            y = -y
        return vector(p[0], y, p[2])

    def bbox(self) -> BoundingBox:
        if not self.closed:
            return BoundingBox((-np.inf, -np.inf, -np.inf), (np.inf, np.inf, np.inf))
        limit = max(abs(self.minimum), abs(self.maximum))
        return BoundingBox((-limit, self.minimum, -limit), (limit, self.maximum, limit))


def _moller_trumbore(ray: Ray, p1: np.ndarray, e1: np.ndarray, e2: np.ndarray) -> List[Root]:
    dir_cross_e2 = cross(ray.direction, e2)
    det = dot(e1, dir_cross_e2)
    if abs(det) < EPSILON:
        return []

    f = 1.0 / det
    p1_to_origin = ray.origin - p1
    u = f * dot(p1_to_origin, dir_cross_e2)
    if u < 0.0 or u > 1.0:
        return []

    origin_cross_e1 = cross(p1_to_origin, e1)
    v = f * dot(ray.direction, origin_cross_e1)
    if v < 0.0 or u + v > 1.0:
        return []

    t = f * dot(e2, origin_cross_e1)
    return [(t, u, v)]


def _hull(*points) -> BoundingBox:
    box = BoundingBox.empty()
    for p in points:
        box = box.insert(p)
    return box


@dataclass(frozen=True, eq=False)
class Triangle:
    """Flat triangle with a constant normal"""
    p1: np.ndarray
    p2: np.ndarray
    p3: np.ndarray
    e1: np.ndarray = field(init=False, repr=False)
    e2: np.ndarray = field(init=False, repr=False)
    n: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        e1 = self.p2 - self.p1
        e2 = self.p3 - self.p1
        object.__setattr__(self, 'e1', e1)
        object.__setattr__(self, 'e2', e2)
        object.__setattr__(self, 'n', normalize(cross(e2, e1)))

    def intersect(self, ray: Ray) -> List[Root]:
        return _moller_trumbore(ray, self.p1, self.e1, self.e2)

    def normal(self, p: np.ndarray, u: float = None, v: float = None) -> np.ndarray:
        return self.n

    def bbox(self) -> BoundingBox:
        return _hull(self.p1, self.p2, self.p3)


@dataclass(frozen=True, eq=False)
class SmoothTriangle:
    """Triangle whose normal is interpolated from per-vertex normals"""
    p1: np.ndarray
    p2: np.ndarray
    p3: np.ndarray
    n1: np.ndarray
    n2: np.ndarray
    n3: np.ndarray
    e1: np.ndarray = field(init=False, repr=False)
    e2: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'e1', self.p2 - self.p1)
        object.__setattr__(self, 'e2', self.p3 - self.p1)

    def intersect(self, ray: Ray) -> List[Root]:
        return _moller_trumbore(ray, self.p1, self.e1, self.e2)

    def normal(self, p: np.ndarray, u: float = None, v: float = None) -> np.ndarray:
        if u is None or v is None:
            raise ValueError("SmoothTriangle normal requires barycentric u and v")
        return self.n2 * u + self.n3 * v + self.n1 * (1.0 - u - v)

    def bbox(self) -> BoundingBox:
        return _hull(self.p1, self.p2, self.p3)


Geometry = Union[Sphere, Plane, Cube, Cylinder, Cone, Triangle, SmoothTriangle]

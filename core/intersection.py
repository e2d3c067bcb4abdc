"""
Intersection records, the per-ray ledger and shading state
"""
import math
import numpy as np
from dataclasses import dataclass
from typing import Iterator, List, Optional

from config import EPSILON
from core.linalg import dot, reflect
from core.ray import Ray


@dataclass(eq=False)
class Intersection:
    t: float
    shape: 'Shape'
    u: Optional[float] = None
    v: Optional[float] = None

    def __eq__(self, other):
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.t == other.t and self.shape == other.shape

    def __hash__(self):
        return hash((self.t, self.shape))


class Intersections:
    """Growable ledger of intersections for one ray"""

    def __init__(self, records: List[Intersection] = None):
        self.records = list(records) if records else []

    def __len__(self):
        return len(self.records)

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self.records)

    def __getitem__(self, index) -> Intersection:
        return self.records[index]

    def insert(self, record: Intersection):
        self.records.append(record)

    def extend(self, other: 'Intersections'):
        self.records.extend(other.records)

    def clear(self):
        self.records.clear()

    def sort(self):
        self.records.sort(key=lambda record: record.t)

    def hit(self) -> Optional[Intersection]:
        """First non-negative record; only the nearest one once sorted"""
        for record in self.records:
            if record.t >= 0.0:
                return record
        return None

    def filter_by_group(self, group):
        """Keep only the records crossing the boundary of a CSG group's solid.

        Expects the ledger sorted and holding only the group's hits.
        """
        left = group.children[0]
        in_left = False
        in_right = False

        kept = []
        for record in self.records:
            left_hit = left.includes(record.shape)
            if group.kind.allows(left_hit, in_left, in_right):
                kept.append(record)

            if left_hit:
                in_left = not in_left
            else:
                in_right = not in_right

        self.records = kept


@dataclass
class ShadingState:
    t: float
    shape: 'Shape'
    point: np.ndarray
    over_point: np.ndarray
    under_point: np.ndarray
    eye: np.ndarray
    normal: np.ndarray
    inside: bool
    reflect: np.ndarray
    n1: float
    n2: float
    reflectance: float


def schlick(eye: np.ndarray, normal: np.ndarray, n1: float, n2: float) -> float:
    """Schlick approximation of the Fresnel reflectance"""
    cos = dot(eye, normal)

    if n1 > n2:
        n = n1 / n2
        sin2_t = n * n * (1.0 - cos * cos)
        if sin2_t > 1.0:
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)

    r0 = ((n1 - n2) / (n1 + n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos) ** 5


def _top_index(containers: list) -> float:
    if not containers:
        return 1.0
    return containers[-1].material.refractive_index


def prepare_state(hit: Intersection, ray: Ray, ledger: Intersections) -> ShadingState:
    """Local frame at `hit`, plus the refractive indices either side of it.

    `ledger` must be the full sorted ledger the hit was selected from.
    """
    point = ray.position(hit.t)
    eye = -ray.direction
    normal = hit.shape.normal(point, hit.u, hit.v)

    inside = False
    if dot(normal, eye) < 0.0:
        inside = True
        normal = -normal

    over_point = point + normal * EPSILON
    under_point = point - normal * EPSILON
    reflect_vector = reflect(ray.direction, normal)

    n1 = n2 = 1.0
    containers = []
    for record in ledger:
        if record == hit:
            n1 = _top_index(containers)

        if record.shape in containers:
            containers.remove(record.shape)
        else:
            containers.append(record.shape)

        if record == hit:
            n2 = _top_index(containers)
            break

    return ShadingState(
        t=hit.t,
        shape=hit.shape,
        point=point,
        over_point=over_point,
        under_point=under_point,
        eye=eye,
        normal=normal,
        inside=inside,
        reflect=reflect_vector,
        n1=n1,
        n2=n2,
        reflectance=schlick(eye, normal, n1, n2),
    )

"""
Scene graph: shapes placed in the world, CSG/aggregation groups and the
builder that assigns shape identities
"""
import logging
import numpy as np
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from accelerators.bounding_box import BoundingBox
from core import geometry
from core.geometry import Geometry
from core.intersection import Intersection, Intersections
from core.linalg import IDENTITY, dot, inverse, normalize, reflect
from core.materials import BLACK, Material
from core.ray import Ray

logger = logging.getLogger(__name__)


@dataclass
class ShapeArgs:
    transform: np.ndarray = field(default_factory=lambda: IDENTITY.copy())
    material: Material = field(default_factory=Material)
    casts_shadow: bool = True


class Shape:
    """A primitive placed in the world with its own material"""

    def __init__(self, shape_id: int, geometry: Geometry, args: ShapeArgs):
        inv = inverse(args.transform)

        self.id = shape_id
        self.geometry = geometry
        self.material = args.material
        self.casts_shadow = args.casts_shadow
        self.transform_inv = inv
        self.transform_inv_tsp = inv.T
        self.material_inv = inv
        self.bbox = geometry.bbox().transform(args.transform)

    def __eq__(self, other):
        if not isinstance(other, Shape):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"Shape(id={self.id}, geometry={type(self.geometry).__name__})"

    def includes(self, shape: 'Shape') -> bool:
        return self == shape

    def intersect(self, ray: Ray, ledger: Intersections):
        local_ray = ray.transform(self.transform_inv)
        for t, u, v in self.geometry.intersect(local_ray):
            ledger.insert(Intersection(t, self, u, v))

    def normal(self, point: np.ndarray, u: float = None, v: float = None) -> np.ndarray:
        local_point = self.transform_inv @ point
        local_normal = self.geometry.normal(local_point, u, v)
        world_normal = self.transform_inv_tsp @ local_normal
        world_normal[3] = 0.0
        return normalize(world_normal)

    def lighting(self, light, point: np.ndarray, eye: np.ndarray,
                 normal: np.ndarray, shadowed: bool) -> np.ndarray:
        """Phong illumination of this shape by one point light"""
        material = self.material
        surface_color = material.pattern.color_at(self.material_inv @ point)
        effective_color = surface_color * light.intensity

        light_vector = normalize(light.origin - point)
        ambient = effective_color * material.ambient
        diffuse = BLACK
        specular = BLACK

        light_dot_normal = dot(light_vector, normal)
        if not shadowed and light_dot_normal >= 0.0:
            diffuse = effective_color * material.diffuse * light_dot_normal

            reflect_dot_eye = dot(reflect(-light_vector, normal), eye)
            if reflect_dot_eye > 0.0:
                specular = light.intensity * material.specular * reflect_dot_eye ** material.shininess

        return ambient + diffuse + specular

    def propagate(self, transform: np.ndarray, inv: np.ndarray, inv_tsp: np.ndarray,
                  material: Optional[Material]):
        self.transform_inv = self.transform_inv @ inv
        self.transform_inv_tsp = inv_tsp @ self.transform_inv_tsp
        if material is not None:
            self.material = material
            self.material_inv = inv
        else:
            self.material_inv = self.material_inv @ inv
        self.bbox = self.bbox.transform(transform)


class GroupKind(Enum):
    AGGREGATION = 'aggregation'
    UNION = 'union'
    INTERSECTION = 'intersection'
    DIFFERENCE = 'difference'

    def allows(self, left_hit: bool, in_left: bool, in_right: bool) -> bool:
        """Whether a hit crosses the boundary of the combined solid"""
        if self is GroupKind.UNION:
            return (left_hit and not in_right) or (not left_hit and not in_left)
        if self is GroupKind.INTERSECTION:
            return (left_hit and in_right) or (not left_hit and in_left)
        if self is GroupKind.DIFFERENCE:
            return (left_hit and not in_right) or (not left_hit and in_left)
        return True


class Group:
    """Composite element; children already carry the accumulated placement"""

    def __init__(self, kind: GroupKind, children: List['Element']):
        self.kind = kind
        self.children = children
        self.bbox = BoundingBox.empty()
        for child in children:
            self.bbox = self.bbox.union(child.bbox)

    def __repr__(self):
        return f"Group(kind={self.kind.name}, children={len(self.children)})"

    def includes(self, shape: Shape) -> bool:
        return any(child.includes(shape) for child in self.children)

    def intersect(self, ray: Ray, ledger: Intersections):
        if not self.bbox.intersects(ray):
            return

        if self.kind is GroupKind.AGGREGATION:
            for child in self.children:
                child.intersect(ray, ledger)
            return

        local = Intersections()
        for child in self.children:
            child.intersect(ray, local)
        local.sort()
        local.filter_by_group(self)
        ledger.extend(local)

    def propagate(self, transform: np.ndarray, inv: np.ndarray, inv_tsp: np.ndarray,
                  material: Optional[Material]):
        for child in self.children:
            child.propagate(transform, inv, inv_tsp, material)
        self.bbox = self.bbox.transform(transform)


Element = Union[Shape, Group]


class SceneBuilder:
    """Creates shapes and groups, handing out shape ids in creation order"""

    def __init__(self, first_id: int = 0):
        self._next_id = first_id

    def next_id(self) -> int:
        shape_id = self._next_id
        self._next_id += 1
        return shape_id

    def shape(self, geom: Geometry, args: ShapeArgs = None) -> Shape:
        return Shape(self.next_id(), geom, args or ShapeArgs())

    def sphere(self, args: ShapeArgs = None) -> Shape:
        return self.shape(geometry.Sphere(), args)

    def plane(self, args: ShapeArgs = None) -> Shape:
        return self.shape(geometry.Plane(), args)

    def cube(self, args: ShapeArgs = None) -> Shape:
        return self.shape(geometry.Cube(), args)

    def cylinder(self, args: ShapeArgs = None, minimum: float = -np.inf,
                 maximum: float = np.inf, closed: bool = False) -> Shape:
        return self.shape(geometry.Cylinder(minimum, maximum, closed), args)

    def cone(self, args: ShapeArgs = None, minimum: float = -np.inf,
             maximum: float = np.inf, closed: bool = False) -> Shape:
        return self.shape(geometry.Cone(minimum, maximum, closed), args)

    def triangle(self, p1, p2, p3, args: ShapeArgs = None) -> Shape:
        return self.shape(geometry.Triangle(p1, p2, p3), args)

    def smooth_triangle(self, p1, p2, p3, n1, n2, n3, args: ShapeArgs = None) -> Shape:
        return self.shape(geometry.SmoothTriangle(p1, p2, p3, n1, n2, n3), args)

    def group(self, children: List[Element], kind: GroupKind = GroupKind.AGGREGATION,
              transform: np.ndarray = IDENTITY, material: Optional[Material] = None) -> Group:
        """Combine children under `kind`, placing them all by `transform`.

        A `material` given here overrides the children's own materials and
        is evaluated in the group's frame.
        """
        if kind is not GroupKind.AGGREGATION and len(children) != 2:
            raise ValueError(f"{kind.name} group needs exactly 2 children, got {len(children)}")

        inv = inverse(transform)
        group = Group(kind, children)
        group.propagate(transform, inv, inv.T, material)

        logger.debug(f"Built {group!r} with bounds {group.bbox!r}")
        return group

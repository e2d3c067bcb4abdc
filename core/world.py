"""
World: lights plus top-level elements, and the recursive shading that
resolves a ray to a colour
"""
import math
import numpy as np
from dataclasses import dataclass, field
from typing import List

from config import FUEL
from core.intersection import Intersections, ShadingState, prepare_state
from core.linalg import dot, magnitude, normalize, point, scaling
from core.materials import BLACK, WHITE, Material, color
from core.ray import Ray
from core.scene import Element, SceneBuilder, ShapeArgs


@dataclass
class PointLight:
    origin: np.ndarray
    intensity: np.ndarray


@dataclass
class World:
    lights: List[PointLight] = field(default_factory=list)
    elements: List[Element] = field(default_factory=list)

    def intersect(self, ray: Ray, ledger: Intersections):
        ledger.clear()
        for element in self.elements:
            element.intersect(ray, ledger)

    def is_shadowed(self, light: PointLight, p: np.ndarray, ledger: Intersections = None) -> bool:
        ledger = ledger if ledger is not None else Intersections()

        to_light = light.origin - p
        distance = magnitude(to_light)
        self.intersect(Ray(p, normalize(to_light)), ledger)
        ledger.sort()

        hit = ledger.hit()
        return hit is not None and hit.shape.casts_shadow and hit.t < distance

    def shade_hit(self, state: ShadingState, fuel: int = FUEL,
                  ledger: Intersections = None) -> np.ndarray:
        ledger = ledger if ledger is not None else Intersections()
        material = state.shape.material

        result = BLACK
        for light in self.lights:
            shadowed = self.is_shadowed(light, state.over_point, ledger)
            surface = state.shape.lighting(light, state.over_point, state.eye,
                                           state.normal, shadowed)
            reflected = self.reflected_color(state, fuel, ledger)
            refracted = self.refracted_color(state, fuel, ledger)

            if material.reflective > 0.0 and material.transparency > 0.0:
                r = state.reflectance
                result = result + surface + reflected * r + refracted * (1.0 - r)
            else:
                result = result + surface + reflected + refracted
        return result

    def reflected_color(self, state: ShadingState, fuel: int = FUEL,
                        ledger: Intersections = None) -> np.ndarray:
        reflective = state.shape.material.reflective
        if fuel <= 0 or reflective == 0.0:
            return BLACK

        ray = Ray(state.over_point, state.reflect)
        return self.color_at(ray, fuel - 1, ledger) * reflective

    def refracted_color(self, state: ShadingState, fuel: int = FUEL,
                        ledger: Intersections = None) -> np.ndarray:
        transparency = state.shape.material.transparency
        if fuel <= 0 or transparency == 0.0:
            return BLACK

        ratio = state.n1 / state.n2
        cos_i = dot(state.eye, state.normal)
        sin2_t = ratio * ratio * (1.0 - cos_i * cos_i)
        if sin2_t > 1.0:
            # Total internal reflection
            return BLACK

        cos_t = math.sqrt(1.0 - sin2_t)
        direction = state.normal * (ratio * cos_i - cos_t) - state.eye * ratio
        ray = Ray(state.under_point, direction)
        return self.color_at(ray, fuel - 1, ledger) * transparency

    def color_at(self, ray: Ray, fuel: int = FUEL, ledger: Intersections = None) -> np.ndarray:
        """Colour seen along `ray`, recursing at most `fuel` bounces.

        `ledger` is scratch space reused by every sub-ray of this call tree;
        it must not be shared with other rays in flight.
        """
        ledger = ledger if ledger is not None else Intersections()
        self.intersect(ray, ledger)
        ledger.sort()

        hit = ledger.hit()
        if hit is None:
            return BLACK

        state = prepare_state(hit, ray, ledger)
        return self.shade_hit(state, fuel, ledger)


def default_world(builder: SceneBuilder) -> World:
    """Two concentric spheres lit from the upper left"""
    light = PointLight(point(-10.0, 10.0, -10.0), WHITE)

    outer = builder.sphere(ShapeArgs(
        material=Material.plain(color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2),
    ))
    inner = builder.sphere(ShapeArgs(transform=scaling(0.5, 0.5, 0.5)))

    return World(lights=[light], elements=[outer, inner])

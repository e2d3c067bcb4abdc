"""
Pinhole camera producing one world-space ray per pixel
"""
import math
import numpy as np

from core.linalg import IDENTITY, inverse, normalize, point
from core.ray import Ray


class Camera:
    """Camera looking down -z in its own frame; `transform` is world-to-camera"""

    def __init__(self, hsize: int, vsize: int, field_of_view: float,
                 transform: np.ndarray = IDENTITY):
        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform
        self.transform_inv = inverse(transform)

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = self.half_width * 2.0 / hsize

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        # Offsets to the pixel centre on the canvas at z = -1
        x_offset = (x + 0.5) * self.pixel_size
        y_offset = (y + 0.5) * self.pixel_size
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = self.transform_inv @ point(world_x, world_y, -1.0)
        origin = self.transform_inv @ point(0.0, 0.0, 0.0)
        return Ray(origin, normalize(pixel - origin))

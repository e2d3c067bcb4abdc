"""
Render driver: turns a camera and a world into an image
"""
import logging
import multiprocessing as mp
import time
import numpy as np
from typing import Dict, List, Tuple

import cv2

from config import RENDER_SETTINGS
from core.camera import Camera
from core.intersection import Intersections
from core.world import World

logger = logging.getLogger(__name__)


def _render_rows(task: Tuple[Camera, World, int, int, int]) -> Tuple[int, np.ndarray]:
    """Render rows [y_start, y_end) with a ledger private to this task"""
    camera, world, y_start, y_end, fuel = task
    ledger = Intersections()

    rows = np.zeros((y_end - y_start, camera.hsize, 3), dtype=np.float64)
    for y in range(y_start, y_end):
        for x in range(camera.hsize):
            ray = camera.ray_for_pixel(x, y)
            rows[y - y_start, x] = world.color_at(ray, fuel, ledger)
    return y_start, rows


class RayTracer:
    """Recursive Whitted-style renderer, serial or over a process pool"""

    def __init__(self, config: Dict = None):
        self.config = dict(RENDER_SETTINGS)
        if config:
            self.config.update(config)

        logger.info(f"RayTracer initialized: fuel {self.config['fuel']}, "
                     f"workers {self.config['workers']}")

    def _chunks(self, camera: Camera, world: World) -> List[Tuple]:
        step = max(1, int(self.config['rows_per_chunk']))
        return [
            (camera, world, y_start, min(y_start + step, camera.vsize), self.config['fuel'])
            for y_start in range(0, camera.vsize, step)
        ]

    def render(self, camera: Camera, world: World) -> np.ndarray:
        """Render to a (vsize, hsize, 3) float image in RGB order"""
        start_time = time.time()
        chunks = self._chunks(camera, world)
        workers = self.config['workers']

        logger.info(f"Rendering {camera.hsize}x{camera.vsize} in {len(chunks)} chunks")

        if workers == 1:
            results = [_render_rows(chunk) for chunk in chunks]
        else:
            with mp.Pool(workers) as pool:
                results = pool.map(_render_rows, chunks)

        image = np.zeros((camera.vsize, camera.hsize, 3), dtype=np.float64)
        for y_start, rows in results:
            image[y_start:y_start + rows.shape[0]] = rows

        logger.info(f"Render finished in {time.time() - start_time:.2f}s")
        return image

    @staticmethod
    def save_image(image: np.ndarray, path: str):
        """Clamp to [0, 1] and write an 8-bit image through OpenCV"""
        image_8bit = (np.clip(image, 0, 1) * 255).astype(np.uint8)
        image_bgr = cv2.cvtColor(image_8bit, cv2.COLOR_RGB2BGR)

        try:
            written = cv2.imwrite(str(path), image_bgr)
        except cv2.error as e:
            raise IOError(f"Could not write image to {path}: {e}") from e
        if not written:
            raise IOError(f"Could not write image to {path}")
        logger.info(f"Image saved to {path}")

from dataclasses import dataclass
from functools import partial
from multiprocessing import Pool
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from phongray.color import Color
from phongray.illumination import calculate_light_intensity
from phongray.ray import Ray
from phongray.renderer import Renderer
from phongray.scene import Scene
from phongray.shapes import Shape


@dataclass
class Hit:
    shape: Shape
    point: NDArray[np.float64]
    distance: float


def shoot_ray(scene: Scene, ray: Ray) -> Optional[Hit]:
    # Find the nearest point of intersection with the scene
    dist_to_nearest = float("inf")
    nearest: Optional[Shape] = None
    for shape in scene.shapes:
        dist = shape.intersect_distance(ray)
        if dist is not None and dist < dist_to_nearest:
            dist_to_nearest = dist
            nearest = shape

    if nearest is None:
        return None

    return Hit(nearest, ray.position_at(dist_to_nearest), dist_to_nearest)


def shade(scene: Scene, hit: Hit) -> Color:
    color = Color.black()
    base = hit.shape.material.color
    for light in scene.lights:
        intensity = calculate_light_intensity(hit.shape, light, scene.camera, hit.point)
        color = color + base.blended(light.color) * intensity

    return color


def get_pixel_color(scene: Scene, x: int, y: int, focal_distance: float) -> Color:
    ray = scene.camera.shoot_ray(x, y, focal_distance)

    hit = shoot_ray(scene, ray)
    if hit is None:
        return Color.black()

    return shade(scene, hit)


def render_row(y: int, scene: Scene, focal_distance: float) -> NDArray[np.uint32]:
    row = np.empty(scene.camera.width, dtype=np.uint32)
    for x in range(scene.camera.width):
        row[x] = get_pixel_color(scene, x, y, focal_distance).argb()

    return row


class CpuRenderer(Renderer):
    def __init__(self, settings):
        super().__init__(settings)
        self.pool = None

    def render_rows(self, scene: Scene, rows: NDArray[np.uint32]):
        height = scene.camera.height
        render = partial(render_row, scene=scene, focal_distance=self.settings.focal_distance)

        if self.settings.workers > 1:
            if self.pool is None:
                self.pool = Pool(self.settings.workers)
            for y, row in enumerate(self.pool.imap(render, range(height))):
                rows[y, :] = row
        else:
            for y in range(height):
                rows[y, :] = render(y)

    def close(self):
        if self.pool is not None:
            self.pool.close()
            self.pool.join()
            self.pool = None

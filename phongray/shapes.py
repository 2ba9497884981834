import math
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from phongray.common import DegenerateGeometryError
from phongray.material import Material
from phongray.ray import Ray
from phongray.vector import as_vector, dot, normalize


class Shape(object):
    def __init__(self, material: Material):
        self.material = material

    def intersect_distance(self, ray: Ray) -> Optional[float]:
        """Distance along ``ray`` to the nearest surface point in front of its origin."""
        raise NotImplementedError

    def normal_at(self, point: NDArray[np.float64]) -> NDArray[np.float64]:
        raise NotImplementedError

    def intersection(self, ray: Ray) -> Optional[NDArray[np.float64]]:
        t = self.intersect_distance(ray)
        if t is None:
            return None

        return ray.position_at(t)


class Sphere(Shape):
    def __init__(self, radius: float, center: NDArray[np.float64], material: Optional[Material] = None):
        super().__init__(material=material if material is not None else Material())

        if not radius > 0:
            raise DegenerateGeometryError(f"sphere radius must be positive, got {radius}")

        self.radius = float(radius)
        self.center = as_vector(center)

    def intersect_distance(self, ray: Ray) -> Optional[float]:
        oc = ray.origin - self.center

        a = dot(ray.direction, ray.direction)  # ray.direction is normalized so this is always 1.0
        b = 2 * dot(ray.direction, oc)
        c = dot(oc, oc) - self.radius ** 2

        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return None

        root = math.sqrt(discriminant)
        t1 = (-b - root) / (2 * a)
        t2 = (-b + root) / (2 * a)

        # t1 <= t2, the first one in front of the origin wins
        if t1 >= 0:
            return t1
        if t2 >= 0:
            return t2
        return None

    def normal_at(self, point: NDArray[np.float64]) -> NDArray[np.float64]:
        return normalize(point - self.center)

    def __repr__(self):
        return f"Sphere(radius={self.radius}, center={tuple(self.center)}, material={self.material})"

import math

import numpy as np
from numpy.typing import NDArray

from phongray.common import DegenerateGeometryError
from phongray.ray import Ray
from phongray.vector import EPSILON, WORLD_X, WORLD_Y, Quaternion, as_vector, cross, magnitude, normalize


def edge_to_edge(coord: float, size: int) -> float:
    """Map pixel index ``coord`` in [0, size) to [-1, 1], first and last pixel on the edges."""
    if size == 1:
        return 0.0
    return (2 * coord - (size - 1)) / (size - 1)


class Camera(object):
    """Pinhole camera projecting a ``width`` x ``height`` viewport.

    Rows grow downwards, the first and last column sit at -fov/2 and +fov/2,
    and the middle pixel of an odd-sized viewport looks straight along
    ``direction``. ``fov`` is the horizontal field of view in degrees; the
    vertical extent follows the viewport aspect ratio.
    """

    def __init__(
        self,
        position: NDArray[np.float64],
        direction: NDArray[np.float64],
        width: int,
        height: int,
        fov: float,
    ):
        self.position = as_vector(position)
        self.direction = direction
        self.width = width
        self.height = height
        self.fov = fov

    @property
    def direction(self) -> NDArray[np.float64]:
        return self._direction

    @direction.setter
    def direction(self, value: NDArray[np.float64]):
        self._direction = normalize(value)

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value: int):
        if value <= 0:
            raise DegenerateGeometryError(f"viewport width must be positive, got {value}")
        self._width = int(value)

    @property
    def height(self) -> int:
        return self._height

    @height.setter
    def height(self, value: int):
        if value <= 0:
            raise DegenerateGeometryError(f"viewport height must be positive, got {value}")
        self._height = int(value)

    @property
    def fov(self) -> float:
        return self._fov

    @fov.setter
    def fov(self, value: float):
        if not 0.0 < value < 180.0:
            raise DegenerateGeometryError(f"fov must lie in (0, 180), got {value}")
        self._fov = float(value)

    def resize(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise DegenerateGeometryError(f"viewport must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    def basis(self):
        """Return the ``(right, up, forward)`` orthonormal frame of the camera."""
        forward = self.direction
        right = cross(WORLD_Y, forward)
        if magnitude(right) < EPSILON:
            # looking straight up or down, world up is useless as a reference
            right = cross(forward, WORLD_X)
            right = cross(right, forward)
        right = normalize(right)
        up = cross(forward, right)
        return right, up, forward

    def half_extents(self, focal_distance: float):
        half_width = focal_distance * math.tan(math.radians(self.fov) / 2)
        return half_width, half_width * self.height / self.width

    def screen_coordinates(self, x: float, y: float):
        """Map pixel ``(x, y)`` to ``(u, v)`` in [-1, 1], v pointing up."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"pixel ({x}, {y}) outside of {self.width}x{self.height} viewport")

        return edge_to_edge(x, self.width), -edge_to_edge(y, self.height)

    def shoot_ray(self, x: float, y: float, focal_distance: float) -> Ray:
        if focal_distance <= 0:
            raise DegenerateGeometryError(f"focal distance must be positive, got {focal_distance}")

        u, v = self.screen_coordinates(x, y)
        right, up, forward = self.basis()
        half_width, half_height = self.half_extents(focal_distance)

        on_plane = forward * focal_distance + right * (u * half_width) + up * (v * half_height)
        return Ray(self.position, on_plane)

    def move(self, offset: NDArray[np.float64]):
        self.position = as_vector(self.position + offset)

    def rotate(self, axis: NDArray[np.float64], degrees: float):
        # direction setter normalizes, so the new value is fully computed first
        self.direction = Quaternion.from_axis_angle(axis, degrees).rotate(self.direction)

    def __repr__(self):
        return (
            f"Camera(position={tuple(self.position)}, direction={tuple(self.direction)}, "
            f"width={self.width}, height={self.height}, fov={self.fov})"
        )

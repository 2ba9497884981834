from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray


class DegenerateGeometryError(ValueError):
    """Raised when a scene is built from geometry the renderer cannot shade."""


@dataclass
class Settings:
    width: int = 600
    height: int = 600
    fov: float = 60.0
    focal_distance: float = 10.0
    move_speed: float = 0.1
    rotate_step: float = 5.0
    light_step: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    intensity_step: float = 0.0
    backend: str = "cpu"
    workers: int = 1
    camera_position: NDArray[np.float64] = field(default_factory=lambda: np.array([0.0, 0.0, 0.0]))
    camera_direction: NDArray[np.float64] = field(default_factory=lambda: np.array([0.0, 0.0, 1.0]))

    def validate(self):
        if self.width <= 0 or self.height <= 0:
            raise DegenerateGeometryError(f"viewport must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.fov < 180.0:
            raise DegenerateGeometryError(f"fov must lie in (0, 180), got {self.fov}")
        if self.focal_distance <= 0:
            raise DegenerateGeometryError(f"focal distance must be positive, got {self.focal_distance}")
        if self.backend not in ("cpu", "numba"):
            raise ValueError(f"unknown backend {self.backend!r}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

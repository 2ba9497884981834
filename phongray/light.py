import numpy as np
from numpy.typing import NDArray

from phongray.color import Color
from phongray.common import DegenerateGeometryError
from phongray.vector import as_vector, dot, vector_to


class Light:
    """Point light. ``intensity`` is scaled by the inverse square of the distance."""

    def __init__(self, position: NDArray[np.float64], intensity: float = 1.0, color: Color = None):
        self.position = position
        self.intensity = intensity
        self.color = color if color is not None else Color.white()

    @property
    def position(self) -> NDArray[np.float64]:
        return self._position

    @position.setter
    def position(self, value: NDArray[np.float64]):
        self._position = as_vector(value)

    @property
    def intensity(self) -> float:
        return self._intensity

    @intensity.setter
    def intensity(self, value: float):
        if value < 0:
            raise DegenerateGeometryError(f"light intensity must be non-negative, got {value}")
        self._intensity = float(value)

    def inverse_square_law(self, point: NDArray[np.float64]) -> float:
        to_light = vector_to(point, self.position)
        distance_squared = dot(to_light, to_light)
        if distance_squared == 0.0:
            raise DegenerateGeometryError(f"light at {tuple(self.position)} coincides with the shaded point")

        return self.intensity / distance_squared

    def __repr__(self):
        return f"Light(position={tuple(self.position)}, intensity={self.intensity}, color={self.color})"

import numpy as np
from numpy.typing import NDArray

from phongray.vector import as_vector, normalize


class Ray(object):
    def __init__(self, origin: NDArray[np.float64], direction: NDArray[np.float64]):
        self.origin = as_vector(origin)
        self.direction = normalize(direction)

    def position_at(self, t: float) -> NDArray[np.float64]:
        return as_vector(self.origin + t * self.direction)

    def __repr__(self):
        return f"Ray(origin={tuple(self.origin)}, direction={tuple(self.direction)})"

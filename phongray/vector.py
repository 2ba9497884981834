import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from phongray.common import DegenerateGeometryError

EPSILON = 1e-12

WORLD_X = np.array([1.0, 0.0, 0.0])
WORLD_Y = np.array([0.0, 1.0, 0.0])
WORLD_X.flags.writeable = False
WORLD_Y.flags.writeable = False


def vector(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> NDArray[np.float64]:
    v = np.array([x, y, z], dtype=np.float64)
    v.flags.writeable = False
    return v


# points and vectors share a representation, the name documents intent
point = vector


def as_vector(values) -> NDArray[np.float64]:
    """Read-only float64 copy of any three-element sequence."""
    v = np.array(values, dtype=np.float64).reshape(3)
    v.flags.writeable = False
    return v


def dot(u: NDArray[np.float64], v: NDArray[np.float64]) -> float:
    return float(u[0] * v[0] + u[1] * v[1] + u[2] * v[2])


def cross(u: NDArray[np.float64], v: NDArray[np.float64]) -> NDArray[np.float64]:
    return vector(
        u[1] * v[2] - u[2] * v[1],
        u[2] * v[0] - u[0] * v[2],
        u[0] * v[1] - u[1] * v[0],
    )


def magnitude(v: NDArray[np.float64]) -> float:
    return math.sqrt(dot(v, v))


def normalize(v: NDArray[np.float64]) -> NDArray[np.float64]:
    length = magnitude(v)
    if length < EPSILON or not math.isfinite(length):
        raise DegenerateGeometryError(f"cannot normalize vector {tuple(v)}")

    return as_vector(v / length)


def vector_to(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Vector pointing from point ``a`` to point ``b``."""
    return as_vector(b - a)


def mirror(v: NDArray[np.float64], n: NDArray[np.float64]) -> NDArray[np.float64]:
    """Reflect ``v`` across the plane whose unit normal is ``n``."""
    return as_vector(v - 2 * dot(v, n) * n)


@dataclass(frozen=True)
class Quaternion:
    w: float
    x: float
    y: float
    z: float

    @classmethod
    def from_axis_angle(cls, axis: NDArray[np.float64], degrees: float) -> "Quaternion":
        axis = normalize(axis)
        half = math.radians(degrees) / 2
        s = math.sin(half)
        return cls(math.cos(half), axis[0] * s, axis[1] * s, axis[2] * s)

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        return Quaternion(
            self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
            self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
            self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
            self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
        )

    def conjugate(self) -> "Quaternion":
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def rotate(self, v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Rotate ``v`` by this (unit) quaternion: q * v * q^-1."""
        r = self * Quaternion(0.0, v[0], v[1], v[2]) * self.conjugate()
        return vector(r.x, r.y, r.z)

import math
from typing import Tuple

import numba
import numpy as np
from numpy.typing import NDArray

from phongray.common import DegenerateGeometryError
from phongray.renderer import Renderer
from phongray.scene import Scene
from phongray.shapes import Sphere

SPHERE_FIELDS = 12  # center(3), radius, ambient, diffuse, specular, shininess, rgba(4)
LIGHT_FIELDS = 8  # position(3), intensity, rgba(4)
CAMERA_FIELDS = 15  # position(3), right(3), up(3), forward(3), half_width, half_height, focal_distance

jit_device_function = numba.njit(error_model="numpy")


@jit_device_function
def dot(ux: float, uy: float, uz: float, vx: float, vy: float, vz: float) -> float:
    return ux * vx + uy * vy + uz * vz


@jit_device_function
def normalize(x: float, y: float, z: float) -> Tuple[float, float, float]:
    # a zero vector turns into NaN here and is reported after the scan
    length = math.sqrt(dot(x, y, z, x, y, z))
    return x / length, y / length, z / length


@jit_device_function
def clip(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


@jit_device_function
def edge_to_edge(coord: int, size: int) -> float:
    if size == 1:
        return 0.0
    return (2 * coord - (size - 1)) / (size - 1)


@jit_device_function
def intersect(
    sphere: NDArray[np.float64],
    ox: float, oy: float, oz: float,
    dx: float, dy: float, dz: float,
) -> float:
    ocx = ox - sphere[0]
    ocy = oy - sphere[1]
    ocz = oz - sphere[2]

    a = dot(dx, dy, dz, dx, dy, dz)
    b = 2 * dot(dx, dy, dz, ocx, ocy, ocz)
    c = dot(ocx, ocy, ocz, ocx, ocy, ocz) - sphere[3] ** 2

    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return math.inf

    root = math.sqrt(discriminant)
    t1 = (-b - root) / (2 * a)
    t2 = (-b + root) / (2 * a)
    if t1 >= 0:
        return t1
    if t2 >= 0:
        return t2
    return math.inf


@jit_device_function
def light_intensity(
    sphere: NDArray[np.float64],
    light: NDArray[np.float64],
    camera: NDArray[np.float64],
    px: float, py: float, pz: float,
) -> float:
    nx, ny, nz = normalize(px - sphere[0], py - sphere[1], pz - sphere[2])

    tlx = light[0] - px
    tly = light[1] - py
    tlz = light[2] - pz
    lx, ly, lz = normalize(tlx, tly, tlz)

    angle = dot(nx, ny, nz, lx, ly, lz)
    if angle < 0:
        return 0.0

    k = 2 * dot(lx, ly, lz, nx, ny, nz)
    rx = lx - k * nx
    ry = ly - k * ny
    rz = lz - k * nz

    vx, vy, vz = normalize(px - camera[0], py - camera[1], pz - camera[2])
    specular_angle = dot(rx, ry, rz, vx, vy, vz)
    specular = specular_angle ** sphere[7] if specular_angle > 0 else 0.0

    intensity = sphere[4]
    intensity += sphere[5] * angle
    intensity += sphere[6] * specular

    attenuation = light[3] / dot(tlx, tly, tlz, tlx, tly, tlz)
    value = intensity * attenuation
    if not math.isfinite(value):
        return math.nan
    return min(1.0, value)


@jit_device_function
def get_pixel_color(
    spheres: NDArray[np.float64],
    lights: NDArray[np.float64],
    camera: NDArray[np.float64],
    x: int,
    y: int,
    width: int,
    height: int,
) -> Tuple[float, float, float]:
    u = edge_to_edge(x, width)
    v = -edge_to_edge(y, height)

    su = u * camera[12]
    sv = v * camera[13]
    focal = camera[14]
    dx, dy, dz = normalize(
        camera[9] * focal + camera[3] * su + camera[6] * sv,
        camera[10] * focal + camera[4] * su + camera[7] * sv,
        camera[11] * focal + camera[5] * su + camera[8] * sv,
    )
    ox = camera[0]
    oy = camera[1]
    oz = camera[2]

    dist_to_nearest = math.inf
    nearest = -1
    for i in range(spheres.shape[0]):
        dist = intersect(spheres[i], ox, oy, oz, dx, dy, dz)
        if dist < dist_to_nearest:
            dist_to_nearest = dist
            nearest = i

    if nearest == -1:
        return 0.0, 0.0, 0.0

    sphere = spheres[nearest]
    px = ox + dist_to_nearest * dx
    py = oy + dist_to_nearest * dy
    pz = oz + dist_to_nearest * dz

    r = 0.0
    g = 0.0
    b = 0.0
    for j in range(lights.shape[0]):
        light = lights[j]
        intensity = light_intensity(sphere, light, camera, px, py, pz)
        if not math.isfinite(intensity):
            return math.nan, math.nan, math.nan
        # blend base color with light color, scale, then add with saturation
        r = clip(r + clip(clip((sphere[8] + light[4]) / 2, 0.0, 1.0) * intensity, 0.0, 1.0), 0.0, 1.0)
        g = clip(g + clip(clip((sphere[9] + light[5]) / 2, 0.0, 1.0) * intensity, 0.0, 1.0), 0.0, 1.0)
        b = clip(b + clip(clip((sphere[10] + light[6]) / 2, 0.0, 1.0) * intensity, 0.0, 1.0), 0.0, 1.0)

    return r, g, b


@numba.njit(parallel=True, error_model="numpy")
def generate_image(
    image: NDArray[np.float64],
    spheres: NDArray[np.float64],
    lights: NDArray[np.float64],
    camera: NDArray[np.float64],
):
    height, width, _ = image.shape

    for y in numba.prange(height):
        for x in range(width):
            r, g, b = get_pixel_color(spheres, lights, camera, x, y, width, height)
            image[y, x, 0] = r
            image[y, x, 1] = g
            image[y, x, 2] = b


def scene_to_arrays(scene: Scene, focal_distance: float):
    """Pack ``scene`` into the flat arrays read by the kernel.

    The arrays are copies, so they double as the frozen state of the frame.
    """
    spheres = np.zeros((len(scene.shapes), SPHERE_FIELDS), dtype=np.float64)
    for i, s in enumerate(scene.shapes):
        m = s.material
        spheres[i] = (
            *s.center, s.radius,
            m.ambient, m.diffuse, m.specular, m.shininess,
            m.color.r, m.color.g, m.color.b, m.color.a,
        )

    lights = np.zeros((len(scene.lights), LIGHT_FIELDS), dtype=np.float64)
    for i, light in enumerate(scene.lights):
        c = light.color
        lights[i] = (*light.position, light.intensity, c.r, c.g, c.b, c.a)

    camera = scene.camera
    right, up, forward = camera.basis()
    half_width, half_height = camera.half_extents(focal_distance)
    packed_camera = np.array(
        (*camera.position, *right, *up, *forward, half_width, half_height, focal_distance),
        dtype=np.float64,
    )

    return spheres, lights, packed_camera


def pack_argb(image: NDArray[np.float64]) -> NDArray[np.uint32]:
    channels = np.rint(image * 255).astype(np.uint32)
    return (
        np.uint32(0xFF000000)
        | (channels[..., 0] << np.uint32(16))
        | (channels[..., 1] << np.uint32(8))
        | channels[..., 2]
    )


class NumbaRenderer(Renderer):
    def render_rows(self, scene: Scene, rows: NDArray[np.uint32]):
        for shape in scene.shapes:
            if not isinstance(shape, Sphere):
                raise TypeError(f"numba backend only renders spheres, got {type(shape).__name__}")

        if self.settings.focal_distance <= 0:
            raise DegenerateGeometryError(f"focal distance must be positive, got {self.settings.focal_distance}")

        spheres, lights, camera = scene_to_arrays(scene, self.settings.focal_distance)

        image = np.zeros((scene.camera.height, scene.camera.width, 3), dtype=np.float64)
        generate_image(image, spheres, lights, camera)

        if not np.all(np.isfinite(image)):
            raise DegenerateGeometryError("frame contains non-finite colors, check for lights on a surface")

        rows[:, :] = pack_argb(image)

import numpy as np
from numpy.typing import NDArray

from phongray.camera import Camera
from phongray.light import Light
from phongray.shapes import Shape
from phongray.vector import dot, mirror, normalize, vector_to


def calculate_light_intensity(
    shape: Shape,
    light: Light,
    camera: Camera,
    intersection_point: NDArray[np.float64],
) -> float:
    """Phong intensity (ambient + diffuse + specular) of ``light`` at a point of ``shape``.

    The result is attenuated by the inverse square law and capped at 1. A light
    behind the surface contributes nothing. Other shapes are never tested for
    occlusion.
    """
    material = shape.material
    normal = shape.normal_at(intersection_point)
    to_light = normalize(vector_to(intersection_point, light.position))

    angle = dot(normal, to_light)
    if angle < 0:
        return 0.0

    reflection = mirror(to_light, normal)
    specular_angle = dot(reflection, normalize(vector_to(camera.position, intersection_point)))
    specular = specular_angle ** material.shininess if specular_angle > 0 else 0.0

    intensity = material.ambient
    intensity += material.diffuse * angle
    intensity += material.specular * specular

    return min(1.0, intensity * light.inverse_square_law(intersection_point))

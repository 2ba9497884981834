import numpy as np
import pytest

from phongray.camera import Camera
from phongray.color import Color
from phongray.common import Settings
from phongray.light import Light
from phongray.material import Material
from phongray.scene import Scene
from phongray.shapes import Sphere


def make_camera(width=21, height=21, fov=60.0):
    return Camera(np.array([0.0, 0.0, 0.0]), np.array([0.0, 0.0, 1.0]), width, height, fov)


def make_scene(shapes, lights=None, width=21, height=21):
    if lights is None:
        lights = [Light(np.array([0.0, 0.0, 0.0]), intensity=1.0)]
    return Scene(camera=make_camera(width, height), shapes=list(shapes), lights=list(lights))


@pytest.fixture
def settings():
    return Settings(width=21, height=21)


@pytest.fixture
def front_sphere():
    return Sphere(1.0, np.array([0.0, 0.0, 3.0]), Material(color=Color.blue()))


@pytest.fixture
def single_sphere_scene(front_sphere):
    return make_scene([front_sphere])

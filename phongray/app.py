import numpy as np

from phongray.camera import Camera
from phongray.color import Color
from phongray.common import Settings
from phongray.controller import Controller
from phongray.light import Light
from phongray.log import get_logger
from phongray.material import Material
from phongray.renderer import framebuffer_to_rgb, make_renderer, new_framebuffer
from phongray.scene import Scene
from phongray.shapes import Sphere

logger = get_logger(__name__)


class App:
    def __init__(self, settings: Settings, scene: Scene = None):
        settings.validate()
        self.settings = settings

        self.scene = scene if scene is not None else self.create_world()
        self.renderer = make_renderer(settings)
        self.framebuffer = new_framebuffer(self.scene.camera.width, self.scene.camera.height)
        self.controller = Controller(self)
        self.frames = 0

    @property
    def width(self) -> int:
        return self.scene.camera.width

    @property
    def height(self) -> int:
        return self.scene.camera.height

    def frame(self):
        self.renderer.render(self.scene, self.framebuffer)
        self.frames += 1

    def resize(self, width: int, height: int):
        # validates before touching anything, the camera keeps its pose
        self.scene.camera.resize(width, height)
        self.framebuffer = new_framebuffer(width, height)

    def image(self) -> np.ndarray:
        return framebuffer_to_rgb(self.framebuffer, self.width, self.height)

    def close(self):
        self.renderer.close()

    def create_world(self) -> Scene:
        camera = Camera(
            self.settings.camera_position,
            self.settings.camera_direction,
            self.settings.width,
            self.settings.height,
            self.settings.fov,
        )

        sphere = Sphere(
            radius=1.0,
            center=np.array([1.0, 0.0, 3.0]),
            material=Material(ambient=0.3, diffuse=1.0, specular=0.8, shininess=20.0, color=Color.blue()),
        )

        light = Light(
            position=np.array([1.0, 1.4, 0.0]),
            intensity=5.0,
            color=Color.white(),
        )

        logger.info("created default scene with %d sphere(s) and %d light(s)", 1, 1)
        return Scene(camera=camera, shapes=[sphere], lights=[light])

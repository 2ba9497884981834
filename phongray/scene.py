import copy
from dataclasses import dataclass, field
from typing import List

from phongray.camera import Camera
from phongray.light import Light
from phongray.shapes import Shape


@dataclass
class Scene:
    camera: Camera
    shapes: List[Shape] = field(default_factory=list)
    lights: List[Light] = field(default_factory=list)

    def snapshot(self) -> "Scene":
        """Deep copy used as the frozen state of a single frame."""
        return copy.deepcopy(self)

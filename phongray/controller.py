from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np

from phongray.common import Settings
from phongray.scene import Scene
from phongray.vector import EPSILON, WORLD_X, WORLD_Y, as_vector, cross, magnitude, normalize
from phongray.log import get_logger

logger = get_logger(__name__)


class Command(Enum):
    MOVE_FORWARD = "move_forward"
    MOVE_BACK = "move_back"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    ROTATE_UP = "rotate_up"
    ROTATE_DOWN = "rotate_down"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    EXIT = "exit"


# matplotlib key names
KEY_BINDINGS = {
    "w": Command.MOVE_FORWARD,
    "s": Command.MOVE_BACK,
    "a": Command.MOVE_LEFT,
    "d": Command.MOVE_RIGHT,
    " ": Command.MOVE_UP,
    "shift": Command.MOVE_DOWN,
    "up": Command.ROTATE_UP,
    "down": Command.ROTATE_DOWN,
    "left": Command.ROTATE_LEFT,
    "right": Command.ROTATE_RIGHT,
    "escape": Command.EXIT,
    "q": Command.EXIT,
}


@dataclass(frozen=True)
class Redraw:
    pass


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Input:
    command: Command


@dataclass(frozen=True)
class Tick:
    pass


Event = Union[Redraw, Resize, Input, Tick]


def horizontal_right(direction):
    right = cross(WORLD_Y, direction)
    if magnitude(right) < EPSILON:
        return WORLD_X
    return normalize(right)


def apply_command(scene: Scene, command: Command, settings: Settings) -> bool:
    """Mutate the camera for ``command``. Returns whether the scene changed."""
    camera = scene.camera
    speed = settings.move_speed
    step = settings.rotate_step

    if command is Command.MOVE_FORWARD:
        camera.move(camera.direction * speed)
    elif command is Command.MOVE_BACK:
        camera.move(camera.direction * -speed)
    elif command is Command.MOVE_RIGHT:
        camera.move(horizontal_right(camera.direction) * speed)
    elif command is Command.MOVE_LEFT:
        camera.move(horizontal_right(camera.direction) * -speed)
    elif command is Command.MOVE_UP:
        camera.move(WORLD_Y * speed)
    elif command is Command.MOVE_DOWN:
        camera.move(WORLD_Y * -speed)
    # positive angles about +X tilt the view down, about +Y turn it right
    elif command is Command.ROTATE_UP:
        camera.rotate(WORLD_X, -step)
    elif command is Command.ROTATE_DOWN:
        camera.rotate(WORLD_X, step)
    elif command is Command.ROTATE_LEFT:
        camera.rotate(WORLD_Y, -step)
    elif command is Command.ROTATE_RIGHT:
        camera.rotate(WORLD_Y, step)
    elif command is Command.EXIT:
        return False
    else:
        raise ValueError(f"unknown command {command!r}")

    return True


def animate_lights(scene: Scene, settings: Settings) -> bool:
    """Advance every light by one animation step. Returns whether anything moved."""
    step = as_vector(settings.light_step)
    if not np.any(step) and settings.intensity_step == 0:
        return False

    for light in scene.lights:
        light.position = light.position + step
        light.intensity = max(0.0, light.intensity + settings.intensity_step)

    return True


class Controller(object):
    """Consumes events one at a time and redraws once after every mutation."""

    def __init__(self, app):
        self.app = app
        self.closed = False

    def dispatch(self, event: Event) -> bool:
        """Handle ``event``. Returns True when a frame was rendered."""
        if self.closed:
            return False

        if isinstance(event, Redraw):
            redraw = True
        elif isinstance(event, Resize):
            logger.info("resize to %dx%d", event.width, event.height)
            self.app.resize(event.width, event.height)
            redraw = True
        elif isinstance(event, Input):
            logger.info("command %s", event.command.value)
            if event.command is Command.EXIT:
                self.closed = True
                return False
            redraw = apply_command(self.app.scene, event.command, self.app.settings)
        elif isinstance(event, Tick):
            redraw = animate_lights(self.app.scene, self.app.settings)
        else:
            raise TypeError(f"unknown event {event!r}")

        if redraw:
            self.app.frame()
        return redraw

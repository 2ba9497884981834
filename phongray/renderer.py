import time

import numpy as np
from numpy.typing import NDArray

from phongray.common import Settings
from phongray.log import get_logger
from phongray.scene import Scene

logger = get_logger(__name__)


def new_framebuffer(width: int, height: int) -> NDArray[np.uint32]:
    return np.zeros(width * height, dtype=np.uint32)


def as_rows(framebuffer: NDArray[np.uint32], width: int, height: int) -> NDArray[np.uint32]:
    """``(height, width)`` view of a row-major framebuffer."""
    if framebuffer.dtype != np.uint32:
        raise TypeError(f"framebuffer must hold uint32 pixels, got {framebuffer.dtype}")
    if framebuffer.size != width * height:
        raise ValueError(f"framebuffer holds {framebuffer.size} pixels, viewport needs {width * height}")

    rows = framebuffer.reshape(height, width)
    if not np.shares_memory(rows, framebuffer):
        raise ValueError("framebuffer must be contiguous")
    return rows


def framebuffer_to_rgb(framebuffer: NDArray[np.uint32], width: int, height: int) -> NDArray[np.uint8]:
    rows = as_rows(framebuffer, width, height)
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[..., 0] = (rows >> 16) & 0xFF
    image[..., 1] = (rows >> 8) & 0xFF
    image[..., 2] = rows & 0xFF
    return image


class Renderer:
    def __init__(self, settings: Settings):
        self.settings = settings

    def render(self, scene: Scene, framebuffer: NDArray[np.uint32]):
        # input handlers may mutate the live scene while a frame is in flight
        frame = scene.snapshot()
        camera = frame.camera
        rows = as_rows(framebuffer, camera.width, camera.height)

        start = time.perf_counter()
        self.render_rows(frame, rows)
        logger.debug(
            "%s rendered %dx%d frame in %.3fs",
            type(self).__name__,
            camera.width,
            camera.height,
            time.perf_counter() - start,
        )

    def render_rows(self, scene: Scene, rows: NDArray[np.uint32]):
        raise NotImplementedError

    def close(self):
        pass


def make_renderer(settings: Settings) -> Renderer:
    if settings.backend == "numba":
        from phongray.numba_rt import NumbaRenderer

        return NumbaRenderer(settings)

    from phongray.cpu_rt import CpuRenderer

    return CpuRenderer(settings)

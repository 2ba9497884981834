import argparse
import sys

import matplotlib.pyplot as plt
import numpy as np

from phongray.app import App
from phongray.common import DegenerateGeometryError, Settings
from phongray.controller import Tick
from phongray.log import get_logger, set_level

logger = get_logger("phongray.main")


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--backend", choices=["cpu", "numba"], default="cpu")
    parser.add_argument("--workers", type=int, default=1, help="Processes used by the cpu backend")

    parser.add_argument("--width", type=int, default=200, help="Viewport width")
    parser.add_argument("--height", type=int, default=200, help="Viewport height")
    parser.add_argument("--fov", type=float, default=60.0, help="Horizontal field of view in degrees")
    parser.add_argument("--pixel-scale", type=int, default=3, help="Window pixels per rendered pixel")

    parser.add_argument("--animate", action="store_true", help="Move the light every frame")
    parser.add_argument("--frames", type=int, default=0, help="Render this many frames headless and exit")
    parser.add_argument("--output", default="frame.png", help="Image written after a headless run")
    parser.add_argument("--log-level", default="INFO")

    args = parser.parse_args()
    set_level(args.log_level)

    settings = Settings(
        width=args.width,
        height=args.height,
        fov=args.fov,
        backend=args.backend,
        workers=args.workers,
    )
    if args.animate:
        settings.light_step = np.array([-0.05, 0.0, 0.0])
        settings.intensity_step = 0.01

    app = None
    try:
        app = App(settings)
        if args.frames > 0:
            app.frame()
            for _ in range(args.frames - 1):
                if not app.controller.dispatch(Tick()):
                    app.frame()
            plt.imsave(args.output, app.image())
            logger.info("wrote %d frame(s), last one saved to %s", app.frames, args.output)
        else:
            from phongray.viewer import Viewer

            Viewer(app, pixel_scale=args.pixel_scale, tick_interval=50 if args.animate else 0).run()
    except DegenerateGeometryError as e:
        logger.error("invalid scene: %s", e)
        sys.exit(1)
    finally:
        if app is not None:
            app.close()


if __name__ == "__main__":
    main()

import matplotlib.pyplot as plt

from phongray.app import App
from phongray.controller import KEY_BINDINGS, Input, Redraw, Resize, Tick
from phongray.log import get_logger

logger = get_logger(__name__)


class Viewer:
    """Shows an ``App`` framebuffer in a matplotlib window and feeds it events.

    ``pixel_scale`` window pixels make up one rendered pixel, so resizing the
    window to ``w`` x ``h`` renders ``w // pixel_scale`` x ``h // pixel_scale``.
    """

    def __init__(self, app: App, pixel_scale: int = 1, tick_interval: int = 0):
        self.app = app
        self.pixel_scale = max(1, pixel_scale)

        # matplotlib binds some of our keys (s saves, left goes back, ...)
        self.keymaps = {k: list(v) for k, v in plt.rcParams.items() if k.startswith("keymap.")}
        for name in self.keymaps:
            plt.rcParams[name] = [key for key in plt.rcParams[name] if key not in KEY_BINDINGS]

        self.figure, self.axes = plt.subplots()
        self.figure.subplots_adjust(left=0, right=1, bottom=0, top=1)
        self.axes.set_axis_off()
        self.artist = self.axes.imshow(app.image(), interpolation="nearest")

        canvas = self.figure.canvas
        canvas.mpl_connect("key_press_event", self.on_key_press)
        canvas.mpl_connect("resize_event", self.on_resize)

        self.timer = None
        if tick_interval > 0:
            self.timer = canvas.new_timer(interval=tick_interval)
            self.timer.add_callback(self.handle, Tick())

        self.handle(Redraw())

    def handle(self, event):
        if self.app.controller.dispatch(event):
            self.present()
        if self.app.controller.closed:
            self.close()

    def present(self):
        self.artist.set_data(self.app.image())
        self.artist.set_extent((-0.5, self.app.width - 0.5, self.app.height - 0.5, -0.5))
        self.figure.canvas.draw_idle()

    def on_key_press(self, event):
        command = KEY_BINDINGS.get(event.key)
        if command is None:
            return
        self.handle(Input(command))

    def on_resize(self, event):
        width = int(event.width) // self.pixel_scale
        height = int(event.height) // self.pixel_scale
        if width <= 0 or height <= 0:
            return
        if (width, height) == (self.app.width, self.app.height):
            return
        self.handle(Resize(width, height))

    def close(self):
        if self.timer is not None:
            self.timer.stop()
        plt.close(self.figure)

        if self.keymaps is not None:
            plt.rcParams.update(self.keymaps)
            self.keymaps = None
            self.app.close()

    def run(self):
        if self.timer is not None:
            self.timer.start()
        logger.info("viewer started, %d frame(s) rendered so far", self.app.frames)
        plt.show(block=True)
        self.close()

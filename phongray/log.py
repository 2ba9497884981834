import logging

ROOT_LOGGER = "phongray"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name=ROOT_LOGGER):
    # only the package root owns a handler, module loggers propagate to it
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(ch)
    return logging.getLogger(name)


def set_level(level):
    """Apply ``level`` (a name such as ``"DEBUG"`` or a number) to all phongray loggers."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    get_logger().setLevel(level)

"""Logging setup driven by ``Settings``."""

import logging
from pathlib import Path

from .config import Settings, settings as default_settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(config: Settings = default_settings) -> None:
    """Configure the root logger and the ``country_api`` logger.

    ``config.debug`` forces DEBUG for the service's own loggers while
    the root logger stays at ``config.log_level``, so third-party
    libraries do not flood the output.  ``config.log_file`` adds a
    file handler next to the console one.  Calling this again once
    handlers exist is a no-op.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(Path(config.log_file).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if config.debug:
        logging.getLogger("country_api").setLevel(logging.DEBUG)

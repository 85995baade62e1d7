"""Central logging configuration for the package."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-level logger."""

    return logging.getLogger(name)


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Install a root handler once; later calls only adjust the level."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_FORMAT)
    else:
        root.setLevel(level)

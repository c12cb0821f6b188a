"""Logging helpers for iCrop.

Library modules log through ``logging.getLogger(__name__)`` and never touch
handlers.  Host applications that want the editor's messages on a console call
:func:`get_logger` once (or :func:`set_verbose` while debugging alignment).
"""

from __future__ import annotations

import logging
from typing import Optional, TextIO

PACKAGE_LOGGER_NAME = "iCrop"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER: Optional[logging.Handler] = None


def get_logger(name: str | None = None, *, stream: TextIO | None = None) -> logging.Logger:
    """Return the package logger (or the child *name*) with a console handler.

    The stream handler is attached to the package logger the first time this
    is called; later calls reuse it, so repeated calls never duplicate output.
    """

    global _HANDLER
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _HANDLER is None:
        _HANDLER = logging.StreamHandler(stream)
        _HANDLER.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(_HANDLER)
        if package_logger.level == logging.NOTSET:
            package_logger.setLevel(logging.INFO)
    if not name or name == PACKAGE_LOGGER_NAME:
        return package_logger
    if name.startswith(PACKAGE_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return package_logger.getChild(name)


def set_verbose(enabled: bool) -> None:
    """Switch the package logger between ``DEBUG`` and ``INFO``."""

    get_logger().setLevel(logging.DEBUG if enabled else logging.INFO)


def reset_logging() -> None:
    """Detach the handler installed by :func:`get_logger`."""

    global _HANDLER
    if _HANDLER is not None:
        logging.getLogger(PACKAGE_LOGGER_NAME).removeHandler(_HANDLER)
        _HANDLER = None

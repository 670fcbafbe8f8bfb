"""Logging configuration for the application process."""

from __future__ import annotations

import logging
import os

from flask import Flask

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_PREFIX = "venue-tracker."


def _resolve_level(app: Flask) -> int:
    configured = app.config.get("LOG_LEVEL")
    if configured:
        level = logging.getLevelName(str(configured).upper())
        if isinstance(level, int):
            return level
    if app.config.get("APP_ENV") == "development":
        return logging.DEBUG
    return logging.INFO


def _named(handler: logging.Handler, name: str, level: int) -> logging.Handler:
    handler.set_name(_HANDLER_PREFIX + name)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def configure_logging(app: Flask) -> None:
    """Attach console (and optional file) handlers to the root logger.

    Only handlers installed by a previous call are replaced, so repeated
    app creation does not duplicate output or drop foreign handlers.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        if (handler.get_name() or "").startswith(_HANDLER_PREFIX):
            root.removeHandler(handler)
            handler.close()

    level = _resolve_level(app)
    root.setLevel(level)
    root.addHandler(_named(logging.StreamHandler(), "console", level))

    log_dir = app.config.get("LOG_DIR")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        root.addHandler(
            _named(logging.FileHandler(os.path.join(log_dir, "error.log")), "error", logging.ERROR)
        )
        root.addHandler(
            _named(logging.FileHandler(os.path.join(log_dir, "combined.log")), "combined", level)
        )

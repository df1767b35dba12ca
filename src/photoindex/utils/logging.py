"""Logging helpers shared across photoindex modules."""

from __future__ import annotations

import logging

from ..config import DEFAULT_LOG_LEVEL

ROOT_LOGGER_NAME = "photoindex"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger inside the ``photoindex`` namespace."""

    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: str | int = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling this more than once only adjusts the level; handlers are not
    duplicated.
    """

    logger = get_logger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.getLevelName(DEFAULT_LOG_LEVEL)
    logger.setLevel(level)
    if not any(getattr(handler, "_photoindex", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._photoindex = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]

"""Runtime logging helpers."""

from __future__ import annotations

import sys

from loguru import logger

_FORMAT = "{time:HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"
_CONFIGURED_LEVEL: str | None = None


def configure_logging(level: str = "WARNING") -> None:
    """Install a stderr sink at ``level`` and enable the package's log records.

    The package disables its own logger on import so library users only see
    records after opting in through this function.
    """

    global _CONFIGURED_LEVEL
    level = level.upper()
    if level == _CONFIGURED_LEVEL:
        return

    logger.remove()
    logger.add(sys.stderr, level=level, format=_FORMAT, backtrace=False, diagnose=False)
    logger.enable("fullsub")

    _CONFIGURED_LEVEL = level


__all__ = ["configure_logging"]

"""Runtime logging helpers."""

from __future__ import annotations

import os
import sys

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}"
_CONFIGURED_LEVEL: str | None = None


def configure_logging(level: str | None = None) -> None:
    """Configure process-level logging once per level."""

    global _CONFIGURED_LEVEL
    resolved = (level or os.getenv("PARLEY_LOG_LEVEL", "INFO")).upper()
    if resolved == _CONFIGURED_LEVEL:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved,
        format=_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    _CONFIGURED_LEVEL = resolved

"""
Unified log format with importance (0-10) for client and CLI output.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

# Default importance (0-10) per standard level when not passed via extra
LEVEL_TO_IMPORTANCE = {
    "DEBUG": 2,
    "INFO": 4,
    "WARNING": 6,
    "ERROR": 8,
    "CRITICAL": 10,
}

UNIFIED_DATE_FMT = "%Y-%m-%d %H:%M:%S"
UNIFIED_FORMAT_STR = "%(asctime)s | %(levelname)-8s | %(importance)s | %(name)s | %(message)s"

PACKAGE_LOGGER = "vector_set_client"


def importance_from_level(level_name: str) -> int:
    """Return importance 0-10 for a standard log level name. Returns 4 for unknown."""
    return LEVEL_TO_IMPORTANCE.get((level_name or "").strip().upper(), 4)


def _set_importance_if_missing(record: logging.LogRecord) -> None:
    if getattr(record, "importance", None) is None:
        record.importance = importance_from_level(record.levelname)


class UnifiedFormatter(logging.Formatter):
    """
    Formatter that outputs: timestamp | level | importance | logger | message.
    Importance comes from ``extra={"importance": n}`` or is derived from level.
    """

    def format(self, record: logging.LogRecord) -> str:
        _set_importance_if_missing(record)
        return super().format(record)


def create_unified_formatter(
    fmt: str = UNIFIED_FORMAT_STR,
    datefmt: str = UNIFIED_DATE_FMT,
) -> UnifiedFormatter:
    """Create a UnifiedFormatter with project default format and date format."""
    return UnifiedFormatter(fmt=fmt, datefmt=datefmt)


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    **handler_kwargs: Any,
) -> logging.Logger:
    """
    Attach a unified-format handler to the package logger.

    Repeated calls replace the handler installed by the previous call
    instead of stacking handlers.

    Args:
        level: Log level for the package logger
        log_file: Write to this file instead of stderr
        **handler_kwargs: Extra arguments for logging.FileHandler

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_vset_unified", False):
            logger.removeHandler(handler)
            handler.close()
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(
            str(log_file), encoding="utf-8", **handler_kwargs
        )
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(create_unified_formatter())
    handler._vset_unified = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level if isinstance(level, int) else level.upper())
    return logger

"""Structured logging configuration.

This module initializes structlog with a stable JSON format on stderr
so command output on stdout stays machine-readable.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL

_configured_level: str | None = None


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog processors and level filtering.

    Args:
        level: Minimum level name, e.g. ``INFO``.
    """
    global _configured_level
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
    _configured_level = level


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger bound to the module name.
    """
    if _configured_level is None:
        configure_logging()
    return structlog.get_logger(name)


def _stderr_logger_factory(*_args: Any) -> Any:
    return structlog.PrintLogger(file=sys.stderr)


def _level_number(level: str) -> int:
    resolved = logging.getLevelName(level.upper())
    if isinstance(resolved, int):
        return resolved
    return logging.WARNING

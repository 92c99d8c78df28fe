"""Structured logging configuration.

This module initializes loggers that emit one JSON object per event.
It prefers structlog and falls back to standard logging if absent.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any

_LOG_LEVEL_ENV = "SMARTERP_LOG_LEVEL"
_configured = False


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog or stdlib logger with structured output.
    """
    try:
        import structlog
    except ImportError:
        return _get_standard_logger(name)

    global _configured
    if not _configured:
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(sort_keys=True),
            ],
            logger_factory=structlog.PrintLoggerFactory(sys.stderr),
            wrapper_class=structlog.make_filtering_bound_logger(_resolve_log_level()),
            cache_logger_on_first_use=True,
        )
        _configured = True
    return structlog.get_logger(name)


def _resolve_log_level() -> int:
    """Read the minimum log level from the environment.

    Unknown level names fall back to INFO.
    """
    level_name = os.getenv(_LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def _get_standard_logger(name: str) -> Any:
    """Create a stdlib logger fallback.

    Args:
        name: Logger name.

    Returns:
        Configured standard logger.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_resolve_log_level())
    return _StructuredStandardLogger(logger)


class _StructuredStandardLogger:
    """Stdlib logger adapter that accepts structured keyword fields."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def debug(self, event: str, **fields: object) -> None:
        """Log a debug-level structured event."""
        self._logger.debug(_format_event(event, fields))

    def info(self, event: str, **fields: object) -> None:
        """Log an info-level structured event."""
        self._logger.info(_format_event(event, fields))

    def warning(self, event: str, **fields: object) -> None:
        """Log a warning-level structured event."""
        self._logger.warning(_format_event(event, fields))

    def error(self, event: str, **fields: object) -> None:
        """Log an error-level structured event."""
        self._logger.error(_format_event(event, fields))


def _format_event(event: str, fields: dict[str, object]) -> str:
    """Render a structured event line for standard logging."""
    if not fields:
        return event
    payload = {"event": event, **fields}
    return json.dumps(payload, sort_keys=True, default=str)

"""Structured logging setup.

Uses structlog for structured logging on top of stdlib ``logging``, so
module-level ``logging.getLogger(__name__)`` loggers and structlog
loggers share one output stream.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from ..core.config import ObservabilityConfig
from ..core.errors import ConfigError

_FORMATS = ("json", "console")


def _add_component(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: tag every entry with the package name."""
    event_dict.setdefault("component", "journal_analytics")
    return event_dict


def setup_logging(
    level: str = "INFO",
    format: str = "json",
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for production, "console" for development.

    Raises:
        ConfigError: Unknown ``format``.
    """
    if format not in _FORMATS:
        raise ConfigError(f"Unknown log format {format!r}, expected one of {_FORMATS}")

    log_level = getattr(logging, level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        _add_component,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )
    logging.getLogger().setLevel(log_level)


def setup_logging_from_config(config: ObservabilityConfig) -> None:
    """Configure logging from the ``observability`` settings section."""
    setup_logging(level=config.log_level, format=config.log_format)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)

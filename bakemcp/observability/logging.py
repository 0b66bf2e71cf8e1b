"""
Structured Logging Module

This module provides structured logging for the generator and for the
placeholder server.

Log lines always go to stderr: stdout carries the MCP stdio transport when
the server runs, and generated output paths when the CLI runs.

Pattern: Structured logging for observability
Pattern: Singleton configuration (configure once at startup)
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

import structlog
from structlog._config import BoundLoggerLazyProxy
from structlog.types import EventDict, Processor


# =============================================================================
# Configuration State Flag
# =============================================================================

_configured: bool = False


# =============================================================================
# Custom Processors
# =============================================================================


def add_timestamp(
    logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Add ISO 8601 timestamp to log event.

    Args:
        logger: The logger instance (unused but required by structlog interface)
        _method_name: The log method name (unused but required by structlog interface)
        event_dict: The event dictionary to process
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def rename_level(
    logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Rename log_level to level for cleaner output."""
    if "log_level" in event_dict:
        event_dict["level"] = event_dict.pop("log_level")
    return event_dict


# =============================================================================
# Singleton Configuration
# =============================================================================


def configure_logging(
    level: str = "WARNING",
    stream: Optional[TextIO] = None,
    json_logs: bool = False,
    force: bool = False,
) -> None:
    """
    Configure structlog for the application.

    This should be called once at startup. Subsequent calls are no-ops
    unless force=True.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream (default: sys.stderr)
        json_logs: Render JSON instead of console key=value lines
        force: Force reconfiguration (CLI startup and tests)

    Example:
        >>> configure_logging(level="DEBUG", force=True)
        >>> logger = get_logger("bakemcp.cli")
    """
    global _configured

    if _configured and not force:
        return

    renderer: Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        rename_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_to_int(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Stdlib loggers (parser, mapper) share the level and the stream.
    logging.basicConfig(
        level=_level_to_int(level),
        stream=stream or sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )

    _configured = True


def reset_logging() -> None:
    """
    Reset logging configuration state.

    WARNING: This should only be used in tests.
    """
    global _configured
    _configured = False
    structlog.reset_defaults()


# =============================================================================
# Logger Factory
# =============================================================================


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger bound to ``name``.

    Configures logging with defaults if nothing configured it yet. The
    returned logger is a lazy proxy: module-level loggers follow a later
    ``configure_logging(force=True)``.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("generated project", tools=3)
    """
    configure_logging()
    return BoundLoggerLazyProxy(None, initial_values={"logger": name})


def _level_to_int(level: str) -> int:
    """Convert level string to logging int."""
    levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return levels.get(level.upper(), logging.WARNING)

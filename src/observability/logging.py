"""
Structured Logging Module

This module provides structured JSON logging with correlation ID support.
Every relay log line is a single JSON object carrying the event name,
level, ISO-8601 timestamp, logger name and, while a request is in flight,
its correlation ID.

Configuration happens once at startup via configure_logging(); get_logger()
auto-configures with defaults for modules imported before startup.
"""

import contextvars
import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator, Optional, TextIO

import structlog
from structlog.typing import BindableLogger, EventDict, Processor


_configured: bool = False


# =============================================================================
# Correlation ID Context
# =============================================================================

_correlation_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID.

    Returns:
        Correlation ID if set, None otherwise
    """
    return _correlation_id_var.get()


@contextmanager
def correlation_id_context(correlation_id: str) -> Generator[None, None, None]:
    """
    Context manager scoping a correlation ID to a block.

    Args:
        correlation_id: Unique identifier for request tracing

    Example:
        >>> with correlation_id_context("req-12345"):
        ...     logger.info("chat_request_received")
    """
    token = _correlation_id_var.set(correlation_id)
    try:
        yield
    finally:
        _correlation_id_var.reset(token)


# =============================================================================
# Custom Processors
# =============================================================================


def add_correlation_id(
    logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add correlation ID to log event if set."""
    correlation_id = get_correlation_id()
    if correlation_id is not None:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def add_timestamp(
    logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add ISO 8601 UTC timestamp to log event."""
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
    level: str = "INFO",
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> None:
    """
    Configure structlog for the application.

    Subsequent calls are no-ops unless force=True.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream (default: sys.stdout)
        force: Force reconfiguration (startup and tests)
    """
    global _configured

    if _configured and not force:
        return

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        add_correlation_id,
        rename_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_to_int(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=False,
    )

    _configured = True


def reset_logging() -> None:
    """Reset configuration state. Only for tests."""
    global _configured
    _configured = False


# =============================================================================
# Logger Factory
# =============================================================================


def get_logger(name: str) -> BindableLogger:
    """
    Get a structured logger bound to a name.

    The returned logger is a lazy proxy, so it follows later calls to
    configure_logging() even when created at import time. The name is
    carried as the logger_name initial value; `logger` is reserved by
    structlog.wrap_logger.

    Args:
        name: Logger name (typically module name)

    Returns:
        Bound structlog logger

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("chat_forwarding", model="claude-3-opus-20240229")
    """
    configure_logging()
    return structlog.get_logger(logger_name=name)


def _level_to_int(level: str) -> int:
    """Convert level string to logging int."""
    levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return levels.get(level.upper(), logging.INFO)

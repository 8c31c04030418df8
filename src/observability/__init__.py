"""
Observability Package

This package provides structured JSON logging with correlation IDs.
"""

from src.observability.logging import (
    configure_logging,
    correlation_id_context,
    get_correlation_id,
    get_logger,
)

__all__ = [
    "configure_logging",
    "correlation_id_context",
    "get_correlation_id",
    "get_logger",
]

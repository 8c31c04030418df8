"""
Core module for Claude Relay.

This module contains configuration and exceptions.
"""

from src.core.config import Settings, get_settings
from src.core.exceptions import (
    ConfigurationError,
    ErrorCode,
    InvalidRequestError,
    PayloadTooLargeError,
    RelayException,
    TransportError,
    UpstreamError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "RelayException",
    "InvalidRequestError",
    "PayloadTooLargeError",
    "UpstreamError",
    "TransportError",
    "ConfigurationError",
]

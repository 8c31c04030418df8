"""
Custom exceptions for Claude Relay.

This module provides the exception hierarchy for the relay. All exceptions
inherit from RelayException and carry an error code, the HTTP status the
caller should see, and optional details for the JSON error envelope.
"""

from enum import Enum
from typing import Any


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for Claude Relay exceptions.

    These codes identify error types consistently in logs.
    """

    RELAY_ERROR = "RELAY_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class RelayException(Exception):
    """
    Base exception for all Claude Relay errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
        status_code: HTTP status returned to the caller.
        details: Optional diagnostic payload for the caller.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.RELAY_ERROR,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            status_code: HTTP status override (defaults to the class value).
            details: Optional diagnostic payload.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_body(self) -> dict[str, Any]:
        """
        Render the JSON error envelope.

        Returns:
            {"error": true, "message": ...} plus "details" when present.
        """
        body: dict[str, Any] = {"error": True, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


# =============================================================================
# Caller Errors
# =============================================================================


class InvalidRequestError(RelayException):
    """
    Raised when the caller payload fails validation.

    Attributes:
        field: Name of the field that failed validation (if known).
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        error_code: str = ErrorCode.INVALID_REQUEST,
    ) -> None:
        super().__init__(message, error_code)
        self.field = field


class PayloadTooLargeError(RelayException):
    """Raised when the inbound body exceeds the configured size cap."""

    status_code = 413

    def __init__(
        self,
        limit: int,
        message: str = "Request body too large",
        error_code: str = ErrorCode.PAYLOAD_TOO_LARGE,
    ) -> None:
        super().__init__(message, error_code)
        self.limit = limit


# =============================================================================
# Upstream Errors
# =============================================================================


class UpstreamError(RelayException):
    """
    Raised when the upstream API answered with a non-success status.

    The caller sees the same status code, with the upstream body as details.

    Attributes:
        status_code: HTTP status code returned by the upstream API.
        details: Parsed upstream body (or raw text if not JSON).
    """

    def __init__(
        self,
        status_code: int,
        details: Any,
        message: str = "Error from Claude API",
        error_code: str = ErrorCode.UPSTREAM_ERROR,
    ) -> None:
        super().__init__(message, error_code, status_code=status_code, details=details)


class TransportError(RelayException):
    """
    Raised when no response was obtained from the upstream API.

    Covers DNS, connection, timeout and protocol failures. Details carry the
    local error text and are never empty.
    """

    status_code = 500

    def __init__(
        self,
        details: str,
        message: str = "Internal server error",
        error_code: str = ErrorCode.TRANSPORT_ERROR,
    ) -> None:
        super().__init__(message, error_code, details=details)


# =============================================================================
# Startup Errors
# =============================================================================


class ConfigurationError(RelayException):
    """
    Raised at startup when required configuration is missing.

    Attributes:
        setting: Name of the offending setting.
    """

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        error_code: str = ErrorCode.CONFIGURATION_ERROR,
    ) -> None:
        super().__init__(message, error_code)
        self.setting = setting

"""
API Dependencies

This module provides FastAPI dependency injection functions for the API layer.

The settings and relay service are created once by the application lifespan
and stored on app.state; these dependencies hand them to route handlers so
handlers never read the environment or build clients themselves. All of them
can be replaced in tests through app.dependency_overrides.
"""

import json
from typing import Any

from fastapi import Depends, Request

from src.core.config import Settings
from src.core.exceptions import InvalidRequestError, PayloadTooLargeError
from src.services.relay import RelayService

INVALID_JSON_MESSAGE = "Invalid JSON body"


def _reject_constant(token: str) -> Any:
    """NaN and Infinity are not JSON; json.loads accepts them unless told not to."""
    raise ValueError(f"Invalid JSON constant: {token}")


# =============================================================================
# get_settings Dependency
# =============================================================================


def get_settings(request: Request) -> Settings:
    """
    Get the settings the application was built with.

    Args:
        request: Current request

    Returns:
        Settings: Application settings instance
    """
    return request.app.state.settings


# =============================================================================
# get_relay_service Dependency
# =============================================================================


def get_relay_service(request: Request) -> RelayService:
    """
    Get the RelayService created at startup.

    Args:
        request: Current request

    Returns:
        RelayService: Relay service instance
    """
    return request.app.state.relay_service


# =============================================================================
# read_json_body Dependency
# =============================================================================


async def read_json_body(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Any:
    """
    Read and decode the request body as JSON, enforcing the size cap.

    The declared Content-Length is checked first; the streamed body is
    counted as well, so chunked uploads are bounded too. An empty body
    decodes to an empty object.

    Args:
        request: Current request
        settings: Application settings (max_body_bytes)

    Returns:
        The decoded JSON value

    Raises:
        PayloadTooLargeError: If the body exceeds max_body_bytes
        InvalidRequestError: If the body is not valid JSON (NaN and Infinity included)
    """
    limit = settings.max_body_bytes

    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(limit)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLargeError(limit)

    if not body.strip():
        return {}

    try:
        return json.loads(bytes(body), parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidRequestError(INVALID_JSON_MESSAGE, field="body") from e


__all__ = [
    "get_settings",
    "get_relay_service",
    "read_json_body",
]

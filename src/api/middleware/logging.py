"""
Request Logging Middleware

This module implements request/response logging middleware for the API.

- Logs request method, path, client and duration
- Logs response status code (WARNING for 4xx/5xx)
- Redacts sensitive headers (Authorization, API keys) from logs
- Scopes a correlation ID to each request and returns it as X-Request-ID
"""

import time
import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.observability.logging import correlation_id_context, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


# =============================================================================
# Sensitive Header Redaction
# =============================================================================

# Headers that should be redacted (case-insensitive substring matching)
SENSITIVE_HEADER_PATTERNS = [
    "authorization",
    "api-key",
    "apikey",
    "api_key",
    "x-auth-token",
    "cookie",
]


def redact_sensitive_headers(headers: dict[str, str]) -> dict[str, str]:
    """
    Redact sensitive headers from a headers dictionary.

    Args:
        headers: Dictionary of HTTP headers

    Returns:
        Dictionary with sensitive values replaced with [REDACTED]
    """
    redacted = {}
    for key, value in headers.items():
        key_lower = key.lower()
        is_sensitive = any(pattern in key_lower for pattern in SENSITIVE_HEADER_PATTERNS)
        redacted[key] = "[REDACTED]" if is_sensitive else value
    return redacted


# =============================================================================
# Request Logging Middleware
# =============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.

    Every log line emitted while the request is handled carries the
    request's correlation ID, taken from X-Request-ID or generated.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """
        Process the request and log details.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response from the handler, with X-Request-ID set
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        start_time = time.perf_counter()

        method = request.method
        path = request.url.path
        client_host = request.client.host if request.client else "unknown"

        with correlation_id_context(request_id):
            logger.debug(
                "http_request",
                method=method,
                path=path,
                client=client_host,
                headers=redact_sensitive_headers(dict(request.headers)),
            )

            try:
                response = await call_next(request)
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    "http_request_failed",
                    method=method,
                    path=path,
                    client=client_host,
                    error=f"{type(e).__name__}: {e}",
                    duration_ms=round(duration_ms, 2),
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            log = logger.warning if response.status_code >= 400 else logger.info
            log(
                "http_response",
                method=method,
                path=path,
                status_code=response.status_code,
                client=client_host,
                duration_ms=round(duration_ms, 2),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

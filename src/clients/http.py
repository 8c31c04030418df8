"""
HTTP Client Module - Client Factory

This module provides the HTTP client factory used for upstream calls, with
connection pooling and explicit timeout and retry configuration.

Pattern: Factory pattern for creating configured HTTP clients
"""

from typing import Optional

import httpx


# =============================================================================
# Default Configuration Constants
# =============================================================================


DEFAULT_TIMEOUT_SECONDS: float = 120.0
"""Default timeout for upstream requests in seconds.

Completions for long prompts routinely take tens of seconds.
"""

DEFAULT_MAX_CONNECTIONS: int = 100
"""Maximum number of connections in the pool."""

DEFAULT_MAX_KEEPALIVE: int = 20
"""Maximum number of keepalive connections."""

DEFAULT_RETRY_COUNT: int = 0
"""Default number of connection-level retries.

Upstream calls are not retried unless configured.
"""

USER_AGENT = "claude-relay/1.0"


# =============================================================================
# HTTP Client Factory
# =============================================================================


def create_http_client(
    timeout_seconds: Optional[float] = None,
    retries: Optional[int] = None,
    max_connections: Optional[int] = None,
    max_keepalive: Optional[int] = None,
    headers: Optional[dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create a configured HTTP client with connection pooling and timeouts.

    Args:
        timeout_seconds: Request timeout in seconds (default: 120.0)
        retries: Connection-level retries (default: 0)
        max_connections: Maximum connections in pool (default: 100)
        max_keepalive: Maximum keepalive connections (default: 20)
        headers: Additional headers to include in all requests
        transport: Transport override (tests pass httpx.MockTransport)

    Returns:
        httpx.AsyncClient: Configured async HTTP client

    Example:
        >>> client = create_http_client(timeout_seconds=60.0)
        >>> async with client:
        ...     response = await client.post(url, json=payload)
    """
    # Apply defaults
    timeout = timeout_seconds if timeout_seconds is not None else DEFAULT_TIMEOUT_SECONDS
    max_conn = max_connections if max_connections is not None else DEFAULT_MAX_CONNECTIONS
    max_keep = max_keepalive if max_keepalive is not None else DEFAULT_MAX_KEEPALIVE
    retry_count = retries if retries is not None else DEFAULT_RETRY_COUNT

    limits = httpx.Limits(
        max_connections=max_conn,
        max_keepalive_connections=max_keep,
    )

    timeout_config = httpx.Timeout(
        connect=timeout,
        read=timeout,
        write=timeout,
        pool=timeout,
    )

    default_headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }
    if headers:
        default_headers.update(headers)

    # httpx transport retries only cover connection establishment
    if transport is None:
        transport = httpx.AsyncHTTPTransport(
            retries=retry_count,
            limits=limits,
        )

    return httpx.AsyncClient(
        timeout=timeout_config,
        headers=default_headers,
        transport=transport,
    )

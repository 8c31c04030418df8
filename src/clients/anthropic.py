"""
Anthropic Messages Client

This module posts chat requests to the upstream Messages API and maps the
three possible outcomes:

- 2xx: returned as an UpstreamResponse holding the raw body bytes
- non-2xx: raised as UpstreamError with the upstream status and body
- no response at all: raised as TransportError with the local error text

The raw HTTP client is used rather than the anthropic SDK so the upstream
body and status can be relayed to the caller without being re-modeled.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from src.core.config import DEFAULT_ANTHROPIC_VERSION, DEFAULT_UPSTREAM_URL
from src.core.exceptions import TransportError, UpstreamError
from src.models.requests import OutboundChatRequest


@dataclass(frozen=True)
class UpstreamResponse:
    """
    Successful upstream response.

    Attributes:
        status_code: Upstream 2xx status
        content: Raw body bytes
        media_type: Upstream content type, if any
    """

    status_code: int
    content: bytes
    media_type: Optional[str] = None


def decode_body(response: httpx.Response) -> Any:
    """
    Decode an upstream body for use as error details.

    Returns the parsed JSON value, or the raw text when the body is not JSON.
    """
    if not response.content:
        return ""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


def describe_transport_error(exc: httpx.RequestError) -> str:
    """Local error text for a failed upstream call, never empty."""
    text = str(exc).strip()
    return text or type(exc).__name__


class AnthropicClient:
    """
    Client for the upstream Messages API.

    The credential is only ever placed in request headers.

    Example:
        >>> client = AnthropicClient(api_key="sk-...", http_client=httpx.AsyncClient())
        >>> result = await client.send(outbound)
        >>> result.status_code
        200
    """

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        url: str = DEFAULT_UPSTREAM_URL,
        anthropic_version: str = DEFAULT_ANTHROPIC_VERSION,
        auth_scheme: str = "x-api-key",
    ) -> None:
        """
        Initialize AnthropicClient.

        Args:
            api_key: Upstream credential
            http_client: Shared async HTTP client
            url: Fixed upstream endpoint URL
            anthropic_version: Protocol version header value
            auth_scheme: "x-api-key" or "bearer"
        """
        if auth_scheme not in ("x-api-key", "bearer"):
            raise ValueError(f"Unsupported auth scheme: {auth_scheme}")
        self._api_key = api_key
        self._client = http_client
        self._url = url
        self._anthropic_version = anthropic_version
        self._auth_scheme = auth_scheme

    @property
    def url(self) -> str:
        """The upstream endpoint URL."""
        return self._url

    def build_headers(self) -> dict[str, str]:
        """Headers sent with every upstream call."""
        headers = {
            "Content-Type": "application/json",
            "anthropic-version": self._anthropic_version,
        }
        if self._auth_scheme == "bearer":
            headers["Authorization"] = f"Bearer {self._api_key}"
        else:
            headers["x-api-key"] = self._api_key
        return headers

    async def send(self, request: OutboundChatRequest) -> UpstreamResponse:
        """
        Forward a chat request upstream.

        Args:
            request: The upstream-shaped chat request

        Returns:
            UpstreamResponse: Raw successful response

        Raises:
            UpstreamError: If the upstream returned a non-2xx status
            TransportError: If no response was received
        """
        try:
            response = await self._client.post(
                self._url,
                json=request.to_payload(),
                headers=self.build_headers(),
            )
        except httpx.RequestError as e:
            raise TransportError(describe_transport_error(e)) from e

        if not response.is_success:
            raise UpstreamError(response.status_code, decode_body(response))

        return UpstreamResponse(
            status_code=response.status_code,
            content=response.content,
            media_type=response.headers.get("content-type"),
        )

"""
Tests for AnthropicClient - Upstream Messages API calls

Uses httpx.MockTransport so no network access is needed.
"""

import json

import httpx
import pytest

from src.clients.anthropic import (
    AnthropicClient,
    UpstreamResponse,
    decode_body,
    describe_transport_error,
)
from src.clients.http import create_http_client
from src.core.exceptions import TransportError, UpstreamError
from src.models.requests import OutboundChatRequest

UPSTREAM_URL = "https://api.anthropic.com/v1/messages"


def _outbound() -> OutboundChatRequest:
    return OutboundChatRequest(
        model="claude-3-opus-20240229",
        max_tokens=1000,
        temperature=0.7,
        messages=[{"role": "user", "content": "hello"}],
        system="be nice",
    )


def _client(handler, auth_scheme: str = "x-api-key") -> AnthropicClient:
    return AnthropicClient(
        api_key="unit-test-key",
        http_client=create_http_client(transport=httpx.MockTransport(handler)),
        url=UPSTREAM_URL,
        auth_scheme=auth_scheme,
    )


# =============================================================================
# Headers
# =============================================================================


class TestBuildHeaders:
    def test_x_api_key_scheme(self):
        headers = _client(lambda r: httpx.Response(200)).build_headers()

        assert headers == {
            "Content-Type": "application/json",
            "anthropic-version": "2023-06-01",
            "x-api-key": "unit-test-key",
        }

    def test_bearer_scheme(self):
        headers = _client(lambda r: httpx.Response(200), auth_scheme="bearer").build_headers()

        assert headers["Authorization"] == "Bearer unit-test-key"
        assert "x-api-key" not in headers

    def test_unknown_scheme_rejected(self):
        with pytest.raises(ValueError):
            _client(lambda r: httpx.Response(200), auth_scheme="basic")


# =============================================================================
# send()
# =============================================================================


class TestSend:
    @pytest.mark.asyncio
    async def test_success_returns_raw_body(self):
        raw = b'{"id": "msg_1", "content": []}'
        captured = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(
                200, content=raw, headers={"content-type": "application/json"}
            )

        result = await _client(handler).send(_outbound())

        assert result == UpstreamResponse(200, raw, "application/json")
        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == UPSTREAM_URL
        assert json.loads(request.content) == _outbound().to_payload()
        assert request.headers["x-api-key"] == "unit-test-key"

    @pytest.mark.asyncio
    async def test_non_success_raises_upstream_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"type": "authentication_error"})

        with pytest.raises(UpstreamError) as exc_info:
            await _client(handler).send(_outbound())

        assert exc_info.value.status_code == 401
        assert exc_info.value.details == {"type": "authentication_error"}

    @pytest.mark.asyncio
    async def test_connect_error_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            await _client(handler).send(_outbound())

        assert exc_info.value.details == "connection refused"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


# =============================================================================
# Helpers
# =============================================================================


class TestDecodeBody:
    def test_json_body(self):
        assert decode_body(httpx.Response(500, json={"a": 1})) == {"a": 1}

    def test_text_body(self):
        assert decode_body(httpx.Response(502, content=b"Bad Gateway")) == "Bad Gateway"

    def test_empty_body(self):
        assert decode_body(httpx.Response(504)) == ""


class TestDescribeTransportError:
    def test_uses_message(self):
        assert describe_transport_error(httpx.ConnectError("refused")) == "refused"

    def test_falls_back_to_class_name(self):
        assert describe_transport_error(httpx.ReadTimeout("")) == "ReadTimeout"

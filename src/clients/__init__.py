"""Clients Package - Upstream HTTP clients.

Components:
- http: httpx.AsyncClient factory
- anthropic: Messages API client
"""

from src.clients.anthropic import AnthropicClient, UpstreamResponse
from src.clients.http import create_http_client

__all__ = ["AnthropicClient", "UpstreamResponse", "create_http_client"]

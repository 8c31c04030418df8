"""
Pytest configuration for the relay test suite.

This configuration sets up:
- Test discovery paths
- Test markers for categorization
- Settings fixtures with a fake credential
- A scripted fake upstream served through httpx.MockTransport
- A TestClient over the full application, lifespan included
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.clients.http import create_http_client  # noqa: E402
from src.core.config import Settings  # noqa: E402
from src.observability.logging import configure_logging  # noqa: E402

TEST_API_KEY = "test-anthropic-key"
TEST_UPSTREAM_URL = "https://api.anthropic.com/v1/messages"


# =============================================================================
# Test Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Tests driving the full application")


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def _fresh_logging():
    """
    Point structlog at the current sys.stdout for every test.

    pytest swaps sys.stdout per test; a logger left bound to a previous
    test's stream would write to a closed file.
    """
    configure_logging(level="DEBUG", force=True)
    yield


# =============================================================================
# Settings Fixtures
# =============================================================================


def make_settings(**overrides: Any) -> Settings:
    """Build Settings with safe test defaults, independent of the environment."""
    values: dict[str, Any] = {
        "service_name": "claude-relay-test",
        "environment": "development",
        "port": 3000,
        "log_level": "DEBUG",
        "anthropic_api_key": TEST_API_KEY,
        "upstream_url": TEST_UPSTREAM_URL,
        "allow_model_override": True,
        "default_model": "claude-3-opus-20240229",
        "default_temperature": 0.7,
        "max_tokens": 1000,
        "auth_scheme": "x-api-key",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def test_settings() -> Settings:
    """
    Create test settings with a fake credential.

    Returns:
        Settings: Configured settings for testing
    """
    return make_settings()


# =============================================================================
# Fake Upstream
# =============================================================================


class FakeUpstream:
    """
    Scripted stand-in for the Messages API.

    Records every request it receives and answers with a fixed status and
    body, or raises the error produced by `error_factory` to simulate an
    unreachable upstream.
    """

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
        error_factory: Optional[Callable[[httpx.Request], Exception]] = None,
    ) -> None:
        self.status_code = status_code
        self.json_body = json_body if json_body is not None else {"content": "hi"}
        self.content = content
        self.error_factory = error_factory
        self.requests: list[httpx.Request] = []

    def respond(
        self,
        status_code: int,
        json_body: Any = None,
        content: Optional[bytes] = None,
    ) -> None:
        """Change the scripted response."""
        self.status_code = status_code
        self.json_body = json_body
        self.content = content
        self.error_factory = None

    def fail(self, error_factory: Callable[[httpx.Request], Exception]) -> None:
        """Make every call raise a transport error."""
        self.error_factory = error_factory

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error_factory is not None:
            raise self.error_factory(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


def unreachable(request: httpx.Request) -> Exception:
    """Error factory simulating a DNS failure."""
    return httpx.ConnectError("[Errno -2] Name or service not known", request=request)


@pytest.fixture
def upstream() -> FakeUpstream:
    """Fake upstream answering 200 {"content": "hi"} by default."""
    return FakeUpstream()


@pytest.fixture
def mock_http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    """HTTP client whose transport is the fake upstream."""
    return create_http_client(transport=httpx.MockTransport(upstream.handler))


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def make_client(upstream: FakeUpstream) -> Callable[..., TestClient]:
    """
    Factory for TestClients over the full application.

    The returned TestClient must be used as a context manager so the
    lifespan runs.
    """
    from src.main import create_app

    def _make(settings: Optional[Settings] = None) -> TestClient:
        http_client = create_http_client(transport=httpx.MockTransport(upstream.handler))
        app = create_app(settings or make_settings(), http_client=http_client)
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client) -> Iterator[TestClient]:
    """TestClient over the application built from test settings."""
    with make_client() as test_client:
        yield test_client


# =============================================================================
# Sample Request Fixtures
# =============================================================================


@pytest.fixture
def sample_chat_body() -> dict[str, Any]:
    """Minimal valid /chat body."""
    return {
        "messages": [{"role": "user", "content": "hello"}],
        "system": "be nice",
    }

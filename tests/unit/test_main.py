"""
Main Application Tests - Application Factory and Entry Point

This module tests application setup, lifespan startup checks, middleware
wiring and the console entry point.
"""

import io
import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from conftest import make_settings
from src.core.exceptions import ConfigurationError
from src.observability.logging import configure_logging


# =============================================================================
# Application Setup
# =============================================================================


class TestApplicationSetup:
    """Tests for create_app() and the module-level app."""

    def test_module_app_is_fastapi(self):
        from src.main import app

        assert isinstance(app, FastAPI)

    def test_app_metadata(self):
        from src.main import APP_NAME, APP_VERSION, create_app

        app = create_app(make_settings())

        assert app.title == APP_NAME == "Claude Relay"
        assert app.version == APP_VERSION

    def test_routes_registered(self):
        from src.main import create_app

        paths = set(create_app(make_settings()).openapi()["paths"])

        assert {"/health", "/chat", "/debug"} <= paths

    def test_docs_disabled_in_production(self):
        from src.main import create_app

        app = create_app(make_settings(environment="production"))

        assert app.docs_url is None
        assert app.redoc_url is None

    def test_docs_enabled_in_development(self):
        from src.main import create_app

        assert create_app(make_settings()).docs_url == "/docs"


# =============================================================================
# Lifespan
# =============================================================================


class TestLifespan:
    """Startup credential check and state wiring."""

    def test_state_populated_on_startup(self, make_client):
        from src.services.relay import RelayService

        with make_client() as client:
            assert isinstance(client.app.state.relay_service, RelayService)
            assert client.app.state.settings.service_name == "claude-relay-test"

    def test_missing_credential_refuses_to_start(self, make_client):
        test_client = make_client(make_settings(anthropic_api_key=""))

        with pytest.raises(ConfigurationError):
            with test_client:
                pass

    def test_missing_credential_allowed_when_not_required(self, make_client):
        settings = make_settings(anthropic_api_key="", require_api_key=False)

        with make_client(settings) as client:
            response = client.get("/health")

        assert response.status_code == 200

    def test_missing_credential_logs_warning(self):
        from src.main import check_credential

        stream = io.StringIO()
        configure_logging(level="INFO", stream=stream, force=True)

        check_credential(make_settings(anthropic_api_key="", require_api_key=False))

        [entry] = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert entry["event"] == "credential_missing"
        assert entry["level"] == "warning"

    def test_check_credential_passes_with_key(self):
        from src.main import check_credential

        check_credential(make_settings())

    def test_owned_client_created_without_injection(self):
        from src.main import create_app

        with TestClient(create_app(make_settings())) as client:
            response = client.get("/health")

        assert response.status_code == 200


# =============================================================================
# Middleware
# =============================================================================


class TestCors:
    def test_preflight_allows_any_origin_in_development(self, client):
        response = client.options(
            "/chat",
            headers={
                "Origin": "https://app.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_simple_request_has_cors_header(self, client):
        response = client.get("/health", headers={"Origin": "https://app.example"})

        assert response.headers["access-control-allow-origin"] == "*"


# =============================================================================
# Entry Point
# =============================================================================


class TestMain:
    def test_main_runs_uvicorn_with_settings(self, monkeypatch):
        import src.main as main_module

        calls = []
        monkeypatch.setattr(main_module, "get_settings", lambda: make_settings(port=4321))
        monkeypatch.setattr(
            main_module.uvicorn,
            "run",
            lambda app, **kwargs: calls.append((app, kwargs)),
        )

        main_module.main()

        [(app, kwargs)] = calls
        assert isinstance(app, FastAPI)
        assert kwargs == {"host": "0.0.0.0", "port": 4321, "log_level": "debug"}


class TestOpenApi:
    def test_schema_documents_relay_routes(self, client):
        schema = client.get("/openapi.json").json()

        assert {"/health", "/chat", "/debug"} <= set(schema["paths"])
        assert "ErrorResponse" in schema["components"]["schemas"]

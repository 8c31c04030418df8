"""
Claude Relay - Main Application Entry Point

This module provides the FastAPI application for the relay. The relay
forwards simplified chat requests to the Anthropic Messages API, injecting a
credential held only by the server.

create_app() builds an application from an explicit Settings value; the
module-level `app` uses settings from the environment. main() serves it with
uvicorn on the configured host and port.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.errors import register_exception_handlers
from src.api.middleware.logging import RequestLoggingMiddleware
from src.api.routes.chat import router as chat_router
from src.api.routes.debug import router as debug_router
from src.api.routes.health import router as health_router
from src.clients.anthropic import AnthropicClient
from src.clients.http import create_http_client
from src.core.config import Settings, get_settings
from src.core.exceptions import ConfigurationError
from src.observability.logging import configure_logging, get_logger
from src.services.relay import RelayService

# Application metadata
APP_NAME = "Claude Relay"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Credential-injecting relay for the Anthropic Messages API"

logger = get_logger(__name__)


def check_credential(settings: Settings) -> None:
    """
    Verify an upstream credential is configured.

    Args:
        settings: Application settings

    Raises:
        ConfigurationError: If no key is set and require_api_key is on
    """
    if settings.has_api_key:
        return

    if settings.require_api_key:
        raise ConfigurationError(
            "CLAUDE_API_KEY is not set; refusing to start without an upstream credential",
            setting="anthropic_api_key",
        )

    logger.warning(
        "credential_missing",
        detail="CLAUDE_API_KEY is not set; upstream calls will fail authentication",
    )


def build_relay_service(settings: Settings, http_client: httpx.AsyncClient) -> RelayService:
    """
    Wire the upstream client and relay service from settings.

    Args:
        settings: Application settings
        http_client: Shared async HTTP client

    Returns:
        RelayService: Ready-to-use relay service
    """
    client = AnthropicClient(
        api_key=settings.anthropic_api_key.get_secret_value(),
        http_client=http_client,
        url=settings.upstream_url,
        anthropic_version=settings.anthropic_version,
        auth_scheme=settings.auth_scheme,
    )
    return RelayService(settings, client)


# =============================================================================
# Application Factory
# =============================================================================


def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Create the relay application.

    Args:
        settings: Settings to build with (default: get_settings())
        http_client: Pre-configured HTTP client; when given the app does not
            close it on shutdown (tests pass one built on httpx.MockTransport)

    Returns:
        FastAPI: The configured application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Create the upstream client on startup and close it on shutdown."""
        configure_logging(level=settings.log_level, force=True)
        check_credential(settings)

        owns_client = http_client is None
        client = http_client or create_http_client(
            timeout_seconds=settings.upstream_timeout_seconds,
            retries=settings.upstream_retries,
        )

        app.state.settings = settings
        app.state.relay_service = build_relay_service(settings, client)

        logger.info(
            "relay_started",
            service=settings.service_name,
            environment=settings.environment,
            port=settings.port,
            upstream_url=settings.upstream_url,
            allow_model_override=settings.allow_model_override,
            default_model=settings.default_model,
            credential_configured=settings.has_api_key,
        )

        try:
            yield
        finally:
            if owns_client:
                await client.aclose()
            logger.info("relay_stopped", service=settings.service_name)

    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(chat_router)
    app.include_router(debug_router)

    return app


app = create_app()


def main() -> None:
    """Run the relay with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

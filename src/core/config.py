"""
Core configuration module for Claude Relay.

This module provides centralized configuration management using Pydantic Settings.
Configuration is loaded from environment variables with the CLAUDE_RELAY_ prefix.
The credential and port also accept the plain CLAUDE_API_KEY and PORT variables
that hosting platforms commonly inject.

The Settings instance is built once at startup and passed into the application
factory. Route handlers never read the environment directly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

DEFAULT_UPSTREAM_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the CLAUDE_RELAY_ prefix for environment variables.
    Example: CLAUDE_RELAY_DEFAULT_MODEL=claude-3-haiku-20240307
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="claude-relay",
        description="Name of the service for logging and identification",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP listener binds to",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "CLAUDE_RELAY_PORT"),
        description="Port the service listens on",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    cors_origins: str = Field(
        default="",
        description="Comma-separated allowed origins outside development",
    )
    max_body_bytes: int = Field(
        default=DEFAULT_MAX_BODY_BYTES,
        ge=1,
        description="Largest accepted inbound JSON body in bytes",
    )

    # =========================================================================
    # Upstream Credential
    # SecretStr masks the value in logs/repr, use .get_secret_value() to access
    # =========================================================================
    anthropic_api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("CLAUDE_API_KEY", "CLAUDE_RELAY_API_KEY"),
        description="Anthropic API key injected into every upstream call",
    )
    require_api_key: bool = Field(
        default=True,
        description="Refuse to start when no API key is configured",
    )
    auth_scheme: Literal["x-api-key", "bearer"] = Field(
        default="x-api-key",
        description="Header used to carry the credential upstream",
    )

    # =========================================================================
    # Upstream Endpoint
    # =========================================================================
    upstream_url: str = Field(
        default=DEFAULT_UPSTREAM_URL,
        description="Fixed URL of the upstream messages endpoint",
    )
    anthropic_version: str = Field(
        default=DEFAULT_ANTHROPIC_VERSION,
        description="Value of the anthropic-version protocol header",
    )
    upstream_timeout_seconds: float = Field(
        default=120.0,
        gt=0.0,
        le=600.0,
        description="Timeout in seconds for upstream calls",
    )
    upstream_retries: int = Field(
        default=0,
        ge=0,
        le=10,
        description="Connection-level retries for upstream calls",
    )

    # =========================================================================
    # Model Policy
    # =========================================================================
    allow_model_override: bool = Field(
        default=True,
        description="Honor caller-supplied model and temperature",
    )
    default_model: str = Field(
        default="claude-3-opus-20240229",
        min_length=1,
        description="Model used when the caller sends none or overrides are off",
    )
    default_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Temperature used when the caller sends none or overrides are off",
    )
    max_tokens: int = Field(
        default=1000,
        ge=1,
        description="max_tokens attached to every upstream request",
    )

    model_config = {
        "env_prefix": "CLAUDE_RELAY_",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("upstream_url")
    @classmethod
    def validate_upstream_url(cls, v: str) -> str:
        """Validate upstream URL scheme."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("Upstream URL must start with https:// or http://")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def has_api_key(self) -> bool:
        """Whether a non-empty credential is configured."""
        return bool(self.anthropic_api_key.get_secret_value())

    def get_cors_origins(self) -> list[str]:
        """
        Get CORS allowed origins based on environment.

        - Development: Allow all origins (["*"])
        - Staging/Production: Use cors_origins (comma-separated)
        - If not configured outside development: Empty list

        Returns:
            List of allowed origin strings.
        """
        if self.environment == "development":
            return ["*"]

        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# =============================================================================
# Settings Singleton
# =============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.

    Returns:
        Settings: The application settings instance.
    """
    return Settings()

"""
Response Models

This module contains Pydantic models for the relay's own JSON responses.
Successful /chat responses are not modeled; the upstream body is relayed
byte-for-byte.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(default="ok", description="Liveness status")
    timestamp: str = Field(..., description="Current time, ISO-8601 UTC")
    message: str = Field(..., description="Human-readable status message")


class DebugResponse(BaseModel):
    """
    Debug echo response model.

    Attributes:
        received: The decoded request body, echoed back
        message: Static acknowledgement
    """

    received: Any = Field(default=None, description="Echoed request body")
    message: str = Field(
        default="Debug request received successfully",
        description="Acknowledgement message",
    )


class ErrorResponse(BaseModel):
    """
    Error envelope returned for every failure.

    Attributes:
        error: Always true
        message: Human-readable reason
        details: Upstream body or local error text, when available
    """

    error: bool = Field(default=True, description="Error flag")
    message: str = Field(..., description="Error reason")
    details: Optional[Any] = Field(default=None, description="Diagnostic payload")

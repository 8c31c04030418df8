"""Models Package - Request/Response Models.

This package contains Pydantic models for the relay's request and response shapes.
"""

from src.models.requests import InboundChatRequest, OutboundChatRequest
from src.models.responses import DebugResponse, ErrorResponse, HealthResponse

__all__ = [
    # Requests
    "InboundChatRequest",
    "OutboundChatRequest",
    # Responses
    "HealthResponse",
    "DebugResponse",
    "ErrorResponse",
]

"""
Health Router - GET /health

Liveness probe. Reports that the process is serving requests; it does not
check upstream reachability.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from src.models.responses import HealthResponse

HEALTH_MESSAGE = "Claude API proxy server is running"

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns:
        HealthResponse: {"status": "ok", "timestamp": <ISO-8601>, "message": ...}
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        message=HEALTH_MESSAGE,
    )

"""
Debug Router - POST /debug

Echoes whatever JSON the caller sent, to check what a client actually
transmits. Never calls upstream.
"""

from typing import Any

from fastapi import APIRouter, Depends

from src.api.deps import read_json_body
from src.models.responses import DebugResponse
from src.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Debug"])


@router.post("/debug", response_model=DebugResponse)
async def debug_echo(payload: Any = Depends(read_json_body)) -> DebugResponse:
    """
    Echo the received body.

    Args:
        payload: Decoded JSON body

    Returns:
        DebugResponse: {"received": <body>, "message": ...}
    """
    logger.info("debug_request_received", received=payload)
    return DebugResponse(received=payload)

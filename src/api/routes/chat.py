"""
Chat Router - POST /chat

This module implements the relay endpoint. The caller's simplified request
is validated, translated to the Messages API shape and forwarded with the
relay's credential. Successful upstream bodies are relayed byte-for-byte with
the upstream status; failures come back as the JSON error envelope.
"""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from src.api.deps import get_relay_service, read_json_body
from src.api.errors import error_response, internal_error_response
from src.core.exceptions import RelayException
from src.models.requests import InboundChatRequest
from src.models.responses import ErrorResponse
from src.observability.logging import get_logger
from src.services.relay import RelayService

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"


# =============================================================================
# Router
# =============================================================================

router = APIRouter(tags=["Chat"])


@router.post(
    "/chat",
    response_model=None,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def relay_chat(
    payload: Any = Depends(read_json_body),
    relay_service: RelayService = Depends(get_relay_service),
) -> Response | JSONResponse:
    """
    Relay a chat request to the upstream Messages API.

    Args:
        payload: Decoded JSON body
        relay_service: Injected relay service dependency

    Returns:
        Response: Upstream body and status on success
        JSONResponse: Error envelope on validation, upstream or transport failure
    """
    logger.info("chat_request_received")

    try:
        inbound = InboundChatRequest.from_payload(payload)
        result = await relay_service.relay_chat(inbound)
    except RelayException as e:
        return error_response(e)
    except Exception as e:
        logger.exception("chat_relay_failed", error_type=type(e).__name__)
        return internal_error_response(e)

    return Response(
        content=result.content,
        status_code=result.status_code,
        media_type=JSON_MEDIA_TYPE,
    )

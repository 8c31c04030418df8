"""
Error Handlers

This module converts every failure raised while handling a request into the
relay's JSON error envelope:

    {"error": true, "message": "<reason>", "details": <optional payload>}

Relay exceptions carry their own status code. Anything unexpected becomes a
500 with the exception text as details.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.core.exceptions import RelayException
from src.observability.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(exc: RelayException) -> JSONResponse:
    """
    Render a relay exception as a JSON response.

    Args:
        exc: The relay exception

    Returns:
        JSONResponse: Error envelope with the exception's status code
    """
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def relay_exception_handler(request: Request, exc: RelayException) -> JSONResponse:
    """Handle RelayException raised anywhere in the request path."""
    logger.warning(
        "request_rejected",
        path=request.url.path,
        status_code=exc.status_code,
        error_code=exc.error_code,
        reason=exc.message,
    )
    return error_response(exc)


def internal_error_response(exc: Exception) -> JSONResponse:
    """
    Render an unexpected exception as a 500 error envelope.

    Args:
        exc: The unexpected exception

    Returns:
        JSONResponse: 500 envelope with the exception text as details
    """
    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "message": INTERNAL_ERROR_MESSAGE,
            "details": str(exc) or type(exc).__name__,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle any exception not raised as a RelayException."""
    logger.exception(
        "request_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return internal_error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the relay's exception handlers on an application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(RelayException, relay_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

"""
Relay Service - Chat Forwarding

This module holds the relay's business logic: turning a validated inbound
chat request into the upstream request according to the configured model
policy, and forwarding it through the Messages client.

Pattern: Service layer extraction, so routes only deal with HTTP concerns.
"""

from typing import Any

from src.clients.anthropic import AnthropicClient, UpstreamResponse
from src.core.config import Settings
from src.core.exceptions import TransportError, UpstreamError
from src.models.requests import InboundChatRequest, OutboundChatRequest
from src.observability.logging import get_logger

logger = get_logger(__name__)


class RelayService:
    """
    Service class for relaying chat requests upstream.

    Holds the process-wide settings and upstream client; keeps no
    per-request state.

    Example:
        >>> service = RelayService(settings, client)
        >>> inbound = InboundChatRequest.from_payload(body)
        >>> result = await service.relay_chat(inbound)
    """

    def __init__(self, settings: Settings, client: AnthropicClient) -> None:
        """
        Initialize relay service.

        Args:
            settings: Application settings (model policy, token bound)
            client: Upstream Messages client
        """
        self._settings = settings
        self._client = client

    @property
    def client(self) -> AnthropicClient:
        """The upstream client."""
        return self._client

    def build_outbound(self, inbound: InboundChatRequest) -> OutboundChatRequest:
        """
        Build the upstream request for a validated inbound request.

        Args:
            inbound: Validated inbound request

        Returns:
            OutboundChatRequest: Request in the upstream shape
        """
        return OutboundChatRequest.from_inbound(
            inbound,
            default_model=self._settings.default_model,
            default_temperature=self._settings.default_temperature,
            max_tokens=self._settings.max_tokens,
            allow_override=self._settings.allow_model_override,
        )

    async def relay_chat(self, inbound: InboundChatRequest) -> UpstreamResponse:
        """
        Forward a chat request upstream.

        Args:
            inbound: Validated inbound request

        Returns:
            UpstreamResponse: The raw successful upstream response

        Raises:
            UpstreamError: Upstream answered with a non-2xx status
            TransportError: No response was received
        """
        outbound = self.build_outbound(inbound)
        logger.info(
            "chat_forwarding",
            model=outbound.model,
            message_count=len(outbound.messages),
        )

        try:
            result = await self._client.send(outbound)
        except UpstreamError as e:
            logger.error(
                "chat_upstream_error",
                status_code=e.status_code,
                details=_loggable(e.details),
            )
            raise
        except TransportError as e:
            logger.error("chat_transport_error", details=e.details)
            raise

        logger.info("chat_upstream_success", status_code=result.status_code)
        return result


def _loggable(details: Any) -> Any:
    """Keep logged upstream bodies bounded."""
    if isinstance(details, str) and len(details) > 500:
        return details[:500] + "..."
    return details

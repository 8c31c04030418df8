"""
Request Models - Inbound and Outbound Chat Requests

This module contains the Pydantic models for the two shapes of a chat request:
the simplified shape callers send to /chat, and the Messages API shape the
relay forwards upstream.

Validation is deliberately narrow. Only `messages` and `system` are checked;
message objects, temperature and model are passed through unchecked and the
upstream API is left to reject anything it does not accept.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.core.exceptions import InvalidRequestError

MESSAGES_ERROR = "Invalid or missing messages array in request"
SYSTEM_ERROR = "Missing or invalid system prompt in request"


# =============================================================================
# InboundChatRequest
# =============================================================================


class InboundChatRequest(BaseModel):
    """
    Chat request as sent by the caller.

    Attributes:
        messages: Non-empty list of message objects, passed through as-is
        system: Non-empty system prompt
        temperature: Optional sampling temperature
        model: Optional model identifier
    """

    model_config = ConfigDict(extra="ignore")

    messages: list[Any] = Field(..., min_length=1, description="Conversation messages")
    system: str = Field(..., min_length=1, description="System prompt")
    temperature: Optional[Any] = Field(default=None, description="Sampling temperature")
    model: Optional[Any] = Field(default=None, description="Model identifier")

    @classmethod
    def from_payload(cls, payload: Any) -> "InboundChatRequest":
        """
        Validate a decoded JSON body and build the request.

        Checks run in order and the first failure wins. A payload that is
        not a JSON object is treated as an object with no fields.

        Args:
            payload: Decoded JSON body

        Returns:
            InboundChatRequest: The validated request

        Raises:
            InvalidRequestError: If messages or system are missing or invalid
        """
        data = payload if isinstance(payload, dict) else {}

        messages = data.get("messages")
        if not isinstance(messages, list) or not messages:
            raise InvalidRequestError(MESSAGES_ERROR, field="messages")

        system = data.get("system")
        if not isinstance(system, str) or not system:
            raise InvalidRequestError(SYSTEM_ERROR, field="system")

        return cls(
            messages=messages,
            system=system,
            temperature=data.get("temperature"),
            model=data.get("model"),
        )


# =============================================================================
# OutboundChatRequest
# =============================================================================


class OutboundChatRequest(BaseModel):
    """
    Chat request in the upstream Messages API shape.

    Attributes:
        model: Model identifier
        max_tokens: Fixed output token bound
        temperature: Sampling temperature
        messages: Conversation messages, unchanged from the caller
        system: System prompt, unchanged from the caller
    """

    model: Any
    max_tokens: int
    temperature: Any
    messages: list[Any]
    system: str

    @classmethod
    def from_inbound(
        cls,
        inbound: InboundChatRequest,
        default_model: str,
        default_temperature: float,
        max_tokens: int,
        allow_override: bool = True,
    ) -> "OutboundChatRequest":
        """
        Derive the upstream request from a validated inbound request.

        With allow_override the caller's model and temperature are used when
        present, otherwise the defaults always win.

        Args:
            inbound: Validated inbound request
            default_model: Model used when not taken from the caller
            default_temperature: Temperature used when not taken from the caller
            max_tokens: Output token bound, always attached
            allow_override: Honor caller-supplied model and temperature

        Returns:
            OutboundChatRequest: The upstream request
        """
        model: Any = default_model
        temperature: Any = default_temperature
        if allow_override:
            if inbound.model is not None:
                model = inbound.model
            if inbound.temperature is not None:
                temperature = inbound.temperature

        return cls.model_construct(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=inbound.messages,
            system=inbound.system,
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON object posted upstream."""
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": self.messages,
            "system": self.system,
        }

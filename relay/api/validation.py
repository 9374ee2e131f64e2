"""Validation of inbound /v1/chat/completions requests."""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from relay.core.errors import RequestValidationError
from relay.core.messages import ALLOWED_ROLES, ChatMessage
from relay.core.provider.base import ProviderEntry
from relay.core.provider.provider_registry import ProviderRegistry


@dataclass(frozen=True, slots=True)
class NormalizedRequest:
    model: str
    messages: tuple[ChatMessage, ...]
    stream: bool
    pinned: tuple[ProviderEntry, int] | None = None

    @property
    def is_pinned(self) -> bool:
        return self.pinned is not None


class RequestValidator:
    """Checks a completion request against the expected shape and allow-list.

    Checks run in a fixed order and stop at the first failure, so a request
    missing ``model`` is rejected before anything else is looked at and a
    disallowed model is only reported once the shape is valid.
    """

    def __init__(self, models: Sequence[str], registry: ProviderRegistry) -> None:
        self._models = frozenset(models)
        self._registry = registry

    def validate(self, raw_body: bytes | str) -> NormalizedRequest:
        """Parse and validate a raw request body.

        Raises:
            RequestValidationError: naming the offending field.
        """
        try:
            body = json.loads(raw_body)
        except (ValueError, RecursionError) as e:
            raise RequestValidationError("body", "Invalid JSON body") from e
        return self.validate_body(body)

    def validate_body(self, body: Any) -> NormalizedRequest:
        if not isinstance(body, dict):
            raise RequestValidationError("body", "Request body must be a JSON object")

        model = body.get("model")
        if not model or not isinstance(model, str):
            raise RequestValidationError("model", "Missing required field: 'model'")

        raw_messages = body.get("messages")
        if not isinstance(raw_messages, list):
            raise RequestValidationError("messages", "Missing required field: 'messages'")

        messages = tuple(self.message_from_dict(message) for message in raw_messages)

        if model not in self._models:
            raise RequestValidationError("model", f"Model not available: {model}")

        pinned = None
        provider = body.get("provider")
        provider_name = provider.strip() if isinstance(provider, str) else ""
        if provider_name:
            pinned = self._registry.resolve(provider_name)
            if pinned is None:
                raise RequestValidationError("provider", f"Unknown provider: {provider_name}")

        return NormalizedRequest(
            model=model,
            messages=messages,
            stream=bool(body.get("stream")),
            pinned=pinned,
        )

    @staticmethod
    def message_from_dict(message: Any) -> ChatMessage:
        if not isinstance(message, dict):
            raise RequestValidationError("messages", "Each message must be an object")

        role = message.get("role")
        content = message.get("content")
        if not isinstance(role, str) or not isinstance(content, str):
            raise RequestValidationError(
                "messages", "Each message must include role and content"
            )

        if role not in ALLOWED_ROLES:
            raise RequestValidationError("messages", f"Invalid role: {role}")

        return ChatMessage(role=role, content=content)  # type: ignore[arg-type]

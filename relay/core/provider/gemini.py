"""Adapter for the Google Gemini streamGenerateContent REST API."""

import json
import logging
from collections.abc import AsyncGenerator, Sequence
from typing import Any

import httpx

from relay.core.errors import ProviderError
from relay.core.messages import ChatMessage
from relay.core.provider.http_stream import (
    UpstreamStream,
    build_timeout,
    iter_sse_data,
    open_event_stream,
)

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def build_gemini_payload(messages: Sequence[ChatMessage]) -> dict[str, Any]:
    """Map chat messages onto Gemini ``contents`` plus ``systemInstruction``.

    The first system message becomes the system instruction; the remaining
    turns keep their order, with ``assistant`` renamed to ``model``.
    """
    system = next((m.content for m in messages if m.role == "system"), None)
    contents = [
        {
            "role": "model" if m.role == "assistant" else "user",
            "parts": [{"text": m.content}],
        }
        for m in messages
        if m.role != "system"
    ]
    payload: dict[str, Any] = {"contents": contents}
    if system is not None:
        payload["systemInstruction"] = {"parts": [{"text": system}]}
    return payload


class GeminiProvider:
    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gemini-2.5-flash",
        name: str = "Gemini",
        base_url: str = GEMINI_BASE_URL,
        timeout: float = 90,
        connect_timeout: float = 30,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.name = name
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(
            timeout=build_timeout(timeout, connect_timeout)
        )

    async def stream_chat(self, messages: Sequence[ChatMessage]) -> UpstreamStream:
        payload = build_gemini_payload(messages)
        if not payload["contents"]:
            raise ProviderError(self.name, "No messages provided")

        request = self._client.build_request(
            "POST",
            f"{self.base_url}/models/{self.model}:streamGenerateContent",
            params={"alt": "sse"},
            json=payload,
            headers={"x-goog-api-key": self._api_key},
        )
        response = await open_event_stream(
            self._client, request, provider=self.name, label=self.model
        )
        return UpstreamStream(response, self._text_fragments(response))

    async def _text_fragments(self, response: httpx.Response) -> AsyncGenerator[str, None]:
        async for data in iter_sse_data(response):
            try:
                payload = json.loads(data)
            except json.JSONDecodeError:
                logger.debug(f"Gemini sent a non-JSON event: {data[:80]}")
                continue
            if not isinstance(payload, dict):
                logger.debug(f"Gemini sent a non-object event: {data[:80]}")
                continue

            if isinstance(payload.get("error"), dict):
                raise ProviderError(
                    self.name, payload["error"].get("message", "upstream error")
                )

            candidates = payload.get("candidates")
            first = candidates[0] if isinstance(candidates, list) and candidates else None
            content = first.get("content") if isinstance(first, dict) else None
            parts = content.get("parts") if isinstance(content, dict) else None
            if not isinstance(parts, list):
                continue
            text = "".join(
                part["text"]
                for part in parts
                if isinstance(part, dict) and isinstance(part.get("text"), str)
            )
            if text:
                yield text

    async def aclose(self) -> None:
        await self._client.aclose()

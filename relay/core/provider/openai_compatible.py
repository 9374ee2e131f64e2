"""Adapter for upstreams that speak the OpenAI Chat Completions streaming API."""

import json
import logging
from collections.abc import AsyncGenerator, Sequence

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


class OpenAICompatibleProvider:
    """Streams chat completions from an OpenAI-compatible endpoint.

    ``models`` is a fallback chain: each model is tried in order and the
    first one whose stream is accepted wins. Used as-is for Groq and Cerebras
    (single model) and for OpenRouter (free-model chain).
    """

    def __init__(
        self,
        *,
        name: str,
        base_url: str,
        api_key: str,
        models: Sequence[str],
        timeout: float = 90,
        connect_timeout: float = 30,
        extra_headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not models:
            raise ValueError(f"At least one model is required for provider '{name}'")
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.models = tuple(models)
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            **(extra_headers or {}),
        }
        self._client = client or httpx.AsyncClient(
            timeout=build_timeout(timeout, connect_timeout)
        )

    def _build_request(self, model: str, messages: Sequence[ChatMessage]) -> httpx.Request:
        return self._client.build_request(
            "POST",
            f"{self.base_url}/chat/completions",
            json={
                "model": model,
                "messages": [message.to_dict() for message in messages],
                "stream": True,
            },
            headers=self.headers,
        )

    async def stream_chat(self, messages: Sequence[ChatMessage]) -> UpstreamStream:
        last_error: ProviderError | None = None
        for model in self.models:
            logger.debug(f"{self.name} attempting model: {model}")
            try:
                response = await open_event_stream(
                    self._client,
                    self._build_request(model, messages),
                    provider=self.name,
                    label=model,
                )
            except ProviderError as e:
                logger.warning(f"{self.name} model {model} failed: {e}")
                last_error = e
                continue
            return UpstreamStream(response, self._content_fragments(response, model))

        raise last_error or ProviderError(self.name, "no model accepted the request")

    async def _content_fragments(
        self, response: httpx.Response, model: str
    ) -> AsyncGenerator[str, None]:
        async for data in iter_sse_data(response):
            try:
                payload = json.loads(data)
            except json.JSONDecodeError:
                logger.debug(f"{self.name} sent a non-JSON event: {data[:80]}")
                continue
            if not isinstance(payload, dict):
                logger.debug(f"{self.name} sent a non-object event: {data[:80]}")
                continue

            if isinstance(payload.get("error"), dict):
                message = payload["error"].get("message", "upstream error")
                raise ProviderError(self.name, f"{model}: {message}")

            choices = payload.get("choices")
            first = choices[0] if isinstance(choices, list) and choices else None
            delta = first.get("delta") if isinstance(first, dict) else None
            content = delta.get("content") if isinstance(delta, dict) else None
            if isinstance(content, str) and content:
                yield content

    async def aclose(self) -> None:
        await self._client.aclose()

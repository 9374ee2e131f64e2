"""Translation of provider fragment streams into the OpenAI wire format."""

from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import AsyncGenerator, AsyncIterator
from typing import Any

from fastapi.responses import StreamingResponse

from relay.core.errors import StreamTranslationError

logger = logging.getLogger(__name__)

DONE_FRAME = "data: [DONE]\n\n"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Authorization, Content-Type",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def sse_headers() -> dict[str, str]:
    # Centralize the SSE header contract used throughout the gateway.
    return {
        "Cache-Control": "no-cache",
        "Connection": "keep-alive",
        **CORS_HEADERS,
    }


def streaming_response(*, stream: AsyncIterator[str]) -> StreamingResponse:
    return StreamingResponse(
        stream,
        media_type="text/event-stream; charset=utf-8",
        headers=sse_headers(),
    )


def new_response_id() -> str:
    return f"chatcmpl-{uuid.uuid4()}"


def unix_now() -> int:
    return int(time.time())


async def _close_source(fragments: AsyncIterator[str]) -> None:
    aclose = getattr(fragments, "aclose", None)
    if aclose is not None:
        await aclose()


def _chunk_frame(
    response_id: str,
    created: int,
    model: str,
    delta: dict[str, str],
    finish_reason: str | None = None,
) -> str:
    chunk = {
        "id": response_id,
        "object": "chat.completion.chunk",
        "created": created,
        "model": model,
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}],
    }
    return f"data: {json.dumps(chunk, ensure_ascii=False)}\n\n"


async def to_sse(
    fragments: AsyncIterator[str],
    response_id: str,
    created: int,
    model: str,
    *,
    provider: str | None = None,
) -> AsyncGenerator[str, None]:
    """Wrap a fragment stream as OpenAI Chat Completions SSE frames.

    Emits a role chunk, one content chunk per non-empty fragment, a terminal
    ``finish_reason: "stop"`` chunk and finally ``data: [DONE]``. If the
    source fails mid-stream the error is logged and only ``[DONE]`` follows,
    because the response headers are already committed. Closing this
    generator closes the source.
    """
    try:
        yield _chunk_frame(response_id, created, model, {"role": "assistant"})

        try:
            async for fragment in fragments:
                if not fragment:
                    continue
                yield _chunk_frame(response_id, created, model, {"content": fragment})
        except Exception as e:
            error = StreamTranslationError(provider, e)
            logger.error(f"Streaming error: {error}")
            yield DONE_FRAME
            return

        yield _chunk_frame(response_id, created, model, {}, finish_reason="stop")
        yield DONE_FRAME
    finally:
        await _close_source(fragments)


async def to_aggregate(
    fragments: AsyncIterator[str],
    response_id: str,
    created: int,
    model: str,
) -> dict[str, Any]:
    """Drain a fragment stream into one ``chat.completion`` object."""
    parts: list[str] = []
    try:
        async for fragment in fragments:
            if fragment:
                parts.append(fragment)
    finally:
        await _close_source(fragments)

    return {
        "id": response_id,
        "object": "chat.completion",
        "created": created,
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "".join(parts)},
                "finish_reason": "stop",
            }
        ],
    }


async def to_raw_sse(
    fragments: AsyncIterator[str],
    *,
    provider: str | None = None,
) -> AsyncGenerator[str, None]:
    """Legacy framing: each native fragment as its own SSE event, no envelope."""
    try:
        async for fragment in fragments:
            if not fragment:
                continue
            lines = "".join(f"data: {line}\n" for line in fragment.split("\n"))
            yield f"{lines}\n"
    except Exception as e:
        logger.error(f"Streaming error: {StreamTranslationError(provider, e)}")
    finally:
        await _close_source(fragments)

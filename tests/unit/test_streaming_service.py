import json

import pytest

from relay.api.services.streaming import (
    DONE_FRAME,
    new_response_id,
    sse_headers,
    to_aggregate,
    to_raw_sse,
    to_sse,
)
from tests.fixtures.fake_providers import FakeStream


def _payloads(frames):
    return [json.loads(frame[len("data: ") :]) for frame in frames if frame != DONE_FRAME]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_to_sse_frames_role_content_stop_done():
    frames = [frame async for frame in to_sse(FakeStream(["a", "", "b"]), "chatcmpl-1", 123, "relay-chat")]

    assert len(frames) == 5
    assert all(frame.startswith("data: ") and frame.endswith("\n\n") for frame in frames)
    assert frames[-1] == DONE_FRAME

    chunks = _payloads(frames)
    assert [chunk["choices"][0]["delta"] for chunk in chunks] == [
        {"role": "assistant"},
        {"content": "a"},
        {"content": "b"},
        {},
    ]
    assert [chunk["choices"][0]["finish_reason"] for chunk in chunks] == [None, None, None, "stop"]
    for chunk in chunks:
        assert chunk["id"] == "chatcmpl-1"
        assert chunk["object"] == "chat.completion.chunk"
        assert chunk["created"] == 123
        assert chunk["model"] == "relay-chat"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_to_sse_mid_stream_error_ends_with_done_only():
    source = FakeStream(["a"], error=RuntimeError("upstream reset"))

    frames = [frame async for frame in to_sse(source, "chatcmpl-2", 1, "relay-chat", provider="Groq")]

    assert frames[-1] == DONE_FRAME
    deltas = [chunk["choices"][0]["delta"] for chunk in _payloads(frames)]
    assert deltas == [{"role": "assistant"}, {"content": "a"}]
    assert source.closed


@pytest.mark.unit
@pytest.mark.asyncio
async def test_to_sse_closes_source_when_consumer_stops_early():
    source = FakeStream(["a", "b", "c"])
    frames = to_sse(source, "chatcmpl-3", 1, "relay-chat")

    await frames.__anext__()
    await frames.__anext__()
    await frames.aclose()

    assert source.closed


@pytest.mark.unit
@pytest.mark.asyncio
async def test_to_sse_keeps_unicode_readable():
    frames = [frame async for frame in to_sse(FakeStream(["héllo 👋"]), "id", 1, "m")]
    assert "héllo 👋" in frames[1]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_to_aggregate_joins_fragments():
    source = FakeStream(["a", "", "b"])

    completion = await to_aggregate(source, "chatcmpl-4", 99, "relay-chat")

    assert completion == {
        "id": "chatcmpl-4",
        "object": "chat.completion",
        "created": 99,
        "model": "relay-chat",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "ab"},
                "finish_reason": "stop",
            }
        ],
    }
    assert source.closed


@pytest.mark.unit
@pytest.mark.asyncio
async def test_to_aggregate_propagates_source_error():
    source = FakeStream(["a"], error=RuntimeError("boom"))

    with pytest.raises(RuntimeError, match="boom"):
        await to_aggregate(source, "chatcmpl-5", 1, "relay-chat")

    assert source.closed


@pytest.mark.unit
@pytest.mark.asyncio
async def test_to_raw_sse_emits_native_fragments():
    frames = [frame async for frame in to_raw_sse(FakeStream(["Hel", "", "lo\nworld"]))]

    assert frames == ["data: Hel\n\n", "data: lo\ndata: world\n\n"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_to_raw_sse_stops_quietly_on_error():
    source = FakeStream(["x"], error=RuntimeError("gone"))

    frames = [frame async for frame in to_raw_sse(source, provider="Groq")]

    assert frames == ["data: x\n\n"]
    assert source.closed


@pytest.mark.unit
def test_sse_headers_include_cors_and_no_cache():
    headers = sse_headers()
    assert headers["Cache-Control"] == "no-cache"
    assert headers["Connection"] == "keep-alive"
    assert headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.unit
def test_response_ids_are_unique():
    first, second = new_response_id(), new_response_id()
    assert first.startswith("chatcmpl-")
    assert first != second

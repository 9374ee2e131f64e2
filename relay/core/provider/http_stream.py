"""Shared httpx helpers for upstream SSE streams."""

import logging
from collections.abc import AsyncGenerator

import httpx

from relay.core.errors import ProviderError

logger = logging.getLogger(__name__)

_ERROR_BODY_LIMIT = 300


def build_timeout(request_timeout: float, connect_timeout: float) -> httpx.Timeout:
    return httpx.Timeout(request_timeout, connect=connect_timeout)


async def open_event_stream(
    client: httpx.AsyncClient,
    request: httpx.Request,
    *,
    provider: str,
    label: str,
) -> httpx.Response:
    """Send ``request`` in streaming mode and make sure it was accepted.

    The response body is left unread so the caller can iterate it; on any
    failure the response is closed and ProviderError is raised instead.
    """
    try:
        response = await client.send(request, stream=True)
    except httpx.HTTPError as e:
        raise ProviderError(provider, f"{label}: {type(e).__name__}: {e}") from e

    if response.status_code >= 400:
        try:
            body = (await response.aread()).decode("utf-8", errors="replace")
        except httpx.HTTPError:
            body = ""
        finally:
            await response.aclose()
        raise ProviderError(
            provider,
            f"{label}: {body[:_ERROR_BODY_LIMIT] or response.reason_phrase}",
            upstream_status=response.status_code,
        )

    return response


async def iter_sse_data(response: httpx.Response) -> AsyncGenerator[str, None]:
    """Yield the payload of every ``data:`` line until ``[DONE]`` or EOF.

    The response is closed when the generator finishes or is closed early,
    which cancels the upstream request on client disconnect.
    """
    try:
        async for raw_line in response.aiter_lines():
            line = raw_line.strip()
            if not line.startswith("data:"):
                continue
            data = line[len("data:") :].strip()
            if data == "[DONE]":
                break
            if data:
                yield data
    finally:
        await response.aclose()


class UpstreamStream:
    """Async iterator of text fragments bound to an open upstream response.

    ``aclose`` closes both the fragment generator and the response, even if
    iteration never started, so a client disconnect always releases the
    upstream connection.
    """

    def __init__(self, response: httpx.Response, fragments: AsyncGenerator[str, None]) -> None:
        self._response = response
        self._fragments = fragments

    def __aiter__(self) -> "UpstreamStream":
        return self

    async def __anext__(self) -> str:
        return await self._fragments.__anext__()

    async def aclose(self) -> None:
        try:
            await self._fragments.aclose()
        finally:
            await self._response.aclose()

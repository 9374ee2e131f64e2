"""Ordered failover across the provider catalog."""

import logging
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass

from relay.core.errors import AllProvidersFailedError
from relay.core.messages import ChatMessage
from relay.core.provider.base import ProviderEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """The provider that established a stream, and that stream."""

    entry: ProviderEntry
    index: int
    stream: AsyncIterator[str]


class FailoverDispatcher:
    """Tries providers strictly in the given order until one establishes a stream.

    Establishing the stream is the unit of success: once a candidate's
    ``stream_chat`` returns, no later candidate is invoked, and failures while
    iterating that stream are not retried. There is no health or priority
    reordering.
    """

    async def dispatch(
        self,
        messages: Sequence[ChatMessage],
        rotation_order: Sequence[tuple[ProviderEntry, int]],
    ) -> DispatchResult:
        """Invoke candidates in order and return the first established stream.

        Raises:
            AllProvidersFailedError: If every candidate failed.
        """
        attempted: list[str] = []
        last_error: Exception | None = None

        for entry, index in rotation_order:
            attempted.append(entry.display_name)
            try:
                stream = await entry.capability.stream_chat(messages)
            except Exception as e:
                last_error = e
                logger.warning(f"Provider failed: {entry.display_name}: {e}")
                continue
            return DispatchResult(entry=entry, index=index, stream=stream)

        error = AllProvidersFailedError(attempted, last_error)
        logger.error(str(error))
        raise error from last_error

"""Provider capability interface and catalog entry."""

from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from relay.core.messages import ChatMessage


@runtime_checkable
class ProviderCapability(Protocol):
    """An upstream chat backend.

    ``stream_chat`` must raise before returning when the upstream stream
    cannot be established; once it returns, the iterator is committed and
    later failures surface while iterating. Closing the iterator (``aclose``)
    cancels the upstream request.
    """

    name: str

    async def stream_chat(self, messages: Sequence[ChatMessage]) -> AsyncIterator[str]:
        ...


@dataclass(frozen=True, slots=True)
class ProviderEntry:
    """One catalog slot: stable id, user-facing display name and adapter."""

    id: str
    display_name: str
    capability: ProviderCapability

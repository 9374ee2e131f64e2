"""Ordered provider catalog with alias resolution."""

import re
from collections.abc import Iterable, Iterator

from relay.core.provider.base import ProviderEntry

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def normalize_provider_name(value: str) -> str:
    """Lowercase and drop every non-alphanumeric character.

    ``"Open-Router!"`` and ``"openrouter"`` both normalize to ``"openrouter"``.
    """
    return _NON_ALPHANUMERIC.sub("", value.lower())


class ProviderRegistry:
    """Fixed-order catalog of providers.

    Responsibilities:
    - Hold the catalog in rotation order for the process lifetime
    - Resolve user-supplied provider identifiers to a catalog position

    The catalog is never reordered after construction.
    """

    def __init__(self, entries: Iterable[ProviderEntry]) -> None:
        self._entries: tuple[ProviderEntry, ...] = tuple(entries)
        if not self._entries:
            raise ValueError(
                "No providers configured. Please set at least one provider API key "
                "(e.g., GROQ_API_KEY)."
            )
        ids = [entry.id for entry in self._entries]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate provider ids in catalog: {ids}")

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ProviderEntry]:
        return iter(self._entries)

    def get(self, index: int) -> ProviderEntry:
        return self._entries[index]

    def names(self) -> list[str]:
        return [entry.display_name for entry in self._entries]

    def resolve(self, identifier: str) -> tuple[ProviderEntry, int] | None:
        """Resolve a provider identifier against catalog ids and display names.

        Args:
            identifier: Provider name as typed by a user.

        Returns:
            ``(entry, index)`` for the first matching entry, None otherwise.
        """
        normalized = normalize_provider_name(identifier)
        if not normalized:
            return None
        for index, entry in enumerate(self._entries):
            aliases = (
                normalize_provider_name(entry.id),
                normalize_provider_name(entry.display_name),
            )
            if normalized in aliases:
                return entry, index
        return None

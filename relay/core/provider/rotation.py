"""Round-robin rotation over the provider catalog."""

import logging

from relay.core.provider.base import ProviderEntry
from relay.core.provider.provider_registry import ProviderRegistry

logger = logging.getLogger(__name__)


class RotationScheduler:
    """Shared round-robin cursor over a ProviderRegistry.

    Responsibilities:
    - Pick the next provider for the legacy fire-and-forget path
    - Compute the failover order starting from any catalog position
    - Move the cursor past the provider that served unpinned traffic

    The cursor is read and written without awaiting, so each update is atomic
    with respect to other coroutines on the same event loop.
    """

    def __init__(self, registry: ProviderRegistry, start: int = 0) -> None:
        self._registry = registry
        self._cursor = start % len(registry)

    @property
    def cursor(self) -> int:
        return self._cursor

    def next(self) -> tuple[ProviderEntry, int]:
        """Return the provider at the cursor and advance unconditionally."""
        index = self._cursor
        self._cursor = (index + 1) % len(self._registry)
        return self._registry.get(index), index

    def rotation_order_from(self, start: int) -> list[tuple[ProviderEntry, int]]:
        """Every catalog entry exactly once, beginning at ``start`` and wrapping."""
        size = len(self._registry)
        ordered = []
        for offset in range(size):
            index = (start + offset) % size
            ordered.append((self._registry.get(index), index))
        return ordered

    def advance_if_default(self, selected_index: int, pinned: bool) -> None:
        """Move the cursor past ``selected_index`` unless the caller pinned a provider."""
        if pinned:
            logger.debug(f"Pinned provider at {selected_index}; cursor stays at {self._cursor}")
            return
        self._cursor = (selected_index + 1) % len(self._registry)

    def reset(self, value: int = 0) -> None:
        """Reset the cursor.

        This is primarily useful for testing.
        """
        self._cursor = value % len(self._registry)

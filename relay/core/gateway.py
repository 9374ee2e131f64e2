"""Gateway facade tying the catalog, rotation and failover together.

One ChatGateway lives on ``app.state`` for the process lifetime; request
handlers receive it through a FastAPI dependency instead of module globals.
"""

import logging
from collections.abc import Sequence

from relay.core.config import Config
from relay.core.messages import ChatMessage
from relay.core.provider.base import ProviderEntry
from relay.core.provider.failover import DispatchResult, FailoverDispatcher
from relay.core.provider.provider_catalog_loader import ProviderCatalogLoader
from relay.core.provider.provider_registry import ProviderRegistry
from relay.core.provider.rotation import RotationScheduler

logger = logging.getLogger(__name__)


class ChatGateway:
    def __init__(
        self,
        registry: ProviderRegistry,
        models: Sequence[str],
        scheduler: RotationScheduler | None = None,
        dispatcher: FailoverDispatcher | None = None,
    ) -> None:
        self.registry = registry
        self.models = tuple(models)
        self.scheduler = scheduler or RotationScheduler(registry)
        self.dispatcher = dispatcher or FailoverDispatcher()

    @classmethod
    def from_config(cls, config: Config) -> "ChatGateway":
        registry = ProviderCatalogLoader(config).load()
        logger.info(f"Available services: {', '.join(registry.names())}")
        return cls(registry=registry, models=config.models)

    def next_legacy_provider(self) -> tuple[ProviderEntry, int]:
        """Round-robin pick for the legacy endpoint, without failover."""
        return self.scheduler.next()

    async def dispatch(
        self,
        messages: Sequence[ChatMessage],
        pinned: tuple[ProviderEntry, int] | None = None,
    ) -> DispatchResult:
        """Run the failover chain from the pinned provider or the rotation cursor.

        Raises:
            AllProvidersFailedError: If every provider failed.
        """
        start = pinned[1] if pinned is not None else self.scheduler.cursor
        result = await self.dispatcher.dispatch(
            messages, self.scheduler.rotation_order_from(start)
        )
        self.scheduler.advance_if_default(result.index, pinned=pinned is not None)
        return result

    async def aclose(self) -> None:
        """Close upstream HTTP clients owned by the adapters."""
        for entry in self.registry:
            aclose = getattr(entry.capability, "aclose", None)
            if aclose is not None:
                await aclose()

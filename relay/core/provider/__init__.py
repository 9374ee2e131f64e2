"""Provider management package.

- ProviderRegistry: ordered catalog and alias resolution
- RotationScheduler: shared round-robin cursor
- FailoverDispatcher: ordered failover across the catalog
- ProviderCatalogLoader: builds the catalog from configuration
- OpenAICompatibleProvider / GeminiProvider: upstream adapters
"""

from relay.core.provider.base import ProviderCapability, ProviderEntry
from relay.core.provider.failover import DispatchResult, FailoverDispatcher
from relay.core.provider.gemini import GeminiProvider
from relay.core.provider.openai_compatible import OpenAICompatibleProvider
from relay.core.provider.provider_catalog_loader import ProviderCatalogLoader
from relay.core.provider.provider_registry import ProviderRegistry, normalize_provider_name
from relay.core.provider.rotation import RotationScheduler

__all__ = [
    "DispatchResult",
    "FailoverDispatcher",
    "GeminiProvider",
    "OpenAICompatibleProvider",
    "ProviderCapability",
    "ProviderCatalogLoader",
    "ProviderEntry",
    "ProviderRegistry",
    "RotationScheduler",
    "normalize_provider_name",
]

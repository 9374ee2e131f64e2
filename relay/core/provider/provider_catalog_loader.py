"""Builds the provider catalog from configuration."""

import hashlib
import logging
from collections.abc import Callable
from dataclasses import dataclass

from relay.core.config import Config
from relay.core.provider.base import ProviderCapability, ProviderEntry
from relay.core.provider.gemini import GEMINI_BASE_URL, GeminiProvider
from relay.core.provider.openai_compatible import OpenAICompatibleProvider
from relay.core.provider.provider_registry import ProviderRegistry


@dataclass(frozen=True)
class BuiltinProvider:
    """Static description of a provider the gateway knows how to reach."""

    id: str
    display_name: str
    base_url: str
    api_format: str = "openai"  # "openai" or "gemini"
    extra_headers: tuple[tuple[str, str], ...] = ()


BUILTIN_PROVIDERS: dict[str, BuiltinProvider] = {
    "groq": BuiltinProvider(
        id="groq",
        display_name="Groq",
        base_url="https://api.groq.com/openai/v1",
    ),
    "cerebras": BuiltinProvider(
        id="cerebras",
        display_name="Cerebras",
        base_url="https://api.cerebras.ai/v1",
    ),
    "gemini": BuiltinProvider(
        id="gemini",
        display_name="Gemini",
        base_url=GEMINI_BASE_URL,
        api_format="gemini",
    ),
    "openrouter": BuiltinProvider(
        id="openrouter",
        display_name="OpenRouter (Auto-Fallback)",
        base_url="https://openrouter.ai/api/v1",
        extra_headers=(
            ("HTTP-Referer", "https://relay-gateway.local"),
            ("X-Title", "Relay Gateway"),
        ),
    ),
}


@dataclass
class ProviderLoadResult:
    """Result of loading a provider configuration."""

    id: str
    display_name: str
    status: str  # "success", "skipped"
    message: str | None = None
    api_key_hash: str | None = None
    models: tuple[str, ...] = ()


class ProviderCatalogLoader:
    """Loads the provider catalog in configured rotation order.

    Responsibilities:
    - Walk RELAY_PROVIDERS in order
    - Skip providers without an API key (with a warning)
    - Build the adapter for each remaining provider
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._logger = logging.getLogger(__name__)
        self.results: list[ProviderLoadResult] = []

    @staticmethod
    def _get_api_key_hash(api_key: str) -> str:
        """Return first 8 chars of sha256 hash."""
        return hashlib.sha256(api_key.encode()).hexdigest()[:8]

    def _build_capability(
        self, builtin: BuiltinProvider, api_key: str, models: tuple[str, ...]
    ) -> ProviderCapability:
        timeout = self._config.request_timeout
        connect_timeout = self._config.streaming_connect_timeout
        if builtin.api_format == "gemini":
            return GeminiProvider(
                api_key=api_key,
                model=models[0],
                name=builtin.display_name,
                base_url=builtin.base_url,
                timeout=timeout,
                connect_timeout=connect_timeout,
            )
        return OpenAICompatibleProvider(
            name=builtin.display_name,
            base_url=builtin.base_url,
            api_key=api_key,
            models=models,
            timeout=timeout,
            connect_timeout=connect_timeout,
            extra_headers=dict(builtin.extra_headers),
        )

    def _plan(self) -> list[tuple[BuiltinProvider, str, tuple[str, ...]]]:
        """Resolve RELAY_PROVIDERS into (provider, key, models), recording results."""
        self.results = []
        planned: list[tuple[BuiltinProvider, str, tuple[str, ...]]] = []

        for provider_id in self._config.provider_order:
            builtin = BUILTIN_PROVIDERS.get(provider_id)
            if builtin is None:
                raise ValueError(
                    f"Unknown provider '{provider_id}' in RELAY_PROVIDERS. "
                    f"Known providers: {', '.join(BUILTIN_PROVIDERS)}"
                )

            api_key = self._config.provider_api_key(provider_id)
            models = self._config.provider_models(provider_id)
            if not api_key:
                message = f"Missing {provider_id.upper()}_API_KEY"
                self._logger.warning(f"Skipping provider '{builtin.display_name}': {message}")
                self.results.append(
                    ProviderLoadResult(
                        id=provider_id,
                        display_name=builtin.display_name,
                        status="skipped",
                        message=message,
                    )
                )
                continue

            planned.append((builtin, api_key, models))
            self.results.append(
                ProviderLoadResult(
                    id=provider_id,
                    display_name=builtin.display_name,
                    status="success",
                    api_key_hash=self._get_api_key_hash(api_key),
                    models=models,
                )
            )

        return planned

    def describe(self) -> list[ProviderLoadResult]:
        """Report what would be loaded without building any adapter."""
        self._plan()
        return self.results

    def load_entries(
        self,
        build: Callable[[BuiltinProvider, str, tuple[str, ...]], ProviderCapability] | None = None,
    ) -> list[ProviderEntry]:
        """Load catalog entries, recording one ProviderLoadResult per configured id."""
        build = build or self._build_capability
        return [
            ProviderEntry(
                id=builtin.id,
                display_name=builtin.display_name,
                capability=build(builtin, api_key, models),
            )
            for builtin, api_key, models in self._plan()
        ]

    def load(self) -> ProviderRegistry:
        """Build the registry.

        Raises:
            ValueError: If no provider could be loaded.
        """
        return ProviderRegistry(self.load_entries())

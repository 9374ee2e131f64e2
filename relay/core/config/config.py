"""Configuration singleton for Relay Gateway.

Gives direct property access to configuration values loaded from the
environment through the declarative ConfigSchema.
"""

import hashlib

from relay.core.config.schema import ConfigSchema
from relay.core.config.validation import load_env_var

API_KEY_CHAIN = ("API_KEY", "RELAY_API_KEY", "OPENAI_API_KEY")


class Config:
    """Configuration singleton with direct access to all settings.

    All values are loaded at initialization time; construct a new instance
    after changing the environment.
    """

    def __init__(self) -> None:
        self._values = {
            spec.name: load_env_var(spec) for spec in ConfigSchema.all_specs().values()
        }

    def get(self, name: str) -> object:
        return self._values.get(name)

    # Server settings
    @property
    def host(self) -> str:
        return self._values["HOST"]

    @property
    def port(self) -> int:
        return self._values["PORT"]

    @property
    def log_level(self) -> str:
        return self._values["LOG_LEVEL"]

    # Security settings
    @property
    def api_key(self) -> str:
        """Secret for /v1/* endpoints, first non-empty value of the fallback chain."""
        for name in API_KEY_CHAIN:
            value = self._values.get(name)
            if value:
                return value
        return ""

    @property
    def legacy_api_key(self) -> str:
        """Secret for the legacy /chat endpoint."""
        return self._values.get("RELAY_API_KEY") or ""

    @property
    def api_key_hash(self) -> str:
        return (
            "<not-set>"
            if not self.api_key
            else "sha256:" + hashlib.sha256(self.api_key.encode()).hexdigest()[:16] + "..."
        )

    # Models
    @property
    def models(self) -> tuple[str, ...]:
        return self._values["MODELS"]

    # Providers
    @property
    def provider_order(self) -> tuple[str, ...]:
        return tuple(name.lower() for name in self._values["RELAY_PROVIDERS"])

    def provider_api_key(self, provider_id: str) -> str | None:
        return self._values.get(f"{provider_id.upper()}_API_KEY")

    def provider_models(self, provider_id: str) -> tuple[str, ...]:
        """Models to request from a provider, in fallback order."""
        prefix = provider_id.upper()
        chain = self._values.get(f"{prefix}_MODELS")
        if chain:
            return tuple(chain)
        single = self._values.get(f"{prefix}_MODEL")
        return (single,) if single else ()

    # Timeout settings
    @property
    def request_timeout(self) -> int:
        return self._values["REQUEST_TIMEOUT"]

    @property
    def streaming_connect_timeout(self) -> float:
        return self._values["STREAMING_CONNECT_TIMEOUT_SECONDS"]


# Module-level singleton
config = Config()

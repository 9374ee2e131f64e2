"""Declarative schema for environment variable configuration.

This module provides a single source of truth for all environment variables,
including automatic type coercion, validation, and documentation generation.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

DEFAULT_MODELS = ("relay-chat",)
DEFAULT_PROVIDER_ORDER = ("groq", "cerebras", "gemini", "openrouter")

# Free OpenRouter models tried in order when one is saturated or unavailable.
DEFAULT_OPENROUTER_MODELS = (
    "meta-llama/llama-3.3-70b-instruct:free",
    "deepseek/deepseek-r1:free",
    "deepseek/deepseek-chat:free",
    "mistralai/mistral-7b-instruct:free",
    "google/gemma-2-9b-it:free",
    "microsoft/phi-3-medium-128k-instruct:free",
    "meta-llama/llama-3.1-8b-instruct:free",
    "openrouter/auto",
)


@dataclass(frozen=True)
class EnvVarSpec:
    """Specification for a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "PORT", "LOG_LEVEL")
        default: Default value if env var not set
        type_hint: Type for validation (int, str, float, bool, tuple)
        description: Human-readable description for docs
        validator: Optional custom validation function
        coerce: Optional function to convert string to target type
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], bool] | None = None
    coerce: Callable[[str], Any] | None = None


class ConfigSchema:
    """Registry of all configuration environment variables."""

    # === Server Settings ===

    HOST = EnvVarSpec(
        name="HOST",
        default="0.0.0.0",
        type_hint=str,
        description="Server host address to bind to",
    )

    PORT = EnvVarSpec(
        name="PORT",
        default=3000,
        type_hint=int,
        description="Server port number",
        validator=lambda x: 1 <= x <= 65535,
    )

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="INFO",
        type_hint=str,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        validator=lambda x: x.split()[0].upper()
        in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )

    # === Security Settings ===

    API_KEY = EnvVarSpec(
        name="API_KEY",
        default=None,
        type_hint=str,
        description="Bearer secret for /v1/* endpoints (first in the fallback chain)",
    )

    RELAY_API_KEY = EnvVarSpec(
        name="RELAY_API_KEY",
        default=None,
        type_hint=str,
        description="Bearer secret for the legacy /chat endpoint (second in the /v1 chain)",
    )

    OPENAI_API_KEY = EnvVarSpec(
        name="OPENAI_API_KEY",
        default=None,
        type_hint=str,
        description="Bearer secret for /v1/* endpoints (last in the fallback chain)",
    )

    # === Models ===

    MODELS = EnvVarSpec(
        name="MODELS",
        default=DEFAULT_MODELS,
        type_hint=tuple,
        description="Comma-separated allow-list of model names exposed by /v1/models",
    )

    # === Provider Settings ===

    RELAY_PROVIDERS = EnvVarSpec(
        name="RELAY_PROVIDERS",
        default=DEFAULT_PROVIDER_ORDER,
        type_hint=tuple,
        description="Comma-separated provider catalog, in rotation order",
    )

    GROQ_API_KEY = EnvVarSpec(
        name="GROQ_API_KEY",
        default=None,
        type_hint=str,
        description="API key for Groq",
    )

    GROQ_MODEL = EnvVarSpec(
        name="GROQ_MODEL",
        default="moonshotai/kimi-k2-instruct",
        type_hint=str,
        description="Model requested from Groq",
    )

    CEREBRAS_API_KEY = EnvVarSpec(
        name="CEREBRAS_API_KEY",
        default=None,
        type_hint=str,
        description="API key for Cerebras",
    )

    CEREBRAS_MODEL = EnvVarSpec(
        name="CEREBRAS_MODEL",
        default="zai-glm-4.6",
        type_hint=str,
        description="Model requested from Cerebras",
    )

    GEMINI_API_KEY = EnvVarSpec(
        name="GEMINI_API_KEY",
        default=None,
        type_hint=str,
        description="API key for Google Gemini",
    )

    GEMINI_MODEL = EnvVarSpec(
        name="GEMINI_MODEL",
        default="gemini-2.5-flash",
        type_hint=str,
        description="Model requested from Gemini",
    )

    OPENROUTER_API_KEY = EnvVarSpec(
        name="OPENROUTER_API_KEY",
        default=None,
        type_hint=str,
        description="API key for OpenRouter",
    )

    OPENROUTER_MODELS = EnvVarSpec(
        name="OPENROUTER_MODELS",
        default=DEFAULT_OPENROUTER_MODELS,
        type_hint=tuple,
        description="Comma-separated OpenRouter model fallback chain",
    )

    # === Timeout Settings ===

    REQUEST_TIMEOUT = EnvVarSpec(
        name="REQUEST_TIMEOUT",
        default=90,
        type_hint=int,
        description="Upstream read timeout in seconds",
        validator=lambda x: x > 0,
    )

    STREAMING_CONNECT_TIMEOUT_SECONDS = EnvVarSpec(
        name="STREAMING_CONNECT_TIMEOUT_SECONDS",
        default=30.0,
        type_hint=float,
        description="Connect timeout for upstream streaming requests",
        validator=lambda x: x > 0,
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Get all environment variable specifications."""
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if isinstance(getattr(cls, name), EnvVarSpec)
        }

"""Environment variable loading for the gateway configuration.

Each variable is read, coerced according to its EnvVarSpec and checked by the
spec's validator. A blank value means "use the default".
"""

import os
from collections.abc import Callable
from typing import Any

from relay.core.config.schema import ConfigSchema, EnvVarSpec


class ConfigError(Exception):
    """An environment variable holds a value the gateway cannot use.

    Attributes:
        env_var: Variable name, e.g. ``PORT``
        value: Raw string found in the environment
        message: What is wrong with it
    """

    def __init__(self, env_var: str, value: str, message: str) -> None:
        self.env_var = env_var
        self.value = value
        self.message = message
        super().__init__(f"{env_var}={value!r}: {message}")


def parse_csv(raw: str) -> tuple[str, ...]:
    """Split a comma-separated list, dropping blanks: ``"a, ,b"`` -> ``("a", "b")``."""
    return tuple(item for item in (piece.strip() for piece in raw.split(",")) if item)


_PARSERS: dict[type, Callable[[str], Any]] = {
    bool: lambda raw: raw.strip().lower() in {"1", "true", "yes", "on"},
    int: int,
    float: float,
    str: str,
    tuple: parse_csv,
}


def load_env_var(spec: EnvVarSpec) -> Any:
    """Return the typed value of ``spec`` from the environment.

    A list that parses to nothing (``MODELS=,,``) also falls back to the
    default, so the allow-list and provider order are never empty.

    Raises:
        ConfigError: On a value that cannot be converted or fails validation.
    """
    raw = os.environ.get(spec.name, "")
    if not raw.strip():
        return spec.default

    parse = spec.coerce or _PARSERS.get(spec.type_hint, str)
    try:
        value = parse(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(spec.name, raw, f"expected {spec.type_hint.__name__} ({e})") from e

    if spec.type_hint is tuple and not value:
        return spec.default

    if spec.validator is not None:
        try:
            accepted = spec.validator(value)
        except (TypeError, ValueError, IndexError) as e:
            raise ConfigError(spec.name, raw, f"rejected by validator ({e})") from e
        if not accepted:
            raise ConfigError(spec.name, raw, "Validation failed: value out of range")

    return value


def load_all_specs() -> dict[str, Any]:
    """Load every schema variable; failures are returned as ConfigError values."""
    loaded: dict[str, Any] = {}
    for name, spec in ConfigSchema.all_specs().items():
        try:
            loaded[name] = load_env_var(spec)
        except ConfigError as e:
            loaded[name] = e
    return loaded


def validate_all() -> list[ConfigError]:
    """Every configuration problem in the current environment, not just the first."""
    return [value for value in load_all_specs().values() if isinstance(value, ConfigError)]

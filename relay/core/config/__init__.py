from relay.core.config.config import API_KEY_CHAIN, Config, config
from relay.core.config.validation import ConfigError, validate_all

__all__ = ["API_KEY_CHAIN", "Config", "ConfigError", "config", "validate_all"]

"""Provider configuration."""

from .provider import ConfigError, PrioritizeScope, ProviderConfig, load_config

__all__ = ["ConfigError", "PrioritizeScope", "ProviderConfig", "load_config"]

"""
Cloud provider registry.

Providers register a factory under a fixed name at import time; the
orchestrator then instantiates one by name from an arbitrary config stream.
"""

import logging
import threading
from typing import IO, Any, Callable, Dict, List, Optional

from .interfaces import CloudProvider

logger = logging.getLogger(__name__)

Factory = Callable[[Optional[IO[Any]]], CloudProvider]

_providers: Dict[str, Factory] = {}
_lock = threading.Lock()


def register_cloud_provider(name: str, factory: Factory) -> None:
    """
    Register a cloud provider factory by name.

    Raises:
        ValueError: If a provider is already registered under name
    """
    with _lock:
        if name in _providers:
            raise ValueError(f"Cloud provider {name!r} was registered twice")
        logger.info(f"Registered cloud provider {name!r}")
        _providers[name] = factory


def get_cloud_provider(name: str, config: Optional[IO[Any]]) -> Optional[CloudProvider]:
    """
    Instantiate the provider registered under name.

    Returns:
        The provider, or None if no provider is registered under name

    Raises:
        ConfigError: Propagated from the provider factory
    """
    with _lock:
        factory = _providers.get(name)
    if factory is None:
        return None
    return factory(config)


def registered_providers() -> List[str]:
    """List the names of all registered providers."""
    with _lock:
        return sorted(_providers)

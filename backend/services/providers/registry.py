"""Lazy-loading registry of embedding providers.

Global singleton per provider name, loaded on first use.
"""

import logging

from services.providers.base import BaseEmbeddingProvider

logger = logging.getLogger(__name__)

_registry: dict[str, BaseEmbeddingProvider] = {}


def _create_provider(name: str) -> BaseEmbeddingProvider:
    """Factory: create a provider by name with deferred imports."""
    if name == "sbert":
        from services.providers.sbert import SentenceTransformerProvider
        return SentenceTransformerProvider()
    elif name == "gemini":
        from services.providers.gemini import GeminiEmbeddingProvider
        return GeminiEmbeddingProvider()
    else:
        raise ValueError(f"Unknown embedding provider: {name}")


def get_provider(name: str) -> BaseEmbeddingProvider:
    """Get a provider by name, creating and loading it on first access."""
    if name not in _registry:
        _registry[name] = _create_provider(name)
    provider = _registry[name]
    provider.ensure_loaded()
    return provider


def register(name: str, provider: BaseEmbeddingProvider) -> None:
    """Install a provider instance under a name (tests, custom backends)."""
    _registry[name] = provider


def clear() -> None:
    """Unload all providers. Useful for testing."""
    _registry.clear()

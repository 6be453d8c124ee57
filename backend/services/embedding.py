"""Embedding generator: competency name -> fixed-length vector.

Persistence of the vectors is the caller's job (see embedding_store).
"""

import hashlib
import logging

from config import settings
from services.errors import ProviderError
from services.providers.registry import get_provider

logger = logging.getLogger(__name__)


def name_hash(name: str) -> str:
    """Stable hash of a trimmed competency name, used for stale detection."""
    return hashlib.sha256(name.strip().encode("utf-8")).hexdigest()


def current_model_id() -> str:
    return get_provider(settings.embedding_provider).model_id


def generate_embeddings(texts: list[str]) -> list[list[float]]:
    """Embed a batch of texts with the configured provider.

    Raises ValueError for empty input text and ProviderError when the
    provider fails, times out or returns vectors of the wrong size.
    """
    cleaned = [t.strip() for t in texts]
    if any(not t for t in cleaned):
        raise ValueError("Cannot embed empty text")
    if not cleaned:
        return []

    # Unknown provider name -> ValueError, failed load -> ProviderError
    provider = get_provider(settings.embedding_provider)
    try:
        vectors = provider.embed(cleaned)
    except ProviderError:
        raise
    except Exception as e:
        logger.error("Embedding provider %s failed: %s", settings.embedding_provider, e)
        raise ProviderError(f"Failed to generate embeddings for {len(cleaned)} text(s)") from e

    if len(vectors) != len(cleaned):
        raise ProviderError(f"Provider returned {len(vectors)} vectors for {len(cleaned)} texts")

    expected = settings.embedding_dimensions
    for vec in vectors:
        if not vec:
            raise ProviderError("Provider returned an empty vector")
        if expected and len(vec) != expected:
            raise ProviderError(
                f"Provider returned {len(vec)}-dim vector, configured for {expected}"
            )
    return vectors


def generate_embedding(text: str) -> list[float]:
    """Generate the embedding for a single competency name."""
    if not text.strip():
        raise ValueError("Cannot embed empty text")
    try:
        return generate_embeddings([text])[0]
    except ProviderError:
        logger.error("Error generating embedding for %r", text.strip())
        raise

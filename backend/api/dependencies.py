"""Shared dependencies for API routes."""

from functools import lru_cache

from config import settings
from services.embedding_store import EmbeddingStore


@lru_cache
def get_store() -> EmbeddingStore:
    return EmbeddingStore(settings.embedding_db_path)

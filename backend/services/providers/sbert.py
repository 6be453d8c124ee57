"""Local SentenceTransformer embeddings (JobBERT-v2 by default)."""

import logging

from config import settings
from services.errors import ProviderError
from services.providers.base import BaseEmbeddingProvider

logger = logging.getLogger(__name__)


class SentenceTransformerProvider(BaseEmbeddingProvider):
    provider_name = "sbert"

    def __init__(self, model_name: str | None = None) -> None:
        self._model_name = model_name or settings.sbert_model_name
        self._encoder = None

    @property
    def model_id(self) -> str:
        return self._model_name

    def load(self) -> None:
        try:
            from sentence_transformers import SentenceTransformer

            self._encoder = SentenceTransformer(self._model_name)
        except Exception as e:
            logger.error("Failed to load SentenceTransformer %s: %s", self._model_name, e)
            raise ProviderError(f"Could not load embedding model {self._model_name}") from e

    def embed(self, texts: list[str]) -> list[list[float]]:
        # Raw vectors: the similarity engine normalises, so no normalize_embeddings here.
        embeddings = self._encoder.encode(texts, convert_to_numpy=True)
        return [row.astype(float).tolist() for row in embeddings]

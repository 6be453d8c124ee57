"""Google Gemini embedding API wrapper."""

import logging

from google import genai
from google.genai import types

from config import settings
from services.errors import ProviderError
from services.providers.base import BaseEmbeddingProvider

logger = logging.getLogger(__name__)


class GeminiEmbeddingProvider(BaseEmbeddingProvider):
    provider_name = "gemini"

    def __init__(self) -> None:
        self._client: genai.Client | None = None

    @property
    def model_id(self) -> str:
        return settings.gemini_embedding_model

    def load(self) -> None:
        if not settings.gemini_api_key:
            logger.warning("No GEMINI_API_KEY set - Gemini embeddings disabled")
            raise ProviderError("Gemini API key not configured")
        self._client = genai.Client(
            api_key=settings.gemini_api_key,
            http_options=types.HttpOptions(timeout=int(settings.provider_timeout_seconds * 1000)),
        )

    def embed(self, texts: list[str]) -> list[list[float]]:
        config = None
        if settings.embedding_dimensions:
            config = types.EmbedContentConfig(output_dimensionality=settings.embedding_dimensions)
        response = self._client.models.embed_content(
            model=settings.gemini_embedding_model,
            contents=texts,
            config=config,
        )
        return [list(e.values) for e in response.embeddings]

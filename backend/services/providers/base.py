"""Abstract base class for embedding providers."""

from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class BaseEmbeddingProvider(ABC):
    """Base class for text embedding providers.

    Subclasses must implement:
        - provider_name: identifier used in the provider registry
        - load(): create clients / load model weights
        - embed(texts): return one vector per input text
    """

    provider_name: str = ""
    _loaded: bool = False

    @property
    @abstractmethod
    def model_id(self) -> str:
        """Identifier of the underlying model, stored alongside each vector."""

    @abstractmethod
    def load(self) -> None:
        """Load model weights / create API client. Called once by the registry."""

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of already-trimmed, non-empty texts."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Load provider if not already loaded."""
        if not self._loaded:
            logger.info("Loading embedding provider: %s", self.provider_name)
            self.load()
            self._loaded = True
            logger.info("Embedding provider loaded: %s (%s)", self.provider_name, self.model_id)

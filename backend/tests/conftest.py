"""Shared test configuration, pytest markers and a stub embedding provider."""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest  # noqa: E402

from config import settings  # noqa: E402
from services.providers import registry  # noqa: E402
from services.providers.base import BaseEmbeddingProvider  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: loads real embedding models or calls provider APIs (slow)"
    )


class StubProvider(BaseEmbeddingProvider):
    """Serves fixed vectors; texts it does not know make it fail like a provider outage."""

    provider_name = "stub"

    def __init__(self, vectors: dict[str, list[float]]) -> None:
        self.vectors = vectors
        self.calls: list[list[str]] = []

    @property
    def model_id(self) -> str:
        return "stub-embedding"

    def load(self) -> None:
        pass

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        missing = [t for t in texts if t not in self.vectors]
        if missing:
            raise RuntimeError(f"upstream timeout for {missing[0]}")
        return [self.vectors[t] for t in texts]


STUB_VECTORS = {
    "Python": [1.0, 0.0, 0.0],
    "Python programming": [0.9, 0.1, 0.0],
    "Django": [0.8, 0.3, 0.0],
    "Public speaking": [0.0, 0.0, 1.0],
    "Communication skills": [0.0, 0.1, 0.95],
    "Teamwork": [-1.0, 0.0, 0.0],
}


@pytest.fixture
def stub_provider(monkeypatch):
    provider = StubProvider(dict(STUB_VECTORS))
    registry.clear()
    registry.register("stub", provider)
    monkeypatch.setattr(settings, "embedding_provider", "stub")
    monkeypatch.setattr(settings, "embedding_dimensions", None)
    yield provider
    registry.clear()


@pytest.fixture
def store(tmp_path):
    from services.embedding_store import EmbeddingStore

    return EmbeddingStore(str(tmp_path / "embeddings.sqlite3"))

import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    # Embedding provider
    embedding_provider: str = "sbert"  # "sbert" | "gemini"
    sbert_model_name: str = "TechWolf/JobBERT-v2"
    gemini_api_key: str = ""
    gemini_embedding_model: str = "gemini-embedding-001"
    embedding_dimensions: int | None = None  # None: accept whatever the provider returns
    provider_timeout_seconds: float = 30.0

    # Matching policy
    similarity_threshold: float = 0.75
    min_match_percentage: int = 75

    # Embedding storage / backfill
    embedding_db_path: str = "data/competency_embeddings.sqlite3"
    backfill_delay_seconds: float = 0.1

    rate_limit: str = "10/minute"
    rate_limit_enabled: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})

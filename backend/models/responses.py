from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    embedding_provider: str = ""
    embeddings_stored: int = 0


class UpsertResponse(BaseModel):
    upserted: int = 0
    missing_embeddings: int = 0
    stale_embeddings: int = 0

"""Stored competency embeddings and similarity search results."""

from pydantic import BaseModel

from models.competency import CompetencyType


class CompetencyEmbedding(BaseModel):
    """One stored vector per competency id."""
    competency_id: str
    name: str
    type: CompetencyType
    description: str | None = None
    embedding: list[float] = []
    name_hash: str = ""  # hash of the name the vector was generated from
    model: str = ""


class SimilarCompetency(BaseModel):
    id: str
    name: str
    type: CompetencyType
    description: str | None = None
    similarity: float = 0.0  # 0.0-1.0 remapped cosine similarity


class BackfillReport(BaseModel):
    """Outcome of one embedding backfill run."""
    total: int = 0
    processed: int = 0
    failed: int = 0
    skipped: int = 0
    failures: list[str] = []  # competency ids that failed

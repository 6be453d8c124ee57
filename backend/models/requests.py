from pydantic import BaseModel, Field

from models.matching import Candidate


class CourseSearchRequest(BaseModel):
    competency_ids: list[str] = Field(..., min_length=1, description="Selected competency ids")
    min_match_percentage: int | None = Field(None, ge=0, le=100)
    courses: list[Candidate] = []


class PeopleSearchRequest(BaseModel):
    competency_ids: list[str] = Field(..., min_length=1, description="Selected competency ids")
    min_match_percentage: int | None = Field(None, ge=0, le=100)
    people: list[Candidate] = []


class SimilarCompetenciesRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=500, description="Free text to embed and search with")
    threshold: float | None = Field(None, ge=0.0, le=1.0)
    limit: int = Field(10, ge=1, le=100)


class BackfillRequest(BaseModel):
    include_stale: bool = False

"""Coverage matching of courses and people against selected competencies."""

from typing import Any

from pydantic import BaseModel, computed_field

from models.competency import CompetencyRef


class Candidate(BaseModel):
    """A course or a person exposing its own competency set."""
    id: str
    name: str
    description: str | None = None
    details: dict[str, Any] = {}  # course type, duration, url, email, ...
    competencies: list[CompetencyRef] = []


class MatchResult(BaseModel):
    id: str
    name: str
    description: str | None = None
    details: dict[str, Any] = {}
    match_percentage: int = 0  # 0-100
    matching_competencies: list[CompetencyRef] = []
    total_competencies: int = 0
    selected_count: int = 0

    @computed_field
    @property
    def is_full_match(self) -> bool:
        return self.match_percentage == 100

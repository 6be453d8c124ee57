"""Competency taxonomy shared by people, courses and the embedding store."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class CompetencyType(str, Enum):
    KNOWLEDGE = "KNOWLEDGE"
    SKILL = "SKILL"
    TECH_TOOL = "TECH_TOOL"
    ABILITY = "ABILITY"
    VALUE = "VALUE"
    BEHAVIOUR = "BEHAVIOUR"
    ENABLER = "ENABLER"


class Proficiency(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


# Values, behaviours and enablers are held or not held; no levels.
PROFICIENCY_SUPPORTING_TYPES = frozenset({
    CompetencyType.SKILL,
    CompetencyType.TECH_TOOL,
    CompetencyType.ABILITY,
    CompetencyType.KNOWLEDGE,
})


def supports_proficiency(competency_type: CompetencyType | str) -> bool:
    """Check whether a competency type carries a proficiency level."""
    try:
        return CompetencyType(competency_type) in PROFICIENCY_SUPPORTING_TYPES
    except ValueError:
        return False


class Competency(BaseModel):
    id: str
    name: str = Field(..., min_length=2)
    type: CompetencyType
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("name must be at least 2 characters")
        return v


class CompetencyRef(BaseModel):
    """A competency as attached to a person or a course."""
    id: str
    name: str = ""
    type: CompetencyType | None = None
    proficiency: Proficiency | None = None

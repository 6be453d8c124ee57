import pytest
from pydantic import ValidationError

from models.competency import Competency, CompetencyType, Proficiency, supports_proficiency


@pytest.mark.parametrize("ctype", ["SKILL", "TECH_TOOL", "ABILITY", "KNOWLEDGE"])
def test_supports_proficiency(ctype):
    assert supports_proficiency(ctype) is True


@pytest.mark.parametrize("ctype", [CompetencyType.VALUE, CompetencyType.BEHAVIOUR, CompetencyType.ENABLER])
def test_no_proficiency(ctype):
    assert supports_proficiency(ctype) is False


def test_unknown_type_has_no_proficiency():
    assert supports_proficiency("HOBBY") is False


def test_competency_name_trimmed():
    c = Competency(id="c1", name="  React  ", type="TECH_TOOL")
    assert c.name == "React"
    assert c.type is CompetencyType.TECH_TOOL


def test_competency_name_too_short():
    with pytest.raises(ValidationError):
        Competency(id="c1", name=" R ", type="SKILL")


def test_proficiency_values():
    assert [p.value for p in Proficiency] == ["BEGINNER", "INTERMEDIATE", "ADVANCED", "EXPERT"]

"""Competency matcher: score courses and people by coverage of a selected skill set.

match_percentage = matched / selected, so candidates are never penalised for
extra competencies outside the selection.
"""

import logging
import math
from collections.abc import Iterable, Sequence

from config import settings
from models.competency import CompetencyRef
from models.matching import Candidate, MatchResult
from services.errors import EmptySelection

logger = logging.getLogger(__name__)

DEFAULT_MIN_MATCH_PERCENTAGE = 75


def match_percentage(matched: int, selected: int) -> int:
    """Coverage as an integer percentage, rounding halves up (12.5 -> 13)."""
    if selected <= 0:
        raise EmptySelection()
    ratio = min(1.0, max(0.0, matched / selected))
    return int(math.floor(ratio * 100 + 0.5))


def _dedupe(ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(ids))


def score_candidate(selected: Sequence[str], candidate: Candidate) -> MatchResult:
    """Compute the coverage of one candidate against the (deduplicated) selection."""
    selected_set = set(selected)
    matching: list[CompetencyRef] = []
    seen: set[str] = set()
    for comp in candidate.competencies:
        if comp.id in selected_set and comp.id not in seen:
            matching.append(comp)
            seen.add(comp.id)

    return MatchResult(
        id=candidate.id,
        name=candidate.name,
        description=candidate.description,
        details=candidate.details,
        match_percentage=match_percentage(len(matching), len(selected_set)),
        matching_competencies=matching,
        total_competencies=len({c.id for c in candidate.competencies}),
        selected_count=len(selected_set),
    )


def match_candidates(
    selected_ids: Sequence[str],
    candidates: Iterable[Candidate],
    min_match_percentage: int = DEFAULT_MIN_MATCH_PERCENTAGE,
) -> list[MatchResult]:
    """Rank candidates by the share of selected competencies they cover.

    Candidates with no overlap, or below min_match_percentage, are dropped.
    Results are sorted by match percentage descending; ties keep input order.
    """
    selected = _dedupe(selected_ids)
    if not selected:
        raise EmptySelection()
    if not 0 <= min_match_percentage <= 100:
        raise ValueError(f"min_match_percentage must be within 0-100, got {min_match_percentage}")

    results: list[MatchResult] = []
    scored = 0
    for candidate in candidates:
        scored += 1
        result = score_candidate(selected, candidate)
        if not result.matching_competencies:
            continue
        if result.match_percentage < min_match_percentage:
            continue
        results.append(result)

    results.sort(key=lambda r: r.match_percentage, reverse=True)
    logger.info(
        "Matched %d/%d candidates against %d competencies (min %d%%)",
        len(results), scored, len(selected), min_match_percentage,
    )
    return results


def search_courses(
    competency_ids: Sequence[str],
    courses: Iterable[Candidate],
    min_match_percentage: int | None = None,
) -> list[MatchResult]:
    """Courses teaching at least min_match_percentage of the selected competencies."""
    if min_match_percentage is None:
        min_match_percentage = settings.min_match_percentage
    return match_candidates(competency_ids, courses, min_match_percentage)


def search_people(
    competency_ids: Sequence[str],
    people: Iterable[Candidate],
    min_match_percentage: int | None = None,
) -> list[MatchResult]:
    """People holding at least min_match_percentage of the selected competencies."""
    if min_match_percentage is None:
        min_match_percentage = settings.min_match_percentage
    return match_candidates(competency_ids, people, min_match_percentage)

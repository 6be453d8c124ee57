"""Cosine similarity engine for competency embeddings.

Raw cosine in [-1, 1] is remapped to [0, 1] via (cos + 1) / 2 so every
threshold in the system (0.75 by default) lives on the same scale.
"""

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

import numpy as np

from models.embedding import CompetencyEmbedding, SimilarCompetency
from services.errors import DimensionMismatch

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.75

T = TypeVar("T")


def _remap(raw: float | np.ndarray) -> float | np.ndarray:
    """Map cosine from [-1, 1] onto [0, 1], clipping float drift."""
    return np.clip((raw + 1.0) / 2.0, 0.0, 1.0)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Remapped cosine similarity of two vectors.

    Returns 0.0 if either vector has zero magnitude.
    Raises DimensionMismatch if the vectors differ in length.
    """
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()
    if va.shape[0] != vb.shape[0]:
        raise DimensionMismatch(va.shape[0], vb.shape[0])

    mag_a = float(np.linalg.norm(va))
    mag_b = float(np.linalg.norm(vb))
    if mag_a == 0.0 or mag_b == 0.0:
        return 0.0

    # Normalise before the dot product so tiny magnitudes do not underflow
    raw = float(np.dot(va / mag_a, vb / mag_b))
    return float(_remap(raw))


def similarity_scores(target: Sequence[float], vectors: Sequence[Sequence[float]]) -> np.ndarray:
    """Remapped cosine similarity of target against every row of vectors.

    Same rules as cosine_similarity: only exactly-zero vectors score 0.0.
    """
    t = np.asarray(target, dtype=np.float64).ravel()
    dim = t.shape[0]
    for vec in vectors:
        if len(vec) != dim:
            raise DimensionMismatch(dim, len(vec))
    if len(vectors) == 0 or dim == 0:
        return np.zeros(len(vectors))

    t_norm = float(np.linalg.norm(t))
    if t_norm == 0.0:
        return np.zeros(len(vectors))

    matrix = np.asarray(vectors, dtype=np.float64)
    row_norms = np.linalg.norm(matrix, axis=1)
    zero_rows = row_norms == 0.0
    safe_norms = np.where(zero_rows, 1.0, row_norms)

    raw = (matrix / safe_norms[:, None]) @ (t / t_norm)
    scores = _remap(raw)
    scores[zero_rows] = 0.0
    return scores


def rank_by_similarity(
    target: Sequence[float],
    candidates: Sequence[T],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    vector_of: Callable[[T], Sequence[float]] | None = None,
) -> list[tuple[T, float]]:
    """Rank candidates by similarity to target, dropping those below threshold.

    vector_of extracts the vector from a candidate; by default each candidate
    is itself a vector. Returns (candidate, similarity) pairs sorted
    highest-first; equal scores keep their input order.
    """
    if len(candidates) == 0:
        return []
    get_vec = vector_of or (lambda c: c)
    scores = similarity_scores(target, [get_vec(c) for c in candidates])

    kept = [
        (candidate, float(score))
        for candidate, score in zip(candidates, scores)
        if score >= threshold
    ]
    kept.sort(key=lambda pair: pair[1], reverse=True)
    return kept


def find_similar_competencies(
    target: Sequence[float],
    records: Sequence[CompetencyEmbedding],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    limit: int | None = None,
    exclude_id: str | None = None,
) -> list[SimilarCompetency]:
    """Find stored competencies semantically close to a target embedding."""
    pool = [r for r in records if r.embedding and r.competency_id != exclude_id]
    ranked = rank_by_similarity(target, pool, threshold, vector_of=lambda r: r.embedding)
    if limit is not None:
        ranked = ranked[:limit]

    logger.debug("Similarity search: %d/%d above %.2f", len(ranked), len(pool), threshold)
    return [
        SimilarCompetency(
            id=r.competency_id,
            name=r.name,
            type=r.type,
            description=r.description,
            similarity=score,
        )
        for r, score in ranked
    ]

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_store
from config import settings
from models.competency import Competency
from models.embedding import BackfillReport, SimilarCompetency
from models.matching import MatchResult
from models.requests import (
    BackfillRequest,
    CourseSearchRequest,
    PeopleSearchRequest,
    SimilarCompetenciesRequest,
)
from models.responses import HealthResponse, UpsertResponse
from services import matcher
from services.embedding import generate_embedding
from services.embedding_store import EmbeddingStore, backfill_embeddings
from services.similarity import find_similar_competencies

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


@router.get("/health", response_model=HealthResponse)
async def health(store: EmbeddingStore = Depends(get_store)):
    return HealthResponse(
        status="ok",
        embedding_provider=settings.embedding_provider,
        embeddings_stored=store.count(with_embedding=True),
    )


@router.post("/courses/search-by-competencies", response_model=list[MatchResult])
async def search_courses(body: CourseSearchRequest):
    return matcher.search_courses(body.competency_ids, body.courses, body.min_match_percentage)


@router.post("/people/search-by-competencies", response_model=list[MatchResult])
async def search_people(body: PeopleSearchRequest):
    return matcher.search_people(body.competency_ids, body.people, body.min_match_percentage)


@router.put("/competencies", response_model=UpsertResponse)
async def upsert_competencies(
    competencies: list[Competency],
    store: EmbeddingStore = Depends(get_store),
):
    for competency in competencies:
        store.upsert_competency(competency)
    return UpsertResponse(
        upserted=len(competencies),
        missing_embeddings=len(store.missing_embeddings()),
        stale_embeddings=len(store.stale_embeddings()),
    )


@router.post("/competencies/similar", response_model=list[SimilarCompetency])
@limiter.limit(settings.rate_limit)
def similar_to_text(
    request: Request,
    body: SimilarCompetenciesRequest,
    store: EmbeddingStore = Depends(get_store),
):
    if not body.query.strip():
        raise HTTPException(status_code=400, detail="Query must not be blank")

    target = generate_embedding(body.query)
    threshold = body.threshold if body.threshold is not None else settings.similarity_threshold
    return find_similar_competencies(target, store.all_embeddings(), threshold, limit=body.limit)


@router.get("/competencies/{competency_id}/similar", response_model=list[SimilarCompetency])
async def similar_to_competency(
    competency_id: str,
    threshold: float | None = Query(None, ge=0.0, le=1.0),
    limit: int = Query(10, ge=1, le=100),
    store: EmbeddingStore = Depends(get_store),
):
    record = store.get(competency_id)
    if record is None or not record.embedding:
        raise HTTPException(status_code=404, detail="No embedding stored for this competency")

    if threshold is None:
        threshold = settings.similarity_threshold
    return find_similar_competencies(
        record.embedding, store.all_embeddings(), threshold, limit=limit, exclude_id=competency_id
    )


@router.post("/competencies/embeddings/backfill", response_model=BackfillReport)
@limiter.limit(settings.rate_limit)
def backfill(
    request: Request,
    body: BackfillRequest,
    store: EmbeddingStore = Depends(get_store),
):
    return backfill_embeddings(store, include_stale=body.include_stale)

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_store
from main import app
from services.embedding import name_hash

client = TestClient(app)


@pytest.fixture(autouse=True)
def _use_temp_store(store):
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(store, stub_provider):
    competencies = [
        {"id": "c1", "name": "Python", "type": "TECH_TOOL"},
        {"id": "c2", "name": "Django", "type": "TECH_TOOL"},
        {"id": "c3", "name": "Public speaking", "type": "ABILITY"},
    ]
    response = client.put("/competencies", json=competencies)
    assert response.status_code == 200
    for c in competencies:
        store.put_embedding(c["id"], stub_provider.vectors[c["name"]], name_hash(c["name"]))
    return store


def _course(cid, *competency_ids):
    return {
        "id": cid,
        "name": f"Course {cid}",
        "details": {"duration": 4},
        "competencies": [{"id": c, "name": c} for c in competency_ids],
    }


def test_health(store):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["embeddings_stored"] == 0


def test_search_courses():
    response = client.post(
        "/courses/search-by-competencies",
        json={
            "competency_ids": ["a", "b", "c"],
            "courses": [_course("1", "a"), _course("2", "a", "b", "c", "d"), _course("3", "b", "c", "a")],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert [c["id"] for c in data] == ["2", "3"]
    assert data[0]["match_percentage"] == 100
    assert data[0]["is_full_match"] is True
    assert data[0]["details"]["duration"] == 4


def test_search_people_min_match():
    response = client.post(
        "/people/search-by-competencies",
        json={
            "competency_ids": ["a", "b", "c"],
            "min_match_percentage": 50,
            "people": [_course("ann", "a", "b"), _course("bob", "c")],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert [p["id"] for p in data] == ["ann"]
    assert data[0]["match_percentage"] == 67
    assert data[0]["is_full_match"] is False


def test_search_rejects_empty_selection():
    response = client.post(
        "/courses/search-by-competencies",
        json={"competency_ids": [], "courses": [_course("1", "a")]},
    )
    assert response.status_code == 422


def test_upsert_reports_missing(store):
    response = client.put(
        "/competencies",
        json=[{"id": "c9", "name": "Kubernetes", "type": "TECH_TOOL", "description": "Container orchestration"}],
    )
    assert response.status_code == 200
    assert response.json()["missing_embeddings"] == 1
    assert store.get("c9").description == "Container orchestration"


def test_upsert_rejects_unknown_type():
    response = client.put("/competencies", json=[{"id": "x", "name": "Chess", "type": "HOBBY"}])
    assert response.status_code == 422


def test_similar_to_text(seeded):
    response = client.post("/competencies/similar", json={"query": "Python programming"})
    assert response.status_code == 200
    data = response.json()
    assert [c["id"] for c in data] == ["c1", "c2"]
    assert 0.75 <= data[1]["similarity"] <= data[0]["similarity"] <= 1.0


def test_similar_to_text_limit_and_threshold(seeded):
    response = client.post(
        "/competencies/similar",
        json={"query": "Python programming", "threshold": 0.0, "limit": 1},
    )
    assert [c["id"] for c in response.json()] == ["c1"]


def test_similar_blank_query(seeded):
    response = client.post("/competencies/similar", json={"query": "   "})
    assert response.status_code == 400


def test_similar_provider_error(seeded):
    response = client.post("/competencies/similar", json={"query": "Underwater basket weaving"})
    assert response.status_code == 502


def test_similar_to_competency(seeded):
    response = client.get("/competencies/c1/similar")
    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == ["c2"]


def test_similar_to_competency_without_embedding(store):
    response = client.get("/competencies/unknown/similar")
    assert response.status_code == 404


def test_backfill(store, stub_provider, monkeypatch):
    from config import settings

    monkeypatch.setattr(settings, "backfill_delay_seconds", 0)
    client.put(
        "/competencies",
        json=[
            {"id": "c1", "name": "Python", "type": "TECH_TOOL"},
            {"id": "c2", "name": "Basket weaving", "type": "SKILL"},
        ],
    )
    response = client.post("/competencies/embeddings/backfill", json={})
    assert response.status_code == 200
    data = response.json()
    assert data["processed"] == 1
    assert data["failed"] == 1
    assert data["failures"] == ["c2"]


@pytest.mark.asyncio
async def test_search_courses_handler_direct():
    from api.router import search_courses
    from models.requests import CourseSearchRequest

    body = CourseSearchRequest(competency_ids=["a", "b"], courses=[_course("1", "a", "b")])
    results = await search_courses(body)
    assert len(results) == 1
    assert results[0].is_full_match


def test_similar_dimension_mismatch_is_conflict(store, stub_provider):
    client.put("/competencies", json=[{"id": "old", "name": "Legacy tool", "type": "TECH_TOOL"}])
    store.put_embedding("old", [1.0, 0.0], name_hash("Legacy tool"), "previous-model")

    response = client.post("/competencies/similar", json={"query": "Python"})
    assert response.status_code == 409
    assert "dimension mismatch" in response.json()["detail"].lower()


def test_similar_handler_runs_in_threadpool():
    import inspect

    from api.router import similar_to_text

    assert not inspect.iscoroutinefunction(similar_to_text)

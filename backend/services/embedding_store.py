"""SQLite-backed storage of competency embeddings, plus the backfill job.

One row per competency id. The vector is stored as a contiguous float32
blob next to the hash of the name it was generated from, so callers can
detect vectors left stale by a rename.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

import numpy as np

from config import settings
from models.competency import Competency, CompetencyType
from models.embedding import BackfillReport, CompetencyEmbedding
from services.embedding import current_model_id, generate_embedding, name_hash
from services.errors import DimensionMismatch, ProviderError

logger = logging.getLogger(__name__)

_SQL = """
CREATE TABLE IF NOT EXISTS competency_embeddings (
    competency_id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    type TEXT NOT NULL,
    description TEXT,
    dim INTEGER,                 -- NULL until a vector is stored
    vec BLOB,                    -- float32, contiguous
    name_hash TEXT,              -- hash of the name the vector was built from
    model TEXT,
    updated_at REAL NOT NULL
);
"""

_COLUMNS = "competency_id, name, type, description, dim, vec, name_hash, model"


def _as_bytes(vector: Iterable[float]) -> bytes:
    return np.asarray(list(vector), dtype="float32").reshape(-1,).tobytes(order="C")


def _from_bytes(b: bytes, dim: int) -> list[float]:
    return np.frombuffer(b, dtype="float32", count=dim).astype(float).tolist()


class EmbeddingStore:
    """Per-competency vector storage on SQLite."""

    def __init__(self, db_path: str | None = None) -> None:
        self.db_path = db_path or settings.embedding_db_path
        parent = os.path.dirname(self.db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with self._conn() as con:
            con.executescript(_SQL)

    @contextmanager
    def _conn(self) -> Iterator[sqlite3.Connection]:
        con = sqlite3.connect(self.db_path)
        try:
            yield con
            con.commit()
        finally:
            con.close()

    @staticmethod
    def _row_to_competency(row: tuple) -> Competency:
        cid, name, ctype, description = row[:4]
        return Competency(id=cid, name=name, type=CompetencyType(ctype), description=description)

    @staticmethod
    def _row_to_embedding(row: tuple) -> CompetencyEmbedding:
        cid, name, ctype, description, dim, vec, nhash, model = row
        return CompetencyEmbedding(
            competency_id=cid,
            name=name,
            type=CompetencyType(ctype),
            description=description,
            embedding=_from_bytes(vec, dim) if vec is not None else [],
            name_hash=nhash or "",
            model=model or "",
        )

    def upsert_competency(self, competency: Competency) -> None:
        """Insert or update a competency's fields. The stored vector is left as is."""
        with self._conn() as con:
            con.execute(
                """
                INSERT INTO competency_embeddings (competency_id, name, type, description, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(competency_id) DO UPDATE SET
                    name = excluded.name,
                    type = excluded.type,
                    description = excluded.description,
                    updated_at = excluded.updated_at
                """,
                (competency.id, competency.name, competency.type.value, competency.description, time.time()),
            )

    def dimension(self) -> int | None:
        """Dimensionality shared by all stored vectors, or None if none stored."""
        with self._conn() as con:
            row = con.execute(
                "SELECT dim FROM competency_embeddings WHERE vec IS NOT NULL LIMIT 1"
            ).fetchone()
        return row[0] if row else None

    def put_embedding(self, competency_id: str, vector: list[float], source_hash: str, model: str = "") -> None:
        """Store the vector for a known competency.

        Raises KeyError for an unknown id and DimensionMismatch if the vector
        does not share the dimensionality of the vectors already stored.
        """
        dim = len(vector)
        with self._conn() as con:
            exists = con.execute(
                "SELECT 1 FROM competency_embeddings WHERE competency_id = ?", (competency_id,)
            ).fetchone()
            if not exists:
                raise KeyError(competency_id)

            row = con.execute(
                "SELECT dim FROM competency_embeddings WHERE vec IS NOT NULL AND competency_id != ? LIMIT 1",
                (competency_id,),
            ).fetchone()
            if row and row[0] != dim:
                raise DimensionMismatch(row[0], dim)

            con.execute(
                """
                UPDATE competency_embeddings
                SET dim = ?, vec = ?, name_hash = ?, model = ?, updated_at = ?
                WHERE competency_id = ?
                """,
                (dim, _as_bytes(vector), source_hash, model, time.time(), competency_id),
            )

    def get(self, competency_id: str) -> CompetencyEmbedding | None:
        with self._conn() as con:
            row = con.execute(
                f"SELECT {_COLUMNS} FROM competency_embeddings WHERE competency_id = ?",
                (competency_id,),
            ).fetchone()
        return self._row_to_embedding(row) if row else None

    def delete(self, competency_id: str) -> bool:
        with self._conn() as con:
            cur = con.execute("DELETE FROM competency_embeddings WHERE competency_id = ?", (competency_id,))
            deleted = cur.rowcount
        return deleted > 0

    def count(self, with_embedding: bool = False) -> int:
        sql = "SELECT COUNT(*) FROM competency_embeddings"
        if with_embedding:
            sql += " WHERE vec IS NOT NULL"
        with self._conn() as con:
            return con.execute(sql).fetchone()[0]

    def missing_embeddings(self) -> list[Competency]:
        """Competencies that have never been embedded."""
        with self._conn() as con:
            rows = con.execute(
                "SELECT competency_id, name, type, description FROM competency_embeddings "
                "WHERE vec IS NULL ORDER BY name"
            ).fetchall()
        return [self._row_to_competency(r) for r in rows]

    def stale_embeddings(self) -> list[Competency]:
        """Competencies renamed since their vector was generated."""
        with self._conn() as con:
            rows = con.execute(
                "SELECT competency_id, name, type, description, name_hash FROM competency_embeddings "
                "WHERE vec IS NOT NULL ORDER BY name"
            ).fetchall()
        return [self._row_to_competency(r) for r in rows if r[4] != name_hash(r[1])]

    def all_embeddings(self) -> list[CompetencyEmbedding]:
        """Every competency that has a stored vector."""
        with self._conn() as con:
            rows = con.execute(
                f"SELECT {_COLUMNS} FROM competency_embeddings WHERE vec IS NOT NULL ORDER BY name"
            ).fetchall()
        return [self._row_to_embedding(r) for r in rows]


def backfill_embeddings(
    store: EmbeddingStore,
    include_stale: bool = False,
    delay_seconds: float | None = None,
) -> BackfillReport:
    """Generate vectors for competencies lacking one (and stale ones on request).

    A provider failure on one competency is logged and counted; the run
    carries on with the next one.
    """
    if delay_seconds is None:
        delay_seconds = settings.backfill_delay_seconds

    todo = store.missing_embeddings()
    if include_stale:
        todo += store.stale_embeddings()

    report = BackfillReport(total=len(todo))
    if not todo:
        logger.info("All competencies already have embeddings")
        return report

    logger.info("Found %d competencies to embed", len(todo))
    model = current_model_id()
    for i, competency in enumerate(todo):
        if i and delay_seconds:
            time.sleep(delay_seconds)
        try:
            vector = generate_embedding(competency.name)
            store.put_embedding(competency.id, vector, name_hash(competency.name), model)
        except (ProviderError, DimensionMismatch) as e:
            report.failed += 1
            report.failures.append(competency.id)
            logger.warning("Failed to embed %s (%s): %s", competency.name, competency.type.value, e)
            continue
        except KeyError:
            # Deleted while the run was in progress
            report.skipped += 1
            continue

        report.processed += 1
        logger.info("Embedded %s (%s)", competency.name, competency.type.value)

    logger.info(
        "Backfill done: %d processed, %d failed, %d skipped, %d total",
        report.processed, report.failed, report.skipped, report.total,
    )
    return report

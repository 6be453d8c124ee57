#!/usr/bin/env python3
"""Probe the stored competency embeddings with free-text queries.

Usage:
    python scripts/similarity_probe.py [--threshold 0.75] [--limit 10] ["query" ...]
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import settings  # noqa: E402
from services.embedding import generate_embedding  # noqa: E402
from services.embedding_store import EmbeddingStore  # noqa: E402
from services.errors import ProviderError  # noqa: E402
from services.similarity import find_similar_competencies  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

DEFAULT_QUERIES = [
    "JavaScript programming",
    "React development",
    "Database design",
    "Machine Learning",
    "Project management",
    "Communication skills",
]

LOOSE_THRESHOLD = 0.5


def probe(store: EmbeddingStore, query: str, threshold: float, limit: int) -> None:
    records = store.all_embeddings()
    target = generate_embedding(query)

    matches = find_similar_competencies(target, records, threshold, limit=limit)
    if not matches:
        logger.info("%r: no similar competencies above %.0f%%", query, threshold * 100)
    else:
        logger.info("%r: %d similar competencies", query, len(matches))
        for i, m in enumerate(matches, 1):
            logger.info("  %d. %s (%s) - %d%% match", i, m.name, m.type.value, round(m.similarity * 100))

    loose = find_similar_competencies(target, records, LOOSE_THRESHOLD)
    if len(loose) > len(matches):
        logger.info("  With %.0f%% threshold: %d total matches", LOOSE_THRESHOLD * 100, len(loose))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("queries", nargs="*", default=DEFAULT_QUERIES)
    parser.add_argument("--db", default=settings.embedding_db_path)
    parser.add_argument("--threshold", type=float, default=settings.similarity_threshold)
    parser.add_argument("--limit", type=int, default=10)
    args = parser.parse_args(argv)

    store = EmbeddingStore(args.db)
    stored = store.count(with_embedding=True)
    if stored == 0:
        logger.error("No competencies with embeddings found. Run generate_embeddings.py first.")
        return 1
    logger.info("Found %d competencies with embeddings", stored)

    errors = 0
    for query in args.queries:
        try:
            probe(store, query, args.threshold, args.limit)
        except ProviderError as e:
            errors += 1
            logger.error("Error probing %r: %s", query, e)
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())

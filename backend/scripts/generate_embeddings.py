#!/usr/bin/env python3
"""Generate embeddings for competencies that do not have one yet.

Optionally imports competencies from a JSON file first (a list of
{"id", "name", "type", "description"} objects).

Usage:
    python scripts/generate_embeddings.py [--import-json competencies.json] [--include-stale]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import settings  # noqa: E402
from models.competency import Competency  # noqa: E402
from services.embedding_store import EmbeddingStore, backfill_embeddings  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def import_competencies(store: EmbeddingStore, path: str) -> int:
    with open(path, encoding="utf-8") as f:
        rows = json.load(f)
    for row in rows:
        store.upsert_competency(Competency.model_validate(row))
    logger.info("Imported %d competencies from %s", len(rows), path)
    return len(rows)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--db", default=settings.embedding_db_path, help="SQLite embedding store path")
    parser.add_argument("--import-json", dest="import_json", help="JSON file of competencies to upsert first")
    parser.add_argument("--include-stale", action="store_true", help="Also regenerate vectors of renamed competencies")
    parser.add_argument("--delay", type=float, default=settings.backfill_delay_seconds,
                        help="Seconds to wait between provider calls")
    args = parser.parse_args(argv)

    store = EmbeddingStore(args.db)
    if args.import_json:
        import_competencies(store, args.import_json)

    report = backfill_embeddings(store, include_stale=args.include_stale, delay_seconds=args.delay)

    print("\nSummary:")
    print(f"   Processed: {report.processed}")
    print(f"   Failed:    {report.failed}")
    print(f"   Skipped:   {report.skipped}")
    print(f"   Total:     {report.total}")
    if report.failures:
        print(f"   Failed ids: {', '.join(report.failures)}")
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())

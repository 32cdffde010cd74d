"""Import spreadsheet content packages into the content database.

Runs at app startup (``run_startup_import``) and from the command line:

    python import_content.py [--category subjects] [--content-root ./content] [--json]

Exit status is 0 when every file imported, 1 when any file failed.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sqlite3
import sys

import database
from importer import CATEGORIES, ImportOrchestrator, ImportSummary

logger = logging.getLogger(__name__)


def run_import(db: sqlite3.Connection, content_root: str, category: str | None = None) -> ImportSummary:
    orchestrator = ImportOrchestrator(db, content_root)
    if category:
        return orchestrator.import_category(category)
    return orchestrator.import_all()


def run_startup_import(app) -> ImportSummary:
    """Create the schema and import all content before the app serves requests."""
    with app.app_context():
        database.init_db()
        database.run_migrations()
        app._db_initialized = True

        summary = run_import(database.get_db(), app.config.get("CONTENT_ROOT", "./content"))

    if summary.failure_count:
        logger.warning(
            "Startup import: %d of %d files failed, see errors above",
            summary.failure_count, summary.total_files,
        )
    return summary


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import spreadsheet content packages.")
    parser.add_argument("--category", choices=CATEGORIES, help="only import one content category")
    parser.add_argument("--content-root", default=os.environ.get("CONTENT_ROOT", "./content"))
    parser.add_argument(
        "--database", default=os.environ.get("DATABASE_URL", database.DEFAULT_DATABASE),
    )
    parser.add_argument("--json", action="store_true", help="print the summary as JSON")
    args = parser.parse_args(argv)

    from logging_config import configure_root
    configure_root(os.environ.get("LOG_FORMAT", "text"), os.environ.get("LOG_LEVEL", "INFO"))

    db = database.connect(args.database)
    try:
        database.init_db(db)
        database.run_migrations(db, args.database)
        summary = run_import(db, args.content_root, args.category)
    finally:
        db.close()

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(
            f"[Import] {summary.total_files} files: "
            f"{summary.success_count} succeeded, {summary.failure_count} failed"
        )
        for result in summary.results:
            status = "ok" if result.success else "FAILED"
            print(
                f"  {status:6} {result.file_name} ({result.type}): "
                f"{result.records_imported} created, {result.records_updated} updated"
            )
            for error in result.errors:
                print(f"         error: {error}")
            for warning in result.warnings:
                print(f"         warning: {warning}")

    return 1 if summary.failure_count else 0


if __name__ == "__main__":
    sys.exit(main())

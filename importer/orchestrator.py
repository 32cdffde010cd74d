"""Import orchestrator: scan, parse and import every content file.

Files are handled one at a time in discovery order. Each file gets its own
parse and its own transaction; a failure is recorded on that file's result
and the run moves on to the next file.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path

from importer.base import PAST_QUESTIONS, SUBJECT, ImportResult
from importer.db_importer import DatabaseImporter
from importer.errors import ContentImportError
from importer.parser_factory import create_parser
from importer.scanner import ContentFile, FileScanner

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"


@dataclass
class ImportSummary:
    total_files: int = 0
    success_count: int = 0
    failure_count: int = 0
    results: list[ImportResult] = field(default_factory=list)
    missing_directories: list[str] = field(default_factory=list)

    def add(self, result: ImportResult) -> None:
        self.results.append(result)
        self.total_files += 1
        if result.success:
            self.success_count += 1
        else:
            self.failure_count += 1

    def to_dict(self) -> dict:
        return {
            "totalFiles": self.total_files,
            "successCount": self.success_count,
            "failureCount": self.failure_count,
            "missingDirectories": self.missing_directories,
            "results": [r.to_dict() for r in self.results],
        }


class ImportOrchestrator:
    def __init__(self, db: sqlite3.Connection, content_root: str | Path = "./content") -> None:
        self.scanner = FileScanner(content_root)
        self.importer = DatabaseImporter(db)

    def import_all(self) -> ImportSummary:
        logger.info("Scanning for content files in %s", self.scanner.content_root)
        files = self.scanner.scan_all()
        return self._import_files(files)

    def import_category(self, category: str) -> ImportSummary:
        files = self.scanner.scan_category(category)
        return self._import_files(files)

    def _import_files(self, files: list[ContentFile]) -> ImportSummary:
        logger.info("Found %d files to import", len(files))
        summary = ImportSummary(missing_directories=list(self.scanner.missing_directories))

        for content_file in files:
            context = {"file_name": content_file.file_name}
            logger.info("Processing %s/%s", content_file.category, content_file.file_name, extra=context)
            result = self.import_file(content_file)
            summary.add(result)

            if result.success:
                logger.info(
                    "Imported %s: %d created, %d updated",
                    result.file_name, result.records_imported, result.records_updated,
                    extra=context,
                )
            else:
                logger.error("Failed %s: %s", result.file_name, "; ".join(result.errors), extra=context)
            for warning in result.warnings:
                logger.warning("%s: %s", result.file_name, warning, extra=context)

        logger.info(
            "Import summary: %d files, %d succeeded, %d failed",
            summary.total_files, summary.success_count, summary.failure_count,
        )
        return summary

    def import_file(self, content_file: ContentFile) -> ImportResult:
        """Parse one file and, when it is valid, import it."""
        name = content_file.file_name
        try:
            parser = create_parser(content_file.file_path)
            parsed = parser.parse()
        except ContentImportError as exc:
            return ImportResult.failed(name, UNKNOWN, [str(exc)])
        except Exception as exc:
            logger.exception("Unexpected error while parsing %s", name, extra={"file_name": name})
            return ImportResult.failed(name, UNKNOWN, [str(exc)])

        if not parsed.success:
            return ImportResult.failed(name, parsed.type or UNKNOWN, parsed.errors, parsed.warnings)

        try:
            if parsed.type == SUBJECT:
                result = self.importer.import_subject(parsed.data, name)
            elif parsed.type == PAST_QUESTIONS:
                result = self.importer.import_past_questions(parsed.data, name)
            else:
                return ImportResult.failed(name, parsed.type or UNKNOWN, ["Unsupported file type"])
        except Exception as exc:
            logger.exception("Unexpected error while importing %s", name, extra={"file_name": name})
            return ImportResult.failed(name, parsed.type, [str(exc)], parsed.warnings)

        result.warnings = [*parsed.warnings, *result.warnings]
        return result

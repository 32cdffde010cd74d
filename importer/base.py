"""Shared types and parse helpers for the import pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from openpyxl.workbook.workbook import Workbook

from importer.errors import ContentImportError, ValidationError
from importer.schemas import RecordSchema
from importer.workbook import read_info_sheet, read_table_sheet

SUBJECT = "subject"
PAST_QUESTIONS = "past_questions"
MODULE = "module"


@dataclass
class ParseIssues:
    """Errors and warnings collected while parsing one workbook."""

    problems: list[ContentImportError] = field(default_factory=list)
    advisories: list[Warning] = field(default_factory=list)

    def error(self, problem: ContentImportError) -> None:
        self.problems.append(problem)

    def warn(self, advisory: Warning) -> None:
        self.advisories.append(advisory)

    @property
    def errors(self) -> list[str]:
        return [str(p) for p in self.problems]

    @property
    def warnings(self) -> list[str]:
        return [str(w) for w in self.advisories]

    @property
    def ok(self) -> bool:
        return not self.problems


@dataclass
class SubjectPackage:
    subject_info: dict[str, Any]
    topics: list[dict[str, Any]] = field(default_factory=list)
    concepts: list[dict[str, Any]] = field(default_factory=list)
    lesson_sections: list[dict[str, Any]] = field(default_factory=list)
    concept_questions: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class PastQuestionsPackage:
    exam_info: dict[str, Any]
    questions: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class ParseResult:
    success: bool
    type: str | None
    data: SubjectPackage | PastQuestionsPackage | None = None
    problems: list[ContentImportError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [str(p) for p in self.problems]

    @classmethod
    def from_issues(cls, package_type: str, data, issues: ParseIssues) -> "ParseResult":
        if not issues.ok:
            return cls(success=False, type=package_type, problems=list(issues.problems),
                       warnings=issues.warnings)
        return cls(success=True, type=package_type, data=data, warnings=issues.warnings)


@dataclass
class ImportResult:
    """Outcome of importing one file."""

    success: bool
    file_name: str
    type: str
    records_imported: int = 0
    records_updated: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def failed(cls, file_name: str, package_type: str, errors: list[str],
               warnings: list[str] | None = None) -> "ImportResult":
        return cls(success=False, file_name=file_name, type=package_type,
                   errors=list(errors), warnings=list(warnings or []))

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "fileName": self.file_name,
            "type": self.type,
            "recordsImported": self.records_imported,
            "recordsUpdated": self.records_updated,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def _validated(schema: RecordSchema, raw: dict[str, Any], row_number: int,
               issues: ParseIssues) -> dict[str, Any] | None:
    record = schema.normalize(raw)
    violations = schema.validate(record)
    for field_name, message in violations:
        issues.error(ValidationError(schema.name, row_number, field_name, message))
    return None if violations else record


def parse_info_record(workbook: Workbook, schema: RecordSchema,
                      issues: ParseIssues) -> dict[str, Any] | None:
    """Read and validate the single record of an info sheet."""
    row = read_info_sheet(workbook, schema.name)
    return _validated(schema, row.values, row.row_number, issues)


def parse_table_records(workbook: Workbook, schema: RecordSchema,
                        issues: ParseIssues) -> list[dict[str, Any]]:
    """Read every non-blank row of a table sheet, keeping the ones that validate.

    Each kept record carries its spreadsheet row under ``_row`` for later
    cross-checks.
    """
    records: list[dict[str, Any]] = []
    for row in read_table_sheet(workbook, schema.name):
        record = _validated(schema, row.values, row.row_number, issues)
        if record is not None:
            record["_row"] = row.row_number
            records.append(record)
    return records

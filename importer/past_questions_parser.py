"""Past exam questions package parser.

An exam workbook holds one exam board / subject pair (``Exam_Info``) and a
flat ``Questions`` table. Topic and concept codes on questions are soft
references and are not checked against any subject.
"""

from __future__ import annotations

import logging
from pathlib import Path

from openpyxl.workbook.workbook import Workbook

from importer import schemas
from importer.base import (
    PAST_QUESTIONS,
    ParseIssues,
    ParseResult,
    PastQuestionsPackage,
    parse_info_record,
    parse_table_records,
)
from importer.errors import SheetMissingError
from importer.workbook import load_workbook, missing_sheets

logger = logging.getLogger(__name__)

REQUIRED_SHEETS = ("Exam_Info", "Questions")


def parse_past_questions_workbook(workbook: Workbook) -> ParseResult:
    issues = ParseIssues()

    missing = missing_sheets(workbook, REQUIRED_SHEETS)
    if missing:
        issues.error(SheetMissingError(missing))
        return ParseResult.from_issues(PAST_QUESTIONS, None, issues)

    exam_info = parse_info_record(workbook, schemas.EXAM_INFO, issues)
    questions = parse_table_records(workbook, schemas.PAST_QUESTION, issues)

    package = PastQuestionsPackage(exam_info=exam_info or {}, questions=questions)
    return ParseResult.from_issues(PAST_QUESTIONS, package, issues)


class PastQuestionsParser:
    type = PAST_QUESTIONS
    required_sheets = REQUIRED_SHEETS

    def __init__(self, file_path: str | Path, workbook: Workbook | None = None) -> None:
        self.file_path = Path(file_path)
        self._workbook = workbook

    def parse(self) -> ParseResult:
        if self._workbook is None:
            self._workbook = load_workbook(self.file_path)
        result = parse_past_questions_workbook(self._workbook)
        logger.debug(
            "Parsed past questions workbook %s: %d errors",
            self.file_path.name, len(result.problems),
        )
        return result

"""Subject package parser.

A subject workbook carries one subject with its topics, concepts, lesson
sections and concept questions. After every sheet is parsed the package is
cross-checked: child codes must resolve to parsed parents, codes must be
unique within the file, and each concept should have 10-15 questions.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path

from openpyxl.workbook.workbook import Workbook

from importer import schemas
from importer.base import (
    SUBJECT,
    ParseIssues,
    ParseResult,
    SubjectPackage,
    parse_info_record,
    parse_table_records,
)
from importer.errors import (
    DuplicateCodeError,
    QuestionCountWarning,
    ReferentialIntegrityError,
    SheetMissingError,
)
from importer.normalize import split_comma_separated
from importer.workbook import load_workbook, missing_sheets

logger = logging.getLogger(__name__)

REQUIRED_SHEETS = ("Subject_Info", "Topics", "Concepts", "Lesson_Content", "Concept_Questions")

QUESTION_COUNT_MIN = 10
QUESTION_COUNT_MAX = 15


def check_references(package: SubjectPackage, issues: ParseIssues) -> None:
    topic_codes = {t["topic_code"] for t in package.topics}
    concept_codes = {c["concept_code"] for c in package.concepts}

    for concept in package.concepts:
        if concept["topic_code"] not in topic_codes:
            issues.error(ReferentialIntegrityError(
                f'Concept "{concept["concept_code"]}" references unknown topic "{concept["topic_code"]}"'
            ))

    for section in package.lesson_sections:
        if section["concept_code"] not in concept_codes:
            issues.error(ReferentialIntegrityError(
                f'Lesson_Content row {section.get("_row", "?")} references unknown concept '
                f'"{section["concept_code"]}"'
            ))

    for question in package.concept_questions:
        if question["concept_code"] not in concept_codes:
            issues.error(ReferentialIntegrityError(
                f'Question "{question["question_code"]}" references unknown concept '
                f'"{question["concept_code"]}"'
            ))


def check_duplicates(codes: list[str], field_name: str, issues: ParseIssues) -> None:
    counts = Counter(codes)
    # Counter keeps first-seen order
    duplicates = [code for code, n in counts.items() if n > 1]
    if duplicates:
        issues.error(DuplicateCodeError(field_name, duplicates))


def check_question_counts(package: SubjectPackage, issues: ParseIssues) -> None:
    counts = Counter(q["concept_code"] for q in package.concept_questions)
    for concept in package.concepts:
        code = concept["concept_code"]
        count = counts.get(code, 0)
        if count < QUESTION_COUNT_MIN or count > QUESTION_COUNT_MAX:
            issues.warn(QuestionCountWarning(code, count, QUESTION_COUNT_MIN, QUESTION_COUNT_MAX))


def parse_subject_workbook(workbook: Workbook) -> ParseResult:
    """Parse and cross-validate a loaded subject workbook."""
    issues = ParseIssues()

    missing = missing_sheets(workbook, REQUIRED_SHEETS)
    if missing:
        issues.error(SheetMissingError(missing))
        return ParseResult.from_issues(SUBJECT, None, issues)

    subject_info = parse_info_record(workbook, schemas.SUBJECT_INFO, issues)
    if subject_info is not None:
        subject_info["boards_supported"] = split_comma_separated(subject_info["boards_supported"])

    package = SubjectPackage(
        subject_info=subject_info or {},
        topics=parse_table_records(workbook, schemas.TOPIC, issues),
        concepts=parse_table_records(workbook, schemas.CONCEPT, issues),
        lesson_sections=parse_table_records(workbook, schemas.LESSON_CONTENT, issues),
        concept_questions=parse_table_records(workbook, schemas.CONCEPT_QUESTION, issues),
    )

    check_references(package, issues)
    check_duplicates([t["topic_code"] for t in package.topics], "topic_code", issues)
    check_duplicates([c["concept_code"] for c in package.concepts], "concept_code", issues)
    check_duplicates([q["question_code"] for q in package.concept_questions], "question_code", issues)
    check_question_counts(package, issues)

    return ParseResult.from_issues(SUBJECT, package, issues)


class SubjectParser:
    type = SUBJECT
    required_sheets = REQUIRED_SHEETS

    def __init__(self, file_path: str | Path, workbook: Workbook | None = None) -> None:
        self.file_path = Path(file_path)
        self._workbook = workbook

    def parse(self) -> ParseResult:
        if self._workbook is None:
            self._workbook = load_workbook(self.file_path)
        result = parse_subject_workbook(self._workbook)
        logger.debug(
            "Parsed subject workbook %s: %d errors, %d warnings",
            self.file_path.name, len(result.problems), len(result.warnings),
        )
        return result

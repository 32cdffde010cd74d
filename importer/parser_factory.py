"""Workbook type detection and parser selection.

Detection looks only at sheet names. The workbook is loaded once and the
same loaded object is handed to the parser.
"""

from __future__ import annotations

from pathlib import Path

from importer.base import MODULE, PAST_QUESTIONS, SUBJECT
from importer.errors import UnknownSpreadsheetType, UnsupportedType
from importer.past_questions_parser import PastQuestionsParser
from importer.subject_parser import SubjectParser
from importer.workbook import load_workbook, sheet_names

# Checked in this order; the first marker found wins.
MARKER_SHEETS = (
    ("Subject_Info", SUBJECT),
    ("Exam_Info", PAST_QUESTIONS),
    ("Module_Info", MODULE),
)

Parser = SubjectParser | PastQuestionsParser


def detect_type(names: list[str]) -> str | None:
    present = set(names)
    for marker, package_type in MARKER_SHEETS:
        if marker in present:
            return package_type
    return None


def create_parser(path: str | Path) -> Parser:
    workbook = load_workbook(path)
    names = sheet_names(workbook)
    package_type = detect_type(names)

    if package_type == SUBJECT:
        return SubjectParser(path, workbook)
    if package_type == PAST_QUESTIONS:
        return PastQuestionsParser(path, workbook)
    if package_type == MODULE:
        raise UnsupportedType(MODULE)
    raise UnknownSpreadsheetType(names)

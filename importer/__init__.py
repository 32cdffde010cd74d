"""Spreadsheet content import pipeline.

scanner → parser_factory → subject_parser / past_questions_parser →
db_importer, driven file by file by orchestrator.
"""

from importer.base import ImportResult, ParseResult, PastQuestionsPackage, SubjectPackage
from importer.db_importer import DatabaseImporter
from importer.orchestrator import ImportOrchestrator, ImportSummary
from importer.parser_factory import create_parser, detect_type
from importer.scanner import CATEGORIES, ContentFile, FileScanner

__all__ = [
    "CATEGORIES",
    "ContentFile",
    "DatabaseImporter",
    "FileScanner",
    "ImportOrchestrator",
    "ImportResult",
    "ImportSummary",
    "ParseResult",
    "PastQuestionsPackage",
    "SubjectPackage",
    "create_parser",
    "detect_type",
]

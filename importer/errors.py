"""Error taxonomy for the content import pipeline.

Parse-time problems are collected as instances of these classes (see
``importer.base.ParseIssues``); import-time problems are raised inside the
transaction and turned into a failed ``ImportResult``.
"""

from __future__ import annotations


class ContentImportError(Exception):
    """Base class for every import pipeline error."""


class DiscoveryError(ContentImportError):
    """A content category directory is absent. Logged, never fatal."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Directory not found: {path}")
        self.path = path


class WorkbookReadError(ContentImportError):
    """The file could not be opened as a workbook."""


class TypeDetectionError(ContentImportError):
    """The workbook type could not be mapped to a parser."""


class UnknownSpreadsheetType(TypeDetectionError):
    def __init__(self, found_sheets: list[str]) -> None:
        super().__init__(
            "Unknown spreadsheet type. File must contain one of these sheets: "
            "Subject_Info, Exam_Info, or Module_Info. "
            f"Found sheets: {', '.join(found_sheets)}"
        )
        self.found_sheets = list(found_sheets)


class UnsupportedType(TypeDetectionError):
    def __init__(self, package_type: str) -> None:
        super().__init__(f"{package_type.capitalize()} packages are not supported yet")
        self.package_type = package_type


class SheetMissingError(ContentImportError):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing required sheets: {', '.join(missing)}")
        self.missing = list(missing)


class ValidationError(ContentImportError):
    """One field of one row failed its schema."""

    def __init__(self, sheet: str, row: int, field: str, message: str) -> None:
        super().__init__(f"{sheet} row {row}: {field}: {message}")
        self.sheet = sheet
        self.row = row
        self.field = field


class ReferentialIntegrityError(ContentImportError):
    """A child row points at a parent code that was not parsed."""


class DuplicateCodeError(ContentImportError):
    def __init__(self, field: str, codes: list[str], detail: str = "") -> None:
        message = f"Duplicate {field} found: {', '.join(codes)}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.field = field
        self.codes = list(codes)


class TransactionError(ContentImportError):
    """A store write inside an import transaction failed."""


class MissingReferenceError(TransactionError):
    """A code could not be resolved to a store id while importing."""


class QuestionCountWarning(UserWarning):
    """Advisory: a concept's question count is outside the recommended band."""

    def __init__(self, concept_code: str, count: int, minimum: int, maximum: int) -> None:
        if count < minimum:
            message = (
                f'Concept "{concept_code}" has only {count} questions '
                f"(recommended: {minimum}-{maximum})"
            )
        else:
            message = (
                f'Concept "{concept_code}" has {count} questions '
                f"(recommended: {minimum}-{maximum})"
            )
        super().__init__(message)
        self.concept_code = concept_code
        self.count = count

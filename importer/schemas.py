"""Declarative record schemas for every sheet kind.

Each schema lists its fields with a primitive kind, required/optional flag,
numeric bounds and closed enumerations. ``RecordSchema.validate`` reports
every violation on a record rather than stopping at the first one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from importer.normalize import normalize_number, normalize_string

STRING = "string"
INTEGER = "integer"

SECTION_TYPES = ("intro", "explanation", "example", "formula", "key_point", "mistake", "summary")
DIFFICULTIES = ("easy", "medium", "hard")
ANSWER_LETTERS = ("A", "B", "C", "D")

# Largest value an SQLite INTEGER column can bind
SQLITE_INT_MAX = 2**63 - 1


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: str = STRING
    required: bool = True
    minimum: int | None = None
    maximum: int | None = None
    choices: tuple[str, ...] | None = None
    label: str = ""

    @property
    def display(self) -> str:
        return self.label or self.name.replace("_", " ").capitalize()

    def normalize(self, value: Any) -> Any:
        if self.kind == INTEGER:
            return normalize_number(value)
        text = normalize_string(value)
        if not self.required and text == "":
            return None
        return text

    def check(self, value: Any) -> list[str]:
        """Return the constraint violations for one normalized value."""
        problems: list[str] = []
        if self.kind == INTEGER:
            if not isinstance(value, int):
                return [f"{self.display} must be a whole number"]
            if self.minimum is not None and value < self.minimum:
                problems.append(f"{self.display} must be >= {self.minimum}")
            maximum = SQLITE_INT_MAX if self.maximum is None else self.maximum
            if value > maximum:
                problems.append(f"{self.display} must be <= {maximum}")
            return problems

        if value is None or value == "":
            if self.required:
                problems.append(f"{self.display} is required")
            return problems
        if self.choices is not None and value not in self.choices:
            problems.append(f"{self.display} must be one of: {', '.join(self.choices)}")
        return problems


@dataclass(frozen=True)
class RecordSchema:
    name: str
    fields: tuple[FieldSpec, ...]

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def normalize(self, raw: dict[str, Any]) -> dict[str, Any]:
        """Coerce the declared fields of a raw row. Undeclared columns are dropped."""
        return {f.name: f.normalize(raw.get(f.name)) for f in self.fields}

    def validate(self, record: dict[str, Any]) -> list[tuple[str, str]]:
        """Return ``(field, message)`` for every violated constraint."""
        violations: list[tuple[str, str]] = []
        for f in self.fields:
            for message in f.check(record.get(f.name)):
                violations.append((f.name, message))
        return violations


def _options() -> tuple[FieldSpec, ...]:
    return tuple(
        FieldSpec(f"option_{letter}", label=f"Option {letter.upper()}")
        for letter in "abcd"
    )


SUBJECT_INFO = RecordSchema("Subject_Info", (
    FieldSpec("subject_code", label="Subject code"),
    FieldSpec("subject_name", label="Subject name"),
    FieldSpec("category"),
    FieldSpec("level"),
    FieldSpec("description"),
    FieldSpec("version"),
    FieldSpec("boards_supported", label="Boards supported"),
))

TOPIC = RecordSchema("Topics", (
    FieldSpec("topic_code", label="Topic code"),
    FieldSpec("name", label="Topic name"),
    FieldSpec("description"),
    FieldSpec("order_index", INTEGER, minimum=0, label="Order index"),
))

CONCEPT = RecordSchema("Concepts", (
    FieldSpec("concept_code", label="Concept code"),
    FieldSpec("topic_code", label="Topic code"),
    FieldSpec("title"),
    FieldSpec("short_description", label="Short description"),
    FieldSpec("order_index", INTEGER, minimum=0, label="Order index"),
    FieldSpec("estimated_minutes", INTEGER, minimum=1, label="Estimated minutes"),
))

LESSON_CONTENT = RecordSchema("Lesson_Content", (
    FieldSpec("concept_code", label="Concept code"),
    FieldSpec("section_type", choices=SECTION_TYPES, label="Section type"),
    FieldSpec("content"),
    FieldSpec("order_index", INTEGER, minimum=0, label="Order index"),
))

CONCEPT_QUESTION = RecordSchema("Concept_Questions", (
    FieldSpec("question_code", label="Question code"),
    FieldSpec("concept_code", label="Concept code"),
    FieldSpec("question_text", label="Question text"),
    *_options(),
    FieldSpec("correct_answer", choices=ANSWER_LETTERS, label="Correct answer"),
    FieldSpec("difficulty", choices=DIFFICULTIES),
    FieldSpec("hint", required=False),
    FieldSpec("explanation"),
))

EXAM_INFO = RecordSchema("Exam_Info", (
    FieldSpec("exam_board", label="Exam board"),
    FieldSpec("subject_code", label="Subject code"),
    FieldSpec("years_covered", label="Years covered"),
    FieldSpec("version"),
))

PAST_QUESTION = RecordSchema("Questions", (
    FieldSpec("year", INTEGER, minimum=1900, maximum=2100),
    FieldSpec("question_number", INTEGER, minimum=1, label="Question number"),
    FieldSpec("topic_code", required=False, label="Topic code"),
    FieldSpec("concept_code", required=False, label="Concept code"),
    FieldSpec("question_text", label="Question text"),
    *_options(),
    FieldSpec("correct_answer", choices=ANSWER_LETTERS, label="Correct answer"),
    FieldSpec("explanation"),
    FieldSpec("difficulty", choices=DIFFICULTIES),
))


"""
Test fixtures for the content service.

Provides app, client and db fixtures with file-based SQLite, a content root
laid out like production, and openpyxl workbook builders.
"""

from __future__ import annotations

import pytest
from openpyxl import Workbook

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))


SUBJECT_INFO_HEADERS = [
    "subject_code", "subject_name", "category", "level", "description", "version", "boards_supported",
]
TOPIC_HEADERS = ["topic_code", "name", "description", "order_index"]
CONCEPT_HEADERS = [
    "concept_code", "topic_code", "title", "short_description", "order_index", "estimated_minutes",
]
LESSON_HEADERS = ["concept_code", "section_type", "content", "order_index"]
QUESTION_HEADERS = [
    "question_code", "concept_code", "question_text", "option_a", "option_b", "option_c",
    "option_d", "correct_answer", "difficulty", "hint", "explanation",
]
EXAM_INFO_HEADERS = ["exam_board", "subject_code", "years_covered", "version"]
PAST_QUESTION_HEADERS = [
    "year", "question_number", "topic_code", "concept_code", "question_text", "option_a",
    "option_b", "option_c", "option_d", "correct_answer", "explanation", "difficulty",
]

DIFFICULTY_CYCLE = ("easy", "medium", "hard")


def build_workbook(path: Path, sheets: dict[str, list[list]]) -> Path:
    """Save a workbook with one sheet per key, rows appended in order."""
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(row)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def subject_sheets(subject_code: str = "MATH001", prefix: str = "",
                   question_count: int = 12) -> dict[str, list[list]]:
    """One topic, one concept, three lesson sections and ``question_count`` questions."""
    topic = f"{prefix}T1"
    concept = f"{prefix}C1"
    return {
        "Subject_Info": [
            SUBJECT_INFO_HEADERS,
            [subject_code, "Mathematics", "Science", "SSS", "Core mathematics", "1.0", "WAEC,NECO"],
        ],
        "Topics": [TOPIC_HEADERS, [topic, "Algebra", "Working with unknowns", 0]],
        "Concepts": [
            CONCEPT_HEADERS,
            [concept, topic, "Linear equations", "Solving for x", 0, 15],
        ],
        "Lesson_Content": [
            LESSON_HEADERS,
            [concept, "intro", "An equation balances two sides.", 0],
            [concept, "explanation", "Do the same thing to both sides.", 1],
            [concept, "summary", "Isolate x.", 2],
        ],
        "Concept_Questions": [
            QUESTION_HEADERS,
            *[
                [f"{prefix}Q{i}", concept, f"Solve x + {i} = {i + 2}", "1", "2", "3", "4", "B",
                 DIFFICULTY_CYCLE[i % 3], "", "Subtract from both sides"]
                for i in range(1, question_count + 1)
            ],
        ],
    }


def past_question_sheets(count: int = 5, exam_board: str = "WAEC",
                         subject_code: str = "MATH001") -> dict[str, list[list]]:
    """``count`` questions alternating between 2020 and 2019."""
    return {
        "Exam_Info": [EXAM_INFO_HEADERS, [exam_board, subject_code, "2019-2020", "1.0"]],
        "Questions": [
            PAST_QUESTION_HEADERS,
            *[
                [2020 - (i % 2), i, "T1", "C1", f"Question {i}", "a", "b", "c", "d", "A",
                 "Because", DIFFICULTY_CYCLE[i % 3]]
                for i in range(1, count + 1)
            ],
        ],
    }


@pytest.fixture
def app(tmp_path):
    """Create app with file-based SQLite for testing."""
    from app import create_app

    db_file = str(tmp_path / "test.db")
    app = create_app({
        "TESTING": True,
        "DATABASE": db_file,
        "SECRET_KEY": "test-secret-key",
        "CONTENT_ROOT": str(tmp_path / "content"),
    })

    with app.app_context():
        from database import init_db, run_migrations

        init_db()
        run_migrations()

        yield app


@pytest.fixture
def client(app):
    """Test client."""
    return app.test_client()


@pytest.fixture
def db(app):
    """Direct database access for store tests."""
    with app.app_context():
        from database import get_db
        yield get_db()


@pytest.fixture
def content_root(tmp_path):
    """Empty content tree with all three category directories."""
    root = tmp_path / "content"
    for category in ("subjects", "past-questions", "modules"):
        (root / category).mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture
def subject_file(content_root):
    """Write a subject workbook under content/subjects and return its path."""
    def _write(name: str = "mathematics.xlsx", sheets: dict | None = None, **kwargs) -> Path:
        return build_workbook(content_root / "subjects" / name, sheets or subject_sheets(**kwargs))
    return _write


@pytest.fixture
def past_questions_file(content_root):
    """Write a past-questions workbook under content/past-questions and return its path."""
    def _write(name: str = "waec_math.xlsx", sheets: dict | None = None, **kwargs) -> Path:
        return build_workbook(content_root / "past-questions" / name, sheets or past_question_sheets(**kwargs))
    return _write


@pytest.fixture
def seeded_content(app, db, subject_file, past_questions_file):
    """MATH001 subject plus five WAEC past questions, imported through the pipeline."""
    from importer import ImportOrchestrator

    subject_file()
    past_questions_file()
    summary = ImportOrchestrator(db, app.config["CONTENT_ROOT"]).import_all()
    assert summary.failure_count == 0
    return summary

"""
Read-side queries for imported content.

Rows are returned as JSON-ready dicts with the API's camelCase keys.
Sibling ordering follows order_index, ties broken by insertion order (id).
"""

from __future__ import annotations

import json
import sqlite3
from typing import Any

from database import get_db


def _subject(row: sqlite3.Row) -> dict[str, Any]:
    return {
        "id": row["id"],
        "code": row["code"],
        "name": row["name"],
        "category": row["category"],
        "level": row["level"],
        "description": row["description"],
        "version": row["version"],
        "boardsSupported": json.loads(row["boards_supported"] or "[]"),
        "createdAt": row["created_at"],
        "updatedAt": row["updated_at"],
    }


def _topic(row: sqlite3.Row) -> dict[str, Any]:
    return {
        "id": row["id"],
        "subjectId": row["subject_id"],
        "code": row["code"],
        "name": row["name"],
        "description": row["description"],
        "orderIndex": row["order_index"],
        "createdAt": row["created_at"],
    }


def _concept(row: sqlite3.Row) -> dict[str, Any]:
    return {
        "id": row["id"],
        "topicId": row["topic_id"],
        "code": row["code"],
        "title": row["title"],
        "shortDescription": row["short_description"],
        "orderIndex": row["order_index"],
        "estimatedMinutes": row["estimated_minutes"],
        "createdAt": row["created_at"],
    }


def _section(row: sqlite3.Row) -> dict[str, Any]:
    return {
        "id": row["id"],
        "conceptId": row["concept_id"],
        "sectionType": row["section_type"],
        "content": row["content"],
        "orderIndex": row["order_index"],
        "createdAt": row["created_at"],
    }


def _options(row: sqlite3.Row) -> dict[str, str]:
    return {
        "optionA": row["option_a"],
        "optionB": row["option_b"],
        "optionC": row["option_c"],
        "optionD": row["option_d"],
    }


def _concept_question(row: sqlite3.Row) -> dict[str, Any]:
    return {
        "id": row["id"],
        "conceptId": row["concept_id"],
        "code": row["code"],
        "questionText": row["question_text"],
        **_options(row),
        "correctAnswer": row["correct_answer"],
        "difficulty": row["difficulty"],
        "hint": row["hint"],
        "explanation": row["explanation"],
        "createdAt": row["created_at"],
    }


def _past_question(row: sqlite3.Row) -> dict[str, Any]:
    return {
        "id": row["id"],
        "examBoard": row["exam_board"],
        "subjectCode": row["subject_code"],
        "year": row["year"],
        "questionNumber": row["question_number"],
        "topicCode": row["topic_code"],
        "conceptCode": row["concept_code"],
        "questionText": row["question_text"],
        **_options(row),
        "correctAnswer": row["correct_answer"],
        "explanation": row["explanation"],
        "difficulty": row["difficulty"],
        "createdAt": row["created_at"],
    }


# ── Subjects & topics ─────────────────────────────────────────────


def list_subjects() -> list[dict]:
    rows = get_db().execute("SELECT * FROM subjects ORDER BY name, id").fetchall()
    return [_subject(r) for r in rows]


def get_subject(code: str) -> dict | None:
    row = get_db().execute("SELECT * FROM subjects WHERE code = ?", (code,)).fetchone()
    return _subject(row) if row else None


def list_topics(subject_id: int) -> list[dict]:
    rows = get_db().execute(
        "SELECT * FROM topics WHERE subject_id = ? ORDER BY order_index, id", (subject_id,)
    ).fetchall()
    return [_topic(r) for r in rows]


def get_topic(topic_id: int) -> dict | None:
    row = get_db().execute("SELECT * FROM topics WHERE id = ?", (topic_id,)).fetchone()
    return _topic(row) if row else None


# ── Concepts ──────────────────────────────────────────────────────


def list_concepts(topic_id: int) -> list[dict]:
    rows = get_db().execute(
        "SELECT * FROM concepts WHERE topic_id = ? ORDER BY order_index, id", (topic_id,)
    ).fetchall()
    return [_concept(r) for r in rows]


def get_concept(concept_id: int) -> dict | None:
    row = get_db().execute("SELECT * FROM concepts WHERE id = ?", (concept_id,)).fetchone()
    return _concept(row) if row else None


def list_lesson_sections(concept_id: int) -> list[dict]:
    rows = get_db().execute(
        "SELECT * FROM lesson_sections WHERE concept_id = ? ORDER BY order_index, id",
        (concept_id,),
    ).fetchall()
    return [_section(r) for r in rows]


def list_concept_questions(concept_id: int, difficulty: str | None = None,
                           limit: int | None = None) -> list[dict]:
    sql = "SELECT * FROM concept_questions WHERE concept_id = ?"
    params: list[Any] = [concept_id]
    if difficulty:
        sql += " AND difficulty = ?"
        params.append(difficulty)
    sql += " ORDER BY id"
    if limit:
        sql += " LIMIT ?"
        params.append(limit)
    return [_concept_question(r) for r in get_db().execute(sql, params).fetchall()]


# ── Past questions ────────────────────────────────────────────────


def list_past_questions(exam_board: str, subject_code: str, year: int | None = None,
                        topic_code: str | None = None, limit: int | None = None) -> list[dict]:
    sql = "SELECT * FROM past_questions WHERE exam_board = ? AND subject_code = ?"
    params: list[Any] = [exam_board, subject_code]
    if year is not None:
        sql += " AND year = ?"
        params.append(year)
    if topic_code:
        sql += " AND topic_code = ?"
        params.append(topic_code)
    sql += " ORDER BY year DESC, question_number ASC, id"
    if limit:
        sql += " LIMIT ?"
        params.append(limit)
    return [_past_question(r) for r in get_db().execute(sql, params).fetchall()]

"""
Database importer: persists parsed packages, one transaction per file.

Subject packages are upserted at the root and replaced underneath: the
subject row keeps its id (metadata updated in place) while every topic,
concept, lesson section and concept question beneath it is deleted
leaf-to-root and recreated from the package. Past question packages replace
every row for their (exam_board, subject_code) pair.

Any failure rolls the whole file back; the caller gets a failed
ImportResult with zero records counted.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime

from importer.base import PAST_QUESTIONS, SUBJECT, ImportResult, PastQuestionsPackage, SubjectPackage
from importer.errors import ContentImportError, DuplicateCodeError, MissingReferenceError, TransactionError

logger = logging.getLogger(__name__)

# Lookups for codes that another subject already owns.
_FOREIGN_CODE_QUERIES = {
    "topic_code": (
        "SELECT t.code AS code, s.code AS owner FROM topics t "
        "JOIN subjects s ON s.id = t.subject_id "
        "WHERE t.code IN ({marks}) AND s.id != ?"
    ),
    "concept_code": (
        "SELECT c.code AS code, s.code AS owner FROM concepts c "
        "JOIN topics t ON t.id = c.topic_id JOIN subjects s ON s.id = t.subject_id "
        "WHERE c.code IN ({marks}) AND s.id != ?"
    ),
    "question_code": (
        "SELECT q.code AS code, s.code AS owner FROM concept_questions q "
        "JOIN concepts c ON c.id = q.concept_id JOIN topics t ON t.id = c.topic_id "
        "JOIN subjects s ON s.id = t.subject_id "
        "WHERE q.code IN ({marks}) AND s.id != ?"
    ),
}

_CODE_CHUNK = 500


class DatabaseImporter:
    """Writes parsed packages through one sqlite3 connection."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self.db = db

    # ── Transactions ──────────────────────────────────────────────

    def _begin(self) -> None:
        if not self.db.in_transaction:
            self.db.execute("BEGIN IMMEDIATE")

    def _run(self, file_name: str, package_type: str, write) -> ImportResult:
        try:
            self._begin()
            imported, updated = write()
            self.db.commit()
        except ContentImportError as exc:
            self.db.rollback()
            logger.warning("Rolled back %s: %s", file_name, exc, extra={"file_name": file_name})
            return ImportResult.failed(file_name, package_type, [str(exc)])
        except sqlite3.Error as exc:
            self.db.rollback()
            error = TransactionError(f"Database write failed: {exc}")
            logger.warning("Rolled back %s: %s", file_name, error, extra={"file_name": file_name})
            return ImportResult.failed(file_name, package_type, [str(error)])
        except Exception as exc:
            # e.g. OverflowError binding an int outside SQLite's 64-bit range
            self.db.rollback()
            error = TransactionError(f"Import failed: {exc}")
            logger.exception("Rolled back %s after unexpected error", file_name,
                             extra={"file_name": file_name})
            return ImportResult.failed(file_name, package_type, [str(error)])

        return ImportResult(
            success=True,
            file_name=file_name,
            type=package_type,
            records_imported=imported,
            records_updated=updated,
        )

    # ── Subjects ──────────────────────────────────────────────────

    def import_subject(self, package: SubjectPackage, file_name: str) -> ImportResult:
        return self._run(file_name, SUBJECT, lambda: self._write_subject(package))

    def _write_subject(self, package: SubjectPackage) -> tuple[int, int]:
        info = package.subject_info
        now = datetime.now().isoformat()
        imported = 0
        updated = 0

        existing = self.db.execute(
            "SELECT id FROM subjects WHERE code = ?", (info["subject_code"],)
        ).fetchone()

        fields = (
            info["subject_name"], info["category"], info["level"], info["description"],
            info["version"], json.dumps(info["boards_supported"]),
        )
        if existing:
            subject_id = existing["id"]
            self.db.execute(
                "UPDATE subjects SET name = ?, category = ?, level = ?, description = ?, "
                "version = ?, boards_supported = ?, updated_at = ? WHERE id = ?",
                (*fields, now, subject_id),
            )
            updated += 1
            self._delete_subject_tree(subject_id)
        else:
            cur = self.db.execute(
                "INSERT INTO subjects (code, name, category, level, description, version, "
                "boards_supported, created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (info["subject_code"], *fields, now, now),
            )
            subject_id = cur.lastrowid
            imported += 1

        self._reject_foreign_codes(package, subject_id)

        topic_ids: dict[str, int] = {}
        for topic in package.topics:
            cur = self.db.execute(
                "INSERT INTO topics (subject_id, code, name, description, order_index, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (subject_id, topic["topic_code"], topic["name"], topic["description"],
                 topic["order_index"], now),
            )
            topic_ids[topic["topic_code"]] = cur.lastrowid
            imported += 1

        concept_ids: dict[str, int] = {}
        for concept in package.concepts:
            topic_id = topic_ids.get(concept["topic_code"])
            if topic_id is None:
                raise MissingReferenceError(
                    f"Topic {concept['topic_code']} not found for concept {concept['concept_code']}"
                )
            cur = self.db.execute(
                "INSERT INTO concepts (topic_id, code, title, short_description, order_index, "
                "estimated_minutes, created_at) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (topic_id, concept["concept_code"], concept["title"], concept["short_description"],
                 concept["order_index"], concept["estimated_minutes"], now),
            )
            concept_ids[concept["concept_code"]] = cur.lastrowid
            imported += 1

        for section in package.lesson_sections:
            concept_id = concept_ids.get(section["concept_code"])
            if concept_id is None:
                raise MissingReferenceError(
                    f"Concept {section['concept_code']} not found for lesson section"
                )
            self.db.execute(
                "INSERT INTO lesson_sections (concept_id, section_type, content, order_index, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (concept_id, section["section_type"], section["content"], section["order_index"], now),
            )
            imported += 1

        for question in package.concept_questions:
            concept_id = concept_ids.get(question["concept_code"])
            if concept_id is None:
                raise MissingReferenceError(
                    f"Concept {question['concept_code']} not found for question {question['question_code']}"
                )
            self.db.execute(
                "INSERT INTO concept_questions (concept_id, code, question_text, option_a, option_b, "
                "option_c, option_d, correct_answer, difficulty, hint, explanation, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (concept_id, question["question_code"], question["question_text"],
                 question["option_a"], question["option_b"], question["option_c"], question["option_d"],
                 question["correct_answer"], question["difficulty"], question.get("hint"),
                 question["explanation"], now),
            )
            imported += 1

        logger.info(
            "Subject %s written: %d created, %d updated",
            info["subject_code"], imported, updated,
        )
        return imported, updated

    def _delete_subject_tree(self, subject_id: int) -> None:
        """Delete everything beneath a subject, leaves first."""
        concepts_of_subject = (
            "SELECT c.id FROM concepts c JOIN topics t ON t.id = c.topic_id WHERE t.subject_id = ?"
        )
        sections = self.db.execute(
            f"DELETE FROM lesson_sections WHERE concept_id IN ({concepts_of_subject})", (subject_id,)
        ).rowcount
        questions = self.db.execute(
            f"DELETE FROM concept_questions WHERE concept_id IN ({concepts_of_subject})", (subject_id,)
        ).rowcount
        concepts = self.db.execute(
            "DELETE FROM concepts WHERE topic_id IN (SELECT id FROM topics WHERE subject_id = ?)",
            (subject_id,),
        ).rowcount
        topics = self.db.execute(
            "DELETE FROM topics WHERE subject_id = ?", (subject_id,)
        ).rowcount
        logger.debug(
            "Cleared subject %s: %d topics, %d concepts, %d sections, %d questions",
            subject_id, topics, concepts, sections, questions,
        )

    def _reject_foreign_codes(self, package: SubjectPackage, subject_id: int) -> None:
        """Fail when a package code is already owned by a different subject."""
        codes_by_field = {
            "topic_code": [t["topic_code"] for t in package.topics],
            "concept_code": [c["concept_code"] for c in package.concepts],
            "question_code": [q["question_code"] for q in package.concept_questions],
        }
        for field_name, codes in codes_by_field.items():
            clashes: dict[str, str] = {}
            for start in range(0, len(codes), _CODE_CHUNK):
                chunk = codes[start:start + _CODE_CHUNK]
                sql = _FOREIGN_CODE_QUERIES[field_name].format(marks=", ".join("?" * len(chunk)))
                for row in self.db.execute(sql, (*chunk, subject_id)).fetchall():
                    clashes[row["code"]] = row["owner"]
            if clashes:
                owners = ", ".join(sorted(set(clashes.values())))
                raise DuplicateCodeError(
                    field_name, list(clashes), f"already imported by subject {owners}"
                )

    # ── Past questions ────────────────────────────────────────────

    def import_past_questions(self, package: PastQuestionsPackage, file_name: str) -> ImportResult:
        return self._run(file_name, PAST_QUESTIONS, lambda: self._write_past_questions(package))

    def _write_past_questions(self, package: PastQuestionsPackage) -> tuple[int, int]:
        board = package.exam_info["exam_board"]
        subject_code = package.exam_info["subject_code"]
        now = datetime.now().isoformat()

        removed = self.db.execute(
            "DELETE FROM past_questions WHERE exam_board = ? AND subject_code = ?",
            (board, subject_code),
        ).rowcount

        imported = 0
        for q in package.questions:
            self.db.execute(
                "INSERT INTO past_questions (exam_board, subject_code, year, question_number, "
                "topic_code, concept_code, question_text, option_a, option_b, option_c, option_d, "
                "correct_answer, explanation, difficulty, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (board, subject_code, q["year"], q["question_number"], q.get("topic_code"),
                 q.get("concept_code"), q["question_text"], q["option_a"], q["option_b"],
                 q["option_c"], q["option_d"], q["correct_answer"], q["explanation"],
                 q["difficulty"], now),
            )
            imported += 1

        logger.info(
            "Past questions %s/%s written: %d replaced by %d",
            board, subject_code, removed, imported,
        )
        return imported, 0

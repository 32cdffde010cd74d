"""Tests for importer.orchestrator: per-file isolation and summaries."""

from __future__ import annotations

import logging
from unittest.mock import patch

from conftest import build_workbook, past_question_sheets, subject_sheets


def _orchestrator(db, content_root):
    from importer import ImportOrchestrator
    return ImportOrchestrator(db, content_root)


class TestImportAll:
    def test_imports_every_category(self, db, content_root, subject_file, past_questions_file):
        subject_file()
        past_questions_file()

        summary = _orchestrator(db, content_root).import_all()

        assert summary.total_files == 2
        assert summary.success_count == 2
        assert summary.failure_count == 0
        assert [r.type for r in summary.results] == ["subject", "past_questions"]
        assert summary.results[0].records_imported == 18
        assert summary.missing_directories == []

    def test_empty_tree(self, db, content_root):
        summary = _orchestrator(db, content_root).import_all()
        assert summary.total_files == 0
        assert summary.results == []

    def test_failure_does_not_stop_run(self, db, content_root, subject_file):
        broken = subject_sheets(subject_code="BAD001", prefix="B-")
        del broken["Topics"]
        subject_file("a_broken.xlsx", sheets=broken)
        subject_file("b_math.xlsx")

        summary = _orchestrator(db, content_root).import_all()

        assert summary.total_files == 2
        assert summary.failure_count == 1
        assert summary.success_count == 1
        failed, ok = summary.results
        assert failed.file_name == "a_broken.xlsx"
        assert failed.errors == ["Missing required sheets: Topics"]
        assert failed.records_imported == 0
        assert ok.success
        assert db.execute("SELECT code FROM subjects").fetchall()[0]["code"] == "MATH001"

    def test_parse_errors_skip_import(self, db, content_root, subject_file):
        sheets = subject_sheets()
        sheets["Concepts"].append(["C2", "T9", "Orphan", "x", 1, 5])
        subject_file(sheets=sheets)

        summary = _orchestrator(db, content_root).import_all()

        assert summary.failure_count == 1
        assert 'Concept "C2" references unknown topic "T9"' in summary.results[0].errors
        assert db.execute("SELECT COUNT(*) FROM subjects").fetchone()[0] == 0

    def test_unreadable_file_is_unknown_type(self, db, content_root):
        (content_root / "subjects" / "corrupt.xlsx").write_bytes(b"garbage")

        result = _orchestrator(db, content_root).import_all().results[0]

        assert not result.success
        assert result.type == "unknown"
        assert result.errors[0].startswith('Failed to read file "')

    def test_module_workbook_rejected(self, db, content_root):
        build_workbook(content_root / "modules" / "m.xlsx", {"Module_Info": [["module_code"], ["M1"]]})

        result = _orchestrator(db, content_root).import_all().results[0]

        assert not result.success
        assert result.errors == ["Module packages are not supported yet"]

    def test_parser_warnings_carried_on_success(self, db, content_root, subject_file):
        subject_file(question_count=4)

        result = _orchestrator(db, content_root).import_all().results[0]

        assert result.success
        assert result.warnings == ['Concept "C1" has only 4 questions (recommended: 10-15)']

    def test_unexpected_error_isolated(self, db, content_root, subject_file, caplog):
        subject_file()
        with patch("importer.orchestrator.create_parser", side_effect=RuntimeError("boom")):
            with caplog.at_level(logging.ERROR, logger="importer.orchestrator"):
                summary = _orchestrator(db, content_root).import_all()

        assert summary.results[0].errors == ["boom"]
        assert "Unexpected error while parsing" in caplog.text

    def test_missing_directories_reported(self, db, tmp_path):
        root = tmp_path / "only_subjects"
        build_workbook(root / "subjects" / "math.xlsx", subject_sheets())

        summary = _orchestrator(db, root).import_all()

        assert summary.success_count == 1
        assert len(summary.missing_directories) == 2


class TestImportCategory:
    def test_only_requested_category(self, db, content_root, subject_file, past_questions_file):
        subject_file()
        past_questions_file()

        summary = _orchestrator(db, content_root).import_category("past-questions")

        assert summary.total_files == 1
        assert summary.results[0].type == "past_questions"
        assert db.execute("SELECT COUNT(*) FROM subjects").fetchone()[0] == 0


class TestSummaryDict:
    def test_camel_case_keys(self, db, content_root, past_questions_file):
        past_questions_file(count=3)

        data = _orchestrator(db, content_root).import_all().to_dict()

        assert data["totalFiles"] == 1
        assert data["successCount"] == 1
        assert data["failureCount"] == 0
        assert data["results"][0] == {
            "success": True,
            "fileName": "waec_math.xlsx",
            "type": "past_questions",
            "recordsImported": 3,
            "recordsUpdated": 0,
            "errors": [],
            "warnings": [],
        }


class TestReimportScenario:
    def test_past_questions_replaced(self, db, content_root):
        path = content_root / "past-questions" / "waec.xlsx"
        build_workbook(path, past_question_sheets(count=5))
        _orchestrator(db, content_root).import_all()

        build_workbook(path, past_question_sheets(count=3))
        summary = _orchestrator(db, content_root).import_all()

        assert summary.results[0].records_imported == 3
        assert db.execute("SELECT COUNT(*) FROM past_questions").fetchone()[0] == 3


class TestImportStageIsolation:
    def test_oversized_integer_fails_only_that_file(self, db, content_root, subject_file):
        sheets = subject_sheets(subject_code="BIG001", prefix="BIG-")
        sheets["Topics"][1][3] = 10**20
        subject_file("a_oversized.xlsx", sheets=sheets)
        subject_file("b_math.xlsx")

        summary = _orchestrator(db, content_root).import_all()

        bad, good = summary.results
        assert not bad.success
        assert any("Order index must be <=" in e for e in bad.errors)
        assert good.success
        assert good.records_imported == 18
        codes = [r["code"] for r in db.execute("SELECT code FROM subjects").fetchall()]
        assert codes == ["MATH001"]

    def test_unexpected_import_error_does_not_stop_run(self, db, content_root, subject_file,
                                                       past_questions_file, caplog):
        subject_file()
        past_questions_file()
        orchestrator = _orchestrator(db, content_root)

        with patch.object(orchestrator.importer, "import_subject", side_effect=RuntimeError("disk gone")):
            with caplog.at_level(logging.ERROR, logger="importer.orchestrator"):
                summary = orchestrator.import_all()

        failed, ok = summary.results
        assert not failed.success
        assert failed.type == "subject"
        assert failed.errors == ["disk gone"]
        assert ok.success
        assert ok.records_imported == 5
        assert db.in_transaction is False
        assert "Unexpected error while importing" in caplog.text

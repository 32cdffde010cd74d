"""Tests for importer.parser_factory: type detection from sheet names."""

from __future__ import annotations

import pytest

from conftest import build_workbook, past_question_sheets, subject_sheets


class TestDetectType:
    def test_markers(self):
        from importer.parser_factory import detect_type

        assert detect_type(["Topics", "Subject_Info"]) == "subject"
        assert detect_type(["Exam_Info"]) == "past_questions"
        assert detect_type(["Module_Info"]) == "module"
        assert detect_type(["Sheet1"]) is None

    def test_subject_marker_wins(self):
        from importer.parser_factory import detect_type

        assert detect_type(["Exam_Info", "Subject_Info"]) == "subject"


class TestCreateParser:
    def test_subject(self, tmp_path):
        from importer.parser_factory import create_parser
        from importer.subject_parser import SubjectParser

        parser = create_parser(build_workbook(tmp_path / "s.xlsx", subject_sheets()))
        assert isinstance(parser, SubjectParser)
        assert parser.parse().success

    def test_past_questions(self, tmp_path):
        from importer.parser_factory import create_parser
        from importer.past_questions_parser import PastQuestionsParser

        parser = create_parser(build_workbook(tmp_path / "p.xlsx", past_question_sheets()))
        assert isinstance(parser, PastQuestionsParser)

    def test_module_unsupported(self, tmp_path):
        from importer.errors import UnsupportedType
        from importer.parser_factory import create_parser

        path = build_workbook(tmp_path / "m.xlsx", {"Module_Info": [["module_code"], ["M1"]]})
        with pytest.raises(UnsupportedType, match="not supported yet"):
            create_parser(path)

    def test_unknown_lists_found_sheets(self, tmp_path):
        from importer.errors import UnknownSpreadsheetType
        from importer.parser_factory import create_parser

        path = build_workbook(tmp_path / "u.xlsx", {"Sheet1": [["a"]], "Notes": [["b"]]})
        with pytest.raises(UnknownSpreadsheetType) as exc:
            create_parser(path)
        assert exc.value.found_sheets == ["Sheet1", "Notes"]
        assert "Found sheets: Sheet1, Notes" in str(exc.value)

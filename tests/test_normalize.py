"""Tests for importer.normalize: cell coercion."""

from __future__ import annotations

import math

from importer.normalize import is_blank, normalize_number, normalize_string, split_comma_separated


class TestNormalizeString:
    def test_none_is_empty(self):
        assert normalize_string(None) == ""

    def test_trims_whitespace(self):
        assert normalize_string("  Algebra \n") == "Algebra"

    def test_integral_float_has_no_decimal(self):
        assert normalize_string(3.0) == "3"

    def test_fractional_float_kept(self):
        assert normalize_string(2.5) == "2.5"

    def test_int(self):
        assert normalize_string(2020) == "2020"


class TestNormalizeNumber:
    def test_empty_values_are_zero(self):
        assert normalize_number(None) == 0
        assert normalize_number("") == 0
        assert normalize_number("   ") == 0

    def test_non_numeric_is_zero(self):
        assert normalize_number("abc") == 0

    def test_numeric_string(self):
        assert normalize_number(" 42 ") == 42
        assert isinstance(normalize_number("42"), int)

    def test_float_string(self):
        assert normalize_number("2.5") == 2.5

    def test_integral_float_becomes_int(self):
        value = normalize_number(15.0)
        assert value == 15
        assert isinstance(value, int)

    def test_nan_and_inf_are_zero(self):
        assert normalize_number(math.nan) == 0
        assert normalize_number(math.inf) == 0
        assert normalize_number("inf") == 0

    def test_bool(self):
        assert normalize_number(True) == 1


class TestHelpers:
    def test_split_comma_separated(self):
        assert split_comma_separated("WAEC, NECO,,JAMB ") == ["WAEC", "NECO", "JAMB"]

    def test_split_empty(self):
        assert split_comma_separated("") == []

    def test_is_blank(self):
        assert is_blank([None, "", "  "])
        assert not is_blank([None, "x"])
        assert not is_blank([0])

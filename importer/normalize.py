"""Cell value coercion for loosely-typed spreadsheet input."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any


def normalize_string(value: Any) -> str:
    """Return the trimmed text of a cell, ``""`` for empty cells."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # 3.0 from a numeric cell should read as "3"
        return str(int(value))
    return str(value).strip()


def normalize_number(value: Any) -> int | float:
    """Parse a cell as a number. Empty or non-numeric input becomes 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return 0
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return 0
    if isinstance(number, float):
        if math.isnan(number) or math.isinf(number):
            return 0
        if number.is_integer():
            return int(number)
    return number


def split_comma_separated(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def is_blank(values: Iterable[Any]) -> bool:
    """True when every cell is empty after trimming."""
    return all(normalize_string(v) == "" for v in values)

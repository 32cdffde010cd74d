"""Spreadsheet reader: thin layer over openpyxl.

Sheets come in two shapes:
  - info sheets: headers in row 1, a single record in row 2
  - table sheets: headers in row 1, one record per row from row 2 on
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from importer.errors import WorkbookReadError
from importer.normalize import is_blank, normalize_string

HEADER_ROW = 1


@dataclass
class SheetRow:
    """A header-keyed row plus its 1-based spreadsheet row number."""

    row_number: int
    values: dict[str, Any] = field(default_factory=dict)


def load_workbook(path: str | Path) -> Workbook:
    try:
        return openpyxl.load_workbook(filename=str(path), data_only=True)
    except Exception as exc:  # openpyxl raises a mix of zipfile/xml/OS errors
        raise WorkbookReadError(f'Failed to read file "{path}": {exc}') from exc


def sheet_names(workbook: Workbook) -> list[str]:
    return list(workbook.sheetnames)


def missing_sheets(workbook: Workbook, required: list[str] | tuple[str, ...]) -> list[str]:
    present = set(workbook.sheetnames)
    return [name for name in required if name not in present]


def _headers(sheet: Worksheet) -> list[tuple[int, str]]:
    """Return ``(column_index, header)`` pairs, skipping empty header cells."""
    headers: list[tuple[int, str]] = []
    for idx, cell in enumerate(next(sheet.iter_rows(min_row=HEADER_ROW, max_row=HEADER_ROW, values_only=True), ())):
        name = normalize_string(cell)
        if name:
            headers.append((idx, name))
    return headers


def _keyed(headers: list[tuple[int, str]], cells: tuple) -> dict[str, Any]:
    return {name: (cells[idx] if idx < len(cells) else None) for idx, name in headers}


def read_info_sheet(workbook: Workbook, name: str) -> SheetRow:
    sheet = workbook[name]
    headers = _headers(sheet)
    data_row = HEADER_ROW + 1
    cells = next(sheet.iter_rows(min_row=data_row, max_row=data_row, values_only=True), ())
    return SheetRow(row_number=data_row, values=_keyed(headers, cells))


def read_table_sheet(workbook: Workbook, name: str) -> list[SheetRow]:
    sheet = workbook[name]
    headers = _headers(sheet)
    rows: list[SheetRow] = []
    for row_number, cells in enumerate(
        sheet.iter_rows(min_row=HEADER_ROW + 1, values_only=True), start=HEADER_ROW + 1
    ):
        values = _keyed(headers, cells)
        if is_blank(values.values()):
            continue
        rows.append(SheetRow(row_number=row_number, values=values))
    return rows

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..models.config_models import FillConfig
from ..models.payload import CellValue, Row, SheetResult
from ..models.workbook import ParsedWorkbook

"""Workbook reading and per-sheet normalization.

read_workbook() opens a workbook through pandas (openpyxl engine) and keeps
the raw grids plus sheet visibility. normalize_sheet() turns one grid into
row records:

1. first non-blank row is the header, blank rows are dropped
2. placeholder columns (``__EMPTY``, ``__EMPTY_1``, ...) are removed
3. optional forward-fill of the configured columns
"""

__all__ = [
    "FileReadError",
    "PLACEHOLDER_PREFIX",
    "read_workbook",
    "normalize_sheet",
    "extract_rows",
    "strip_placeholder_columns",
    "fill_forward",
    "is_empty",
]

PLACEHOLDER_PREFIX = "__EMPTY"
HIDDEN_STATES = frozenset({"hidden", "veryHidden"})


class FileReadError(Exception):
    """Raised when a workbook cannot be opened or parsed."""


def read_workbook(path: str | Path) -> ParsedWorkbook:
    """Open one workbook and return every sheet grid with its visibility.

    Only empty cells are treated as NA so strings like ``"NA"`` or ``"null"``
    survive untouched. Date cells come back as datetimes.

    Raises:
        FileReadError: the file is missing, unreadable or not a workbook
    """
    try:
        with pd.ExcelFile(path, engine="openpyxl") as xls:
            sheet_names = [str(name) for name in xls.sheet_names]
            states = {
                str(ws.title): getattr(ws, "sheet_state", "visible") for ws in xls.book.worksheets
            }
            sheets: dict[str, pd.DataFrame] = {}
            for name in sheet_names:
                sheets[name] = xls.parse(
                    name,
                    header=None,
                    dtype=object,
                    keep_default_na=False,
                    na_values=[""],
                )
    except Exception as e:
        raise FileReadError(f"failed to read workbook {path}: {e}") from e

    return ParsedWorkbook(
        path=str(path),
        sheet_names=sheet_names,
        sheets=sheets,
        hidden_flags={name: states.get(name, "visible") in HIDDEN_STATES for name in sheet_names},
    )


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _to_cell_value(value: Any) -> CellValue:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, (float, np.floating)) and np.isnan(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def _header_text(value: CellValue) -> str:
    if is_empty(value):
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"  # as Excel displays it
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value).strip()


def _header_names(values: Iterable[CellValue]) -> list[str]:
    """Build unique headers; blank ones get placeholder names.

    ``["Name", "", "Name", None]`` -> ``["Name", "__EMPTY", "Name_1", "__EMPTY_1"]``
    """
    headers: list[str] = []
    seen: dict[str, int] = {}
    for value in values:
        base = _header_text(value) or PLACEHOLDER_PREFIX
        name = base
        count = seen.get(base, 0)
        while name in seen:
            count += 1
            name = f"{base}_{count}"
        seen[base] = count
        seen.setdefault(name, 0)
        headers.append(name)
    return headers


def extract_rows(grid: pd.DataFrame) -> SheetResult:
    """Convert a raw grid to row records, first non-blank row as header."""
    if grid.empty:
        return []
    grid = grid.dropna(how="all")
    if grid.shape[0] == 0:
        return []

    records = [[_to_cell_value(v) for v in raw] for raw in grid.itertuples(index=False, name=None)]
    headers = _header_names(records[0])
    rows: SheetResult = []
    for values in records[1:]:
        rows.append(dict(zip(headers, values, strict=False)))
    return rows


def strip_placeholder_columns(rows: SheetResult) -> SheetResult:
    for row in rows:
        for key in [k for k in row if k.startswith(PLACEHOLDER_PREFIX)]:
            del row[key]
    return rows


def fill_forward(rows: SheetResult, columns: Sequence[str]) -> SheetResult:
    """Forward-fill empty values in the given columns, in place.

    Approximates merged cells: an empty cell takes the last non-empty value
    seen above it in the same column. Leading empty cells stay empty. Column
    names are exact, case-sensitive header matches; unknown names do nothing.
    """
    for col in columns:
        last: CellValue = None
        for row in rows:
            value = row.get(col)
            if is_empty(value):
                if not is_empty(last):
                    row[col] = last
            else:
                last = value
    return rows


def normalize_sheet(grid: pd.DataFrame, fill: FillConfig | None = None) -> SheetResult:
    """Normalize one raw sheet grid into a clean, ordered list of rows."""
    rows: list[Row] = strip_placeholder_columns(extract_rows(grid))
    if fill is not None and fill.active:
        fill_forward(rows, fill.columns)
    return rows

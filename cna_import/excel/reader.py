from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

"""Workbook reading and grid -> row conversion.

The ingestion pipeline works on plain two-dimensional grids (list of rows,
each a list of cell values) so that workbook sheets, pasted text and remote
spreadsheet values all enter it the same way:

- row 0 of a grid is the header row
- following rows are data rows; entirely blank rows are skipped
- missing trailing cells read as ""
"""

__all__ = [
    "Grid",
    "SheetHeaderError",
    "grid_to_rows",
    "is_blank",
    "read_workbook",
    "values_to_rows",
]

Grid = list[list[Any]]


class SheetHeaderError(Exception):
    """Raised when a grid has no header row."""


def is_blank(value: Any) -> bool:
    if value is None or value is pd.NaT:
        return True
    if isinstance(value, float) and pd.isna(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def _clean_cell(value: Any) -> Any:
    """Turn a pandas cell into a plain python value.

    NaN -> "", integral floats -> int (Excel stores 12 as 12.0), timestamps ->
    ISO date (or datetime when a time part is present).
    """
    if is_blank(value):
        return ""
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        if value.hour == value.minute == value.second == 0:
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if hasattr(value, "item"):  # numpy scalar
        return _clean_cell(value.item())
    return value


def read_workbook(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, Grid]:
    """Read an Excel workbook into raw grids keyed by sheet name (workbook order).

    Parameters
    ----------
    path: workbook path
    target_sheets: restrict to these sheet names (None reads every sheet)
    """
    grids: dict[str, Grid] = {}
    with pd.ExcelFile(path) as xls:
        for name in xls.sheet_names:
            if target_sheets is not None and str(name) not in target_sheets:
                continue
            # header=None: the header row is part of the grid
            df = xls.parse(name, header=None, dtype=object)
            grids[str(name)] = [[_clean_cell(v) for v in row] for row in df.itertuples(index=False)]
    return grids


def grid_to_rows(grid: Sequence[Sequence[Any]], sheet_name: str = "<grid>") -> tuple[list[str], list[dict[str, Any]]]:
    """Split a grid into its trimmed header row and header-keyed data rows.

    Raises:
        SheetHeaderError: grid is empty (no header row)
    """
    if not grid:
        raise SheetHeaderError(f"sheet '{sheet_name}' has no header row")
    headers = ["" if is_blank(h) else str(h).strip() for h in grid[0]]
    rows: list[dict[str, Any]] = []
    for raw in grid[1:]:
        if all(is_blank(v) for v in raw):
            continue
        row: dict[str, Any] = {}
        for idx, header in enumerate(headers):
            if not header:
                continue
            value = raw[idx] if idx < len(raw) else ""
            row[header] = "" if is_blank(value) else value
        rows.append(row)
    return headers, rows


def values_to_rows(values: Sequence[Sequence[Any]] | None) -> list[dict[str, str]]:
    """Convert a remote spreadsheet value range into header-keyed string rows.

    Same contract as the remote rows source: first row is headers, every value
    trimmed to a string, rows with no non-empty cell removed.
    """
    if not values:
        return []
    headers = ["" if h is None else str(h).strip() for h in values[0]]
    rows: list[dict[str, str]] = []
    for raw in values[1:]:
        if all(is_blank(v) for v in raw):
            continue
        item: dict[str, str] = {}
        for idx, header in enumerate(headers):
            value = raw[idx] if idx < len(raw) else None
            item[header] = "" if value is None else str(value).strip()
        rows.append(item)
    return rows

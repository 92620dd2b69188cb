from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from ..config.loader import default_header_mappings
from ..excel.reader import Grid, grid_to_rows, read_workbook
from ..models.config_models import HeaderMappingConfig
from ..models.enums import AgencyType
from ..models.establishment_record import EstablishmentRecord
from ..models.import_result import ImportResult
from .record_builder import build_establishment_records, build_officer_records

"""Import entry points.

Each call is one atomic import: the whole input is converted or an
ImportDataError is raised, never a partial result. Input shapes:

- parse_workbook_rows: one grid per sheet; rows of every sheet are
  concatenated and fields are resolved against the first sheet's headers
- parse_pasted_table: tab separated text, first line headers
- parse_remote_rows: header-keyed rows from a remote spreadsheet
- parse_establishment_grid: establishment workbook, one grid per sheet,
  each sheet resolving its own headers
"""

__all__ = [
    "PREVIEW_ROWS",
    "ImportDataError",
    "import_establishment_workbook",
    "import_officer_workbook",
    "parse_establishment_grid",
    "parse_pasted_table",
    "parse_remote_rows",
    "parse_workbook_rows",
]

logger = logging.getLogger(__name__)

PREVIEW_ROWS = 60


class ImportDataError(Exception):
    """Fatal input-shape error: the import is aborted as a whole."""


def _is_grid(value: list[Any]) -> bool:
    """True when ``value`` is rows of scalar cells rather than a list of sheets."""
    for row in value:
        if row:
            return not isinstance(row[0], (list, tuple))
    return True


def _as_sheets(grids: Grid | Iterable[Grid] | Mapping[str, Grid]) -> list[tuple[str, Grid]]:
    """Accept a single grid, a list of grids or a sheet-name -> grid mapping."""
    if isinstance(grids, Mapping):
        return [(str(name), grid) for name, grid in grids.items()]
    grids = list(grids)
    if _is_grid(grids):
        return [("Sheet1", grids)]
    return [(f"Sheet{idx + 1}", grid) for idx, grid in enumerate(grids)]


def _officer_result(
    rows: list[dict[str, Any]],
    headers: list[str],
    agency_type: AgencyType | str,
    mappings: HeaderMappingConfig | None,
) -> ImportResult:
    if not rows:
        raise ImportDataError("The imported data is empty or contains no data rows.")
    records = build_officer_records(rows, headers, agency_type, mappings or default_header_mappings())
    logger.debug("built %d officer records from %d rows", len(records), len(rows))
    return ImportResult(records=records, headers=headers, preview=rows[:PREVIEW_ROWS])


def parse_workbook_rows(
    grids: Grid | Iterable[Grid] | Mapping[str, Grid],
    agency_type: AgencyType | str,
    mappings: HeaderMappingConfig | None = None,
) -> ImportResult:
    all_rows: list[dict[str, Any]] = []
    common_headers: list[str] = []
    for idx, (sheet_name, grid) in enumerate(_as_sheets(grids)):
        if not grid:
            continue
        headers, rows = grid_to_rows(grid, sheet_name)
        if idx == 0:
            common_headers = headers
        all_rows.extend(rows)
    return _officer_result(all_rows, common_headers, agency_type, mappings)


def parse_pasted_table(
    text: str,
    agency_type: AgencyType | str,
    mappings: HeaderMappingConfig | None = None,
) -> ImportResult:
    lines = [line.rstrip("\r") for line in text.split("\n")]
    if len(lines) < 2:
        raise ImportDataError("Pasted data must contain at least a header row and one data row.")
    headers = [h.strip() for h in lines[0].split("\t")]
    rows: list[dict[str, Any]] = []
    for line in lines[1:]:
        cells = line.split("\t")
        if not any(c.strip() for c in cells):
            continue
        rows.append({h: (cells[i] if i < len(cells) else "") for i, h in enumerate(headers)})
    return _officer_result(rows, headers, agency_type, mappings)


def parse_remote_rows(
    rows: Sequence[Mapping[str, Any]],
    agency_type: AgencyType | str,
    mappings: HeaderMappingConfig | None = None,
) -> ImportResult:
    headers = [str(k) for k in rows[0].keys()] if rows else []
    return _officer_result([dict(r) for r in rows], headers, agency_type, mappings)


def parse_establishment_grid(
    grids: Grid | Iterable[Grid] | Mapping[str, Grid],
    agency_type: AgencyType | str,
    mappings: HeaderMappingConfig | None = None,
) -> list[EstablishmentRecord]:
    """Build establishment records from every non-empty sheet.

    ``agency_type`` is accepted for symmetry with the officer imports; no
    establishment field depends on it.
    """
    mappings = mappings or default_header_mappings()
    records: list[EstablishmentRecord] = []
    data_rows = 0
    for sheet_name, grid in _as_sheets(grids):
        if not grid:
            continue
        headers, rows = grid_to_rows(grid, sheet_name)
        if not rows:
            continue
        data_rows += len(rows)
        records.extend(build_establishment_records(rows, headers, mappings))
    if not data_rows:
        raise ImportDataError("The establishment data is empty or contains no data rows.")
    logger.debug("built %d establishment records agency=%s", len(records), agency_type)
    return records


def import_officer_workbook(
    path: Path,
    agency_type: AgencyType | str,
    mappings: HeaderMappingConfig | None = None,
) -> ImportResult:
    return parse_workbook_rows(read_workbook(path), agency_type, mappings)


def import_establishment_workbook(
    path: Path,
    agency_type: AgencyType | str,
    mappings: HeaderMappingConfig | None = None,
) -> list[EstablishmentRecord]:
    return parse_establishment_grid(read_workbook(path), agency_type, mappings)

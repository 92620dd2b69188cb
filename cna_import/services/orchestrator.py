from __future__ import annotations

import dataclasses
import json
import logging
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from ..excel.reader import SheetHeaderError
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ImportConfig
from ..models.processing_result import FileStat, ProcessingResult
from .dedupe import dedupe_officers, identity_key
from .importer import (
    ImportDataError,
    import_establishment_workbook,
    import_officer_workbook,
    parse_pasted_table,
)
from .progress import ImportProgress

"""Batch runner: import every file of the configured directories.

Each file is one independent, atomic import:
- officer files (.xlsx workbooks, .tsv pastes) are imported, deduplicated
  and written to ``<output>/<stem>.officers.json``
- establishment workbooks are written to ``<output>/<stem>.establishment.json``

A failing file is logged, recorded in the JSON Lines error log and counted as
failed; the remaining files are still processed.
"""

__all__ = [
    "ESTABLISHMENT_SUFFIXES",
    "OFFICER_SUFFIXES",
    "ProcessingError",
    "process_all",
    "record_to_dict",
    "scan_source_files",
]

logger = logging.getLogger(__name__)

OFFICER_SUFFIXES = (".xlsx", ".tsv")
ESTABLISHMENT_SUFFIXES = (".xlsx",)


class ProcessingError(Exception):
    """Fatal batch error (missing or unreadable directory)."""


def scan_source_files(directory: Path, suffixes: tuple[str, ...]) -> list[Path]:
    """List matching files of ``directory`` (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in suffixes and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def record_to_dict(record: Any) -> dict[str, Any]:
    """Dataclass record -> JSON ready dict (enums as their values)."""
    return _jsonable(dataclasses.asdict(record))


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2, default=str), encoding="utf-8")


def _error_type(exc: Exception) -> str:
    if isinstance(exc, ImportDataError):
        return "INPUT_SHAPE_ERROR"
    if isinstance(exc, SheetHeaderError):
        return "SHEET_HEADER_ERROR"
    return "READ_ERROR"


def _import_officer_file(path: Path, config: ImportConfig, output_dir: Path) -> FileStat:
    start = datetime.now(UTC)
    if path.suffix.lower() == ".tsv":
        result = parse_pasted_table(path.read_text(encoding="utf-8-sig"), config.agency_type, config.header_mappings)
    else:
        result = import_officer_workbook(path, config.agency_type, config.header_mappings)
    officers = dedupe_officers(result.records)
    unkeyed = sum(1 for o in officers if identity_key(o) is None)
    out = output_dir / f"{path.stem}.officers.json"
    _write_json(out, {
        "source": path.name,
        "agency_type": config.agency_type.value,
        "headers": result.headers,
        "imported_rows": len(result.records),
        "records": [record_to_dict(o) for o in officers],
    })
    logger.info(
        "file=%s officers=%d unique=%d unkeyed=%d", path.name, len(result.records), len(officers), unkeyed
    )
    return FileStat(
        file_name=path.name,
        kind="officers",
        status="success",
        records=len(officers),
        elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
        output_path=str(out),
        imported_rows=len(result.records),
        unkeyed=unkeyed,
    )


def _import_establishment_file(path: Path, config: ImportConfig, output_dir: Path) -> FileStat:
    start = datetime.now(UTC)
    records = import_establishment_workbook(path, config.agency_type, config.header_mappings)
    out = output_dir / f"{path.stem}.establishment.json"
    vacant = sum(1 for r in records if r.is_vacant)
    _write_json(out, {
        "source": path.name,
        "agency_type": config.agency_type.value,
        "records": [record_to_dict(r) for r in records],
    })
    logger.info("file=%s positions=%d vacant=%d", path.name, len(records), vacant)
    return FileStat(
        file_name=path.name,
        kind="establishment",
        status="success",
        records=len(records),
        elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
        output_path=str(out),
    )


def _failed_stat(path: Path, kind: str, exc: Exception, start: datetime, error_log: ErrorLogBuffer) -> FileStat:
    logger.error("file=%s import failed: %s", path.name, exc)
    error_log.append(ErrorRecord.create(
        file=path.name,
        sheet="<FILE_LEVEL>",
        row=-1,
        error_type=_error_type(exc),
        message=str(exc),
    ))
    return FileStat(
        file_name=path.name,
        kind=kind,
        status="failed",
        records=0,
        elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
        error=str(exc),
    )


def process_all(config: ImportConfig, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Import every officer and establishment file of the configured directories.

    Args:
        config: Run configuration
        error_log: Buffer for failed files (a fresh one when None); flushed
            once at the end of the run

    Returns:
        ProcessingResult with per-file stats and run totals

    Raises:
        ProcessingError: A configured directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    output_dir = Path(config.output_directory)

    jobs: list[tuple[str, Path]] = [
        ("officers", p) for p in scan_source_files(Path(config.source_directory), OFFICER_SUFFIXES)
    ]
    if config.establishment_directory:
        jobs += [
            ("establishment", p)
            for p in scan_source_files(Path(config.establishment_directory), ESTABLISHMENT_SUFFIXES)
        ]

    file_stats: list[FileStat] = []
    success = failed = 0
    with ImportProgress(len(jobs)) as progress:
        for kind, path in jobs:
            progress.start(path)
            file_start = datetime.now(UTC)
            try:
                if kind == "officers":
                    stat = _import_officer_file(path, config, output_dir)
                else:
                    stat = _import_establishment_file(path, config, output_dir)
                success += 1
            except Exception as e:  # per-file isolation
                stat = _failed_stat(path, kind, e, file_start, error_log)
                failed += 1
            file_stats.append(stat)
            progress.advance(success=success, failed=failed)

    log_path = error_log.flush()
    if log_path is not None:
        logger.info("error log written: %s", log_path)

    officer_stats = [s for s in file_stats if s.kind == "officers" and s.status == "success"]
    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=success,
        failed_files=failed,
        officer_records=sum(s.imported_rows for s in officer_stats),
        unique_officers=sum(s.records for s in officer_stats),
        unkeyed_officers=sum(s.unkeyed for s in officer_stats),
        establishment_records=sum(
            s.records for s in file_stats if s.kind == "establishment" and s.status == "success"
        ),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )

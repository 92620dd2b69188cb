from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models for a batch run.

FileStat describes one imported file; ProcessingResult aggregates a whole
run and feeds the SUMMARY line.
"""

__all__ = [
    "FileStat",
    "ProcessingResult",
]


@dataclass(frozen=True)
class FileStat:
    """Per-file import statistics."""
    file_name: str
    kind: str  # "officers" | "establishment"
    status: str  # success / failed
    records: int  # records written (after dedupe for officer files)
    elapsed_seconds: float
    output_path: str | None = None
    imported_rows: int = 0  # officer records built before dedupe
    unkeyed: int = 0  # officer records without an identity key
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one batch run."""
    success_files: int
    failed_files: int
    officer_records: int  # built officer records, before dedupe
    unique_officers: int  # officer records after dedupe (keyed + unkeyed)
    unkeyed_officers: int
    establishment_records: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files

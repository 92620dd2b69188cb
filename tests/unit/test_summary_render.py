from __future__ import annotations

from datetime import UTC, datetime

import pytest

from cna_import.models.processing_result import FileStat, ProcessingResult
from cna_import.services.summary import format_seconds, render_summary_line


@pytest.mark.parametrize("value,expected", [
    (0, "0"),
    (2.0, "2"),
    (1.5, "1.5"),
    (0.1234, "0.123"),
    (0.0012, "0.0012"),
    (0.00000012, "0"),
])
def test_format_seconds(value, expected):
    assert format_seconds(value) == expected


def test_render_summary_line_counts_all_files():
    t = datetime(2024, 5, 1, tzinfo=UTC)
    result = ProcessingResult(
        success_files=2,
        failed_files=1,
        officer_records=12,
        unique_officers=9,
        unkeyed_officers=2,
        establishment_records=30,
        start_time=t,
        end_time=t,
        elapsed_seconds=0.25,
        file_stats=[
            FileStat("a.xlsx", "officers", "success", 12, 0.1),
            FileStat("b.xlsx", "officers", "failed", 0, 0.1, error="READ_ERROR"),
            FileStat("est.xlsx", "establishment", "success", 30, 0.05),
        ],
    )
    assert render_summary_line(result) == (
        "SUMMARY files=3 success=2 failed=1 officers=12 unique=9 unkeyed=2 "
        "establishment=30 elapsed_sec=0.25"
    )

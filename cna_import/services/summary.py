from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for a batch run."""

__all__ = [
    "format_seconds",
    "render_summary_line",
]


def format_seconds(value: float) -> str:
    """Render seconds without scientific notation or a trailing ".0"."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    text = f"{value:.6f}" if value < 0.01 else f"{value:.3f}"
    return text.rstrip("0").rstrip(".") or "0"


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={total} success={success} failed={failed} officers={built}
    unique={after dedupe} unkeyed={no identity key} establishment={positions}
    elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> r = ProcessingResult(
        ...     success_files=2, failed_files=0, officer_records=10, unique_officers=8,
        ...     unkeyed_officers=1, establishment_records=4, start_time=t, end_time=t,
        ...     elapsed_seconds=1.5,
        ... )
        >>> render_summary_line(r)
        'SUMMARY files=2 success=2 failed=0 officers=10 unique=8 unkeyed=1 establishment=4 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"officers={result.officer_records} "
        f"unique={result.unique_officers} "
        f"unkeyed={result.unkeyed_officers} "
        f"establishment={result.establishment_records} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )

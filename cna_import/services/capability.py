from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from ..excel.reader import is_blank
from ..models.enums import CurrentScoreCategory, GapCategory
from ..models.officer_record import REALISTIC_SCORE, CapabilityRating

"""Rating code extraction and capability / gap scoring.

Rating columns are recognised by a leading question code in the header
("A1", "C12 - Records management", "H5 ..."), independently of the logical
field tables. Each non-blank cell under such a column is validated as a 0-10
score and turned into a CapabilityRating measured against a fixed target of
10. Invalid cells are dropped silently: partial survey responses are normal.
"""

__all__ = [
    "DEFAULT_RATING_CODE_PATTERN",
    "build_capability_ratings",
    "current_score_category",
    "extract_rating_columns",
    "gap_category",
    "parse_score",
]

logger = logging.getLogger(__name__)

DEFAULT_RATING_CODE_PATTERN = r"^([A-G][0-9]{1,2}|H[256])"

MIN_SCORE = 0.0
MAX_SCORE = 10.0

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


def extract_rating_columns(headers: Sequence[str], pattern: str = DEFAULT_RATING_CODE_PATTERN) -> dict[str, str]:
    """Map each rating column header to its upper-cased question code."""
    regex = re.compile(pattern, re.IGNORECASE)
    columns: dict[str, str] = {}
    for header in headers:
        match = regex.match(str(header or "").strip())
        if match:
            columns[header] = match.group(0).upper()
    return columns


def parse_score(value: Any) -> float | None:
    """Parse a rating cell; None when blank, non-numeric or outside [0, 10].

    Text cells are read by their leading number ("8 - High" -> 8, "7/10" -> 7).
    """
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        score = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return None
        score = float(match.group(1))
    if math.isnan(score) or not MIN_SCORE <= score <= MAX_SCORE:
        return None
    return score


def gap_category(gap_score: float) -> GapCategory:
    if gap_score <= 1:
        return GapCategory.NO_GAP
    if gap_score == 2:
        return GapCategory.MINOR_GAP
    if 3 <= gap_score <= 5:
        return GapCategory.MODERATE_GAP
    # also catches fractional gaps between the bands (1.5, 2.5, 5.5)
    return GapCategory.CRITICAL_GAP


def current_score_category(score: float) -> CurrentScoreCategory:
    if score >= 8:
        return CurrentScoreCategory.HIGH
    if score >= 5:
        return CurrentScoreCategory.MODERATE
    return CurrentScoreCategory.LOW


def build_capability_ratings(row: Mapping[str, Any], rating_columns: Mapping[str, str]) -> list[CapabilityRating]:
    """Score every rating column of one row.

    A question code seen twice in the same row keeps the position of its first
    column and the value of its last valid one.
    """
    by_code: dict[str, CapabilityRating] = {}
    for header, code in rating_columns.items():
        raw = row.get(header)
        score = parse_score(raw)
        if score is None:
            if not is_blank(raw):
                logger.debug("dropped rating cell code=%s value=%r", code, raw)
            continue
        gap = REALISTIC_SCORE - score
        by_code[code] = CapabilityRating(
            question_code=code,
            current_score=score,
            gap_score=gap,
            gap_category=gap_category(gap),
            current_score_category=current_score_category(score),
        )
    return list(by_code.values())

from __future__ import annotations

import re

from ..models.enums import AgencyType, GradingGroup

"""Grading classifier: free-text grade + agency type -> GradingGroup."""

__all__ = [
    "classify_grading_group",
    "grade_number",
]

_DIGITS = re.compile(r"[0-9]+")

# Inclusive (low, high, group) bands per agency type.
_AGENCY_BANDS: dict[AgencyType, tuple[tuple[int, int, GradingGroup], ...]] = {
    AgencyType.NATIONAL_DEPARTMENT: (
        (7, 12, GradingGroup.JUNIOR_OFFICER),
        (13, 15, GradingGroup.SENIOR_OFFICER),
        (16, 17, GradingGroup.MANAGER),
        (18, 20, GradingGroup.SENIOR_MANAGEMENT),
    ),
    AgencyType.PROVINCIAL_ADMINISTRATION: (
        (7, 11, GradingGroup.JUNIOR_OFFICER),
        (12, 14, GradingGroup.SENIOR_OFFICER),
        (15, 16, GradingGroup.MANAGER),
        (17, 20, GradingGroup.SENIOR_MANAGEMENT),
    ),
}
_AGENCY_BANDS[AgencyType.NATIONAL_AGENCY] = _AGENCY_BANDS[AgencyType.NATIONAL_DEPARTMENT]


def grade_number(grade: str | None) -> int | None:
    """First run of digits in ``grade`` ("Grade 14A" -> 14), None if there is none."""
    match = _DIGITS.search(str(grade or ""))
    return int(match.group(0)) if match else None


def _fallback_group(number: int) -> GradingGroup:
    # open-ended at both ends
    if number <= 12:
        return GradingGroup.JUNIOR_OFFICER
    if number <= 15:
        return GradingGroup.SENIOR_OFFICER
    if number <= 17:
        return GradingGroup.MANAGER
    return GradingGroup.SENIOR_MANAGEMENT


def classify_grading_group(grade: str | None, agency_type: AgencyType | str) -> GradingGroup:
    """Map a grade string to its grading group for the given agency type.

    Grades outside an agency's own bands (e.g. grade 5 in a National
    Department) fall through to the generic bands.
    """
    number = grade_number(grade)
    if number is None:
        return GradingGroup.OTHER
    if isinstance(agency_type, str):
        agency_type = AgencyType(agency_type)
    for low, high, group in _AGENCY_BANDS.get(agency_type, ()):
        if low <= number <= high:
            return group
    return _fallback_group(number)

from __future__ import annotations

from ..models.enums import GapTag
from ..models.officer_record import OfficerRecord
from .grading import grade_number

"""Qualification vs. skill gap tagging of an assembled officer record.

Qualification requirement by grade:
- grade >= 14 needs a degree ("degree" / "bachelor" in the qualification text)
- grade >= 18 also needs a postgraduate award ("masters" / "post")

Skill requirement: average capability score >= 6.5 and no technical
capability gaps listed. An officer with no ratings counts as an average of
10, so unsurveyed officers never carry a skill gap.
"""

__all__ = [
    "SKILL_GAP_THRESHOLD",
    "assess_gap_tag",
]

SKILL_GAP_THRESHOLD = 6.5
DEGREE_GRADE = 14
MASTERS_GRADE = 18

_DEGREE_TERMS = ("degree", "bachelor")
_MASTERS_TERMS = ("masters", "post")


def _has_qualification_gap(grade: str, qualification: str) -> bool:
    number = grade_number(grade) or 0
    text = qualification.lower()
    needs_degree = number >= DEGREE_GRADE and not any(t in text for t in _DEGREE_TERMS)
    needs_masters = number >= MASTERS_GRADE and not any(t in text for t in _MASTERS_TERMS)
    return needs_degree or needs_masters


def _has_skill_gap(officer: OfficerRecord) -> bool:
    avg = officer.average_capability_score
    if avg is None:
        avg = 10.0
    return avg < SKILL_GAP_THRESHOLD or bool(officer.technical_capability_gaps)


def assess_gap_tag(officer: OfficerRecord) -> tuple[GapTag, str]:
    """Return the gap tag and its human readable reason for ``officer``."""
    qualification = (officer.job_qualification or "").lower()
    qual_gap = _has_qualification_gap(officer.grade, qualification)
    skill_gap = _has_skill_gap(officer)

    if qual_gap and skill_gap:
        return (
            GapTag.CRITICAL_GAP,
            "Lacks required formal credential for grade and demonstrates low functional competency.",
        )
    if qual_gap:
        return (
            GapTag.QUAL_GAP,
            f"Attained qualification ({qualification or 'None'}) does not meet minimum "
            f"requirement for Grade {officer.grade}.",
        )
    if skill_gap:
        return (
            GapTag.SKILL_GAP,
            "Meets qualification standards but requires functional upskilling in core capability domains.",
        )
    return GapTag.ALIGNED, "Meets both academic requirements and functional competency standards."

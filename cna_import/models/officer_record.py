from __future__ import annotations

from dataclasses import dataclass, field

from .enums import (
    CurrentScoreCategory,
    GapCategory,
    GapTag,
    GradingGroup,
    PerformanceRatingLevel,
    UrgencyLevel,
)

"""Canonical per-person records produced by the officer import.

An OfficerRecord is built once per imported row and is never partially
mutated afterwards; the derived grading group, misalignment flag and gap tag
are all filled in by the record builder before the record leaves it.
"""

__all__ = [
    "REALISTIC_SCORE",
    "CapabilityRating",
    "TrainingRecord",
    "OfficerRecord",
]

# Fixed target score every capability gap is measured against.
REALISTIC_SCORE = 10.0


@dataclass(frozen=True)
class CapabilityRating:
    """One validated 0-10 self assessment for a single survey question code."""
    question_code: str  # e.g. "A1", "H5"
    current_score: float  # 0 <= score <= 10
    gap_score: float  # REALISTIC_SCORE - current_score
    gap_category: GapCategory
    current_score_category: CurrentScoreCategory
    realistic_score: float = REALISTIC_SCORE


@dataclass(frozen=True)
class TrainingRecord:
    course_name: str
    completion_date: str  # ISO date or "N/A"


@dataclass(frozen=True)
class OfficerRecord:
    """Canonical capability record for one officer (one survey response).

    Identity and free-text fields are carried verbatim (trimmed) from the
    import; everything below ``capability_ratings`` is derived.
    """
    # identity
    email: str
    name: str
    position: str
    division: str
    grade: str
    position_number: str | None = None
    file_number: str | None = None
    # performance
    spa_rating: str = ""
    performance_rating_level: PerformanceRatingLevel = PerformanceRatingLevel.AT_REQUIRED_LEVEL
    # survey
    capability_ratings: list[CapabilityRating] = field(default_factory=list)
    technical_capability_gaps: list[str] = field(default_factory=list)
    leadership_capability_gaps: list[str] = field(default_factory=list)
    ict_skills: list[str] = field(default_factory=list)
    training_history: list[TrainingRecord] = field(default_factory=list)
    training_preferences: list[str] = field(default_factory=list)
    urgency: UrgencyLevel = UrgencyLevel.LOW
    next_training_due_date: str | None = None
    # HR free text
    age: int | None = None
    gender: str | None = None  # "Male" / "Female"
    date_of_birth: str | None = None
    job_qualification: str | None = None
    commencement_date: str | None = None
    years_of_experience: int | None = None
    employment_status: str | None = None
    lifecycle_stage: str | None = None
    retirement_eligibility_date: str | None = None
    promotion_eligibility_status: str | None = None
    # training needs analysis (section H of the survey)
    tna_process_exists: bool | None = None
    tna_assessment_methods: list[str] = field(default_factory=list)
    tna_process_documented: bool | None = None
    tna_desired_courses: str | None = None
    tna_interested_topics: list[str] = field(default_factory=list)
    tna_priorities: str | None = None
    # derived
    grading_group: GradingGroup = GradingGroup.OTHER
    misalignment_flag: str | None = None
    gap_tag: GapTag | None = None
    gap_tag_reason: str | None = None

    @property
    def average_capability_score(self) -> float | None:
        """Mean current score over all ratings, ``None`` when unsurveyed."""
        if not self.capability_ratings:
            return None
        return sum(r.current_score for r in self.capability_ratings) / len(self.capability_ratings)

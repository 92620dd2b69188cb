from __future__ import annotations

from enum import Enum

"""Closed vocabularies used by the ingestion pipeline.

Every value here is derived by the pipeline (grading group, gap tag, gap
category, ...) except AgencyType, which is supplied by the caller for each
import and selects the grade band table.
"""

__all__ = [
    "AgencyType",
    "CurrentScoreCategory",
    "GapCategory",
    "GapTag",
    "GradingGroup",
    "PerformanceRatingLevel",
    "UrgencyLevel",
]


class AgencyType(Enum):
    """Agency classification selecting the grade band table."""
    ALL_AGENCIES = "All Agencies"
    NATIONAL_AGENCY = "National Agency"
    NATIONAL_DEPARTMENT = "National Department"
    PROVINCIAL_ADMINISTRATION = "Provincial Administration"
    PROVINCIAL_HEALTH_AUTHORITY = "Provincial Health Authority"
    LOCAL_LEVEL_GOVERNMENT = "Local Level Government"
    OTHER = "Other"


class GradingGroup(Enum):
    """Ordinal seniority bucket derived from grade + agency type."""
    JUNIOR_OFFICER = "Junior Officer"
    SENIOR_OFFICER = "Senior Officer"
    MANAGER = "Manager"
    SENIOR_MANAGEMENT = "Senior Management"
    OTHER = "Other"


class GapTag(Enum):
    """Qualification / skill gap classification of one officer."""
    QUAL_GAP = "QUAL_GAP"
    SKILL_GAP = "SKILL_GAP"
    CRITICAL_GAP = "CRITICAL_GAP"
    ALIGNED = "ALIGNED"


class GapCategory(Enum):
    NO_GAP = "No Gap"
    MINOR_GAP = "Minor Gap"
    MODERATE_GAP = "Moderate Gap"
    CRITICAL_GAP = "Critical Gap"


class CurrentScoreCategory(Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class UrgencyLevel(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class PerformanceRatingLevel(Enum):
    """SPA (staff performance appraisal) rating bands, 5 = best."""
    WELL_ABOVE_REQUIRED = "Well Above Required"
    ABOVE_REQUIRED = "Above Required"
    AT_REQUIRED_LEVEL = "At Required Level"
    BELOW_REQUIRED_LEVEL = "Below Required Level"
    WELL_BELOW_REQUIRED_LEVEL = "Well Below Required Level"
    NOT_RATED = "Not Rated"

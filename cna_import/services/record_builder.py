from __future__ import annotations

import dataclasses
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from ..models.config_models import HeaderMappingConfig
from ..models.enums import AgencyType, PerformanceRatingLevel, UrgencyLevel
from ..models.establishment_record import VACANT_OCCUPANT, VACANT_STATUS, EstablishmentRecord
from ..models.officer_record import OfficerRecord, TrainingRecord
from .alignment import assess_gap_tag
from .capability import build_capability_ratings, extract_rating_columns
from .grading import classify_grading_group
from .header_resolver import FieldResolution, resolve_fields

"""Record builders: one raw row -> one canonical record.

Header resolution and rating column extraction happen once per import
(``build_officer_records`` / ``build_establishment_records``); the per-row
builders only look values up through the resolved headers. Missing or
unparseable optional cells degrade to "" / None / [] and never raise.
"""

__all__ = [
    "HIGH_PERFORMER_LOW_CAPABILITY",
    "SKILLED_UNDERPERFORMING",
    "build_establishment_record",
    "build_establishment_records",
    "build_officer_record",
    "build_officer_records",
    "misalignment_flag",
    "parse_bool",
    "parse_int",
    "parse_list",
    "parse_training_history",
    "performance_rating_level",
]

logger = logging.getLogger(__name__)

HIGH_PERFORMER_LOW_CAPABILITY = "High performer, low self-assessed capability."
SKILLED_UNDERPERFORMING = "Skilled staff underperforming."

_LIST_SPLIT = re.compile(r"[,;]")
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")
_TRAINING_ENTRY = re.compile(r"(.*) \((....-..-..)\)")

_TRUE_WORDS = {"yes", "true", "1", "y", "t"}
_FALSE_WORDS = {"no", "false", "0", "n", "f"}

_PERFORMANCE_LEVELS = {
    5: PerformanceRatingLevel.WELL_ABOVE_REQUIRED,
    4: PerformanceRatingLevel.ABOVE_REQUIRED,
    3: PerformanceRatingLevel.AT_REQUIRED_LEVEL,
    2: PerformanceRatingLevel.BELOW_REQUIRED_LEVEL,
    1: PerformanceRatingLevel.WELL_BELOW_REQUIRED_LEVEL,
}

_KEPT_ESTABLISHMENT_STATUSES = {"Confirmed", "Probation", "Other"}


# --- cell parsing -----------------------------------------------------------

def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _optional(value: Any) -> str | None:
    return _text(value) or None


def parse_list(value: Any) -> list[str]:
    """Split a "," or ";" separated cell into trimmed non-empty items."""
    if not isinstance(value, str) or not value.strip():
        return []
    return [s.strip() for s in _LIST_SPLIT.split(value) if s.strip()]


def parse_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return None


def parse_int(value: Any) -> int | None:
    """Leading integer of a cell ("35 years" -> 35), None when there is none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else None
    match = _LEADING_INT.match(_text(value))
    return int(match.group(1)) if match else None


def parse_training_history(value: Any) -> list[TrainingRecord]:
    """Parse "Course A (2021-03-01), Course B" into TrainingRecords."""
    if not isinstance(value, str) or not value.strip():
        return []
    records: list[TrainingRecord] = []
    for entry in value.split(","):
        entry = entry.strip()
        match = _TRAINING_ENTRY.match(entry)
        if match:
            records.append(TrainingRecord(course_name=match.group(1).strip(), completion_date=match.group(2).strip()))
        else:
            records.append(TrainingRecord(course_name=entry, completion_date="N/A"))
    return records


def performance_rating_level(spa_rating: str) -> PerformanceRatingLevel:
    rating = parse_int(spa_rating)
    if rating is None:
        return PerformanceRatingLevel.AT_REQUIRED_LEVEL
    return _PERFORMANCE_LEVELS.get(rating, PerformanceRatingLevel.NOT_RATED)


def _urgency(value: Any) -> UrgencyLevel:
    text = _text(value) or UrgencyLevel.LOW.value
    try:
        return UrgencyLevel(text)
    except ValueError:
        return UrgencyLevel.LOW


def _gender(value: Any) -> str | None:
    text = _text(value).lower()
    if text.startswith("m"):
        return "Male"
    if text.startswith("f"):
        return "Female"
    return None


def misalignment_flag(spa_rating: str, average_score: float | None) -> str | None:
    """Flag disagreement between appraisal rating and self-assessed capability."""
    rating = parse_int(spa_rating)
    if average_score is None or rating is None:
        return None
    if rating in (4, 5) and average_score < 5:
        return HIGH_PERFORMER_LOW_CAPABILITY
    if rating in (1, 2) and average_score > 7:
        return SKILLED_UNDERPERFORMING
    return None


# --- officers ---------------------------------------------------------------

def build_officer_record(
    row: Mapping[str, Any],
    fields: FieldResolution,
    rating_columns: Mapping[str, str],
    agency_type: AgencyType | str,
) -> OfficerRecord:
    """Build one OfficerRecord from a raw row and the import's resolutions."""

    def get(name: str) -> Any:
        header = fields.get(name)
        if header is None:
            return ""
        value = row.get(header)
        return "" if value is None else value

    spa_rating = _text(get("spa_rating"))
    grade = _text(get("grade"))
    ratings = build_capability_ratings(row, rating_columns)

    officer = OfficerRecord(
        email=_text(get("email")),
        name=_text(get("name")),
        position=_text(get("position")),
        division=_text(get("division")),
        grade=grade,
        position_number=_optional(get("position_number")),
        file_number=_optional(get("file_number")),
        spa_rating=spa_rating,
        performance_rating_level=performance_rating_level(spa_rating),
        capability_ratings=ratings,
        technical_capability_gaps=parse_list(get("technical_capability_gaps")),
        leadership_capability_gaps=parse_list(get("leadership_capability_gaps")),
        ict_skills=parse_list(get("ict_skills")),
        training_history=parse_training_history(get("training_history")),
        training_preferences=parse_list(get("training_preferences")),
        urgency=_urgency(get("urgency")),
        next_training_due_date=_optional(get("next_training_due_date")),
        age=parse_int(get("age")) or None,
        gender=_gender(get("gender")),
        date_of_birth=_optional(get("date_of_birth")),
        job_qualification=_optional(get("job_qualification")),
        commencement_date=_optional(get("commencement_date")),
        years_of_experience=parse_int(get("years_of_experience")) or None,
        employment_status=_optional(get("employment_status")),
        lifecycle_stage=_optional(get("lifecycle_stage")),
        retirement_eligibility_date=_optional(get("retirement_eligibility_date")),
        promotion_eligibility_status=_optional(get("promotion_eligibility_status")),
        tna_process_exists=parse_bool(get("tna_process_exists")),
        tna_assessment_methods=parse_list(get("tna_assessment_methods")),
        tna_process_documented=parse_bool(get("tna_process_documented")),
        tna_desired_courses=_optional(get("tna_desired_courses")),
        tna_interested_topics=parse_list(get("tna_interested_topics")),
        tna_priorities=_optional(get("tna_priorities")),
        grading_group=classify_grading_group(grade, agency_type),
    )
    officer = dataclasses.replace(
        officer, misalignment_flag=misalignment_flag(spa_rating, officer.average_capability_score)
    )
    tag, reason = assess_gap_tag(officer)
    return dataclasses.replace(officer, gap_tag=tag, gap_tag_reason=reason)


def build_officer_records(
    rows: Sequence[Mapping[str, Any]],
    headers: Sequence[str],
    agency_type: AgencyType | str,
    mappings: HeaderMappingConfig,
) -> list[OfficerRecord]:
    fields = resolve_fields(headers, mappings.officer_fields)
    rating_columns = extract_rating_columns(headers, mappings.rating_code_pattern)
    logger.debug(
        "officer import fields=%s rating_codes=%s",
        fields,
        sorted(set(rating_columns.values())),
    )
    return [build_officer_record(row, fields, rating_columns, agency_type) for row in rows]


# --- establishment ----------------------------------------------------------

def _is_vacant(occupant: str) -> bool:
    return occupant == "" or "vacant" in occupant.lower() or "***" in occupant


def build_establishment_record(row: Mapping[str, Any], fields: FieldResolution) -> EstablishmentRecord:
    def get(name: str) -> str:
        header = fields.get(name)
        return _text(row.get(header)) if header is not None else ""

    occupant = get("occupant")
    vacant = _is_vacant(occupant)
    status = get("status")
    if vacant:
        status = VACANT_STATUS
    elif status not in _KEPT_ESTABLISHMENT_STATUSES:
        status = "Confirmed"

    return EstablishmentRecord(
        position_number=get("position_number"),
        division=get("division"),
        grade=get("grade"),
        designation=get("designation"),
        occupant=VACANT_OCCUPANT if vacant else occupant,
        status=status,
        gender=get("gender").upper(),
    )


def build_establishment_records(
    rows: Sequence[Mapping[str, Any]],
    headers: Sequence[str],
    mappings: HeaderMappingConfig,
) -> list[EstablishmentRecord]:
    """Build establishment records for one sheet; rows without a position number are dropped."""
    fields = resolve_fields(headers, mappings.establishment_fields)
    records = [build_establishment_record(row, fields) for row in rows]
    kept = [r for r in records if r.position_number]
    if len(kept) != len(records):
        logger.debug("dropped %d establishment rows without position number", len(records) - len(kept))
    return kept

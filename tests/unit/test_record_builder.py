from __future__ import annotations

import pytest

from cna_import.config.loader import default_header_mappings
from cna_import.models.enums import AgencyType, GapTag, GradingGroup, PerformanceRatingLevel, UrgencyLevel
from cna_import.models.establishment_record import VACANT_OCCUPANT
from cna_import.models.officer_record import TrainingRecord
from cna_import.services.record_builder import (
    HIGH_PERFORMER_LOW_CAPABILITY,
    SKILLED_UNDERPERFORMING,
    build_establishment_records,
    build_officer_records,
    misalignment_flag,
    parse_bool,
    parse_int,
    parse_list,
    parse_training_history,
    performance_rating_level,
)

ND = AgencyType.NATIONAL_DEPARTMENT


def _build(headers, rows, agency=ND):
    return build_officer_records(rows, headers, agency, default_header_mappings())


def test_parse_list_splits_on_comma_and_semicolon():
    assert parse_list("Excel, Word; ; Outlook ") == ["Excel", "Word", "Outlook"]
    assert parse_list("") == []
    assert parse_list(5) == []


@pytest.mark.parametrize("raw,expected", [
    ("Yes", True), (" y ", True), ("1", True), ("false", False), ("N", False),
    (True, True), ("maybe", None), ("", None), (1, None),
])
def test_parse_bool(raw, expected):
    assert parse_bool(raw) is expected


@pytest.mark.parametrize("raw,expected", [
    ("35", 35), (" 35 years", 35), (35.0, 35), (7, 7), ("abc", None), ("", None), (None, None),
])
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


def test_parse_training_history():
    records = parse_training_history("Leadership 101 (2021-03-01), Excel Basics")
    assert records == [
        TrainingRecord(course_name="Leadership 101", completion_date="2021-03-01"),
        TrainingRecord(course_name="Excel Basics", completion_date="N/A"),
    ]


@pytest.mark.parametrize("raw,expected", [
    ("5", PerformanceRatingLevel.WELL_ABOVE_REQUIRED),
    ("4", PerformanceRatingLevel.ABOVE_REQUIRED),
    ("3", PerformanceRatingLevel.AT_REQUIRED_LEVEL),
    ("2", PerformanceRatingLevel.BELOW_REQUIRED_LEVEL),
    ("1", PerformanceRatingLevel.WELL_BELOW_REQUIRED_LEVEL),
    ("0", PerformanceRatingLevel.NOT_RATED),
    ("", PerformanceRatingLevel.AT_REQUIRED_LEVEL),
])
def test_performance_rating_level(raw, expected):
    assert performance_rating_level(raw) is expected


def test_misalignment_flag_rules():
    assert misalignment_flag("5", 4.9) == HIGH_PERFORMER_LOW_CAPABILITY
    assert misalignment_flag("4", 5.0) is None
    assert misalignment_flag("2", 7.1) == SKILLED_UNDERPERFORMING
    assert misalignment_flag("1", 7.0) is None
    assert misalignment_flag("3", 2.0) is None
    assert misalignment_flag("", 2.0) is None
    assert misalignment_flag("5", None) is None


def test_build_officer_record_full_row():
    headers = [
        "Email Address", "Full Name", "Job Title", "Division", "Grade", "SPA Rating",
        "Highest Qualification", "Gender", "Age", "Urgency", "ICT Skills", "Technical Capability Gaps",
        "Training History", "H1 TNA exists", "A1 Strategy", "A2 Planning", "H5 budget",
    ]
    row = {
        "Email Address": " Jane@Example.com ", "Full Name": "Jane Doe", "Job Title": "Senior Analyst",
        "Division": "Policy", "Grade": "Grade 16", "SPA Rating": "5",
        "Highest Qualification": "Diploma in Management", "Gender": "female", "Age": "41",
        "Urgency": "High", "ICT Skills": "Excel; Word", "Technical Capability Gaps": "",
        "Training History": "Induction (2019-02-11)", "H1 TNA exists": "yes",
        "A1 Strategy": "8", "A2 Planning": "8.4", "H5 budget": "15",
    }
    [officer] = _build(headers, [row])
    assert officer.email == "Jane@Example.com"
    assert officer.name == "Jane Doe"
    assert officer.position == "Senior Analyst"
    assert officer.grade == "Grade 16"
    assert officer.grading_group is GradingGroup.MANAGER
    assert officer.performance_rating_level is PerformanceRatingLevel.WELL_ABOVE_REQUIRED
    assert officer.gender == "Female"
    assert officer.age == 41
    assert officer.urgency is UrgencyLevel.HIGH
    assert officer.ict_skills == ["Excel", "Word"]
    assert officer.training_history == [TrainingRecord("Induction", "2019-02-11")]
    assert officer.tna_process_exists is True
    # H5 = 15 is out of range and dropped
    assert [r.question_code for r in officer.capability_ratings] == ["A1", "A2"]
    assert officer.average_capability_score == pytest.approx(8.2)
    assert officer.misalignment_flag is None
    assert officer.gap_tag is GapTag.QUAL_GAP
    assert "diploma in management" in officer.gap_tag_reason


def test_missing_fields_default_quietly():
    [officer] = _build(["Email", "Urgency"], [{"Email": "a@b.c", "Urgency": "Critical"}])
    assert officer.name == ""
    assert officer.grade == ""
    assert officer.position_number is None
    assert officer.job_qualification is None
    assert officer.capability_ratings == []
    assert officer.urgency is UrgencyLevel.LOW
    assert officer.grading_group is GradingGroup.OTHER
    assert officer.gap_tag is GapTag.ALIGNED


def test_high_performer_low_capability_flag():
    headers = ["Email", "SPA Rating", "A1", "A2"]
    [officer] = _build(headers, [{"Email": "x@y.z", "SPA Rating": "4", "A1": 3, "A2": 4}])
    assert officer.misalignment_flag == HIGH_PERFORMER_LOW_CAPABILITY
    assert officer.gap_tag is GapTag.SKILL_GAP


def test_establishment_vacancy_overrides_status():
    headers = ["Position Number", "Division", "Grade", "Designation", "Occupant", "Status", "Gen"]
    rows = [
        {"Position Number": "P-001", "Division": "Corporate", "Grade": "12", "Designation": "Clerk",
         "Occupant": "***VACANT***", "Status": "Confirmed", "Gen": ""},
        {"Position Number": "P-002", "Division": "Corporate", "Grade": "14", "Designation": "Officer",
         "Occupant": "Mary Kila", "Status": "Probation", "Gen": "f"},
        {"Position Number": "P-003", "Division": "Corporate", "Grade": "14", "Designation": "Officer",
         "Occupant": "", "Status": "Probation", "Gen": "M"},
        {"Position Number": "P-004", "Division": "Finance", "Grade": "10", "Designation": "Driver",
         "Occupant": "John Doe", "Status": "Acting", "Gen": "m"},
        {"Position Number": "", "Division": "Finance", "Grade": "10", "Designation": "Driver",
         "Occupant": "Ghost", "Status": "Confirmed", "Gen": "m"},
    ]
    records = build_establishment_records(rows, headers, default_header_mappings())
    assert [r.position_number for r in records] == ["P-001", "P-002", "P-003", "P-004"]
    first, second, third, fourth = records
    assert first.occupant == VACANT_OCCUPANT and first.status == "Vacant"
    assert second.occupant == "Mary Kila" and second.status == "Probation" and second.gender == "F"
    assert third.occupant == VACANT_OCCUPANT and third.status == "Vacant"
    assert fourth.status == "Confirmed"
    assert first.is_vacant and not second.is_vacant


def test_establishment_vacant_word_in_occupant():
    headers = ["Position No.", "Occupant", "Status"]
    rows = [{"Position No.": "9", "Occupant": "Vacant (advertised)", "Status": "Other"}]
    [record] = build_establishment_records(rows, headers, default_header_mappings())
    assert record.occupant == VACANT_OCCUPANT
    assert record.status == "Vacant"

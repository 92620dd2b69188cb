"""Domain models for the CNA workforce import tool.

This package contains the canonical records produced by the ingestion
pipeline, the closed enums they use, and the configuration / run result
models used by the batch runner.
"""

from .config_models import HeaderMappingConfig, ImportConfig
from .enums import (
    AgencyType,
    CurrentScoreCategory,
    GapCategory,
    GapTag,
    GradingGroup,
    PerformanceRatingLevel,
    UrgencyLevel,
)
from .establishment_record import EstablishmentRecord
from .import_result import ImportResult
from .officer_record import REALISTIC_SCORE, CapabilityRating, OfficerRecord, TrainingRecord

__all__ = [
    # Configuration models
    "HeaderMappingConfig",
    "ImportConfig",
    # Enums
    "AgencyType",
    "CurrentScoreCategory",
    "GapCategory",
    "GapTag",
    "GradingGroup",
    "PerformanceRatingLevel",
    "UrgencyLevel",
    # Records
    "REALISTIC_SCORE",
    "CapabilityRating",
    "EstablishmentRecord",
    "ImportResult",
    "OfficerRecord",
    "TrainingRecord",
]

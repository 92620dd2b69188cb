from __future__ import annotations

from dataclasses import dataclass

from .enums import AgencyType

"""Config dataclasses for the CNA workforce import tool.

HeaderMappingConfig is the externally supplied lookup data (logical field ->
ordered synonym list, rating code pattern); ImportConfig is the batch run
configuration read by the CLI. Both are produced by cna_import.config.loader.
"""

__all__ = [
    "HeaderMappingConfig",
    "ImportConfig",
]


@dataclass(frozen=True)
class HeaderMappingConfig:
    """Header matching tables for one import.

    Synonym lists are ordered: earlier synonyms win within each resolver tier.
    """
    officer_fields: dict[str, list[str]]  # logical field -> synonyms
    establishment_fields: dict[str, list[str]]  # logical field -> synonyms
    rating_code_pattern: str  # anchored regex, matched case-insensitively


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for a batch run (config/import.yml)."""
    source_directory: str  # officer survey workbooks (.xlsx) and pastes (.tsv)
    output_directory: str  # JSON documents are written here
    agency_type: AgencyType
    header_mappings: HeaderMappingConfig
    establishment_directory: str | None = None  # establishment workbooks (.xlsx)

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""ImportResult: outcome of one atomic import (workbook, paste or remote fetch)."""

__all__ = [
    "ImportResult",
]


@dataclass(frozen=True)
class ImportResult:
    records: list[Any]  # OfficerRecord or EstablishmentRecord
    headers: list[str]  # header row used for field resolution
    preview: list[dict[str, Any]] = field(default_factory=list)  # first raw rows, for display

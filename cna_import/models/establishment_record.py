from __future__ import annotations

from dataclasses import dataclass

"""EstablishmentRecord: canonical organisational position entry."""

__all__ = [
    "VACANT_OCCUPANT",
    "VACANT_STATUS",
    "EstablishmentRecord",
]

VACANT_OCCUPANT = "VACANT"
VACANT_STATUS = "Vacant"


@dataclass(frozen=True)
class EstablishmentRecord:
    """One position in the organisational establishment.

    A blank / "vacant" / asterisk-masked occupant is normalized to
    VACANT_OCCUPANT and forces ``status`` to VACANT_STATUS, whatever the
    imported status cell says.
    """
    position_number: str
    division: str
    grade: str
    designation: str
    occupant: str
    status: str  # Confirmed | Probation | Other | Vacant
    gender: str  # "M" / "F" / ""

    @property
    def is_vacant(self) -> bool:
        return self.occupant == VACANT_OCCUPANT

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models.officer_record import OfficerRecord

"""Officer de-duplication for one import batch.

Identity key: normalized email, else "name-position" when both are present.
Later records overwrite earlier ones with the same key (last write wins) but
keep the first record's position in the output. Records without a key are
never merged or dropped; they follow the keyed records in input order.
"""

__all__ = [
    "KEY_SEPARATOR",
    "dedupe_officers",
    "identity_key",
]

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "-"


def _norm(value: str | None) -> str:
    return (value or "").strip().lower()


def identity_key(officer: OfficerRecord) -> str | None:
    email = _norm(officer.email)
    if email:
        return email
    name = _norm(officer.name)
    position = _norm(officer.position)
    if name and position:
        return f"{name}{KEY_SEPARATOR}{position}"
    return None


def dedupe_officers(officers: Iterable[OfficerRecord]) -> list[OfficerRecord]:
    keyed: dict[str, OfficerRecord] = {}
    unkeyed: list[OfficerRecord] = []
    total = 0
    for officer in officers:
        total += 1
        key = identity_key(officer)
        if key is None:
            unkeyed.append(officer)
        else:
            keyed[key] = officer
    logger.debug("dedupe input=%d keyed=%d unkeyed=%d", total, len(keyed), len(unkeyed))
    return [*keyed.values(), *unkeyed]

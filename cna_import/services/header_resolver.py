from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence

"""Header resolution: logical field -> the one header that best matches it.

Survey spreadsheets are produced by hand, so the same field appears as
"Email Address", "E-mail", "User email (work)" and so on. Each logical field
declares an ordered synonym list and is resolved through three tiers, each
tried only when the previous one found nothing:

1. exact match (trimmed, case-insensitive)
2. synonym present as a whole word/phrase (regex word boundaries)
3. synonym present as a raw substring

Within a tier synonyms are tried in the declared order and, for each synonym,
headers in column order; the first hit wins. Fields are resolved
independently, so two fields may resolve to the same header.
"""

__all__ = [
    "FieldResolution",
    "resolve_fields",
    "resolve_header",
]

logger = logging.getLogger(__name__)

# logical field -> chosen header; unresolved fields are absent
FieldResolution = dict[str, str]


def resolve_header(headers: Sequence[str], synonyms: Sequence[str]) -> str | None:
    """Return the header matching the earliest tier / synonym, or None."""
    trimmed = [str(h or "").strip() for h in headers]
    lowered = [h.lower() for h in trimmed]

    for name in synonyms:
        target = name.strip().lower()
        if target in lowered:
            return headers[lowered.index(target)]

    for name in synonyms:
        pattern = re.compile(rf"\b{re.escape(name)}\b", re.IGNORECASE)
        for idx, text in enumerate(trimmed):
            if pattern.search(text):
                return headers[idx]

    for name in synonyms:
        needle = name.lower()
        for idx, text in enumerate(lowered):
            if needle in text:
                return headers[idx]

    return None


def resolve_fields(headers: Sequence[str], field_table: Mapping[str, Sequence[str]]) -> FieldResolution:
    """Resolve every logical field of ``field_table`` against one header row."""
    resolution: FieldResolution = {}
    for field_name, synonyms in field_table.items():
        found = resolve_header(headers, synonyms)
        if found is not None:
            resolution[field_name] = found
    unresolved = [f for f in field_table if f not in resolution]
    if unresolved:
        logger.debug("unresolved fields=%s", unresolved)
    return resolution

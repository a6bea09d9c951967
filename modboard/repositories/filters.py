from __future__ import annotations

import re

LIKE_ESCAPE = "\\"
# Upper bound of the archive's 32-bit integer columns (ticket id, sequence, panel id).
MAX_INT_COLUMN = 2**31 - 1
_SEQUENCE_RE = re.compile(r"^\d+$")


def normalize_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def non_blank(value: str | None) -> str | None:
    """Whitespace-only means absent; anything else is kept as typed."""
    if value is None or not value.strip():
        return None
    return value


def contains_pattern(value: str) -> str:
    escaped = value.lower().replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def parse_sequence(value: str | None) -> int | None:
    normalized = normalize_text(value)
    if normalized is None or not _SEQUENCE_RE.match(normalized):
        return None
    sequence = int(normalized)
    if sequence > MAX_INT_COLUMN:
        return None
    return sequence

from __future__ import annotations

from modboard.core.exceptions import ValidationAppError
from modboard.services.mentions import MAX_SNOWFLAKE


def parse_snowflake(value: str | None, field: str, *, required: bool = False) -> int | None:
    """Parse a 64-bit entity ID passed as a string; blank means absent."""
    normalized = (value or "").strip()
    if not normalized:
        if required:
            raise ValidationAppError(f"{field} is required", details={"field": field})
        return None
    if not (normalized.isascii() and normalized.isdigit()) or int(normalized) > MAX_SNOWFLAKE:
        raise ValidationAppError(
            f"{field} must be a numeric ID",
            details={"field": field, "value": value},
        )
    return int(normalized)


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit

"""Parsing helpers for rows returned by Supabase."""

from datetime import UTC, datetime
from uuid import UUID


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp; naive values are UTC, bad values are None."""
    if not isinstance(raw, str) or not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_uuid(raw: object) -> UUID | None:
    """Parse a UUID column, returning None for null or malformed values."""
    if isinstance(raw, UUID):
        return raw
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return UUID(raw)
    except ValueError:
        return None

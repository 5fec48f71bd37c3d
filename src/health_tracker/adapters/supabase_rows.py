"""Helpers for parsing Supabase row values."""

from datetime import date, datetime


def parse_date(raw: object) -> date:
    """Parse a ``YYYY-MM-DD`` column value."""
    if isinstance(raw, date):
        return raw
    return date.fromisoformat(str(raw)[:10])


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column value, if present."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def optional_float(raw: object) -> float | None:
    if raw is None:
        return None
    return float(raw)


def optional_int(raw: object) -> int | None:
    if raw is None:
        return None
    return int(raw)

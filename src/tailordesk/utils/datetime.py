# File: src/tailordesk/utils/datetime.py
"""UTC datetime helpers."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Get current timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def now_utc_naive() -> datetime:
    """Get current UTC datetime as NAIVE for database storage."""
    return now_utc().replace(tzinfo=None)


def from_timestamp(seconds: int | float) -> datetime:
    """Convert a POSIX timestamp (JWT exp/iat) to aware UTC."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def parse_iso(value: str | None) -> datetime | None:
    """Parse an ISO-8601 string, assuming UTC for naive values. Bad input yields None."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

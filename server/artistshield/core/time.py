"""UTC datetime utilities.

``utcnow()`` returns **naive** UTC datetimes (no tzinfo), compatible with
SQLAlchemy ``DateTime`` columns on both SQLite and PostgreSQL.
"""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


def isoformat_utc(value: datetime) -> str:
    """ISO-8601 rendering of a timestamp, treating naive values as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()

"""Timestamp helpers. All domain timestamps are timezone-aware UTC."""

from datetime import UTC, datetime


def utc_now():
    return datetime.now(UTC)


def as_utc(moment):
    """Treat naive datetimes as UTC so they compare with stored aware ones."""
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)

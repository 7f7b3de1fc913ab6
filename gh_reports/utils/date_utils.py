"""Date helpers for age and staleness calculations in reports."""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with API timestamps."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def date_with_days_delta(days: int, now: datetime | None = None) -> datetime:
    """Build a datetime the given number of days ahead of (or behind) now.

    Args:
        days: Days to add; negative values move into the past
        now: Reference time, defaults to the current UTC time

    Returns:
        Shifted datetime

    Example:
        >>> date_with_days_delta(-7, datetime(2024, 5, 8, tzinfo=timezone.utc))
        datetime.datetime(2024, 5, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    reference = ensure_utc(now) if now is not None else utc_now()
    return reference + timedelta(days=days)


def diff_in_days_from_today(dt: datetime, now: datetime | None = None) -> int:
    """Whole days elapsed between ``dt`` and now, rounded down."""
    reference = ensure_utc(now) if now is not None else utc_now()
    return (reference - ensure_utc(dt)).days


def format_long_date(dt: datetime) -> str:
    """Format a datetime as a long US date, e.g. ``April 5, 2024``."""
    return f"{dt.strftime('%B')} {dt.day}, {dt.year}"


def month_name(now: datetime | None = None) -> str:
    """Full month name used to label monthly reporting periods."""
    reference = now if now is not None else utc_now()
    return reference.strftime("%B")

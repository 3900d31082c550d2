"""
Calendar helpers for local-day and ISO-week windows.

``tz=None`` means the host's local zone throughout.
"""

from datetime import date, datetime, time, timedelta, tzinfo


def ensure_aware(value: datetime, tz: tzinfo | None = None) -> datetime:
    """Attach ``tz`` (or host-local time) to a naive datetime."""
    if value.tzinfo is not None:
        return value
    if tz is None:
        return value.astimezone()
    return value.replace(tzinfo=tz)


def now(tz: tzinfo | None = None) -> datetime:
    """Current time, timezone-aware."""
    return datetime.now(tz) if tz is not None else datetime.now().astimezone()


def local_date(value: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of ``value`` in ``tz``."""
    return ensure_aware(value, tz).astimezone(tz).date()


def day_bounds(day: date, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """Inclusive start and end instants of a calendar day."""
    return (
        ensure_aware(datetime.combine(day, time.min), tz),
        ensure_aware(datetime.combine(day, time.max), tz),
    )


def week_bounds(day: date) -> tuple[date, date]:
    """Monday and Sunday of the ISO week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)

"""Calendar-day helpers.

A "day" is bounded by local midnight in the ward's time zone. All returned
datetimes are timezone-aware and expressed in UTC.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Tuple, Union


def local_midnight(day: date, tz: tzinfo) -> datetime:
    """Return local midnight of ``day`` in ``tz``, converted to UTC."""
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def today(tz: tzinfo, now: Optional[datetime] = None) -> date:
    """Current calendar day as seen from ``tz``."""
    current = now if now is not None else datetime.now(timezone.utc)
    return current.astimezone(tz).date()


def day_window(
    day: Optional[date], tz: tzinfo, now: Optional[datetime] = None
) -> Tuple[datetime, datetime]:
    """Return ``[start, end)`` covering one local calendar day.

    Args:
        day: Calendar day (defaults to today in ``tz``)
        tz: Ward time zone
        now: Reference instant used when ``day`` is omitted

    Returns:
        Tuple of (local midnight, next local midnight), both in UTC
    """
    day = day if day is not None else today(tz, now)
    return local_midnight(day, tz), local_midnight(day + timedelta(days=1), tz)


def as_chart_date(value: Union[date, datetime], tz: tzinfo) -> datetime:
    """Normalise a chart date input to an aware UTC datetime.

    A bare date becomes local midnight; a naive datetime is read as local
    wall-clock time in ``tz``.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=tz)
        return value.astimezone(timezone.utc)
    return local_midnight(value, tz)

"""Elapsed weekday hours between two timestamps."""

from __future__ import annotations

from datetime import datetime, timedelta

_HOUR = timedelta(hours=1)
_SATURDAY = 5
_SUNDAY = 6


def to_wall_clock(dt: datetime) -> datetime:
    """Return dt as a naive local wall-clock time.

    Aware values are converted to the system zone, so midnights fall where
    the local calendar puts them even across a DST change. Naive values are
    already taken as local and pass through unchanged.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def business_hours_between(start: datetime, end: datetime) -> float:
    """Return the hours between start and end that fall on Monday–Friday.

    Works on the wall-clock time as given: no timezone normalisation is
    applied, so both arguments must be either naive or aware. Pass values
    through to_wall_clock() to count local hours. Partial days count their
    fractional hours. Returns 0.0 when start is not before end.
    """
    hours = 0.0
    current = start

    while current < end:
        next_midnight = current.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)
        if current.weekday() not in (_SATURDAY, _SUNDAY):
            hours += min(next_midnight - current, end - current) / _HOUR
        current = next_midnight

    return hours

"""Timestamp and calendar-date utilities for lfmatch."""

import re
from datetime import UTC, date, datetime

__all__ = ["get_iso_timestamp", "to_calendar_date"]

# Calendar dates only; ISO week and ordinal forms are rejected
_CALENDAR_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def get_iso_timestamp() -> str:
    """Get current UTC timestamp in ISO8601 format with microseconds.

    Returns
    -------
    str
        ISO8601 timestamp with microseconds (e.g., "2026-02-03T12:34:56.123456Z").
    """
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def to_calendar_date(value: date | datetime | str) -> date:
    """Reduce a date, datetime or ISO8601 string to its UTC calendar day.

    Parameters
    ----------
    value : date | datetime | str
        ``YYYY-MM-DD``, an ISO8601 datetime string (``Z`` or offset suffix),
        or a date/datetime object. Naive datetimes are taken as UTC.

    Returns
    -------
    date
        Calendar day with no time-of-day component.

    Raises
    ------
    ValueError
        If a string value is not a ``YYYY-MM-DD`` date or ISO8601 datetime, or
        if converting to UTC leaves the supported date range.

    Notes
    -----
    Day differences are computed between calendar days so that the
    time-of-day stored with a report never shifts a difference by one.
    """
    if isinstance(value, str):
        text = value.strip()
        if not _CALENDAR_DATE.match(text):
            raise ValueError(f"Invalid calendar date: {value!r}")
        if len(text) == 10:
            return date.fromisoformat(text)
        value = datetime.fromisoformat(text.replace("Z", "+00:00"))

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            try:
                value = value.astimezone(UTC)
            except OverflowError as e:
                raise ValueError(f"Date out of range in UTC: {value.isoformat()}") from e
        return value.date()

    return value

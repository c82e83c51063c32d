"""Shared helpers: timestamps, calendar dates and file hashing."""

from lfmatch.utils.hashing import calculate_file_sha256, format_sha256
from lfmatch.utils.timestamps import get_iso_timestamp, to_calendar_date

__all__ = [
    "get_iso_timestamp",
    "to_calendar_date",
    "calculate_file_sha256",
    "format_sha256",
]

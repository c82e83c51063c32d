"""Canonical record types consumed by the matching engine."""

from lfmatch.models.records import (
    CLAIMED_STATUS,
    FOUND_STATUSES,
    ITEM_CATEGORIES,
    SCHEMA_VERSION,
    FoundItemRecord,
    LostItemRecord,
)

__all__ = [
    "SCHEMA_VERSION",
    "ITEM_CATEGORIES",
    "CLAIMED_STATUS",
    "FOUND_STATUSES",
    "LostItemRecord",
    "FoundItemRecord",
]

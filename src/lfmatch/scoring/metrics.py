"""Percentage comparison metrics for a single lost/found pair.

Used when an admin inspects one candidate side by side. Unlike the
ranking score these are bounded 0-100 per dimension and combined with
fixed weights into an overall percentage.
"""

import math

from lfmatch.models import FoundItemRecord, LostItemRecord
from lfmatch.scoring.comparators import days_apart
from lfmatch.scoring.models import ComparisonMetrics

__all__ = ["compare_items", "date_percentage", "location_percentage", "description_percentage"]

# (max days apart, percentage), checked in order
_DATE_STEPS = ((0, 100), (3, 75), (7, 50), (14, 25))
_DATE_FLOOR = 10

_LOCATION_EXACT = 100
_LOCATION_CONTAINS = 75
_LOCATION_MIN_WORD = 2

_DESCRIPTION_MIN_WORD = 3
_DESCRIPTION_MAX_WORDS = 10

_OVERALL_WEIGHTS = {"category": 0.3, "date": 0.2, "location": 0.3, "description": 0.2}


def _overlap_count(words: list[str], others: list[str]) -> int:
    return sum(1 for w in words if any(w in o or o in w for o in others))


def date_percentage(days: int) -> int:
    """Map a day difference to a proximity percentage."""
    for max_days, pct in _DATE_STEPS:
        if days <= max_days:
            return pct
    return _DATE_FLOOR


def location_percentage(lost_location: str, found_location: str) -> float:
    """Location similarity: exact, containment, then word overlap.

    Word overlap is the share of lost-location words (all words count in
    the denominator, only words longer than 2 characters can match) that
    have a found-location word in substring relation.
    """
    lost = lost_location.lower()
    found = found_location.lower()

    if lost == found:
        return float(_LOCATION_EXACT)
    if lost in found or found in lost:
        return float(_LOCATION_CONTAINS)

    lost_words = lost.split()
    found_words = found.split()
    matched = _overlap_count([w for w in lost_words if len(w) > _LOCATION_MIN_WORD], found_words)
    return min(100.0, matched / max(1, len(lost_words)) * 100)


def description_percentage(lost_description: str, found_description: str) -> float:
    """Description keyword overlap, relative to at most 10 lost keywords."""
    lost_words = [w for w in lost_description.lower().split() if len(w) > _DESCRIPTION_MIN_WORD]
    found_words = [w for w in found_description.lower().split() if len(w) > _DESCRIPTION_MIN_WORD]

    matched = _overlap_count(lost_words, found_words)
    denominator = max(1, min(len(lost_words), _DESCRIPTION_MAX_WORDS))
    return min(100.0, matched / denominator * 100)


def compare_items(lost_item: LostItemRecord, found_item: FoundItemRecord) -> ComparisonMetrics:
    """Compute side-by-side comparison percentages for one pair.

    Parameters
    ----------
    lost_item : LostItemRecord
        Lost-item report.
    found_item : FoundItemRecord
        Found-item report.

    Returns
    -------
    ComparisonMetrics
        Category, date, location and description percentages plus the
        weighted overall value.
    """
    category = 100 if lost_item.category == found_item.category else 0
    date = date_percentage(days_apart(lost_item.lost_date, found_item.found_date))
    location = location_percentage(lost_item.lost_location, found_item.found_location)
    description = description_percentage(lost_item.description, found_item.description)

    weighted = (
        category * _OVERALL_WEIGHTS["category"]
        + date * _OVERALL_WEIGHTS["date"]
        + location * _OVERALL_WEIGHTS["location"]
        + description * _OVERALL_WEIGHTS["description"]
    )

    return ComparisonMetrics(
        category=category,
        date=date,
        location=location,
        description=description,
        overall=math.floor(weighted + 0.5),
    )

"""Per-signal comparators for lost/found pairs.

Each comparator is a pure function over plain values and returns the
points it awards under a given ``MatchWeights``.
"""

from datetime import date

from lfmatch.scoring.weights import DEFAULT_WEIGHTS, MatchWeights

__all__ = [
    "compare_category",
    "days_apart",
    "compare_dates",
    "locations_overlap",
    "compare_locations",
    "keyword_tokens",
    "matched_keywords",
    "compare_keywords",
]


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------


def compare_category(
    category_a: str,
    category_b: str,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> int:
    """Award category points on exact, case-sensitive equality."""
    return weights.category if category_a == category_b else 0


# ---------------------------------------------------------------------------
# Date proximity
# ---------------------------------------------------------------------------


def days_apart(date_a: date, date_b: date) -> int:
    """Absolute number of calendar days between two dates."""
    return abs((date_a - date_b).days)


def compare_dates(
    date_a: date,
    date_b: date,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> int:
    """Award date-proximity points.

    Parameters
    ----------
    date_a, date_b : date
        Lost and found dates (order irrelevant).
    weights : MatchWeights, optional
        Point and window configuration.

    Returns
    -------
    int
        ``date_near`` within ``date_near_days``, ``date_far`` within
        ``date_far_days``, else 0.
    """
    days = days_apart(date_a, date_b)
    if days <= weights.date_near_days:
        return weights.date_near
    if days <= weights.date_far_days:
        return weights.date_far
    return 0


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------


def locations_overlap(location_a: str, location_b: str) -> bool:
    """Check whether either lower-cased location contains the other.

    Examples
    --------
        >>> locations_overlap("Library", "Main Library, 2nd Floor")
        True
        >>> locations_overlap("Gym", "Cafeteria")
        False
    """
    a = location_a.lower()
    b = location_b.lower()
    return a in b or b in a


def compare_locations(
    location_a: str,
    location_b: str,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> int:
    """Award location points on mutual substring containment."""
    return weights.location if locations_overlap(location_a, location_b) else 0


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------


def keyword_tokens(
    item_name: str,
    description: str,
    min_length: int = DEFAULT_WEIGHTS.min_token_length,
) -> list[str]:
    """Tokenise name and description into lower-cased keywords.

    Parameters
    ----------
    item_name : str
        Item name.
    description : str
        Free-text description.
    min_length : int, optional
        Tokens must be strictly longer than this, by default 3.

    Returns
    -------
    list[str]
        Whitespace-split tokens in text order, duplicates kept.
    """
    text = f"{item_name} {description}".lower()
    return [token for token in text.split() if len(token) > min_length]


def matched_keywords(lost_words: list[str], found_words: list[str]) -> list[str]:
    """Return lost-side tokens with a found-side token in substring relation.

    A lost token matches when some found token contains it or is contained
    in it. Repeated lost tokens match (and count) once per occurrence.
    """
    return [
        word
        for word in lost_words
        if any(word in other or other in word for other in found_words)
    ]


def compare_keywords(
    lost_words: list[str],
    found_words: list[str],
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> int:
    """Award keyword points, one ``weights.keyword`` per matched lost token."""
    return len(matched_keywords(lost_words, found_words)) * weights.keyword

"""Lost/found match scoring and ranking.

Every lost item is scored against every unclaimed found item:

1. Category equality
2. Date proximity (calendar days)
3. Location substring overlap
4. Keyword overlap between names and descriptions

Pairs reaching the admission threshold are returned best-first. Ties keep
the order in which pairs were generated (lost items outer, found items
inner), so the ranking is fully determined by the inputs.
"""

from collections.abc import Sequence

from lfmatch.models import FoundItemRecord, LostItemRecord
from lfmatch.scoring.comparators import (
    compare_category,
    compare_dates,
    compare_locations,
    days_apart,
    keyword_tokens,
    matched_keywords,
)
from lfmatch.scoring.models import MatchCandidate, ScoreBreakdown
from lfmatch.scoring.weights import DEFAULT_WEIGHTS, MatchWeights

__all__ = ["score_pair", "compute_matches", "candidate_id", "split_candidate_id"]

CANDIDATE_ID_SEPARATOR = "-"


def candidate_id(lost_id: str, found_id: str) -> str:
    """Build the composite candidate key ``"<lost id>-<found id>"``."""
    return f"{lost_id}{CANDIDATE_ID_SEPARATOR}{found_id}"


def split_candidate_id(value: str) -> tuple[str, str]:
    """Recover the lost and found item ids from a candidate key.

    Splits on the first separator, so found ids may contain ``-`` but
    lost ids may not.

    Parameters
    ----------
    value : str
        Candidate key, e.g. ``"66a1-66b2"``.

    Returns
    -------
    tuple[str, str]
        ``(lost_id, found_id)``.

    Raises
    ------
    ValueError
        If the key lacks a separator or either side is empty.
    """
    lost_id, sep, found_id = value.partition(CANDIDATE_ID_SEPARATOR)
    if not sep or not lost_id or not found_id:
        raise ValueError(f"Malformed candidate id: {value!r}")
    return lost_id, found_id


def score_pair(
    lost_item: LostItemRecord,
    found_item: FoundItemRecord,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> ScoreBreakdown:
    """Score a single lost/found pair.

    The found item's status is not considered here; claimed items are
    excluded by ``compute_matches``.

    Parameters
    ----------
    lost_item : LostItemRecord
        Lost-item report.
    found_item : FoundItemRecord
        Found-item report.
    weights : MatchWeights, optional
        Signal weights, by default the production constants.

    Returns
    -------
    ScoreBreakdown
        Per-signal points; ``breakdown.total`` is the pair score.
    """
    lost_words = keyword_tokens(
        lost_item.item_name, lost_item.description, weights.min_token_length
    )
    found_words = keyword_tokens(
        found_item.item_name, found_item.description, weights.min_token_length
    )
    keywords = matched_keywords(lost_words, found_words)

    return ScoreBreakdown(
        category=compare_category(lost_item.category, found_item.category, weights),
        date=compare_dates(lost_item.lost_date, found_item.found_date, weights),
        location=compare_locations(lost_item.lost_location, found_item.found_location, weights),
        keywords=len(keywords) * weights.keyword,
        days_apart=days_apart(lost_item.lost_date, found_item.found_date),
        matched_keywords=tuple(keywords),
    )


def compute_matches(
    lost_items: Sequence[LostItemRecord],
    found_items: Sequence[FoundItemRecord],
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> list[MatchCandidate]:
    """Score all lost/found pairs and rank those above the threshold.

    Parameters
    ----------
    lost_items : Sequence[LostItemRecord]
        Lost-item reports, any size.
    found_items : Sequence[FoundItemRecord]
        Found-item reports, any size. Claimed items are never paired.
    weights : MatchWeights, optional
        Signal weights and admission threshold.

    Returns
    -------
    list[MatchCandidate]
        Candidates with ``score >= weights.threshold``, sorted by
        descending score (stable).

    Examples
    --------
        >>> from lfmatch import compute_matches
        >>> candidates = compute_matches(lost_items, found_items)
        >>> [(c.id, c.score) for c in candidates]
    """
    eligible = [item for item in found_items if not item.is_claimed]
    candidates: list[MatchCandidate] = []

    for lost_item in lost_items:
        for found_item in eligible:
            breakdown = score_pair(lost_item, found_item, weights)
            score = breakdown.total
            if score < weights.threshold:
                continue
            candidates.append(
                MatchCandidate(
                    lost_item=lost_item,
                    found_item=found_item,
                    score=score,
                    id=candidate_id(lost_item.id, found_item.id),
                    breakdown=breakdown,
                )
            )

    # list.sort is stable: equal scores keep generation order
    candidates.sort(key=lambda c: c.score, reverse=True)
    return candidates

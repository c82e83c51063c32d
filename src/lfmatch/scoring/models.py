"""Data models for match scoring.

This module defines the candidate pairs produced by the scorer together
with their per-signal explanation.
"""

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any

from lfmatch.models import FoundItemRecord, LostItemRecord

__all__ = [
    "ScoreBreakdown",
    "MatchStrength",
    "MatchCandidate",
    "ComparisonMetrics",
    "STRONG_MATCH_SCORE",
    "GOOD_MATCH_SCORE",
]

STRONG_MATCH_SCORE = 6
GOOD_MATCH_SCORE = 4


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Points contributed by each signal for one pair.

    Attributes
    ----------
    category : int
        Category points.
    date : int
        Date-proximity points.
    location : int
        Location-overlap points.
    keywords : int
        Keyword-overlap points.
    days_apart : int
        Absolute calendar days between the two reports.
    matched_keywords : tuple[str, ...]
        Lost-side tokens that found a counterpart (immutable).
    """

    category: int
    date: int
    location: int
    keywords: int
    days_apart: int
    matched_keywords: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        """Sum of all signal points."""
        return self.category + self.date + self.location + self.keywords

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["matched_keywords"] = list(self.matched_keywords)
        data["total"] = self.total
        return data


class MatchStrength(StrEnum):
    """Admin-facing label for a candidate score."""

    STRONG = "strong"
    GOOD = "good"
    POSSIBLE = "possible"

    @classmethod
    def for_score(cls, score: int) -> "MatchStrength":
        """Label a score: strong >= 6, good >= 4, otherwise possible."""
        if score >= STRONG_MATCH_SCORE:
            return cls.STRONG
        if score >= GOOD_MATCH_SCORE:
            return cls.GOOD
        return cls.POSSIBLE


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    """A scored lost/found pairing proposed for admin confirmation.

    Attributes
    ----------
    lost_item : LostItemRecord
        The lost-item report.
    found_item : FoundItemRecord
        The found-item report.
    score : int
        Aggregate score (>= the admission threshold).
    id : str
        Composite key ``"<lost id>-<found id>"``.
    breakdown : ScoreBreakdown | None
        Per-signal explanation of ``score``.
    """

    lost_item: LostItemRecord
    found_item: FoundItemRecord
    score: int
    id: str
    breakdown: ScoreBreakdown | None = None

    @property
    def strength(self) -> MatchStrength:
        """Admin-facing strength label."""
        return MatchStrength.for_score(self.score)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Returns
        -------
        dict
            Complete dictionary representation.
        """
        return {
            "id": self.id,
            "score": self.score,
            "strength": self.strength.value,
            "lost_item": self.lost_item.to_dict(),
            "found_item": self.found_item.to_dict(),
            "breakdown": self.breakdown.to_dict() if self.breakdown is not None else None,
        }


@dataclass(frozen=True, slots=True)
class ComparisonMetrics:
    """Side-by-side similarity percentages for one pair (0-100 each).

    Attributes
    ----------
    category : int
        100 on identical category, else 0.
    date : int
        Date-proximity percentage.
    location : float
        Location similarity percentage.
    description : float
        Description keyword-overlap percentage.
    overall : int
        Weighted overall percentage, rounded half up.
    """

    category: int
    date: int
    location: float
    description: float
    overall: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

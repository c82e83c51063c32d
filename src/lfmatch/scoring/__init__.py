"""Lost/found match scoring.

This package implements the scoring layer that pairs lost-item reports
with found-item reports and ranks the pairs for admin review.
"""

from lfmatch.scoring.matcher import (
    candidate_id,
    compute_matches,
    score_pair,
    split_candidate_id,
)
from lfmatch.scoring.metrics import compare_items
from lfmatch.scoring.models import (
    ComparisonMetrics,
    MatchCandidate,
    MatchStrength,
    ScoreBreakdown,
)
from lfmatch.scoring.weights import DEFAULT_WEIGHTS, MatchWeights, load_weights

__all__ = [
    # Models
    "ScoreBreakdown",
    "MatchCandidate",
    "MatchStrength",
    "ComparisonMetrics",
    # Weights
    "MatchWeights",
    "DEFAULT_WEIGHTS",
    "load_weights",
    # Scoring
    "score_pair",
    "compute_matches",
    "candidate_id",
    "split_candidate_id",
    "compare_items",
]

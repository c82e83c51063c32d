"""Match run configuration and result dataclasses."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from lfmatch.models import FOUND_STATUSES
from lfmatch.scoring import DEFAULT_WEIGHTS, MatchWeights, load_weights


@dataclass
class MatchConfig:
    """Configuration for a match run.

    Attributes
    ----------
    weights : MatchWeights
        Signal weights and admission threshold.
    weights_path : Path | None
        JSON file of weight overrides. When set, replaces ``weights``.
    found_statuses : list[str] | None
        Only found items with one of these statuses are matched.
        None considers every found item (claimed ones are still excluded).
    output_dir : Path
        Directory for ``matches.jsonl``, ``match_summary.json`` and
        ``events.jsonl``.
    top_k : int | None
        Keep only the best ``top_k`` candidates. None keeps all.
    """

    weights: MatchWeights = field(default_factory=lambda: DEFAULT_WEIGHTS)
    weights_path: Path | None = None
    found_statuses: list[str] | None = None
    output_dir: Path = Path("out")
    top_k: int | None = None

    def __post_init__(self) -> None:
        """Load weight overrides and validate."""
        self.output_dir = Path(self.output_dir)

        if self.weights_path is not None:
            self.weights_path = Path(self.weights_path)
            self.weights = load_weights(self.weights_path)

        if self.found_statuses is not None:
            unknown = sorted(set(self.found_statuses) - set(FOUND_STATUSES))
            if unknown:
                valid = ", ".join(FOUND_STATUSES)
                raise ValueError(f"Unknown found status(es): {', '.join(unknown)}. Valid: {valid}")

        if self.top_k is not None and self.top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {self.top_k}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "weights": self.weights.to_dict(),
            "weights_path": str(self.weights_path) if self.weights_path is not None else None,
            "found_statuses": self.found_statuses,
            "output_dir": str(self.output_dir),
            "top_k": self.top_k,
        }


@dataclass
class MatchRunResult:
    """Results from a match run.

    Attributes
    ----------
    success : bool
        Whether the run completed successfully.
    total_lost : int
        Lost items loaded.
    total_found : int
        Found items loaded.
    eligible_found : int
        Found items left after the status filter.
    pairs_considered : int
        Lost x unclaimed eligible-found pairs scored.
    pairs_skipped_claimed : int
        Pairs never scored because the found item is claimed.
    total_candidates : int
        Candidates written.
    strength_counts : dict[str, int]
        Candidates per strength label.
    output_files : dict[str, str]
        Map of artifact name to file path.
    error_message : str | None
        Error message if failed.
    """

    success: bool
    total_lost: int = 0
    total_found: int = 0
    eligible_found: int = 0
    pairs_considered: int = 0
    pairs_skipped_claimed: int = 0
    total_candidates: int = 0
    strength_counts: dict[str, int] = field(default_factory=dict)
    output_files: dict[str, str] = field(default_factory=dict)
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

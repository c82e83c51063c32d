"""Signal weights and admission threshold for the match scorer."""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

__all__ = ["MatchWeights", "DEFAULT_WEIGHTS", "load_weights"]


@dataclass(frozen=True)
class MatchWeights:
    """Points awarded per signal and the minimum score for a candidate.

    The defaults are the production constants; changing them changes
    which pairs admins see.

    Attributes
    ----------
    category : int
        Points for identical categories.
    date_near : int
        Points when the reports are at most ``date_near_days`` apart.
    date_near_days : int
        Inclusive day window for ``date_near``.
    date_far : int
        Points when the reports are at most ``date_far_days`` apart.
    date_far_days : int
        Inclusive day window for ``date_far``.
    location : int
        Points when one location contains the other.
    keyword : int
        Points per lost-side keyword with a found-side counterpart.
    min_token_length : int
        Keywords must be strictly longer than this.
    threshold : int
        Minimum total score for a pair to be admitted.
    """

    category: int = 3
    date_near: int = 2
    date_near_days: int = 3
    date_far: int = 1
    date_far_days: int = 7
    location: int = 2
    keyword: int = 1
    min_token_length: int = 3
    threshold: int = 3

    def __post_init__(self) -> None:
        """Validate weights."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{f.name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{f.name} must be >= 0, got {value}")

        if self.date_near_days > self.date_far_days:
            raise ValueError(
                f"date_near_days ({self.date_near_days}) must not exceed "
                f"date_far_days ({self.date_far_days})"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatchWeights":
        """Build weights from a partial mapping, defaults filling the rest.

        Raises
        ------
        ValueError
            If the mapping contains unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown weight keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return asdict(self)


DEFAULT_WEIGHTS = MatchWeights()


def load_weights(path: Path) -> MatchWeights:
    """Load weight overrides from a JSON object file.

    Parameters
    ----------
    path : Path
        JSON file, e.g. ``{"threshold": 4, "location": 3}``.

    Returns
    -------
    MatchWeights
        Weights with the file's values applied over the defaults.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file is not a JSON object or holds invalid values.
    """
    if not path.exists():
        raise FileNotFoundError(f"Weights file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Weights file must contain a JSON object: {path}")
    return MatchWeights.from_dict(data)

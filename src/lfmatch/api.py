"""Public API for loading item reports and matching them.

This module provides the main public API for lfmatch, enabling:
- Loading lost and found item files into canonical records
- Exporting ranked candidates to JSONL format
- Running a complete match run over two item files
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from lfmatch.ingest import ItemKind, load_records
from lfmatch.models import FoundItemRecord, LostItemRecord

if TYPE_CHECKING:
    from lfmatch.engine.config import MatchRunResult
    from lfmatch.scoring import MatchCandidate

__all__ = [
    "load_lost_items",
    "load_found_items",
    "write_jsonl",
    "match_files",
    "RecordError",
]


class RecordError(Exception):
    """Raised when item documents cannot be loaded or matched."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
    ) -> None:
        """Initialize record error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        """
        super().__init__(message)
        self.file = file


def _load(path: str | Path, kind: ItemKind, strict: bool) -> list:
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    records, result = load_records(file_path, kind)

    if result.errors and strict:
        error_msg = "; ".join(result.errors[:3])
        raise RecordError(
            f"{len(result.errors)} invalid {kind} item(s) in {file_path.name}: {error_msg}",
            file=str(file_path),
        )

    return records


def load_lost_items(path: str | Path, *, strict: bool = True) -> list[LostItemRecord]:
    """Load lost-item reports from a JSON or JSON Lines file.

    Legacy field names (``_id``, ``dateLost``, ``lastLocation``) are mapped
    to canonical ones before validation.

    Parameters
    ----------
    path : str | Path
        Path to file.
    strict : bool, optional
        If True, raise on any invalid document. If False, skip invalid
        documents, by default True.

    Returns
    -------
    list[LostItemRecord]
        Records in file order.

    Raises
    ------
    RecordError
        If any document is invalid and strict=True.
    FileNotFoundError
        If file does not exist.

    Examples
    --------
        >>> from lfmatch import load_lost_items
        >>> lost = load_lost_items("lost_items.json")
    """
    return _load(path, "lost", strict)


def load_found_items(path: str | Path, *, strict: bool = True) -> list[FoundItemRecord]:
    """Load found-item reports from a JSON or JSON Lines file.

    Parameters
    ----------
    path : str | Path
        Path to file.
    strict : bool, optional
        If True, raise on any invalid document, by default True.

    Returns
    -------
    list[FoundItemRecord]
        Records in file order.

    Raises
    ------
    RecordError
        If any document is invalid and strict=True.
    FileNotFoundError
        If file does not exist.
    """
    return _load(path, "found", strict)


def write_jsonl(
    candidates: Sequence[MatchCandidate],
    path: str | Path,
) -> None:
    """Write ranked candidates to a JSONL file (one JSON object per line).

    Output is deterministic: ranking order is preserved, keys are sorted,
    and the file is UTF-8 with ``\\n`` line endings.

    Examples
    --------
        >>> from lfmatch import compute_matches, write_jsonl
        >>> write_jsonl(compute_matches(lost, found), "matches.jsonl")
    """
    from lfmatch.engine import write_candidates

    write_candidates(candidates, Path(path))


def match_files(
    lost_path: str | Path,
    found_path: str | Path,
    *,
    output_dir: str | Path = "out",
    found_statuses: list[str] | None = None,
    top_k: int | None = None,
) -> MatchRunResult:
    """Match lost items against found items from two exported files.

    Simplified interface to the full match run.

    Parameters
    ----------
    lost_path : str | Path
        File of lost-item documents.
    found_path : str | Path
        File of found-item documents.
    output_dir : str | Path, optional
        Directory for output files, by default "out".
    found_statuses : list[str] | None, optional
        Only match found items with these statuses (e.g. ``["verified"]``).
    top_k : int | None, optional
        Keep only the best ``top_k`` candidates.

    Returns
    -------
    MatchRunResult
        Run statistics and output file paths.

    Raises
    ------
    FileNotFoundError
        If either input file does not exist.
    RecordError
        If the run fails.

    Examples
    --------
        >>> from lfmatch import match_files
        >>> result = match_files("lost.json", "found.json", found_statuses=["verified"])
        >>> print(result.total_candidates, result.output_files["matches"])
    """
    from lfmatch.engine import MatchConfig, run_matching

    for path in (lost_path, found_path):
        if not Path(path).exists():
            raise FileNotFoundError(f"Input path not found: {path}")

    config = MatchConfig(
        found_statuses=found_statuses,
        output_dir=Path(output_dir),
        top_k=top_k,
    )

    result = run_matching(Path(lost_path), Path(found_path), config)

    if not result.success:
        raise RecordError(f"Matching failed: {result.error_message}")

    return result

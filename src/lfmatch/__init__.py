"""Lost-and-found item matching for a campus portal.

This package provides:
- Data models (lfmatch.models): canonical lost/found records
- Ingestion (lfmatch.ingest): field-name normalization and validation
- Scoring (lfmatch.scoring): pairwise scoring and ranking
- Engine (lfmatch.engine): match run orchestration
- Audit (lfmatch.audit): structured event logging
- CLI (lfmatch.cli): command-line interface
- Public API (lfmatch.api): high-level convenience functions
"""

__version__ = "0.3.0"
__license__ = "MIT"

from lfmatch.api import (
    RecordError,
    load_found_items,
    load_lost_items,
    match_files,
    write_jsonl,
)
from lfmatch.models import FoundItemRecord, LostItemRecord
from lfmatch.scoring import MatchCandidate, compute_matches

__all__ = [
    "__version__",
    "__license__",
    "LostItemRecord",
    "FoundItemRecord",
    "MatchCandidate",
    "compute_matches",
    "load_lost_items",
    "load_found_items",
    "write_jsonl",
    "match_files",
    "RecordError",
]

"""Match run orchestration engine.

This package provides the main entry point for running a complete match
run over exported item files, including configuration and result types.
"""

from lfmatch.engine.config import MatchConfig, MatchRunResult
from lfmatch.engine.runner import run_matching, summarize_candidates, write_candidates

__all__ = [
    "MatchConfig",
    "MatchRunResult",
    "run_matching",
    "summarize_candidates",
    "write_candidates",
]

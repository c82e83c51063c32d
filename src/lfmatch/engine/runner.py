"""Match run orchestration.

Chains the stages behind the admin "refresh matches" action into a single
deterministic, auditable run:

    Stage 1: Load & validate lost and found items
    Stage 2: Score & rank lost/found pairs
    Stage 3: Write candidates and summary

Every run writes ``events.jsonl`` to the output directory, including
failed runs.
"""

import json
import sys
import time
import traceback
from collections import Counter
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from lfmatch.audit import AuditLogger, generate_run_id, get_package_version
from lfmatch.engine.config import MatchConfig, MatchRunResult
from lfmatch.ingest import IngestionResult, load_records
from lfmatch.models import SCHEMA_VERSION, FoundItemRecord, LostItemRecord
from lfmatch.scoring import MatchCandidate, MatchStrength, compute_matches
from lfmatch.utils import calculate_file_sha256

MATCHES_FILENAME = "matches.jsonl"
SUMMARY_FILENAME = "match_summary.json"
EVENTS_FILENAME = "events.jsonl"

STAGE_LOAD = "stage1_load"
STAGE_SCORE = "stage2_score"
STAGE_WRITE = "stage3_write"


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def write_candidates(candidates: Sequence[MatchCandidate], path: Path) -> None:
    """Write candidates as JSONL, one per line, preserving ranking order.

    Parameters
    ----------
    candidates : Sequence[MatchCandidate]
        Ranked candidates.
    path : Path
        Output file path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        for candidate in candidates:
            json.dump(candidate.to_dict(), f, ensure_ascii=False, sort_keys=True)
            f.write("\n")


def summarize_candidates(candidates: Sequence[MatchCandidate]) -> dict[str, Any]:
    """Count candidates per strength label and report the best score."""
    strengths = Counter(c.strength.value for c in candidates)
    return {
        "total": len(candidates),
        "best_score": candidates[0].score if candidates else None,
        "by_strength": {s.value: strengths.get(s.value, 0) for s in MatchStrength},
    }


def _write_summary(result: MatchRunResult, config: MatchConfig, path: Path) -> None:
    summary = {
        "schema_version": SCHEMA_VERSION,
        "result": result.to_dict(),
        "config": config.to_dict(),
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2, ensure_ascii=False, sort_keys=True)


def _log_artifact(logger: AuditLogger, path: Path, record_count: int | None = None) -> None:
    logger.artifact_written(
        path=path.name,
        sha256=calculate_file_sha256(path),
        bytes_written=path.stat().st_size,
        record_count=record_count,
    )


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


def _stage1_load(
    lost_path: Path,
    found_path: Path,
    logger: AuditLogger,
) -> tuple[list[LostItemRecord], list[FoundItemRecord]]:
    """Stage 1: Load and validate both item collections."""
    start = time.perf_counter()
    logger.stage_started(STAGE_LOAD)

    lost_items, lost_result = load_records(lost_path, "lost")
    found_items, found_result = load_records(found_path, "found")

    for result in (lost_result, found_result):
        _log_rejections(result, logger)

    logger.stage_finished(
        STAGE_LOAD,
        duration_seconds=time.perf_counter() - start,
        counters={
            "lost_read": lost_result.records_read,
            "lost_loaded": lost_result.records_loaded,
            "found_read": found_result.records_read,
            "found_loaded": found_result.records_loaded,
        },
    )
    return lost_items, found_items  # type: ignore[return-value]


def _log_rejections(result: IngestionResult, logger: AuditLogger) -> None:
    for message in result.errors:
        logger.record_rejected(kind=result.kind, reason=f"{result.filename}: {message}")


def _stage2_score(
    lost_items: list[LostItemRecord],
    found_items: list[FoundItemRecord],
    config: MatchConfig,
    logger: AuditLogger,
) -> tuple[list[MatchCandidate], dict[str, int]]:
    """Stage 2: Filter found items by status, then score and rank."""
    start = time.perf_counter()
    logger.stage_started(STAGE_SCORE, expected_records=len(lost_items) * len(found_items))

    if config.found_statuses is not None:
        allowed = set(config.found_statuses)
        eligible = [item for item in found_items if item.status in allowed]
    else:
        eligible = list(found_items)

    claimed = sum(1 for item in eligible if item.is_claimed)
    candidates = compute_matches(lost_items, eligible, config.weights)
    if config.top_k is not None:
        candidates = candidates[: config.top_k]

    counters = {
        "eligible_found": len(eligible),
        "pairs_considered": len(lost_items) * (len(eligible) - claimed),
        "pairs_skipped_claimed": len(lost_items) * claimed,
        "candidates": len(candidates),
    }
    logger.stage_finished(
        STAGE_SCORE,
        duration_seconds=time.perf_counter() - start,
        counters=counters,
    )
    return candidates, counters


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run_matching(
    lost_path: Path,
    found_path: Path,
    config: MatchConfig | None = None,
) -> MatchRunResult:
    """Run the complete match pipeline over two item files.

    Parameters
    ----------
    lost_path : Path
        JSON/JSONL file of lost-item documents.
    found_path : Path
        JSON/JSONL file of found-item documents.
    config : MatchConfig | None, optional
        Run configuration, by default ``MatchConfig()``.

    Returns
    -------
    MatchRunResult
        Statistics and output paths. Failures are reported through
        ``success=False`` and ``error_message`` rather than raised.
    """
    if config is None:
        config = MatchConfig()

    output_dir = config.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    start = time.perf_counter()

    with AuditLogger(generate_run_id(), output_dir / EVENTS_FILENAME) as logger:
        logger.run_started(
            command=list(sys.argv),
            parameters={
                "lost_path": str(lost_path),
                "found_path": str(found_path),
                "package_version": get_package_version(),
                **config.to_dict(),
            },
        )

        try:
            result = _run_stages(Path(lost_path), Path(found_path), config, logger)
        except Exception as e:
            error_msg = f"{type(e).__name__}: {e}"
            logger.error(
                exception_class=type(e).__name__,
                message=str(e),
                stage=logger.current_stage,
                traceback=traceback.format_exc(),
            )
            logger.set_stage(None)
            logger.run_finished("failed", duration_seconds=time.perf_counter() - start)
            return MatchRunResult(
                success=False,
                output_files={"events": str(output_dir / EVENTS_FILENAME)},
                error_message=error_msg,
            )

        logger.run_finished(
            "success",
            duration_seconds=time.perf_counter() - start,
            candidates=result.total_candidates,
        )

    return result


def _run_stages(
    lost_path: Path,
    found_path: Path,
    config: MatchConfig,
    logger: AuditLogger,
) -> MatchRunResult:
    lost_items, found_items = _stage1_load(lost_path, found_path, logger)
    candidates, counters = _stage2_score(lost_items, found_items, config, logger)

    start = time.perf_counter()
    logger.stage_started(STAGE_WRITE, expected_records=len(candidates))

    output_dir = config.output_dir
    matches_path = output_dir / MATCHES_FILENAME
    summary_path = output_dir / SUMMARY_FILENAME

    write_candidates(candidates, matches_path)
    _log_artifact(logger, matches_path, record_count=len(candidates))

    result = MatchRunResult(
        success=True,
        total_lost=len(lost_items),
        total_found=len(found_items),
        eligible_found=counters["eligible_found"],
        pairs_considered=counters["pairs_considered"],
        pairs_skipped_claimed=counters["pairs_skipped_claimed"],
        total_candidates=len(candidates),
        strength_counts=summarize_candidates(candidates)["by_strength"],
        output_files={
            "matches": str(matches_path),
            "summary": str(summary_path),
            "events": str(output_dir / EVENTS_FILENAME),
        },
    )

    _write_summary(result, config, summary_path)
    _log_artifact(logger, summary_path)

    logger.stage_finished(
        STAGE_WRITE,
        duration_seconds=time.perf_counter() - start,
        counters={"candidates_written": len(candidates)},
    )
    return result

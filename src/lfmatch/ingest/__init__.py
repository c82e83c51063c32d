"""Item file ingestion: field-name normalization and schema validation."""

from lfmatch.ingest.loader import (
    IngestionResult,
    ItemKind,
    load_records,
    normalize_document,
    validate_document,
)

__all__ = [
    "ItemKind",
    "IngestionResult",
    "load_records",
    "normalize_document",
    "validate_document",
]

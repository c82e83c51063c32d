"""Lost/found item file ingestion.

Reads raw item documents exported from the portal's data store, maps
legacy field names onto the canonical ones, validates each document
against a JSON Schema and builds immutable records.

Supported inputs:
- JSON array of documents
- JSON object with an ``items`` array (optionally under ``data``)
- JSON Lines (``.jsonl`` / ``.ndjson``), one document per line
"""

import json
from dataclasses import dataclass
from functools import cache
from pathlib import Path
from typing import Any, Literal

from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from lfmatch.models import FoundItemRecord, LostItemRecord
from lfmatch.utils import calculate_file_sha256

__all__ = [
    "ItemKind",
    "IngestionResult",
    "normalize_document",
    "validate_document",
    "load_records",
]

ItemKind = Literal["lost", "found"]

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
_JSONL_SUFFIXES = {".jsonl", ".ndjson"}

# legacy name -> canonical name
_LEGACY_FIELDS: dict[str, dict[str, str]] = {
    "lost": {"_id": "id", "dateLost": "lostDate", "lastLocation": "lostLocation"},
    "found": {"_id": "id"},
}

_DATE_FIELDS = {"lost": "lostDate", "found": "foundDate"}

_RECORD_TYPES: dict[str, type[LostItemRecord] | type[FoundItemRecord]] = {
    "lost": LostItemRecord,
    "found": FoundItemRecord,
}


@dataclass(frozen=True)
class IngestionResult:
    """Immutable result of ingesting a single item file.

    Attributes
    ----------
    filename : str
        Name of the file (basename).
    filepath : str
        Full path to the file.
    kind : str
        ``"lost"`` or ``"found"``.
    file_digest : str
        SHA-256 digest of the file with "sha256:" prefix.
    records_read : int
        Documents found in the file.
    records_loaded : int
        Documents that passed validation.
    errors : tuple[str, ...]
        One message per rejected document.
    """

    filename: str
    filepath: str
    kind: str
    file_digest: str
    records_read: int
    records_loaded: int
    errors: tuple[str, ...] = ()


@cache
def _validator(kind: ItemKind) -> Validator:
    with (_SCHEMAS_DIR / f"{kind}_item.schema.json").open(encoding="utf-8") as f:
        schema = json.load(f)
    validator_cls = validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _unwrap(value: Any) -> Any:
    """Unwrap MongoDB extended-JSON scalars (``{"$oid": ...}``, ``{"$date": ...}``)."""
    if isinstance(value, dict) and len(value) == 1:
        key = next(iter(value))
        if key in ("$oid", "$date"):
            return value[key]
    return value


def normalize_document(document: dict[str, Any], kind: ItemKind) -> dict[str, Any]:
    """Map a raw document onto canonical field names.

    Canonical names take precedence when both forms are present. The
    input document is not modified.

    Parameters
    ----------
    document : dict[str, Any]
        Raw document from the data store.
    kind : ItemKind
        ``"lost"`` or ``"found"``.

    Returns
    -------
    dict[str, Any]
        New document using canonical names only.
    """
    normalized = {key: _unwrap(value) for key, value in document.items()}
    for legacy, canonical in _LEGACY_FIELDS[kind].items():
        if legacy in normalized:
            value = normalized.pop(legacy)
            normalized.setdefault(canonical, value)
    return normalized


def validate_document(document: dict[str, Any], kind: ItemKind) -> list[str]:
    """Validate a normalized document against the item schema.

    Returns
    -------
    list[str]
        Human-readable problems, empty when the document is valid.
    """
    problems = [
        f"{'/'.join(str(p) for p in error.absolute_path) or '<root>'}: {error.message}"
        for error in sorted(_validator(kind).iter_errors(document), key=lambda e: e.json_path)
    ]
    if problems:
        return problems

    date_field = _DATE_FIELDS[kind]
    try:
        _RECORD_TYPES[kind].from_dict(document)
    except ValueError:
        problems.append(f"{date_field}: invalid date {document[date_field]!r}")
    return problems


def _read_jsonl(path: Path) -> tuple[list[Any], dict[int, str]]:
    """Read JSON Lines, keeping a placeholder for each undecodable line."""
    documents: list[Any] = []
    decode_errors: dict[int, str] = {}
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                documents.append(json.loads(line))
            except json.JSONDecodeError as e:
                decode_errors[len(documents)] = e.msg
                documents.append(None)
    return documents, decode_errors


def _read_documents(path: Path) -> tuple[list[Any], dict[int, str]]:
    if path.suffix.lower() in _JSONL_SUFFIXES:
        return _read_jsonl(path)

    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        payload = payload.get("data", payload)
        if isinstance(payload, dict):
            payload = payload.get("items", payload)

    if not isinstance(payload, list):
        raise ValueError(f"{path.name}: expected a JSON array of item documents")
    return payload, {}


def load_records(
    path: Path,
    kind: ItemKind,
) -> tuple[list[LostItemRecord] | list[FoundItemRecord], IngestionResult]:
    """Load, normalize and validate all documents in an item file.

    Invalid documents are skipped and reported in the result.

    Parameters
    ----------
    path : Path
        JSON or JSON Lines file.
    kind : ItemKind
        ``"lost"`` or ``"found"``.

    Returns
    -------
    tuple[list[LostItemRecord] | list[FoundItemRecord], IngestionResult]
        Records in file order and the ingestion result.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If ``kind`` is unknown or the file is not a list of documents.
    json.JSONDecodeError
        If a JSON file is not valid JSON. Undecodable JSON Lines are
        reported per line instead.
    """
    if kind not in _RECORD_TYPES:
        raise ValueError(f"Unknown item kind: {kind!r}. Valid kinds: found, lost")
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    documents, decode_errors = _read_documents(path)
    record_type = _RECORD_TYPES[kind]
    records: list[Any] = []
    errors: list[str] = []

    for index, raw in enumerate(documents):
        if index in decode_errors:
            errors.append(f"document {index}: invalid JSON ({decode_errors[index]})")
            continue
        if not isinstance(raw, dict):
            errors.append(f"document {index}: expected an object, got {type(raw).__name__}")
            continue

        document = normalize_document(raw, kind)
        problems = validate_document(document, kind)
        if problems:
            errors.append(f"document {index}: {'; '.join(problems)}")
            continue

        records.append(record_type.from_dict(document))

    result = IngestionResult(
        filename=path.name,
        filepath=str(path),
        kind=kind,
        file_digest=calculate_file_sha256(path),
        records_read=len(documents),
        records_loaded=len(records),
        errors=tuple(errors),
    )
    return records, result

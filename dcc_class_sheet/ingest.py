from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from .config import DEFAULT_RECORD_COLUMNS, SKILL_KIND
from .models import LabeledRecord
from .normalization import clean_text, snake_case, standardize_columns, timestamp

SUPPORTED_SUFFIXES = {".json", ".csv"}


@dataclass(slots=True)
class ColumnResolution:
    canonical_to_actual: dict[str, str]
    missing_required: list[str]


def _canonical_alias_map() -> dict[str, str]:
    alias_map: dict[str, str] = {}
    for canonical, aliases in DEFAULT_RECORD_COLUMNS.items():
        for alias in aliases:
            alias_map.setdefault(snake_case(alias), canonical)
    return alias_map


def resolve_columns(columns: list[str]) -> ColumnResolution:
    alias_map = _canonical_alias_map()
    standardized = standardize_columns(columns)

    canonical_to_actual: dict[str, str] = {}
    for original, normalized in zip(columns, standardized):
        mapped = alias_map.get(normalized)
        if mapped and mapped not in canonical_to_actual:
            canonical_to_actual[mapped] = original

    missing_required = [required for required in ("name",) if required not in canonical_to_actual]
    return ColumnResolution(canonical_to_actual=canonical_to_actual, missing_required=missing_required)


def _description(doc: dict[str, Any]) -> str:
    system = doc.get("system") or doc.get("data") or {}
    description = system.get("description") if isinstance(system, dict) else None
    if isinstance(description, dict):
        return clean_text(description.get("value"))
    if description is not None:
        return clean_text(description)
    return clean_text(doc.get("description"))


def _updated_at(doc: dict[str, Any]) -> float:
    stats = doc.get("_stats") or {}
    if isinstance(stats, dict) and stats.get("modifiedTime") is not None:
        return timestamp(stats.get("modifiedTime"))
    return timestamp(doc.get("updateTime", doc.get("updated_at")))


def record_from_document(doc: dict[str, Any], position: int = 0) -> LabeledRecord:
    """Convert a Foundry item document (or a flat dict) into a record."""
    record_id = clean_text(doc.get("_id") or doc.get("id")) or f"item-{position}"
    return LabeledRecord(
        id=record_id,
        name=clean_text(doc.get("name")),
        description=_description(doc),
        kind=clean_text(doc.get("type") or doc.get("kind")) or SKILL_KIND,
        updated_at=_updated_at(doc),
    )


def records_from_documents(docs: Iterable[Any]) -> list[LabeledRecord]:
    return [record_from_document(doc, idx) for idx, doc in enumerate(docs) if isinstance(doc, dict)]


def load_actor_records(path: Path) -> list[LabeledRecord]:
    with path.open("r", encoding="utf-8-sig") as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        items = payload.get("items")
        if items is None:
            raise ValueError(f"{path.name}: expected an actor export with an 'items' list")
    else:
        items = payload
    if not isinstance(items, list):
        raise ValueError(f"{path.name}: 'items' must be a list")
    return records_from_documents(items)


def records_from_frame(frame: pd.DataFrame) -> list[LabeledRecord]:
    resolution = resolve_columns([str(c) for c in frame.columns])
    if resolution.missing_required:
        raise ValueError(f"records table missing columns: {resolution.missing_required}")

    rows: list[LabeledRecord] = []
    for idx, row in enumerate(frame.to_dict(orient="records")):
        values = {canonical: row.get(actual) for canonical, actual in resolution.canonical_to_actual.items()}
        rows.append(
            LabeledRecord(
                id=clean_text(values.get("id")) or f"row-{idx}",
                name=clean_text(values.get("name")),
                description=clean_text(values.get("description")),
                kind=clean_text(values.get("kind")) or SKILL_KIND,
                updated_at=timestamp(values.get("updated_at")),
            )
        )
    return rows


def load_records_csv(path: Path) -> list[LabeledRecord]:
    frame = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    return records_from_frame(frame)


def load_records(path: Path) -> list[LabeledRecord]:
    if not path.exists() or not path.is_file():
        raise FileNotFoundError(f"input not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_actor_records(path)
    if suffix == ".csv":
        return load_records_csv(path)
    raise ValueError(f"Unsupported input type {suffix!r}; expected one of {sorted(SUPPORTED_SUFFIXES)}")

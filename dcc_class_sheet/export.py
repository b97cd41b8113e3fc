from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from .config import DEFAULT_OCCUPATIONAL_LABEL, SheetConfig
from .grouping import classify, ordered_groups
from .models import ClassificationResult, LabeledRecord
from .naming import icon_from_resolution, resolve_naming_record

OUTPUT_FILENAMES = {
    "skills": "skills.csv",
    "summary": "summary.json",
}

SKILLS_EXPORT_COLUMNS = ["group", "rank", "item_id", "name", "display_name", "weight", "occupational"]


def build_skills_export(
    result: ClassificationResult,
    preferred_class_name: str | None = None,
    occupational_label: str = DEFAULT_OCCUPATIONAL_LABEL,
) -> pd.DataFrame:
    rows: list[dict[str, Any]] = []
    for group in ordered_groups(result, preferred_class_name):
        for rank, (record, parsed) in enumerate(group.members, start=1):
            rows.append(
                {
                    "group": group.class_name,
                    "rank": rank,
                    "item_id": record.id,
                    "name": record.name,
                    "display_name": parsed.skill_name,
                    "weight": parsed.weight,
                    "occupational": False,
                }
            )
    for rank, record in enumerate(result.occupational, start=1):
        rows.append(
            {
                "group": occupational_label,
                "rank": rank,
                "item_id": record.id,
                "name": record.name,
                "display_name": record.name,
                "weight": 0,
                "occupational": True,
            }
        )
    return pd.DataFrame(rows, columns=SKILLS_EXPORT_COLUMNS)


def build_summary(records: Iterable[LabeledRecord], config: SheetConfig | None = None) -> dict[str, Any]:
    config = config or SheetConfig()
    snapshot = list(records)
    resolution = resolve_naming_record(snapshot, config.naming_token)
    result = classify(snapshot, config.naming_token)

    return {
        "label": resolution.label,
        "tab_label": resolution.label or config.fallback_label,
        "icon": icon_from_resolution(resolution, config.default_icon),
        "naming_record_id": resolution.record.id if resolution.record else None,
        "extra_naming_records": resolution.extra_count,
        "groups": {
            group.class_name: len(group.members) for group in ordered_groups(result, resolution.label)
        },
        "occupational_count": len(result.occupational),
        "total_records": len(snapshot),
    }


def write_dataframe(df: pd.DataFrame, path: Path) -> None:
    if df is None:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)


def write_json(payload: dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

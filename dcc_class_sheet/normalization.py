from __future__ import annotations

import re
from typing import Any


def snake_case(value: str) -> str:
    value = value.strip().replace("\u2013", "-")
    value = re.sub(r"[\-/\.]+", "_", value)
    value = re.sub(r"[\s]+", "_", value)
    value = re.sub(r"[^0-9a-zA-Z_]+", "", value)
    value = re.sub(r"_+", "_", value)
    return value.strip("_").lower()


def standardize_columns(columns: list[str]) -> list[str]:
    standardized: list[str] = []
    seen: dict[str, int] = {}
    for col in columns:
        base = snake_case(str(col))
        if base in seen:
            seen[base] += 1
            standardized.append(f"{base}_{seen[base]}")
        else:
            seen[base] = 0
            standardized.append(base)
    return standardized


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    text = str(value)
    if text.strip().lower() in {"nan", "none", "null"}:
        return ""
    return text


def timestamp(value: Any) -> float:
    try:
        if value is None:
            return 0.0
        parsed = float(value)
        if parsed != parsed:
            return 0.0
        return parsed
    except (TypeError, ValueError):
        return 0.0

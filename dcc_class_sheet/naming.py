"""Resolve the naming record of a character and the tab label/icon it carries."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from .config import DEFAULT_ICON, DEFAULT_STYLE_FAMILY, ICON_STYLE_FAMILIES, NAMING_TOKEN
from .grouping import is_skill
from .models import LabeledRecord, NamingResolution
from .name_parser import parse_naming_item

logger = logging.getLogger(__name__)

_ICON_DIRECTIVE_RE = re.compile(r"<p\s*>\s*icon:\s*([a-z0-9\-]+)\s*</p\s*>", re.IGNORECASE)
_ICON_TOKEN_RE = re.compile(r"^fa-[a-z0-9\-]+$", re.IGNORECASE)


def naming_records(
    records: Iterable[LabeledRecord],
    naming_token: str = NAMING_TOKEN,
) -> list[LabeledRecord]:
    return [
        record
        for record in records
        if is_skill(record) and parse_naming_item(record.name, naming_token) is not None
    ]


def naming_record_ids(records: Iterable[LabeledRecord], naming_token: str = NAMING_TOKEN) -> list[str]:
    """Ids of every naming record, e.g. to purge them before re-applying a class."""
    return [record.id for record in naming_records(records, naming_token)]


def resolve_naming_record(
    records: Iterable[LabeledRecord],
    naming_token: str = NAMING_TOKEN,
) -> NamingResolution:
    """Pick the naming record with the latest ``updated_at``.

    Equal timestamps resolve to the record appearing last in input order. Any
    other naming records are ignored and reported through ``extra_count``.
    """
    candidates = naming_records(records, naming_token)
    if not candidates:
        return NamingResolution(record=None, label=None, extra_count=0)

    ranked = sorted(candidates, key=lambda r: r.updated_at or 0)
    winner = ranked[-1]
    extra = len(ranked) - 1
    if extra:
        logger.warning(
            "Found %d naming records, using %r (id=%s) and ignoring %d",
            len(ranked),
            winner.name,
            winner.id,
            extra,
        )

    return NamingResolution(
        record=winner,
        label=parse_naming_item(winner.name, naming_token),
        extra_count=extra,
    )


def resolve_label(records: Iterable[LabeledRecord], naming_token: str = NAMING_TOKEN) -> str | None:
    return resolve_naming_record(records, naming_token).label


def parse_icon_directive(description: str | None) -> str | None:
    if not description:
        return None
    match = _ICON_DIRECTIVE_RE.search(description)
    if not match:
        return None
    icon = match.group(1).strip()
    if not _ICON_TOKEN_RE.match(icon):
        return None
    return icon


def apply_style_family(icon: str) -> str:
    if icon.startswith("fa-") and not icon.startswith(ICON_STYLE_FAMILIES):
        return f"{DEFAULT_STYLE_FAMILY} {icon}"
    return icon


def icon_from_resolution(resolution: NamingResolution, default_icon: str = DEFAULT_ICON) -> str:
    if resolution.record is None:
        return default_icon
    icon = parse_icon_directive(resolution.record.description)
    if icon is None:
        return default_icon
    return apply_style_family(icon)


def resolve_icon(
    records: Iterable[LabeledRecord],
    default_icon: str = DEFAULT_ICON,
    naming_token: str = NAMING_TOKEN,
) -> str:
    return icon_from_resolution(resolve_naming_record(records, naming_token), default_icon)

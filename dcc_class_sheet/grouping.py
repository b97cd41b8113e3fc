from __future__ import annotations

from typing import Any, Iterable

from .config import NAMING_TOKEN, SKILL_KIND
from .models import ClassGroup, ClassificationResult, LabeledRecord, NamingToken, PrefixedSkill
from .name_parser import is_reserved_class_name, parse_name


def _fold(text: Any) -> tuple[str, str]:
    value = "" if text is None else str(text)
    return value.casefold(), value


def is_skill(record: LabeledRecord) -> bool:
    kind = "" if record.kind is None else str(record.kind)
    return kind.strip().casefold() == SKILL_KIND


def _member_sort_key(member: tuple[LabeledRecord, PrefixedSkill]) -> tuple[int, tuple[str, str]]:
    _, parsed = member
    return -parsed.weight, _fold(parsed.skill_name)


def classify(
    records: Iterable[LabeledRecord],
    reserved_class_name: str = NAMING_TOKEN,
) -> ClassificationResult:
    """Partition skill records into class groups and occupational skills.

    Naming records and prefixed records using the reserved marker as their class
    name are dropped. Group keys keep the class name exactly as written.
    """
    grouped: dict[str, ClassGroup] = {}
    occupational: list[LabeledRecord] = []

    for record in records:
        if not is_skill(record):
            continue

        parsed = parse_name(record.name, reserved_class_name)
        if isinstance(parsed, NamingToken):
            continue

        if isinstance(parsed, PrefixedSkill):
            if is_reserved_class_name(parsed.class_name, reserved_class_name):
                continue
            group = grouped.get(parsed.class_name)
            if group is None:
                group = grouped[parsed.class_name] = ClassGroup(class_name=parsed.class_name)
            group.members.append((record, parsed))
            continue

        occupational.append(record)

    for group in grouped.values():
        group.members.sort(key=_member_sort_key)
    occupational.sort(key=lambda r: _fold(r.name))

    return ClassificationResult(groups=list(grouped.values()), occupational=occupational)


def order_group_names(group_names: Iterable[str], preferred_class_name: str | None = None) -> list[str]:
    preferred = (preferred_class_name or "").casefold()

    def _key(name: str) -> tuple[int, tuple[str, str]]:
        first = 0 if preferred and name.casefold() == preferred else 1
        return first, _fold(name)

    return sorted(group_names, key=_key)


def ordered_groups(result: ClassificationResult, preferred_class_name: str | None = None) -> list[ClassGroup]:
    by_name = {group.class_name: group for group in result.groups}
    return [by_name[name] for name in order_group_names(by_name, preferred_class_name)]

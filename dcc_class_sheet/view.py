from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from jinja2 import BaseLoader, Environment, select_autoescape

from .config import DEFAULT_ITEM_IMG, SheetConfig
from .grouping import classify, ordered_groups
from .models import LabeledRecord
from .naming import icon_from_resolution, resolve_naming_record

_env = Environment(loader=BaseLoader(), autoescape=select_autoescape(default_for_string=True))

TOOLTIP_TEMPLATE = _env.from_string("<h3>{{ name }}</h3>{{ description | safe }}")

CHAT_CARD_TEMPLATE = _env.from_string(
    """<div class="dcc-skill-chat-message">
  <div class="flexrow skill-chat-header">
    <img src="{{ img }}" alt="{{ name }}" width="36" height="36" />
    <h3>{{ name }}</h3>
  </div>
  <div class="skill-description">{{ description | safe }}</div>
</div>"""
)


@dataclass(slots=True)
class SkillEntry:
    item_id: str
    display_name: str
    tooltip_html: str


@dataclass(slots=True)
class GroupView:
    class_name: str
    skills: list[SkillEntry] = field(default_factory=list)
    occupational: bool = False


@dataclass(slots=True)
class SheetView:
    tab_label: str
    tab_icon: str
    groups: list[GroupView]
    extra_naming_records: int = 0

    @property
    def has_groups(self) -> bool:
        return bool(self.groups)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tab_label": self.tab_label,
            "tab_icon": self.tab_icon,
            "has_groups": self.has_groups,
            "extra_naming_records": self.extra_naming_records,
            "groups": [
                {
                    "class_name": group.class_name,
                    "occupational": group.occupational,
                    "skills": [
                        {
                            "item_id": entry.item_id,
                            "display_name": entry.display_name,
                            "tooltip_html": entry.tooltip_html,
                        }
                        for entry in group.skills
                    ],
                }
                for group in self.groups
            ],
        }


@dataclass(slots=True)
class ChatMessage:
    content: str
    flags: dict[str, Any] = field(default_factory=lambda: {"core": {"canPopout": True}})


def render_tooltip(name: str, description: str | None) -> str:
    return TOOLTIP_TEMPLATE.render(name=name, description=description or "")


def _entry(record: LabeledRecord, display_name: str) -> SkillEntry:
    return SkillEntry(
        item_id=record.id,
        display_name=display_name,
        tooltip_html=render_tooltip(display_name, record.description),
    )


def build_sheet_view(records: Iterable[LabeledRecord], config: SheetConfig | None = None) -> SheetView:
    """Build the custom class tab: label, icon, class groups, then occupational skills."""
    config = config or SheetConfig()
    snapshot = list(records)

    resolution = resolve_naming_record(snapshot, config.naming_token)
    result = classify(snapshot, config.naming_token)

    groups = [
        GroupView(
            class_name=group.class_name,
            skills=[_entry(record, parsed.skill_name) for record, parsed in group.members],
        )
        for group in ordered_groups(result, resolution.label)
    ]
    if result.occupational:
        groups.append(
            GroupView(
                class_name=config.occupational_label,
                skills=[_entry(record, record.name) for record in result.occupational],
                occupational=True,
            )
        )

    return SheetView(
        tab_label=resolution.label or config.fallback_label,
        tab_icon=icon_from_resolution(resolution, config.default_icon),
        groups=groups,
        extra_naming_records=resolution.extra_count,
    )


def display_name_for(view: SheetView, item_id: str) -> str | None:
    for group in view.groups:
        for entry in group.skills:
            if entry.item_id == item_id:
                return entry.display_name
    return None


def build_chat_message(
    record: LabeledRecord,
    display_name: str | None = None,
    img: str | None = None,
) -> ChatMessage:
    content = CHAT_CARD_TEMPLATE.render(
        name=display_name or record.name,
        img=img or DEFAULT_ITEM_IMG,
        description=record.description or "",
    )
    return ChatMessage(content=content)

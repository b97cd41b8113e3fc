"""Three-step class builder: basics (name + icon), skills, preview.

The builder only validates drafts and composes item payloads whose names
follow the parser grammar. Creating folders and items is up to the host.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .config import (
    COMMON_ICONS,
    DEFAULT_BUILDER_ICON,
    DEFAULT_FOLDER_COLOR,
    DEFAULT_ITEM_IMG,
    DEFAULT_STYLE_FAMILY,
    NAMING_TOKEN,
    SKILL_KIND,
)
from .models import LabeledRecord
from .name_parser import compose_naming_name, compose_prefixed_name, is_reserved_class_name

STEP_BASICS = 1
STEP_SKILLS = 2
STEP_PREVIEW = 3


class BuilderValidationError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


@dataclass(slots=True)
class SkillDraft:
    id: int
    name: str = ""
    description: str = ""
    weight: int = 0


@dataclass(slots=True)
class ClassRecords:
    folder: dict[str, Any]
    naming: dict[str, Any]
    skills: list[dict[str, Any]]

    def items(self) -> list[dict[str, Any]]:
        return [self.naming, *self.skills]

    def as_labeled_records(self) -> list[LabeledRecord]:
        return [
            LabeledRecord(
                id=f"draft-{idx}",
                name=item["name"],
                description=item["system"]["description"]["value"],
                kind=item["type"],
            )
            for idx, item in enumerate(self.items())
        ]


def _weight(value: Any) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return 0
    return parsed if parsed > 0 else 0


@dataclass
class ClassBuilder:
    naming_token: str = NAMING_TOKEN
    step: int = STEP_BASICS
    class_name: str = ""
    icon_class: str = DEFAULT_BUILDER_ICON
    parent_folder: str | None = None
    skills: list[SkillDraft] = field(default_factory=list)
    _next_skill_id: int = field(default=1, init=False, repr=False)

    @property
    def icon_preview(self) -> str:
        if self.icon_class.startswith(DEFAULT_STYLE_FAMILY):
            return self.icon_class
        return f"{DEFAULT_STYLE_FAMILY} {self.icon_class}"

    @property
    def custom_icon_mode(self) -> bool:
        return self.icon_class not in COMMON_ICONS

    def add_skill(self, name: str = "", description: str = "", weight: int = 0) -> SkillDraft:
        skill = SkillDraft(id=self._next_skill_id, name=name, description=description, weight=_weight(weight))
        self._next_skill_id += 1
        self.skills.append(skill)
        return skill

    def _index(self, skill_id: int) -> int:
        for idx, skill in enumerate(self.skills):
            if skill.id == skill_id:
                return idx
        return -1

    def update_skill(self, skill_id: int, **changes: Any) -> None:
        idx = self._index(skill_id)
        if idx == -1:
            raise KeyError(f"unknown skill id: {skill_id}")
        skill = self.skills[idx]
        for key, value in changes.items():
            if key == "weight":
                skill.weight = _weight(value)
            elif key in {"name", "description"}:
                setattr(skill, key, "" if value is None else str(value))
            else:
                raise KeyError(f"unknown skill field: {key}")

    def remove_skill(self, skill_id: int) -> None:
        self.skills = [s for s in self.skills if s.id != skill_id]

    def move_skill_up(self, skill_id: int) -> None:
        idx = self._index(skill_id)
        if idx <= 0:
            return
        self.skills[idx - 1], self.skills[idx] = self.skills[idx], self.skills[idx - 1]

    def move_skill_down(self, skill_id: int) -> None:
        idx = self._index(skill_id)
        if idx == -1 or idx == len(self.skills) - 1:
            return
        self.skills[idx], self.skills[idx + 1] = self.skills[idx + 1], self.skills[idx]

    def sorted_skills(self) -> list[SkillDraft]:
        return sorted(self.skills, key=lambda s: (-s.weight, s.name.casefold(), s.name))

    def validate_basics(self) -> None:
        name = self.class_name.strip()
        if not name:
            raise BuilderValidationError("class_name_required", "Enter a class name.")
        if is_reserved_class_name(name, self.naming_token):
            raise BuilderValidationError(
                "class_name_reserved", f"{self.naming_token} is reserved and cannot be a class name."
            )
        if any(ch in name for ch in "()^"):
            raise BuilderValidationError(
                "class_name_invalid", "Class names cannot contain parentheses or '^'."
            )

    def validate_skills(self) -> None:
        if not self.skills:
            raise BuilderValidationError("no_skills", "Add at least one skill.")
        if any(not s.name.strip() for s in self.skills):
            raise BuilderValidationError("unnamed_skills", "Every skill needs a name.")

    def next_step(self) -> int:
        if self.step == STEP_BASICS:
            self.validate_basics()
        elif self.step == STEP_SKILLS:
            self.validate_skills()
        self.step = min(self.step + 1, STEP_PREVIEW)
        return self.step

    def prev_step(self) -> int:
        self.step = max(self.step - 1, STEP_BASICS)
        return self.step

    def build_records(self, folder_id: str | None = None) -> ClassRecords:
        """Compose the folder, the single naming item and one prefixed item per skill."""
        self.validate_basics()
        self.validate_skills()

        class_name = self.class_name.strip()
        folder: dict[str, Any] = {"name": class_name, "type": "Item", "color": DEFAULT_FOLDER_COLOR}
        if self.parent_folder:
            folder["folder"] = self.parent_folder

        icon_line = f"<p>icon: {self.icon_class.strip()}</p>" if self.icon_class.strip() else ""
        naming = {
            "name": compose_naming_name(class_name, self.naming_token),
            "type": SKILL_KIND,
            "folder": folder_id,
            "img": DEFAULT_ITEM_IMG,
            "system": {
                "description": {
                    "value": f"{icon_line}<h3>{class_name}</h3>"
                    "<p>Custom class created with DCC Custom Class Builder.</p>"
                },
                "config": {
                    "useSummary": True,
                    "useAbility": False,
                    "useDie": False,
                    "useLevel": False,
                    "useValue": False,
                    "showLastResult": False,
                },
            },
        }

        skills = []
        for skill in self.skills:
            skill_name = skill.name.strip()
            skills.append(
                {
                    "name": compose_prefixed_name(class_name, skill_name, skill.weight),
                    "type": SKILL_KIND,
                    "folder": folder_id,
                    "img": DEFAULT_ITEM_IMG,
                    "system": {
                        "description": {"value": skill.description.strip() or f"<p>{skill_name}</p>"},
                        "config": {
                            "useSummary": True,
                            "useAbility": True,
                            "useDie": True,
                            "useLevel": False,
                            "useValue": True,
                            "showLastResult": False,
                        },
                        "ability": "",
                        "die": "1d20",
                        "value": "",
                    },
                }
            )

        return ClassRecords(folder=folder, naming=naming, skills=skills)

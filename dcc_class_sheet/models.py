from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class LabeledRecord:
    id: str
    name: str
    description: str = ""
    kind: str = "skill"
    updated_at: float = 0


@dataclass(frozen=True, slots=True)
class NamingToken:
    label: str


@dataclass(frozen=True, slots=True)
class PrefixedSkill:
    class_name: str
    weight: int
    skill_name: str


@dataclass(frozen=True, slots=True)
class Plain:
    pass


ParsedToken = NamingToken | PrefixedSkill | Plain


@dataclass(slots=True)
class ClassGroup:
    class_name: str
    members: list[tuple[LabeledRecord, PrefixedSkill]] = field(default_factory=list)

    def skill_names(self) -> list[str]:
        return [parsed.skill_name for _, parsed in self.members]


@dataclass(slots=True)
class ClassificationResult:
    groups: list[ClassGroup]
    occupational: list[LabeledRecord]

    def group_names(self) -> list[str]:
        return [group.class_name for group in self.groups]

    def get(self, class_name: str) -> ClassGroup | None:
        return next((g for g in self.groups if g.class_name == class_name), None)


@dataclass(slots=True)
class NamingResolution:
    record: LabeledRecord | None
    label: str | None
    extra_count: int = 0

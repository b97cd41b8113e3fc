from __future__ import annotations

import pytest

from dcc_class_sheet.builder import (
    STEP_BASICS,
    STEP_PREVIEW,
    STEP_SKILLS,
    BuilderValidationError,
    ClassBuilder,
)
from dcc_class_sheet.view import build_sheet_view


def _barbarian() -> ClassBuilder:
    builder = ClassBuilder(class_name="Barbarian", icon_class="fa-axe-battle")
    builder.add_skill("Rage", "<p>Fly into a rage.</p>", 10)
    builder.add_skill("Natural Armor")
    return builder


def test_step_one_requires_class_name() -> None:
    builder = ClassBuilder(class_name="   ")
    with pytest.raises(BuilderValidationError) as exc:
        builder.next_step()
    assert exc.value.code == "class_name_required"
    assert builder.step == STEP_BASICS


def test_reserved_marker_rejected_as_class_name() -> None:
    builder = ClassBuilder(class_name="customclass")
    with pytest.raises(BuilderValidationError) as exc:
        builder.next_step()
    assert exc.value.code == "class_name_reserved"


def test_grammar_characters_rejected_in_class_name() -> None:
    builder = ClassBuilder(class_name="Bar(bar)ian")
    with pytest.raises(BuilderValidationError) as exc:
        builder.validate_basics()
    assert exc.value.code == "class_name_invalid"


def test_step_two_requires_named_skills() -> None:
    builder = ClassBuilder(class_name="Monk")
    assert builder.next_step() == STEP_SKILLS

    with pytest.raises(BuilderValidationError) as exc:
        builder.next_step()
    assert exc.value.code == "no_skills"

    builder.add_skill("")
    with pytest.raises(BuilderValidationError) as exc:
        builder.next_step()
    assert exc.value.code == "unnamed_skills"

    builder.update_skill(builder.skills[0].id, name="Flurry", weight="3")
    assert builder.next_step() == STEP_PREVIEW
    assert builder.next_step() == STEP_PREVIEW
    assert builder.prev_step() == STEP_SKILLS
    assert builder.prev_step() == STEP_BASICS
    assert builder.prev_step() == STEP_BASICS


def test_skill_list_editing() -> None:
    builder = ClassBuilder(class_name="Bard")
    a = builder.add_skill("Song")
    b = builder.add_skill("Lore")
    c = builder.add_skill("Charm")

    builder.move_skill_up(c.id)
    assert [s.name for s in builder.skills] == ["Song", "Charm", "Lore"]
    builder.move_skill_up(a.id)
    builder.move_skill_down(b.id)
    assert [s.name for s in builder.skills] == ["Song", "Charm", "Lore"]
    builder.move_skill_down(a.id)
    assert [s.name for s in builder.skills] == ["Charm", "Song", "Lore"]

    builder.remove_skill(a.id)
    assert [s.name for s in builder.skills] == ["Charm", "Lore"]

    with pytest.raises(KeyError):
        builder.update_skill(a.id, name="Gone")
    with pytest.raises(KeyError):
        builder.update_skill(b.id, colour="red")


def test_negative_or_invalid_weight_is_zero() -> None:
    builder = ClassBuilder(class_name="Bard")
    skill = builder.add_skill("Song", weight=-4)
    assert skill.weight == 0
    builder.update_skill(skill.id, weight="abc")
    assert skill.weight == 0


def test_sorted_skills_by_weight_then_name() -> None:
    builder = ClassBuilder(class_name="Bard")
    builder.add_skill("song")
    builder.add_skill("Charm", weight=2)
    builder.add_skill("Lore")
    assert [s.name for s in builder.sorted_skills()] == ["Charm", "Lore", "song"]


def test_icon_preview_and_custom_mode() -> None:
    builder = ClassBuilder(icon_class="fa-leaf")
    assert builder.icon_preview == "fa-solid fa-leaf"
    assert builder.custom_icon_mode is False

    builder.icon_class = "fa-solid fa-dragon"
    assert builder.icon_preview == "fa-solid fa-dragon"
    assert builder.custom_icon_mode is True


def test_build_records_names_follow_grammar() -> None:
    records = _barbarian().build_records(folder_id="folder-1")

    assert records.folder == {"name": "Barbarian", "type": "Item", "color": "#8b4513"}
    assert records.naming["name"] == "(CUSTOMCLASS)Barbarian"
    assert records.naming["system"]["description"]["value"].startswith("<p>icon: fa-axe-battle</p>")
    assert [s["name"] for s in records.skills] == ["(Barbarian^10)Rage", "(Barbarian)Natural Armor"]
    assert records.skills[1]["system"]["description"]["value"] == "<p>Natural Armor</p>"
    assert all(item["folder"] == "folder-1" for item in records.items())
    assert sum(1 for item in records.items() if item["name"].startswith("(CUSTOMCLASS)")) == 1


def test_parent_folder_is_attached() -> None:
    builder = _barbarian()
    builder.parent_folder = "parent-1"
    assert builder.build_records().folder["folder"] == "parent-1"


def test_built_records_classify_back_into_the_class() -> None:
    view = build_sheet_view(_barbarian().build_records().as_labeled_records())

    assert view.tab_label == "Barbarian"
    assert view.tab_icon == "fa-solid fa-axe-battle"
    assert [g.class_name for g in view.groups] == ["Barbarian"]
    assert [e.display_name for e in view.groups[0].skills] == ["Rage", "Natural Armor"]


def test_build_records_validates_draft() -> None:
    with pytest.raises(BuilderValidationError):
        ClassBuilder(class_name="Barbarian").build_records()

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from dcc_class_sheet.ingest import load_records, record_from_document, records_from_frame, resolve_columns


ACTOR_EXPORT = {
    "name": "Grunk",
    "type": "Player",
    "items": [
        {
            "_id": "n1",
            "name": "(CUSTOMCLASS)Barbarian",
            "type": "skill",
            "system": {"description": {"value": "<p>icon: fa-axe-battle</p>"}},
            "_stats": {"modifiedTime": 1700000000000},
        },
        {"_id": "s1", "name": "(Barbarian^10)Rage", "type": "skill", "system": {"description": {"value": ""}}},
        {"_id": "w1", "name": "Battleaxe", "type": "weapon", "system": {}},
    ],
}


def test_record_from_foundry_document() -> None:
    record = record_from_document(ACTOR_EXPORT["items"][0])
    assert record.id == "n1"
    assert record.kind == "skill"
    assert record.description == "<p>icon: fa-axe-battle</p>"
    assert record.updated_at == 1700000000000


def test_record_from_flat_document_uses_defaults() -> None:
    record = record_from_document({"name": "Climbing", "updateTime": "12"}, position=4)
    assert record.id == "item-4"
    assert record.kind == "skill"
    assert record.description == ""
    assert record.updated_at == 12


def test_load_actor_json(tmp_path: Path) -> None:
    path = tmp_path / "actor.json"
    path.write_text(json.dumps(ACTOR_EXPORT), encoding="utf-8")

    records = load_records(path)
    assert [r.id for r in records] == ["n1", "s1", "w1"]
    assert records[2].kind == "weapon"


def test_load_bare_item_list(tmp_path: Path) -> None:
    path = tmp_path / "items.json"
    path.write_text(json.dumps(ACTOR_EXPORT["items"][:2]), encoding="utf-8")
    assert len(load_records(path)) == 2


def test_json_without_items_rejected(tmp_path: Path) -> None:
    path = tmp_path / "actor.json"
    path.write_text(json.dumps({"name": "Grunk"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_records(path)


def test_load_csv_with_aliased_columns(tmp_path: Path) -> None:
    path = tmp_path / "items.csv"
    path.write_text(
        "Item ID,Item Name,Type,Description,Updated At\n"
        "a,(Barbarian^10)Rage,skill,<p>Rage</p>,5\n"
        "b,Climbing,,,\n",
        encoding="utf-8",
    )
    records = load_records(path)
    assert [r.id for r in records] == ["a", "b"]
    assert records[0].name == "(Barbarian^10)Rage"
    assert records[0].updated_at == 5
    assert records[1].kind == "skill"
    assert records[1].description == ""


def test_frame_requires_name_column() -> None:
    assert resolve_columns(["id", "type"]).missing_required == ["name"]
    with pytest.raises(ValueError):
        records_from_frame(pd.DataFrame({"id": ["a"]}))


def test_missing_and_unsupported_inputs(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_records(tmp_path / "missing.json")

    path = tmp_path / "items.txt"
    path.write_text("Climbing", encoding="utf-8")
    with pytest.raises(ValueError):
        load_records(path)

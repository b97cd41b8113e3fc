from __future__ import annotations

from dcc_class_sheet.normalization import clean_text, snake_case, standardize_columns, timestamp


def test_snake_case_column_names() -> None:
    assert snake_case(" Item Name ") == "item_name"
    assert snake_case("_id") == "id"
    assert snake_case("system.description.value") == "system_description_value"


def test_duplicate_columns_are_suffixed() -> None:
    assert standardize_columns(["Name", "name", "Type"]) == ["name", "name_1", "type"]


def test_clean_text_blanks_null_markers() -> None:
    assert clean_text(None) == ""
    assert clean_text("nan") == ""
    assert clean_text("<p>Rage</p>") == "<p>Rage</p>"


def test_timestamp_is_lenient() -> None:
    assert timestamp("12.5") == 12.5
    assert timestamp("") == 0.0
    assert timestamp(float("nan")) == 0.0
    assert timestamp(None) == 0.0

from __future__ import annotations

import logging
from typing import Any

import pytest

from chartprops.core.defaults import create_default_properties
from chartprops.core.grammar import Variant
from chartprops.core.validation import Validator, validate


@pytest.mark.parametrize("variant", list(Variant))
def test_default_records_are_valid(variant: Variant) -> None:
    assert validate(create_default_properties(variant, "e1")) == []


def test_baseline_flags_zero_width_and_out_of_range_opacity() -> None:
    record = create_default_properties("bar", "b1")
    record["width"] = 0
    record["opacity"] = 150
    errors = validate(record)
    assert "width must be greater than 0, got 0" in errors
    assert "opacity must be between 0 and 100, got 150" in errors


def test_baseline_flags_empty_id_title_and_height() -> None:
    record = create_default_properties("table", "")
    record["title"] = ""
    record["height"] = -5
    errors = validate(record)
    assert "id is required" in errors
    assert "title is required" in errors
    assert any(msg.startswith("height") for msg in errors)


def test_non_numeric_values_are_reported_not_raised() -> None:
    record = create_default_properties("line", "l1")
    record["width"] = "wide"
    del record["opacity"]
    errors = validate(record)
    assert "width must be a number, got 'wide'" in errors
    assert "opacity must be a number, got None" in errors


@pytest.mark.parametrize("variant", ["pie", "donut"])
def test_pie_rules_flag_end_angle_not_after_start(variant: str) -> None:
    record = create_default_properties(variant, "p1")
    record["startAngle"] = 90
    record["endAngle"] = 90
    errors = validate(record)
    assert any(msg.startswith("endAngle") for msg in errors)


def test_pie_rules_flag_start_angle_out_of_range() -> None:
    record = create_default_properties("pie", "p1")
    record["startAngle"] = 370
    errors = validate(record)
    assert "startAngle must be in [0, 360), got 370" in errors


def test_pie_rules_flag_end_angle_past_full_turn() -> None:
    record = create_default_properties("donut", "d1")
    record["endAngle"] = 400
    assert any(msg.startswith("endAngle") for msg in validate(record))


def test_pie_rules_do_not_apply_to_other_variants() -> None:
    record = create_default_properties("metric", "m1")
    assert validate(record) == []


def test_registered_rule_applies_to_its_variant_only() -> None:
    v = Validator()

    def page_size_positive(record: dict[str, Any]) -> list[str]:
        return [] if record.get("pageSize", 0) > 0 else ["pageSize must be greater than 0"]

    v.register("table", page_size_positive)
    table = create_default_properties("table", "t1")
    table["pageSize"] = 0
    assert v.validate(table) == ["pageSize must be greater than 0"]
    # the shared validator is unaffected
    assert validate(table) == []


def test_register_rejects_unknown_variant() -> None:
    with pytest.raises(ValueError):
        Validator().register("sankey", lambda r: [])


def test_failing_rule_becomes_a_message(caplog) -> None:
    v = Validator()

    def broken(record: dict[str, Any]) -> list[str]:
        raise KeyError("boom")

    v.register(Variant.LINE, broken)
    with caplog.at_level(logging.WARNING, logger="chartprops.core.validation"):
        errors = v.validate(create_default_properties("line", "l1"))
    assert len(errors) == 1
    assert "broken" in errors[0]
    assert "broken" in caplog.text


def test_schema_rule_is_opt_in() -> None:
    record = create_default_properties("pie", "p1")
    record["bogus"] = True
    assert validate(record) == []
    errors = Validator(check_schema=True).validate(record)
    assert any(msg.startswith("schema: bogus") for msg in errors)


@pytest.mark.parametrize("value", [None, "record", 42, ["a"]])
def test_non_mapping_input_never_raises(value: object) -> None:
    errors = validate(value)
    assert len(errors) == 1
    assert errors[0].startswith("record must be a mapping")


def test_unknown_type_gets_baseline_rules_only() -> None:
    record = create_default_properties("pie", "p1")
    record["type"] = "sankey"
    record["startAngle"] = 999
    assert validate(record) == []

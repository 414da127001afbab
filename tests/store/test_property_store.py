from __future__ import annotations

import datetime
import json
import logging

import pytest

from chartprops.core.defaults import create_default_properties
from chartprops.core.validation import Validator, validate
from chartprops.store import PropertyStore, StoreSettings


@pytest.fixture()
def store() -> PropertyStore:
    return PropertyStore()


def test_stores_are_independent() -> None:
    a, b = PropertyStore(), PropertyStore()
    a.create_default_properties("line", "l1")
    assert "l1" in a and "l1" not in b


def test_update_then_get_nested_path(store: PropertyStore) -> None:
    store.create_default_properties("line", "l1")
    assert store.update_property("l1", "xAxis.label", "Months") is True
    assert store.get_property("l1", "xAxis.label") == "Months"


@pytest.mark.parametrize(
    "path, value",
    [
        ("title", "Quarterly revenue"),
        ("margin.top", 4),
        ("xAxis.label", "Months"),
        ("colorPalette", ["#000000", "#ffffff"]),
        ("legend.position", "top"),
    ],
)
def test_update_then_get_round_trips(store: PropertyStore, path: str, value: object) -> None:
    store.create_default_properties("bar", "b1")
    assert store.update_property("b1", path, value)
    assert store.get_property("b1", path) == value


def test_update_unknown_id_returns_false_without_creating(store: PropertyStore, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="chartprops.store.property_store"):
        assert store.update_property("nonexistent", "title", "x") is False
    assert "nonexistent" not in store
    assert len(store) == 0
    assert "unknown element" in caplog.text


def test_update_with_unusable_path_returns_false_and_keeps_record(store: PropertyStore) -> None:
    store.create_default_properties("line", "l1")
    before = store.get("l1")
    assert store.update_property("l1", "title.sub", 1) is False
    assert store.update_property("l1", "xAxis..label", 1) is False
    assert store.get("l1") == before


@pytest.mark.parametrize("path, value", [("type", "pie"), ("id", "other"), ("type.nested", 1)])
def test_id_and_type_are_fixed_after_creation(store: PropertyStore, caplog, path: str, value: object) -> None:
    store.create_default_properties("line", "l1")
    before = store.get("l1")
    with caplog.at_level(logging.WARNING, logger="chartprops.store.property_store"):
        assert store.update_property("l1", path, value) is False
    assert store.get("l1") == before
    assert store.get_property("l1", "type") == "line"
    assert "fixed once the element is created" in caplog.text


def test_get_or_create_ignores_id_and_type_overrides(store: PropertyStore, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="chartprops.store.property_store"):
        record = store.get_or_create("l1", "line", overrides={"type": "pie", "id": "x", "title": "Kept"})
    assert (record["id"], record["type"], record["title"]) == ("l1", "line", "Kept")
    assert "endAngle" not in record
    assert "'type'" in caplog.text and "'id'" in caplog.text


def test_update_does_not_mutate_previously_read_records(store: PropertyStore) -> None:
    store.create_default_properties("line", "l1")
    before = store.get("l1")
    store.update_property("l1", "xAxis.label", "Months")
    assert before["xAxis"]["label"] == ""


def test_update_deep_copies_value(store: PropertyStore) -> None:
    store.create_default_properties("table", "t1")
    widths = {"name": 120}
    store.update_property("t1", "columnWidths", widths)
    widths["name"] = 1
    assert store.get_property("t1", "columnWidths.name") == 120


def test_get_property_missing_segments_return_none(store: PropertyStore) -> None:
    store.create_default_properties("line", "l1")
    assert store.get_property("l1", "xAxis.nonexistent.deep") is None
    assert store.get_property("missing", "title") is None


def test_reads_return_copies(store: PropertyStore) -> None:
    store.create_default_properties("line", "l1")
    store.get("l1")["title"] = "mutated"
    store.get_property("l1", "margin")["top"] = 0
    assert store.get_property("l1", "title") == "Line Chart"
    assert store.get_property("l1", "margin.top") == 20


def test_pie_scenario_reports_start_angle(store: PropertyStore, caplog) -> None:
    store.create_default_properties("pie", "p1")
    with caplog.at_level(logging.WARNING, logger="chartprops.store.property_store"):
        assert store.update_property("p1", "startAngle", 370) is True
    assert store.get_property("p1", "startAngle") == 370
    assert any("startAngle" in msg for msg in validate(store.get("p1")))
    assert "startAngle" in caplog.text


def test_set_is_permissive_and_returns_violations(store: PropertyStore) -> None:
    record = create_default_properties("bar", "b1")
    record["width"] = 0
    violations = store.set("b1", record)
    assert violations == ["width must be greater than 0, got 0"]
    assert store.get_property("b1", "width") == 0


def test_violation_log_level_and_switch(caplog) -> None:
    record = create_default_properties("bar", "b1")
    record["opacity"] = 150

    loud = PropertyStore(StoreSettings(violation_log_level="ERROR"))
    with caplog.at_level(logging.DEBUG, logger="chartprops.store.property_store"):
        loud.set("b1", record)
    assert [r.levelno for r in caplog.records] == [logging.ERROR]

    caplog.clear()
    quiet = PropertyStore(StoreSettings(log_violations=False))
    with caplog.at_level(logging.DEBUG, logger="chartprops.store.property_store"):
        quiet.set("b1", record)
    assert caplog.records == []


def test_check_schema_setting_extends_validator() -> None:
    record = create_default_properties("pie", "p1")
    record["xAxis"] = {}
    strict = PropertyStore(StoreSettings(check_schema=True))
    assert any(msg.startswith("schema: xAxis") for msg in strict.set("p1", record))
    assert PropertyStore().set("p1", record) == []


def test_custom_validator_is_used() -> None:
    v = Validator()
    v.register("line", lambda r: ["always"])
    store = PropertyStore(validator=v)
    store.create_default_properties("line", "l1")
    assert store.set("l1", store.get("l1")) == ["always"]


def test_set_copies_input(store: PropertyStore) -> None:
    record = create_default_properties("line", "l1")
    store.set("l1", record)
    record["title"] = "changed"
    assert store.get_property("l1", "title") == "Line Chart"


def test_remove_clear_and_listing(store: PropertyStore) -> None:
    store.create_default_properties("line", "a")
    store.create_default_properties("pie", "b")
    store.create_default_properties("table", "c")
    assert store.list_ids() == ["a", "b", "c"]
    assert list(store) == ["a", "b", "c"]
    assert store.remove("b") is True
    assert store.remove("b") is False
    assert store.get("b") is None
    assert len(store) == 2
    store.clear()
    assert store.list_ids() == []


def test_export_import_round_trip(store: PropertyStore) -> None:
    store.create_default_properties("line", "l1")
    store.create_default_properties("pie", "p1")
    store.create_default_properties("metric", "m1")
    store.update_property("l1", "xAxis.label", "Months")
    store.update_property("p1", "innerRadius", 40)
    store.update_property("m1", "target", 500)

    exported = store.export_all()
    restored = PropertyStore()
    restored.import_all(json.loads(json.dumps(exported)))

    assert restored.export_all() == exported
    assert restored.list_ids() == store.list_ids()


def test_export_is_a_deep_copy(store: PropertyStore) -> None:
    store.create_default_properties("line", "l1")
    exported = store.export_all()
    exported["l1"]["xAxis"]["label"] = "changed"
    assert store.get_property("l1", "xAxis.label") == ""


def test_import_replaces_the_whole_store(store: PropertyStore) -> None:
    store.create_default_properties("line", "old")
    store.import_all({"new": create_default_properties("bar", "new")})
    assert store.list_ids() == ["new"]


def test_get_or_create_is_lazy(store: PropertyStore) -> None:
    first = store.get_or_create("k1", "metric", overrides={"value": 12, "unit": "%"})
    assert (first["value"], first["unit"]) == (12, "%")
    second = store.get_or_create("k1", "table", overrides={"value": 99})
    assert second == first


def test_get_or_create_with_legacy_and_overrides(store: PropertyStore, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="chartprops.store.property_store"):
        record = store.get_or_create(
            "b1",
            "bar",
            legacy={"xAxisLabel": "Month", "barSpacing": 0.3},
            overrides={"xAxis.label": "Quarter", "title.bad": 1},
        )
    assert record["xAxis"]["label"] == "Quarter"
    assert record["barSpacing"] == 0.3
    assert "title.bad" in caplog.text


def test_migrate_and_to_legacy_format(store: PropertyStore) -> None:
    record = store.migrate_legacy_properties("p1", {"startAngle": 90, "xAxisLabel": "X"}, "pie")
    assert record["startAngle"] == 90
    assert store.get_property("p1", "startAngle") == 90
    legacy = store.to_legacy_format("p1")
    assert legacy["startAngle"] == 90
    assert legacy["chartType"] == "pie"
    assert "xAxisLabel" not in legacy
    assert store.to_legacy_format("missing") == {}


def test_to_legacy_format_bar_contains_bar_spacing(store: PropertyStore) -> None:
    store.create_default_properties("bar", "b1")
    legacy = store.to_legacy_format("b1")
    assert legacy["barSpacing"] == 0.1
    assert "xAxis" not in legacy and "yAxis" not in legacy


def test_groups_and_applicability(store: PropertyStore) -> None:
    store.create_default_properties("donut", "d1")
    groups = store.get_properties_by_group("d1")
    assert groups["axis"] == {}
    assert groups["pie"]["innerRadius"] == 0
    assert store.get_properties_by_group("missing") == {}
    assert store.available_property_groups("donut")[-1] == "pie"
    assert store.is_property_applicable("donut", "startAngle")
    assert not store.is_property_applicable("donut", "yAxis.label")


def test_create_default_properties_replaces_existing(store: PropertyStore) -> None:
    store.create_default_properties("line", "e1")
    store.update_property("e1", "title", "Custom")
    store.create_default_properties("line", "e1")
    assert store.get_property("e1", "title") == "Line Chart"


def test_tuples_are_stored_as_lists_so_json_round_trips(store: PropertyStore) -> None:
    store.create_default_properties("bar", "b1")
    assert store.update_property("b1", "gradientColors", ("#000", "#fff"))
    store.set("b2", {**create_default_properties("bar", "b2"), "colorPalette": ("#111", "#222")})
    assert store.get_property("b1", "gradientColors") == ["#000", "#fff"]
    assert store.get_property("b2", "colorPalette") == ["#111", "#222"]

    exported = store.export_all()
    restored = PropertyStore()
    restored.import_all(json.loads(json.dumps(exported)))
    assert restored.export_all() == exported


def test_set_reports_values_json_cannot_represent(store: PropertyStore) -> None:
    record = create_default_properties("line", "l1")
    record["title"] = datetime.date(2024, 1, 1)
    assert store.set("l1", record) == ["title must be JSON-representable, got date"]
    assert "l1" in store

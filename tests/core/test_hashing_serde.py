import datetime

import pytest

from chartprops.core.defaults import create_default_properties
from chartprops.core.hashing import hash_store, json_dumps_canonical
from chartprops.core.serde import json_dumps_canonical as serde_dumps
from chartprops.core.serde import json_loads, json_loads_object, json_violations, to_json_value


def test_json_dumps_canonical_sorted_and_ascii_policy() -> None:
    obj1 = {"b": 2, "a": 1, "nested": {"y": 2, "x": 1}, "title": "Umsätze €"}
    obj2 = {"nested": {"x": 1, "y": 2}, "a": 1, "title": "Umsätze €", "b": 2}
    s1 = json_dumps_canonical(obj1)
    s2 = json_dumps_canonical(obj2)
    assert s1 == s2  # order-insensitive; keys sorted canonically
    # ensure_ascii=False keeps unicode as-is (no escape sequences)
    assert "€" in s1
    assert " " not in json_dumps_canonical({"a": [1, 2]})


def test_hash_store_order_invariant() -> None:
    rec = create_default_properties("pie", "p1")
    reordered = dict(reversed(list(rec.items())))
    assert hash_store({"p1": rec}) == hash_store({"p1": reordered})
    rec["startAngle"] = 10
    assert hash_store({"p1": rec}) != hash_store({"p1": reordered})


def test_hash_store_covers_ids_and_records() -> None:
    a = {"l1": create_default_properties("line", "l1")}
    b = {"l2": create_default_properties("line", "l1")}
    assert hash_store(a) != hash_store(b)
    assert hash_store(a) == hash_store({"l1": create_default_properties("line", "l1")})


def test_serde_roundtrip_and_reexport() -> None:
    obj = {"k": [1, 2, 3], "m": {"n": 4}}
    s = serde_dumps(obj)
    back = json_loads(s)
    assert back == obj


@pytest.mark.parametrize("text", ["[1, 2]", "3", '"x"', "not json"])
def test_json_loads_object_rejects_non_objects(text: str) -> None:
    with pytest.raises(ValueError):
        json_loads_object(text)


def test_to_json_value_turns_tuples_into_lists_and_copies() -> None:
    inner = {"top": 1}
    value = {"gradientColors": ("#000", "#fff"), "margin": inner, "rows": [(1, 2)]}
    out = to_json_value(value)
    assert out == {"gradientColors": ["#000", "#fff"], "margin": {"top": 1}, "rows": [[1, 2]]}
    assert out["margin"] is not inner
    assert json_loads(serde_dumps(out)) == out


def test_json_violations_name_the_offending_path() -> None:
    record = create_default_properties("bar", "b1")
    assert json_violations(record) == []

    record["title"] = datetime.date(2024, 1, 1)
    record["margin"]["top"] = float("nan")
    record["gradientColors"] = ("#000", "#fff")
    record["colorPalette"] = ["#000", {1: "x"}]
    assert sorted(json_violations(record)) == sorted(
        [
            "title must be JSON-representable, got date",
            "margin.top must be a finite number, got nan",
            "gradientColors must be JSON-representable, got tuple",
            "colorPalette.1 has a non-string key 1",
        ]
    )

from __future__ import annotations

import json

import pytest

from chartprops.core.defaults import (
    base_defaults,
    axis_defaults,
    color_defaults,
    create_default_properties,
    default_title,
    expected_keys,
    legend_defaults,
    optional_keys,
    specific_defaults,
)
from chartprops.core.grammar import Variant

BASE = {"id", "type", "title", "width", "height", "backgroundColor", "borderRadius", "opacity", "margin", "padding"}
TYPOGRAPHY = {"fontSize", "fontFamily", "fontWeight", "textAlign", "textColor", "titleFontSize", "titleColor"}
COLOR = {"primaryColor", "secondaryColor", "accentColor", "colorPalette", "gradientEnabled", "gradientColors"}
ANIMATION = {"animationEnabled", "animationDuration", "animationEasing", "animationDelay"}
DATA_DISPLAY = {"showValues", "valueFormat", "valuePrefix", "valueSuffix", "decimalPlaces", "showTooltip", "tooltipFormat"}
SHARED = BASE | TYPOGRAPHY | COLOR | ANIMATION | DATA_DISPLAY
AXIS = {"xAxis", "yAxis"}
LEGEND = {"legend"}
LINE = {"lineWidth", "pointSize", "showDataPoints", "smoothCurve", "fillArea", "areaOpacity", "connectNulls"}
BAR = {"barWidth", "barSpacing", "borderWidth", "borderColor", "orientation", "stackedMode", "showDataLabels"}
PIE = {
    "innerRadius",
    "outerRadius",
    "startAngle",
    "endAngle",
    "showLabels",
    "showPercentages",
    "labelPosition",
    "labelConnectorEnabled",
    "explodeDistance",
    "explodedSlices",
}
SCATTER = {"pointSize", "pointShape", "showTrendLine", "trendLineColor", "trendLineWidth"}
KPI = {
    "value",
    "unit",
    "trend",
    "showTrend",
    "showTarget",
    "showProgress",
    "progressType",
    "iconColor",
    "iconSize",
    "showSparkline",
}
TABLE = {
    "showHeader",
    "headerBackgroundColor",
    "headerTextColor",
    "alternateRowColors",
    "evenRowColor",
    "oddRowColor",
    "borderEnabled",
    "borderColor",
    "borderWidth",
    "cellPadding",
    "sortable",
    "filterable",
    "editable",
    "pageSize",
    "showPagination",
    "columnWidths",
    "columnAlignment",
}

EXPECTED_KEYS: dict[str, set[str]] = {
    "line": SHARED | AXIS | LEGEND | LINE,
    "area": SHARED | AXIS | LEGEND | LINE,
    "bar": SHARED | AXIS | LEGEND | BAR,
    "column": SHARED | AXIS | LEGEND | BAR,
    "pie": SHARED | LEGEND | PIE,
    "donut": SHARED | LEGEND | PIE,
    "scatter": SHARED | AXIS | LEGEND | SCATTER,
    "radar": SHARED | LINE,
    "funnel": SHARED | LINE,
    "gauge": SHARED | LINE,
    "metric": SHARED | KPI,
    "trend": SHARED | KPI,
    "progress": SHARED | KPI,
    "comparison": SHARED | KPI,
    "table": SHARED | TABLE,
}


def test_expected_key_table_covers_every_variant() -> None:
    assert set(EXPECTED_KEYS) == {v.value for v in Variant}


@pytest.mark.parametrize("variant", sorted(EXPECTED_KEYS))
def test_default_record_type_and_exact_key_set(variant: str) -> None:
    record = create_default_properties(variant, "el-1")
    assert record["type"] == variant
    assert record["id"] == "el-1"
    assert set(record) == EXPECTED_KEYS[variant]
    assert expected_keys(variant) == frozenset(EXPECTED_KEYS[variant])


@pytest.mark.parametrize("variant", sorted(EXPECTED_KEYS))
def test_default_record_is_json_representable(variant: str) -> None:
    record = create_default_properties(variant, "el-1")
    assert json.loads(json.dumps(record)) == record


def test_unknown_variant_falls_back_to_line_schema() -> None:
    record = create_default_properties("sankey", "x1")
    assert record["type"] == "line"
    assert set(record) == EXPECTED_KEYS["line"]
    assert record["title"] == "Line Chart"


def test_defaults_are_deterministic() -> None:
    assert create_default_properties("bar", "b1") == create_default_properties(Variant.BAR, "b1")


def test_defaults_do_not_share_mutable_values() -> None:
    a = create_default_properties("line", "a")
    b = create_default_properties("line", "b")
    a["colorPalette"].append("#000000")
    a["margin"]["top"] = 99
    a["xAxis"]["label"] = "changed"
    assert len(b["colorPalette"]) == 10
    assert b["margin"]["top"] == 20
    assert b["xAxis"]["label"] == ""
    assert create_default_properties("line", "c")["colorPalette"] == b["colorPalette"]


def test_line_literal_defaults() -> None:
    r = create_default_properties("line", "l1")
    assert (r["lineWidth"], r["pointSize"], r["showDataPoints"], r["smoothCurve"]) == (2, 4, True, False)
    assert r["areaOpacity"] == 0.3
    assert r["title"] == "Line Chart"
    assert (r["width"], r["height"], r["opacity"]) == (400, 300, 100)
    assert r["margin"] == {"top": 20, "right": 20, "bottom": 20, "left": 20}
    assert r["padding"] == {"top": 16, "right": 16, "bottom": 16, "left": 16}


def test_pie_literal_defaults() -> None:
    r = create_default_properties("pie", "p1")
    assert (r["innerRadius"], r["outerRadius"], r["startAngle"], r["endAngle"]) == (0, 100, 0, 360)
    assert r["showPercentages"] is True
    assert r["explodedSlices"] == []
    assert r["legend"]["position"] == "bottom"


def test_table_and_kpi_literal_defaults() -> None:
    t = create_default_properties("table", "t1")
    assert (t["showHeader"], t["alternateRowColors"], t["pageSize"]) == (True, True, 10)
    assert t["columnWidths"] == {} and t["columnAlignment"] == {}
    m = create_default_properties("metric", "m1")
    assert (m["value"], m["unit"], m["trend"], m["progressType"]) == (0, "", "neutral", "linear")
    assert "target" not in m and "icon" not in m


def test_axis_blocks_and_optional_bounds() -> None:
    axes = axis_defaults()
    assert set(axes) == {"xAxis", "yAxis"}
    assert axes["yAxis"]["startFromZero"] is True
    assert "startFromZero" not in axes["xAxis"]
    assert "minValue" not in axes["xAxis"] and "maxValue" not in axes["yAxis"]
    assert axes["xAxis"]["tickCount"] == 5 and axes["xAxis"]["autoScale"] is True


def test_block_factories() -> None:
    base = base_defaults("radar", "r1")
    assert set(base) == BASE
    assert (base["id"], base["type"], base["title"]) == ("r1", "radar", "Radar Chart")
    assert base == {k: v for k, v in create_default_properties("radar", "r1").items() if k in BASE}
    assert legend_defaults()["legend"]["enabled"] is True
    assert color_defaults()["gradientColors"] == ["#3b82f6", "#06b6d4"]
    assert set(specific_defaults("column")) == BAR
    assert set(specific_defaults("gauge")) == LINE


def test_optional_keys() -> None:
    assert optional_keys("metric") == frozenset({"previousValue", "target", "trendPercentage", "icon", "sparklineData"})
    assert optional_keys("line") == frozenset()


@pytest.mark.parametrize("variant, title", [("line", "Line Chart"), ("metric", "Metric Chart"), ("donut", "Donut Chart")])
def test_default_title(variant: str, title: str) -> None:
    assert default_title(variant) == title

"""
Canonical visualization grammar and helpers.

Defines the closed set of visualization variants, the families that share a
variant-specific property block, and the applicability rules that decide which
trait blocks (axis, legend) and editing groups a variant carries.

Responsibilities
- Define the Variant and VariantFamily enums (serialized values are the wire tags).
- Parse free-form variant tags, falling back to the line schema for unknown tags.
- Answer applicability questions: axes, legend, property groups, family-specific keys.

Design principles
-----------------
1) Variants are immutable once an element is created: the record's ``type`` field
   carries ``Variant.value`` and is never rewritten by migration.

2) Families, not variants, own variant-specific blocks:

| Family   | Variants                          | Block   |
|----------|-----------------------------------|---------|
| line     | line, area, radar, funnel, gauge  | Line    |
| bar      | bar, column                       | Bar     |
| pie      | pie, donut                        | Pie     |
| scatter  | scatter                           | Scatter |
| kpi      | metric, trend, progress, comparison | KPI   |
| table    | table                             | Table   |

   radar, funnel and gauge have no block of their own and use the line schema,
   without axes or legend.

3) Unknown tags fall back to ``Variant.LINE``. Whether that fallback is intended
   is still an open question, so it is logged rather than rejected.

Examples
--------
>>> from chartprops.core.grammar import Variant, variant_from_value, family_of, supports_axes
>>> variant_from_value("donut")
<Variant.DONUT: 'donut'>
>>> family_of(Variant.COLUMN).value
'bar'
>>> supports_axes("pie")
False
>>> variant_from_value("sankey")
<Variant.LINE: 'line'>
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Final

from .constants import PATH_SEPARATOR

__all__ = [
    "Variant",
    "VariantFamily",
    "AXIS_VARIANTS",
    "LEGEND_VARIANTS",
    "BASE_GROUPS",
    "GROUP_NAMES",
    "variant_from_value",
    "is_known_variant",
    "family_of",
    "supports_axes",
    "supports_legend",
    "family_group",
    "relevant_groups",
    "family_keys",
    "group_keys",
    "is_property_applicable",
]

logger = logging.getLogger(__name__)


class Variant(str, Enum):
    """
    Closed set of visualization kinds an element may describe.

    Serialized values are used in:
      - NormalizedRecord["type"]
      - LegacyChartProperties["chartType"] (via to_legacy)
      - CLI arguments
    """

    # chart family
    LINE = "line"
    AREA = "area"
    BAR = "bar"
    COLUMN = "column"
    PIE = "pie"
    DONUT = "donut"
    SCATTER = "scatter"
    RADAR = "radar"
    FUNNEL = "funnel"
    GAUGE = "gauge"
    # KPI family
    METRIC = "metric"
    TREND = "trend"
    PROGRESS = "progress"
    COMPARISON = "comparison"
    # tabular
    TABLE = "table"


class VariantFamily(Enum):
    """
    Group of variants sharing one variant-specific block.

    The serialized value doubles as the name of the family's editing group.
    """

    LINE = "line"
    BAR = "bar"
    PIE = "pie"
    SCATTER = "scatter"
    KPI = "kpi"
    TABLE = "table"


_FAMILY_BY_VARIANT: Final[dict[Variant, VariantFamily]] = {
    Variant.LINE: VariantFamily.LINE,
    Variant.AREA: VariantFamily.LINE,
    Variant.RADAR: VariantFamily.LINE,
    Variant.FUNNEL: VariantFamily.LINE,
    Variant.GAUGE: VariantFamily.LINE,
    Variant.BAR: VariantFamily.BAR,
    Variant.COLUMN: VariantFamily.BAR,
    Variant.PIE: VariantFamily.PIE,
    Variant.DONUT: VariantFamily.PIE,
    Variant.SCATTER: VariantFamily.SCATTER,
    Variant.METRIC: VariantFamily.KPI,
    Variant.TREND: VariantFamily.KPI,
    Variant.PROGRESS: VariantFamily.KPI,
    Variant.COMPARISON: VariantFamily.KPI,
    Variant.TABLE: VariantFamily.TABLE,
}

AXIS_VARIANTS: Final[frozenset[Variant]] = frozenset(
    {Variant.LINE, Variant.AREA, Variant.BAR, Variant.COLUMN, Variant.SCATTER}
)

LEGEND_VARIANTS: Final[frozenset[Variant]] = frozenset(
    {
        Variant.LINE,
        Variant.AREA,
        Variant.BAR,
        Variant.COLUMN,
        Variant.PIE,
        Variant.DONUT,
        Variant.SCATTER,
    }
)

# Groups every variant exposes, in editor order.
BASE_GROUPS: Final[tuple[str, ...]] = ("base", "typography", "colors", "animation", "dataDisplay")

GROUP_NAMES: Final[tuple[str, ...]] = (
    *BASE_GROUPS,
    "legend",
    "axis",
    *(f.value for f in VariantFamily),
)

_FAMILY_KEYS: Final[dict[VariantFamily, tuple[str, ...]]] = {
    VariantFamily.LINE: (
        "lineWidth",
        "pointSize",
        "showDataPoints",
        "smoothCurve",
        "fillArea",
        "areaOpacity",
        "connectNulls",
    ),
    VariantFamily.BAR: (
        "barWidth",
        "barSpacing",
        "borderWidth",
        "borderColor",
        "orientation",
        "stackedMode",
        "showDataLabels",
    ),
    VariantFamily.PIE: (
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
    ),
    VariantFamily.SCATTER: (
        "pointSize",
        "pointShape",
        "showTrendLine",
        "trendLineColor",
        "trendLineWidth",
    ),
    VariantFamily.KPI: (
        "value",
        "unit",
        "previousValue",
        "target",
        "trend",
        "trendPercentage",
        "showTrend",
        "showTarget",
        "showProgress",
        "progressType",
        "icon",
        "iconColor",
        "iconSize",
        "sparklineData",
        "showSparkline",
    ),
    VariantFamily.TABLE: (
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
    ),
}

# Top-level keys of the always-present trait blocks, per editing group, in editor order.
# "id" and "type" belong to no group: neither is editable.
_BASE_GROUP_KEYS: Final[dict[str, tuple[str, ...]]] = {
    "base": ("title", "width", "height", "backgroundColor", "borderRadius", "opacity", "margin", "padding"),
    "typography": (
        "fontSize",
        "fontFamily",
        "fontWeight",
        "textAlign",
        "textColor",
        "titleFontSize",
        "titleColor",
    ),
    "colors": (
        "primaryColor",
        "secondaryColor",
        "accentColor",
        "colorPalette",
        "gradientEnabled",
        "gradientColors",
    ),
    "animation": ("animationEnabled", "animationDuration", "animationEasing", "animationDelay"),
    "dataDisplay": (
        "showValues",
        "valueFormat",
        "valuePrefix",
        "valueSuffix",
        "decimalPlaces",
        "showTooltip",
        "tooltipFormat",
    ),
}

_SHARED_KEYS: Final[frozenset[str]] = frozenset(k for keys in _BASE_GROUP_KEYS.values() for k in keys)


_VARIANT_VALUES: Final[frozenset[str]] = frozenset(v.value for v in Variant)


def is_known_variant(value: Any) -> bool:
    """Return True if value is a Variant or the serialized tag of one."""
    if isinstance(value, Variant):
        return True
    return isinstance(value, str) and value in _VARIANT_VALUES


def variant_from_value(value: Any) -> Variant:
    """
    Parse a variant tag, falling back to ``Variant.LINE`` for unknown input.

    Args:
        value (Any): A Variant, or its serialized tag (e.g., "pie").

    Returns:
        Variant: Parsed variant, or Variant.LINE when the tag is not recognized.

    Notes:
        The fallback is logged at WARNING level and never raises.
    """
    if isinstance(value, Variant):
        return value
    if isinstance(value, str) and value in _VARIANT_VALUES:
        return Variant(value)
    logger.warning("Unknown visualization variant %r; falling back to the line schema", value)
    return Variant.LINE


def family_of(variant: Variant | str) -> VariantFamily:
    """Return the family whose variant-specific block the variant carries."""
    return _FAMILY_BY_VARIANT[variant_from_value(variant)]


def supports_axes(variant: Variant | str) -> bool:
    """Whether records of this variant carry the xAxis/yAxis blocks."""
    return variant_from_value(variant) in AXIS_VARIANTS


def supports_legend(variant: Variant | str) -> bool:
    """Whether records of this variant carry the legend block."""
    return variant_from_value(variant) in LEGEND_VARIANTS


def family_group(variant: Variant | str) -> str:
    """Name of the variant-specific editing group (e.g., "pie" for donut)."""
    return family_of(variant).value


def relevant_groups(variant: Variant | str) -> list[str]:
    """
    List the editing groups applicable to a variant, in editor order.

    Args:
        variant (Variant | str): Variant or serialized tag.

    Returns:
        list[str]: Base groups, then "legend"/"axis" when supported, then the family group.

    Examples:
        >>> relevant_groups("pie")
        ['base', 'typography', 'colors', 'animation', 'dataDisplay', 'legend', 'pie']
    """
    v = variant_from_value(variant)
    groups = list(BASE_GROUPS)
    if v in LEGEND_VARIANTS:
        groups.append("legend")
    if v in AXIS_VARIANTS:
        groups.append("axis")
    groups.append(family_group(v))
    return groups


def family_keys(variant: Variant | str) -> tuple[str, ...]:
    """Top-level keys of the variant-specific block, optional keys included."""
    return _FAMILY_KEYS[family_of(variant)]


def group_keys(group: str) -> tuple[str, ...]:
    """
    Top-level record keys projected into an editing group.

    Args:
        group (str): One of GROUP_NAMES.

    Returns:
        tuple[str, ...]: Keys in editor order ("legend" and "axis" name their nested objects).

    Raises:
        KeyError: If the group name is unknown.

    Examples:
        >>> group_keys("axis")
        ('xAxis', 'yAxis')
    """
    if group in _BASE_GROUP_KEYS:
        return _BASE_GROUP_KEYS[group]
    if group == "axis":
        return ("xAxis", "yAxis")
    if group == "legend":
        return ("legend",)
    try:
        return _FAMILY_KEYS[VariantFamily(group)]
    except ValueError:
        raise KeyError(f"unknown property group {group!r}") from None


def is_property_applicable(variant: Variant | str, path: str) -> bool:
    """
    Check whether a property path makes sense for a variant.

    Args:
        variant (Variant | str): Variant or serialized tag.
        path (str): Dotted property path (e.g., "xAxis.label", "legend.position", "title").

    Returns:
        bool: True when the first path segment belongs to a trait block the variant carries.

    Examples:
        >>> is_property_applicable("bar", "xAxis.label")
        True
        >>> is_property_applicable("pie", "xAxis.label")
        False
        >>> is_property_applicable("table", "pageSize")
        True
    """
    v = variant_from_value(variant)
    head = path.split(PATH_SEPARATOR, 1)[0]
    if head in _SHARED_KEYS:
        return True
    if head in ("xAxis", "yAxis"):
        return v in AXIS_VARIANTS
    if head == "legend":
        return v in LEGEND_VARIANTS
    return head in _FAMILY_KEYS[_FAMILY_BY_VARIANT[v]]

"""
Bidirectional adapter between the legacy flat property bag and normalized records.

Older call sites describe every chart with one flat, all-optional bag
(``LegacyChartProperties``). This module translates such bags into normalized
records and projects records back, using two explicit, ordered mapping tables so
every supported key (and every omission) is visible here and in the tests.

Direction 1: legacy -> normalized (``to_normalized``)
- Start from a deep copy of ``defaults`` or the variant's default record.
- Walk ``LEGACY_TO_RECORD`` in order. An entry fires when its legacy key is present
  (not None), its scope applies to the record's variant and its converter accepts
  the value. Later entries overwrite earlier ones (``xLabelAngle`` after
  ``rotateXLabels``).
- Keys without an entry (``chartType``, ``rowColor``, anything unknown) and keys
  whose scope does not apply are dropped and logged at DEBUG level.

Direction 2: normalized -> legacy (``to_legacy``)
- Walk ``RECORD_TO_LEGACY``; emit a legacy key only when its scope applies and the
  source value is present. Nested Axis/Legend objects are never emitted.

The round trip normalized -> legacy -> normalized is lossy: typography and legend
detail vanishes and tick rotation is carried as a flag plus an angle.

Examples:
    >>> from chartprops.core.legacy import to_normalized, to_legacy
    >>> rec = to_normalized({"color": "#ff0000", "xAxisLabel": "Months", "foo": 1}, "bar", "b1")
    >>> rec["primaryColor"], rec["textColor"], rec["xAxis"]["label"], "foo" in rec
    ('#ff0000', '#ff0000', 'Months', False)
    >>> legacy = to_legacy(rec)
    >>> legacy["barSpacing"], "xAxis" in legacy
    (0.1, False)
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Final, Literal, TypedDict

from .constants import LEGACY_ROTATED_TICK_ANGLE
from .defaults import create_default_properties
from .grammar import Variant, VariantFamily, family_of, supports_axes, supports_legend, variant_from_value
from .paths import get_path, set_path
from .typing import NormalizedRecord

__all__ = [
    "LegacyChartProperties",
    "Scope",
    "LegacyMapping",
    "LegacyProjection",
    "LEGACY_TO_RECORD",
    "RECORD_TO_LEGACY",
    "LEGACY_KEYS",
    "to_normalized",
    "to_legacy",
]

logger = logging.getLogger(__name__)


class LegacyChartProperties(TypedDict, total=False):
    """Flat, all-optional property bag used by pre-existing consumers."""

    title: str
    width: float
    height: float
    color: str
    background: str
    fontSize: float
    fontWeight: str
    textAlign: str
    showLegend: bool
    showGrid: bool
    opacity: float
    borderRadius: float
    chartType: str
    # chart-specific
    showDataPoints: bool
    smoothCurves: bool
    barSpacing: float
    showPercentages: bool
    startAngle: float
    value: str | float
    showTrend: bool
    subtitle: str
    xAxisLabel: str
    yAxisLabel: str
    showXAxis: bool
    showYAxis: bool
    rotateXLabels: bool
    xLabelAngle: float
    yMinValue: str | float
    yMaxValue: str | float
    startFromZero: bool
    # table-specific
    showHeader: bool
    alternateRows: bool
    showBorders: bool
    editable: bool
    headerColor: str
    rowColor: str
    alternateRowColor: str


LEGACY_KEYS: Final[frozenset[str]] = frozenset(LegacyChartProperties.__optional_keys__)

# "all" applies to every variant; "axis"/"legend" follow the trait applicability
# rules; a VariantFamily restricts an entry to that family's variant-specific block.
Scope = Literal["all", "axis", "legend"] | VariantFamily

# Returned by a converter to leave the record untouched for this key.
_UNCHANGED: Final = object()


def _in_scope(scope: Scope, variant: Variant) -> bool:
    if scope == "all":
        return True
    if scope == "axis":
        return supports_axes(variant)
    if scope == "legend":
        return supports_legend(variant)
    return family_of(variant) is scope


@dataclass(frozen=True, slots=True)
class LegacyMapping:
    """
    One legacy key and where it lands in a normalized record.

    Attributes:
        legacy_key (str): Key in the legacy bag.
        targets (tuple[str, ...]): Dotted record paths receiving the (converted) value.
        scope (Scope): Variants the entry applies to.
        convert (Callable | None): Value converter; may return ``_UNCHANGED`` to skip.
        also (tuple[tuple[str, Any], ...]): Constant writes performed when the entry fires.
    """

    legacy_key: str
    targets: tuple[str, ...]
    scope: Scope = "all"
    convert: Callable[[Any], Any] | None = None
    also: tuple[tuple[str, Any], ...] = ()

    def resolve(self, value: Any) -> Any:
        return value if self.convert is None else self.convert(value)


@dataclass(frozen=True, slots=True)
class LegacyProjection:
    """One legacy key emitted by ``to_legacy`` and the record path it is read from."""

    legacy_key: str
    source: str
    scope: Scope = "all"
    convert: Callable[[Any], Any] | None = None


def _rotated_tick_angle(flag: Any) -> Any:
    # Only a true flag rotates; false leaves the current rotation alone.
    return LEGACY_ROTATED_TICK_ANGLE if flag is True else _UNCHANGED


def _legacy_number(value: Any) -> Any:
    """Coerce a legacy axis bound (number or numeric string); empty or junk is skipped."""
    if isinstance(value, bool):
        return _UNCHANGED
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else _UNCHANGED
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return _UNCHANGED
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return _UNCHANGED
        return number if math.isfinite(number) else _UNCHANGED
    return _UNCHANGED


def _is_rotated(angle: Any) -> bool:
    return angle != 0


LEGACY_TO_RECORD: Final[tuple[LegacyMapping, ...]] = (
    # base
    LegacyMapping("title", ("title",)),
    LegacyMapping("width", ("width",)),
    LegacyMapping("height", ("height",)),
    LegacyMapping("background", ("backgroundColor",)),
    LegacyMapping("borderRadius", ("borderRadius",)),
    LegacyMapping("opacity", ("opacity",)),
    # typography / color
    LegacyMapping("fontSize", ("fontSize",)),
    LegacyMapping("fontWeight", ("fontWeight",)),
    LegacyMapping("textAlign", ("textAlign",)),
    LegacyMapping("color", ("primaryColor", "textColor")),
    # legend
    LegacyMapping("showLegend", ("legend.enabled",), "legend"),
    # axis
    LegacyMapping("xAxisLabel", ("xAxis.label",), "axis"),
    LegacyMapping("yAxisLabel", ("yAxis.label",), "axis"),
    LegacyMapping("showXAxis", ("xAxis.enabled",), "axis"),
    LegacyMapping("showYAxis", ("yAxis.enabled",), "axis"),
    LegacyMapping("rotateXLabels", ("xAxis.tickRotation",), "axis", _rotated_tick_angle),
    LegacyMapping("xLabelAngle", ("xAxis.tickRotation",), "axis"),
    LegacyMapping("startFromZero", ("yAxis.startFromZero",), "axis"),
    LegacyMapping("showGrid", ("xAxis.showGridLines", "yAxis.showGridLines"), "axis"),
    LegacyMapping("yMinValue", ("yAxis.minValue",), "axis", _legacy_number, (("yAxis.autoScale", False),)),
    LegacyMapping("yMaxValue", ("yAxis.maxValue",), "axis", _legacy_number, (("yAxis.autoScale", False),)),
    # variant-specific
    LegacyMapping("showDataPoints", ("showDataPoints",), VariantFamily.LINE),
    LegacyMapping("smoothCurves", ("smoothCurve",), VariantFamily.LINE),
    LegacyMapping("barSpacing", ("barSpacing",), VariantFamily.BAR),
    LegacyMapping("showPercentages", ("showPercentages",), VariantFamily.PIE),
    LegacyMapping("startAngle", ("startAngle",), VariantFamily.PIE),
    LegacyMapping("value", ("value",), VariantFamily.KPI),
    LegacyMapping("showTrend", ("showTrend",), VariantFamily.KPI),
    LegacyMapping("subtitle", ("unit",), VariantFamily.KPI),
    LegacyMapping("showHeader", ("showHeader",), VariantFamily.TABLE),
    LegacyMapping("alternateRows", ("alternateRowColors",), VariantFamily.TABLE),
    LegacyMapping("showBorders", ("borderEnabled",), VariantFamily.TABLE),
    LegacyMapping("editable", ("editable",), VariantFamily.TABLE),
    LegacyMapping("headerColor", ("headerBackgroundColor",), VariantFamily.TABLE),
    LegacyMapping("alternateRowColor", ("oddRowColor",), VariantFamily.TABLE),
)

RECORD_TO_LEGACY: Final[tuple[LegacyProjection, ...]] = (
    LegacyProjection("title", "title"),
    LegacyProjection("width", "width"),
    LegacyProjection("height", "height"),
    LegacyProjection("background", "backgroundColor"),
    LegacyProjection("borderRadius", "borderRadius"),
    LegacyProjection("opacity", "opacity"),
    LegacyProjection("fontSize", "fontSize"),
    LegacyProjection("fontWeight", "fontWeight"),
    LegacyProjection("textAlign", "textAlign"),
    LegacyProjection("color", "primaryColor"),
    LegacyProjection("chartType", "type"),
    LegacyProjection("showLegend", "legend.enabled", "legend"),
    LegacyProjection("xAxisLabel", "xAxis.label", "axis"),
    LegacyProjection("yAxisLabel", "yAxis.label", "axis"),
    LegacyProjection("showXAxis", "xAxis.enabled", "axis"),
    LegacyProjection("showYAxis", "yAxis.enabled", "axis"),
    LegacyProjection("rotateXLabels", "xAxis.tickRotation", "axis", _is_rotated),
    LegacyProjection("xLabelAngle", "xAxis.tickRotation", "axis"),
    LegacyProjection("startFromZero", "yAxis.startFromZero", "axis"),
    LegacyProjection("showGrid", "xAxis.showGridLines", "axis"),
    LegacyProjection("yMinValue", "yAxis.minValue", "axis"),
    LegacyProjection("yMaxValue", "yAxis.maxValue", "axis"),
    LegacyProjection("showDataPoints", "showDataPoints", VariantFamily.LINE),
    LegacyProjection("smoothCurves", "smoothCurve", VariantFamily.LINE),
    LegacyProjection("barSpacing", "barSpacing", VariantFamily.BAR),
    LegacyProjection("showPercentages", "showPercentages", VariantFamily.PIE),
    LegacyProjection("startAngle", "startAngle", VariantFamily.PIE),
    LegacyProjection("value", "value", VariantFamily.KPI),
    LegacyProjection("showTrend", "showTrend", VariantFamily.KPI),
    LegacyProjection("subtitle", "unit", VariantFamily.KPI),
    LegacyProjection("showHeader", "showHeader", VariantFamily.TABLE),
    LegacyProjection("alternateRows", "alternateRowColors", VariantFamily.TABLE),
    LegacyProjection("showBorders", "borderEnabled", VariantFamily.TABLE),
    LegacyProjection("editable", "editable", VariantFamily.TABLE),
    LegacyProjection("headerColor", "headerBackgroundColor", VariantFamily.TABLE),
    LegacyProjection("alternateRowColor", "oddRowColor", VariantFamily.TABLE),
)

_MAPPED_KEYS: Final[frozenset[str]] = frozenset(m.legacy_key for m in LEGACY_TO_RECORD)


def to_normalized(
    legacy: Mapping[str, Any],
    variant: Variant | str,
    element_id: str,
    defaults: Mapping[str, Any] | None = None,
) -> NormalizedRecord:
    """
    Overlay a legacy bag onto a default record.

    Args:
        legacy (Mapping[str, Any]): Legacy bag; None values count as absent.
        variant (Variant | str): Variant used to build defaults when none are given.
        element_id (str): Identifier of the element being migrated.
        defaults (Mapping[str, Any] | None): Starting record. Deep-copied, never mutated.

    Returns:
        NormalizedRecord: New record. Applicability is decided by the record's own
        ``type``; ``chartType`` in the bag never changes it.

    Examples:
        >>> rec = to_normalized({"rotateXLabels": True, "xLabelAngle": 30}, "line", "l1")
        >>> rec["xAxis"]["tickRotation"]
        30
        >>> rec = to_normalized({"yMinValue": "5"}, "bar", "b1")
        >>> rec["yAxis"]["minValue"], rec["yAxis"]["autoScale"]
        (5, False)
    """
    if defaults is None:
        result: NormalizedRecord = create_default_properties(variant, element_id)
    else:
        result = copy.deepcopy(dict(defaults))
    record_variant = variant_from_value(result.get("type", variant))

    dropped = sorted(k for k in legacy if k not in _MAPPED_KEYS)
    for mapping in LEGACY_TO_RECORD:
        raw = legacy.get(mapping.legacy_key)
        if raw is None:
            continue
        if not _in_scope(mapping.scope, record_variant):
            dropped.append(mapping.legacy_key)
            continue
        value = mapping.resolve(raw)
        if value is _UNCHANGED:
            continue
        for target in mapping.targets:
            result = set_path(result, target, value)
        for target, constant in mapping.also:
            result = set_path(result, target, constant)

    if dropped:
        logger.debug(
            "Dropped legacy keys for %r (%s): %s",
            result.get("id"),
            record_variant.value,
            ", ".join(dropped),
        )
    return result


def to_legacy(record: Mapping[str, Any]) -> LegacyChartProperties:
    """
    Project a normalized record onto the legacy bag.

    Args:
        record (Mapping[str, Any]): Normalized record.

    Returns:
        LegacyChartProperties: Only legacy-representable fields whose source is present;
        no nested objects.

    Examples:
        >>> from chartprops.core.defaults import create_default_properties
        >>> bag = to_legacy(create_default_properties("pie", "p1"))
        >>> bag["chartType"], bag["startAngle"], bag["showLegend"], "xAxisLabel" in bag
        ('pie', 0, True, False)
    """
    variant = variant_from_value(record.get("type"))
    legacy: dict[str, Any] = {}
    for projection in RECORD_TO_LEGACY:
        if not _in_scope(projection.scope, variant):
            continue
        value = get_path(record, projection.source)
        if value is None:
            continue
        if projection.convert is not None:
            value = projection.convert(value)
        legacy[projection.legacy_key] = copy.deepcopy(value)
    return legacy  # type: ignore[return-value]

"""
Default factory for normalized chart records.

Builds fully populated, JSON-representable records from the typed trait-block
models in chartprops.core.schema. Records are plain dicts keyed by camelCase
property names; each call returns fresh objects, so no two records ever share a
mutable default (palette, margins, axis blocks).

Notes:
    - ``create_default_properties`` is pure and deterministic given (variant, id).
    - Unknown variant tags fall back to the line schema (see grammar.variant_from_value).
    - Optional properties (axis min/max, KPI target/icon/...) are absent until set.

Examples:
    >>> from chartprops.core.defaults import create_default_properties
    >>> record = create_default_properties("pie", "p1")
    >>> record["type"], record["startAngle"], record["endAngle"]
    ('pie', 0, 360)
    >>> "xAxis" in record
    False
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from .grammar import Variant, variant_from_value
from .schema import (
    AnimationBlock,
    AxisBlock,
    BaseBlock,
    BarBlock,
    ColorBlock,
    DataDisplayBlock,
    KpiBlock,
    LegendBlock,
    LineBlock,
    PieBlock,
    ScatterBlock,
    TableBlock,
    TypographyBlock,
    record_model_for,
    record_tag,
)
from .typing import JsonDict, NormalizedRecord

__all__ = [
    "default_title",
    "create_default_properties",
    "base_defaults",
    "typography_defaults",
    "color_defaults",
    "animation_defaults",
    "data_display_defaults",
    "axis_defaults",
    "legend_defaults",
    "specific_defaults",
    "expected_keys",
    "optional_keys",
]

_SPECIFIC_BLOCKS: dict[str, type[BaseModel]] = {
    "line_chart": LineBlock,
    "basic_chart": LineBlock,
    "bar_chart": BarBlock,
    "pie_chart": PieBlock,
    "scatter_chart": ScatterBlock,
    "kpi": KpiBlock,
    "table": TableBlock,
}


def _dump(model: BaseModel) -> JsonDict:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def default_title(variant: Variant | str) -> str:
    """
    Title given to a freshly created element.

    Examples:
        >>> default_title("metric")
        'Metric Chart'
    """
    name = variant_from_value(variant).value
    return f"{name[:1].upper()}{name[1:]} Chart"


def create_default_properties(variant: Variant | str, element_id: str) -> NormalizedRecord:
    """
    Build the fully populated default record for a variant.

    Args:
        variant (Variant | str): Visualization variant or its tag. Unknown tags fall back
            to the line schema and produce ``type == "line"``.
        element_id (str): Element identifier stored in the record's ``id``.

    Returns:
        NormalizedRecord: Shared trait blocks, Axis/Legend when the variant supports them,
        and exactly the variant's own block, with literal defaults.

    Examples:
        >>> rec = create_default_properties("line", "l1")
        >>> rec["lineWidth"], rec["pointSize"], rec["showDataPoints"], rec["smoothCurve"]
        (2, 4, True, False)
        >>> create_default_properties("table", "t1")["pageSize"]
        10
    """
    v = variant_from_value(variant)
    model = record_model_for(v)
    return _dump(model(id=element_id, type=v, title=default_title(v)))


def base_defaults(variant: Variant | str, element_id: str) -> JsonDict:
    """Base block (id, type, title, size, frame, margin/padding) for a variant."""
    v = variant_from_value(variant)
    return _dump(BaseBlock(id=element_id, type=v, title=default_title(v)))


def typography_defaults() -> JsonDict:
    return _dump(TypographyBlock())


def color_defaults() -> JsonDict:
    return _dump(ColorBlock())


def animation_defaults() -> JsonDict:
    return _dump(AnimationBlock())


def data_display_defaults() -> JsonDict:
    return _dump(DataDisplayBlock())


def axis_defaults() -> JsonDict:
    """``{"xAxis": {...}, "yAxis": {...}}`` as carried by axis-supporting variants."""
    return _dump(AxisBlock())


def legend_defaults() -> JsonDict:
    """``{"legend": {...}}`` as carried by legend-supporting variants."""
    return _dump(LegendBlock())


def specific_defaults(variant: Variant | str) -> JsonDict:
    """Variant-specific block of a variant (line, bar, pie, scatter, KPI or table)."""
    return _dump(_SPECIFIC_BLOCKS[record_tag(variant_from_value(variant))]())


def _wire_keys(model: type[BaseModel], *, optional: bool) -> frozenset[str]:
    keys = set()
    for name, field in model.model_fields.items():
        is_optional = not field.is_required() and field.default is None
        if is_optional == optional:
            keys.add(field.alias or to_camel(name))
    return frozenset(keys)


def expected_keys(variant: Variant | str) -> frozenset[str]:
    """
    Top-level keys every record of a variant must carry.

    Args:
        variant (Variant | str): Variant or tag (unknown tags use the line schema).

    Returns:
        frozenset[str]: camelCase keys; optional keys are excluded.
    """
    return _wire_keys(record_model_for(variant_from_value(variant)), optional=False)


def optional_keys(variant: Variant | str) -> frozenset[str]:
    """Top-level keys a record of this variant may carry once set (e.g., KPI "target")."""
    return _wire_keys(record_model_for(variant_from_value(variant)), optional=True)


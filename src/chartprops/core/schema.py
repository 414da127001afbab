"""
Pydantic v2 models for trait blocks and per-variant chart records.

Every normalized record is the composition of the shared trait blocks (Base,
Typography, Color, Animation, DataDisplay), the Axis and Legend blocks when the
variant supports them, and exactly one variant-specific block. This module is the
typed source of truth for that shape; the default factory dumps these models to
plain camelCase dicts, and ``parse_record`` turns such a dict back into the typed
model for its variant.

Responsibilities
- Define one model per trait block, carrying its literal defaults.
- Compose one record model per record shape and expose them as a tagged union.
- Parse plain records into typed models, raising SchemaError on mismatch.

Style
- Zero-IO (stdlib + pydantic only).
- Field names are lower_snake in Python and camelCase on the wire (alias generator).
- ``extra="forbid"`` everywhere: a record's key set must be exactly its blocks' keys.

References
- grammar: src/chartprops/core/grammar.py (variants, families, applicability)
- defaults: src/chartprops/core/defaults.py (dict factories built from these models)
- tests: tests/core/test_schema_records.py
"""

from __future__ import annotations

from typing import Annotated, Any, Final, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from .constants import DEFAULT_COLOR_PALETTE, DEFAULT_GRADIENT_COLORS
from .errors import SchemaError
from .grammar import AXIS_VARIANTS, Variant, VariantFamily, family_of, is_known_variant
from .typing import Number

__all__ = [
    # Trait blocks
    "Spacing",
    "BaseBlock",
    "TypographyBlock",
    "ColorBlock",
    "AnimationBlock",
    "DataDisplayBlock",
    "XAxisBlock",
    "YAxisBlock",
    "AxisBlock",
    "LegendSettings",
    "LegendBlock",
    # Variant-specific blocks
    "LineBlock",
    "BarBlock",
    "PieBlock",
    "ScatterBlock",
    "KpiBlock",
    "TableBlock",
    # Records
    "LineChartRecord",
    "BasicChartRecord",
    "BarChartRecord",
    "PieChartRecord",
    "ScatterChartRecord",
    "KpiRecord",
    "TableRecord",
    "ChartRecord",
    "record_tag",
    "record_model_for",
    "parse_record",
    "schema_violations",
]


class _Block(BaseModel):
    """Shared configuration: camelCase aliases, no extraneous keys."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# Shared trait blocks
# ============================================================================


class Spacing(_Block):
    """Four-sided spacing used by margin and padding."""

    top: Number
    right: Number
    bottom: Number
    left: Number


def _margin() -> Spacing:
    return Spacing(top=20, right=20, bottom=20, left=20)


def _padding() -> Spacing:
    return Spacing(top=16, right=16, bottom=16, left=16)


class BaseBlock(_Block):
    """
    Identity and frame properties every visualization carries.

    Attributes:
        id (str): Element identifier; also the store key.
        type (Variant): Visualization variant; immutable once created.
        title (str): Display title.
        width (Number): Width in pixels.
        height (Number): Height in pixels.
        background_color (str): CSS color of the frame.
        border_radius (Number): Corner radius in pixels.
        opacity (Number): Opacity percentage in [0, 100].
        margin (Spacing): Outer spacing.
        padding (Spacing): Inner spacing.
    """

    id: str
    type: Variant
    title: str
    width: Number = 400
    height: Number = 300
    background_color: str = "#1e293b"
    border_radius: Number = 8
    opacity: Number = 100
    margin: Spacing = Field(default_factory=_margin)
    padding: Spacing = Field(default_factory=_padding)


class TypographyBlock(_Block):
    """Font and text color properties."""

    font_size: Number = 12
    font_family: str = "Inter, system-ui, sans-serif"
    font_weight: Literal["normal", "bold", "lighter", "bolder"] = "normal"
    text_align: Literal["left", "center", "right"] = "left"
    text_color: str = "#f8fafc"
    title_font_size: Number = 16
    title_color: str = "#f8fafc"


class ColorBlock(_Block):
    """Primary/secondary/accent colors, the series palette and gradient settings."""

    primary_color: str = "#3b82f6"
    secondary_color: str = "#10b981"
    accent_color: str = "#f59e0b"
    color_palette: list[str] = Field(default_factory=lambda: list(DEFAULT_COLOR_PALETTE))
    gradient_enabled: bool = False
    gradient_colors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GRADIENT_COLORS), min_length=2, max_length=2
    )


class AnimationBlock(_Block):
    animation_enabled: bool = True
    animation_duration: Number = 1000
    animation_easing: Literal["linear", "ease", "ease-in", "ease-out", "ease-in-out"] = "ease-out"
    animation_delay: Number = 0


class DataDisplayBlock(_Block):
    """
    Value labelling and tooltip properties.

    Notes:
        value_format "custom" defers to tooltip_format for rendering; the engine
        does not interpret either string.
    """

    show_values: bool = False
    value_format: Literal["number", "currency", "percentage", "custom"] = "number"
    value_prefix: str = ""
    value_suffix: str = ""
    decimal_places: int = 0
    show_tooltip: bool = True
    tooltip_format: str = "default"


class XAxisBlock(_Block):
    """
    Horizontal axis settings.

    Attributes:
        min_value (Number | None): Fixed lower bound; absent while auto-scaling.
        max_value (Number | None): Fixed upper bound; absent while auto-scaling.
    """

    enabled: bool = True
    label: str = ""
    label_color: str = "#f8fafc"
    label_font_size: Number = 12
    show_grid_lines: bool = True
    grid_line_color: str = "#374151"
    tick_count: int = 5
    tick_rotation: Number = 0
    min_value: Number | None = None
    max_value: Number | None = None
    auto_scale: bool = True


class YAxisBlock(XAxisBlock):
    """Vertical axis settings; adds start_from_zero."""

    start_from_zero: bool = True


class AxisBlock(_Block):
    """Independent x/y axis sub-blocks (line, area, bar, column, scatter only)."""

    x_axis: XAxisBlock = Field(default_factory=XAxisBlock)
    y_axis: YAxisBlock = Field(default_factory=YAxisBlock)


class LegendSettings(_Block):
    enabled: bool = True
    position: Literal["top", "bottom", "left", "right"] = "bottom"
    alignment: Literal["start", "center", "end"] = "center"
    orientation: Literal["horizontal", "vertical"] = "horizontal"
    font_size: Number = 12
    font_color: str = "#f8fafc"
    background_color: str = "transparent"
    border_color: str = "transparent"
    border_width: Number = 0
    item_spacing: Number = 8
    symbol_size: Number = 12
    symbol_shape: Literal["circle", "square", "line"] = "circle"


class LegendBlock(_Block):
    """
    Legend settings nested under the ``legend`` key.

    Notes:
        Nesting keeps legend font/border/background fields from colliding with the
        Typography, Base, Bar and Table fields of the same name.
    """

    legend: LegendSettings = Field(default_factory=LegendSettings)


# ============================================================================
# Variant-specific blocks
# ============================================================================


class LineBlock(_Block):
    line_width: Number = 2
    point_size: Number = 4
    show_data_points: bool = True
    smooth_curve: bool = False
    fill_area: bool = False
    area_opacity: Number = 0.3
    connect_nulls: bool = False


class BarBlock(_Block):
    bar_width: Number = 0.6
    bar_spacing: Number = 0.1
    border_width: Number = 0
    border_color: str = "transparent"
    orientation: Literal["horizontal", "vertical"] = "vertical"
    stacked_mode: Literal["none", "normal", "percent"] = "none"
    show_data_labels: bool = False


class PieBlock(_Block):
    """
    Pie/donut geometry and labelling.

    Attributes:
        inner_radius (Number): 0 draws a pie; > 0 draws a donut hole.
        start_angle (Number): Degrees, expected in [0, 360).
        end_angle (Number): Degrees, expected in (start_angle, 360].
        exploded_slices (list[int]): Indices of slices pulled out by explode_distance.
    """

    inner_radius: Number = 0
    outer_radius: Number = 100
    start_angle: Number = 0
    end_angle: Number = 360
    show_labels: bool = True
    show_percentages: bool = True
    label_position: Literal["inside", "outside", "none"] = "outside"
    label_connector_enabled: bool = True
    explode_distance: Number = 0
    exploded_slices: list[int] = Field(default_factory=list)


class ScatterBlock(_Block):
    point_size: Number = 6
    point_shape: Literal["circle", "square", "triangle", "diamond"] = "circle"
    show_trend_line: bool = False
    trend_line_color: str = "#ef4444"
    trend_line_width: Number = 2


class KpiBlock(_Block):
    """
    KPI card properties shared by metric, trend, progress and comparison.

    Optional attributes (previous_value, target, trend_percentage, icon,
    sparkline_data) are absent from default records.
    """

    value: str | Number = 0
    unit: str = ""
    previous_value: str | Number | None = None
    target: str | Number | None = None
    trend: Literal["up", "down", "neutral"] = "neutral"
    trend_percentage: Number | None = None
    show_trend: bool = True
    show_target: bool = False
    show_progress: bool = False
    progress_type: Literal["linear", "circular"] = "linear"
    icon: str | None = None
    icon_color: str = "#3b82f6"
    icon_size: Number = 24
    sparkline_data: list[Number] | None = None
    show_sparkline: bool = False


class TableBlock(_Block):
    show_header: bool = True
    header_background_color: str = "#374151"
    header_text_color: str = "#f8fafc"
    alternate_row_colors: bool = True
    even_row_color: str = "transparent"
    odd_row_color: str = "#1f2937"
    border_enabled: bool = True
    border_color: str = "#374151"
    border_width: Number = 1
    cell_padding: Number = 8
    sortable: bool = True
    filterable: bool = False
    editable: bool = False
    page_size: int = 10
    show_pagination: bool = True
    column_widths: dict[str, Number] = Field(default_factory=dict)
    column_alignment: dict[str, Literal["left", "center", "right"]] = Field(default_factory=dict)


# ============================================================================
# Records
# ============================================================================


class _SharedBlocks(BaseBlock, TypographyBlock, ColorBlock, AnimationBlock, DataDisplayBlock):
    """Blocks every record carries."""


class LineChartRecord(_SharedBlocks, LegendBlock, AxisBlock, LineBlock):
    """Line and area charts."""


class BasicChartRecord(_SharedBlocks, LineBlock):
    """
    Radar, funnel and gauge: the line block without axes or legend.

    These variants have no dedicated block and share the line schema.
    """


class BarChartRecord(_SharedBlocks, LegendBlock, AxisBlock, BarBlock):
    """Bar and column charts."""


class PieChartRecord(_SharedBlocks, LegendBlock, PieBlock):
    """Pie and donut charts."""


class ScatterChartRecord(_SharedBlocks, LegendBlock, AxisBlock, ScatterBlock):
    pass


class KpiRecord(_SharedBlocks, KpiBlock):
    """Metric, trend, progress and comparison cards."""


class TableRecord(_SharedBlocks, TableBlock):
    pass


_RECORD_MODELS: Final[dict[str, type[_SharedBlocks]]] = {
    "line_chart": LineChartRecord,
    "basic_chart": BasicChartRecord,
    "bar_chart": BarChartRecord,
    "pie_chart": PieChartRecord,
    "scatter_chart": ScatterChartRecord,
    "kpi": KpiRecord,
    "table": TableRecord,
}

_FAMILY_TAGS: Final[dict[VariantFamily, str]] = {
    VariantFamily.LINE: "line_chart",
    VariantFamily.BAR: "bar_chart",
    VariantFamily.PIE: "pie_chart",
    VariantFamily.SCATTER: "scatter_chart",
    VariantFamily.KPI: "kpi",
    VariantFamily.TABLE: "table",
}


def record_tag(variant: Variant) -> str:
    """
    Name of the record shape for a variant.

    Args:
        variant (Variant): Parsed variant.

    Returns:
        str: One of the keys of the tagged union (e.g., "line_chart", "basic_chart", "kpi").
    """
    family = family_of(variant)
    if family is VariantFamily.LINE and variant not in AXIS_VARIANTS:
        return "basic_chart"
    return _FAMILY_TAGS[family]


def record_model_for(variant: Variant) -> type[_SharedBlocks]:
    """Return the record model class describing a variant's records."""
    return _RECORD_MODELS[record_tag(variant)]


def _discriminate(value: Any) -> str | None:
    # Route on the record's "type"; unknown types fail with a tagged-union error.
    if isinstance(value, dict):
        raw = value.get("type")
    else:
        raw = getattr(value, "type", None)
    if not is_known_variant(raw):
        return None
    return record_tag(raw if isinstance(raw, Variant) else Variant(raw))


ChartRecord = Annotated[
    Union[
        Annotated[LineChartRecord, Tag("line_chart")],
        Annotated[BasicChartRecord, Tag("basic_chart")],
        Annotated[BarChartRecord, Tag("bar_chart")],
        Annotated[PieChartRecord, Tag("pie_chart")],
        Annotated[ScatterChartRecord, Tag("scatter_chart")],
        Annotated[KpiRecord, Tag("kpi")],
        Annotated[TableRecord, Tag("table")],
    ],
    Discriminator(
        _discriminate,
        custom_error_type="invalid_variant",
        custom_error_message="type must be a known visualization variant",
    ),
]

_RECORD_ADAPTER: Final[TypeAdapter[Any]] = TypeAdapter(ChartRecord)


def parse_record(record: dict[str, Any]) -> _SharedBlocks:
    """
    Parse a plain normalized record into the typed model for its variant.

    Args:
        record (dict[str, Any]): camelCase record as held by the property store.

    Returns:
        _SharedBlocks: One of the record models (e.g., PieChartRecord for "donut").

    Raises:
        SchemaError: If the type is unknown, a key is missing or extraneous, or a value
            has the wrong type.

    Examples:
        >>> from chartprops.core.defaults import create_default_properties
        >>> parse_record(create_default_properties("donut", "d1")).__class__.__name__
        'PieChartRecord'
    """
    try:
        return _RECORD_ADAPTER.validate_python(record)
    except ValidationError as exc:
        raise SchemaError(
            f"record {record.get('id')!r} does not match its schema: {'; '.join(_format_errors(exc))}"
        ) from exc


def schema_violations(record: dict[str, Any]) -> list[str]:
    """
    List schema mismatches of a record as human-readable messages.

    Returns:
        list[str]: Empty when the record parses cleanly.
    """
    try:
        _RECORD_ADAPTER.validate_python(record)
    except ValidationError as exc:
        return _format_errors(exc)
    return []


def _format_errors(exc: ValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        # Drop the union tag so locations read like record paths.
        if loc and loc[0] in _RECORD_MODELS:
            loc = loc[1:]
        where = ".".join(str(part) for part in loc) or "record"
        messages.append(f"{where}: {err.get('msg', 'invalid value')}")
    return messages

"""
Read-only projection of a record into named editing groups.

Editors render one panel per group: base, typography, colors, animation,
dataDisplay, legend, axis and the variant family's own group (line, bar, pie,
scatter, kpi or table). Projections are deep copies, so editing a projected
value never reaches the stored record; writes go through
``PropertyStore.update_property``.

Notes:
    - "legend" projects the contents of the nested ``legend`` object; "axis" projects
      ``{"xAxis": ..., "yAxis": ...}``. Both are ``{}`` for variants without them.
    - "base" leaves out ``id`` and ``type``.
    - Only keys present in the record are projected; an optional KPI key appears in
      the "kpi" group once it has been set.

Examples:
    >>> from chartprops.core.defaults import create_default_properties
    >>> from chartprops.core.groups import properties_by_group
    >>> groups = properties_by_group(create_default_properties("pie", "p1"))
    >>> groups["axis"], groups["pie"]["endAngle"], "id" in groups["base"]
    ({}, 360, False)
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from .grammar import (
    BASE_GROUPS,
    VariantFamily,
    family_group,
    group_keys,
    relevant_groups,
    supports_axes,
    supports_legend,
    variant_from_value,
)

__all__ = [
    "relevant_groups",
    "project_group",
    "properties_by_group",
]

_FAMILY_GROUPS = frozenset(f.value for f in VariantFamily)


def project_group(record: Mapping[str, Any], group: str) -> dict[str, Any]:
    """
    Project one editing group out of a record.

    Args:
        record (Mapping[str, Any]): Normalized record; left untouched.
        group (str): Group name (see grammar.GROUP_NAMES).

    Returns:
        dict[str, Any]: Deep-copied sub-record; ``{}`` when the group does not apply
        to the record's variant.

    Raises:
        KeyError: If ``group`` is not a known group name.
    """
    variant = variant_from_value(record.get("type"))
    if group == "legend":
        if not supports_legend(variant):
            return {}
        return copy.deepcopy(dict(record.get("legend") or {}))
    if group == "axis" and not supports_axes(variant):
        return {}
    if group in _FAMILY_GROUPS and group != family_group(variant):
        return {}
    return {key: copy.deepcopy(record[key]) for key in group_keys(group) if key in record}


def properties_by_group(record: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    """
    Project a record into every group an editor shows for it.

    Args:
        record (Mapping[str, Any]): Normalized record; left untouched.

    Returns:
        dict[str, dict[str, Any]]: Always the five base groups plus "legend", "axis"
        and the family group, in that order.

    Examples:
        >>> from chartprops.core.defaults import create_default_properties
        >>> list(properties_by_group(create_default_properties("metric", "m1")))
        ['base', 'typography', 'colors', 'animation', 'dataDisplay', 'legend', 'axis', 'kpi']
    """
    variant = variant_from_value(record.get("type"))
    groups = (*BASE_GROUPS, "legend", "axis", family_group(variant))
    return {group: project_group(record, group) for group in groups}

"""
Shared constants for the property engine.

Notes:
    - Default literal values of individual properties live on the schema models in
      chartprops.core.schema; only values reused across modules are kept here.
    - This module is zero-IO and uses only the Python standard library.
"""

from __future__ import annotations

__all__ = [
    "PATH_SEPARATOR",
    "DEFAULT_COLOR_PALETTE",
    "DEFAULT_GRADIENT_COLORS",
    "LEGACY_ROTATED_TICK_ANGLE",
    "DEFAULT_STORE_FILENAME",
    "ENV_PREFIX",
]

# Separator for property paths such as "xAxis.label" or "margin.top".
PATH_SEPARATOR: str = "."

DEFAULT_COLOR_PALETTE: tuple[str, ...] = (
    "#3b82f6",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#06b6d4",
    "#ec4899",
    "#84cc16",
    "#f97316",
    "#6366f1",
)

DEFAULT_GRADIENT_COLORS: tuple[str, str] = ("#3b82f6", "#06b6d4")

# Tick rotation applied when a legacy bag carries rotateXLabels=true.
LEGACY_ROTATED_TICK_ANGLE: int = -45

DEFAULT_STORE_FILENAME: str = "chart_properties.json"

ENV_PREFIX: str = "CHARTPROPS_"

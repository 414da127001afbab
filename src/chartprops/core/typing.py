"""
Lightweight typing aliases used across the property engine.

Records and legacy bags travel as plain JSON-like dicts keyed by camelCase names;
these aliases document intent in annotations. This module contains no runtime logic.

Examples:
    >>> from chartprops.core.typing import NormalizedRecord
    >>> def title_of(record: NormalizedRecord) -> str:
    ...     return record["title"]
    >>> title_of({"title": "Revenue"})
    'Revenue'
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "JsonDict",
    "NormalizedRecord",
    "Number",
]

JsonDict = dict[str, Any]

# A normalized record is a JSON-representable dict; typed access goes through
# chartprops.core.schema.parse_record.
NormalizedRecord = JsonDict

# Numeric properties keep ints as ints so JSON round trips are exact.
Number = int | float

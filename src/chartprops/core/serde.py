"""
Lightweight JSON serialization/deserialization utilities.

Provides `json_loads` as a thin wrapper around the stdlib `json` module and
re-exports `json_dumps_canonical` from `chartprops.core.hashing` so that records,
legacy bags and store documents share one canonical JSON policy. This module is
zero-IO.

Notes:
    - Use `json_dumps_canonical` for deterministic JSON strings prior to hashing.
    - `to_json_value` and `json_violations` keep stored records JSON-representable.
    - `json_loads_object` is for inputs that must be a JSON object (records,
      legacy bags, store documents).
"""

from __future__ import annotations

import copy
import json
import math
from collections.abc import Mapping
from typing import Any

# Re-export canonical dumps to keep a single canonicalization policy.
from .hashing import json_dumps_canonical  # noqa: F401

__all__ = [
    "json_loads",
    "json_loads_object",
    "json_dumps_canonical",
    "to_json_value",
    "json_violations",
]


def json_loads(s: str) -> Any:
    """
    Deserialize a JSON string to Python objects using the stdlib json module.

    Args:
        s (str): JSON string to parse.

    Returns:
        Any: Decoded Python object (dict, list, str, int, float, bool, or None).
    """
    return json.loads(s)


def json_loads_object(s: str) -> dict[str, Any]:
    """
    Deserialize a JSON string that must hold an object.

    Raises:
        ValueError: If the text is not valid JSON (json.JSONDecodeError) or the
            top-level value is not an object.
    """
    obj = json.loads(s)
    if not isinstance(obj, dict):
        raise ValueError(f"expected a JSON object, got {type(obj).__name__}")
    return obj


def to_json_value(obj: Any) -> Any:
    """
    Copy a value into plain JSON containers.

    Mappings become dicts and tuples become lists, recursively, so a record written
    through the store reads back identically after a JSON round trip. Scalars are
    returned as-is; anything else is deep-copied unchanged and left for the
    validator to report (see ``json_violations``).

    Examples:
        >>> to_json_value({"gradientColors": ("#000", "#fff")})
        {'gradientColors': ['#000', '#fff']}
    """
    if isinstance(obj, Mapping):
        return {k: to_json_value(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_json_value(v) for v in obj]
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    return copy.deepcopy(obj)


def json_violations(obj: Any, path: str = "") -> list[str]:
    """
    List the places where a value is not representable as JSON.

    Args:
        obj (Any): Value to inspect (normally a whole record).
        path (str): Dotted path of ``obj``; empty for a record.

    Returns:
        list[str]: One message per offending value, naming its dotted path.

    Examples:
        >>> import datetime
        >>> json_violations({"title": datetime.date(2024, 1, 1), "width": 400})
        ['title must be JSON-representable, got date']
        >>> json_violations({"margin": {"top": float("nan")}})
        ['margin.top must be a finite number, got nan']
    """
    label = path or "record"
    if isinstance(obj, dict):
        errors: list[str] = []
        for key, value in obj.items():
            if not isinstance(key, str):
                errors.append(f"{label} has a non-string key {key!r}")
                continue
            errors.extend(json_violations(value, f"{path}.{key}" if path else key))
        return errors
    if isinstance(obj, list):
        errors = []
        for idx, value in enumerate(obj):
            errors.extend(json_violations(value, f"{path}.{idx}" if path else str(idx)))
        return errors
    if isinstance(obj, float) and not math.isfinite(obj):
        return [f"{label} must be a finite number, got {obj!r}"]
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return []
    return [f"{label} must be JSON-representable, got {type(obj).__name__}"]

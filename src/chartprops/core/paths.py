"""
Dotted-path access and copy-on-write mutation for normalized records.

Paths are dot-separated key sequences such as ``"title"``, ``"xAxis.label"`` or
``"margin.top"``. Integer segments index into lists (``"colorPalette.0"``).

Semantics
- ``get_path`` never raises: any missing segment yields the default (``None``).
- ``set_path`` returns a new record and never mutates its input. Only the branch
  along the path is copied; untouched sub-objects are shared with the input, which
  is safe because stored records are only ever replaced, not edited in place.
- Missing intermediate segments are created as empty dicts.
- The written value is copied into plain JSON containers (tuples become lists),
  so callers cannot alias into a stored record.

Raises:
    PathError: From ``set_path`` on an empty path/segment, a traversal through a
        scalar, or an out-of-range list index.

Examples:
    >>> from chartprops.core.paths import get_path, set_path
    >>> rec = {"xAxis": {"label": ""}, "title": "Sales"}
    >>> new = set_path(rec, "xAxis.label", "Months")
    >>> get_path(new, "xAxis.label"), get_path(rec, "xAxis.label")
    ('Months', '')
    >>> get_path(new, "xAxis.nonexistent.deep") is None
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .constants import PATH_SEPARATOR
from .errors import PathError
from .serde import to_json_value

__all__ = [
    "split_path",
    "get_path",
    "has_path",
    "set_path",
]

_MISSING = object()


def split_path(path: str) -> list[str]:
    """
    Split a dotted path into segments.

    Raises:
        PathError: If the path is empty or contains an empty segment (e.g., "a..b").
    """
    if not isinstance(path, str) or not path:
        raise PathError(f"property path must be a non-empty string, got {path!r}")
    keys = path.split(PATH_SEPARATOR)
    if any(k == "" for k in keys):
        raise PathError(f"empty path segment in {path!r}")
    return keys


def _list_index(node: list[Any], key: str) -> int | None:
    if not key.isdigit():
        return None
    idx = int(key)
    return idx if idx < len(node) else None


def _child(node: Any, key: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(key, _MISSING)
    if isinstance(node, list):
        idx = _list_index(node, key)
        return _MISSING if idx is None else node[idx]
    return _MISSING


def _lookup(obj: Any, path: str) -> Any:
    try:
        keys = split_path(path)
    except PathError:
        return _MISSING
    current = obj
    for key in keys:
        current = _child(current, key)
        if current is _MISSING:
            return _MISSING
    return current


def get_path(obj: Any, path: str, default: Any = None) -> Any:
    """
    Read a (possibly nested) value by dotted path.

    Args:
        obj (Any): Record or sub-object to read from.
        path (str): Dotted path.
        default (Any): Returned when any segment is missing. Defaults to None.

    Returns:
        Any: The stored value (not a copy), or ``default``.
    """
    value = _lookup(obj, path)
    return default if value is _MISSING else value


def has_path(obj: Any, path: str) -> bool:
    """True when every segment of ``path`` resolves, even if the value stored is None."""
    return _lookup(obj, path) is not _MISSING


def _assign(node: dict[str, Any] | list[Any], key: str, value: Any, path: str) -> None:
    if isinstance(node, dict):
        node[key] = value
        return
    idx = _list_index(node, key)
    if idx is None:
        raise PathError(f"list index {key!r} out of range in {path!r}")
    node[idx] = value


def set_path(obj: Mapping[str, Any], path: str, value: Any) -> dict[str, Any]:
    """
    Return a copy of ``obj`` with the value at ``path`` replaced.

    Args:
        obj (Mapping[str, Any]): Record to update; left untouched.
        path (str): Dotted path; missing intermediate segments are created.
        value (Any): New value; copied into the result by ``to_json_value``.

    Returns:
        dict[str, Any]: New record sharing untouched branches with ``obj``.

    Raises:
        PathError: If the path is malformed or traverses a scalar value.
    """
    keys = split_path(path)
    root: dict[str, Any] = dict(obj)
    node: dict[str, Any] | list[Any] = root
    for key in keys[:-1]:
        child = _child(node, key)
        if child is _MISSING:
            if isinstance(node, list):
                raise PathError(f"list index {key!r} out of range in {path!r}")
            child = {}
        elif isinstance(child, Mapping):
            child = dict(child)
        elif isinstance(child, list):
            child = list(child)
        else:
            raise PathError(f"cannot descend into {type(child).__name__} at {key!r} in {path!r}")
        _assign(node, key, child, path)
        node = child
    _assign(node, keys[-1], to_json_value(value), path)
    return root

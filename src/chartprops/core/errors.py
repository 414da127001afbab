"""
Core exception types raised at the explicit boundaries of the property engine.

Ordinary reads, writes, validation and legacy migration never raise; they return
``None``/``False`` sentinels or advisory messages instead. The exceptions here are
reserved for callers that opt into strict behavior:

- SchemaError for records that do not fit their variant's typed schema.
- PathError for dotted paths that cannot be written (empty segment, scalar traversal).
- VersionMismatch for persisted documents written under another schema version.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - ``PropertyStore.update_property`` catches PathError and reports ``False``.

Examples:
    >>> from chartprops.core.errors import PathError
    >>> try:
    ...     raise PathError("empty path segment in 'xAxis..label'")
    ... except ValueError as e:
    ...     msg = str(e)
    >>> "empty path segment" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "SchemaError",
    "PathError",
    "VersionMismatch",
]


class SchemaError(ValueError):
    """Record does not fit its variant's schema (extra/missing keys, wrong types, unknown type)."""


class PathError(ValueError):
    """Dotted property path cannot be traversed for a write."""


class VersionMismatch(RuntimeError):
    """Incompatible or unexpected schema version encountered."""

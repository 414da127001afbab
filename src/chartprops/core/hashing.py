"""
Canonical JSON serialization and fingerprint helpers for stores.

Provides a single canonical JSON policy and SHA-256 helpers so that a whole store
exported with ``PropertyStore.export_all`` always yields the same
fingerprint, independent of key insertion order. This module is zero-IO and uses
only the Python standard library.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - Hashing is performed over the UTF-8 encoded canonical JSON string.
    - Persisted store documents embed ``hash_store`` of their elements; loaders
      recompute it to detect tampering or truncation.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any

__all__ = [
    "json_dumps_canonical",
    "hash_store",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object.

    Returns:
        str: Canonical JSON string with sort_keys=True, compact separators,
        and ensure_ascii=False.

    Notes:
        This function assumes the input is JSON-serializable and does not perform
        coercion of unsupported types.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _sha256_hexdigest(s: str) -> str:
    """Compute SHA-256 hex digest of a UTF-8 string."""
    h = hashlib.sha256()
    h.update(s.encode("utf-8"))
    return h.hexdigest()


def hash_store(elements: Mapping[str, Mapping[str, Any]]) -> str:
    """
    Hash an exported store (``{id: record}``) using the canonical JSON policy.

    Args:
        elements (Mapping[str, Mapping[str, Any]]): Exported store mapping.

    Returns:
        str: SHA-256 hex digest over the canonical JSON serialization.

    Examples:
        >>> from chartprops.core.hashing import hash_store
        >>> hash_store({"a": {"id": "a"}}) == hash_store({"a": {"id": "a"}})
        True
    """
    return _sha256_hexdigest(json_dumps_canonical({k: dict(v) for k, v in elements.items()}))

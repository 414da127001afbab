"""
Store documents on disk.

A store document wraps an ``export_all`` snapshot with the schema version it was
written under and a SHA-256 fingerprint of its elements (canonical JSON policy,
see chartprops.core.hashing).

Write path
- serialize JSON → write "<final>.tmp" → flush + fsync → os.replace(tmp, final).
- A value JSON cannot represent (NaN included) raises IoWriteError before any write.
- Atomicity via os.replace holds only when tmp and final share a filesystem; the
  tmp file is always placed next to the final path.

Read path
- parse JSON → check "schema_version" (VersionMismatch when incompatible) → recompute
  the fingerprint (IoReadError on mismatch) → ``PropertyStore.import_all``.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from chartprops.core.errors import VersionMismatch
from chartprops.core.hashing import hash_store
from chartprops.core.serde import json_loads_object
from chartprops.core.typing import NormalizedRecord
from chartprops.core.versioning import SCHEMA_V, format_version, is_compatible, parse_version
from chartprops.store import PropertyStore, StoreSettings

from .errors import IoReadError, IoWriteError

__all__ = [
    "dump_document",
    "read_document",
    "save_store",
    "load_store",
]

logger = logging.getLogger(__name__)


def dump_document(elements: Mapping[str, Mapping[str, Any]]) -> dict[str, Any]:
    """
    Wrap an exported store in a versioned, fingerprinted document.

    Args:
        elements (Mapping[str, Mapping[str, Any]]): ``PropertyStore.export_all()`` output.

    Returns:
        dict[str, Any]: ``{"schema_version", "fingerprint", "elements"}``.

    Examples:
        >>> doc = dump_document({})
        >>> doc["schema_version"], sorted(doc)
        ('1.0', ['elements', 'fingerprint', 'schema_version'])
    """
    payload = {str(k): dict(v) for k, v in elements.items()}
    return {
        "schema_version": format_version(SCHEMA_V),
        "fingerprint": hash_store(payload),
        "elements": payload,
    }


def read_document(doc: Mapping[str, Any]) -> dict[str, NormalizedRecord]:
    """
    Check a store document and return its elements.

    Args:
        doc (Mapping[str, Any]): Parsed document.

    Returns:
        dict[str, NormalizedRecord]: ``{id: record}`` ready for ``import_all``.

    Raises:
        VersionMismatch: If the document's schema version is not compatible with SCHEMA_V.
        IoReadError: If the document is malformed or its fingerprint does not match.
    """
    raw_version = doc.get("schema_version")
    try:
        version = parse_version(raw_version)
    except ValueError as exc:
        raise IoReadError(f"invalid schema_version in store document: {raw_version!r}") from exc
    if not is_compatible(version):
        raise VersionMismatch(
            f"store document schema {format_version(version)} is not compatible with {format_version(SCHEMA_V)}"
        )

    elements = doc.get("elements")
    if not isinstance(elements, dict) or not all(isinstance(v, dict) for v in elements.values()):
        raise IoReadError("store document 'elements' must be an object of objects")

    fingerprint = doc.get("fingerprint")
    if fingerprint != hash_store(elements):
        raise IoReadError("store document fingerprint does not match its elements")
    return elements


def _write_atomic(path: Path, payload: bytes) -> None:
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "wb") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            logger.debug("Could not remove temporary file %s", tmp_path)
        raise IoWriteError(f"failed to write store document to {path}: {exc}") from exc


def save_store(
    store: PropertyStore,
    path: str | os.PathLike[str] | None = None,
    settings: StoreSettings | None = None,
) -> Path:
    """
    Persist a store atomically.

    Args:
        store (PropertyStore): Store to snapshot.
        path (str | os.PathLike[str] | None): Destination; defaults to ``settings.store_path``.
        settings (StoreSettings | None): Defaults to the store's own settings.

    Returns:
        Path: Path written.

    Raises:
        IoWriteError: If a record holds a value JSON cannot represent (non-finite
            numbers included), or the tmp write, fsync or rename fails.
    """
    s = settings or store.settings
    target = Path(path if path is not None else s.store_path)
    try:
        doc = dump_document(store.export_all())
        text = json.dumps(doc, indent=s.indent or None, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise IoWriteError(f"store is not JSON-representable, nothing written to {target}: {exc}") from exc
    _write_atomic(target, text.encode("utf-8"))
    logger.info("Saved %d element(s) to %s", len(doc["elements"]), target)
    return target


def load_store(
    path: str | os.PathLike[str] | None = None,
    store: PropertyStore | None = None,
    settings: StoreSettings | None = None,
) -> PropertyStore:
    """
    Load a store document, replacing the contents of ``store``.

    Args:
        path (str | os.PathLike[str] | None): Document path; defaults to ``settings.store_path``.
        store (PropertyStore | None): Store to fill; a new ``PropertyStore(settings)`` when None.
        settings (StoreSettings | None): Settings for the default path and a new store.

    Returns:
        PropertyStore: The filled store.

    Raises:
        IoReadError: If the file is missing, unreadable, not a JSON object, malformed,
            or fails the fingerprint check.
        VersionMismatch: If the document was written under an incompatible schema version.
    """
    s = settings or (store.settings if store is not None else StoreSettings())
    source = Path(path if path is not None else s.store_path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise IoReadError(f"cannot read store document {source}: {exc}") from exc
    try:
        doc = json_loads_object(text)
    except ValueError as exc:
        raise IoReadError(f"store document {source} is not a JSON object: {exc}") from exc

    elements = read_document(doc)
    target = store if store is not None else PropertyStore(s)
    target.import_all(elements)
    logger.info("Loaded %d element(s) from %s", len(elements), source)
    return target

"""
chartprops.io — JSON persistence for property stores.

## Responsibilities
- Persist ``PropertyStore.export_all`` snapshots as a versioned, fingerprinted JSON document.
- Restore a document into a store through ``PropertyStore.import_all``.
- Write atomically (tmp → fsync → os.replace) so a crash never leaves a half-written document.

## Public API
- save_store / load_store — file round trip for a store.
- dump_document / read_document — in-memory document building and checking.

## Document layout
```json
{"schema_version": "1.0", "fingerprint": "<sha256>", "elements": {"l1": {"id": "l1", "type": "line", "...": "..."}}}
```

## Import DAG discipline
- Depends only on stdlib, chartprops.core and chartprops.store.
"""

from __future__ import annotations

from .errors import IoError, IoReadError, IoWriteError
from .files import dump_document, load_store, read_document, save_store

__all__ = [
    "IoError",
    "IoReadError",
    "IoWriteError",
    "dump_document",
    "read_document",
    "save_store",
    "load_store",
]

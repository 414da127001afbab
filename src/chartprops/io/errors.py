"""
Custom exceptions for the chartprops.io module.

Purpose
- Provide persistence-specific error types, distinct from the core engine errors.
- Keep chartprops.core as the source of truth for schema/version errors (see
  chartprops.core.errors); a document written under an incompatible schema version
  raises core VersionMismatch, not an Io* error.

Boundaries
- IoReadError: document missing, unreadable, not JSON, malformed, or its fingerprint
  does not match its elements.
- IoWriteError: atomic write path failed (tmp write/fsync/rename).

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations

__all__ = [
    "IoError",
    "IoReadError",
    "IoWriteError",
]


class IoError(Exception):
    """
    Base class for persistence errors in chartprops.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from chartprops.core errors.
    """


class IoReadError(IoError):
    """
    Raised when a store document cannot be loaded.

    Examples:
        - File does not exist or is not valid JSON
        - "elements" is not an object of objects
        - Fingerprint mismatch (document edited or truncated)
    """


class IoWriteError(IoError):
    """
    Raised when a store document could not be written atomically.

    Notes:
        The write path is tmp JSON → fsync → os.replace(tmp, final). Failures at any step
        surface as IoWriteError (with best-effort cleanup of the tmp file).
    """

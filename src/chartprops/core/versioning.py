"""
Schema version metadata and helpers for persisted property-store documents.

Exposes the canonical schema version (SCHEMA_V) embedded in every document written
by chartprops.io and provides compatibility checks for loaders. This module is
zero-IO.

Notes:
    - Documents carry the version as a "MAJOR.MINOR" string (``format_version``).
    - Loaders parse it with ``parse_version`` and refuse documents for which
      ``is_compatible`` is False (see chartprops.core.errors.VersionMismatch).
    - A major bump signals a record shape change; minor bumps are additive.
"""

from dataclasses import dataclass
from datetime import date

SCHEMA_MAJOR_VERSION = 1
SCHEMA_MINOR_VERSION = 0


@dataclass(frozen=True)
class SchemaVersion:
    """
    Immutable semantic version with ISO release date for store documents.

    Attributes:
        major (int): Non-negative major component signalling breaking changes.
        minor (int): Non-negative minor component for additive, non-breaking changes.
        date (str): ISO YYYY-MM-DD release date.

    Raises:
        ValueError: If any component is negative or the date is not ISO compliant.
    """

    major: int
    minor: int
    date: str  # ISO YYYY-MM-DD

    def __post_init__(self) -> None:
        if self.major < 0:
            raise ValueError(f"SchemaVersion major must be non-negative, got {self.major}")
        if self.minor < 0:
            raise ValueError(f"SchemaVersion minor must be non-negative, got {self.minor}")
        try:
            date.fromisoformat(self.date)
        except ValueError as exc:
            raise ValueError(
                f"SchemaVersion date must be ISO YYYY-MM-DD, got {self.date!r}"
            ) from exc


SCHEMA_V = SchemaVersion(SCHEMA_MAJOR_VERSION, SCHEMA_MINOR_VERSION, "2026-10-19")


def format_version(ver: SchemaVersion = SCHEMA_V) -> str:
    """Render a version as the "MAJOR.MINOR" string stored in documents."""
    return f"{ver.major}.{ver.minor}"


def parse_version(text: str, released: str = SCHEMA_V.date) -> SchemaVersion:
    """
    Parse a "MAJOR.MINOR" string.

    Args:
        text (str): Version string read from a document.
        released (str): ISO date attached to the parsed version (documents do not store one).

    Returns:
        SchemaVersion: Parsed version.

    Raises:
        ValueError: If the string is not two dot-separated non-negative integers.

    Examples:
        >>> parse_version("1.0").major
        1
    """
    parts = text.split(".") if isinstance(text, str) else []
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"schema version must look like 'MAJOR.MINOR', got {text!r}")
    return SchemaVersion(int(parts[0]), int(parts[1]), released)


def is_compatible(ver: SchemaVersion) -> bool:
    """
    Check whether a document version can be loaded by this release.

    Args:
        ver (SchemaVersion): Version read from a document.

    Returns:
        bool: True if ver has the same major as SCHEMA_V and a minor not newer than it.

    Examples:
        >>> from chartprops.core.versioning import SchemaVersion, SCHEMA_V, is_compatible
        >>> is_compatible(SCHEMA_V)
        True
        >>> is_compatible(SchemaVersion(SCHEMA_V.major + 1, 0, SCHEMA_V.date))
        False
    """
    return ver.major == SCHEMA_V.major and ver.minor <= SCHEMA_V.minor

"""
Keyed store of normalized records, one per visualization element.

The store is an explicit object: each editor session, dashboard or test builds its
own ``PropertyStore`` and hands it to the consumers that need it. There is no
module-level instance.

Responsibilities
- Hold ``{element_id: record}`` and expose get/set/remove/clear/list operations.
- Run the validator on every write, log the violations and commit the write anyway.
- Provide dotted-path reads and copy-on-write updates (``get_property``/``update_property``).
- Offer the serialization boundary (``export_all``/``import_all``) used by chartprops.io.
- Front the legacy adapter and the group projector for stored elements.

Notes
- Single-threaded: no locking, last write wins.
- Stored records are never edited in place; ``update_property`` replaces the record
  with a copy that shares untouched branches with its predecessor. Reads return deep
  copies so callers cannot alias into the store.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from chartprops.core.defaults import create_default_properties as _default_record
from chartprops.core.errors import PathError
from chartprops.core.grammar import Variant, is_property_applicable, relevant_groups
from chartprops.core.groups import properties_by_group
from chartprops.core.legacy import LegacyChartProperties, to_legacy, to_normalized
from chartprops.core.paths import get_path, set_path, split_path
from chartprops.core.serde import to_json_value
from chartprops.core.typing import NormalizedRecord
from chartprops.core.validation import Validator

from .config import StoreSettings

__all__ = ["PropertyStore"]

logger = logging.getLogger(__name__)

# Fixed at creation: the variant decides the key set and the id mirrors the store key.
_IMMUTABLE_KEYS = frozenset({"id", "type"})


def _set_mutable(record: NormalizedRecord, path: str, value: Any) -> NormalizedRecord:
    if split_path(path)[0] in _IMMUTABLE_KEYS:
        raise PathError(f"{path!r} is fixed once the element is created")
    return set_path(record, path, value)


class PropertyStore:
    """
    Explicit keyed collection of normalized records.

    Args:
        settings (StoreSettings | None): Runtime settings; defaults to ``StoreSettings()``.
        validator (Validator | None): Validator consulted on writes; defaults to a
            ``Validator`` honoring ``settings.check_schema``.

    Examples:
        >>> store = PropertyStore()
        >>> _ = store.create_default_properties("line", "l1")
        >>> store.update_property("l1", "xAxis.label", "Months")
        True
        >>> store.get_property("l1", "xAxis.label")
        'Months'
        >>> store.update_property("nonexistent", "title", "x"), "nonexistent" in store
        (False, False)
    """

    def __init__(self, settings: StoreSettings | None = None, validator: Validator | None = None) -> None:
        self.settings = settings or StoreSettings()
        self.validator = validator or Validator(check_schema=self.settings.check_schema)
        self._records: dict[str, NormalizedRecord] = {}

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._records))

    # ------------------------------------------------------------------
    # Keyed access
    # ------------------------------------------------------------------

    def get(self, element_id: str) -> NormalizedRecord | None:
        """Return a copy of the record for ``element_id``, or None if absent."""
        record = self._records.get(element_id)
        return None if record is None else copy.deepcopy(record)

    def set(self, element_id: str, record: Mapping[str, Any]) -> list[str]:
        """
        Validate and store a record.

        Args:
            element_id (str): Key to store under.
            record (Mapping[str, Any]): Normalized record; copied into the store with
                tuples turned into lists (see ``to_json_value``).

        Returns:
            list[str]: Validator messages. The write is committed even when non-empty.
        """
        return self._commit(element_id, to_json_value(record))

    def remove(self, element_id: str) -> bool:
        """Drop a record; returns False if the id was not stored."""
        return self._records.pop(element_id, None) is not None

    def clear(self) -> None:
        self._records.clear()

    def list_ids(self) -> list[str]:
        """Stored element ids in insertion order."""
        return list(self._records)

    def export_all(self) -> dict[str, NormalizedRecord]:
        """
        Snapshot the whole store as ``{id: record}``.

        Returns:
            dict[str, NormalizedRecord]: Deep copy; JSON-representable.
        """
        return copy.deepcopy(self._records)

    def import_all(self, data: Mapping[str, Mapping[str, Any]]) -> None:
        """
        Replace the entire store with ``data``.

        Each record is written through ``set``, so violations are logged as usual.
        """
        snapshot = {str(k): to_json_value(v) for k, v in data.items()}
        self._records.clear()
        for element_id, record in snapshot.items():
            self._commit(element_id, record)

    def _commit(self, element_id: str, record: NormalizedRecord) -> list[str]:
        violations = self.validator.validate(record)
        if violations and self.settings.log_violations:
            logger.log(
                self.settings.log_level,
                "Property violations for %r: %s",
                element_id,
                "; ".join(violations),
            )
        self._records[element_id] = record
        return violations

    # ------------------------------------------------------------------
    # Creation and migration
    # ------------------------------------------------------------------

    def create_default_properties(self, variant: Variant | str, element_id: str) -> NormalizedRecord:
        """
        Create, store and return the default record for ``(variant, element_id)``.

        Replaces any record already stored under ``element_id``.
        """
        record = _default_record(variant, element_id)
        self._commit(element_id, record)
        return copy.deepcopy(record)

    def get_or_create(
        self,
        element_id: str,
        variant: Variant | str,
        *,
        legacy: Mapping[str, Any] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> NormalizedRecord:
        """
        Return the stored record, creating it on first access.

        Args:
            element_id (str): Element identifier.
            variant (Variant | str): Variant used when the record has to be created.
            legacy (Mapping[str, Any] | None): Legacy bag overlaid on the defaults at creation.
            overrides (Mapping[str, Any] | None): ``{dotted_path: value}`` applied last at creation.

        Returns:
            NormalizedRecord: Copy of the stored record. ``legacy`` and ``overrides`` are
            ignored when the id already exists.
        """
        existing = self.get(element_id)
        if existing is not None:
            return existing
        if legacy:
            record = to_normalized(legacy, variant, element_id)
        else:
            record = _default_record(variant, element_id)
        for path, value in (overrides or {}).items():
            try:
                record = _set_mutable(record, path, value)
            except PathError as exc:
                logger.warning("Ignoring override %r for %r: %s", path, element_id, exc)
        self._commit(element_id, record)
        return copy.deepcopy(record)

    def migrate_legacy_properties(
        self,
        element_id: str,
        legacy: Mapping[str, Any],
        variant: Variant | str,
    ) -> NormalizedRecord:
        """Build a record from a legacy bag over fresh defaults, store it and return a copy."""
        record = to_normalized(legacy, variant, element_id)
        self._commit(element_id, record)
        return copy.deepcopy(record)

    def to_legacy_format(self, element_id: str) -> LegacyChartProperties:
        """Legacy projection of a stored record; ``{}`` for unknown ids."""
        record = self._records.get(element_id)
        if record is None:
            return {}
        return to_legacy(record)

    # ------------------------------------------------------------------
    # Path access
    # ------------------------------------------------------------------

    def update_property(self, element_id: str, path: str, value: Any) -> bool:
        """
        Set one (possibly nested) property and write the record back through validation.

        Args:
            element_id (str): Element to update.
            path (str): Dotted path, e.g. "title", "xAxis.label" or "margin.top".
            value (Any): New value; copied into the record by ``to_json_value``.

        Returns:
            bool: False, with no side effect, when the id is unknown, the path starts
            with "id" or "type" (both fixed at creation), or the path cannot be
            written (empty segment, traversal through a scalar).
        """
        current = self._records.get(element_id)
        if current is None:
            logger.warning("Cannot update %r on unknown element %r", path, element_id)
            return False
        try:
            updated = _set_mutable(current, path, value)
        except PathError as exc:
            logger.warning("Cannot update %r on element %r: %s", path, element_id, exc)
            return False
        self._commit(element_id, updated)
        return True

    def get_property(self, element_id: str, path: str) -> Any:
        """Value at ``path`` (a copy), or None for an unknown id or a missing segment."""
        record = self._records.get(element_id)
        if record is None:
            return None
        return copy.deepcopy(get_path(record, path))

    # ------------------------------------------------------------------
    # Groups and applicability
    # ------------------------------------------------------------------

    def get_properties_by_group(self, element_id: str) -> dict[str, dict[str, Any]]:
        """Editing-group projection of a stored record; ``{}`` for unknown ids."""
        record = self._records.get(element_id)
        if record is None:
            return {}
        return properties_by_group(record)

    def available_property_groups(self, variant: Variant | str) -> list[str]:
        return relevant_groups(variant)

    def is_property_applicable(self, variant: Variant | str, path: str) -> bool:
        return is_property_applicable(variant, path)

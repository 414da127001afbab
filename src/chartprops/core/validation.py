"""
Advisory validation of normalized records.

The validator reports problems as human-readable messages; it never raises and
never blocks a write. The property store logs the messages and commits the record
anyway (whether writes should be rejected instead is an open design question).

Rules
- Baseline (every record): id and title non-empty, width > 0, height > 0,
  opacity in [0, 100], and every value JSON-representable (strings, numbers,
  booleans, None, lists and string-keyed dicts; no tuples or NaN).
- Per-variant rule table, extensible via ``Validator.register``. Built in:
  pie/donut require startAngle in [0, 360) and startAngle < endAngle <= 360.
- Optional schema rule (``check_schema=True``): reports keys or values that do not
  fit the variant's typed schema (see chartprops.core.schema.schema_violations).

Messages name the offending property key so editors can attach them to fields.

Examples:
    >>> from chartprops.core.validation import validate
    >>> from chartprops.core.defaults import create_default_properties
    >>> validate(create_default_properties("bar", "b1"))
    []
    >>> rec = create_default_properties("pie", "p1")
    >>> rec["startAngle"] = 370
    >>> validate(rec)
    ['startAngle must be in [0, 360), got 370', 'endAngle must be greater than startAngle and <= 360 (endAngle=360, startAngle=370)']
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .grammar import Variant, is_known_variant
from .schema import schema_violations
from .serde import json_violations

__all__ = [
    "Rule",
    "NamedRule",
    "Validator",
    "validate",
]

logger = logging.getLogger(__name__)

Rule = Callable[[Mapping[str, Any]], Iterable[str]]


@dataclass(frozen=True, slots=True)
class NamedRule:
    """A validation rule with a stable name used in failure reports."""

    name: str
    check: Rule


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and not math.isnan(v)


def _check_id(record: Mapping[str, Any]) -> Iterable[str]:
    if not record.get("id"):
        yield "id is required"


def _check_title(record: Mapping[str, Any]) -> Iterable[str]:
    if not record.get("title"):
        yield "title is required"


def _positive(key: str) -> Rule:
    def check(record: Mapping[str, Any]) -> Iterable[str]:
        value = record.get(key)
        if not _is_number(value):
            yield f"{key} must be a number, got {value!r}"
        elif value <= 0:
            yield f"{key} must be greater than 0, got {value!r}"

    return check


def _check_opacity(record: Mapping[str, Any]) -> Iterable[str]:
    value = record.get("opacity")
    if not _is_number(value):
        yield f"opacity must be a number, got {value!r}"
    elif value < 0 or value > 100:
        yield f"opacity must be between 0 and 100, got {value!r}"


def _check_pie_angles(record: Mapping[str, Any]) -> Iterable[str]:
    start = record.get("startAngle")
    end = record.get("endAngle")
    if not _is_number(start):
        yield f"startAngle must be a number, got {start!r}"
    elif start < 0 or start >= 360:
        yield f"startAngle must be in [0, 360), got {start!r}"
    if not _is_number(end):
        yield f"endAngle must be a number, got {end!r}"
    elif end > 360 or (_is_number(start) and end <= start):
        yield f"endAngle must be greater than startAngle and <= 360 (endAngle={end!r}, startAngle={start!r})"


def _check_json(record: Mapping[str, Any]) -> Iterable[str]:
    return json_violations(dict(record))


def _check_schema(record: Mapping[str, Any]) -> Iterable[str]:
    return [f"schema: {msg}" for msg in schema_violations(dict(record))]


_BASELINE_RULES: tuple[NamedRule, ...] = (
    NamedRule("id", _check_id),
    NamedRule("title", _check_title),
    NamedRule("width", _positive("width")),
    NamedRule("height", _positive("height")),
    NamedRule("opacity", _check_opacity),
    NamedRule("json", _check_json),
)


class Validator:
    """
    Variant-aware advisory rule checker.

    Attributes:
        check_schema (bool): Also report typed-schema mismatches (extraneous keys,
            wrong value types). Off by default.

    Examples:
        >>> v = Validator()
        >>> v.register("table", lambda r: [] if r.get("pageSize", 0) > 0 else ["pageSize must be > 0"])
        >>> from chartprops.core.defaults import create_default_properties
        >>> rec = create_default_properties("table", "t1")
        >>> rec["pageSize"] = 0
        >>> v.validate(rec)
        ['pageSize must be > 0']
    """

    def __init__(self, *, check_schema: bool = False) -> None:
        self.check_schema = check_schema
        self._variant_rules: dict[Variant, list[NamedRule]] = {}
        for variant in (Variant.PIE, Variant.DONUT):
            self.register(variant, _check_pie_angles, name="pie_angles")

    def register(self, variant: Variant | str, rule: Rule, *, name: str | None = None) -> None:
        """
        Add a rule applied to records of one variant.

        Args:
            variant (Variant | str): Variant (or tag) the rule applies to.
            rule (Rule): Callable returning an iterable of violation messages.
            name (str | None): Name used when the rule itself fails; defaults to the
                callable's ``__name__``.

        Raises:
            ValueError: If ``variant`` is not a known variant tag.
        """
        if not is_known_variant(variant):
            raise ValueError(f"cannot register a rule for unknown variant {variant!r}")
        v = variant if isinstance(variant, Variant) else Variant(variant)
        label = name or getattr(rule, "__name__", "rule")
        self._variant_rules.setdefault(v, []).append(NamedRule(label, rule))

    def rules_for(self, variant: Variant | str | None) -> list[NamedRule]:
        """Rules applied to a record of ``variant``, baseline first."""
        rules = list(_BASELINE_RULES)
        if is_known_variant(variant):
            v = variant if isinstance(variant, Variant) else Variant(variant)
            rules.extend(self._variant_rules.get(v, ()))
        if self.check_schema:
            rules.append(NamedRule("schema", _check_schema))
        return rules

    def validate(self, record: Any) -> list[str]:
        """
        Check a record and return violation messages.

        Args:
            record (Any): Normalized record (normally a dict).

        Returns:
            list[str]: Violations in rule order; empty when the record is valid.

        Notes:
            Never raises. A rule that errors is reported as a violation naming the rule.
        """
        if not isinstance(record, Mapping):
            return [f"record must be a mapping, got {type(record).__name__}"]
        errors: list[str] = []
        for rule in self.rules_for(record.get("type")):
            try:
                errors.extend(rule.check(record))
            except Exception as exc:
                logger.warning("Validation rule %r failed on %r: %s", rule.name, record.get("id"), exc)
                errors.append(f"rule {rule.name!r} could not be applied: {exc}")
        return errors


_DEFAULT_VALIDATOR = Validator()


def validate(record: Any) -> list[str]:
    """Validate a record with the built-in rules (see ``Validator.validate``)."""
    return _DEFAULT_VALIDATOR.validate(record)

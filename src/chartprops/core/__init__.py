"""
Core package aggregator for the chart property engine (grammar, schema, defaults, paths, validation, legacy, groups).

## Contracts (single source of truth)
- Grammar — Variant/VariantFamily enums, tag parsing with line fallback, axis/legend applicability.
- Schema — pydantic trait-block models composed into per-family record models (tagged union).
- Defaults — fully populated default records per variant.
- Paths — dotted-path reads and copy-on-write writes.
- Validation — advisory, variant-aware rule table.
- Legacy — explicit mapping tables between the flat legacy bag and normalized records.
- Groups — read-only projection of a record into editing groups.
- Hashing/Serde/Versioning — canonical JSON, fingerprints, document schema version.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Naming policy: Python names are lower_snake; record keys are camelCase on the wire.
- Records are plain dicts; typed access goes through ``schema.parse_record``.

## Downstream usage
- chartprops.store — holds records per element id and runs the validator on every write.
- chartprops.io — persists ``PropertyStore.export_all`` snapshots with a fingerprint and SCHEMA_V.
- chartprops.cli — exposes defaults, migration, validation and grouping on the command line.

## Examples
```python
from chartprops.core.defaults import create_default_properties
from chartprops.core.paths import get_path, set_path
from chartprops.core.validation import validate

rec = create_default_properties("pie", "p1")
rec = set_path(rec, "startAngle", 370)
get_path(rec, "startAngle")  # 370
validate(rec)[0]  # 'startAngle must be in [0, 360), got 370'
```
"""

"""
chartprops — chart property normalization and migration engine.

Every visualization element (line, area, bar, column, pie, donut, scatter, radar,
funnel, gauge, the KPI cards and tables) is described by one normalized record:
shared trait blocks plus the blocks its variant supports. This package creates,
stores, edits, validates, groups and migrates those records.

## Public API
- PropertyStore — explicit keyed store of records (no module-level singleton).
- StoreSettings — runtime configuration (env > TOML > defaults).
- create_default_properties — default record for a variant.
- to_normalized / to_legacy — legacy bag adapter.
- validate — advisory validation.
- properties_by_group — editing-group projection.
- save_store / load_store — JSON persistence of a store.

## Examples
```python
from chartprops import PropertyStore

store = PropertyStore()
store.create_default_properties("line", "l1")
store.update_property("l1", "xAxis.label", "Months")  # True
store.get_property("l1", "xAxis.label")  # 'Months'
```
"""

from __future__ import annotations

from .core.defaults import create_default_properties
from .core.grammar import Variant, VariantFamily
from .core.groups import properties_by_group
from .core.legacy import LegacyChartProperties, to_legacy, to_normalized
from .core.validation import Validator, validate
from .io import load_store, save_store
from .store import PropertyStore, StoreSettings

__version__ = "0.1.0"

__all__ = [
    "PropertyStore",
    "StoreSettings",
    "Variant",
    "VariantFamily",
    "Validator",
    "LegacyChartProperties",
    "create_default_properties",
    "to_normalized",
    "to_legacy",
    "validate",
    "properties_by_group",
    "save_store",
    "load_store",
    "__version__",
]

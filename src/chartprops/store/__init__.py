"""
chartprops.store — explicit property store and its runtime settings.

## Public API
- PropertyStore — keyed collection of normalized records with advisory validation,
  copy-on-write path updates, legacy migration and group projection.
- StoreSettings — configuration (env > TOML > defaults).

## Examples
```python
from chartprops.store import PropertyStore, StoreSettings

store = PropertyStore(StoreSettings(violation_log_level="ERROR"))
store.create_default_properties("pie", "p1")
store.update_property("p1", "startAngle", 370)  # True; violation logged at ERROR
```
"""

from __future__ import annotations

from .config import StoreSettings
from .property_store import PropertyStore

__all__ = [
    "PropertyStore",
    "StoreSettings",
]

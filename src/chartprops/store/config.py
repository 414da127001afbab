"""
Configuration for the chartprops.store and chartprops.io modules.

Defines StoreSettings, a frozen dataclass carrying runtime configuration for the
property store (how validation violations are reported) and for persistence
(where snapshots are written and how they are formatted).

Source of truth
- chartprops.core.constants.DEFAULT_STORE_FILENAME, ENV_PREFIX

Import DAG discipline
- Depends only on stdlib and chartprops.core.constants.

Notes
- Validation is advisory: settings only control whether and how loudly violations
  are logged, never whether a write is committed.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from chartprops.core.constants import DEFAULT_STORE_FILENAME, ENV_PREFIX

__all__ = ["StoreSettings"]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class StoreSettings:
    """
    Runtime settings for PropertyStore and store persistence.

    Attributes:
        log_violations (bool): Log validator messages on every write.
        violation_log_level (str): Level name used for those messages ("WARNING" by default).
        check_schema (bool): Add the typed-schema rule to the store's validator.
        store_path (str): Default path of the persisted store document.
        indent (int): JSON indentation used when writing store documents (0 for compact).

    Examples:
        >>> from chartprops.store import StoreSettings
        >>> StoreSettings(violation_log_level="ERROR").log_level
        40
    """

    log_violations: bool = True
    violation_log_level: str = "WARNING"
    check_schema: bool = False
    store_path: str = DEFAULT_STORE_FILENAME
    indent: int = 2

    @property
    def log_level(self) -> int:
        """Numeric logging level for violation messages."""
        return logging.getLevelName(self.violation_log_level)

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: StoreSettings, cfg: dict[str, Any] | None) -> StoreSettings:
        """Apply a loose config mapping onto StoreSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        def _bool(v: Any) -> bool:
            if isinstance(v, bool):
                return v
            if isinstance(v, (int, float)):
                return bool(v)
            if isinstance(v, str):
                return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
            return False

        if "log_violations" in cfg:
            s = replace(s, log_violations=_bool(cfg["log_violations"]))

        if "violation_log_level" in cfg and isinstance(cfg["violation_log_level"], str):
            level = cfg["violation_log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, violation_log_level=level)

        if "check_schema" in cfg:
            s = replace(s, check_schema=_bool(cfg["check_schema"]))

        if "store_path" in cfg and isinstance(cfg["store_path"], str) and cfg["store_path"]:
            s = replace(s, store_path=cfg["store_path"])

        if "indent" in cfg:
            try:
                indent = int(cfg["indent"])
            except (TypeError, ValueError):
                indent = -1
            if indent >= 0:
                s = replace(s, indent=indent)

        return s

    @classmethod
    def from_env(cls, base: StoreSettings | None = None, prefix: str = ENV_PREFIX) -> StoreSettings:
        """
        Build StoreSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - CHARTPROPS_LOG_VIOLATIONS (1/0/true/false/yes/no/on/off)
            - CHARTPROPS_VIOLATION_LOG_LEVEL (DEBUG/INFO/WARNING/ERROR/CRITICAL)
            - CHARTPROPS_CHECK_SCHEMA
            - CHARTPROPS_STORE_PATH
            - CHARTPROPS_INDENT
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("log_violations", "violation_log_level", "check_schema", "store_path", "indent"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> StoreSettings:
        """
        Build StoreSettings from a TOML file.

        Search order when `path` is None:
            1) ./chartprops.toml (with either a [store] table or top-level keys)
            2) ./pyproject.toml under [tool.chartprops]

        Returns defaults if no file is present or none of them parses.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "chartprops.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("chartprops") if isinstance(tool, dict) else None
            elif isinstance(data.get("store"), dict):
                cfg = data["store"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> StoreSettings:
        """
        Load StoreSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (chartprops.toml, pyproject.toml).

        Returns:
            StoreSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s

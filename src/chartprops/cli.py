"""
Command-line entry point for the chart property engine.

Subcommands (JSON on stdout):
    defaults VARIANT [--id ID]              Default record for a variant.
    migrate LEGACY_JSON --variant V [--id]  Normalized record from a legacy bag file.
    to-legacy RECORD_JSON                   Legacy bag projected from a record file.
    validate STORE_JSON [--schema]          Violations per element of a saved store.
    groups VARIANT                          Editing groups shown for a variant.

Exit codes: 0 success, 1 when ``validate`` finds violations, 2 on an unknown
command or an unreadable input file. Every subcommand accepts ``--log-level``.
A path of "-" reads JSON from stdin.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from chartprops.core.defaults import create_default_properties
from chartprops.core.errors import VersionMismatch
from chartprops.core.grammar import relevant_groups
from chartprops.core.legacy import to_legacy, to_normalized
from chartprops.core.serde import json_loads_object
from chartprops.core.validation import Validator
from chartprops.io import IoError, load_store
from chartprops.store import StoreSettings

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level for diagnostics on stderr.",
    )


def _setup_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format=_LOG_FORMAT)


def _emit(obj: Any, settings: StoreSettings) -> None:
    print(json.dumps(obj, indent=settings.indent or None, ensure_ascii=False))


def _read_json_object(source: str) -> dict[str, Any]:
    """Read a JSON object from a file path, or from stdin for "-".

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not a JSON object.
    """
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    return json_loads_object(text)


def _cmd_defaults(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="defaults", description="Print the default record for a variant.")
    p.add_argument("variant", type=str, help="Variant tag (e.g. line, pie, metric, table).")
    p.add_argument("--id", dest="element_id", type=str, default="element-1", help="Element id.")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.log_level)

    settings = StoreSettings.load()
    _emit(create_default_properties(args.variant, args.element_id), settings)
    return 0


def _cmd_migrate(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="migrate", description="Convert a legacy property bag to a normalized record.")
    p.add_argument("legacy", type=str, help="Path to a legacy bag JSON file ('-' for stdin).")
    p.add_argument("--variant", type=str, required=True, help="Variant of the migrated element.")
    p.add_argument("--id", dest="element_id", type=str, default="element-1", help="Element id.")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.log_level)

    try:
        legacy = _read_json_object(args.legacy)
    except (OSError, ValueError) as exc:
        print(f"[ERROR] Cannot read legacy bag {args.legacy}: {exc}", file=sys.stderr)
        return 2
    settings = StoreSettings.load()
    _emit(to_normalized(legacy, args.variant, args.element_id), settings)
    return 0


def _cmd_to_legacy(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="to-legacy", description="Project a normalized record onto the legacy bag.")
    p.add_argument("record", type=str, help="Path to a record JSON file ('-' for stdin).")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.log_level)

    try:
        record = _read_json_object(args.record)
    except (OSError, ValueError) as exc:
        print(f"[ERROR] Cannot read record {args.record}: {exc}", file=sys.stderr)
        return 2
    settings = StoreSettings.load()
    _emit(dict(to_legacy(record)), settings)
    return 0


def _cmd_validate(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="validate", description="Validate every element of a saved store.")
    p.add_argument("store", type=str, help="Path to a store document written by save_store.")
    p.add_argument("--schema", action="store_true", help="Also report typed-schema mismatches.")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.log_level)

    settings = StoreSettings.load()
    validator = Validator(check_schema=args.schema or settings.check_schema)
    quiet = StoreSettings(log_violations=False, store_path=args.store, indent=settings.indent)
    try:
        store = load_store(args.store, settings=quiet)
    except (IoError, VersionMismatch) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    report: dict[str, list[str]] = {}
    for element_id in store.list_ids():
        violations = validator.validate(store.get(element_id))
        if violations:
            report[element_id] = violations
    _emit(report, settings)
    logger.info("Validated %d element(s); %d with violations", len(store), len(report))
    return 1 if report else 0


def _cmd_groups(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="groups", description="List the editing groups of a variant.")
    p.add_argument("variant", type=str, help="Variant tag.")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.log_level)

    settings = StoreSettings.load()
    _emit(relevant_groups(args.variant), settings)
    return 0


_COMMANDS = {
    "defaults": _cmd_defaults,
    "migrate": _cmd_migrate,
    "to-legacy": _cmd_to_legacy,
    "validate": _cmd_validate,
    "groups": _cmd_groups,
}


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="chartprops", description="Chart property defaults, migration and validation.")
    sub = p.add_subparsers(dest="cmd", required=True)
    for name in _COMMANDS:
        sub.add_parser(name)
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    handler = _COMMANDS.get(cmd)
    if handler is None:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    else:
        code = handler(rest)
    raise SystemExit(code)


if __name__ == "__main__":
    main()

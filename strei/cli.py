"""Command line interface for the strei configuration store."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .controller import open_config
from .home import ensure_home
from .log_utils import setup_logging
from .settings import ConfigError, ConfigStore, serialize


def _cmd_path(store: ConfigStore, args: argparse.Namespace) -> int:
    print(store.path())
    return 0


def _cmd_show(store: ConfigStore, args: argparse.Namespace) -> int:
    sys.stdout.write(serialize(store.snapshot))
    return 0


def _cmd_stats(store: ConfigStore, args: argparse.Namespace) -> int:
    print(f"{store.section_count} sections, {store.key_count} keys in {store.path()}")
    return 0


def _cmd_get(store: ConfigStore, args: argparse.Namespace) -> int:
    value = store.get(args.section, args.key)
    if value is None:
        print(f"{args.section}/{args.key} is not set", file=sys.stderr)
        return 1
    print(value)
    return 0


def _cmd_set(store: ConfigStore, args: argparse.Namespace) -> int:
    store.set(args.section, args.key, args.value)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="strei-config", description="Inspect and edit the strei configuration file.")
    ap.add_argument("--home", type=str, default=None, help="Application home directory (default: ~/.strei)")
    ap.add_argument("--debug", action="store_true", help="Log store operations to the console and log file")

    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("path", help="Print the configuration file path").set_defaults(func=_cmd_path)
    sub.add_parser("show", help="Print the configuration as stored").set_defaults(func=_cmd_show)
    sub.add_parser("stats", help="Print section and key counts").set_defaults(func=_cmd_stats)

    p_get = sub.add_parser("get", help="Print one value")
    p_get.add_argument("section")
    p_get.add_argument("key")
    p_get.set_defaults(func=_cmd_get)

    p_set = sub.add_parser("set", help="Change an existing value")
    p_set.add_argument("section")
    p_set.add_argument("key")
    p_set.add_argument("value")
    p_set.set_defaults(func=_cmd_set)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    home = Path(args.home) if args.home else None
    if args.debug:
        setup_logging(ensure_home(home).log_path, debug=True)

    try:
        store = open_config(home)
        return int(args.func(store, args))
    except (ConfigError, OSError, ValueError) as e:
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())

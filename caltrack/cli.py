# -*- coding: utf-8 -*-
"""
CalTrack command line.

Usage:
    python -m caltrack.cli init-db [--db-path PATH]
    python -m caltrack.cli serve
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import settings


def cmd_init_db(args: argparse.Namespace) -> int:
    """Create the schema and seed the activity catalog."""
    from .app_db import init_app_db

    db_path = Path(args.db_path).expanduser() if args.db_path else settings.app_db_path
    init_app_db(db_path)
    print(f"Database initialized at {db_path}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:  # noqa: ARG001
    from .api import run

    run()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CalTrack API tools")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    init_parser = subparsers.add_parser("init-db", help="Create database tables")
    init_parser.add_argument("--db-path", help="SQLite file (default: CALTRACK_DB_PATH)")

    subparsers.add_parser("serve", help="Run the API server")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "init-db": cmd_init_db,
        "serve": cmd_serve,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())

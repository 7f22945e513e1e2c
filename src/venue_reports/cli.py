# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for Venue Reports.

This module wires together the main building blocks of Venue Reports:

- global configuration (database, report options, display, logging),
- ledger import & database initialization,
- the report service (period reports and wedding detail reports),
- view helpers (JSON, text tables and CSV export).

The CLI is intentionally thin: it does not implement any report arithmetic
itself. It parses arguments, calls the services and renders their payloads.


Commands
--------

    init-db
        Create the SQLite database and its schema (idempotent).

    import TABLE CSV_PATH
        Read a CSV file for one ledger table (wedding, package,
        table_package, ...) and insert its rows.

    report TYPE [--granularity day|month|year] [--value V] [--as-of DATE]
        Compute one period report: sales, payments, financial, cash_flow,
        ar_aging, menu_usage, inventory_usage or ingredient_usage.
        Without --value the report covers all time.

    wedding WEDDING_ID {menu-dietary,inventory,seating}
        Compute a detail report for a single wedding.


Display modes
-------------

    json   (default) the payload as indented JSON on stdout,
    table  every payload section as a text table,
    csv    one timestamped CSV file per section in the output directory,
    both   table + csv.


Exit status
-----------

    0  success
    1  storage failure (the database could not be read or written)
    2  invalid arguments, configuration or period value


Examples
--------

    python -m venue_reports.cli init-db
    python -m venue_reports.cli import wedding data/weddings.csv
    python -m venue_reports.cli report sales --granularity month --value 2024-03
    python -m venue_reports.cli report ar_aging --granularity year --value 2024 \\
        --as-of 2024-04-20 --display-mode table
    python -m venue_reports.cli wedding 12 seating
"""

import argparse
import logging
import sqlite3
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional

from . import __version__
from .config import DISPLAY_MODES, LOG_LEVELS, AppConfig, load_app_config
from .db import (
    TABLE_COLUMNS,
    UnsupportedEngineError,
    ensure_supported_engine,
    import_rows,
    init_database,
)
from .io import read_ledger_csv
from .periods import GRANULARITIES
from .reports_service import (
    REPORT_TYPES,
    ReportRequest,
    generate_report,
    generate_wedding_report,
)
from .views import render_tables, report_to_json, write_report_csv

logger = logging.getLogger(__name__)


def _add_display_options(sp: argparse.ArgumentParser) -> None:
    sp.add_argument(
        "--display-mode",
        dest="display_mode",
        choices=list(DISPLAY_MODES),
        help="Output mode. Overrides [display].mode from the configuration.",
    )
    sp.add_argument(
        "--output",
        dest="output_dir",
        help=(
            "Directory for CSV output (csv / both modes). "
            "Overrides [display].output_dir from the configuration."
        ),
    )


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="python -m venue_reports.cli",
        description=(
            "Venue Reports - Temporal reporting engine for wedding venue "
            "management. Aggregates weddings, packages, menus and equipment "
            "into sales, financial, cash-flow, receivables and usage reports."
        ),
    )

    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of venue_reports and exit.",
    )
    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the main TOML configuration file. If omitted, "
            "'venue_reports_config.toml' in the current directory is used "
            "when present."
        ),
    )
    ap.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=list(LOG_LEVELS),
        help="Logging level. Overrides [logging].level from the configuration.",
    )

    subparsers = ap.add_subparsers(dest="command")

    subparsers.add_parser(
        "init-db",
        help="Create the database file and schema if needed.",
    )

    sp_import = subparsers.add_parser(
        "import",
        help="Import the rows of one ledger table from a CSV file.",
    )
    sp_import.add_argument("table", choices=sorted(TABLE_COLUMNS))
    sp_import.add_argument("csv_path", metavar="CSV_PATH")

    sp_report = subparsers.add_parser(
        "report",
        help="Compute a period report.",
    )
    sp_report.add_argument(
        "report_type",
        metavar="TYPE",
        help=f"Report type: {', '.join(REPORT_TYPES)}.",
    )
    sp_report.add_argument(
        "--granularity",
        choices=list(GRANULARITIES),
        help="Period granularity. Defaults to [reports].default_granularity.",
    )
    sp_report.add_argument(
        "--value",
        help=(
            "Period value matching the granularity: YYYY-MM-DD, YYYY-MM or "
            "YYYY. If omitted, the report covers all time."
        ),
    )
    sp_report.add_argument(
        "--as-of",
        dest="as_of",
        help="Reference date for receivables aging (YYYY-MM-DD). Defaults to today.",
    )
    _add_display_options(sp_report)

    sp_wedding = subparsers.add_parser(
        "wedding",
        help="Compute a detail report for one wedding.",
    )
    sp_wedding.add_argument("wedding_id", type=int, metavar="WEDDING_ID")
    sp_wedding.add_argument(
        "kind", choices=["menu-dietary", "inventory", "seating"]
    )
    _add_display_options(sp_wedding)

    return ap


def _parse_optional_date(value: Optional[str]) -> Optional[date]:
    """Parse an optional YYYY-MM-DD string (ValueError if malformed)."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD.") from exc


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _render(payload: dict[str, Any], args: argparse.Namespace, config: AppConfig) -> None:
    display_mode = args.display_mode or config.display.mode

    if display_mode == "json":
        print(report_to_json(payload))
        return

    if display_mode in {"table", "both"}:
        print(render_tables(payload))

    if display_mode in {"csv", "both"}:
        output_dir = Path(args.output_dir) if args.output_dir else config.display.output_dir
        for path in write_report_csv(payload, output_dir):
            print(f"Wrote {path}")


def _handle_import(
    args: argparse.Namespace, config: AppConfig, parser: argparse.ArgumentParser
) -> None:
    csv_path = Path(args.csv_path)
    if not csv_path.is_file():
        parser.error(f"CSV file not found: {csv_path}")

    try:
        df = read_ledger_csv(csv_path, args.table)
    except ValueError as exc:
        parser.error(str(exc))

    print(f"Importing {args.table} rows from {csv_path} into the database...")
    count = import_rows(df, config.database, args.table)
    print(f"Imported {count} row(s) into {args.table}.")


def _handle_report(
    args: argparse.Namespace, config: AppConfig, parser: argparse.ArgumentParser
) -> None:
    try:
        request = ReportRequest(
            report_type=args.report_type,
            granularity=args.granularity,
            value=args.value,
            as_of=_parse_optional_date(args.as_of),
        )
        payload = generate_report(config, request)
    except ValueError as exc:
        parser.error(str(exc))

    _render(payload, args, config)


def _handle_wedding(
    args: argparse.Namespace, config: AppConfig, parser: argparse.ArgumentParser
) -> None:
    try:
        payload = generate_wedding_report(config, args.wedding_id, args.kind)
    except ValueError as exc:
        parser.error(str(exc))

    _render(payload, args, config)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the Venue Reports CLI.

    Parses command-line arguments, loads the configuration, configures
    logging and dispatches to the selected command. Validation errors exit
    with status 2 (through parser.error), storage errors with status 1.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --version: short-circuit and exit early.
    if args.version:
        print(f"venue_reports version {__version__}")
        return

    if not args.command:
        parser.error(
            "No command specified. Available commands are: "
            "'init-db', 'import', 'report', 'wedding'."
        )

    try:
        config = load_app_config(args.config_path)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    _configure_logging(args.log_level or config.log_level)

    try:
        ensure_supported_engine(config.database)
        if args.command == "init-db":
            init_database(config.database)
            print(f"Database ready at {config.database.path}")
        elif args.command == "import":
            _handle_import(args, config, parser)
        elif args.command == "report":
            _handle_report(args, config, parser)
        else:
            _handle_wedding(args, config, parser)
    except (sqlite3.Error, UnsupportedEngineError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Database error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()

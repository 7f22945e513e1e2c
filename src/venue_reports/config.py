# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for Venue Reports.

This module is responsible for:
- loading the application configuration from a TOML file,
- applying defaults for every missing section or key,
- exposing typed dataclasses used by the rest of the application.
"""

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .aging import DUE_DAYS_BEFORE_EVENT
from .balances import PARTIAL_PAYMENT_RATIO
from .db import DatabaseConfig
from .periods import GRANULARITIES
from .reports import DEFAULT_TOP_N

DEFAULT_CONFIG_FILE = "venue_reports_config.toml"
DEFAULT_DB_PATH = "data/db/venue.sqlite"
DEFAULT_OUTPUT_DIR = "data/output"

DISPLAY_MODES: tuple[str, ...] = ("json", "table", "csv", "both")
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ReportsConfig:
    """
    Options shared by all report assemblers.

    Attributes
    ----------
    default_granularity:
        Granularity used when a request does not specify one.
    top_n:
        Number of entries in the sales rankings.
    partial_payment_ratio:
        Share of the invoice assumed collected for "partial" weddings.
    due_days_before_event:
        Invoices are due this many days before the wedding.
    max_workers:
        Number of threads used to fetch ledger frames (1 = sequential).
    """

    default_granularity: str = "month"
    top_n: int = DEFAULT_TOP_N
    partial_payment_ratio: float = PARTIAL_PAYMENT_RATIO
    due_days_before_event: int = DUE_DAYS_BEFORE_EVENT
    max_workers: int = 1


@dataclass(frozen=True)
class DisplayConfig:
    """CLI output options."""

    mode: str = "json"
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for Venue Reports.

    This aggregates:
    - the database configuration (where the venue ledger is stored),
    - the reporting options,
    - display options for the CLI,
    - the logging level.
    """

    database: DatabaseConfig
    reports: ReportsConfig = field(default_factory=ReportsConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    log_level: str = "WARNING"


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Failed to parse TOML config file: {path}") from exc


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"Config section [{name}] must be a table.")
    return section


def _as_int(section: Mapping[str, Any], key: str, default: int, name: str) -> int:
    raw = section.get(key, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Invalid value for '{name}.{key}' in the configuration. "
            "Expected an integer."
        ) from exc


def _parse_reports(section: Mapping[str, Any]) -> ReportsConfig:
    granularity = str(section.get("default_granularity", "month")).lower()
    if granularity not in GRANULARITIES:
        raise ValueError(
            f"Invalid reports.default_granularity '{granularity}', "
            f"expected one of {', '.join(GRANULARITIES)}."
        )

    try:
        ratio = float(section.get("partial_payment_ratio", PARTIAL_PAYMENT_RATIO))
    except (TypeError, ValueError) as exc:
        raise ValueError(
            "Invalid value for 'reports.partial_payment_ratio', expected a number."
        ) from exc
    if not 0.0 <= ratio <= 1.0:
        raise ValueError("reports.partial_payment_ratio must be between 0 and 1.")

    top_n = _as_int(section, "top_n", DEFAULT_TOP_N, "reports")
    if top_n < 0:
        raise ValueError("reports.top_n cannot be negative.")

    max_workers = _as_int(section, "max_workers", 1, "reports")
    if max_workers < 1:
        raise ValueError("reports.max_workers must be at least 1.")

    return ReportsConfig(
        default_granularity=granularity,
        top_n=top_n,
        partial_payment_ratio=ratio,
        due_days_before_event=_as_int(
            section, "due_days_before_event", DUE_DAYS_BEFORE_EVENT, "reports"
        ),
        max_workers=max_workers,
    )


def _parse_display(section: Mapping[str, Any], base_dir: Path) -> DisplayConfig:
    mode = str(section.get("mode", "json")).lower()
    if mode not in DISPLAY_MODES:
        raise ValueError(
            f"Invalid display.mode '{mode}', expected one of {', '.join(DISPLAY_MODES)}."
        )
    output_dir = (base_dir / str(section.get("output_dir", DEFAULT_OUTPUT_DIR))).resolve()
    return DisplayConfig(mode=mode, output_dir=output_dir)


def _parse_log_level(section: Mapping[str, Any]) -> str:
    level = str(section.get("level", "WARNING")).upper()
    if level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid logging.level '{level}', expected one of {', '.join(LOG_LEVELS)}."
        )
    return level


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the Venue Reports application configuration from a TOML file.

    Expected top-level sections in the TOML file
    --------------------------------------------
    [database]
        Database engine ("sqlite") and the SQLite file path.

    [reports]
        default_granularity, top_n, partial_payment_ratio,
        due_days_before_event, max_workers.

    [display]
        CLI output mode (json | table | csv | both) and CSV output directory.

    [logging]
        Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Notes
    -----
    - Every section is optional and falls back to its defaults.
    - When `config_path` is None and ./venue_reports_config.toml does not
      exist, the defaults are used. An explicit path that does not exist
      raises FileNotFoundError.
    - All file paths in the TOML are resolved relative to the directory of
      the TOML file itself.

    Parameters
    ----------
    config_path : str, optional
        Path to the TOML configuration file.

    Returns
    -------
    AppConfig
        Parsed and validated application configuration.
    """
    if config_path is None:
        config_file = Path(DEFAULT_CONFIG_FILE).resolve()
        raw = _load_toml(config_file) if config_file.is_file() else {}
    else:
        config_file = Path(config_path).resolve()
        raw = _load_toml(config_file)
    base_dir = config_file.parent

    # 1) Database section
    database_section = _section(raw, "database")
    db_engine = str(database_section.get("engine") or "sqlite")
    db_path_raw = database_section.get("path") or DEFAULT_DB_PATH
    db_path = (base_dir / str(db_path_raw)).resolve()

    # 2) Reports, display and logging
    return AppConfig(
        database=DatabaseConfig(engine=db_engine, path=db_path),
        reports=_parse_reports(_section(raw, "reports")),
        display=_parse_display(_section(raw, "display"), base_dir),
        log_level=_parse_log_level(_section(raw, "logging")),
    )

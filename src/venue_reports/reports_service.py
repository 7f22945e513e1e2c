# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.


"""
High-level report services.

This module sits between:
- the Ledger Accessors in `db.py`,
- the pure assemblers in `reports.py`, and
- user-facing layers such as the CLI.

Workflow of generate_report()
-----------------------------
1. Validate the report type and the (granularity, value) pair. Invalid input
   raises ValueError / PeriodError before the database is touched.
2. Resolve the Period and its previous() period.
3. Fetch the ledger frames the report needs, for both periods. Fetching is
   sequential by default; with `reports.max_workers > 1` the accessor calls
   run in a ThreadPoolExecutor (each call opens its own connection).
4. Hand the frames to the report assembler and return its payload.

A report is all-or-nothing: any sqlite3.Error raised by an accessor is
logged and propagated, no partial payload is ever returned. The service is
stateless and caches nothing between requests.
"""

import logging
import sqlite3
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

import pandas as pd

from .config import AppConfig
from .db import (
    DatabaseConfig,
    load_ingredient_consumption,
    load_inventory_allocations,
    load_menu_item_assignments,
    load_package_assignments,
    load_wedding_allocations,
    load_wedding_dishes,
    load_wedding_guest_restrictions,
    load_wedding_guests,
    load_wedding_invoices,
    load_wedding_menu_restrictions,
    load_wedding_seating,
)
from .periods import Period, resolve
from .reports import (
    Ledger,
    ar_aging_report,
    cash_flow_report,
    financial_report,
    ingredient_usage_report,
    inventory_usage_report,
    menu_usage_report,
    payments_report,
    sales_report,
    wedding_inventory_report,
    wedding_menu_dietary_report,
    wedding_seating_report,
)

logger = logging.getLogger(__name__)

REPORT_TYPES: tuple[str, ...] = (
    "sales",
    "payments",
    "financial",
    "cash_flow",
    "ar_aging",
    "menu_usage",
    "inventory_usage",
    "ingredient_usage",
)

WEDDING_REPORT_KINDS: tuple[str, ...] = ("menu_dietary", "inventory", "seating")

# Ledger frames (fields of reports.Ledger) each report type reads.
REPORT_LEDGERS: dict[str, tuple[str, ...]] = {
    "sales": ("invoices", "assignments", "menu_items"),
    "payments": ("invoices", "assignments"),
    "financial": ("invoices", "assignments", "allocations"),
    "cash_flow": ("invoices", "assignments", "allocations"),
    "ar_aging": ("invoices", "assignments"),
    "menu_usage": ("menu_items",),
    "inventory_usage": ("allocations",),
    "ingredient_usage": ("ingredients",),
}


@dataclass(frozen=True)
class ReportRequest:
    """
    A request for one period report.

    Attributes
    ----------
    report_type:
        One of REPORT_TYPES.
    granularity:
        "day", "month" or "year". None means the configured default.
    value:
        Period value matching the granularity; None or "" means all time.
    as_of:
        Reference date for receivables aging. None means today.
    """

    report_type: str
    granularity: Optional[str] = None
    value: Optional[str] = None
    as_of: Optional[date] = None


def _ledger_loaders() -> dict[str, Callable[[DatabaseConfig, Period], pd.DataFrame]]:
    return {
        "invoices": load_wedding_invoices,
        "assignments": load_package_assignments,
        "menu_items": load_menu_item_assignments,
        "allocations": load_inventory_allocations,
        "ingredients": load_ingredient_consumption,
    }


def _fetch_ledgers(
    cfg: DatabaseConfig,
    parts: tuple[str, ...],
    periods: list[Period],
    max_workers: int = 1,
) -> list[Ledger]:
    """
    Load the requested ledger frames for each period.

    Returns one Ledger per period, in the same order. Frames outside `parts`
    are left empty.
    """
    loaders = _ledger_loaders()
    jobs = [(index, part) for index in range(len(periods)) for part in parts]
    frames: list[dict[str, pd.DataFrame]] = [{} for _ in periods]

    if max_workers > 1 and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = {
                job: pool.submit(loaders[job[1]], cfg, periods[job[0]]) for job in jobs
            }
            for (index, part), future in futures.items():
                frames[index][part] = future.result()
    else:
        for index, part in jobs:
            frames[index][part] = loaders[part](cfg, periods[index])

    return [Ledger(**period_frames) for period_frames in frames]


def _assemble(
    app_config: AppConfig,
    report_type: str,
    current: Ledger,
    previous: Optional[Ledger],
    period: Period,
    as_of: date,
) -> dict[str, Any]:
    options = app_config.reports

    if report_type == "sales":
        return sales_report(current, previous, period, top_n=options.top_n)
    if report_type == "payments":
        return payments_report(
            current, previous, period, partial_ratio=options.partial_payment_ratio
        )
    if report_type == "financial":
        return financial_report(current, previous, period)
    if report_type == "cash_flow":
        return cash_flow_report(
            current, previous, period, partial_ratio=options.partial_payment_ratio
        )
    if report_type == "ar_aging":
        return ar_aging_report(
            current,
            previous,
            period,
            as_of=as_of,
            partial_ratio=options.partial_payment_ratio,
            due_days=options.due_days_before_event,
        )
    if report_type == "menu_usage":
        return menu_usage_report(current, previous, period)
    if report_type == "inventory_usage":
        return inventory_usage_report(current, previous, period)
    return ingredient_usage_report(current, previous, period)


def normalize_report_type(report_type: str) -> str:
    """Accept 'cash-flow' as well as 'cash_flow'; raise ValueError if unknown."""
    normalized = str(report_type).strip().lower().replace("-", "_")
    if normalized not in REPORT_TYPES:
        raise ValueError(
            f"Unknown report type: {report_type!r}. "
            f"Expected one of: {', '.join(REPORT_TYPES)}."
        )
    return normalized


def generate_report(
    app_config: AppConfig,
    request: ReportRequest,
    today: Optional[date] = None,
) -> dict[str, Any]:
    """
    Generate one period report.

    Parameters
    ----------
    app_config:
        Loaded application configuration (database and report options).
    request:
        The report type and period to compute.
    today:
        Fallback `as_of` date for aging when the request has none. The
        wall-clock date is only read when both are None.

    Raises
    ------
    ValueError
        Unknown report type.
    PeriodError
        Malformed granularity / value.
    sqlite3.Error
        Any storage failure while loading ledger rows.
    """
    report_type = normalize_report_type(request.report_type)
    granularity = request.granularity or app_config.reports.default_granularity
    period = resolve(granularity, request.value)
    prev_period = period.previous()
    as_of = request.as_of or today or date.today()

    periods = [period] if prev_period is None else [period, prev_period]
    logger.info(
        "Generating %s report for %s (previous: %s)",
        report_type,
        period.label,
        prev_period.label if prev_period is not None else "none",
    )

    try:
        ledgers = _fetch_ledgers(
            app_config.database,
            REPORT_LEDGERS[report_type],
            periods,
            app_config.reports.max_workers,
        )
    except sqlite3.Error:
        logger.error(
            "Storage failure while generating %s report for %s",
            report_type,
            period.label,
            exc_info=True,
        )
        raise

    current = ledgers[0]
    previous = ledgers[1] if len(ledgers) > 1 else None
    return _assemble(app_config, report_type, current, previous, period, as_of)


def generate_wedding_report(
    app_config: AppConfig, wedding_id: int, kind: str
) -> dict[str, Any]:
    """
    Generate a wedding detail report: "menu_dietary", "inventory" or "seating".

    Unknown wedding ids produce empty reports.
    """
    normalized = str(kind).strip().lower().replace("-", "_")
    if normalized not in WEDDING_REPORT_KINDS:
        raise ValueError(
            f"Unknown wedding report: {kind!r}. "
            f"Expected one of: {', '.join(WEDDING_REPORT_KINDS)}."
        )
    try:
        wedding_id = int(wedding_id)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid wedding id: {wedding_id!r}.") from exc

    cfg = app_config.database
    logger.info("Generating %s report for wedding %s", normalized, wedding_id)

    try:
        if normalized == "menu_dietary":
            return wedding_menu_dietary_report(
                wedding_id,
                load_wedding_dishes(cfg, wedding_id),
                load_wedding_menu_restrictions(cfg, wedding_id),
                load_wedding_guest_restrictions(cfg, wedding_id),
            )
        if normalized == "inventory":
            return wedding_inventory_report(
                wedding_id, load_wedding_allocations(cfg, wedding_id)
            )
        return wedding_seating_report(
            wedding_id,
            load_wedding_seating(cfg, wedding_id),
            load_wedding_guests(cfg, wedding_id),
        )
    except sqlite3.Error:
        logger.error(
            "Storage failure while generating %s report for wedding %s",
            normalized,
            wedding_id,
            exc_info=True,
        )
        raise

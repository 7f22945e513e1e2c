# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Monetary aggregation engine for Venue Reports.

This module is the single place where report arithmetic lives. Every report
assembler (reports.py) composes the primitives below instead of computing
revenue, cost or margin formulas on its own, so that two reports showing the
same figure (e.g. package revenue in the financial statement and in the
cash-flow statement) can never disagree.

1. Null-safe primitives
   ---------------------
   - numeric_column(rows, field) : column coerced to float, missing -> 0.0
   - sum_column / avg_column / count_rows
   - percent_change(current, previous)
   - margin / margin_percent / safe_ratio

   Missing or non-numeric values are treated as 0 before summing. Ratios
   never divide by zero: they resolve to 0 instead of NaN or infinity.

2. Shared summaries
   -----------------
   - summarize_revenue(invoices, assignments, allocations)
       -> RevenueSummary (package revenue, equipment revenue, package costs,
          equipment costs, gross / net profit)
   - usage_ranking(rows, key_columns, ...)
       -> "top N" style rankings shared by sales and usage reports.

3. Rounding
   ---------
   Amounts are kept at full precision while aggregating. Rounding to two
   decimals (round_currency) happens once, when an assembler shapes its
   payload, so that totals do not accumulate rounding drift.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

import numpy as np
import pandas as pd

CURRENCY_DECIMALS = 2


def numeric_column(rows: pd.DataFrame, field: str) -> pd.Series:
    """Return `rows[field]` as floats, with missing / invalid values set to 0.0."""
    if rows.empty or field not in rows.columns:
        return pd.Series(0.0, index=rows.index, dtype="float64")
    return pd.to_numeric(rows[field], errors="coerce").fillna(0.0).astype("float64")


def sum_column(rows: pd.DataFrame, field: str) -> float:
    """Null-safe sum of a column (0.0 for an empty frame)."""
    return float(numeric_column(rows, field).sum())


def avg_column(rows: pd.DataFrame, field: str) -> float:
    """Null-safe average of a column (0.0 for an empty frame)."""
    if rows.empty:
        return 0.0
    return float(numeric_column(rows, field).mean())


def count_rows(rows: pd.DataFrame) -> int:
    return int(len(rows))


def to_number(value: Any) -> float:
    """Convert a scalar to float, treating None / NaN / garbage as 0.0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def ratio_percent(part: float, whole: float) -> float:
    """`part` as a percentage of `whole` (0.0 when `whole` is 0)."""
    return safe_ratio(to_number(part), to_number(whole)) * 100


def percent_change(current: float, previous: float) -> float:
    """
    Percentage change from `previous` to `current`.

    Without a baseline (previous == 0, including 0 -> 0) the change is
    reported as 0.0 rather than infinity or NaN.
    """
    current = to_number(current)
    previous = to_number(previous)
    if previous == 0:
        return 0.0
    return ((current - previous) / previous) * 100


def margin(selling_price: float, cost: float) -> float:
    return to_number(selling_price) - to_number(cost)


def margin_percent(selling_price: float, cost: float) -> float:
    """Margin as a percentage of the selling price (0.0 if nothing was sold)."""
    selling_price = to_number(selling_price)
    if selling_price <= 0:
        return 0.0
    return (margin(selling_price, cost) / selling_price) * 100


def round_currency(value: Any) -> float:
    """Round a monetary value (or a percentage) for the report boundary."""
    rounded = round(to_number(value), CURRENCY_DECIMALS)
    # Normalize -0.0 so that identical inputs serialize identically.
    return rounded + 0.0


def plain_value(value: Any) -> Any:
    """
    Convert a pandas / numpy scalar into a JSON-friendly Python value.

    numpy numbers become int / float, NaN / NaT become None and dates become
    ISO strings.
    """
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def frame_records(rows: pd.DataFrame, columns: list[str]) -> list[dict[str, Any]]:
    """Return `rows[columns]` as a list of plain dicts (see plain_value)."""
    if rows.empty:
        return []
    present = [c for c in columns if c in rows.columns]
    return [
        {key: plain_value(val) for key, val in record.items()}
        for record in rows[present].to_dict(orient="records")
    ]


# ---------------------------------------------------------------------------
# Shared summaries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RevenueSummary:
    """
    Revenue and cost figures for one period, at full precision.

    Attributes
    ----------
    package_revenue:
        Sum of selling prices over all package assignments.
    equipment_revenue:
        Sum of the equipment rental billed on the weddings' invoices.
    package_costs:
        Sum of package unit costs over all package assignments (COGS).
    equipment_costs:
        Sum of quantity_used * unit_rental_cost over inventory allocations.
    weddings_with_packages:
        Number of distinct weddings with at least one package assignment.
    table_assignments:
        Number of distinct seating tables with a package assignment.
    """

    package_revenue: float
    equipment_revenue: float
    package_costs: float
    equipment_costs: float
    weddings_with_packages: int
    table_assignments: int

    @property
    def total_revenue(self) -> float:
        return self.package_revenue + self.equipment_revenue

    @property
    def gross_profit(self) -> float:
        return self.total_revenue - self.package_costs

    @property
    def operating_costs(self) -> float:
        return self.equipment_costs

    @property
    def net_profit(self) -> float:
        return self.gross_profit - self.operating_costs


EMPTY_REVENUE = RevenueSummary(
    package_revenue=0.0,
    equipment_revenue=0.0,
    package_costs=0.0,
    equipment_costs=0.0,
    weddings_with_packages=0,
    table_assignments=0,
)


def allocation_values(allocations: pd.DataFrame) -> pd.Series:
    """Per-allocation rental value: quantity_used * unit_rental_cost."""
    return numeric_column(allocations, "quantity_used") * numeric_column(
        allocations, "unit_rental_cost"
    )


def summarize_revenue(
    invoices: pd.DataFrame,
    assignments: pd.DataFrame,
    allocations: pd.DataFrame,
) -> RevenueSummary:
    """
    Build the RevenueSummary shared by the financial and cash-flow reports.

    Parameters
    ----------
    invoices:
        Wedding invoice lines (needs `equipment_rental_cost`).
    assignments:
        Package assignments (needs `selling_price`, `unit_cost`, `wedding_id`,
        `table_id`).
    allocations:
        Inventory allocations (needs `quantity_used`, `unit_rental_cost`).
    """
    weddings = 0
    tables = 0
    if not assignments.empty:
        weddings = int(assignments["wedding_id"].nunique())
        tables = int(assignments["table_id"].nunique())

    return RevenueSummary(
        package_revenue=sum_column(assignments, "selling_price"),
        equipment_revenue=sum_column(invoices, "equipment_rental_cost"),
        package_costs=sum_column(assignments, "unit_cost"),
        equipment_costs=float(allocation_values(allocations).sum()),
        weddings_with_packages=weddings,
        table_assignments=tables,
    )


def usage_ranking(
    rows: pd.DataFrame,
    key_columns: list[str],
    *,
    weight_column: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[dict[str, Any]]:
    """
    Rank entities by usage.

    Usage is the number of rows per key, or the sum of `weight_column` when
    given (e.g. menu-item quantities). Ties are broken by the first key
    column, ascending, so the ranking is deterministic.

    Returns a list of dicts with the key columns plus `usage_count`.
    """
    if rows.empty:
        return []

    frame = rows[key_columns].copy()
    if weight_column is None:
        frame["usage_count"] = 1.0
    else:
        frame["usage_count"] = numeric_column(rows, weight_column)

    grouped = (
        frame.groupby(key_columns, as_index=False, dropna=False)["usage_count"]
        .sum()
        .sort_values(
            ["usage_count", key_columns[0]], ascending=[False, True], kind="stable"
        )
    )
    if limit is not None:
        grouped = grouped.head(limit)

    ranking: list[dict[str, Any]] = []
    for record in grouped.to_dict(orient="records"):
        item = {key: plain_value(val) for key, val in record.items()}
        usage = to_number(item["usage_count"])
        item["usage_count"] = int(usage) if usage.is_integer() else usage
        ranking.append(item)
    return ranking

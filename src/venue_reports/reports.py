# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Report assemblers for Venue Reports.

Each assembler is a pure function of already-loaded ledger rows:

    assembler(current: Ledger, previous: Ledger | None, period: Period, ...)
        -> dict (JSON-serializable payload)

Assemblers never touch the database and never re-derive arithmetic: revenue,
costs, balances and aging all come from engine.py, balances.py and aging.py.
When there is no previous period (all-time reports), the comparison block is
built from an empty Ledger, i.e. a flat zero baseline.

Period reports
--------------
- sales_report             income totals, top packages / menu items
- payments_report          per-wedding collected / due amounts
- financial_report         income statement (revenue, COGS, profits)
- cash_flow_report         operating cash received and paid
- ar_aging_report          outstanding invoices by days overdue
- menu_usage_report        servings, cost and revenue per menu item
- inventory_usage_report   equipment usage and rental value per item
- ingredient_usage_report  ingredient consumption vs stock

Wedding detail reports
----------------------
- wedding_menu_dietary_report
- wedding_inventory_report
- wedding_seating_report

Payload conventions: every period report starts with `report_type`,
`period` (the granularity), `value` and `previous_value`. Monetary amounts
and percentages are floats rounded to two decimals.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

import pandas as pd

from .aging import DUE_DAYS_BEFORE_EVENT, build_aging_buckets, classify
from .balances import PARTIAL_PAYMENT_RATIO, PAYMENT_STATUSES, compute_invoice_balances
from .db import (
    INGREDIENT_CONSUMPTION_COLUMNS,
    INVENTORY_ALLOCATION_COLUMNS,
    INVOICE_COLUMNS,
    MENU_ITEM_ASSIGNMENT_COLUMNS,
    PACKAGE_ASSIGNMENT_COLUMNS,
)
from .engine import (
    EMPTY_REVENUE,
    RevenueSummary,
    allocation_values,
    count_rows,
    frame_records,
    margin,
    margin_percent,
    numeric_column,
    percent_change,
    plain_value,
    ratio_percent,
    round_currency,
    safe_ratio,
    sum_column,
    summarize_revenue,
    to_number,
    usage_ranking,
)
from .periods import Period

DEFAULT_TOP_N = 10


def _empty(columns: list[str]) -> pd.DataFrame:
    return pd.DataFrame(columns=columns)


@dataclass(frozen=True)
class Ledger:
    """
    Ledger rows loaded for one period.

    Frames a report does not need may be left empty.
    """

    invoices: pd.DataFrame = field(default_factory=lambda: _empty(INVOICE_COLUMNS))
    assignments: pd.DataFrame = field(
        default_factory=lambda: _empty(PACKAGE_ASSIGNMENT_COLUMNS)
    )
    menu_items: pd.DataFrame = field(
        default_factory=lambda: _empty(MENU_ITEM_ASSIGNMENT_COLUMNS)
    )
    allocations: pd.DataFrame = field(
        default_factory=lambda: _empty(INVENTORY_ALLOCATION_COLUMNS)
    )
    ingredients: pd.DataFrame = field(
        default_factory=lambda: _empty(INGREDIENT_CONSUMPTION_COLUMNS)
    )


def _header(report_type: str, period: Period) -> dict[str, Any]:
    prev = period.previous()
    return {
        "report_type": report_type,
        "period": period.granularity,
        "value": period.value,
        "previous_value": prev.value if prev is not None else None,
    }


def _baseline(previous: Optional[Ledger]) -> Ledger:
    return previous if previous is not None else Ledger()


def _round_fields(record: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    for name in fields:
        if name in record:
            record[name] = round_currency(record[name])
    return record


def needs_attention(item_condition: Any, quantity_available: Any) -> bool:
    """An inventory item needs attention when it is under repair or out of stock."""
    condition = plain_value(item_condition)
    if isinstance(condition, str) and "repair" in condition.lower():
        return True
    available = plain_value(quantity_available)
    return available is not None and to_number(available) <= 0


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------


def _income_totals(ledger: Ledger) -> tuple[float, int]:
    balances = compute_invoice_balances(ledger.invoices, ledger.assignments)
    return sum_column(balances, "invoice_total"), count_rows(balances)


def sales_report(
    current: Ledger,
    previous: Optional[Ledger],
    period: Period,
    *,
    top_n: int = DEFAULT_TOP_N,
) -> dict[str, Any]:
    """
    Sales summary: invoiced income, wedding count and most used packages and
    menu items.

    Package usage counts assignments; menu item usage sums the quantity of
    each menu item per assignment.
    """
    total_income, wedding_count = _income_totals(current)
    prev_income, prev_count = _income_totals(_baseline(previous))

    top_packages = usage_ranking(
        current.assignments, ["package_id", "package_name"], limit=top_n
    )
    top_menu_items = usage_ranking(
        current.menu_items,
        ["menu_item_id", "menu_name"],
        weight_column="quantity",
        limit=top_n,
    )

    return {
        **_header("sales", period),
        "total_income": round_currency(total_income),
        "avg_income": round_currency(safe_ratio(total_income, wedding_count)),
        "wedding_count": wedding_count,
        "top_packages": top_packages,
        "top_menu_items": top_menu_items,
        "previous_period": {
            "total_income": round_currency(prev_income),
            "wedding_count": prev_count,
        },
        "income_change_percent": round_currency(
            percent_change(total_income, prev_income)
        ),
        "wedding_count_change_percent": round_currency(
            percent_change(wedding_count, prev_count)
        ),
    }


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


def _status_counts(statuses: pd.Series) -> dict[str, int]:
    counts = Counter(statuses)
    ordered = [s for s in PAYMENT_STATUSES if s in counts]
    ordered += sorted(s for s in counts if s not in PAYMENT_STATUSES)
    return {status: int(counts[status]) for status in ordered}


def payments_report(
    current: Ledger,
    previous: Optional[Ledger],
    period: Period,
    *,
    partial_ratio: float = PARTIAL_PAYMENT_RATIO,
) -> dict[str, Any]:
    """
    Payment & receipt report.

    `amount_paid` of a "partial" wedding is an estimate based on
    `partial_ratio`; the ratio is echoed in `assumptions`.
    """
    balances = compute_invoice_balances(
        current.invoices, current.assignments, partial_ratio
    )
    prev = _baseline(previous)
    prev_balances = compute_invoice_balances(
        prev.invoices, prev.assignments, partial_ratio
    )

    items = []
    for record in frame_records(
        balances,
        [
            "wedding_id",
            "couple_id",
            "wedding_date",
            "invoice_total",
            "payment_status",
            "collected",
            "outstanding",
        ],
    ):
        record["amount_paid"] = record.pop("collected")
        record["amount_due"] = record.pop("outstanding")
        items.append(
            _round_fields(record, ("invoice_total", "amount_paid", "amount_due"))
        )

    total_collected = sum_column(balances, "collected")
    prev_collected = sum_column(prev_balances, "collected")

    return {
        **_header("payments", period),
        "status_counts": _status_counts(balances["payment_status"]),
        "items": items,
        "total_invoiced": round_currency(sum_column(balances, "invoice_total")),
        "total_collected": round_currency(total_collected),
        "total_outstanding": round_currency(sum_column(balances, "outstanding")),
        "previous_period": {
            "total_collected": round_currency(prev_collected),
            "total_outstanding": round_currency(
                sum_column(prev_balances, "outstanding")
            ),
        },
        "collected_change_percent": round_currency(
            percent_change(total_collected, prev_collected)
        ),
        "assumptions": {"partial_payment_ratio": partial_ratio},
    }


# ---------------------------------------------------------------------------
# Financial statement
# ---------------------------------------------------------------------------


def _revenue(ledger: Optional[Ledger]) -> RevenueSummary:
    if ledger is None:
        return EMPTY_REVENUE
    return summarize_revenue(ledger.invoices, ledger.assignments, ledger.allocations)


def _revenue_by_package_type(assignments: pd.DataFrame) -> list[dict[str, Any]]:
    if assignments.empty:
        return []

    frame = assignments[["package_type", "table_id"]].copy()
    frame["revenue"] = numeric_column(assignments, "selling_price")
    frame["cost"] = numeric_column(assignments, "unit_cost")
    grouped = (
        frame.groupby("package_type", dropna=False)
        .agg(
            revenue=("revenue", "sum"),
            cost=("cost", "sum"),
            usage_count=("table_id", "nunique"),
        )
        .reset_index()
        .sort_values(["revenue", "package_type"], ascending=[False, True], kind="stable")
    )

    rows = []
    for record in frame_records(
        grouped, ["package_type", "revenue", "cost", "usage_count"]
    ):
        record["margin"] = margin(record["revenue"], record["cost"])
        record["margin_percent"] = margin_percent(record["revenue"], record["cost"])
        rows.append(
            _round_fields(record, ("revenue", "cost", "margin", "margin_percent"))
        )
    return rows


def financial_report(
    current: Ledger, previous: Optional[Ledger], period: Period
) -> dict[str, Any]:
    """
    Income statement for the period.

    revenue       = package revenue + equipment rental billed
    COGS          = package unit costs
    gross profit  = revenue - COGS
    operating     = equipment rental costs (allocations)
    net profit    = gross profit - operating costs

    The previous-period block is computed with the very same summary.
    """
    rs = _revenue(current)
    prev = _revenue(previous)

    return {
        **_header("financial", period),
        "revenue": {
            "total": round_currency(rs.total_revenue),
            "from_packages": round_currency(rs.package_revenue),
            "from_equipment": round_currency(rs.equipment_revenue),
            "change_percent": round_currency(
                percent_change(rs.total_revenue, prev.total_revenue)
            ),
        },
        "cogs": {
            "total": round_currency(rs.package_costs),
            "package_costs": round_currency(rs.package_costs),
        },
        "gross_profit": {
            "total": round_currency(rs.gross_profit),
            "margin_percent": round_currency(
                ratio_percent(rs.gross_profit, rs.total_revenue)
            ),
        },
        "operating_costs": {
            "total": round_currency(rs.operating_costs),
            "equipment_rental": round_currency(rs.equipment_costs),
        },
        "net_profit": {
            "total": round_currency(rs.net_profit),
            "margin_percent": round_currency(
                ratio_percent(rs.net_profit, rs.total_revenue)
            ),
            "change_percent": round_currency(
                percent_change(rs.net_profit, prev.net_profit)
            ),
        },
        "revenue_by_package_type": _revenue_by_package_type(current.assignments),
        "weddings_count": rs.weddings_with_packages,
        "table_assignments": rs.table_assignments,
        "previous_period": {
            "total_revenue": round_currency(prev.total_revenue),
            "total_cogs": round_currency(prev.package_costs),
            "net_profit": round_currency(prev.net_profit),
        },
    }


# ---------------------------------------------------------------------------
# Cash flow
# ---------------------------------------------------------------------------


def _cash_figures(ledger: Ledger, partial_ratio: float) -> dict[str, float]:
    rs = _revenue(ledger)
    balances = compute_invoice_balances(
        ledger.invoices, ledger.assignments, partial_ratio
    )
    received = sum_column(balances, "collected")
    paid = rs.package_costs + rs.equipment_costs
    return {
        "invoiced": rs.total_revenue,
        "cash_received": received,
        "package_costs_paid": rs.package_costs,
        "equipment_costs_paid": rs.equipment_costs,
        "net_cash": received - paid,
        "receivables_increase": sum_column(balances, "outstanding"),
    }


def cash_flow_report(
    current: Ledger,
    previous: Optional[Ledger],
    period: Period,
    *,
    partial_ratio: float = PARTIAL_PAYMENT_RATIO,
) -> dict[str, Any]:
    """
    Operating cash-flow statement.

    Cash received is derived from payment status (see balances.py); costs are
    assumed to be paid in the period of the wedding. Invoiced revenue is the
    same figure as the financial statement's total revenue.
    """
    cur = _cash_figures(current, partial_ratio)
    prev = _cash_figures(_baseline(previous), partial_ratio)

    return {
        **_header("cash_flow", period),
        "operating_activities": {
            "cash_received": round_currency(cur["cash_received"]),
            "package_costs_paid": round_currency(cur["package_costs_paid"]),
            "equipment_costs_paid": round_currency(cur["equipment_costs_paid"]),
            "net_cash": round_currency(cur["net_cash"]),
        },
        "invoiced": round_currency(cur["invoiced"]),
        "receivables_increase": round_currency(cur["receivables_increase"]),
        "collection_rate_percent": round_currency(
            ratio_percent(cur["cash_received"], cur["invoiced"])
        ),
        "previous_period": {
            "cash_received": round_currency(prev["cash_received"]),
            "net_cash": round_currency(prev["net_cash"]),
        },
        "cash_received_change_percent": round_currency(
            percent_change(cur["cash_received"], prev["cash_received"])
        ),
        "net_cash_change_percent": round_currency(
            percent_change(cur["net_cash"], prev["net_cash"])
        ),
        "assumptions": {"partial_payment_ratio": partial_ratio},
    }


# ---------------------------------------------------------------------------
# Accounts-receivable aging
# ---------------------------------------------------------------------------


def _aging_items(
    ledger: Ledger, as_of: date, partial_ratio: float, due_days: int
) -> list[dict[str, Any]]:
    balances = compute_invoice_balances(
        ledger.invoices, ledger.assignments, partial_ratio
    )
    items = []
    for record in frame_records(
        balances,
        [
            "wedding_id",
            "couple_id",
            "wedding_date",
            "payment_status",
            "invoice_total",
            "collected",
            "outstanding",
        ],
    ):
        if record["payment_status"] == "paid":
            continue
        aging = classify(record["wedding_date"], as_of, due_days)
        record["due_date"] = aging.due_date.isoformat()
        record["days_overdue"] = aging.days_overdue
        record["bucket"] = aging.bucket
        items.append(record)

    items.sort(key=lambda r: (-r["days_overdue"], r["wedding_id"]))
    return items


def ar_aging_report(
    current: Ledger,
    previous: Optional[Ledger],
    period: Period,
    *,
    as_of: date,
    partial_ratio: float = PARTIAL_PAYMENT_RATIO,
    due_days: int = DUE_DAYS_BEFORE_EVENT,
) -> dict[str, Any]:
    """
    Accounts-receivable aging of the weddings in the period, as of `as_of`.

    Paid invoices are excluded. Bucket amounts are summed at full precision
    and rounded once.
    """
    items = _aging_items(current, as_of, partial_ratio, due_days)
    prev_items = _aging_items(_baseline(previous), as_of, partial_ratio, due_days)
    outstanding_change = percent_change(
        sum(to_number(item["outstanding"]) for item in items),
        sum(to_number(item["outstanding"]) for item in prev_items),
    )

    aging = build_aging_buckets(items)
    for bucket in aging["buckets"].values():
        for item in bucket["items"]:
            _round_fields(item, ("invoice_total", "collected", "outstanding"))

    prev_aging = build_aging_buckets(prev_items)

    return {
        **_header("ar_aging", period),
        "as_of": as_of.isoformat(),
        "total_outstanding": aging["total_outstanding"],
        "invoice_count": aging["invoice_count"],
        "buckets": aging["buckets"],
        "previous_period": {"total_outstanding": prev_aging["total_outstanding"]},
        "outstanding_change_percent": round_currency(outstanding_change),
        "assumptions": {
            "partial_payment_ratio": partial_ratio,
            "due_days_before_event": due_days,
        },
    }


# ---------------------------------------------------------------------------
# Usage analytics
# ---------------------------------------------------------------------------


def _menu_usage(menu_items: pd.DataFrame) -> pd.DataFrame:
    if menu_items.empty:
        return pd.DataFrame(
            columns=[
                "menu_item_id",
                "menu_name",
                "menu_type",
                "usage_count",
                "package_count",
                "total_cost",
                "total_revenue",
            ]
        )

    frame = menu_items[["menu_item_id", "menu_name", "menu_type", "package_id"]].copy()
    quantity = numeric_column(menu_items, "quantity")
    frame["usage_count"] = quantity
    frame["total_cost"] = quantity * numeric_column(menu_items, "unit_cost")
    frame["total_revenue"] = quantity * numeric_column(menu_items, "selling_price")
    return (
        frame.groupby(["menu_item_id", "menu_name", "menu_type"], dropna=False)
        .agg(
            usage_count=("usage_count", "sum"),
            package_count=("package_id", "nunique"),
            total_cost=("total_cost", "sum"),
            total_revenue=("total_revenue", "sum"),
        )
        .reset_index()
        .sort_values(
            ["usage_count", "menu_item_id"], ascending=[False, True], kind="stable"
        )
    )


def menu_usage_report(
    current: Ledger, previous: Optional[Ledger], period: Period
) -> dict[str, Any]:
    """Servings, cost and revenue per menu item (servings = summed quantities)."""
    usage = _menu_usage(current.menu_items)
    prev_usage = _menu_usage(_baseline(previous).menu_items)

    items = []
    for record in frame_records(
        usage,
        [
            "menu_item_id",
            "menu_name",
            "menu_type",
            "usage_count",
            "package_count",
            "total_cost",
            "total_revenue",
        ],
    ):
        record["usage_count"] = to_number(record["usage_count"])
        record["margin"] = margin(record["total_revenue"], record["total_cost"])
        record["margin_percent"] = margin_percent(
            record["total_revenue"], record["total_cost"]
        )
        items.append(
            _round_fields(
                record,
                ("usage_count", "total_cost", "total_revenue", "margin", "margin_percent"),
            )
        )

    servings = sum_column(usage, "usage_count")
    prev_servings = sum_column(prev_usage, "usage_count")
    total_cost = sum_column(usage, "total_cost")
    total_revenue = sum_column(usage, "total_revenue")

    return {
        **_header("menu_usage", period),
        "items": items,
        "total_servings": round_currency(servings),
        "total_cost": round_currency(total_cost),
        "total_revenue": round_currency(total_revenue),
        "margin_percent": round_currency(margin_percent(total_revenue, total_cost)),
        "previous_period": {
            "total_servings": round_currency(prev_servings),
            "total_revenue": round_currency(sum_column(prev_usage, "total_revenue")),
        },
        "servings_change_percent": round_currency(
            percent_change(servings, prev_servings)
        ),
    }


def _inventory_usage(allocations: pd.DataFrame) -> pd.DataFrame:
    columns = [
        "inventory_id",
        "item_name",
        "category",
        "total_quantity_used",
        "allocation_count",
        "weddings_count",
        "rental_value",
        "quantity_available",
        "item_condition",
    ]
    if allocations.empty:
        return pd.DataFrame(columns=columns)

    frame = allocations[
        [
            "inventory_id",
            "item_name",
            "category",
            "wedding_id",
            "allocation_id",
            "quantity_available",
            "item_condition",
        ]
    ].copy()
    frame["quantity_used"] = numeric_column(allocations, "quantity_used")
    frame["rental_value"] = allocation_values(allocations)
    return (
        frame.groupby(["inventory_id", "item_name", "category"], dropna=False)
        .agg(
            total_quantity_used=("quantity_used", "sum"),
            allocation_count=("allocation_id", "count"),
            weddings_count=("wedding_id", "nunique"),
            rental_value=("rental_value", "sum"),
            quantity_available=("quantity_available", "first"),
            item_condition=("item_condition", "first"),
        )
        .reset_index()
        .sort_values(
            ["total_quantity_used", "inventory_id"],
            ascending=[False, True],
            kind="stable",
        )[columns]
    )


def inventory_usage_report(
    current: Ledger, previous: Optional[Ledger], period: Period
) -> dict[str, Any]:
    """Equipment usage, rental value and items needing attention."""
    usage = _inventory_usage(current.allocations)
    prev_usage = _inventory_usage(_baseline(previous).allocations)

    items = []
    for record in frame_records(usage, list(usage.columns)):
        record["total_quantity_used"] = to_number(record["total_quantity_used"])
        record["needs_attention"] = needs_attention(
            record["item_condition"], record["quantity_available"]
        )
        items.append(_round_fields(record, ("total_quantity_used", "rental_value")))

    quantity = sum_column(usage, "total_quantity_used")
    prev_quantity = sum_column(prev_usage, "total_quantity_used")

    return {
        **_header("inventory_usage", period),
        "items": items,
        "total_quantity_used": round_currency(quantity),
        "total_rental_value": round_currency(sum_column(usage, "rental_value")),
        "needs_attention_count": sum(1 for item in items if item["needs_attention"]),
        "previous_period": {
            "total_quantity_used": round_currency(prev_quantity),
            "total_rental_value": round_currency(
                sum_column(prev_usage, "rental_value")
            ),
        },
        "quantity_change_percent": round_currency(
            percent_change(quantity, prev_quantity)
        ),
    }


def _ingredient_usage(ingredients: pd.DataFrame) -> pd.DataFrame:
    columns = [
        "ingredient_id",
        "ingredient_name",
        "unit",
        "total_quantity_needed",
        "stock_quantity",
        "re_order_level",
        "menu_item_count",
    ]
    if ingredients.empty:
        return pd.DataFrame(columns=columns)

    frame = ingredients[
        [
            "ingredient_id",
            "ingredient_name",
            "unit",
            "menu_item_id",
            "stock_quantity",
            "re_order_level",
        ]
    ].copy()
    frame["needed"] = numeric_column(ingredients, "quantity_needed") * numeric_column(
        ingredients, "menu_item_quantity"
    )
    return (
        frame.groupby(["ingredient_id", "ingredient_name", "unit"], dropna=False)
        .agg(
            total_quantity_needed=("needed", "sum"),
            stock_quantity=("stock_quantity", "first"),
            re_order_level=("re_order_level", "first"),
            menu_item_count=("menu_item_id", "nunique"),
        )
        .reset_index()
        .sort_values(
            ["total_quantity_needed", "ingredient_id"],
            ascending=[False, True],
            kind="stable",
        )[columns]
    )


def ingredient_usage_report(
    current: Ledger, previous: Optional[Ledger], period: Period
) -> dict[str, Any]:
    """
    Ingredient consumption: quantity_needed * menu item quantity, summed per
    ingredient over every package assignment, compared with stock.
    """
    usage = _ingredient_usage(current.ingredients)
    prev_usage = _ingredient_usage(_baseline(previous).ingredients)

    items = []
    for record in frame_records(usage, list(usage.columns)):
        needed = to_number(record["total_quantity_needed"])
        stock = to_number(record["stock_quantity"])
        record["total_quantity_needed"] = needed
        record["shortfall"] = max(0.0, needed - stock)
        items.append(
            _round_fields(record, ("total_quantity_needed", "stock_quantity", "shortfall"))
        )

    used = count_rows(usage)
    prev_used = count_rows(prev_usage)

    return {
        **_header("ingredient_usage", period),
        "items": items,
        "ingredients_used": used,
        "ingredients_short": sum(1 for item in items if item["shortfall"] > 0),
        "previous_period": {"ingredients_used": prev_used},
        "ingredients_used_change_percent": round_currency(
            percent_change(used, prev_used)
        ),
    }


# ---------------------------------------------------------------------------
# Wedding detail reports
# ---------------------------------------------------------------------------


def wedding_menu_dietary_report(
    wedding_id: int,
    dishes: pd.DataFrame,
    menu_restrictions: pd.DataFrame,
    guest_restrictions: pd.DataFrame,
) -> dict[str, Any]:
    """Dishes served at a wedding, their allergens and guests' restrictions."""
    dish_counts = []
    for record in usage_ranking(dishes, ["menu_item_id", "menu_name"]):
        record["times_ordered"] = record.pop("usage_count")
        dish_counts.append(record)

    restriction_counts = []
    for record in usage_ranking(guest_restrictions, ["restriction_name"]):
        record["count"] = record.pop("usage_count")
        restriction_counts.append(record)

    return {
        "report_type": "menu_dietary",
        "wedding_id": wedding_id,
        "dish_counts": dish_counts,
        "allergens": frame_records(
            menu_restrictions,
            [
                "menu_item_id",
                "menu_name",
                "restriction_name",
                "restriction_type",
                "severity_level",
            ],
        ),
        "guest_restrictions": restriction_counts,
    }


def wedding_inventory_report(wedding_id: int, allocations: pd.DataFrame) -> dict[str, Any]:
    """Equipment allocated to a wedding and the items needing attention."""
    values = allocation_values(allocations)
    items = []
    for record, value in zip(frame_records(allocations, list(allocations.columns)), values):
        record["total_cost"] = round_currency(value)
        items.append(record)

    return {
        "report_type": "inventory",
        "wedding_id": wedding_id,
        "allocations": items,
        "needs_attention": [
            item
            for item in items
            if needs_attention(item.get("item_condition"), item.get("quantity_available"))
        ],
        "total_cost": round_currency(float(values.sum())),
    }


def wedding_seating_report(
    wedding_id: int, tables: pd.DataFrame, guests: pd.DataFrame
) -> dict[str, Any]:
    """Seating plan: each table with its guests, plus unseated guests."""
    guest_records = frame_records(
        guests, ["guest_id", "guest_name", "table_id", "rsvp_status"]
    )

    by_table: dict[Any, list[dict[str, Any]]] = {}
    for guest in guest_records:
        # NULL table ids turn the whole column into floats
        table_id = guest["table_id"]
        if isinstance(table_id, float) and table_id.is_integer():
            guest["table_id"] = int(table_id)
        by_table.setdefault(guest["table_id"], []).append(guest)

    seating = []
    seated_tables = set()
    for table in frame_records(
        tables, ["table_id", "table_category", "table_number", "capacity"]
    ):
        table["guests"] = by_table.get(table["table_id"], [])
        seated_tables.add(table["table_id"])
        seating.append(table)

    unassigned = [g for g in guest_records if g["table_id"] not in seated_tables]

    return {
        "report_type": "seating",
        "wedding_id": wedding_id,
        "seating": seating,
        "unassigned_guests": unassigned,
    }

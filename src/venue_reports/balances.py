# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Outstanding balance calculation for wedding invoices.

There is no payments ledger in the venue system: the only information about
cash collected is the wedding's `payment_status`. This module turns that
status and the invoice total into a (collected, outstanding) split:

    paid      -> collected = total,           outstanding = 0
    partial   -> collected = total * ratio,   outstanding = total * (1 - ratio)
    otherwise -> collected = 0,               outstanding = total

PARTIAL_PAYMENT_RATIO (50%) is an approximation, not a measured value: a
"partial" wedding is assumed to have paid half of its invoice. It can be
overridden through the [reports] configuration section but never inferred
from data.

The invoice total itself is always recomputed as

    equipment_rental_cost + sum(selling_price of assigned packages)

and the stored `wedding.total_cost` column is ignored, since it may be stale.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from .engine import numeric_column, to_number

PARTIAL_PAYMENT_RATIO = 0.5

PAYMENT_STATUSES: tuple[str, ...] = ("pending", "partial", "paid")
UNKNOWN_STATUS = "unknown"


@dataclass(frozen=True)
class Balance:
    """Split of an invoice total into collected and outstanding amounts."""

    collected: float
    outstanding: float


def normalize_status(payment_status) -> str:
    """Lower-case a payment status; missing values become 'unknown'."""
    if payment_status is None:
        return UNKNOWN_STATUS
    try:
        if pd.isna(payment_status):
            return UNKNOWN_STATUS
    except (TypeError, ValueError):
        pass
    status = str(payment_status).strip().lower()
    return status or UNKNOWN_STATUS


def invoice_total(
    equipment_rental_cost: float, package_selling_prices: Iterable[float]
) -> float:
    """Invoice total of one wedding: equipment rental plus package prices."""
    return to_number(equipment_rental_cost) + sum(
        to_number(price) for price in package_selling_prices
    )


def outstanding(
    invoice_total: float,
    payment_status,
    partial_ratio: float = PARTIAL_PAYMENT_RATIO,
) -> Balance:
    """
    Split `invoice_total` according to `payment_status`.

    The identity collected + outstanding == invoice_total holds for every
    status.
    """
    total = to_number(invoice_total)
    status = normalize_status(payment_status)

    if status == "paid":
        return Balance(collected=total, outstanding=0.0)
    if status == "partial":
        collected = total * partial_ratio
        return Balance(collected=collected, outstanding=total - collected)
    return Balance(collected=0.0, outstanding=total)


def compute_invoice_balances(
    invoices: pd.DataFrame,
    assignments: pd.DataFrame,
    partial_ratio: float = PARTIAL_PAYMENT_RATIO,
) -> pd.DataFrame:
    """
    Attach recomputed invoice totals and balances to wedding invoice lines.

    Parameters
    ----------
    invoices:
        Wedding invoice lines with at least `wedding_id`,
        `equipment_rental_cost` and `payment_status`.
    assignments:
        Package assignments with `wedding_id` and `selling_price`. Weddings
        without assignments get a package revenue of 0.

    Returns
    -------
    pandas.DataFrame
        A copy of `invoices` with the extra columns:
        - payment_status  (normalized, 'unknown' when missing)
        - package_revenue (float)
        - invoice_total   (float)
        - collected       (float)
        - outstanding     (float)
    """
    out = invoices.copy()
    extra = ["package_revenue", "invoice_total", "collected", "outstanding"]
    if out.empty:
        for col in extra:
            out[col] = pd.Series(dtype="float64")
        return out

    if assignments.empty:
        package_revenue = pd.Series(dtype="float64")
    else:
        prices = assignments[["wedding_id"]].copy()
        prices["selling_price"] = numeric_column(assignments, "selling_price")
        package_revenue = prices.groupby("wedding_id")["selling_price"].sum()

    out["payment_status"] = [normalize_status(s) for s in out["payment_status"]]
    out["package_revenue"] = (
        out["wedding_id"].map(package_revenue).fillna(0.0).astype("float64")
    )
    out["invoice_total"] = numeric_column(out, "equipment_rental_cost") + out[
        "package_revenue"
    ]

    balances = [
        outstanding(total, status, partial_ratio)
        for total, status in zip(out["invoice_total"], out["payment_status"])
    ]
    out["collected"] = [b.collected for b in balances]
    out["outstanding"] = [b.outstanding for b in balances]
    return out

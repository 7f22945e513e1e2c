# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Accounts-receivable aging.

Invoices are due DUE_DAYS_BEFORE_EVENT (30) days before the wedding. The
number of days an invoice is overdue is measured against an explicit
`as_of` date, which callers pass in (the wall-clock date is only read at the
CLI / service boundary).

Buckets, by days overdue `d`:

    d <= 30        -> "current"   (includes invoices not yet due, d < 0)
    30 < d <= 60   -> "31-60"
    60 < d <= 90   -> "61-90"
    d > 90         -> "over-90"

Paid invoices never take part in aging.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

import pandas as pd

from .engine import round_currency, safe_ratio, to_number

DUE_DAYS_BEFORE_EVENT = 30

# (payload key, label, upper bound of days overdue, inclusive)
AGING_BUCKETS: tuple[tuple[str, str, float], ...] = (
    ("current", "current", 30),
    ("days_31_60", "31-60", 60),
    ("days_61_90", "61-90", 90),
    ("over_90", "over-90", float("inf")),
)


@dataclass(frozen=True)
class AgingClassification:
    due_date: date
    days_overdue: int
    bucket: str


def _as_date(value: Any) -> date:
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def bucket_for_days(days_overdue: int) -> str:
    """Return the bucket label for a number of days overdue."""
    for _key, label, upper in AGING_BUCKETS:
        if days_overdue <= upper:
            return label
    return AGING_BUCKETS[-1][1]


def classify(
    wedding_date: Any,
    today: Any,
    due_days_before_event: int = DUE_DAYS_BEFORE_EVENT,
) -> AgingClassification:
    """
    Compute the due date, days overdue and aging bucket of one invoice.

    Example: a wedding on 2024-03-15 is due on 2024-02-14; as of 2024-04-20
    it is 66 days overdue, in the "61-90" bucket.
    """
    due = _as_date(wedding_date) - timedelta(days=due_days_before_event)
    days = (_as_date(today) - due).days
    return AgingClassification(due_date=due, days_overdue=days, bucket=bucket_for_days(days))


def build_aging_buckets(items: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """
    Group outstanding invoices into aging buckets.

    Each item must provide `bucket` (a label), `outstanding` and
    `payment_status`. Paid items are skipped. Items are kept in input order
    inside each bucket.

    Returns
    -------
    dict
        {
          "total_outstanding": float,
          "invoice_count": int,
          "buckets": {key: {label, amount, count, percentage, items}},
        }
        `amount`, `total_outstanding` and `percentage` are rounded to two
        decimals; percentages are 0 when nothing is outstanding.
    """
    label_to_key = {label: key for key, label, _upper in AGING_BUCKETS}
    amounts = {key: 0.0 for key, _label, _upper in AGING_BUCKETS}
    members: dict[str, list[dict[str, Any]]] = {
        key: [] for key, _label, _upper in AGING_BUCKETS
    }

    for item in items:
        if item.get("payment_status") == "paid":
            continue
        key = label_to_key[item["bucket"]]
        amounts[key] += to_number(item.get("outstanding"))
        members[key].append(dict(item))

    total = sum(amounts.values())
    buckets: dict[str, Any] = {}
    for key, label, _upper in AGING_BUCKETS:
        buckets[key] = {
            "label": label,
            "amount": round_currency(amounts[key]),
            "count": len(members[key]),
            "percentage": round_currency(safe_ratio(amounts[key], total) * 100),
            "items": members[key],
        }

    return {
        "total_outstanding": round_currency(total),
        "invoice_count": sum(len(m) for m in members.values()),
        "buckets": buckets,
    }

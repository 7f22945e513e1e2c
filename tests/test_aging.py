from datetime import date

import pytest

from venue_reports.aging import (
    AGING_BUCKETS,
    bucket_for_days,
    build_aging_buckets,
    classify,
)


@pytest.mark.parametrize(
    "days, label",
    [
        (-10, "current"),
        (0, "current"),
        (30, "current"),
        (31, "31-60"),
        (60, "31-60"),
        (61, "61-90"),
        (90, "61-90"),
        (91, "over-90"),
        (400, "over-90"),
    ],
)
def test_bucket_boundaries(days, label) -> None:
    assert bucket_for_days(days) == label


def test_classify_partial_wedding_example() -> None:
    aging = classify(date(2024, 3, 15), date(2024, 4, 20))

    assert aging.due_date == date(2024, 2, 14)
    assert aging.days_overdue == 66
    assert aging.bucket == "61-90"


def test_classify_accepts_iso_strings() -> None:
    aging = classify("2024-03-15", "2024-04-20", due_days_before_event=0)
    assert aging.due_date == date(2024, 3, 15)
    assert aging.days_overdue == 36


def test_buckets_partition_outstanding_total() -> None:
    items = [
        {"wedding_id": 1, "bucket": "current", "outstanding": 100.0, "payment_status": "pending"},
        {"wedding_id": 2, "bucket": "61-90", "outstanding": 300.0, "payment_status": "partial"},
        {"wedding_id": 3, "bucket": "over-90", "outstanding": 100.0, "payment_status": "pending"},
        {"wedding_id": 4, "bucket": "31-60", "outstanding": 999.0, "payment_status": "paid"},
    ]

    result = build_aging_buckets(items)
    buckets = result["buckets"]

    assert list(buckets) == [key for key, _label, _upper in AGING_BUCKETS]
    assert result["total_outstanding"] == pytest.approx(500.0)
    assert result["invoice_count"] == 3
    assert sum(b["amount"] for b in buckets.values()) == pytest.approx(500.0)
    assert sum(b["count"] for b in buckets.values()) == 3
    assert buckets["days_31_60"]["count"] == 0  # paid item skipped
    assert buckets["days_61_90"]["percentage"] == pytest.approx(60.0)
    assert buckets["current"]["percentage"] == pytest.approx(20.0)


def test_empty_aging_has_zero_percentages() -> None:
    result = build_aging_buckets([])

    assert result["total_outstanding"] == 0.0
    assert result["invoice_count"] == 0
    assert all(b["percentage"] == 0.0 for b in result["buckets"].values())

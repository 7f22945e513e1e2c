import json
import math

import numpy as np
import pandas as pd
import pytest

from venue_reports.engine import (
    EMPTY_REVENUE,
    avg_column,
    frame_records,
    margin_percent,
    numeric_column,
    percent_change,
    plain_value,
    ratio_percent,
    round_currency,
    sum_column,
    summarize_revenue,
    usage_ranking,
)


def test_percent_change_without_baseline_is_zero() -> None:
    assert percent_change(100.0, 0.0) == 0.0
    assert percent_change(0.0, 0.0) == 0.0
    assert percent_change(None, None) == 0.0


def test_percent_change_regular_and_negative() -> None:
    assert percent_change(150.0, 100.0) == pytest.approx(50.0)
    assert percent_change(50.0, 100.0) == pytest.approx(-50.0)
    # previous negative: plain (c - p) / p formula
    assert percent_change(-50.0, -100.0) == pytest.approx(-50.0)


def test_null_safe_sums_treat_missing_values_as_zero() -> None:
    df = pd.DataFrame({"amount": [10.0, None, "oops", 5]})

    assert sum_column(df, "amount") == pytest.approx(15.0)
    assert list(numeric_column(df, "amount")) == [10.0, 0.0, 0.0, 5.0]


def test_empty_and_missing_columns_resolve_to_zero() -> None:
    empty = pd.DataFrame(columns=["amount"])

    assert sum_column(empty, "amount") == 0.0
    assert avg_column(empty, "amount") == 0.0
    assert sum_column(pd.DataFrame({"x": [1]}), "amount") == 0.0


def test_margin_percent_guards_zero_selling_price() -> None:
    assert margin_percent(0.0, 10.0) == 0.0
    assert margin_percent(200.0, 150.0) == pytest.approx(25.0)


def test_ratio_percent_guards_zero_whole() -> None:
    assert ratio_percent(30.0, 0.0) == 0.0
    assert ratio_percent(None, 120.0) == 0.0
    assert ratio_percent(30.0, 120.0) == pytest.approx(25.0)
    assert ratio_percent(-30.0, 120.0) == pytest.approx(-25.0)


def test_round_currency_normalizes_negative_zero() -> None:
    value = round_currency(-0.001)
    assert value == 0.0
    assert math.copysign(1.0, value) == 1.0
    assert round_currency(float("nan")) == 0.0


def test_plain_value_converts_numpy_and_missing() -> None:
    assert plain_value(np.int64(3)) == 3
    assert isinstance(plain_value(np.int64(3)), int)
    assert plain_value(np.float64("nan")) is None
    assert plain_value(pd.NaT) is None
    assert plain_value(pd.Timestamp("2024-03-15")) == "2024-03-15"


def test_frame_records_are_json_serializable() -> None:
    df = pd.DataFrame({"id": np.array([1, 2], dtype="int64"), "v": [1.5, np.nan]})

    records = frame_records(df, ["id", "v", "not_there"])

    assert records == [{"id": 1, "v": 1.5}, {"id": 2, "v": None}]
    json.dumps(records)


def test_summarize_revenue_profit_chain() -> None:
    invoices = pd.DataFrame({"equipment_rental_cost": [1000.0, None]})
    assignments = pd.DataFrame(
        {
            "wedding_id": [1, 1, 2],
            "table_id": [1, 2, 3],
            "selling_price": [5000.0, 2000.0, 2000.0],
            "unit_cost": [3000.0, 1200.0, None],
        }
    )
    allocations = pd.DataFrame({"quantity_used": [10, 2], "unit_rental_cost": [2.0, None]})

    rs = summarize_revenue(invoices, assignments, allocations)

    assert rs.package_revenue == pytest.approx(9000.0)
    assert rs.equipment_revenue == pytest.approx(1000.0)
    assert rs.total_revenue == pytest.approx(10000.0)
    assert rs.package_costs == pytest.approx(4200.0)
    assert rs.gross_profit == pytest.approx(5800.0)
    assert rs.operating_costs == pytest.approx(20.0)
    assert rs.net_profit == pytest.approx(5780.0)
    assert rs.weddings_with_packages == 2
    assert rs.table_assignments == 3


def test_summarize_revenue_of_empty_frames_is_zero() -> None:
    empty = pd.DataFrame()
    assert summarize_revenue(empty, empty, empty) == EMPTY_REVENUE


def test_usage_ranking_orders_by_usage_then_key() -> None:
    rows = pd.DataFrame(
        {
            "package_id": [2, 1, 2, 3, 1],
            "package_name": ["Silver", "Gold", "Silver", "Bronze", "Gold"],
        }
    )

    ranking = usage_ranking(rows, ["package_id", "package_name"], limit=2)

    assert ranking == [
        {"package_id": 1, "package_name": "Gold", "usage_count": 2},
        {"package_id": 2, "package_name": "Silver", "usage_count": 2},
    ]


def test_usage_ranking_weighted() -> None:
    rows = pd.DataFrame(
        {"menu_item_id": [1, 2, 1], "quantity": [2, 1, 3]},
    )

    ranking = usage_ranking(rows, ["menu_item_id"], weight_column="quantity")

    assert ranking == [
        {"menu_item_id": 1, "usage_count": 5},
        {"menu_item_id": 2, "usage_count": 1},
    ]
    assert usage_ranking(pd.DataFrame(), ["menu_item_id"]) == []

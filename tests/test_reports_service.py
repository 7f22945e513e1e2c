import sqlite3
from dataclasses import replace
from datetime import date

import pytest

import venue_reports.reports_service as rs
from venue_reports.config import ReportsConfig
from venue_reports.periods import PeriodError
from venue_reports.reports_service import (
    REPORT_TYPES,
    ReportRequest,
    generate_report,
    generate_wedding_report,
)
from venue_reports.views import report_to_json

AS_OF = date(2024, 4, 20)


def _march(report_type: str) -> ReportRequest:
    return ReportRequest(report_type, granularity="month", value="2024-03", as_of=AS_OF)


def test_sales_report_for_march(app_config):
    payload = generate_report(app_config, _march("sales"))

    assert payload["previous_value"] == "2024-02"
    assert payload["total_income"] == 10500.0
    assert payload["avg_income"] == 5250.0
    assert payload["wedding_count"] == 2
    assert [p["package_name"] for p in payload["top_packages"]] == ["Silver", "Gold"]
    assert payload["top_menu_items"] == [
        {"menu_item_id": 2, "menu_name": "Cake", "usage_count": 3},
        {"menu_item_id": 1, "menu_name": "Salmon", "usage_count": 2},
    ]
    assert payload["previous_period"] == {"total_income": 2200.0, "wedding_count": 1}
    assert payload["income_change_percent"] == 377.27
    assert payload["wedding_count_change_percent"] == 100.0


def test_financial_report_for_march(app_config):
    payload = generate_report(app_config, _march("financial"))

    assert payload["revenue"]["total"] == 10500.0
    assert payload["cogs"]["total"] == 5400.0
    assert payload["gross_profit"]["total"] == 5100.0
    assert payload["operating_costs"]["total"] == 310.0
    assert payload["net_profit"]["total"] == 4790.0
    assert payload["previous_period"] == {
        "total_revenue": 2200.0,
        "total_cogs": 1200.0,
        "net_profit": 1000.0,
    }
    assert payload["net_profit"]["change_percent"] == 379.0
    assert [r["package_type"] for r in payload["revenue_by_package_type"]] == [
        "premium",
        "standard",
    ]


def test_cash_flow_matches_financial_revenue(app_config):
    financial = generate_report(app_config, _march("financial"))
    cash_flow = generate_report(app_config, _march("cash_flow"))

    assert cash_flow["invoiced"] == financial["revenue"]["total"]
    assert cash_flow["operating_activities"]["cash_received"] == 7500.0
    assert cash_flow["operating_activities"]["net_cash"] == 1790.0
    assert cash_flow["receivables_increase"] == 3000.0


def test_ar_aging_report_for_march(app_config):
    payload = generate_report(app_config, _march("ar_aging"))

    assert payload["total_outstanding"] == 3000.0
    assert payload["invoice_count"] == 1
    item = payload["buckets"]["days_61_90"]["items"][0]
    assert item["wedding_id"] == 1
    assert item["days_overdue"] == 66
    # February's pending wedding is 100 days overdue on the same date
    assert payload["previous_period"] == {"total_outstanding": 2200.0}


def test_usage_reports_for_march(app_config):
    menu = generate_report(app_config, _march("menu_usage"))
    assert [i["menu_name"] for i in menu["items"]] == ["Cake", "Salmon"]
    assert menu["total_servings"] == 5.0
    assert menu["total_revenue"] == 74.0

    inventory = generate_report(app_config, _march("inventory_usage"))
    assert [i["item_name"] for i in inventory["items"]] == ["Chair", "Arch"]
    assert inventory["items"][0]["total_quantity_used"] == 130.0
    assert inventory["total_rental_value"] == 310.0
    assert inventory["needs_attention_count"] == 1

    ingredients = generate_report(app_config, _march("ingredient_usage"))
    flour = ingredients["items"][0]
    assert flour["ingredient_name"] == "Flour"
    assert flour["total_quantity_needed"] == 1.5
    assert flour["shortfall"] == 0.5
    assert ingredients["ingredients_short"] == 1


def test_default_granularity_comes_from_config(app_config):
    payload = generate_report(app_config, ReportRequest("sales", value="2024-03"))
    assert payload["period"] == "month"


@pytest.mark.parametrize("report_type", REPORT_TYPES)
def test_concurrent_fetch_gives_identical_payload(app_config, report_type):
    threaded = replace(app_config, reports=ReportsConfig(max_workers=4))

    sequential = generate_report(app_config, _march(report_type))
    concurrent = generate_report(threaded, _march(report_type))

    assert report_to_json(sequential) == report_to_json(concurrent)


def test_validation_happens_before_any_accessor_call(app_config, monkeypatch):
    calls = []

    def stub(cfg, period):
        calls.append(period)
        raise AssertionError("accessor must not be called")

    monkeypatch.setattr(rs, "load_wedding_invoices", stub)

    with pytest.raises(PeriodError):
        generate_report(app_config, ReportRequest("sales", "month", "2024-13"))
    with pytest.raises(ValueError, match="Unknown report type"):
        generate_report(app_config, ReportRequest("profit", "month", "2024-03"))
    assert calls == []


def test_previous_period_is_fetched_with_rolled_back_period(app_config, monkeypatch):
    seen = []
    original = rs.load_wedding_invoices

    def spy(cfg, period):
        seen.append(period.value)
        return original(cfg, period)

    monkeypatch.setattr(rs, "load_wedding_invoices", spy)

    generate_report(app_config, ReportRequest("payments", "month", "2024-01"))

    assert seen == ["2024-01", "2023-12"]


def test_all_time_report_skips_previous_period(app_config, monkeypatch):
    seen = []
    original = rs.load_wedding_invoices

    def spy(cfg, period):
        seen.append(period.value)
        return original(cfg, period)

    monkeypatch.setattr(rs, "load_wedding_invoices", spy)

    payload = generate_report(app_config, ReportRequest("sales", "year", None))

    assert seen == [None]
    assert payload["wedding_count"] == 3
    assert payload["previous_value"] is None


def test_storage_errors_propagate(app_config, monkeypatch):
    def broken(cfg, period):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(rs, "load_package_assignments", broken)

    with pytest.raises(sqlite3.OperationalError):
        generate_report(app_config, _march("sales"))


def test_wedding_menu_dietary_report(app_config):
    payload = generate_wedding_report(app_config, 1, "menu-dietary")

    assert payload["report_type"] == "menu_dietary"
    assert payload["dish_counts"] == [
        {"menu_item_id": 1, "menu_name": "Salmon", "times_ordered": 1},
        {"menu_item_id": 2, "menu_name": "Cake", "times_ordered": 1},
    ]
    assert [a["restriction_name"] for a in payload["allergens"]] == ["Fish allergy"]
    assert payload["guest_restrictions"] == [
        {"restriction_name": "Vegan", "count": 1},
        {"restriction_name": None, "count": 1},
    ]


def test_wedding_inventory_report(app_config):
    payload = generate_wedding_report(app_config, 1, "inventory")

    assert [a["item_name"] for a in payload["allocations"]] == ["Arch", "Chair"]
    assert [a["total_cost"] for a in payload["allocations"]] == [50.0, 160.0]
    assert payload["total_cost"] == 210.0
    assert [a["item_name"] for a in payload["needs_attention"]] == ["Arch"]


def test_wedding_seating_report(app_config):
    payload = generate_wedding_report(app_config, 1, "seating")

    assert [t["table_id"] for t in payload["seating"]] == [1]
    assert [g["guest_name"] for g in payload["seating"][0]["guests"]] == ["Alice"]
    assert [g["guest_name"] for g in payload["unassigned_guests"]] == ["Bob"]


def test_unknown_wedding_gives_empty_report(app_config):
    payload = generate_wedding_report(app_config, 999, "seating")
    assert payload["seating"] == []
    assert payload["unassigned_guests"] == []


def test_unknown_wedding_report_kind(app_config):
    with pytest.raises(ValueError, match="Unknown wedding report"):
        generate_wedding_report(app_config, 1, "budget")

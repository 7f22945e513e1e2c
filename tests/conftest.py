from datetime import date

import pandas as pd
import pytest

from venue_reports.config import AppConfig
from venue_reports.db import DatabaseConfig, import_rows, init_database


def make_tmp_db_cfg(tmp_path) -> DatabaseConfig:
    """Helper to build a DatabaseConfig pointing to a temporary SQLite file."""
    return DatabaseConfig(engine="sqlite", path=tmp_path / "test_venue.sqlite")


# Ledger used by the integration tests.
#
# March 2024: wedding 1 (partial) and wedding 2 (paid)
# February 2024: wedding 3 (pending)
SAMPLE_LEDGER: list[tuple[str, list[dict]]] = [
    (
        "wedding",
        [
            {
                "wedding_id": 1,
                "couple_id": 10,
                "wedding_date": date(2024, 3, 15),
                "equipment_rental_cost": 1000.0,
                "total_cost": 1.0,  # stale, must be ignored
                "payment_status": "partial",
            },
            {
                "wedding_id": 2,
                "couple_id": 20,
                "wedding_date": date(2024, 3, 20),
                "equipment_rental_cost": 500.0,
                "total_cost": None,
                "payment_status": "paid",
            },
            {
                "wedding_id": 3,
                "couple_id": 30,
                "wedding_date": date(2024, 2, 10),
                "equipment_rental_cost": 200.0,
                "total_cost": None,
                "payment_status": "pending",
            },
        ],
    ),
    (
        "seating_table",
        [
            {"table_id": 1, "wedding_id": 1, "table_number": "1", "capacity": 8},
            {"table_id": 2, "wedding_id": 2, "table_number": "1", "capacity": 8},
            {"table_id": 3, "wedding_id": 2, "table_number": "2", "capacity": 10},
            {"table_id": 4, "wedding_id": 3, "table_number": "1", "capacity": 6},
        ],
    ),
    (
        "package",
        [
            {
                "package_id": 1,
                "package_name": "Gold",
                "package_type": "premium",
                "selling_price": 5000.0,
                "unit_cost": 3000.0,
            },
            {
                "package_id": 2,
                "package_name": "Silver",
                "package_type": "standard",
                "selling_price": 2000.0,
                "unit_cost": 1200.0,
            },
        ],
    ),
    (
        "table_package",
        [
            {"table_id": 1, "package_id": 1},
            {"table_id": 2, "package_id": 2},
            {"table_id": 3, "package_id": 2},
            {"table_id": 4, "package_id": 2},
        ],
    ),
    (
        "dietary_restriction",
        [
            {
                "restriction_id": 1,
                "restriction_name": "Fish allergy",
                "restriction_type": "allergy",
                "severity_level": "high",
            },
            {"restriction_id": 2, "restriction_name": "Vegan", "restriction_type": "diet"},
        ],
    ),
    (
        "menu_item",
        [
            {
                "menu_item_id": 1,
                "menu_name": "Salmon",
                "menu_type": "main",
                "unit_cost": 10.0,
                "selling_price": 25.0,
                "restriction_id": 1,
            },
            {
                "menu_item_id": 2,
                "menu_name": "Cake",
                "menu_type": "dessert",
                "unit_cost": 3.0,
                "selling_price": 8.0,
                "restriction_id": None,
            },
        ],
    ),
    (
        "package_menu_items",
        [
            {"package_id": 1, "menu_item_id": 1, "quantity": 2},
            {"package_id": 1, "menu_item_id": 2, "quantity": None},
            {"package_id": 2, "menu_item_id": 2, "quantity": 1},
        ],
    ),
    (
        "ingredient",
        [
            {
                "ingredient_id": 1,
                "ingredient_name": "Flour",
                "unit": "kg",
                "stock_quantity": 1.0,
                "re_order_level": "low",
            },
            {
                "ingredient_id": 2,
                "ingredient_name": "Salmon fillet",
                "unit": "kg",
                "stock_quantity": 100.0,
                "re_order_level": "low",
            },
        ],
    ),
    (
        "recipe",
        [
            {"menu_item_id": 2, "ingredient_id": 1, "quantity_needed": 0.5},
            {"menu_item_id": 1, "ingredient_id": 2, "quantity_needed": 0.25},
        ],
    ),
    (
        "inventory_items",
        [
            {
                "inventory_id": 1,
                "item_name": "Chair",
                "category": "furniture",
                "item_condition": "good",
                "quantity_available": 100,
                "rental_cost": 2.0,
            },
            {
                "inventory_id": 2,
                "item_name": "Arch",
                "category": "decor",
                "item_condition": "Needs repair",
                "quantity_available": 1,
                "rental_cost": 50.0,
            },
        ],
    ),
    (
        "inventory_allocation",
        [
            {"wedding_id": 1, "inventory_id": 1, "quantity_used": 80, "unit_rental_cost": 2.0},
            {"wedding_id": 1, "inventory_id": 2, "quantity_used": 1, "unit_rental_cost": None},
            {"wedding_id": 2, "inventory_id": 1, "quantity_used": 50, "unit_rental_cost": 2.0},
        ],
    ),
    (
        "guest",
        [
            {"guest_id": 1, "wedding_id": 1, "guest_name": "Alice", "table_id": 1},
            {"guest_id": 2, "wedding_id": 1, "guest_name": "Bob", "table_id": None},
            {"guest_id": 3, "wedding_id": 2, "guest_name": "Carol", "table_id": 2},
        ],
    ),
    ("guest_restrictions", [{"guest_id": 1, "restriction_id": 2}]),
]


def seed_sample_ledger(cfg: DatabaseConfig) -> None:
    for table, rows in SAMPLE_LEDGER:
        import_rows(pd.DataFrame(rows), cfg, table)


@pytest.fixture
def db_cfg(tmp_path) -> DatabaseConfig:
    cfg = make_tmp_db_cfg(tmp_path)
    init_database(cfg)
    return cfg


@pytest.fixture
def seeded_cfg(db_cfg) -> DatabaseConfig:
    seed_sample_ledger(db_cfg)
    return db_cfg


@pytest.fixture
def app_config(seeded_cfg) -> AppConfig:
    return AppConfig(database=seeded_cfg)

# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.


"""
Database layer for Venue Reports.

This module owns the SQLite read model of the venue system and the Ledger
Accessors used by the reporting engine. It is responsible for:

- Initializing the schema the accessors read (idempotent).
- Bulk-inserting ledger rows (used by the CLI `import` command and tests).
- Projecting ledger rows for a reporting period into pandas DataFrames.

The accessors never aggregate: they only join and project rows. All sums,
averages and ratios happen in engine.py / balances.py / aging.py so that
every report applies identical arithmetic.

------------------------------------------------------------------------------
Schema Overview
------------------------------------------------------------------------------

    wedding              one row per booking (wedding_date, payment_status,
                         equipment_rental_cost, food_cost, stored total_cost)
    seating_table        tables of a wedding
    package              sellable packages (selling_price, unit_cost)
    table_package        package assigned to a seating table
    menu_item            dishes (unit_cost, selling_price, restriction_id)
    package_menu_items   menu items contained in a package, with quantity
    ingredient           stock of raw ingredients
    recipe               quantity of an ingredient needed per menu item
    inventory_items      rentable equipment
    inventory_allocation equipment allocated to a wedding
    guest                wedding guests (optionally seated at a table)
    dietary_restriction  restriction catalogue
    guest_restrictions   restrictions declared by guests

Dates are stored as ISO text ("YYYY-MM-DD"), which makes the period
predicate a plain `BETWEEN` on strings.

------------------------------------------------------------------------------
Ledger Accessors
------------------------------------------------------------------------------

Period-scoped (all filtered on wedding.wedding_date):

- load_wedding_invoices        wedding invoice lines
- load_package_assignments     wedding -> seating_table -> table_package -> package
- load_menu_item_assignments   ... -> package_menu_items -> menu_item
- load_inventory_allocations   wedding -> inventory_allocation -> inventory_items
- load_ingredient_consumption  ... -> menu_item -> recipe -> ingredient

Wedding-scoped (detail reports):

- load_wedding_dishes, load_wedding_menu_restrictions,
  load_wedding_guest_restrictions, load_wedding_allocations,
  load_wedding_seating, load_wedding_guests

Accessors expect the schema to exist (see init_database) and do not write
to the database. Any sqlite3.Error is propagated to the caller unchanged.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from .periods import Period

logger = logging.getLogger(__name__)


class UnsupportedEngineError(ValueError):
    """Raised when [database].engine names an engine other than SQLite."""


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Database configuration for Venue Reports.

    Attributes
    ----------
    engine:
        Database engine identifier. Only "sqlite" is supported.
    path:
        Path to the SQLite database file.
    """

    engine: str
    path: Path


# Columns accepted by import_rows(), per table: (required, optional).
TABLE_COLUMNS: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "wedding": (
        ("wedding_id", "wedding_date"),
        (
            "couple_id",
            "venue",
            "guest_count",
            "equipment_rental_cost",
            "food_cost",
            "total_cost",
            "production_cost",
            "payment_status",
        ),
    ),
    "seating_table": (
        ("table_id", "wedding_id"),
        ("table_number", "table_category", "capacity"),
    ),
    "package": (
        ("package_id", "package_name"),
        ("package_type", "selling_price", "unit_cost"),
    ),
    "table_package": (("table_id", "package_id"), ()),
    "dietary_restriction": (
        ("restriction_id", "restriction_name"),
        ("restriction_type", "severity_level"),
    ),
    "menu_item": (
        ("menu_item_id", "menu_name"),
        ("menu_type", "unit_cost", "selling_price", "restriction_id"),
    ),
    "package_menu_items": (("package_id", "menu_item_id"), ("quantity",)),
    "ingredient": (
        ("ingredient_id", "ingredient_name"),
        ("unit", "stock_quantity", "re_order_level"),
    ),
    "recipe": (("menu_item_id", "ingredient_id", "quantity_needed"), ("recipe_id",)),
    "inventory_items": (
        ("inventory_id", "item_name"),
        ("category", "item_condition", "quantity_available", "rental_cost"),
    ),
    "inventory_allocation": (
        ("wedding_id", "inventory_id", "quantity_used"),
        ("allocation_id", "unit_rental_cost"),
    ),
    "guest": (
        ("guest_id", "wedding_id", "guest_name"),
        ("table_id", "rsvp_status"),
    ),
    "guest_restrictions": (("guest_id", "restriction_id"), ()),
}

# Tables whose columns hold ISO dates.
DATE_COLUMNS: dict[str, tuple[str, ...]] = {"wedding": ("wedding_date",)}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def ensure_supported_engine(cfg: DatabaseConfig) -> None:
    """Raise UnsupportedEngineError unless the configuration targets SQLite."""
    if cfg.engine.lower() != "sqlite":
        msg = (
            f"Unsupported database engine: {cfg.engine!r}. "
            "Only 'sqlite' is supported for now."
        )
        raise UnsupportedEngineError(msg)


def _connect(cfg: DatabaseConfig) -> sqlite3.Connection:
    """
    Open a SQLite connection with foreign keys enabled.

    The caller is responsible for closing the connection.
    """
    ensure_supported_engine(cfg)
    conn = sqlite3.connect(cfg.path)
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def _create_schema_if_needed(conn: sqlite3.Connection) -> None:
    """
    Create tables and indexes if they do not exist yet.

    This function is idempotent and can be called multiple times safely.
    """
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS wedding (
            wedding_id            INTEGER PRIMARY KEY,
            couple_id             INTEGER,
            wedding_date          TEXT    NOT NULL,  -- ISO date 'YYYY-MM-DD'
            venue                 TEXT,
            guest_count           INTEGER,
            equipment_rental_cost REAL,
            food_cost             REAL,
            total_cost            REAL,              -- stored, may be stale
            production_cost       REAL,
            payment_status        TEXT               -- pending | partial | paid
        );

        CREATE TABLE IF NOT EXISTS seating_table (
            table_id       INTEGER PRIMARY KEY,
            wedding_id     INTEGER NOT NULL,
            table_number   TEXT,
            table_category TEXT,
            capacity       INTEGER,
            FOREIGN KEY (wedding_id) REFERENCES wedding(wedding_id)
        );

        CREATE TABLE IF NOT EXISTS package (
            package_id    INTEGER PRIMARY KEY,
            package_name  TEXT NOT NULL,
            package_type  TEXT,
            selling_price REAL,
            unit_cost     REAL
        );

        CREATE TABLE IF NOT EXISTS table_package (
            table_package_id INTEGER PRIMARY KEY AUTOINCREMENT,
            table_id         INTEGER NOT NULL,
            package_id       INTEGER NOT NULL,
            FOREIGN KEY (table_id) REFERENCES seating_table(table_id),
            FOREIGN KEY (package_id) REFERENCES package(package_id)
        );

        CREATE TABLE IF NOT EXISTS dietary_restriction (
            restriction_id   INTEGER PRIMARY KEY,
            restriction_name TEXT NOT NULL,
            restriction_type TEXT,
            severity_level   TEXT
        );

        CREATE TABLE IF NOT EXISTS menu_item (
            menu_item_id   INTEGER PRIMARY KEY,
            menu_name      TEXT NOT NULL,
            menu_type      TEXT,
            unit_cost      REAL,
            selling_price  REAL,
            restriction_id INTEGER,
            FOREIGN KEY (restriction_id) REFERENCES dietary_restriction(restriction_id)
        );

        CREATE TABLE IF NOT EXISTS package_menu_items (
            package_menu_item_id INTEGER PRIMARY KEY AUTOINCREMENT,
            package_id           INTEGER NOT NULL,
            menu_item_id         INTEGER NOT NULL,
            quantity             INTEGER DEFAULT 1,
            FOREIGN KEY (package_id) REFERENCES package(package_id),
            FOREIGN KEY (menu_item_id) REFERENCES menu_item(menu_item_id)
        );

        CREATE TABLE IF NOT EXISTS ingredient (
            ingredient_id   INTEGER PRIMARY KEY,
            ingredient_name TEXT NOT NULL,
            unit            TEXT,
            stock_quantity  REAL,
            re_order_level  TEXT
        );

        CREATE TABLE IF NOT EXISTS recipe (
            recipe_id       INTEGER PRIMARY KEY AUTOINCREMENT,
            menu_item_id    INTEGER NOT NULL,
            ingredient_id   INTEGER NOT NULL,
            quantity_needed REAL    NOT NULL,
            FOREIGN KEY (menu_item_id) REFERENCES menu_item(menu_item_id),
            FOREIGN KEY (ingredient_id) REFERENCES ingredient(ingredient_id)
        );

        CREATE TABLE IF NOT EXISTS inventory_items (
            inventory_id       INTEGER PRIMARY KEY,
            item_name          TEXT NOT NULL,
            category           TEXT,
            item_condition     TEXT,
            quantity_available INTEGER,
            rental_cost        REAL
        );

        CREATE TABLE IF NOT EXISTS inventory_allocation (
            allocation_id    INTEGER PRIMARY KEY AUTOINCREMENT,
            wedding_id       INTEGER NOT NULL,
            inventory_id     INTEGER NOT NULL,
            quantity_used    INTEGER NOT NULL,
            unit_rental_cost REAL,
            FOREIGN KEY (wedding_id) REFERENCES wedding(wedding_id),
            FOREIGN KEY (inventory_id) REFERENCES inventory_items(inventory_id)
        );

        CREATE TABLE IF NOT EXISTS guest (
            guest_id    INTEGER PRIMARY KEY,
            wedding_id  INTEGER NOT NULL,
            guest_name  TEXT NOT NULL,
            table_id    INTEGER,
            rsvp_status TEXT,
            FOREIGN KEY (wedding_id) REFERENCES wedding(wedding_id),
            FOREIGN KEY (table_id) REFERENCES seating_table(table_id)
        );

        CREATE TABLE IF NOT EXISTS guest_restrictions (
            guest_id       INTEGER NOT NULL,
            restriction_id INTEGER NOT NULL,
            PRIMARY KEY (guest_id, restriction_id),
            FOREIGN KEY (guest_id) REFERENCES guest(guest_id),
            FOREIGN KEY (restriction_id) REFERENCES dietary_restriction(restriction_id)
        );

        CREATE INDEX IF NOT EXISTS idx_wedding_date ON wedding(wedding_date);
        CREATE INDEX IF NOT EXISTS idx_seating_table_wedding ON seating_table(wedding_id);
        CREATE INDEX IF NOT EXISTS idx_allocation_wedding
            ON inventory_allocation(wedding_id);
        """
    )
    conn.commit()


def _query_frame(
    cfg: DatabaseConfig,
    sql: str,
    params: list[Any],
    columns: list[str],
) -> pd.DataFrame:
    """
    Run a read query and return its rows as a DataFrame with `columns`.

    An empty result is returned as an empty DataFrame with the same columns.
    """
    conn = _connect(cfg)
    try:
        cur = conn.execute(sql, params)
        rows = cur.fetchall()
    finally:
        conn.close()

    return pd.DataFrame(rows, columns=columns)


def _to_iso_date(value) -> str | None:
    """Convert a date-like value to an ISO 'YYYY-MM-DD' string."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return pd.Timestamp(value).date().isoformat()


def _to_db_value(value):
    """Convert pandas / numpy scalars into values sqlite3 can bind."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if hasattr(value, "item"):
        return value.item()
    return value


# ---------------------------------------------------------------------------
# Public API: schema and import
# ---------------------------------------------------------------------------


def init_database(cfg: DatabaseConfig) -> None:
    """
    Initialize the database schema if needed.

    - Creates the SQLite file (and its parent directory) if missing.
    - Creates all tables and indexes read by the Ledger Accessors.
    - Idempotent: calling it multiple times is safe.

    Raises
    ------
    ValueError
        If cfg.engine is not supported.
    sqlite3.Error
        If schema creation fails.
    """
    cfg.path.parent.mkdir(parents=True, exist_ok=True)

    conn = _connect(cfg)
    try:
        _create_schema_if_needed(conn)
    finally:
        conn.close()


def import_rows(df: pd.DataFrame, cfg: DatabaseConfig, table: str) -> int:
    """
    Insert ledger rows into one table.

    Parameters
    ----------
    df:
        Rows to insert. Must contain the table's required columns; any of
        the table's optional columns present are inserted too, other columns
        are ignored.
    cfg:
        Database configuration.
    table:
        Target table name (one of TABLE_COLUMNS).

    Returns
    -------
    int
        Number of rows inserted.

    Raises
    ------
    ValueError
        If the table is unknown or required columns are missing.
    sqlite3.Error
        If the insert fails (e.g. foreign key violation). Nothing is
        committed in that case.
    """
    if table not in TABLE_COLUMNS:
        raise ValueError(
            f"Unknown ledger table: {table!r}. "
            f"Expected one of: {', '.join(sorted(TABLE_COLUMNS))}."
        )

    required, optional = TABLE_COLUMNS[table]
    missing = set(required).difference(df.columns)
    if missing:
        cols = ", ".join(sorted(missing))
        raise ValueError(f"Rows for {table!r} are missing required column(s): {cols}")

    columns = list(required) + [c for c in optional if c in df.columns]
    date_columns = DATE_COLUMNS.get(table, ())

    records = []
    for row in df[columns].itertuples(index=False, name=None):
        values = []
        for col, value in zip(columns, row):
            if col in date_columns:
                values.append(_to_iso_date(value))
            else:
                values.append(_to_db_value(value))
        records.append(tuple(values))

    placeholders = ", ".join("?" for _ in columns)
    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders});"

    init_database(cfg)
    conn = _connect(cfg)
    try:
        conn.executemany(sql, records)
        conn.commit()
    finally:
        conn.close()

    logger.info("Imported %d row(s) into %s", len(records), table)
    return len(records)


# ---------------------------------------------------------------------------
# Ledger Accessors: period-scoped
# ---------------------------------------------------------------------------

INVOICE_COLUMNS = [
    "wedding_id",
    "couple_id",
    "wedding_date",
    "equipment_rental_cost",
    "food_cost",
    "total_cost",
    "payment_status",
]


def load_wedding_invoices(cfg: DatabaseConfig, period: Period) -> pd.DataFrame:
    """
    Load one invoice line per wedding in the period.

    Returns
    -------
    pandas.DataFrame
        Columns: wedding_id, couple_id, wedding_date (ISO str),
        equipment_rental_cost, food_cost, total_cost, payment_status.
        Missing costs are left as NULL / NaN; the aggregator treats them as 0.
    """
    where, params = period.sql_predicate("w.wedding_date")
    df = _query_frame(
        cfg,
        f"""
        SELECT w.wedding_id,
               w.couple_id,
               w.wedding_date,
               w.equipment_rental_cost,
               w.food_cost,
               w.total_cost,
               w.payment_status
          FROM wedding w
         WHERE {where}
         ORDER BY w.wedding_date DESC, w.wedding_id;
        """,
        params,
        INVOICE_COLUMNS,
    )
    logger.debug("Loaded %d wedding invoice(s) for %s", len(df), period.label)
    return df


PACKAGE_ASSIGNMENT_COLUMNS = [
    "table_id",
    "wedding_id",
    "wedding_date",
    "package_id",
    "package_name",
    "package_type",
    "selling_price",
    "unit_cost",
]


def load_package_assignments(cfg: DatabaseConfig, period: Period) -> pd.DataFrame:
    """
    Load every package assignment (one row per table_package) of the
    weddings in the period.
    """
    where, params = period.sql_predicate("w.wedding_date")
    df = _query_frame(
        cfg,
        f"""
        SELECT tp.table_id,
               w.wedding_id,
               w.wedding_date,
               p.package_id,
               p.package_name,
               p.package_type,
               p.selling_price,
               p.unit_cost
          FROM table_package tp
          JOIN seating_table st ON st.table_id = tp.table_id
          JOIN wedding w        ON w.wedding_id = st.wedding_id
          JOIN package p        ON p.package_id = tp.package_id
         WHERE {where}
         ORDER BY w.wedding_id, tp.table_package_id;
        """,
        params,
        PACKAGE_ASSIGNMENT_COLUMNS,
    )
    logger.debug("Loaded %d package assignment(s) for %s", len(df), period.label)
    return df


MENU_ITEM_ASSIGNMENT_COLUMNS = [
    "wedding_id",
    "table_id",
    "package_id",
    "menu_item_id",
    "menu_name",
    "menu_type",
    "quantity",
    "unit_cost",
    "selling_price",
]


def load_menu_item_assignments(cfg: DatabaseConfig, period: Period) -> pd.DataFrame:
    """
    Load one row per (package assignment, menu item of that package).

    `quantity` defaults to 1 when not recorded on the package.
    """
    where, params = period.sql_predicate("w.wedding_date")
    df = _query_frame(
        cfg,
        f"""
        SELECT w.wedding_id,
               tp.table_id,
               tp.package_id,
               m.menu_item_id,
               m.menu_name,
               m.menu_type,
               COALESCE(pmi.quantity, 1) AS quantity,
               m.unit_cost,
               m.selling_price
          FROM table_package tp
          JOIN seating_table st       ON st.table_id = tp.table_id
          JOIN wedding w              ON w.wedding_id = st.wedding_id
          JOIN package_menu_items pmi ON pmi.package_id = tp.package_id
          JOIN menu_item m            ON m.menu_item_id = pmi.menu_item_id
         WHERE {where}
         ORDER BY w.wedding_id, tp.table_package_id, pmi.package_menu_item_id;
        """,
        params,
        MENU_ITEM_ASSIGNMENT_COLUMNS,
    )
    logger.debug("Loaded %d menu item assignment(s) for %s", len(df), period.label)
    return df


INVENTORY_ALLOCATION_COLUMNS = [
    "allocation_id",
    "wedding_id",
    "wedding_date",
    "inventory_id",
    "item_name",
    "category",
    "item_condition",
    "quantity_available",
    "quantity_used",
    "unit_rental_cost",
]


def load_inventory_allocations(cfg: DatabaseConfig, period: Period) -> pd.DataFrame:
    """
    Load the inventory allocations of the weddings in the period.

    When an allocation has no unit_rental_cost, the item's catalogue
    rental_cost is used.
    """
    where, params = period.sql_predicate("w.wedding_date")
    df = _query_frame(
        cfg,
        f"""
        SELECT ia.allocation_id,
               w.wedding_id,
               w.wedding_date,
               ii.inventory_id,
               ii.item_name,
               ii.category,
               ii.item_condition,
               ii.quantity_available,
               ia.quantity_used,
               COALESCE(ia.unit_rental_cost, ii.rental_cost) AS unit_rental_cost
          FROM inventory_allocation ia
          JOIN wedding w          ON w.wedding_id = ia.wedding_id
          JOIN inventory_items ii ON ii.inventory_id = ia.inventory_id
         WHERE {where}
         ORDER BY w.wedding_id, ia.allocation_id;
        """,
        params,
        INVENTORY_ALLOCATION_COLUMNS,
    )
    logger.debug("Loaded %d inventory allocation(s) for %s", len(df), period.label)
    return df


INGREDIENT_CONSUMPTION_COLUMNS = [
    "wedding_id",
    "menu_item_id",
    "menu_name",
    "ingredient_id",
    "ingredient_name",
    "unit",
    "stock_quantity",
    "re_order_level",
    "quantity_needed",
    "menu_item_quantity",
]


def load_ingredient_consumption(cfg: DatabaseConfig, period: Period) -> pd.DataFrame:
    """
    Load one row per (package assignment, menu item, recipe line).

    The consumption of an ingredient is quantity_needed * menu_item_quantity
    summed over these rows; since there is one row per package assignment,
    the assignment count is already accounted for.
    """
    where, params = period.sql_predicate("w.wedding_date")
    df = _query_frame(
        cfg,
        f"""
        SELECT w.wedding_id,
               m.menu_item_id,
               m.menu_name,
               i.ingredient_id,
               i.ingredient_name,
               i.unit,
               i.stock_quantity,
               i.re_order_level,
               r.quantity_needed,
               COALESCE(pmi.quantity, 1) AS menu_item_quantity
          FROM table_package tp
          JOIN seating_table st       ON st.table_id = tp.table_id
          JOIN wedding w              ON w.wedding_id = st.wedding_id
          JOIN package_menu_items pmi ON pmi.package_id = tp.package_id
          JOIN menu_item m            ON m.menu_item_id = pmi.menu_item_id
          JOIN recipe r               ON r.menu_item_id = m.menu_item_id
          JOIN ingredient i           ON i.ingredient_id = r.ingredient_id
         WHERE {where}
         ORDER BY w.wedding_id, tp.table_package_id, pmi.package_menu_item_id,
                  r.recipe_id;
        """,
        params,
        INGREDIENT_CONSUMPTION_COLUMNS,
    )
    logger.debug("Loaded %d ingredient consumption row(s) for %s", len(df), period.label)
    return df


# ---------------------------------------------------------------------------
# Ledger Accessors: wedding-scoped
# ---------------------------------------------------------------------------


def load_wedding_dishes(cfg: DatabaseConfig, wedding_id: int) -> pd.DataFrame:
    """Menu items served at a wedding, one row per package assignment."""
    return _query_frame(
        cfg,
        """
        SELECT m.menu_item_id,
               m.menu_name,
               tp.table_id,
               COALESCE(pmi.quantity, 1) AS quantity
          FROM table_package tp
          JOIN seating_table st       ON st.table_id = tp.table_id
          JOIN package_menu_items pmi ON pmi.package_id = tp.package_id
          JOIN menu_item m            ON m.menu_item_id = pmi.menu_item_id
         WHERE st.wedding_id = ?
         ORDER BY tp.table_package_id, pmi.package_menu_item_id;
        """,
        [wedding_id],
        ["menu_item_id", "menu_name", "table_id", "quantity"],
    )


def load_wedding_menu_restrictions(cfg: DatabaseConfig, wedding_id: int) -> pd.DataFrame:
    """Menu items served at a wedding that carry a dietary restriction."""
    return _query_frame(
        cfg,
        """
        SELECT m.menu_item_id,
               m.menu_name,
               dr.restriction_name,
               dr.restriction_type,
               dr.severity_level
          FROM menu_item m
          JOIN dietary_restriction dr ON dr.restriction_id = m.restriction_id
         WHERE m.menu_item_id IN (
               SELECT pmi.menu_item_id
                 FROM package_menu_items pmi
                 JOIN table_package tp ON tp.package_id = pmi.package_id
                 JOIN seating_table st ON st.table_id = tp.table_id
                WHERE st.wedding_id = ?
         )
         ORDER BY m.menu_item_id;
        """,
        [wedding_id],
        [
            "menu_item_id",
            "menu_name",
            "restriction_name",
            "restriction_type",
            "severity_level",
        ],
    )


def load_wedding_guest_restrictions(
    cfg: DatabaseConfig, wedding_id: int
) -> pd.DataFrame:
    """
    One row per (guest, declared restriction) of a wedding. Guests without a
    restriction appear once with a NULL restriction_name.
    """
    return _query_frame(
        cfg,
        """
        SELECT g.guest_id,
               dr.restriction_name
          FROM guest g
          LEFT JOIN guest_restrictions gr  ON gr.guest_id = g.guest_id
          LEFT JOIN dietary_restriction dr ON dr.restriction_id = gr.restriction_id
         WHERE g.wedding_id = ?
         ORDER BY g.guest_id, dr.restriction_name;
        """,
        [wedding_id],
        ["guest_id", "restriction_name"],
    )


def load_wedding_allocations(cfg: DatabaseConfig, wedding_id: int) -> pd.DataFrame:
    """Inventory allocations of a single wedding, ordered by item name."""
    return _query_frame(
        cfg,
        """
        SELECT ia.allocation_id,
               ia.inventory_id,
               ia.quantity_used,
               COALESCE(ia.unit_rental_cost, ii.rental_cost) AS unit_rental_cost,
               ii.item_name,
               ii.category,
               ii.item_condition,
               ii.quantity_available
          FROM inventory_allocation ia
          JOIN inventory_items ii ON ii.inventory_id = ia.inventory_id
         WHERE ia.wedding_id = ?
         ORDER BY ii.item_name ASC, ia.allocation_id;
        """,
        [wedding_id],
        [
            "allocation_id",
            "inventory_id",
            "quantity_used",
            "unit_rental_cost",
            "item_name",
            "category",
            "item_condition",
            "quantity_available",
        ],
    )


def load_wedding_seating(cfg: DatabaseConfig, wedding_id: int) -> pd.DataFrame:
    """Seating tables of a wedding, ordered by table number."""
    return _query_frame(
        cfg,
        """
        SELECT st.table_id,
               st.table_category,
               st.table_number,
               st.capacity
          FROM seating_table st
         WHERE st.wedding_id = ?
         ORDER BY st.table_number ASC, st.table_id;
        """,
        [wedding_id],
        ["table_id", "table_category", "table_number", "capacity"],
    )


def load_wedding_guests(cfg: DatabaseConfig, wedding_id: int) -> pd.DataFrame:
    """Guests of a wedding, ordered by name."""
    return _query_frame(
        cfg,
        """
        SELECT g.guest_id,
               g.guest_name,
               g.table_id,
               g.rsvp_status
          FROM guest g
         WHERE g.wedding_id = ?
         ORDER BY g.guest_name ASC, g.guest_id;
        """,
        [wedding_id],
        ["guest_id", "guest_name", "table_id", "rsvp_status"],
    )

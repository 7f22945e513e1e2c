# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
I/O module for Venue Reports.

This module reads ledger rows (weddings, packages, allocations, ...) from CSV
files and normalizes them into DataFrames that `db.import_rows` accepts.

Normalization
-------------
- Column names are case-insensitive and stripped of surrounding spaces.
- Every required column of the target table (see db.TABLE_COLUMNS) must be
  present; columns unknown to the table are dropped.
- Date columns (e.g. ``wedding_date``) are parsed strictly.
- Amount and quantity columns are coerced to numbers. Empty cells become
  NULL; any other non-numeric value is rejected.

If the CSV does not match the table, a clear ValueError is raised.
"""

import os
from typing import Union

import pandas as pd

from .db import DATE_COLUMNS, TABLE_COLUMNS

NUMERIC_COLUMNS: frozenset[str] = frozenset(
    {
        "guest_count",
        "equipment_rental_cost",
        "food_cost",
        "total_cost",
        "production_cost",
        "capacity",
        "selling_price",
        "unit_cost",
        "quantity",
        "stock_quantity",
        "re_order_level",
        "quantity_needed",
        "quantity_available",
        "rental_cost",
        "quantity_used",
        "unit_rental_cost",
    }
)


def read_ledger_csv(
    path: Union[str, "os.PathLike[str]"], table: str
) -> pd.DataFrame:
    """
    Read the rows of one ledger table from a CSV file and normalize them.

    Parameters
    ----------
    path:
        Path to the CSV file.
    table:
        Target ledger table (one of db.TABLE_COLUMNS).

    Returns
    -------
    pandas.DataFrame
        The table's required columns, followed by the optional columns present
        in the file.

    Raises
    ------
    ValueError
        If the table is unknown, a required column is missing, or date /
        numeric parsing fails.
    """
    if table not in TABLE_COLUMNS:
        raise ValueError(
            f"Unknown ledger table: {table!r}. "
            f"Expected one of: {', '.join(sorted(TABLE_COLUMNS))}."
        )

    df = pd.read_csv(path)
    df.columns = [str(c).lower().strip() for c in df.columns]

    required, optional = TABLE_COLUMNS[table]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(
            f"Invalid CSV structure for {table!r}: missing column(s) "
            f"{', '.join(missing)}. Expected: {', '.join(required)} "
            "(column names are case-insensitive)."
        )

    columns = list(required) + [c for c in optional if c in df.columns]
    out = df[columns].copy()

    for col in DATE_COLUMNS.get(table, ()):
        try:
            out[col] = pd.to_datetime(out[col], errors="raise").dt.date
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid values in '{col}' column.") from exc

    for col in columns:
        if col not in NUMERIC_COLUMNS:
            continue
        converted = pd.to_numeric(out[col], errors="coerce")
        if (converted.isna() & out[col].notna()).any():
            raise ValueError(f"Invalid numeric values in '{col}' column.")
        out[col] = converted

    if "payment_status" in out.columns:
        out["payment_status"] = (
            out["payment_status"].astype("string").str.strip().str.lower()
        )

    return out

# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Venue Reports
-------------

A reporting and aggregation engine for wedding venue management. It turns
the venue's operational ledger (weddings, seating tables, packages, menu
items, recipes, equipment allocations) into period reports with a
comparison against the immediately preceding period.

Main capabilities:
- typed reporting periods (day, month, year or all time) with rollback,
- one shared aggregation engine for revenue, costs and margins,
- sales, payments, financial and cash-flow statements,
- accounts-receivable aging against an explicit reference date,
- menu, inventory and ingredient usage analytics,
- wedding detail reports (menu & dietary, inventory, seating),
- a SQLite read model with CSV import,
- JSON, text-table and CSV output.

Usage:
    python -m venue_reports.cli --help
"""

__all__ = ["engine", "periods", "reports", "reports_service", "views"]

__version__ = "0.1.0"

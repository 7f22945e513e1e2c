# Venue Reports - Temporal reporting engine for wedding venue management
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
View utilities for Venue Reports.

Report payloads are nested dictionaries. This module turns them into:

- JSON text (report_to_json), byte-identical for identical payloads,
- a set of flat pandas DataFrames (report_tables) for console tables and
  CSV export:

    summary            one (field, value) row per scalar, nested keys
                       joined with "." (e.g. "revenue.total")
    <list section>     one row per record (e.g. "items", "top_packages")
    <keyed section>    dict of records, with the dict key in a "key"
                       column (e.g. aging "buckets")

  Lists nested inside records (seating guests, bucket items) become their
  own section named "<section>_<field>".
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import pandas as pd


def report_to_json(payload: dict[str, Any]) -> str:
    """Serialize a report payload (keys keep their insertion order)."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _add_records(
    name: str, records: list[dict[str, Any]], sections: dict[str, pd.DataFrame]
) -> None:
    rows = []
    nested: dict[str, list[dict[str, Any]]] = {}
    for record in records:
        row = {}
        for key, value in record.items():
            if isinstance(value, list):
                nested.setdefault(f"{name}_{key}", []).extend(value)
            else:
                row[key] = value
        rows.append(row)

    sections[name] = pd.DataFrame(rows)
    for nested_name, nested_records in nested.items():
        _add_records(nested_name, nested_records, sections)


def report_tables(payload: dict[str, Any]) -> dict[str, pd.DataFrame]:
    """Split a report payload into named DataFrames, "summary" first."""
    summary: list[dict[str, Any]] = []
    sections: dict[str, pd.DataFrame] = {}

    def walk(prefix: str, mapping: dict[str, Any]) -> None:
        for key, value in mapping.items():
            name = f"{prefix}.{key}" if prefix else key
            if isinstance(value, list):
                _add_records(name.replace(".", "_"), value, sections)
            elif isinstance(value, dict):
                if value and all(isinstance(v, dict) for v in value.values()):
                    records = [{"key": k, **v} for k, v in value.items()]
                    _add_records(name.replace(".", "_"), records, sections)
                else:
                    walk(name, value)
            else:
                summary.append({"field": name, "value": value})

    walk("", payload)
    return {"summary": pd.DataFrame(summary, columns=["field", "value"]), **sections}


def render_tables(payload: dict[str, Any]) -> str:
    """Render every section of a report as a text table."""
    blocks = []
    for name, df in report_tables(payload).items():
        body = "(no rows)" if df.empty else df.to_string(index=False)
        blocks.append(f"=== {name} ===\n{body}")
    return "\n\n".join(blocks)


def write_report_csv(
    payload: dict[str, Any],
    output_dir: Path,
    timestamp: Optional[str] = None,
) -> list[Path]:
    """
    Write one CSV file per report section into `output_dir`.

    Files are named "<report_type>_<section>_<timestamp>.csv"; empty sections
    are skipped. Returns the written paths.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    if timestamp is None:
        timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    report_type = payload.get("report_type", "report")

    written = []
    for name, df in report_tables(payload).items():
        if df.empty:
            continue
        path = output_dir / f"{report_type}_{name}_{timestamp}.csv"
        df.to_csv(path, index=False)
        written.append(path)
    return written

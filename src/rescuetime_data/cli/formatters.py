"""Output formatters for CLI commands.

This module provides formatting functions for different output formats:
- JSON: Pretty-printed JSON
- JSONL: Newline-delimited JSON (one object per line)
- Table: Rich ASCII table
- CSV: Comma-separated values with headers
- Plain: Minimal text output (one item per line)

Analytic rows are sparse, so table and CSV output take the column list
from the union of keys across all items rather than the first item alone.
"""

from __future__ import annotations

import csv
import io
import json
from datetime import date, datetime
from typing import Any

from rich.table import Table
from rich.text import Text


def _json_serializer(obj: Any) -> str:
    """Custom JSON serializer for non-standard types."""
    if isinstance(obj, datetime | date):
        return obj.isoformat()
    return str(obj)


def _as_list(data: dict[str, Any] | list[Any]) -> list[Any]:
    return [data] if isinstance(data, dict) else data


def collect_columns(items: list[Any]) -> list[str]:
    """Union of dict keys across items, in first-seen order."""
    columns: dict[str, None] = {}
    for item in items:
        if isinstance(item, dict):
            columns.update(dict.fromkeys(item))
    return list(columns)


def format_json(data: dict[str, Any] | list[Any]) -> str:
    """Format data as pretty-printed JSON with 2-space indentation."""
    return json.dumps(data, indent=2, default=_json_serializer, ensure_ascii=False)


def format_jsonl(data: dict[str, Any] | list[Any]) -> str:
    """Format data as newline-delimited JSON (JSONL).

    For lists, outputs one JSON object per line.
    For dicts, outputs a single JSON object.
    """
    return "\n".join(
        json.dumps(item, default=_json_serializer, ensure_ascii=False)
        for item in _as_list(data)
    )


def format_table(
    data: dict[str, Any] | list[Any],
    columns: list[str] | None = None,
) -> Table:
    """Format data as a Rich ASCII table.

    Args:
        data: Data to format (dict or list of dicts).
        columns: Column names to display. If None, collected from data.

    Returns:
        Rich Table object ready for printing.
    """
    table = Table(show_header=True, header_style="bold")
    items = _as_list(data)
    if not items:
        return table

    if columns is None:
        columns = collect_columns(items) or ["value"]

    for col in columns:
        table.add_column(col.upper().replace("_", " "))

    for item in items:
        if isinstance(item, dict):
            row = [_format_cell(item.get(col)) for col in columns]
        else:
            row = [_format_cell(item)]
        table.add_row(*(Text(cell) for cell in row))

    return table


def _format_cell(value: Any) -> str:
    """Format a single cell value for table display."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, list | dict):
        return json.dumps(value, default=_json_serializer, ensure_ascii=False)
    return str(value)


def format_csv(
    data: dict[str, Any] | list[Any],
    columns: list[str] | None = None,
) -> str:
    """Format data as comma-separated values with a header row.

    Args:
        data: Data to format (dict or list of dicts).
        columns: Header row. If None, collected from data.
    """
    items = _as_list(data)
    if not items:
        return ""

    output = io.StringIO()
    if isinstance(items[0], dict):
        writer = csv.DictWriter(
            output,
            fieldnames=columns if columns is not None else collect_columns(items),
            extrasaction="ignore",
        )
        writer.writeheader()
        for item in items:
            if isinstance(item, dict):
                writer.writerow({k: _csv_value(v) for k, v in item.items()})
    else:
        list_writer = csv.writer(output)
        list_writer.writerow(["value"])
        for item in items:
            list_writer.writerow([_csv_value(item)])

    return output.getvalue()


def _csv_value(value: Any) -> str:
    """Format a value for CSV output."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, list | dict):
        return json.dumps(value, default=_json_serializer, ensure_ascii=False)
    return str(value)


def format_plain(data: dict[str, Any] | list[Any]) -> str:
    """Format data as minimal plain text.

    Lists of dicts print one tab-separated line per item; a single dict
    prints key=value lines.
    """
    if isinstance(data, dict):
        return "\n".join(f"{k}={_csv_value(v)}" for k, v in data.items())

    lines = []
    for item in data:
        if isinstance(item, dict):
            lines.append("\t".join(_csv_value(v) for v in item.values()))
        else:
            lines.append(str(item))
    return "\n".join(lines)

"""Shared CLI option definitions.

Provides reusable Annotated type aliases for common CLI options
to avoid duplication across commands.
"""

from __future__ import annotations

from typing import Annotated, Literal

import typer

# Output format type for formatting command output
OutputFormat = Literal["json", "jsonl", "table", "csv", "plain"]

# Reusable Annotated type for --format option
FormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format: json, jsonl, table, csv, plain.",
    ),
]

# Reusable Annotated type for --timezone option
TimezoneOption = Annotated[
    str | None,
    typer.Option(
        "--timezone",
        "-z",
        help="IANA zone attached to row dates (e.g. Europe/Berlin).",
        envvar="RT_TIMEZONE",
    ),
]

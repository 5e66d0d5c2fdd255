"""Fetch commands for the RescueTime APIs.

This module provides commands for fetching data:
- data: Analytic data report (columns depend on the query)
- summary: Daily summary feed

JSON output is the full result (notes, headers, rows). The row-oriented
formats (jsonl, table, csv, plain) print the decoded rows only.
"""

from __future__ import annotations

from typing import Annotated, Any

import typer

from rescuetime_data.cli.options import FormatOption, TimezoneOption
from rescuetime_data.cli.utils import (
    get_client,
    handle_errors,
    output_result,
    status_spinner,
)
from rescuetime_data.cli.validators import (
    validate_perspective,
    validate_resolution,
    validate_restrict_kind,
)
from rescuetime_data.types import AnalyticDataQueryParameters

fetch_app = typer.Typer(
    name="fetch",
    help="Fetch data from RescueTime.",
    no_args_is_help=True,
    rich_markup_mode="markdown",
)

_SUMMARY_TABLE_COLUMNS = [
    "date",
    "productivity_pulse",
    "total_duration_formatted",
    "all_productive_duration_formatted",
    "all_distracting_duration_formatted",
]


@fetch_app.command("data")
@handle_errors
def fetch_data(
    ctx: typer.Context,
    perspective: Annotated[
        str | None,
        typer.Option("--perspective", "-p", help="rank or interval."),
    ] = None,
    resolution: Annotated[
        str | None,
        typer.Option(
            "--resolution", "-r", help="month, week, day, hour or minute."
        ),
    ] = None,
    begin: Annotated[
        str | None,
        typer.Option("--begin", "--from", help="First day (YYYY-MM-DD)."),
    ] = None,
    end: Annotated[
        str | None,
        typer.Option("--end", "--to", help="Last day (YYYY-MM-DD)."),
    ] = None,
    kind: Annotated[
        str | None,
        typer.Option(
            "--kind",
            "-k",
            help="category, activity, productivity, document, efficiency "
            "or overview.",
        ),
    ] = None,
    thing: Annotated[
        str | None,
        typer.Option("--thing", help="Limit to one category or activity."),
    ] = None,
    thingy: Annotated[
        str | None,
        typer.Option("--thingy", help="Limit to one document within --thing."),
    ] = None,
    group: Annotated[
        str | None,
        typer.Option("--group", "-g", help="Limit to a group (team reports)."),
    ] = None,
    timezone: TimezoneOption = None,
    format: FormatOption = "json",
) -> None:
    """Fetch an analytic data report.

    Which columns come back depends on --perspective and --kind.

    Examples:

        rt fetch data --perspective rank --kind activity --format table
        rt fetch data -p interval -r hour --from 2024-01-01 --to 2024-01-07
        rt fetch data -p interval -r day --timezone America/New_York
    """
    if perspective is not None:
        perspective = validate_perspective(perspective)
    if resolution is not None:
        resolution = validate_resolution(resolution)
    if kind is not None:
        kind = validate_restrict_kind(kind)

    params = AnalyticDataQueryParameters(
        perspective=perspective,
        resolution_time=resolution,
        restrict_group=group,
        restrict_begin=begin,
        restrict_end=end,
        restrict_kind=kind,
        restrict_thing=thing,
        restrict_thingy=thingy,
    )

    rt = get_client(ctx)
    with status_spinner(ctx, "Fetching analytic data..."):
        result = rt.analytic_data(params, timezone=timezone)

    if format == "json":
        output_result(ctx, result.to_dict(), format=format)
        return
    rows: list[Any] = [row.to_dict() for row in result.rows]
    output_result(ctx, rows, columns=result.present_fields(), format=format)


@fetch_app.command("summary")
@handle_errors
def fetch_summary(
    ctx: typer.Context,
    format: FormatOption = "json",
) -> None:
    """Fetch the daily summary feed.

    Table output shows the headline columns; other formats include every
    field.

    Examples:

        rt fetch summary
        rt fetch summary --format table
        rt fetch summary --format csv > summaries.csv
    """
    rt = get_client(ctx)
    with status_spinner(ctx, "Fetching daily summary..."):
        result = rt.daily_summary()

    data = [summary.to_dict() for summary in result]
    columns = _SUMMARY_TABLE_COLUMNS if format == "table" else None
    output_result(ctx, data, columns=columns, format=format)

"""CLI entry point for rescuetime_data.

This module provides the `rt` command-line interface. It defines global
options and registers command groups.

Usage:
    rt [OPTIONS] COMMAND [ARGS]...

Examples:
    rt --help
    rt auth add personal
    rt fetch data --perspective interval --resolution hour --timezone Europe/Berlin
    rt --account work fetch summary --format table
"""

from __future__ import annotations

import signal
import sys
from typing import Annotated

import typer

import rescuetime_data
from rescuetime_data.cli.utils import ExitCode, configure_logging, err_console

app = typer.Typer(
    name="rt",
    help="RescueTime data CLI - fetch analytic reports and daily summaries.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        print(f"rt version {rescuetime_data.__version__}")
        raise typer.Exit()


def _handle_interrupt(_signum: int, _frame: object) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    err_console.print("\n[yellow]Interrupted[/yellow]")
    sys.exit(ExitCode.INTERRUPTED)


signal.signal(signal.SIGINT, _handle_interrupt)


@app.callback()
def main(
    ctx: typer.Context,
    account: Annotated[
        str | None,
        typer.Option(
            "--account",
            "-a",
            help="Account name to use (overrides default).",
            envvar="RT_ACCOUNT",
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress output.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug output.",
        ),
    ] = False,
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """RescueTime data CLI - fetch analytic reports and daily summaries."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["account"] = account
    ctx.obj["quiet"] = quiet
    ctx.obj["verbose"] = verbose
    ctx.obj["client"] = None
    ctx.obj["config"] = None


def _register_commands() -> None:
    """Register all command groups with the main app."""
    from rescuetime_data.cli.commands.auth import auth_app
    from rescuetime_data.cli.commands.fetch import fetch_app

    app.add_typer(auth_app, name="auth", help="Manage API keys and accounts.")
    app.add_typer(fetch_app, name="fetch", help="Fetch data from RescueTime.")


_register_commands()


if __name__ == "__main__":
    app()

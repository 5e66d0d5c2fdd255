"""API key and account management commands.

This module provides commands for managing RescueTime accounts:
- list: List configured accounts
- add: Add a new account
- remove: Remove an account
- switch: Set default account
- show: Display account details
"""

from __future__ import annotations

import os
import sys
from typing import Annotated

import typer

from rescuetime_data._internal.config import API_KEY_ENV_VAR, AccountInfo
from rescuetime_data.cli.options import FormatOption
from rescuetime_data.cli.utils import (
    ExitCode,
    err_console,
    get_config,
    handle_errors,
    output_result,
)

auth_app = typer.Typer(
    name="auth",
    help="Manage API keys and accounts.",
    no_args_is_help=True,
    rich_markup_mode="markdown",
)


def _account_dict(account: AccountInfo) -> dict[str, object]:
    return {
        "name": account.name,
        "api_key": account.api_key_hint,
        "is_default": account.is_default,
    }


@auth_app.command("list")
@handle_errors
def list_accounts(
    ctx: typer.Context,
    format: FormatOption = "json",
) -> None:
    """List all configured accounts.

    Examples:

        rt auth list
        rt auth list --format table
    """
    config = get_config(ctx)
    data = [_account_dict(acc) for acc in config.list_accounts()]
    output_result(ctx, data, columns=["name", "api_key", "is_default"], format=format)


@auth_app.command("add")
@handle_errors
def add_account(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Account name (identifier).")],
    default: Annotated[
        bool,
        typer.Option("--default", "-d", help="Set as default account."),
    ] = False,
    key_stdin: Annotated[
        bool,
        typer.Option("--key-stdin", help="Read the API key from stdin."),
    ] = False,
    format: FormatOption = "json",
) -> None:
    """Add a new account to the configuration.

    The API key can be provided via:
    - Interactive prompt (default, hidden input)
    - RESCUETIME_API_KEY environment variable
    - --key-stdin flag to read from stdin

    Examples:

        rt auth add personal
        RESCUETIME_API_KEY=B63... rt auth add personal
        echo "$KEY" | rt auth add work --key-stdin --default
    """
    api_key: str
    if key_stdin:
        if sys.stdin.isatty():
            err_console.print("[red]Error:[/red] --key-stdin requires piped input")
            raise typer.Exit(ExitCode.INVALID_ARGS)
        api_key = sys.stdin.read().strip()
    elif os.environ.get(API_KEY_ENV_VAR):
        api_key = os.environ[API_KEY_ENV_VAR]
    else:
        api_key = typer.prompt("RescueTime API key", hide_input=True)

    if not api_key.strip():
        err_console.print("[red]Error:[/red] API key is required")
        raise typer.Exit(ExitCode.INVALID_ARGS)

    config = get_config(ctx)
    config.add_account(name, api_key)
    if default:
        config.set_default(name)

    output_result(ctx, {"added": name, "is_default": default}, format=format)


@auth_app.command("remove")
@handle_errors
def remove_account(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Account name to remove.")],
    force: Annotated[
        bool,
        typer.Option("--force", help="Skip confirmation prompt."),
    ] = False,
    format: FormatOption = "json",
) -> None:
    """Remove an account from the configuration.

    Examples:

        rt auth remove work
        rt auth remove old --force
    """
    if not force and not typer.confirm(f"Remove account '{name}'?"):
        err_console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    get_config(ctx).remove_account(name)
    output_result(ctx, {"removed": name}, format=format)


@auth_app.command("switch")
@handle_errors
def switch_account(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Account name to set as default.")],
    format: FormatOption = "json",
) -> None:
    """Set an account as the default.

    Examples:

        rt auth switch work
    """
    get_config(ctx).set_default(name)
    output_result(ctx, {"default": name}, format=format)


@auth_app.command("show")
@handle_errors
def show_account(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(help="Account name (default if omitted)."),
    ] = None,
    format: FormatOption = "json",
) -> None:
    """Show account details (the key is shown as its last four characters).

    Examples:

        rt auth show
        rt auth show work --format table
    """
    config = get_config(ctx)

    account: AccountInfo
    if name is None:
        default_account = next(
            (acc for acc in config.list_accounts() if acc.is_default), None
        )
        if default_account is None:
            err_console.print("[red]Error:[/red] No default account configured.")
            raise typer.Exit(ExitCode.GENERAL_ERROR)
        account = default_account
    else:
        account = config.get_account(name)

    output_result(ctx, _account_dict(account), format=format)

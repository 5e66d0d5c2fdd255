"""CLI utility functions and error handling.

This module provides shared utilities for the CLI:
- ExitCode enum for standardized exit codes
- handle_errors decorator for exception-to-exit-code mapping
- Console instances for stdout/stderr separation
- Lazy client/config initialization helpers
- status_spinner context manager for network calls
"""

from __future__ import annotations

import functools
import logging
import os
import sys
from collections.abc import Callable, Generator
from contextlib import contextmanager
from enum import IntEnum
from typing import TYPE_CHECKING, Any, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler

from rescuetime_data.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    AuthenticationError,
    ConfigError,
    DecodeError,
    InvalidBaseURLError,
    MissingCredentialError,
    QueryError,
    RescueTimeDataError,
    ServerError,
    TransportError,
    UnknownTimezoneError,
)

if TYPE_CHECKING:
    from rescuetime_data._internal.config import ConfigManager
    from rescuetime_data.client import RescueTime

# Data output goes to stdout; progress/errors go to stderr
console = Console()
err_console = Console(stderr=True, no_color=bool(os.environ.get("NO_COLOR")))


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands.

    Exit codes follow Unix conventions:
    - 0: Success
    - 1-5: Application-specific errors
    - 130: Interrupted by SIGINT (Ctrl+C)
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 2
    INVALID_ARGS = 3
    NOT_FOUND = 4
    NETWORK_ERROR = 5
    INTERRUPTED = 130


F = TypeVar("F", bound=Callable[..., Any])


def handle_errors(func: F) -> F:
    """Decorator to convert library exceptions to CLI exit codes.

    Maps RescueTimeDataError subclasses to exit codes and prints
    formatted error messages to stderr.

    Usage:
        @handle_errors
        def my_command(ctx: typer.Context):
            rt = get_client(ctx)
            output_result(ctx, rt.daily_summary().to_dict())
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except MissingCredentialError as e:
            err_console.print(f"[red]Missing API key:[/red] {e.message}")
            err_console.print(
                "Set RESCUETIME_API_KEY or run 'rt auth add <name>' first."
            )
            raise typer.Exit(ExitCode.AUTH_ERROR) from None
        except AuthenticationError as e:
            err_console.print(f"[red]Authentication error:[/red] {e.message}")
            raise typer.Exit(ExitCode.AUTH_ERROR) from None
        except AccountNotFoundError as e:
            err_console.print(f"[red]Account not found:[/red] {e.account_name}")
            if e.available_accounts:
                err_console.print(
                    f"Available accounts: {', '.join(e.available_accounts)}"
                )
            raise typer.Exit(ExitCode.NOT_FOUND) from None
        except AccountExistsError as e:
            err_console.print(f"[red]Account exists:[/red] {e.account_name}")
            raise typer.Exit(ExitCode.GENERAL_ERROR) from None
        except QueryError as e:
            err_console.print(f"[red]Query error:[/red] {e.message}")
            if e.request_params:
                for key, value in e.request_params.items():
                    err_console.print(f"  [dim]{key}:[/dim] {value}")
            raise typer.Exit(ExitCode.INVALID_ARGS) from None
        except ServerError as e:
            err_console.print(f"[red]Server error:[/red] {e.message}")
            raise typer.Exit(ExitCode.GENERAL_ERROR) from None
        except TransportError as e:
            err_console.print(f"[red]Network error:[/red] {e.message}")
            raise typer.Exit(ExitCode.NETWORK_ERROR) from None
        except UnknownTimezoneError as e:
            err_console.print(f"[red]Invalid timezone:[/red] {e.message}")
            raise typer.Exit(ExitCode.INVALID_ARGS) from None
        except DecodeError as e:
            err_console.print(f"[red]Could not decode response:[/red] {e.message}")
            raise typer.Exit(ExitCode.GENERAL_ERROR) from None
        except (ConfigError, InvalidBaseURLError) as e:
            err_console.print(f"[red]Configuration error:[/red] {e.message}")
            raise typer.Exit(ExitCode.GENERAL_ERROR) from None
        except RescueTimeDataError as e:
            err_console.print(f"[red]Error:[/red] {e.message}")
            raise typer.Exit(ExitCode.GENERAL_ERROR) from None
        except ValueError as e:
            err_console.print(f"[red]Invalid argument:[/red] {e}")
            raise typer.Exit(ExitCode.INVALID_ARGS) from None

    return wrapper  # type: ignore[return-value]


def configure_logging(verbose: bool) -> None:
    """Route library logs to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def get_client(ctx: typer.Context) -> RescueTime:
    """Get or create the RescueTime client from context.

    Respects the --account global option. The client is cached in the
    context for reuse.

    Raises:
        MissingCredentialError: If no API key can be resolved.
        AccountNotFoundError: If specified account doesn't exist.
    """
    from rescuetime_data.client import RescueTime

    if ctx.obj.get("client") is None:
        ctx.obj["client"] = RescueTime(
            account=ctx.obj.get("account"),
            _config_manager=get_config(ctx),
        )
    client: RescueTime = ctx.obj["client"]
    return client


def get_config(ctx: typer.Context) -> ConfigManager:
    """Get or create ConfigManager from context."""
    from rescuetime_data._internal.config import ConfigManager

    if ctx.obj.get("config") is None:
        ctx.obj["config"] = ConfigManager()
    config: ConfigManager = ctx.obj["config"]
    return config


def output_result(
    ctx: typer.Context,
    data: dict[str, Any] | list[Any],
    columns: list[str] | None = None,
    *,
    format: str | None = None,
) -> None:
    """Output data in the requested format.

    Args:
        ctx: Typer context with global options in obj dict.
        data: Data to output (dict or list).
        columns: Column names for table and CSV output (collected from data
            if None).
        format: Output format. If None, falls back to ctx.obj["format"] or "json".
    """
    from rescuetime_data.cli.formatters import (
        format_csv,
        format_json,
        format_jsonl,
        format_plain,
        format_table,
    )

    fmt = format if format is not None else ctx.obj.get("format", "json")

    if fmt == "table":
        console.print(format_table(data, columns))
        return

    if fmt == "jsonl":
        output = format_jsonl(data)
    elif fmt == "csv":
        output = format_csv(data, columns)
    elif fmt == "plain":
        output = format_plain(data)
    else:
        output = format_json(data)
    # Activity and document names may contain brackets; print them verbatim
    console.print(
        output,
        highlight=False,
        markup=False,
        soft_wrap=True,
        end="" if fmt == "csv" else "\n",
    )


@contextmanager
def status_spinner(ctx: typer.Context, message: str) -> Generator[None, None, None]:
    """Show a spinner on stderr while the wrapped call runs.

    Skipped with --quiet and when stderr is not a TTY.

    Example:
        with status_spinner(ctx, "Fetching daily summary..."):
            result = rt.daily_summary()
    """
    quiet = ctx.obj.get("quiet", False) if ctx.obj else False

    if quiet or not sys.stderr.isatty():
        yield
    else:
        with err_console.status(message):
            yield

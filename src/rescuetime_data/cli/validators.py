"""CLI parameter validators for Literal types.

Validates string inputs from Typer against the query parameter Literal
types before a request is made, providing early error feedback.
"""

from __future__ import annotations

from typing import Any, cast, get_args

import typer

from rescuetime_data._literal_types import Perspective, ResolutionTime, RestrictKind
from rescuetime_data.cli.utils import ExitCode, err_console


def validate_literal(value: str, literal_type: Any, param_name: str) -> Any:
    """Validate a CLI string against a Literal type.

    Args:
        value: String value from CLI.
        literal_type: The Literal type to validate against.
        param_name: Parameter name for error message.

    Returns:
        The validated value.

    Raises:
        typer.Exit: With code 3 (INVALID_ARGS) if invalid.
    """
    valid_values = get_args(literal_type)
    if value not in valid_values:
        err_console.print(
            f"[red]Error:[/red] Invalid value for {param_name}: '{value}'"
        )
        err_console.print(f"Valid options: {', '.join(valid_values)}")
        raise typer.Exit(ExitCode.INVALID_ARGS)
    return value


def validate_perspective(
    value: str, param_name: str = "--perspective"
) -> Perspective:
    """Validate the report layout ("rank" or "interval")."""
    validate_literal(value, Perspective, param_name)
    return cast(Perspective, value)


def validate_resolution(
    value: str, param_name: str = "--resolution"
) -> ResolutionTime:
    """Validate the interval bucket size."""
    validate_literal(value, ResolutionTime, param_name)
    return cast(ResolutionTime, value)


def validate_restrict_kind(value: str, param_name: str = "--kind") -> RestrictKind:
    """Validate the row aggregation kind."""
    validate_literal(value, RestrictKind, param_name)
    return cast(RestrictKind, value)

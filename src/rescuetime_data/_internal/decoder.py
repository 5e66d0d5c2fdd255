"""Response decoders for the RescueTime APIs.

The analytic data endpoint returns a self-describing table:

    {
        "notes": "data is an array of arrays (rows), ...",
        "row_headers": ["Rank", "Time Spent (seconds)", "Number of People",
                        "Activity", "Category", "Productivity"],
        "rows": [[1, 3600, 1, "code", "Editing & IDEs", 2], ...]
    }

Which columns appear, and in what order, depends on the query. Each header
is reduced to a canonical key ("Time Spent (seconds)" -> "TimeSpentSeconds")
and looked up in ROW_FIELDS, an explicit table of the columns this library
understands. Positions whose key is not in the table are skipped.

The daily summary feed has a fixed schema and is validated directly against
the DailySummary model.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, TypeAdapter, ValidationError

from rescuetime_data.exceptions import (
    BadTimestampError,
    FieldDecodeError,
    MalformedResponseError,
    UnknownTimezoneError,
)
from rescuetime_data.types import (
    AnalyticDataQueryParameters,
    AnalyticDataResult,
    AnalyticRow,
    DailySummary,
    DailySummaryResult,
)

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[0-9A-Za-z]+")
_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}")
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def canonicalize_header(header: str) -> str:
    """Reduce a column header to its canonical key.

    Each run of ASCII letters and digits has its first character
    upper-cased; the runs are concatenated and everything else dropped.

    Example:
        ```python
        canonicalize_header("Time Spent (seconds)")  # "TimeSpentSeconds"
        canonicalize_header("Number of People")      # "NumberOfPeople"
        ```
    """
    return "".join(w[:1].upper() + w[1:] for w in _WORD_RE.findall(header))


def build_header_index(headers: list[str]) -> dict[int, str]:
    """Map each column position to the canonical key of its header."""
    return {i: canonicalize_header(h) for i, h in enumerate(headers)}


# =============================================================================
# Column Decoders
# =============================================================================


@dataclass(frozen=True)
class _ColumnContext:
    header: str
    field: str
    row_index: int
    zone: tzinfo | None


def _decode_int(value: Any, ctx: _ColumnContext) -> int:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise FieldDecodeError(
            ctx.field, ctx.header, value, "integer", row_index=ctx.row_index
        )
    return value


def _decode_str(value: Any, ctx: _ColumnContext) -> str:
    if not isinstance(value, str):
        raise FieldDecodeError(
            ctx.field, ctx.header, value, "string", row_index=ctx.row_index
        )
    return value


def _decode_date(value: Any, ctx: _ColumnContext) -> datetime:
    if not isinstance(value, str) or not _TIMESTAMP_RE.fullmatch(value):
        raise BadTimestampError(value, row_index=ctx.row_index)
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise BadTimestampError(value, row_index=ctx.row_index) from e
    if ctx.zone is not None:
        # Same wall clock, zone attached; the service reports local time
        parsed = parsed.replace(tzinfo=ctx.zone)
    return parsed


ColumnDecoder = Callable[[Any, _ColumnContext], Any]

ROW_FIELDS: dict[str, tuple[str, ColumnDecoder]] = {
    "Date": ("date", _decode_date),
    "Rank": ("rank", _decode_int),
    "TimeSpentSeconds": ("time_spent_seconds", _decode_int),
    "NumberOfPeople": ("number_of_people", _decode_int),
    "Person": ("person", _decode_str),
    "Activity": ("activity", _decode_str),
    "Category": ("category", _decode_str),
    "Productivity": ("productivity", _decode_int),
}
"""Canonical header key -> (AnalyticRow attribute, value decoder)."""


def resolve_timezone(timezone: str | None) -> tzinfo | None:
    """Look up an IANA zone name; empty or None means naive timestamps.

    Raises:
        UnknownTimezoneError: If the name is not a known zone.
    """
    if not timezone:
        return None
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        # Directory names such as "America" surface as OSError with tzdata
        raise UnknownTimezoneError(timezone) from e


# =============================================================================
# Analytic Data
# =============================================================================


class _AnalyticPayload(BaseModel):
    notes: str | None = None
    row_headers: list[str]
    rows: list[list[Any]]


def _load_json(raw: bytes | str) -> Any:
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedResponseError(
            f"Response is not valid JSON: {e}",
            details={"body": raw[:200] if isinstance(raw, str) else repr(raw[:200])},
        ) from e


def _describe_validation_error(e: ValidationError) -> str:
    first = e.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{location}: {first['msg']}"


def _bind_columns(headers: list[str]) -> dict[int, tuple[str, str, ColumnDecoder]]:
    """Resolve which positions feed which row attributes.

    Returns:
        Position -> (header, attribute, decoder) for known columns only.
    """
    bindings: dict[int, tuple[str, str, ColumnDecoder]] = {}
    claimed: dict[str, int] = {}
    for index, key in build_header_index(headers).items():
        entry = ROW_FIELDS.get(key)
        if entry is None:
            logger.debug("Ignoring unknown column %r", headers[index])
            continue
        attr, decoder = entry
        if attr in claimed:
            earlier = claimed[attr]
            logger.warning(
                "Headers %r and %r both map to field %r; using the later column",
                headers[earlier],
                headers[index],
                attr,
            )
            del bindings[earlier]
        claimed[attr] = index
        bindings[index] = (headers[index], attr, decoder)
    return bindings


def decode_analytic_data(
    raw: bytes | str | dict[str, Any],
    timezone: str | None = None,
    parameters: AnalyticDataQueryParameters | None = None,
) -> AnalyticDataResult:
    """Decode an analytic data response into typed rows.

    Args:
        raw: Response body, as bytes/str JSON or an already parsed object.
        timezone: IANA zone to attach to row dates. Empty or None leaves
            dates naive.
        parameters: Query parameters to record on the result.

    Returns:
        AnalyticDataResult with one row per server row, in server order.

    Raises:
        MalformedResponseError: Body is not JSON or lacks row_headers/rows,
            or a row is longer than the header list.
        UnknownTimezoneError: timezone is not a known zone.
        BadTimestampError: A date value is not YYYY-MM-DDTHH:MM:SS.
        FieldDecodeError: A value has the wrong JSON type for its column.

    Example:
        ```python
        body = b'''{"notes": "", "row_headers": ["Time Spent (seconds)",
                   "Activity", "Category", "Productivity"],
                   "rows": [[3600, "editor", "software", 2]]}'''
        result = decode_analytic_data(body)
        result.rows[0].activity      # "editor"
        result.rows[0].rank          # None
        ```
    """
    obj = raw if isinstance(raw, dict) else _load_json(raw)
    try:
        payload = _AnalyticPayload.model_validate(obj)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Unexpected analytic data structure: {_describe_validation_error(e)}"
        ) from e

    zone = resolve_timezone(timezone)
    headers = payload.row_headers
    bindings = _bind_columns(headers)

    rows: list[AnalyticRow] = []
    for row_index, entry in enumerate(payload.rows):
        if len(entry) > len(headers):
            raise MalformedResponseError(
                f"Row {row_index} has {len(entry)} values "
                f"but there are {len(headers)} headers",
                details={"row_index": row_index},
            )
        values: dict[str, Any] = {}
        for index, value in enumerate(entry):
            binding = bindings.get(index)
            if binding is None or value is None:
                continue
            header, attr, decoder = binding
            ctx = _ColumnContext(
                header=header, field=attr, row_index=row_index, zone=zone
            )
            values[attr] = decoder(value, ctx)
        rows.append(AnalyticRow(**values))

    logger.debug(
        "Decoded %d analytic rows (%d/%d columns recognized)",
        len(rows),
        len(bindings),
        len(headers),
    )
    return AnalyticDataResult(
        notes=payload.notes or "",
        row_headers=list(headers),
        rows=rows,
        parameters=parameters,
        timezone=timezone or None,
    )


# =============================================================================
# Daily Summary
# =============================================================================

_DAILY_SUMMARIES = TypeAdapter(list[DailySummary])


def decode_daily_summary(raw: bytes | str | list[Any]) -> DailySummaryResult:
    """Decode the daily summary feed.

    Args:
        raw: Response body, as bytes/str JSON or an already parsed list.

    Raises:
        MalformedResponseError: Body is not a JSON array of summary objects.
    """
    obj = raw if isinstance(raw, list) else _load_json(raw)
    try:
        summaries = _DAILY_SUMMARIES.validate_python(obj)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Unexpected daily summary structure: {_describe_validation_error(e)}"
        ) from e
    return DailySummaryResult(summaries=summaries)

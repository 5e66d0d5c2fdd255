"""Request and result types for rescuetime_data operations.

Result types are immutable frozen dataclasses with:
- Lazy DataFrame conversion via the `df` property (computed once, then cached)
- JSON serialization via the `to_dict()` method (all values JSON-serializable)
- Full type hints for IDE/mypy support

Analytic data rows are sparse: the service decides which columns a report
carries, so every row field is optional. ``None`` means the column was not
present in the response; ``0`` is a real value (a productivity of 0 is
"neutral").

DailySummary is a frozen Pydantic model because its schema is fixed and it
is validated straight from the response JSON.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from datetime import date, datetime, timedelta
from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict

# =============================================================================
# Query Parameters
# =============================================================================

QUERY_PARAMETER_NAMES: dict[str, str] = {
    "perspective": "perspective",
    "resolution_time": "resolution_time",
    "restrict_group": "restrict_group",
    "restrict_begin": "restrict_begin",
    "restrict_end": "restrict_end",
    "restrict_kind": "restrict_kind",
    "restrict_thing": "restrict_thing",
    "restrict_thingy": "restrict_thingy",
}
"""Attribute name -> wire-level query key for AnalyticDataQueryParameters."""


@dataclass(frozen=True)
class AnalyticDataQueryParameters:
    """Filters for the analytic data endpoint.

    Every field is optional. Unset or empty values are left out of the
    request entirely, so the service applies its own defaults.

    Example:
        ```python
        params = AnalyticDataQueryParameters(
            perspective="interval",
            resolution_time="day",
            restrict_begin=date(2024, 1, 1),
            restrict_end=date(2024, 1, 7),
            restrict_kind="activity",
        )
        params.to_query()
        # {"perspective": "interval", "resolution_time": "day",
        #  "restrict_begin": "2024-01-01", ...}
        ```
    """

    perspective: str | None = None
    """Report layout ("rank" or "interval")."""

    resolution_time: str | None = None
    """Interval bucket size ("month", "week", "day", "hour", "minute")."""

    restrict_group: str | None = None
    """Limit to a named group of people (team reports)."""

    restrict_begin: str | date | None = None
    """First day of the report (YYYY-MM-DD)."""

    restrict_end: str | date | None = None
    """Last day of the report (YYYY-MM-DD)."""

    restrict_kind: str | None = None
    """Row aggregation ("category", "activity", "productivity", ...)."""

    restrict_thing: str | None = None
    """Limit to one category or activity name."""

    restrict_thingy: str | None = None
    """Limit to one document or sub-activity within restrict_thing."""

    def to_query(self) -> dict[str, str]:
        """Serialize set parameters to wire-level query keys.

        Returns:
            Mapping of query key to value. Unset and empty values are omitted.
        """
        query: dict[str, str] = {}
        for attr, wire_name in QUERY_PARAMETER_NAMES.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, datetime):
                text = value.date().isoformat()
            elif isinstance(value, date):
                text = value.isoformat()
            else:
                text = str(value)
            if text == "":
                continue
            query[wire_name] = text
        return query

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output (unset parameters omitted)."""
        return self.to_query()


# =============================================================================
# Analytic Data Result Types
# =============================================================================


@dataclass(frozen=True)
class AnalyticRow:
    """One decoded row of an analytic data report.

    Only the fields whose column appeared in the response are populated;
    the rest are None.
    """

    date: datetime | None = None
    """Interval start (interval perspective). Naive unless a timezone was given."""

    rank: int | None = None
    """Position within the ranked result (rank perspective)."""

    time_spent_seconds: int | None = None
    """Time spent, in seconds."""

    number_of_people: int | None = None
    """Number of people contributing to the row."""

    person: str | None = None
    """Person name (team reports)."""

    activity: str | None = None
    """Application or website name."""

    category: str | None = None
    """Category name."""

    productivity: int | None = None
    """Productivity score, -2 (very distracting) to 2 (very productive)."""

    @property
    def time_spent(self) -> timedelta | None:
        """Time spent as a timedelta, or None when the column was absent."""
        if self.time_spent_seconds is None:
            return None
        return timedelta(seconds=self.time_spent_seconds)

    def present_fields(self) -> list[str]:
        """Names of the populated fields, in declaration order."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    def to_dict(self) -> dict[str, Any]:
        """Serialize populated fields for JSON output.

        Returns:
            Dictionary of populated fields only. Dates are ISO strings.
        """
        result: dict[str, Any] = {}
        for name in self.present_fields():
            value = getattr(self, name)
            result[name] = value.isoformat() if isinstance(value, datetime) else value
        return result


@dataclass(frozen=True)
class AnalyticDataResult:
    """Decoded analytic data report.

    Example:
        ```python
        result = rt.analytic_data(perspective="rank", restrict_kind="activity")
        print(result.row_headers)  # ['Rank', 'Time Spent (seconds)', ...]
        for row in result:
            print(row.activity, row.time_spent)
        result.df.head()
        ```
    """

    notes: str
    """Free-text notes from the service describing the report."""

    row_headers: list[str]
    """Column names exactly as returned by the service."""

    rows: list[AnalyticRow] = field(default_factory=list)
    """Decoded rows, in server order."""

    parameters: AnalyticDataQueryParameters | None = None
    """Parameters the report was requested with, if known."""

    timezone: str | None = None
    """Timezone attached to row dates, or None for naive dates."""

    _df_cache: pd.DataFrame | None = field(default=None, repr=False, compare=False)

    def present_fields(self) -> list[str]:
        """Row fields that at least one row populates, in declaration order."""
        names = [f.name for f in fields(AnalyticRow)]
        seen = {name for row in self.rows for name in row.present_fields()}
        return [name for name in names if name in seen]

    @property
    def df(self) -> pd.DataFrame:
        """Convert rows to a DataFrame.

        Columns are the row fields populated by this report. Missing values
        within a column become NaN/None.
        """
        if self._df_cache is not None:
            return self._df_cache

        columns = self.present_fields()
        records = [{name: getattr(row, name) for name in columns} for row in self.rows]
        result_df = (
            pd.DataFrame(records, columns=columns)
            if records
            else pd.DataFrame(columns=columns)
        )

        object.__setattr__(self, "_df_cache", result_df)
        return result_df

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "notes": self.notes,
            "row_headers": list(self.row_headers),
            "rows": [row.to_dict() for row in self.rows],
            "row_count": len(self.rows),
            "parameters": self.parameters.to_dict() if self.parameters else None,
            "timezone": self.timezone,
        }

    def __len__(self) -> int:
        """Return number of rows."""
        return len(self.rows)

    def __iter__(self) -> Iterator[AnalyticRow]:
        """Iterate over rows."""
        return iter(self.rows)


# =============================================================================
# Daily Summary Types
# =============================================================================


class DailySummary(BaseModel):
    """One day of the daily summary feed.

    Fixed schema decoded by field name. Fields the service omits keep their
    zero/empty defaults; fields this model does not know are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = 0
    date: str = ""
    productivity_pulse: float = 0.0

    all_distracting_duration_formatted: str = ""
    all_distracting_hours: float = 0.0
    all_distracting_percentage: float = 0.0
    all_productive_duration_formatted: str = ""
    all_productive_hours: float = 0.0
    all_productive_percentage: float = 0.0
    business_duration_formatted: str = ""
    business_hours: float = 0.0
    business_percentage: float = 0.0
    communication_and_scheduling_duration_formatted: str = ""
    communication_and_scheduling_hours: float = 0.0
    communication_and_scheduling_percentage: float = 0.0
    design_and_composition_duration_formatted: str = ""
    design_and_composition_hours: float = 0.0
    design_and_composition_percentage: float = 0.0
    distracting_duration_formatted: str = ""
    distracting_hours: float = 0.0
    distracting_percentage: float = 0.0
    entertainment_duration_formatted: str = ""
    entertainment_hours: float = 0.0
    entertainment_percentage: float = 0.0
    neutral_duration_formatted: str = ""
    neutral_hours: float = 0.0
    neutral_percentage: float = 0.0
    news_duration_formatted: str = ""
    news_hours: float = 0.0
    news_percentage: float = 0.0
    productive_duration_formatted: str = ""
    productive_hours: float = 0.0
    productive_percentage: float = 0.0
    reference_and_learning_duration_formatted: str = ""
    reference_and_learning_hours: float = 0.0
    reference_and_learning_percentage: float = 0.0
    shopping_duration_formatted: str = ""
    shopping_hours: float = 0.0
    shopping_percentage: float = 0.0
    social_networking_duration_formatted: str = ""
    social_networking_hours: float = 0.0
    social_networking_percentage: float = 0.0
    software_development_duration_formatted: str = ""
    software_development_hours: float = 0.0
    software_development_percentage: float = 0.0
    total_duration_formatted: str = ""
    total_hours: float = 0.0
    uncategorized_duration_formatted: str = ""
    uncategorized_hours: float = 0.0
    uncategorized_percentage: float = 0.0
    utilities_duration_formatted: str = ""
    utilities_hours: float = 0.0
    utilities_percentage: float = 0.0
    very_distracting_duration_formatted: str = ""
    very_distracting_hours: float = 0.0
    very_distracting_percentage: float = 0.0
    very_productive_duration_formatted: str = ""
    very_productive_hours: float = 0.0
    very_productive_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return self.model_dump()


@dataclass(frozen=True)
class DailySummaryResult:
    """Decoded daily summary feed, most recent day first (service order)."""

    summaries: list[DailySummary] = field(default_factory=list)
    """One summary per day."""

    _df_cache: pd.DataFrame | None = field(default=None, repr=False, compare=False)

    @property
    def df(self) -> pd.DataFrame:
        """Convert to DataFrame, one row per day, one column per summary field."""
        if self._df_cache is not None:
            return self._df_cache

        columns = list(DailySummary.model_fields)
        result_df = (
            pd.DataFrame([s.model_dump() for s in self.summaries], columns=columns)
            if self.summaries
            else pd.DataFrame(columns=columns)
        )

        object.__setattr__(self, "_df_cache", result_df)
        return result_df

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "summaries": [s.to_dict() for s in self.summaries],
            "count": len(self.summaries),
        }

    def __len__(self) -> int:
        """Return number of days."""
        return len(self.summaries)

    def __iter__(self) -> Iterator[DailySummary]:
        """Iterate over days."""
        return iter(self.summaries)

"""Shared Literal type aliases for analytic data query parameters.

These types are exported from the public API and can be used by
library consumers for their own type hints. The request builder does not
enforce them; the service is the authority on accepted values.

Example:
    from rescuetime_data import Perspective, RescueTime

    def ranked(rt: RescueTime, perspective: Perspective = "rank") -> None:
        result = rt.analytic_data(perspective=perspective)
"""

from __future__ import annotations

from typing import Literal

# Report layout: ranked totals or one row per time interval
Perspective = Literal["rank", "interval"]

# Bucket size for interval reports
ResolutionTime = Literal["month", "week", "day", "hour", "minute"]

# What each row aggregates over
RestrictKind = Literal[
    "category", "activity", "productivity", "document", "efficiency", "overview"
]

__all__ = ["Perspective", "ResolutionTime", "RestrictKind"]

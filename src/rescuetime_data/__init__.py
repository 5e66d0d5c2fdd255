"""
rescuetime_data - Python client for the RescueTime data APIs.

Fetch analytic data reports and the daily summary feed as typed records,
with pandas DataFrames one attribute away.
"""

from rescuetime_data._literal_types import Perspective, ResolutionTime, RestrictKind
from rescuetime_data.client import RescueTime
from rescuetime_data.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    APIError,
    AuthenticationError,
    BadTimestampError,
    ConfigError,
    DecodeError,
    FieldDecodeError,
    InvalidBaseURLError,
    MalformedResponseError,
    MissingCredentialError,
    QueryError,
    RescueTimeDataError,
    ServerError,
    TransportError,
    UnknownTimezoneError,
)
from rescuetime_data.types import (
    AnalyticDataQueryParameters,
    AnalyticDataResult,
    AnalyticRow,
    DailySummary,
    DailySummaryResult,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "RescueTime",
    # Type aliases
    "Perspective",
    "ResolutionTime",
    "RestrictKind",
    # Exceptions
    "AccountExistsError",
    "AccountNotFoundError",
    "APIError",
    "AuthenticationError",
    "BadTimestampError",
    "ConfigError",
    "DecodeError",
    "FieldDecodeError",
    "InvalidBaseURLError",
    "MalformedResponseError",
    "MissingCredentialError",
    "QueryError",
    "RescueTimeDataError",
    "ServerError",
    "TransportError",
    "UnknownTimezoneError",
    # Types
    "AnalyticDataQueryParameters",
    "AnalyticDataResult",
    "AnalyticRow",
    "DailySummary",
    "DailySummaryResult",
]

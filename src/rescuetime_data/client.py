"""RescueTime facade.

The RescueTime class is the entry point for fetching data: it resolves the
API key, owns the HTTP client, and exposes one method per endpoint.

Example:
    Credentials from the environment or ~/.rescuetime/config.toml:

    ```python
    with RescueTime(timezone="Europe/Berlin") as rt:
        result = rt.analytic_data(
            perspective="interval",
            resolution_time="hour",
            restrict_kind="activity",
        )
        print(result.df.head())
    ```

    Explicit key:

    ```python
    rt = RescueTime(api_key="B63...")
    for day in rt.daily_summary():
        print(day.date, day.productivity_pulse)
    rt.close()
    ```
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from pydantic import SecretStr

from rescuetime_data._internal.api_client import RescueTimeAPIClient
from rescuetime_data._internal.config import ConfigManager, Credentials
from rescuetime_data.types import (
    AnalyticDataQueryParameters,
    AnalyticDataResult,
    DailySummaryResult,
)

if TYPE_CHECKING:
    from types import TracebackType


class RescueTime:
    """Entry point for RescueTime data operations.

    Instances hold only immutable configuration (credentials, default
    timezone, timeout) plus a lazily created HTTP client, so one instance
    can serve many calls.
    """

    def __init__(
        self,
        api_key: str | None = None,
        account: str | None = None,
        timezone: str | None = None,
        *,
        timeout: float = 30.0,
        # Dependency injection for testing
        _config_manager: ConfigManager | None = None,
        _api_client: RescueTimeAPIClient | None = None,
    ) -> None:
        """Create a RescueTime client.

        Credentials are resolved in priority order:
        1. The api_key argument, when given (an empty string is kept and
           makes every fetch raise MissingCredentialError)
        2. RESCUETIME_API_KEY environment variable
        3. Named account from config file (if account specified)
        4. Default account from config file

        Args:
            api_key: Explicit API key.
            account: Named account from config file to use.
            timezone: Default IANA zone attached to analytic row dates.
            timeout: Request timeout in seconds.
            _config_manager: Injected ConfigManager for testing.
            _api_client: Injected RescueTimeAPIClient for testing.

        Raises:
            MissingCredentialError: If no API key can be resolved.
            AccountNotFoundError: If named account doesn't exist.
        """
        self._config_manager = _config_manager or ConfigManager()
        self._account_name = account
        self._timezone = timezone
        self._timeout = timeout

        self._credentials: Credentials
        if api_key is not None:
            self._credentials = Credentials(api_key=SecretStr(api_key))
        elif _api_client is not None:
            self._credentials = _api_client._credentials
        else:
            self._credentials = self._config_manager.resolve_credentials(account)

        self._api_client: RescueTimeAPIClient | None = _api_client

    def __enter__(self) -> RescueTime:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager, releasing the HTTP client."""
        self.close()

    def close(self) -> None:
        """Release the HTTP client."""
        if self._api_client is not None:
            self._api_client.close()
            self._api_client = None

    @property
    def timezone(self) -> str | None:
        """Default timezone attached to analytic row dates."""
        return self._timezone

    @property
    def api(self) -> RescueTimeAPIClient:
        """The underlying API client, created on first use."""
        if self._api_client is None:
            self._api_client = RescueTimeAPIClient(
                self._credentials, timeout=self._timeout
            )
        return self._api_client

    def analytic_data(
        self,
        parameters: AnalyticDataQueryParameters | None = None,
        *,
        timezone: str | None = None,
        perspective: str | None = None,
        resolution_time: str | None = None,
        restrict_group: str | None = None,
        restrict_begin: str | date | None = None,
        restrict_end: str | date | None = None,
        restrict_kind: str | None = None,
        restrict_thing: str | None = None,
        restrict_thingy: str | None = None,
    ) -> AnalyticDataResult:
        """Fetch an analytic data report.

        Pass either a prepared AnalyticDataQueryParameters or the individual
        filters as keywords; not both.

        Args:
            parameters: Prepared report filters.
            timezone: IANA zone for row dates; overrides the instance default.
            perspective: "rank" or "interval".
            resolution_time: "month", "week", "day", "hour" or "minute".
            restrict_group: Group name (team reports).
            restrict_begin: First day of the report.
            restrict_end: Last day of the report.
            restrict_kind: Row aggregation, e.g. "activity" or "category".
            restrict_thing: Limit to one category or activity.
            restrict_thingy: Limit to one document within restrict_thing.

        Returns:
            AnalyticDataResult with typed rows.

        Raises:
            ValueError: If both parameters and keyword filters are given.
            MissingCredentialError: API key is empty (no request is sent).
            TransportError: Network/connection errors.
            APIError: The service rejected the request.
            DecodeError: The response could not be decoded.
        """
        filters = AnalyticDataQueryParameters(
            perspective=perspective,
            resolution_time=resolution_time,
            restrict_group=restrict_group,
            restrict_begin=restrict_begin,
            restrict_end=restrict_end,
            restrict_kind=restrict_kind,
            restrict_thing=restrict_thing,
            restrict_thingy=restrict_thingy,
        )
        if parameters is not None:
            if filters.to_query():
                raise ValueError(
                    "Pass either parameters or keyword filters, not both"
                )
            filters = parameters

        zone = timezone if timezone is not None else self._timezone
        return self.api.get_analytic_data(filters, timezone=zone)

    def daily_summary(self) -> DailySummaryResult:
        """Fetch the daily summary feed.

        Raises:
            MissingCredentialError: API key is empty (no request is sent).
            TransportError: Network/connection errors.
            APIError: The service rejected the request.
            MalformedResponseError: The response could not be decoded.
        """
        return self.api.get_daily_summary()

"""RescueTime API Client.

Low-level HTTP client for the RescueTime data APIs. Handles:
- Request URL construction (API key and ``format=json`` on every request)
- A single blocking GET per call, with a configurable timeout
- Mapping HTTP and in-band error responses to library exceptions
- Handing response bodies to the decoders

There is no retry, caching, or pagination: every call is one
round trip that yields a decoded result or raises.

This is a private implementation detail. Users should use the RescueTime
facade instead of accessing this module directly.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from rescuetime_data._internal.config import Credentials
from rescuetime_data._internal.decoder import (
    decode_analytic_data,
    decode_daily_summary,
)
from rescuetime_data.exceptions import (
    AuthenticationError,
    InvalidBaseURLError,
    MalformedResponseError,
    MissingCredentialError,
    QueryError,
    ServerError,
    TransportError,
)
from rescuetime_data.types import (
    AnalyticDataQueryParameters,
    AnalyticDataResult,
    DailySummaryResult,
)

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

ENDPOINTS: dict[str, str] = {
    "analytic_data": "https://www.rescuetime.com/anapi/data",
    "daily_summary": "https://www.rescuetime.com/anapi/daily_summary_feed",
}

API_KEY_PARAM = "key"
FORMAT_PARAM = "format"
_REDACTED = "REDACTED"


def build_url(base_url: str, params: dict[str, str], api_key: str) -> str:
    """Compose a request URL from an endpoint and query parameters.

    The base URL's own query string, if any, is replaced. ``key`` and
    ``format=json`` are always set, overriding values of the same name in
    params. Keys are emitted in sorted order.

    Args:
        base_url: Absolute http(s) endpoint URL.
        params: Wire-level query parameters.
        api_key: RescueTime API key.

    Returns:
        The full request URL.

    Raises:
        InvalidBaseURLError: If base_url is not an absolute http(s) URL.

    Example:
        ```python
        build_url(ENDPOINTS["analytic_data"], {"perspective": "rank"}, "abc")
        # "https://www.rescuetime.com/anapi/data?format=json&key=abc&perspective=rank"
        ```
    """
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidBaseURLError(base_url, str(e)) from e
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidBaseURLError(base_url, "expected an absolute http(s) URL")

    query = dict(params)
    query[API_KEY_PARAM] = api_key
    query[FORMAT_PARAM] = "json"
    return str(url.copy_with(params=dict(sorted(query.items()))))


def redact_url(url: str) -> str:
    """Return url with the API key query value masked."""
    parsed = httpx.URL(url)
    if API_KEY_PARAM not in parsed.params:
        return url
    return str(parsed.copy_set_param(API_KEY_PARAM, _REDACTED))


class RescueTimeAPIClient:
    """Low-level HTTP client for the RescueTime APIs.

    Example:
        ```python
        from rescuetime_data._internal.config import ConfigManager
        from rescuetime_data._internal.api_client import RescueTimeAPIClient

        credentials = ConfigManager().resolve_credentials()

        with RescueTimeAPIClient(credentials) as client:
            result = client.get_analytic_data(
                AnalyticDataQueryParameters(perspective="rank")
            )
        ```
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        timeout: float = 30.0,
        _transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            credentials: Immutable authentication credentials.
            timeout: Request timeout in seconds.
            _transport: Internal parameter for testing with MockTransport.
        """
        self._credentials = credentials
        self._timeout = timeout
        self._client: httpx.Client | None = None
        self._transport = _transport

    def _ensure_client(self) -> httpx.Client:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> RescueTimeAPIClient:
        """Enter context manager."""
        self._ensure_client()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager, closing client."""
        self.close()

    def _require_api_key(self) -> str:
        """Return the API key, or raise before any network I/O.

        Raises:
            MissingCredentialError: If the key is empty.
        """
        if not self._credentials.has_api_key:
            raise MissingCredentialError("Please provide a RescueTime API key.")
        return self._credentials.api_key.get_secret_value()

    def _build_request_url(self, endpoint: str, params: dict[str, str]) -> str:
        return build_url(ENDPOINTS[endpoint], params, self._require_api_key())

    def _handle_response(
        self,
        response: httpx.Response,
        *,
        request_url: str,
        request_params: dict[str, str],
    ) -> Any:
        """Handle API response, raising appropriate exceptions.

        Status code handling:
            - 200-299: Parse and return JSON (in-band ``error`` raises QueryError)
            - 401, 403: AuthenticationError
            - other 4xx: QueryError
            - 5xx: ServerError

        Args:
            response: The HTTP response to handle.
            request_url: Redacted request URL.
            request_params: Query parameters sent, without the key.

        Returns:
            Parsed JSON body.
        """
        response_body: str | dict[str, Any] | None = None
        parsed: Any = None
        try:
            parsed = response.json()
            response_body = parsed if isinstance(parsed, dict) else None
        except (json.JSONDecodeError, UnicodeDecodeError):
            response_body = response.text[:500] if response.text else None

        context: dict[str, Any] = {
            "status_code": response.status_code,
            "response_body": response_body,
            "request_method": "GET",
            "request_url": request_url,
            "request_params": request_params,
        }

        def _error_message(default: str) -> str:
            if isinstance(response_body, dict):
                return str(
                    response_body.get("messages")
                    or response_body.get("error")
                    or default
                )
            if isinstance(response_body, str) and response_body:
                return response_body[:200]
            return default

        if response.status_code in (401, 403):
            raise AuthenticationError(
                _error_message("Invalid API key."),
                **context,
            )
        if response.status_code >= 500:
            raise ServerError(
                f"Server error: {_error_message(str(response.status_code))}",
                **context,
            )
        if response.status_code >= 400:
            raise QueryError(_error_message("Request rejected"), **context)

        if parsed is None and response_body is not None:
            raise MalformedResponseError(
                "Response is not valid JSON",
                details={"request_url": request_url, "body": response_body},
            )
        if isinstance(parsed, dict) and "error" in parsed:
            # The service reports bad keys and parameters with a 200
            message = _error_message(str(parsed["error"]))
            if "key" in str(parsed["error"]).lower():
                raise AuthenticationError(message, **context)
            raise QueryError(message, **context)
        return parsed

    def _get(self, endpoint: str, params: dict[str, str]) -> Any:
        """Issue one GET against a named endpoint and return parsed JSON.

        Raises:
            MissingCredentialError: API key is empty (no request is sent).
            TransportError: Network/connection errors.
            AuthenticationError: API key rejected.
            QueryError: Request rejected.
            ServerError: Server-side errors (5xx).
            MalformedResponseError: Body is not JSON.
        """
        url = self._build_request_url(endpoint, params)
        safe_url = redact_url(url)
        logger.debug("GET %s", safe_url)

        client = self._ensure_client()
        try:
            response = client.get(url, timeout=self._timeout)
        except httpx.HTTPError as e:
            raise TransportError(
                f"HTTP error: {type(e).__name__}",
                request_method="GET",
                request_url=safe_url,
            ) from e

        logger.debug("GET %s -> %d", safe_url, response.status_code)
        return self._handle_response(
            response, request_url=safe_url, request_params=params
        )

    # =========================================================================
    # Endpoints
    # =========================================================================

    def get_analytic_data(
        self,
        parameters: AnalyticDataQueryParameters | None = None,
        timezone: str | None = None,
    ) -> AnalyticDataResult:
        """Fetch and decode an analytic data report.

        Args:
            parameters: Report filters. None requests the service defaults.
            timezone: IANA zone to attach to row dates; None keeps them naive.

        Returns:
            Decoded AnalyticDataResult.

        Raises:
            MissingCredentialError: API key is empty (no request is sent).
            TransportError: Network/connection errors.
            APIError: The service rejected the request.
            DecodeError: The body could not be decoded.
        """
        parameters = parameters or AnalyticDataQueryParameters()
        payload = self._get("analytic_data", parameters.to_query())
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )
        return decode_analytic_data(payload, timezone=timezone, parameters=parameters)

    def get_daily_summary(self) -> DailySummaryResult:
        """Fetch and decode the daily summary feed.

        Raises:
            MissingCredentialError: API key is empty (no request is sent).
            TransportError: Network/connection errors.
            APIError: The service rejected the request.
            MalformedResponseError: The body is not a list of summaries.
        """
        payload = self._get("daily_summary", {})
        if not isinstance(payload, list):
            raise MalformedResponseError(
                f"Expected a JSON array, got {type(payload).__name__}"
            )
        return decode_daily_summary(payload)

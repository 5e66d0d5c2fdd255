"""Exception hierarchy for rescuetime_data.

All library exceptions inherit from RescueTimeDataError, enabling callers to
catch all library errors with a single except clause while still allowing
fine-grained handling when needed.

Errors fall into four groups:
- Configuration: missing or unknown credentials, bad config files
- Transport: the HTTP round trip itself failed
- API: the service answered with an error status or an in-band error
- Decoding: the response body could not be mapped onto typed records

API keys never appear in messages or details; request URLs are redacted
before they reach an exception.
"""

from __future__ import annotations

from typing import Any


class RescueTimeDataError(Exception):
    """Base exception for all rescuetime_data errors.

    All library exceptions inherit from this class, allowing callers to:
    - Catch all library errors: except RescueTimeDataError
    - Handle specific errors: except BadTimestampError
    - Serialize errors: error.to_dict()
    """

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code for programmatic handling.
            details: Additional structured data about the error.
        """
        super().__init__(message)
        self._message = message
        self._code = code
        self._details = details or {}

    @property
    def code(self) -> str:
        """Machine-readable error code."""
        return self._code

    @property
    def message(self) -> str:
        """Human-readable error message."""
        return self._message

    @property
    def details(self) -> dict[str, Any]:
        """Additional structured error data."""
        return self._details

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/JSON output.

        Returns:
            Dictionary with keys: code, message, details.
            All values are JSON-serializable.
        """
        return {
            "code": self._code,
            "message": self._message,
            "details": self._details,
        }

    def __str__(self) -> str:
        """Return human-readable error message."""
        return self._message

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return (
            f"{self.__class__.__name__}(message={self._message!r}, code={self._code!r})"
        )


# Configuration Exceptions


class ConfigError(RescueTimeDataError):
    """Base for configuration-related errors.

    Raised when there's a problem with configuration files, environment
    variables, or credential resolution.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigError.

        Args:
            message: Human-readable error message.
            details: Additional structured data.
        """
        super().__init__(message, code="CONFIG_ERROR", details=details)


class MissingCredentialError(ConfigError):
    """No API key is available for the request.

    Raised before any network I/O when the API key is empty, and by
    credential resolution when neither the environment nor the config
    file provides one.
    """

    def __init__(
        self,
        message: str = "No RescueTime API key provided.",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize MissingCredentialError.

        Args:
            message: Human-readable error message.
            details: Additional structured data.
        """
        super().__init__(message, details=details)
        self._code = "MISSING_CREDENTIAL"


class AccountNotFoundError(ConfigError):
    """Named account does not exist in configuration.

    The available_accounts property lists valid account names to help users.
    """

    def __init__(
        self,
        account_name: str,
        available_accounts: list[str] | None = None,
    ) -> None:
        """Initialize AccountNotFoundError.

        Args:
            account_name: The requested account name that wasn't found.
            available_accounts: List of valid account names for suggestions.
        """
        available = available_accounts or []
        if available:
            available_str = ", ".join(f"'{a}'" for a in available)
            message = (
                f"Account '{account_name}' not found. "
                f"Available accounts: {available_str}"
            )
        else:
            message = f"Account '{account_name}' not found. No accounts configured."

        details = {
            "account_name": account_name,
            "available_accounts": available,
        }
        super().__init__(message, details=details)
        self._code = "ACCOUNT_NOT_FOUND"

    @property
    def account_name(self) -> str:
        """The requested account name that wasn't found."""
        return str(self._details.get("account_name", ""))

    @property
    def available_accounts(self) -> list[str]:
        """List of valid account names."""
        accounts = self._details.get("available_accounts")
        return accounts if isinstance(accounts, list) else []


class AccountExistsError(ConfigError):
    """Account name already exists in configuration."""

    def __init__(self, account_name: str) -> None:
        """Initialize AccountExistsError.

        Args:
            account_name: The conflicting account name.
        """
        message = f"Account '{account_name}' already exists."
        details = {"account_name": account_name}
        super().__init__(message, details=details)
        self._code = "ACCOUNT_EXISTS"

    @property
    def account_name(self) -> str:
        """The conflicting account name."""
        return str(self._details.get("account_name", ""))


# Request Exceptions


class InvalidBaseURLError(RescueTimeDataError):
    """Endpoint URL could not be parsed into an absolute http(s) URL."""

    def __init__(self, base_url: str, reason: str | None = None) -> None:
        """Initialize InvalidBaseURLError.

        Args:
            base_url: The URL that failed to parse.
            reason: Optional parser message.
        """
        message = f"Invalid base URL: {base_url!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message, code="INVALID_BASE_URL", details={"base_url": base_url}
        )

    @property
    def base_url(self) -> str:
        """The URL that failed to parse."""
        return str(self._details.get("base_url", ""))


class TransportError(RescueTimeDataError):
    """Network-level failure: connection, timeout, or protocol error.

    The original httpx exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        request_method: str | None = None,
        request_url: str | None = None,
    ) -> None:
        """Initialize TransportError.

        Args:
            message: Human-readable error message.
            request_method: HTTP method used.
            request_url: Redacted request URL.
        """
        details: dict[str, Any] = {}
        if request_method is not None:
            details["request_method"] = request_method
        if request_url is not None:
            details["request_url"] = request_url
        super().__init__(message, code="HTTP_ERROR", details=details)


# API Exceptions - Base class for HTTP errors


class APIError(RescueTimeDataError):
    """Base class for RescueTime API errors.

    Provides structured access to HTTP request/response context:

    Example:
        ```python
        try:
            result = rt.analytic_data(perspective="rank")
        except APIError as e:
            print(f"Status: {e.status_code}")
            print(f"Response: {e.response_body}")
            print(f"Request URL: {e.request_url}")
        ```
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        response_body: str | dict[str, Any] | None = None,
        request_method: str | None = None,
        request_url: str | None = None,
        request_params: dict[str, Any] | None = None,
        code: str = "API_ERROR",
    ) -> None:
        """Initialize APIError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from response.
            response_body: Raw response body (string or parsed dict).
            request_method: HTTP method used.
            request_url: Redacted request URL.
            request_params: Query parameters sent, without the API key.
            code: Machine-readable error code.
        """
        self._status_code = status_code
        self._response_body = response_body
        self._request_method = request_method
        self._request_url = request_url
        self._request_params = request_params

        details: dict[str, Any] = {
            "status_code": status_code,
        }
        if response_body is not None:
            details["response_body"] = response_body
        if request_method is not None:
            details["request_method"] = request_method
        if request_url is not None:
            details["request_url"] = request_url
        if request_params is not None:
            details["request_params"] = request_params

        super().__init__(message, code=code, details=details)

    @property
    def status_code(self) -> int:
        """HTTP status code from response."""
        return self._status_code

    @property
    def response_body(self) -> str | dict[str, Any] | None:
        """Raw response body (string or parsed dict)."""
        return self._response_body

    @property
    def request_method(self) -> str | None:
        """HTTP method used."""
        return self._request_method

    @property
    def request_url(self) -> str | None:
        """Redacted request URL."""
        return self._request_url

    @property
    def request_params(self) -> dict[str, Any] | None:
        """Query parameters sent, without the API key."""
        return self._request_params


class AuthenticationError(APIError):
    """The service rejected the API key (HTTP 401/403)."""

    def __init__(
        self,
        message: str = "Authentication failed",
        *,
        status_code: int = 401,
        response_body: str | dict[str, Any] | None = None,
        request_method: str | None = None,
        request_url: str | None = None,
        request_params: dict[str, Any] | None = None,
    ) -> None:
        """Initialize AuthenticationError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code (default 401).
            response_body: Raw response body.
            request_method: HTTP method used.
            request_url: Redacted request URL.
            request_params: Query parameters sent.
        """
        super().__init__(
            message,
            status_code=status_code,
            response_body=response_body,
            request_method=request_method,
            request_url=request_url,
            request_params=request_params,
            code="AUTH_FAILED",
        )


class QueryError(APIError):
    """The service refused the query (HTTP 4xx or an in-band ``error`` body).

    Example:
        ```python
        try:
            rt.analytic_data(restrict_kind="nonsense")
        except QueryError as e:
            print(f"Query failed: {e.message}")
            print(f"Request params: {e.request_params}")
        ```
    """

    def __init__(
        self,
        message: str = "Query execution failed",
        *,
        status_code: int = 400,
        response_body: str | dict[str, Any] | None = None,
        request_method: str | None = None,
        request_url: str | None = None,
        request_params: dict[str, Any] | None = None,
    ) -> None:
        """Initialize QueryError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code (default 400).
            response_body: Raw response body with error details.
            request_method: HTTP method used.
            request_url: Redacted request URL.
            request_params: Query parameters sent.
        """
        super().__init__(
            message,
            status_code=status_code,
            response_body=response_body,
            request_method=request_method,
            request_url=request_url,
            request_params=request_params,
            code="QUERY_FAILED",
        )


class ServerError(APIError):
    """RescueTime server error (HTTP 5xx)."""

    def __init__(
        self,
        message: str = "Server error",
        *,
        status_code: int = 500,
        response_body: str | dict[str, Any] | None = None,
        request_method: str | None = None,
        request_url: str | None = None,
        request_params: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ServerError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code (5xx).
            response_body: Raw response body with error details.
            request_method: HTTP method used.
            request_url: Redacted request URL.
            request_params: Query parameters sent.
        """
        super().__init__(
            message,
            status_code=status_code,
            response_body=response_body,
            request_method=request_method,
            request_url=request_url,
            request_params=request_params,
            code="SERVER_ERROR",
        )


# Decoding Exceptions


class DecodeError(RescueTimeDataError):
    """Base for errors raised while decoding a response body."""

    def __init__(
        self,
        message: str,
        code: str = "DECODE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize DecodeError.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            details: Additional structured data.
        """
        super().__init__(message, code=code, details=details)


class MalformedResponseError(DecodeError):
    """Body is not valid JSON or lacks the expected top-level structure."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize MalformedResponseError.

        Args:
            message: Human-readable error message.
            details: Additional structured data.
        """
        super().__init__(message, code="MALFORMED_RESPONSE", details=details)


class UnknownTimezoneError(DecodeError):
    """Timezone name is not a recognized IANA zone."""

    def __init__(self, timezone: str) -> None:
        """Initialize UnknownTimezoneError.

        Args:
            timezone: The unresolvable zone name.
        """
        super().__init__(
            f"Unknown timezone: {timezone!r}",
            code="UNKNOWN_TIMEZONE",
            details={"timezone": timezone},
        )

    @property
    def timezone(self) -> str:
        """The unresolvable zone name."""
        return str(self._details.get("timezone", ""))


class BadTimestampError(DecodeError):
    """Date column value does not match ``YYYY-MM-DDTHH:MM:SS``."""

    def __init__(self, value: Any, *, row_index: int | None = None) -> None:
        """Initialize BadTimestampError.

        Args:
            value: The raw value that failed to parse.
            row_index: Zero-based position of the offending row.
        """
        details: dict[str, Any] = {"value": repr(value)}
        if row_index is not None:
            details["row_index"] = row_index
        super().__init__(
            f"Bad timestamp {value!r}: expected YYYY-MM-DDTHH:MM:SS",
            code="BAD_TIMESTAMP",
            details=details,
        )


class FieldDecodeError(DecodeError):
    """A column value cannot be coerced to its field's type.

    Example:
        ```python
        try:
            rt.analytic_data()
        except FieldDecodeError as e:
            print(e.field, e.header, e.details["value"])
        ```
    """

    def __init__(
        self,
        field: str,
        header: str,
        value: Any,
        expected: str,
        *,
        row_index: int | None = None,
    ) -> None:
        """Initialize FieldDecodeError.

        Args:
            field: Row attribute being populated.
            header: Server header the column came from.
            value: The raw value.
            expected: Human-readable expected type.
            row_index: Zero-based position of the offending row.
        """
        details: dict[str, Any] = {
            "field": field,
            "header": header,
            "value": repr(value),
            "expected": expected,
        }
        if row_index is not None:
            details["row_index"] = row_index
        super().__init__(
            f"Column {header!r} expected {expected}, got {type(value).__name__} "
            f"{value!r}",
            code="FIELD_DECODE_ERROR",
            details=details,
        )

    @property
    def field(self) -> str:
        """Row attribute being populated."""
        return str(self._details.get("field", ""))

    @property
    def header(self) -> str:
        """Server header the column came from."""
        return str(self._details.get("header", ""))

"""Unit tests for the RescueTime API client."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from pydantic import SecretStr

from rescuetime_data._internal.api_client import (
    ENDPOINTS,
    RescueTimeAPIClient,
    build_url,
    redact_url,
)
from rescuetime_data._internal.config import Credentials
from rescuetime_data.exceptions import (
    AuthenticationError,
    InvalidBaseURLError,
    MalformedResponseError,
    MissingCredentialError,
    QueryError,
    ServerError,
    TransportError,
)
from rescuetime_data.types import AnalyticDataQueryParameters

Handler = Callable[[httpx.Request], httpx.Response]
ClientFactory = Callable[[Handler], RescueTimeAPIClient]


# =============================================================================
# URL Construction
# =============================================================================


class TestBuildUrl:
    """Tests for request URL composition."""

    def test_key_and_format_always_set(self) -> None:
        """Every URL carries the key and format=json."""
        url = httpx.URL(build_url(ENDPOINTS["daily_summary"], {}, "abc"))
        assert url.params["key"] == "abc"
        assert url.params["format"] == "json"
        assert url.path == "/anapi/daily_summary_feed"

    def test_sorted_query(self) -> None:
        """Query keys appear in sorted order."""
        url = build_url(
            ENDPOINTS["analytic_data"],
            {"restrict_kind": "activity", "perspective": "rank"},
            "abc",
        )
        assert url == (
            "https://www.rescuetime.com/anapi/data"
            "?format=json&key=abc&perspective=rank&restrict_kind=activity"
        )

    def test_params_cannot_override_key_or_format(self) -> None:
        """Caller-supplied key/format lose to the real ones."""
        url = httpx.URL(
            build_url(
                ENDPOINTS["analytic_data"], {"key": "evil", "format": "csv"}, "abc"
            )
        )
        assert url.params.get_list("key") == ["abc"]
        assert url.params.get_list("format") == ["json"]

    def test_existing_query_replaced(self) -> None:
        """The base URL's own query string is dropped."""
        url = httpx.URL(build_url("https://example.com/api?stale=1", {}, "abc"))
        assert "stale" not in url.params
        assert url.host == "example.com"

    def test_values_are_encoded(self) -> None:
        """Special characters survive a round trip through the URL."""
        url = httpx.URL(
            build_url(
                ENDPOINTS["analytic_data"], {"restrict_thing": "Editing & IDEs"}, "k"
            )
        )
        assert url.params["restrict_thing"] == "Editing & IDEs"

    @pytest.mark.parametrize(
        "base_url", ["", "/anapi/data", "ftp://example.com/data", "http://"]
    )
    def test_invalid_base_url(self, base_url: str) -> None:
        """Relative and non-http(s) URLs are rejected."""
        with pytest.raises(InvalidBaseURLError) as exc_info:
            build_url(base_url, {}, "abc")
        assert exc_info.value.code == "INVALID_BASE_URL"


class TestRedactUrl:
    """Tests for API key masking."""

    def test_key_masked(self) -> None:
        """The key value is replaced and the rest kept."""
        url = build_url(ENDPOINTS["analytic_data"], {"perspective": "rank"}, "secret")
        redacted = redact_url(url)
        assert "secret" not in redacted
        assert httpx.URL(redacted).params["key"] == "REDACTED"
        assert httpx.URL(redacted).params["perspective"] == "rank"

    def test_url_without_key_unchanged(self) -> None:
        """Nothing to mask, nothing changes."""
        assert redact_url("https://example.com/a?b=c") == "https://example.com/a?b=c"


# =============================================================================
# Client Lifecycle
# =============================================================================


class TestClientLifecycle:
    """Tests for lazy client creation and cleanup."""

    def test_context_manager_closes(self, mock_credentials: Credentials) -> None:
        """Leaving the block releases the HTTP client."""
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json=[]))
        with RescueTimeAPIClient(mock_credentials, _transport=transport) as client:
            assert client._client is not None
        assert client._client is None

    def test_close_is_idempotent(self, mock_credentials: Credentials) -> None:
        """Closing twice is harmless."""
        client = RescueTimeAPIClient(mock_credentials)
        client.close()
        client.close()
        assert client._client is None


# =============================================================================
# Requests
# =============================================================================


class TestRequests:
    """Tests for what goes over the wire."""

    def test_analytic_data_request(
        self, mock_client_factory: ClientFactory, rank_payload: dict[str, Any]
    ) -> None:
        """Parameters, key and format reach the data endpoint."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=rank_payload)

        params = AnalyticDataQueryParameters(
            perspective="rank", restrict_kind="activity", restrict_thing=""
        )
        with mock_client_factory(handler) as client:
            result = client.get_analytic_data(params)

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/anapi/data"
        assert dict(request.url.params) == {
            "format": "json",
            "key": "test_api_key",
            "perspective": "rank",
            "restrict_kind": "activity",
        }
        assert len(result) == 3
        assert result.parameters == params

    def test_analytic_data_default_parameters(
        self, mock_client_factory: ClientFactory, rank_payload: dict[str, Any]
    ) -> None:
        """No parameters sends only key and format."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=rank_payload)

        with mock_client_factory(handler) as client:
            client.get_analytic_data()

        assert set(seen[0].url.params) == {"format", "key"}

    def test_timezone_passed_to_decoder(
        self, mock_client_factory: ClientFactory, interval_payload: dict[str, Any]
    ) -> None:
        """Dates carry the requested zone."""
        with mock_client_factory(
            lambda r: httpx.Response(200, json=interval_payload)
        ) as client:
            result = client.get_analytic_data(timezone="Asia/Tokyo")

        assert result.timezone == "Asia/Tokyo"
        first = result.rows[0].date
        assert first is not None
        assert first.tzinfo is not None
        assert first.hour == 10

    def test_daily_summary_request(
        self,
        mock_client_factory: ClientFactory,
        daily_summary_payload: list[dict[str, Any]],
    ) -> None:
        """The feed endpoint is called with key and format only."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=daily_summary_payload)

        with mock_client_factory(handler) as client:
            result = client.get_daily_summary()

        assert seen[0].url.path == "/anapi/daily_summary_feed"
        assert set(seen[0].url.params) == {"format", "key"}
        assert [s.date for s in result] == ["2023-05-01", "2023-04-30"]


class TestMissingApiKey:
    """An empty key fails before any request is sent."""

    @pytest.mark.parametrize("endpoint", ["analytic", "summary"])
    def test_no_request_sent(self, endpoint: str) -> None:
        """MissingCredentialError, and the transport is never called."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=[])

        credentials = Credentials(api_key=SecretStr(""))
        client = RescueTimeAPIClient(
            credentials, _transport=httpx.MockTransport(handler)
        )
        with pytest.raises(MissingCredentialError):
            if endpoint == "analytic":
                client.get_analytic_data()
            else:
                client.get_daily_summary()
        assert calls == []


# =============================================================================
# Error Mapping
# =============================================================================


class TestErrorMapping:
    """Tests for HTTP and in-band error handling."""

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_status(self, mock_client_factory: ClientFactory, status: int) -> None:
        """401 and 403 raise AuthenticationError."""
        with (
            mock_client_factory(
                lambda r: httpx.Response(status, json={"error": "bad key"})
            ) as client,
            pytest.raises(AuthenticationError) as exc_info,
        ):
            client.get_daily_summary()
        assert exc_info.value.status_code == status
        assert exc_info.value.message == "bad key"

    def test_client_error_status(self, mock_client_factory: ClientFactory) -> None:
        """Other 4xx statuses raise QueryError with request context."""
        params = AnalyticDataQueryParameters(restrict_kind="nonsense")
        with (
            mock_client_factory(
                lambda r: httpx.Response(400, text="bad kind")
            ) as client,
            pytest.raises(QueryError) as exc_info,
        ):
            client.get_analytic_data(params)
        assert exc_info.value.status_code == 400
        assert exc_info.value.request_params == {"restrict_kind": "nonsense"}
        assert exc_info.value.response_body == "bad kind"

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_error(
        self, mock_client_factory: ClientFactory, status: int
    ) -> None:
        """5xx statuses raise ServerError."""
        with (
            mock_client_factory(lambda r: httpx.Response(status, text="")) as client,
            pytest.raises(ServerError) as exc_info,
        ):
            client.get_daily_summary()
        assert exc_info.value.status_code == status

    def test_in_band_error(self, mock_client_factory: ClientFactory) -> None:
        """A 200 carrying an error object raises QueryError."""
        body = {"error": "# argument error", "messages": "restrict_kind is invalid"}
        with (
            mock_client_factory(lambda r: httpx.Response(200, json=body)) as client,
            pytest.raises(QueryError) as exc_info,
        ):
            client.get_analytic_data()
        assert exc_info.value.message == "restrict_kind is invalid"
        assert exc_info.value.status_code == 200

    @pytest.mark.parametrize("status", [400, 200])
    def test_messages_preferred_over_error(
        self, mock_client_factory: ClientFactory, status: int
    ) -> None:
        """4xx and in-band error bodies pick the same message."""
        body = {"error": "# argument error", "messages": "restrict_kind is invalid"}
        with (
            mock_client_factory(lambda r: httpx.Response(status, json=body)) as client,
            pytest.raises(QueryError) as exc_info,
        ):
            client.get_analytic_data()
        assert exc_info.value.message == "restrict_kind is invalid"

    def test_in_band_key_error(self, mock_client_factory: ClientFactory) -> None:
        """An in-band error about the key raises AuthenticationError."""
        body = {"error": "# key not found", "messages": "key not found"}
        with (
            mock_client_factory(lambda r: httpx.Response(200, json=body)) as client,
            pytest.raises(AuthenticationError),
        ):
            client.get_analytic_data()

    def test_transport_failure(self, mock_client_factory: ClientFactory) -> None:
        """Connection errors raise TransportError with the cause chained."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with (
            mock_client_factory(handler) as client,
            pytest.raises(TransportError) as exc_info,
        ):
            client.get_daily_summary()
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.code == "HTTP_ERROR"

    def test_timeout(self, mock_client_factory: ClientFactory) -> None:
        """Timeouts are transport failures."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with (
            mock_client_factory(handler) as client,
            pytest.raises(TransportError),
        ):
            client.get_analytic_data()

    def test_non_json_body(self, mock_client_factory: ClientFactory) -> None:
        """A 200 that is not JSON raises MalformedResponseError."""
        with (
            mock_client_factory(
                lambda r: httpx.Response(200, text="<html>maintenance</html>")
            ) as client,
            pytest.raises(MalformedResponseError),
        ):
            client.get_analytic_data()

    def test_wrong_top_level_type(
        self,
        mock_client_factory: ClientFactory,
        daily_summary_payload: list[dict[str, Any]],
    ) -> None:
        """An array where an object is expected is malformed."""
        with (
            mock_client_factory(
                lambda r: httpx.Response(200, json=daily_summary_payload)
            ) as client,
            pytest.raises(MalformedResponseError),
        ):
            client.get_analytic_data()

    def test_summary_wrong_top_level_type(
        self, mock_client_factory: ClientFactory, rank_payload: dict[str, Any]
    ) -> None:
        """An object where an array is expected is malformed."""
        with (
            mock_client_factory(
                lambda r: httpx.Response(200, json=rank_payload)
            ) as client,
            pytest.raises(MalformedResponseError),
        ):
            client.get_daily_summary()


class TestKeyNeverLeaks:
    """The API key must not appear in errors or logs."""

    def test_error_details_redacted(self, mock_client_factory: ClientFactory) -> None:
        """Request URLs on errors carry the masked key."""
        with (
            mock_client_factory(lambda r: httpx.Response(500, text="oops")) as client,
            pytest.raises(ServerError) as exc_info,
        ):
            client.get_daily_summary()
        error = exc_info.value
        assert "test_api_key" not in str(error.to_dict())
        assert error.request_url is not None
        assert "REDACTED" in error.request_url

    def test_transport_error_redacted(self, mock_client_factory: ClientFactory) -> None:
        """Transport errors carry the masked URL."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with (
            mock_client_factory(handler) as client,
            pytest.raises(TransportError) as exc_info,
        ):
            client.get_daily_summary()
        assert "test_api_key" not in str(exc_info.value.to_dict())

    def test_debug_log_redacted(
        self,
        mock_client_factory: ClientFactory,
        daily_summary_payload: list[dict[str, Any]],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Debug request logging masks the key."""
        with (
            caplog.at_level("DEBUG", logger="rescuetime_data"),
            mock_client_factory(
                lambda r: httpx.Response(200, json=daily_summary_payload)
            ) as client,
        ):
            client.get_daily_summary()
        assert caplog.records
        assert all("test_api_key" not in r.getMessage() for r in caplog.records)

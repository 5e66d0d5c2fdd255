"""Shared fixtures for rescuetime_data tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import pytest
from hypothesis import Phase, Verbosity, settings
from pydantic import SecretStr

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "default",
    max_examples=100,
    verbosity=Verbosity.normal,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)

settings.register_profile(
    "ci",
    max_examples=200,
    verbosity=Verbosity.normal,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
    derandomize=True,
)

settings.register_profile(
    "dev",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))

if TYPE_CHECKING:
    from rescuetime_data._internal.api_client import RescueTimeAPIClient
    from rescuetime_data._internal.config import ConfigManager, Credentials


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials and config out of every test."""
    monkeypatch.delenv("RESCUETIME_API_KEY", raising=False)
    monkeypatch.delenv("RT_CONFIG_PATH", raising=False)
    monkeypatch.delenv("RT_ACCOUNT", raising=False)
    monkeypatch.delenv("RT_TIMEZONE", raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_path(temp_dir: Path) -> Path:
    """Return path for a temporary config file."""
    return temp_dir / "config.toml"


@pytest.fixture
def config_manager(config_path: Path) -> ConfigManager:
    """Create a ConfigManager with a temporary config file."""
    from rescuetime_data._internal.config import ConfigManager

    return ConfigManager(config_path=config_path)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def mock_credentials() -> Credentials:
    """Create mock credentials for API client testing."""
    from rescuetime_data._internal.config import Credentials

    return Credentials(api_key=SecretStr("test_api_key"))


@pytest.fixture
def mock_client_factory(
    mock_credentials: Credentials,
) -> Callable[[Callable[[httpx.Request], httpx.Response]], RescueTimeAPIClient]:
    """Factory for creating mock API clients.

    Usage:
        def test_something(mock_client_factory):
            def handler(request):
                return httpx.Response(200, json=[])

            with mock_client_factory(handler) as client:
                result = client.get_daily_summary()
    """
    from rescuetime_data._internal.api_client import RescueTimeAPIClient

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> RescueTimeAPIClient:
        transport = httpx.MockTransport(handler)
        return RescueTimeAPIClient(mock_credentials, _transport=transport)

    return factory


# =============================================================================
# Sample Payloads
# =============================================================================


@pytest.fixture
def rank_payload() -> dict[str, Any]:
    """Analytic data response for the rank perspective."""
    return {
        "notes": "data is an array of arrays (rows), column names for rows in "
        "row_headers",
        "row_headers": [
            "Rank",
            "Time Spent (seconds)",
            "Number of People",
            "Activity",
            "Category",
            "Productivity",
        ],
        "rows": [
            [1, 7200, 1, "code", "Editing & IDEs", 2],
            [2, 1800, 1, "slack", "Instant Message", 0],
            [3, 600, 1, "youtube.com", "Video", -2],
        ],
    }


@pytest.fixture
def interval_payload() -> dict[str, Any]:
    """Analytic data response for the interval perspective."""
    return {
        "notes": "",
        "row_headers": [
            "Date",
            "Time Spent (seconds)",
            "Number of People",
            "Activity",
            "Category",
            "Productivity",
        ],
        "rows": [
            ["2023-05-01T10:00:00", 3600, 1, "code", "Editing & IDEs", 2],
            ["2023-05-01T11:00:00", 900, 1, "mail", "Email", 1],
        ],
    }


@pytest.fixture
def daily_summary_payload() -> list[dict[str, Any]]:
    """Two days of the daily summary feed."""
    return [
        {
            "id": 1682899200,
            "date": "2023-05-01",
            "productivity_pulse": 74,
            "very_productive_percentage": 45.2,
            "very_productive_hours": 3.1,
            "very_productive_duration_formatted": "3h 6m",
            "total_hours": 6.85,
            "total_duration_formatted": "6h 51m",
            "all_productive_duration_formatted": "4h 2m",
            "all_distracting_duration_formatted": "1h 10m",
        },
        {
            "id": 1682812800,
            "date": "2023-04-30",
            "productivity_pulse": 51,
            "total_hours": 2.0,
            "total_duration_formatted": "2h",
        },
    ]


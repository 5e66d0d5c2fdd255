"""Shared fixtures for CLI integration tests."""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from rescuetime_data._internal.config import AccountInfo
from rescuetime_data.types import (
    AnalyticDataQueryParameters,
    AnalyticDataResult,
    AnalyticRow,
    DailySummary,
    DailySummaryResult,
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def mock_rescuetime() -> MagicMock:
    """Create a mock RescueTime client for testing fetch commands."""
    rt = MagicMock()

    rt.analytic_data.return_value = AnalyticDataResult(
        notes="data is an array of arrays (rows)",
        row_headers=["Date", "Time Spent (seconds)", "Activity", "Productivity"],
        rows=[
            AnalyticRow(
                date=datetime(2023, 5, 1, 10),
                time_spent_seconds=3600,
                activity="code",
                productivity=2,
            ),
            AnalyticRow(
                date=datetime(2023, 5, 1, 11),
                time_spent_seconds=900,
                activity="[mail]",
                productivity=1,
            ),
        ],
        parameters=AnalyticDataQueryParameters(perspective="interval"),
    )

    rt.daily_summary.return_value = DailySummaryResult(
        summaries=[
            DailySummary(
                id=1682899200,
                date="2023-05-01",
                productivity_pulse=74,
                total_duration_formatted="6h 51m",
            ),
            DailySummary(
                id=1682812800,
                date="2023-04-30",
                productivity_pulse=51,
                total_duration_formatted="2h",
            ),
        ]
    )

    return rt


@pytest.fixture
def patch_get_client(mock_rescuetime: MagicMock) -> Generator[MagicMock, None, None]:
    """Patch get_client to return the mock RescueTime client."""
    with patch(
        "rescuetime_data.cli.commands.fetch.get_client",
        return_value=mock_rescuetime,
    ):
        yield mock_rescuetime


@pytest.fixture
def mock_config_manager() -> MagicMock:
    """Create a mock ConfigManager for testing auth commands."""
    config = MagicMock()

    config.list_accounts.return_value = [
        AccountInfo(name="personal", api_key_hint="****1234", is_default=True),
        AccountInfo(name="work", api_key_hint="****5678", is_default=False),
    ]
    config.get_account.return_value = AccountInfo(
        name="work", api_key_hint="****5678", is_default=False
    )

    return config


@pytest.fixture
def patch_config_manager(
    mock_config_manager: MagicMock,
) -> Generator[MagicMock, None, None]:
    """Patch get_config to return the mock ConfigManager."""
    with patch(
        "rescuetime_data.cli.commands.auth.get_config",
        return_value=mock_config_manager,
    ):
        yield mock_config_manager

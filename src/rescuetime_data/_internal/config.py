"""Configuration management for rescuetime_data.

Handles API key storage, resolution, and account management.
Configuration is stored in TOML format at ~/.rescuetime/config.toml by default:

    default = "personal"

    [accounts.personal]
    api_key = "B63..."
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

from rescuetime_data.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    ConfigError,
    MissingCredentialError,
)

API_KEY_ENV_VAR = "RESCUETIME_API_KEY"
CONFIG_PATH_ENV_VAR = "RT_CONFIG_PATH"


class Credentials(BaseModel):
    """Immutable credentials for RescueTime API authentication.

    This is a frozen Pydantic model that ensures:
    - The API key is never exposed in repr/str output
    - The object cannot be modified after creation

    An empty key is representable; requests made with it fail with
    MissingCredentialError before anything is sent.
    """

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    """RescueTime API key (redacted in output)."""

    @field_validator("api_key", mode="before")
    @classmethod
    def strip_api_key(cls, v: Any) -> Any:
        """Strip surrounding whitespace from the key."""
        if isinstance(v, SecretStr):
            return SecretStr(v.get_secret_value().strip())
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def has_api_key(self) -> bool:
        """Whether a non-empty API key is present."""
        return bool(self.api_key.get_secret_value())

    def __repr__(self) -> str:
        """Return string representation with redacted key."""
        return "Credentials(api_key=***)"

    def __str__(self) -> str:
        """Return string representation with redacted key."""
        return self.__repr__()


@dataclass(frozen=True)
class AccountInfo:
    """Information about a configured account (without the key).

    Used for listing accounts without exposing sensitive credentials.
    """

    name: str
    """Account display name."""

    api_key_hint: str
    """Last four characters of the API key, for telling accounts apart."""

    is_default: bool
    """Whether this is the default account."""


def _key_hint(api_key: str) -> str:
    if len(api_key) <= 4:
        return "****"
    return f"****{api_key[-4:]}"


class ConfigManager:
    """Manages RescueTime API keys and configuration.

    Handles:
    - Adding, removing, and listing named accounts
    - Setting the default account
    - Resolving credentials from environment variables or config file

    Config file location (in priority order):
    1. Explicit config_path parameter
    2. RT_CONFIG_PATH environment variable
    3. Default: ~/.rescuetime/config.toml
    """

    DEFAULT_CONFIG_PATH = Path.home() / ".rescuetime" / "config.toml"

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize ConfigManager.

        Args:
            config_path: Override config file location.
                         Default: ~/.rescuetime/config.toml
        """
        if config_path is not None:
            self._config_path = config_path
        elif CONFIG_PATH_ENV_VAR in os.environ:
            self._config_path = Path(os.environ[CONFIG_PATH_ENV_VAR])
        else:
            self._config_path = self.DEFAULT_CONFIG_PATH

    @property
    def config_path(self) -> Path:
        """Return the config file path."""
        return self._config_path

    def _read_config(self) -> dict[str, Any]:
        """Read and parse the config file.

        Returns:
            Parsed config dictionary, or empty dict if file doesn't exist.
        """
        if not self._config_path.exists():
            return {}

        try:
            with self._config_path.open("rb") as f:
                return dict(tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(
                f"Invalid TOML in config file: {e}",
                details={"path": str(self._config_path)},
            ) from e

    def _write_config(self, config: dict[str, Any]) -> None:
        """Write config to file, creating directory if needed."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with self._config_path.open("wb") as f:
            tomli_w.dump(config, f)

    def resolve_credentials(self, account: str | None = None) -> Credentials:
        """Resolve credentials using priority order.

        Resolution order:
        1. RESCUETIME_API_KEY environment variable
        2. Named account from config file (if account parameter provided)
        3. Default account from config file
        4. First account in the config file

        Args:
            account: Optional account name to use instead of default.

        Returns:
            Immutable Credentials object.

        Raises:
            MissingCredentialError: If no API key can be resolved.
            AccountNotFoundError: If named account doesn't exist.
        """
        env_key = os.environ.get(API_KEY_ENV_VAR, "").strip()
        if env_key:
            return Credentials(api_key=SecretStr(env_key))

        config = self._read_config()
        accounts = config.get("accounts", {})

        if not accounts:
            raise MissingCredentialError(
                "No API key configured. "
                f"Set the {API_KEY_ENV_VAR} environment variable "
                "or add an account with add_account()."
            )

        account_name: str
        if account is not None:
            account_name = account
        else:
            default_account = config.get("default")
            if default_account is not None and isinstance(default_account, str):
                account_name = default_account
            else:
                account_name = next(iter(accounts.keys()))

        if account_name not in accounts:
            raise AccountNotFoundError(
                account_name,
                available_accounts=list(accounts.keys()),
            )

        api_key = str(accounts[account_name].get("api_key", "")).strip()
        if not api_key:
            raise MissingCredentialError(
                f"Account '{account_name}' has no api_key.",
                details={"account_name": account_name},
            )
        return Credentials(api_key=SecretStr(api_key))

    def list_accounts(self) -> list[AccountInfo]:
        """List all configured accounts.

        Returns:
            List of AccountInfo objects (keys not included).
        """
        config = self._read_config()
        accounts = config.get("accounts", {})
        default_name = config.get("default")

        return [
            AccountInfo(
                name=name,
                api_key_hint=_key_hint(str(data.get("api_key", ""))),
                is_default=(name == default_name),
            )
            for name, data in accounts.items()
        ]

    def add_account(self, name: str, api_key: str) -> None:
        """Add a new account configuration.

        The first account added becomes the default.

        Raises:
            AccountExistsError: If account name already exists.
            ValueError: If the API key is empty.
        """
        api_key = api_key.strip()
        if not api_key:
            raise ValueError("API key cannot be empty")

        config = self._read_config()
        accounts = config.setdefault("accounts", {})

        if name in accounts:
            raise AccountExistsError(name)

        accounts[name] = {"api_key": api_key}

        if "default" not in config:
            config["default"] = name

        self._write_config(config)

    def remove_account(self, name: str) -> None:
        """Remove an account configuration.

        Raises:
            AccountNotFoundError: If account doesn't exist.
        """
        config = self._read_config()
        accounts = config.get("accounts", {})

        if name not in accounts:
            raise AccountNotFoundError(name, available_accounts=list(accounts.keys()))

        del accounts[name]

        # Removing the default promotes the next account, if any
        if config.get("default") == name:
            if accounts:
                config["default"] = next(iter(accounts.keys()))
            else:
                config.pop("default", None)

        self._write_config(config)

    def set_default(self, name: str) -> None:
        """Set the default account.

        Raises:
            AccountNotFoundError: If account doesn't exist.
        """
        config = self._read_config()
        accounts = config.get("accounts", {})

        if name not in accounts:
            raise AccountNotFoundError(name, available_accounts=list(accounts.keys()))

        config["default"] = name
        self._write_config(config)

    def get_account(self, name: str) -> AccountInfo:
        """Get information about a specific account.

        Raises:
            AccountNotFoundError: If account doesn't exist.
        """
        config = self._read_config()
        accounts = config.get("accounts", {})

        if name not in accounts:
            raise AccountNotFoundError(name, available_accounts=list(accounts.keys()))

        return AccountInfo(
            name=name,
            api_key_hint=_key_hint(str(accounts[name].get("api_key", ""))),
            is_default=(name == config.get("default")),
        )

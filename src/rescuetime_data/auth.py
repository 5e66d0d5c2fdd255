"""Public authentication and configuration module.

Re-exports the credential management types for public use.

Re-exported classes:
    ConfigManager: TOML-based account management (~/.rescuetime/config.toml).
    Credentials: Immutable credential container with SecretStr for the key.
    AccountInfo: Named account metadata (name, key hint, default flag).

Example usage:
    from rescuetime_data.auth import ConfigManager

    config = ConfigManager()
    config.add_account("personal", api_key="B63...")
    creds = config.resolve_credentials()
"""

from rescuetime_data._internal.config import (
    AccountInfo,
    ConfigManager,
    Credentials,
)

__all__ = [
    "ConfigManager",
    "Credentials",
    "AccountInfo",
]

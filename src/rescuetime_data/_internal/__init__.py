"""Internal implementation modules. Not part of the public API."""

from rescuetime_data._internal.api_client import RescueTimeAPIClient
from rescuetime_data._internal.config import ConfigManager, Credentials

__all__ = ["ConfigManager", "Credentials", "RescueTimeAPIClient"]

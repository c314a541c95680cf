"""Connection settings module for streamchat.

Persists the endpoint base URL and bearer token between runs.
"""

from .base import SettingsStore
from .connection import API_BASE_KEY, API_TOKEN_KEY, ConnectionSettings
from .factory import create_settings_store
from .models import Settings, SettingsDefaults

__all__ = [
    "API_BASE_KEY",
    "API_TOKEN_KEY",
    "ConnectionSettings",
    "Settings",
    "SettingsDefaults",
    "SettingsStore",
    "create_settings_store",
]

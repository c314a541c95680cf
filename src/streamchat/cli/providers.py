"""Factory functions for CLI.

Centralizes creation of the settings store and application state from
environment variables and command line options.
"""

import os
from pathlib import Path

from ..settings import SettingsDefaults, SettingsStore, create_settings_store
from ..state import AppState


def get_settings_store(
    settings_file: Path | None = None,
    ephemeral: bool = False,
) -> SettingsStore:
    """Create the settings store.

    Args:
        settings_file: JSON file to persist settings in
        ephemeral: Keep settings in memory only

    Environment variables:
        STREAMCHAT_SETTINGS_FILE: Settings file (default: ~/.streamchat/settings.json)
    """
    if ephemeral:
        return create_settings_store("memory")

    path = settings_file or os.getenv("STREAMCHAT_SETTINGS_FILE")
    if path:
        return create_settings_store("file", path=Path(path).expanduser())
    return create_settings_store("file")


def get_app_state(
    store: SettingsStore,
    api_base: str | None = None,
    api_token: str | None = None,
) -> AppState:
    """Create the application state with settings loaded.

    Values given on the command line override, and are persisted over,
    whatever the store holds.
    """
    state = AppState(store, defaults=SettingsDefaults.from_env())
    state.init()
    if api_base is not None or api_token is not None:
        state.settings.update(api_base=api_base, api_token=api_token)
    return state

"""Factory for creating settings stores."""

from typing import Any

from .base import SettingsStore


def create_settings_store(
    backend: str = "file",
    **kwargs: Any
) -> SettingsStore:
    """Create a settings store.

    Args:
        backend: Backend type ("file" or "memory")
        **kwargs: Backend-specific configuration
            For file:
                - path: str | Path (default: ~/.streamchat/settings.json)
            For memory:
                - initial: dict[str, str] | None

    Returns:
        SettingsStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "file":
        from .file import JsonFileSettingsStore
        return JsonFileSettingsStore(**kwargs)

    elif backend == "memory":
        from .in_memory import InMemorySettingsStore
        return InMemorySettingsStore(**kwargs)

    raise ValueError(
        f"Unsupported settings backend: {backend}. "
        f"Supported backends: file, memory"
    )

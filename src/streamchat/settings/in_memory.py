"""In-memory settings store.

Simple dict-based storage for session-only settings.
Data is lost when the application exits.
"""

from .base import SettingsStore


class InMemorySettingsStore(SettingsStore):
    """In-memory settings store (session-only).

    Suitable for --ephemeral runs and testing.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = {k: v for k, v in (initial or {}).items() if v}

    def get(self, key: str, default: str = "") -> str:
        return self._values.get(key, default)

    def set(self, key: str, value: str) -> None:
        if not value:
            self._values.pop(key, None)
            return
        self._values[key] = value

    def clear(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._values)

    @property
    def backend_type(self) -> str:
        return "memory"

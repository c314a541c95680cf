"""Abstract base class for settings stores.

This module defines the interface for the durable key-value store behind
the connection settings. The abstraction hides:
- Storage format (JSON document, in-memory dict)
- Persistence location
- Failure handling (persistence is best-effort)
"""

from abc import ABC, abstractmethod


class SettingsStore(ABC):
    """Abstract string key-value store.

    Implementations must never raise on storage failures: a failed write is
    dropped and a failed read returns the default.
    """

    @abstractmethod
    def get(self, key: str, default: str = "") -> str:
        """Return the stored value for `key`, or `default` if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Persist `value` under `key`. An empty value removes the key."""

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove `key` from the store."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return the keys currently stored."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

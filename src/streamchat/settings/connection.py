"""Connection settings bound to a settings store.

Keeps the in-memory values and the persisted values in step: every update is
written through immediately, and clearing removes the persisted keys.
"""

from .base import SettingsStore
from .models import Settings, SettingsDefaults

API_BASE_KEY = "api_base"
API_TOKEN_KEY = "api_token"


class ConnectionSettings:
    """Endpoint base URL and bearer token, persisted on every change."""

    def __init__(
        self,
        store: SettingsStore,
        defaults: SettingsDefaults | None = None,
    ) -> None:
        self._store = store
        self._defaults = defaults or SettingsDefaults()
        self._api_base = ""
        self._api_token = ""

    @property
    def store(self) -> SettingsStore:
        return self._store

    @property
    def api_base(self) -> str:
        return self._api_base

    @property
    def api_token(self) -> str:
        return self._api_token

    @property
    def is_configured(self) -> bool:
        return bool(self._api_base and self._api_token)

    def snapshot(self) -> Settings:
        """Return the current values as an immutable model."""
        return Settings(api_base=self._api_base, api_token=self._api_token)

    def load(self) -> Settings:
        """Read persisted values, falling back to the defaults.

        An absent or empty persisted value yields the default, and an empty
        default yields the empty string.
        """
        self._api_base = self._store.get(API_BASE_KEY) or self._defaults.api_base
        self._api_token = self._store.get(API_TOKEN_KEY) or self._defaults.api_token
        return self.snapshot()

    def update(
        self,
        api_base: str | None = None,
        api_token: str | None = None,
    ) -> Settings:
        """Change one or both values and persist them immediately."""
        if api_base is not None:
            self._api_base = api_base
            self._store.set(API_BASE_KEY, api_base)
        if api_token is not None:
            self._api_token = api_token
            self._store.set(API_TOKEN_KEY, api_token)
        return self.snapshot()

    def clear(self) -> None:
        """Forget both values, in memory and on disk."""
        self._store.clear(API_BASE_KEY)
        self._store.clear(API_TOKEN_KEY)
        self._api_base = ""
        self._api_token = ""

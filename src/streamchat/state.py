"""Application state.

Owns everything the view and the controller share: connection settings,
transcript, HTTP client and request controller. Created explicitly and passed
to the view; `init` and `dispose` bracket its lifetime.
"""

from typing import Any

from .client import GenerationClient, RequestController
from .settings import ConnectionSettings, SettingsDefaults, SettingsStore
from .transcript import Role, Transcript

WELCOME_MESSAGE = "👋 Ready when you are. Type a prompt and hit Send."


class AppState:
    """Explicitly owned state of one chat client.

    Usage:
        async with AppState(store) as state:
            await state.controller.send("hello")
    """

    def __init__(
        self,
        store: SettingsStore,
        client: GenerationClient | None = None,
        defaults: SettingsDefaults | None = None,
        welcome: str = WELCOME_MESSAGE,
    ) -> None:
        self.settings = ConnectionSettings(store, defaults)
        self.transcript = Transcript()
        self.client = client or GenerationClient()
        self.controller = RequestController(self.settings, self.transcript, self.client)
        self._welcome = welcome
        self._initialized = False
        self._disposed = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> None:
        """Load persisted settings and seed the transcript."""
        if self._initialized:
            return
        self.settings.load()
        if not len(self.transcript):
            self.transcript.append(Role.ASSISTANT, self._welcome)
        self._initialized = True

    async def dispose(self) -> None:
        """Cancel any in-flight request and release the HTTP client."""
        if self._disposed:
            return
        self._disposed = True
        self.controller.cancel()
        self.controller.set_state_callback(None)
        self.controller.set_debug_callback(None)
        await self.client.close()

    async def __aenter__(self) -> "AppState":
        self.init()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.dispose()

"""Request controller.

Sequences a generation request: gates it on `can_send`, adds the user entry
and the empty stream target to the transcript, streams the response into the
target, and always restores the idle state afterwards, whether the request
finished, failed or was cancelled.
"""

from collections.abc import Callable

from ..settings import ConnectionSettings
from ..transcript import Role, Transcript
from .cancellation import RequestHandle
from .errors import ChatClientError, RequestError, StreamCancelled
from .http import GenerationClient
from .stream import pump_stream

RESET_CONFIRMATION = "🧹 Chat history cleared. Fresh start!"

DebugCallback = Callable[[str, str, str], None]
StateCallback = Callable[["RequestController"], None]


def _truncate(text: str, limit: int = 50) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class RequestController:
    """Owns the single in-flight request and the user-visible error.

    At most one request is live at a time. This is enforced by `can_send`
    refusing while `is_sending` is true, not by cancelling stale handles.
    """

    def __init__(
        self,
        settings: ConnectionSettings,
        transcript: Transcript,
        client: GenerationClient,
    ) -> None:
        self._settings = settings
        self._transcript = transcript
        self._client = client
        self._handle: RequestHandle | None = None
        self._is_sending = False
        self._error = ""
        self._state_callback: StateCallback | None = None
        self._debug_callback: DebugCallback | None = None

    @property
    def is_sending(self) -> bool:
        return self._is_sending

    @property
    def error(self) -> str:
        """Message of the last surfaced error, empty if none."""
        return self._error

    @property
    def active_handle(self) -> RequestHandle | None:
        return self._handle

    def set_state_callback(self, callback: StateCallback | None) -> None:
        """Set the callback invoked whenever `is_sending` or `error` changes."""
        self._state_callback = callback

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for request tracing.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, component, message)

    def _notify(self) -> None:
        if self._state_callback is not None:
            self._state_callback(self)

    def _set_error(self, message: str) -> None:
        if message != self._error:
            self._error = message
            self._notify()

    def _set_sending(self, sending: bool) -> None:
        if sending != self._is_sending:
            self._is_sending = sending
            self._notify()

    def clear_error(self) -> None:
        self._set_error("")

    def can_send(self, prompt: str) -> bool:
        """Whether `send(prompt)` would issue a request."""
        return bool(
            self._settings.api_base
            and self._settings.api_token
            and prompt.strip()
            and not self._is_sending
        )

    async def send(self, prompt: str) -> bool:
        """Send `prompt` and stream the reply into the transcript.

        Returns:
            False if the call was a no-op because `can_send` was false,
            True otherwise (whatever the outcome of the request)
        """
        if not self.can_send(prompt):
            self._debug("debug", "HTTP", "Send ignored: not ready")
            return False

        self._set_error("")
        self._transcript.append(Role.USER, prompt)
        self._transcript.append(Role.ASSISTANT, "")

        handle = RequestHandle(prompt=prompt)
        self._handle = handle
        self._set_sending(True)

        api_base = self._settings.api_base
        api_token = self._settings.api_token
        self._debug("info", "HTTP", f"POST {api_base}/generate_stream '{_truncate(prompt)}'")

        try:
            stream = await handle.token.guard(
                self._client.open_stream(api_base, api_token, prompt)
            )
            async with stream:
                self._debug("debug", "Stream", f"Response status {stream.status_code}")
                fragments = await pump_stream(stream, self._transcript, handle.token)
            self._debug("info", "Stream", f"Stream complete ({fragments} fragments)")
        except StreamCancelled:
            self._debug("warning", "Stream", "Request cancelled")
        except ChatClientError as e:
            self._debug("error", "HTTP", f"Request failed: {e}")
            self._set_error(str(e))
        except Exception as e:
            error = RequestError(message=str(e) or type(e).__name__)
            self._debug("error", "Stream", f"Stream failed: {error}")
            self._set_error(str(error))
        finally:
            self._handle = None
            self._set_sending(False)

        return True

    def cancel(self) -> bool:
        """Signal cancellation of the in-flight request, if any."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._debug("debug", "Stream", "Cancellation requested")
        return True

    async def reset_chat(self) -> bool:
        """Ask the endpoint to forget the conversation, then clear the transcript.

        A request still streaming is cancelled only once the endpoint has
        accepted the reset, so a failed reset leaves the stream running.

        Returns:
            True if the transcript was cleared
        """
        self._set_error("")

        api_base = self._settings.api_base
        self._debug("info", "HTTP", f"POST {api_base}/reset")
        try:
            await self._client.reset(api_base, self._settings.api_token)
        except ChatClientError as e:
            self._debug("error", "HTTP", f"Reset failed: {e}")
            self._set_error(str(e))
            return False

        self.cancel()
        self._transcript.reset(RESET_CONFIRMATION)
        self._debug("info", "HTTP", "Chat history cleared")
        return True

"""Main Textual TUI application.

Orchestrates the UI components and routes user actions to the request
controller. All shared state lives in the `AppState` passed in; the app only
renders it and forwards edits.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Button, Footer, Header, Input, TextArea

from ..client import RequestController
from ..state import AppState
from ..transcript import Role, TranscriptEvent
from .config import COMPOSER_HELP, LogLevel
from .styles import APP_CSS
from .themes import ZINC_INDIGO
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    ComposerTextArea,
    ErrorBanner,
    LogPanel,
    SettingsBar,
)


class StreamChatApp(App):
    """Textual TUI for a streaming generation endpoint."""

    CSS = APP_CSS
    TITLE = "streamchat"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("escape", "cancel_request", "Cancel"),
        Binding("ctrl+n", "reset_chat", "Reset Chat"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+l", "toggle_log", "Log"),
    ]

    def __init__(self, state: AppState, log_level: str | None = None) -> None:
        super().__init__()
        self._state = state
        self._log_level = log_level
        self._state.init()

    @property
    def state(self) -> AppState:
        return self._state

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield SettingsBar(
            api_base=self._state.settings.api_base,
            api_token=self._state.settings.api_token,
            id="settings-bar",
        )
        yield ChatHistoryWidget(id="chat-history")
        yield ErrorBanner(id="error-banner")
        yield ChatInputBar(id="composer")
        yield LogPanel(id="log-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(ZINC_INDIGO)
        self.theme = "zinc-indigo"
        self.sub_title = COMPOSER_HELP

        if self._log_level is not None:
            log_panel = self.query_one("#log-panel", LogPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.load(self._state.transcript.entries)
        self._state.transcript.subscribe(self._on_transcript_event)

        controller = self._state.controller
        controller.set_state_callback(self._on_controller_state)
        controller.set_debug_callback(self._on_debug)

        self._refresh_controls()
        self.query_one("#composer", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach from the shared state; disposal is up to the owner."""
        self._state.transcript.unsubscribe(self._on_transcript_event)
        self._state.controller.set_state_callback(None)
        self._state.controller.set_debug_callback(None)

    def _on_transcript_event(self, event: TranscriptEvent) -> None:
        self.query_one("#chat-history", ChatHistoryWidget).apply_event(event)

    def _on_controller_state(self, controller: RequestController) -> None:
        self._refresh_controls()

    def _on_debug(self, level: str, component: str, message: str) -> None:
        """Route controller trace messages to the log panel."""
        log_panel = self.query_one("#log-panel", LogPanel)
        emit = {
            "debug": log_panel.debug,
            "info": log_panel.info,
            "warning": log_panel.warning,
            "error": log_panel.error,
        }.get(level, log_panel.debug)
        emit(component, message)

    def _refresh_controls(self) -> None:
        """Sync error banner and Send/Cancel buttons with the controller."""
        controller = self._state.controller
        composer = self.query_one("#composer", ChatInputBar)
        self.query_one("#error-banner", ErrorBanner).show_error(controller.error)
        composer.set_state(
            can_send=controller.can_send(composer.text),
            is_sending=controller.is_sending,
        )

    def on_input_changed(self, event: Input.Changed) -> None:
        """Persist settings edits as they are typed."""
        settings = self._state.settings
        if event.input.id == "api-base-input":
            settings.update(api_base=event.value)
        elif event.input.id == "api-token-input":
            settings.update(api_token=event.value)
        else:
            return
        self._refresh_controls()

    def on_settings_bar_cleared(self, event: SettingsBar.Cleared) -> None:
        """Forget the saved settings and blank both inputs."""
        self._state.settings.clear()
        self.query_one("#settings-bar", SettingsBar).set_values("", "")
        self.query_one("#log-panel", LogPanel).info("Settings", "Saved settings cleared")
        self._refresh_controls()
        self.notify("Saved settings cleared", timeout=2)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self._refresh_controls()

    def on_composer_text_area_submitted(self, event: ComposerTextArea.Submitted) -> None:
        self.action_send()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "send-btn":
            self.action_send()
        elif button_id == "cancel-btn":
            self.action_cancel_request()
        elif button_id == "reset-chat-btn":
            self.action_reset_chat()

    def action_send(self) -> None:
        """Send the composer text if the controller is ready for it."""
        composer = self.query_one("#composer", ChatInputBar)
        prompt = composer.text
        if not self._state.controller.can_send(prompt):
            return
        composer.clear()
        self._send(prompt)

    @work(group="send")
    async def _send(self, prompt: str) -> None:
        """Run the request as a background async worker."""
        await self._state.controller.send(prompt)

    def action_cancel_request(self) -> None:
        """Cancel the in-flight request."""
        if self._state.controller.cancel():
            self.notify("Cancelled", severity="warning", timeout=2)

    def action_reset_chat(self) -> None:
        """Clear the conversation on the server and locally."""
        self._reset_chat()

    @work(group="reset", exclusive=True)
    async def _reset_chat(self) -> None:
        if await self._state.controller.reset_chat():
            self.notify("Chat cleared", timeout=2)

    def action_toggle_log(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#log-panel", LogPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        for entry in reversed(self._state.transcript.entries):
            if entry.role == Role.ASSISTANT and entry.content:
                self.copy_to_clipboard(entry.content)
                self.notify("Response copied")
                return
        self.notify("No response to copy", severity="warning")


async def run_textual_tui(state: AppState, log_level: str | None = None) -> None:
    """Run the Textual TUI until the user quits.

    Args:
        state: Application state shared with the controller
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = StreamChatApp(state, log_level=log_level)
    try:
        async with state:
            await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass

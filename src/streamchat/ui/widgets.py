"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Settings inputs and how edits are reported
- Chat bubble rendering and live updates of the stream target
- Composer key handling (Enter submits, Shift+Enter inserts a newline)
- Error banner and log panel rendering
"""

from datetime import datetime

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Button, Input, RichLog, Static, TextArea

from ..transcript import ChatEntry, Role, TranscriptEvent
from .config import (
    API_BASE_PLACEHOLDER,
    API_TOKEN_PLACEHOLDER,
    COMPOSER_HINT,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    LogLevel,
)


class SettingsBar(Horizontal):
    """API base and bearer token inputs with a button to forget them."""

    class Cleared(Message):
        """Posted when the user asks to clear the saved settings."""

    def __init__(self, api_base: str = "", api_token: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self._api_base = api_base
        self._api_token = api_token

    def compose(self) -> ComposeResult:
        yield Input(
            value=self._api_base,
            placeholder=API_BASE_PLACEHOLDER,
            id="api-base-input",
        )
        yield Input(
            value=self._api_token,
            placeholder=API_TOKEN_PLACEHOLDER,
            password=True,
            id="api-token-input",
        )
        yield Button("Reset", id="reset-settings-btn").with_tooltip(
            "Clear saved settings"
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "reset-settings-btn":
            event.stop()
            self.post_message(self.Cleared())

    def set_values(self, api_base: str, api_token: str) -> None:
        """Overwrite both inputs."""
        self.query_one("#api-base-input", Input).value = api_base
        self.query_one("#api-token-input", Input).value = api_token


class MessageBubble(Vertical):
    """One transcript entry. Clicking it copies the content to the clipboard."""

    def __init__(self, entry: ChatEntry, **kwargs) -> None:
        role_class = "user-message" if entry.role == Role.USER else "assistant-message"
        super().__init__(classes=f"chat-message {role_class}", **kwargs)
        self._entry = entry

    @property
    def entry(self) -> ChatEntry:
        return self._entry

    def compose(self) -> ComposeResult:
        timestamp = self._entry.timestamp.strftime("%H:%M:%S")
        yield Static(f"{self._entry.role.value} [{timestamp}]", classes="message-header", markup=False)
        yield Static(Text(self._entry.content), classes="message-content")

    def update_entry(self, entry: ChatEntry) -> None:
        """Show the grown content of the stream target."""
        self._entry = entry
        try:
            content = self.query_one(".message-content", Static)
        except NoMatches:
            return
        content.update(Text(entry.content))

    def on_click(self, event: events.Click) -> None:
        event.stop()
        if not self._entry.content:
            return
        self.app.copy_to_clipboard(self._entry.content)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript view kept in step with transcript events."""

    BORDER_TITLE = "Chat"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._bubbles: list[MessageBubble] = []

    @property
    def bubble_count(self) -> int:
        return len(self._bubbles)

    def bubble(self, index: int) -> MessageBubble:
        return self._bubbles[index]

    def load(self, entries: list[ChatEntry]) -> None:
        """Replace everything shown with `entries`."""
        self.remove_children()
        self._bubbles = []
        for entry in entries:
            self._add_bubble(entry)
        self.scroll_end(animate=False)

    def apply_event(self, event: TranscriptEvent) -> None:
        """Re-render after one transcript mutation."""
        if event.kind == "appended":
            self._add_bubble(event.entry)
        elif event.kind == "updated":
            if 0 <= event.index < len(self._bubbles):
                self._bubbles[event.index].update_entry(event.entry)
        elif event.kind == "reset":
            self.load([event.entry])
            return
        self.scroll_end(animate=False)

    def _add_bubble(self, entry: ChatEntry) -> None:
        bubble = MessageBubble(entry)
        row_class = "message-row from-user" if entry.role == Role.USER else "message-row"
        row = Horizontal(bubble, classes=row_class)
        self._bubbles.append(bubble)
        self.mount(row)


class ErrorBanner(Static):
    """Last request error. Hidden while there is none."""

    def on_mount(self) -> None:
        self.display = False

    def show_error(self, message: str) -> None:
        if message:
            self.update(Text(message))
            self.display = True
        else:
            self.update("")
            self.display = False


class ComposerTextArea(TextArea):
    """Multi-line prompt editor.

    Enter submits instead of inserting a newline. Shift+Enter inserts a
    newline; terminals that cannot report Shift+Enter can use Ctrl+J.
    """

    NEWLINE_KEYS = ("shift+enter", "ctrl+j")

    class Submitted(Message):
        """Posted when the user presses Enter."""

        def __init__(self, text_area: "ComposerTextArea", value: str) -> None:
            super().__init__()
            self.text_area = text_area
            self.value = value

    async def _on_key(self, event: events.Key) -> None:
        if event.key == "enter":
            event.stop()
            event.prevent_default()
            self.post_message(self.Submitted(self, self.text))
            return
        if event.key in self.NEWLINE_KEYS:
            event.stop()
            event.prevent_default()
            self.insert("\n")


class ChatInputBar(Vertical):
    """Composer: prompt editor plus Reset Chat, Send and Cancel buttons."""

    def compose(self) -> ComposeResult:
        text_area = ComposerTextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        with Horizontal(id="composer-controls"):
            yield Button("Reset Chat", id="reset-chat-btn")
            yield Static(COMPOSER_HINT, id="composer-hint")
            yield Button("Send", id="send-btn", variant="primary").with_tooltip(
                "Send (Enter)"
            )
            yield Button("Cancel", id="cancel-btn").with_tooltip("Cancel (Esc)")

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", ComposerTextArea)
        text_area.highlight_cursor_line = False
        self.query_one("#cancel-btn", Button).display = False

    @property
    def text(self) -> str:
        return self.query_one("#chat-input", ComposerTextArea).text

    def clear(self) -> None:
        self.query_one("#chat-input", ComposerTextArea).text = ""

    def focus_input(self) -> None:
        """Focus the prompt editor."""
        self.query_one("#chat-input", ComposerTextArea).focus()

    def set_state(self, can_send: bool, is_sending: bool) -> None:
        """Show Cancel while sending, otherwise Send (dimmed if not ready)."""
        send_btn = self.query_one("#send-btn", Button)
        cancel_btn = self.query_one("#cancel-btn", Button)
        send_btn.display = not is_sending
        cancel_btn.display = is_sending
        send_btn.disabled = not can_send


class LogPanel(RichLog):
    """Log panel for request tracing with level filtering.

    Shows timestamped log messages from the controller and the TUI.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level or toggled with Ctrl+L.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "HTTP": "magenta",
        "Stream": "green",
        "Settings": "yellow",
    }

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log_message(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text()
        line.append(datetime.now().strftime(LOG_TIMESTAMP_FORMAT) + " ", style="dim")
        line.append(f"{LogLevel.name(level):<7} ", style=self.LEVEL_COLORS.get(level, "white"))
        line.append(f"[{component}] ", style=self.COMPONENT_COLORS.get(component, "white"))
        line.append(message)
        self.write(line)

    def debug(self, component: str, message: str) -> None:
        self.log_message(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.log_message(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.log_message(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.log_message(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

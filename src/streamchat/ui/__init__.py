"""Terminal UI module for streamchat.

Provides a Textual-based TUI for the streaming chat client.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (settings bar, chat bubbles, composer, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette and theme configuration
- config.py: Log levels and UI constants
- app.py: Application orchestration (user interaction flow)
"""

from .app import StreamChatApp, run_textual_tui
from .config import LogLevel
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    ComposerTextArea,
    ErrorBanner,
    LogPanel,
    MessageBubble,
    SettingsBar,
)

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ComposerTextArea",
    "ErrorBanner",
    "LogLevel",
    "LogPanel",
    "MessageBubble",
    "SettingsBar",
    "StreamChatApp",
    "run_textual_tui",
]

"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.

Layout, top to bottom: settings bar, chat history, composer, log panel.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Settings bar */
#settings-bar {
    height: auto;
    padding: 0 1;
    background: $panel;
    border-bottom: solid $border;

    Input {
        width: 1fr;
        margin: 0 1 0 0;
    }

    Button {
        min-width: 9;
    }
}

/* Chat history */
#chat-history {
    height: 1fr;
    padding: 0 2;
    scrollbar-gutter: stable;
}

.chat-message {
    height: auto;
    width: auto;
    max-width: 80%;
    margin: 1 0 0 0;
    padding: 0 2;

    .message-header {
        color: $text-muted;
        text-style: italic;
    }

    .message-content {
        width: auto;
    }
}

.user-message {
    background: $primary;
    color: #ffffff;

    .message-header {
        color: #c7d2fe;
    }
}

.assistant-message {
    background: $surface;
    border-left: outer $border;
}

.message-row {
    height: auto;
    width: 100%;
}

.message-row.from-user {
    align-horizontal: right;
}

/* Error banner */
#error-banner {
    height: auto;
    margin: 0 2;
    padding: 0 1;
    color: $text-error;
    background: $error 15%;
    border: round $error;
}

/* Composer */
#composer {
    height: auto;
    margin: 1 2;
    padding: 0 1;
    background: $surface;
    border: round $border;

    &:focus-within {
        border: round $secondary;
    }
}

#chat-input {
    height: 6;
    border: none;
    background: $surface;
}

#composer-controls {
    height: 3;
    align: left middle;

    #composer-hint {
        width: 1fr;
        content-align: center middle;
        color: $text-muted;
    }

    Button {
        margin: 0 0 0 1;
        min-width: 10;
    }
}

/* Log panel */
#log-panel {
    height: 10;
    margin: 0 2;
    border: round $border;
    border-title-color: $text-muted;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
}
"""

"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Zinc neutrals with an indigo accent for user bubbles and the send button
ZINC_INDIGO = Theme(
    name="zinc-indigo",
    primary="#4f46e5",      # Indigo 600 - user bubbles, send button
    secondary="#818cf8",    # Indigo 400 - focus rings
    accent="#a5b4fc",       # Indigo 300
    foreground="#e4e4e7",   # Zinc 200
    background="#09090b",   # Zinc 950
    success="#4ade80",
    warning="#fbbf24",
    error="#f87171",        # Red 400 - error banner
    surface="#18181b",      # Zinc 900 - assistant bubbles
    panel="#27272a",        # Zinc 800 - bars
    dark=True,
    variables={
        "border": "#3f3f46",
        "border-blurred": "#27272a",
        "input-selection-background": "#4f46e5 40%",
        "scrollbar": "#3f3f46",
        "scrollbar-hover": "#52525b",
        "scrollbar-active": "#818cf8",
        "scrollbar-background": "#18181b",
        "footer-key-foreground": "#a5b4fc",
        "text-muted": "#71717a",
        "text-disabled": "#52525b",
        "text-error": "#fca5a5",
        "button-foreground": "#e4e4e7",
        "button-color-foreground": "#ffffff",
    },
)

"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..settings import API_BASE_KEY, API_TOKEN_KEY, Settings
from .providers import get_app_state, get_settings_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="streamchat",
    help="Terminal chat client for streaming text-generation endpoints",
    no_args_is_help=True,
    add_completion=True,
)

settings_app = typer.Typer(help="Inspect or clear the saved connection settings")
app.add_typer(settings_app, name="settings")

# Console for rich output
console = Console()

LOG_LEVELS = ("debug", "info", "warning", "error")


def _settings_file_option():
    return typer.Option(
        None,
        "--settings-file",
        "-s",
        help="JSON file holding the saved settings",
    )


@app.command()
def chat(
    api_base: str | None = typer.Option(
        None,
        "--api-base",
        "-b",
        help="Endpoint base URL (saved for later runs)"
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        "-t",
        help="Bearer token (saved for later runs)"
    ),
    settings_file: Path | None = _settings_file_option(),
    ephemeral: bool = typer.Option(
        False,
        "--ephemeral",
        "-e",
        help="Do not read or write saved settings"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level: debug, info, warning, error"
    ),
):
    """Start the interactive chat TUI."""
    if log_level is not None and log_level.lower() not in LOG_LEVELS:
        console.print(f"[red]Error: invalid log level '{log_level}'[/red]")
        raise typer.Exit(code=1)

    from ..ui import run_textual_tui

    store = get_settings_store(settings_file, ephemeral=ephemeral)
    state = get_app_state(store, api_base=api_base, api_token=token)
    asyncio.run(run_textual_tui(state, log_level=log_level))


@settings_app.command("show")
def settings_show(
    settings_file: Path | None = _settings_file_option(),
):
    """Show the saved connection settings."""
    store = get_settings_store(settings_file)
    saved = Settings(
        api_base=store.get(API_BASE_KEY),
        api_token=store.get(API_TOKEN_KEY),
    )

    table = Table(title="Saved settings", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row(API_BASE_KEY, saved.api_base or "[dim](not set)[/dim]")
    table.add_row(API_TOKEN_KEY, saved.masked_token() or "[dim](not set)[/dim]")
    console.print(table)

    path = getattr(store, "path", None)
    if path is not None:
        console.print(f"[dim]Stored in {path}[/dim]")


@settings_app.command("clear")
def settings_clear(
    settings_file: Path | None = _settings_file_option(),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Do not ask for confirmation"
    ),
):
    """Forget the saved endpoint and token."""
    if not yes and not typer.confirm("Clear the saved settings?"):
        console.print("[dim]Aborted.[/dim]")
        return

    store = get_settings_store(settings_file)
    store.clear(API_BASE_KEY)
    store.clear(API_TOKEN_KEY)
    console.print("[green]Saved settings cleared.[/green]")


if __name__ == "__main__":
    app()

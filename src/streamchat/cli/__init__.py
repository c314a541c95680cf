"""Command line launcher for streamchat."""

from .app import app

__all__ = ["app"]

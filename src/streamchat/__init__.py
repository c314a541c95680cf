"""
streamchat: a terminal chat client for streaming text-generation endpoints.

Sends prompts to a `/generate_stream` endpoint with a bearer token and
renders the response as it arrives.
"""

__version__ = "0.1.0"

from .client import (
    ChatClientError,
    GenerationClient,
    NetworkError,
    RequestController,
    RequestError,
    StreamCancelled,
)
from .settings import ConnectionSettings, Settings, create_settings_store
from .state import AppState
from .transcript import ChatEntry, Role, Transcript

__all__ = [
    "AppState",
    "ChatClientError",
    "ChatEntry",
    "ConnectionSettings",
    "GenerationClient",
    "NetworkError",
    "RequestController",
    "RequestError",
    "Role",
    "Settings",
    "StreamCancelled",
    "Transcript",
    "create_settings_store",
]

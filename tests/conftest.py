"""Pytest configuration and shared fixtures."""
from collections.abc import Callable

import httpx
import pytest

from streamchat.client import GenerationClient, RequestController
from streamchat.settings import ConnectionSettings, SettingsDefaults, create_settings_store
from streamchat.transcript import Transcript

from .helpers import API_BASE, API_TOKEN, RecordingHandler


@pytest.fixture
def make_client():
    """Build a GenerationClient backed by an httpx.MockTransport."""
    def _make(respond: Callable[[httpx.Request], object]) -> tuple[GenerationClient, RecordingHandler]:
        handler = RecordingHandler(respond)
        return GenerationClient(transport=httpx.MockTransport(handler)), handler
    return _make


@pytest.fixture
def settings():
    """Connection settings in a memory store, already configured."""
    store = create_settings_store("memory")
    connection = ConnectionSettings(store, SettingsDefaults(api_base="", api_token=""))
    connection.load()
    connection.update(api_base=API_BASE, api_token=API_TOKEN)
    return connection


@pytest.fixture
def transcript():
    """Transcript seeded with a welcome entry."""
    t = Transcript()
    t.append("assistant", "welcome")
    return t


@pytest.fixture
def make_controller(settings, transcript, make_client):
    """Build a RequestController whose client answers via `respond`."""
    def _make(respond: Callable[[httpx.Request], object]) -> tuple[RequestController, RecordingHandler]:
        client, handler = make_client(respond)
        return RequestController(settings, transcript, client), handler
    return _make

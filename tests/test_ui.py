"""Tests for the Textual TUI, driven through the pilot."""
import asyncio

import httpx
import pytest
from textual.widgets import Button

from streamchat.settings import API_BASE_KEY, API_TOKEN_KEY, SettingsDefaults, create_settings_store
from streamchat.state import AppState
from streamchat.transcript import Role
from streamchat.ui import ChatHistoryWidget, ChatInputBar, ErrorBanner, LogPanel, SettingsBar, StreamChatApp
from streamchat.ui.config import LogLevel

from .helpers import byte_stream, wait_until


@pytest.fixture
def make_app(make_client):
    """Build a StreamChatApp over a memory store and a mocked endpoint."""
    def _make(respond, api_token: str = "t") -> StreamChatApp:
        client, _ = make_client(respond)
        store = create_settings_store(
            "memory", initial={API_BASE_KEY: "http://x", API_TOKEN_KEY: api_token}
        )
        state = AppState(store, client=client, defaults=SettingsDefaults(api_base="", api_token=""))
        return StreamChatApp(state)
    return _make


class TestStreamChatApp:

    @pytest.mark.asyncio
    async def test_enter_sends_and_streams_reply(self, make_app):
        app = make_app(lambda request: httpx.Response(200, content=byte_stream(b"Hi", b" there")))

        async with app.run_test() as pilot:
            await pilot.press(*"hello")
            await pilot.press("enter")
            await app.workers.wait_for_complete()
            await pilot.pause()

            entries = app.state.transcript.entries
            assert (entries[-2].role, entries[-2].content) == (Role.USER, "hello")
            assert (entries[-1].role, entries[-1].content) == (Role.ASSISTANT, "Hi there")

            history = app.query_one("#chat-history", ChatHistoryWidget)
            assert history.bubble_count == 3
            assert history.bubble(2).entry.content == "Hi there"
            assert app.query_one("#composer", ChatInputBar).text == ""

        await app.state.dispose()

    @pytest.mark.asyncio
    async def test_shift_enter_inserts_newline(self, make_app):
        app = make_app(lambda request: httpx.Response(200))

        async with app.run_test() as pilot:
            await pilot.press("a", "shift+enter", "b", "ctrl+j", "c")
            await pilot.pause()

            assert app.query_one("#composer", ChatInputBar).text == "a\nb\nc"
            assert len(app.state.transcript) == 1

        await app.state.dispose()

    @pytest.mark.asyncio
    async def test_send_disabled_without_token(self, make_app):
        app = make_app(lambda request: httpx.Response(200), api_token="")

        async with app.run_test() as pilot:
            await pilot.press(*"anything")
            await pilot.press("enter")
            await pilot.pause()

            assert app.query_one("#send-btn", Button).disabled
            assert len(app.state.transcript) == 1

        await app.state.dispose()

    @pytest.mark.asyncio
    async def test_cancel_replaces_send_while_streaming(self, make_app):
        hold = asyncio.Event()
        app = make_app(lambda request: httpx.Response(200, content=byte_stream(b"Hi", hold=hold)))

        async with app.run_test() as pilot:
            await pilot.press(*"hello")
            await pilot.press("enter")
            await wait_until(lambda: app.state.transcript.last.content == "Hi")
            await pilot.pause()

            assert app.query_one("#cancel-btn", Button).display
            assert not app.query_one("#send-btn", Button).display

            app.action_cancel_request()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert app.state.transcript.last.content == "Hi"
            assert not app.state.controller.is_sending
            assert not app.query_one("#error-banner", ErrorBanner).display
            assert app.query_one("#send-btn", Button).display

        await app.state.dispose()

    @pytest.mark.asyncio
    async def test_error_banner_shows_failure(self, make_app):
        app = make_app(lambda request: httpx.Response(500))

        async with app.run_test() as pilot:
            await pilot.press(*"hello")
            await pilot.press("enter")
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert app.state.controller.error == "HTTP 500"
            assert app.query_one("#error-banner", ErrorBanner).display

        await app.state.dispose()

    @pytest.mark.asyncio
    async def test_controller_trace_reaches_log_panel_at_its_level(self, make_app, monkeypatch):
        recorded = []
        monkeypatch.setattr(
            LogPanel,
            "log_message",
            lambda panel, component, message, level=LogLevel.DEBUG: recorded.append((level, component, message)),
        )
        app = make_app(lambda request: httpx.Response(500))

        async with app.run_test() as pilot:
            await pilot.press(*"hello")
            await pilot.press("enter")
            await app.workers.wait_for_complete()
            await pilot.pause()

        assert (LogLevel.INFO, "HTTP", "POST http://x/generate_stream 'hello'") in recorded
        assert (LogLevel.ERROR, "HTTP", "Request failed: HTTP 500") in recorded

        await app.state.dispose()

    @pytest.mark.asyncio
    async def test_reset_chat_clears_history(self, make_app):
        app = make_app(lambda request: httpx.Response(200, content=b"answer"))

        async with app.run_test() as pilot:
            await pilot.press(*"hello")
            await pilot.press("enter")
            await app.workers.wait_for_complete()

            app.action_reset_chat()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert len(app.state.transcript) == 1
            assert app.query_one("#chat-history", ChatHistoryWidget).bubble_count == 1

        await app.state.dispose()

    @pytest.mark.asyncio
    async def test_clearing_settings_blanks_inputs(self, make_app):
        app = make_app(lambda request: httpx.Response(200))

        async with app.run_test() as pilot:
            bar = app.query_one("#settings-bar", SettingsBar)
            bar.post_message(SettingsBar.Cleared())
            await pilot.pause()

            assert app.state.settings.api_base == ""
            assert app.state.settings.api_token == ""
            assert app.state.settings.store.keys() == []
            assert app.query_one("#send-btn", Button).disabled

        await app.state.dispose()

"""Shared helpers for the test suite."""
import asyncio
from collections.abc import AsyncIterator, Callable

import httpx

API_BASE = "http://x"
API_TOKEN = "t"


async def byte_stream(*chunks: bytes, hold: asyncio.Event | None = None) -> AsyncIterator[bytes]:
    """Yield `chunks`, then block on `hold` (if given) before ending."""
    for chunk in chunks:
        yield chunk
        await asyncio.sleep(0)
    if hold is not None:
        await hold.wait()


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Poll `predicate` until it is true or `timeout` elapses."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.01)


class RecordingHandler:
    """MockTransport handler that records requests and answers via `respond`."""

    def __init__(self, respond: Callable[[httpx.Request], object]):
        self._respond = respond
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self._respond(request)
        if asyncio.iscoroutine(result):
            result = await result
        return result

"""Cooperative cancellation for in-flight requests.

A `CancellationToken` is handed to the streaming call; every suspension point
of that call goes through `guard`, so firing the token abandons whatever the
call is currently waiting on.
"""

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import TypeVar

from .errors import StreamCancelled

T = TypeVar("T")


class CancellationToken:
    """One-shot cancellation signal."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Fire the token. Further calls are no-ops."""
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise StreamCancelled()

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await `awaitable` unless the token fires first.

        Raises:
            StreamCancelled: If the token fired before the awaitable finished.
                The awaitable is cancelled and allowed to unwind.
        """
        self.raise_if_cancelled()

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            waiter.cancel()
            raise

        waiter.cancel()
        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise StreamCancelled()


@dataclass
class RequestHandle:
    """The single in-flight request of a controller."""

    prompt: str
    token: CancellationToken = field(default_factory=CancellationToken)

    def cancel(self) -> None:
        self.token.cancel()

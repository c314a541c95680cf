"""Stream decoder and transcript appender.

Turns the raw byte chunks of a streaming response into text and grows the
stream target (the last transcript entry) with each decoded fragment, in
arrival order.
"""

import codecs
from collections.abc import AsyncIterable, AsyncIterator

from ..transcript import Transcript
from .cancellation import CancellationToken
from .errors import StreamCancelled


class StreamDecoder:
    """Incremental UTF-8 decoder.

    Multi-byte characters split across chunk boundaries are held back until
    the rest of their bytes arrive, so a boundary never produces a
    replacement character.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    def decode(self, chunk: bytes) -> str:
        """Decode a chunk, carrying any incomplete trailing sequence."""
        return self._decoder.decode(chunk)

    def flush(self) -> str:
        """Decode whatever is left once the stream has ended."""
        return self._decoder.decode(b"", final=True)


async def _pull(iterator: AsyncIterator[bytes]) -> bytes | None:
    """Fetch the next chunk, or None at end of stream."""
    try:
        return await iterator.__anext__()
    except StopAsyncIteration:
        return None


async def pump_stream(
    chunks: AsyncIterable[bytes],
    transcript: Transcript,
    token: CancellationToken | None = None,
    decoder: StreamDecoder | None = None,
) -> int:
    """Append every decoded chunk of `chunks` to the last transcript entry.

    Args:
        chunks: Byte chunks in arrival order
        transcript: Transcript whose last entry is the stream target
        token: Cancellation token checked at every pull
        decoder: Decoder carrying state across chunks (a fresh one by default)

    Returns:
        Number of fragments appended to the transcript

    Raises:
        StreamCancelled: If the token fired. Fragments appended before that
            point stay in the transcript.
    """
    token = token or CancellationToken()
    decoder = decoder or StreamDecoder()
    iterator = chunks.__aiter__()
    appended = 0

    while True:
        chunk = await token.guard(_pull(iterator))
        if token.cancelled:
            raise StreamCancelled()
        if chunk is None:
            break
        if not chunk:
            continue
        text = decoder.decode(chunk)
        if text:
            transcript.append_to_last(text)
            appended += 1

    tail = decoder.flush()
    if tail:
        transcript.append_to_last(tail)
        appended += 1
    return appended

"""Generation client module for streamchat.

Provides the streaming HTTP client, the stream decoder/appender and the
request controller that ties them to the transcript.
"""

from .cancellation import CancellationToken, RequestHandle
from .controller import RESET_CONFIRMATION, RequestController
from .errors import ChatClientError, NetworkError, RequestError, StreamCancelled
from .http import GenerationClient, GenerationStream
from .stream import StreamDecoder, pump_stream

__all__ = [
    "CancellationToken",
    "ChatClientError",
    "GenerationClient",
    "GenerationStream",
    "NetworkError",
    "RESET_CONFIRMATION",
    "RequestController",
    "RequestError",
    "RequestHandle",
    "StreamCancelled",
    "StreamDecoder",
    "pump_stream",
]

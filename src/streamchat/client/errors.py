"""Error taxonomy for the generation client.

`RequestError` and `NetworkError` are surfaced to the user. `StreamCancelled`
marks a cooperative cancellation and is never shown as an error.
"""


class ChatClientError(Exception):
    """Base class for errors surfaced to the user."""


class RequestError(ChatClientError):
    """The endpoint answered, but not with a usable response.

    Raised for non-success statuses, for responses without a body and for
    unexpected failures while reading the stream.
    """

    def __init__(self, status: int | None = None, message: str | None = None) -> None:
        self.status = status
        if message is None:
            message = f"HTTP {status}" if status is not None else "Request failed"
        super().__init__(message)


class NetworkError(ChatClientError):
    """Transport-level failure (DNS, refused connection, TLS, dropped stream)."""


class StreamCancelled(Exception):
    """Raised when a request is cancelled through its cancellation token."""

"""HTTP client for the generation endpoint.

Hidden design decisions:
- Which HTTP library is used and how its client is configured
- URL construction and authentication headers
- Mapping of transport failures to `NetworkError` and bad statuses to
  `RequestError`
"""

from collections.abc import AsyncIterator
from typing import Any

import httpx

from .errors import NetworkError, RequestError

GENERATE_STREAM_PATH = "/generate_stream"
RESET_PATH = "/reset"

# Statuses that never carry a response body
NO_BODY_STATUSES = {204, 205}


def build_url(api_base: str, path: str) -> str:
    """Join the user-supplied base URL and an endpoint path."""
    return f"{api_base.rstrip('/')}{path}"


def auth_headers(api_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {api_token}"}


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


class GenerationStream:
    """Wrapper around a streaming HTTP response.

    Acts as an async iterator of raw byte chunks and owns the underlying
    response, which is released by `aclose` (or by leaving `async with`).

    Usage:
        stream = await client.open_stream(base, token, prompt)
        async with stream:
            async for chunk in stream:
                ...
    """

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    async def __aiter__(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes():
                yield chunk
        except httpx.RequestError as exc:
            raise NetworkError(_describe(exc)) from exc

    async def aclose(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> "GenerationStream":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()


class GenerationClient:
    """Client for the `/generate_stream` and `/reset` endpoints.

    The connection settings are passed per call so that edits in the
    settings bar take effect on the next request.

    Supports async context manager protocol for proper resource cleanup:
        async with GenerationClient() as client:
            await client.reset(base, token)
    """

    def __init__(
        self,
        timeout: float | None = None,
        **client_kwargs: Any
    ):
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds (None waits forever)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
                (e.g. a `transport` in tests)
        """
        self._client = httpx.AsyncClient(timeout=timeout, **client_kwargs)

    async def open_stream(self, api_base: str, api_token: str, prompt: str) -> GenerationStream:
        """POST the prompt and return the response body as a stream.

        Raises:
            RequestError: On a non-success status or a status without body
            NetworkError: On transport failure before the headers arrived
        """
        try:
            request = self._client.build_request(
                "POST",
                build_url(api_base, GENERATE_STREAM_PATH),
                headers=auth_headers(api_token),
                json={"prompt": prompt},
            )
            response = await self._client.send(request, stream=True)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise NetworkError(_describe(exc)) from exc

        if not response.is_success or response.status_code in NO_BODY_STATUSES:
            await response.aclose()
            raise RequestError(response.status_code)
        return GenerationStream(response)

    async def reset(self, api_base: str, api_token: str) -> None:
        """Ask the endpoint to drop its conversation history.

        Raises:
            RequestError: On a non-success status
            NetworkError: On transport failure
        """
        try:
            response = await self._client.post(
                build_url(api_base, RESET_PATH),
                headers=auth_headers(api_token),
            )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise NetworkError(_describe(exc)) from exc

        if not response.is_success:
            raise RequestError(response.status_code)

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "GenerationClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Suppresses "Event loop is closed" raised by httpx/anyio when the
        loop is torn down before the pool.
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise

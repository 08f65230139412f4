r"""Asynchronous context manager client with automatic retries.

This module provides an async context manager-based client for making
multiple HTTP requests with shared retry options. The AsyncRetryClient
builds an ``httpx.AsyncClient`` on top of an ``AsyncRetryTransport``.
Backoff waits suspend only the awaiting task, so concurrent requests
sharing the client keep progressing.
"""

from __future__ import annotations

__all__ = ["AsyncRetryClient"]

from typing import TYPE_CHECKING, Any

import httpx

from retryx.core.config import DEFAULT_TIMEOUT
from retryx.transport import AsyncRetryTransport

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    from retryx.core.config import RetryOptions


class AsyncRetryClient:
    r"""Asynchronous context manager for HTTP requests with retries.

    Args:
        options: The retry options, in any form accepted by
            ``RetryOptions.from_value``. If ``None``, the defaults are used.
        transport: Optional async transport wrapped by the retry transport.
            If ``None``, a default ``httpx.AsyncHTTPTransport`` is used.
        **client_kwargs: Additional keyword arguments passed to
            ``httpx.AsyncClient``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from retryx import AsyncRetryClient, RetryOptions
        >>> async def main():
        ...     async with AsyncRetryClient(options=RetryOptions(max=5)) as client:
        ...         return await client.get("https://api.example.com/data")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        options: RetryOptions | Mapping[str, Any] | int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **client_kwargs: Any,
    ) -> None:
        client_kwargs.setdefault("timeout", DEFAULT_TIMEOUT)
        self._transport: AsyncRetryTransport = AsyncRetryTransport(transport, options=options)
        self._client: httpx.AsyncClient = httpx.AsyncClient(
            transport=self._transport, **client_kwargs
        )

    @property
    def retry_options(self) -> RetryOptions:
        """The retry options used by this client."""
        return self._transport.options

    async def __aenter__(self) -> Self:
        """Enter the async context manager.

        Returns:
            The AsyncRetryClient instance for making requests.
        """
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the async context manager and close the underlying httpx
        client.
        """
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        """Close the underlying httpx client and its transports."""
        await self._client.aclose()

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP request with automatic retry logic.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH, HEAD, OPTIONS, etc.).
            url: The URL to send the request to.
            **kwargs: Additional keyword arguments passed to httpx.AsyncClient.request().

        Returns:
            The final response. It may carry a retryable status if the
            retries were exhausted or abandoned.

        Raises:
            Exception: The transport exception, unchanged, if it is not
                retried or if the retries are exhausted.
        """
        return await self._client.request(method, url, **kwargs)

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    async def head(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("HEAD", url, **kwargs)

    async def options(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("OPTIONS", url, **kwargs)

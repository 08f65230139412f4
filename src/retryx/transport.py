r"""httpx transports with automatic retry logic.

The retry transports wrap another httpx transport, so the retry engine
sits between an ``httpx.Client`` and the network. Redirects, auth and
cookies are handled by the client as usual; every request that reaches
the transport goes through the retry loop.

Example:
    ```pycon
    >>> import httpx
    >>> from retryx import RetryOptions, RetryTransport
    >>> transport = RetryTransport(
    ...     httpx.HTTPTransport(), options=RetryOptions(max=3, retry_statuses={503})
    ... )
    >>> with httpx.Client(transport=transport) as client:  # doctest: +SKIP
    ...     response = client.get("https://api.example.com/data")
    ...

    ```
"""

from __future__ import annotations

__all__ = ["AsyncRetryTransport", "RetryTransport"]

from typing import TYPE_CHECKING, Any

import httpx

from retryx.retry.executor import RetryExecutor
from retryx.retry.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Mapping

    from retryx.core.config import RetryOptions


class RetryTransport(httpx.BaseTransport):
    """Synchronous httpx transport retrying failed requests.

    Args:
        transport: The wrapped transport. If ``None``, a default
            ``httpx.HTTPTransport`` is created.
        options: The retry options, in any form accepted by
            ``RetryOptions.from_value``.
    """

    def __init__(
        self,
        transport: httpx.BaseTransport | None = None,
        options: RetryOptions | Mapping[str, Any] | int | None = None,
    ) -> None:
        self._transport: httpx.BaseTransport = transport or httpx.HTTPTransport()
        self._executor: RetryExecutor = RetryExecutor(options)

    @property
    def options(self) -> RetryOptions:
        """The retry options used by this transport."""
        return self._executor.options

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        return self._executor.execute(request, self._transport.handle_request)

    def close(self) -> None:
        self._transport.close()


class AsyncRetryTransport(httpx.AsyncBaseTransport):
    """Asynchronous httpx transport retrying failed requests.

    Args:
        transport: The wrapped transport. If ``None``, a default
            ``httpx.AsyncHTTPTransport`` is created.
        options: The retry options, in any form accepted by
            ``RetryOptions.from_value``.
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        options: RetryOptions | Mapping[str, Any] | int | None = None,
    ) -> None:
        self._transport: httpx.AsyncBaseTransport = transport or httpx.AsyncHTTPTransport()
        self._executor: AsyncRetryExecutor = AsyncRetryExecutor(options)

    @property
    def options(self) -> RetryOptions:
        """The retry options used by this transport."""
        return self._executor.options

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._executor.execute(request, self._transport.handle_async_request)

    async def aclose(self) -> None:
        await self._transport.aclose()

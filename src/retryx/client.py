r"""Synchronous context manager client with automatic retries.

This module provides a context manager-based client for making multiple
HTTP requests with shared retry options. The RetryClient builds an
``httpx.Client`` on top of a ``RetryTransport`` and manages its
lifecycle.
"""

from __future__ import annotations

__all__ = ["RetryClient"]

from typing import TYPE_CHECKING, Any

import httpx

from retryx.core.config import DEFAULT_TIMEOUT
from retryx.transport import RetryTransport

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    from retryx.core.config import RetryOptions


class RetryClient:
    r"""Synchronous context manager for HTTP requests with retries.

    Every request sent through the client goes through the retry loop
    configured by ``options``.

    Args:
        options: The retry options, in any form accepted by
            ``RetryOptions.from_value``. If ``None``, the defaults are used.
        transport: Optional transport wrapped by the retry transport.
            If ``None``, a default ``httpx.HTTPTransport`` is used.
        **client_kwargs: Additional keyword arguments passed to
            ``httpx.Client`` (headers, auth, base_url, timeout, etc.).

    Example:
        ```pycon
        >>> from retryx import RetryClient, RetryOptions
        >>> options = RetryOptions(max=5, interval=0.5, retry_statuses={429, 503})
        >>> with RetryClient(options=options) as client:  # doctest: +SKIP
        ...     response1 = client.get("https://api.example.com/data1")
        ...     response2 = client.put("https://api.example.com/data2", json={"key": "value"})
        ...

        ```
    """

    def __init__(
        self,
        *,
        options: RetryOptions | Mapping[str, Any] | int | None = None,
        transport: httpx.BaseTransport | None = None,
        **client_kwargs: Any,
    ) -> None:
        client_kwargs.setdefault("timeout", DEFAULT_TIMEOUT)
        self._transport: RetryTransport = RetryTransport(transport, options=options)
        self._client: httpx.Client = httpx.Client(transport=self._transport, **client_kwargs)

    @property
    def retry_options(self) -> RetryOptions:
        """The retry options used by this client."""
        return self._transport.options

    def __enter__(self) -> Self:
        """Enter the context manager.

        Returns:
            The RetryClient instance for making requests.
        """
        self._client.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager and close the underlying httpx
        client.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        self._client.__exit__(exc_type, exc_val, exc_tb)

    def close(self) -> None:
        """Close the underlying httpx client and its transports."""
        self._client.close()

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        r"""Send an HTTP request with automatic retry logic.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH, HEAD, OPTIONS, etc.).
            url: The URL to send the request to.
            **kwargs: Additional keyword arguments passed to httpx.Client.request().

        Returns:
            The final response. It may carry a retryable status if the
            retries were exhausted or abandoned.

        Raises:
            Exception: The transport exception, unchanged, if it is not
                retried or if the retries are exhausted.
        """
        return self._client.request(method, url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send an HTTP GET request with automatic retry logic."""
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send an HTTP POST request with automatic retry logic.

        POST is not idempotent and is only retried when ``methods``
        includes it, when ``methods`` is empty, or when ``retry_if``
        allows it.
        """
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send an HTTP PUT request with automatic retry logic."""
        return self.request("PUT", url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send an HTTP PATCH request with automatic retry logic."""
        return self.request("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send an HTTP DELETE request with automatic retry logic."""
        return self.request("DELETE", url, **kwargs)

    def head(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send an HTTP HEAD request with automatic retry logic."""
        return self.request("HEAD", url, **kwargs)

    def options(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send an HTTP OPTIONS request with automatic retry logic."""
        return self.request("OPTIONS", url, **kwargs)

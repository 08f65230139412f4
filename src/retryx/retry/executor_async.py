r"""Asynchronous retry executor for HTTP requests.

This module provides the AsyncRetryExecutor class that sends a request
through an async transport callable and retries it according to the
retry options.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING

from retryx.retry.executor_core import BaseRetryExecutor
from retryx.utils.rewind import arewind_request

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor(BaseRetryExecutor):
    """Executes async HTTP requests with automatic retry logic.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from retryx.retry import AsyncRetryExecutor
        >>> from retryx.core.config import RetryOptions
        >>>
        >>> async def main():
        ...     executor = AsyncRetryExecutor(RetryOptions(max=3, retry_statuses={503}))
        ...     transport = httpx.MockTransport(lambda request: httpx.Response(200))
        ...     request = httpx.Request("GET", "https://example.com")
        ...     response = await executor.execute(request, transport.handle_async_request)
        ...     return response.status_code
        ...
        >>> asyncio.run(main())
        200

        ```
    """

    async def execute(
        self,
        request: httpx.Request,
        send: Callable[[httpx.Request], Awaitable[httpx.Response]],
    ) -> httpx.Response:
        """Send the request, retrying retryable failures.

        Note:
            This method uses asyncio.sleep() for backoff delays, allowing
            other tasks to run during retry waits. Cancelling the task
            interrupts the wait or the pending send, and the cancellation
            propagates.

        Args:
            request: The request to send.
            send: The async transport operation. It returns a response or
                raises.

        Returns:
            The first response that is not a retryable failure, or the last
            response with a retryable status when no retry is left.

        Raises:
            Exception: The exception raised by ``send`` when it is not
                retryable or when retries are exhausted. It is re-raised
                unchanged.
        """
        remaining = self.options.max_retries
        retry_count = 0
        while True:
            try:
                response = await send(request)
            except Exception as exc:
                if not self.decider.is_retryable_exception(exc):
                    logger.debug(
                        f"{request.method} request to {request.url} raised "
                        f"non-retryable {type(exc).__name__}"
                    )
                    raise
                sleep_time = self.plan_retry(request, None, exc, remaining, retry_count)
                if sleep_time is None:
                    raise
            else:
                if not self.is_status_failure(response):
                    return response
                sleep_time = self.plan_retry(request, response, None, remaining, retry_count)
                if sleep_time is None:
                    return response
                await response.aclose()

            remaining -= 1
            retry_count += 1
            await asyncio.sleep(sleep_time)
            await arewind_request(request)

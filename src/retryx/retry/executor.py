r"""Synchronous retry executor for HTTP requests.

This module provides the RetryExecutor class that sends a request
through a transport callable and retries it according to the retry
options.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING

from retryx.retry.executor_core import BaseRetryExecutor
from retryx.utils.rewind import rewind_request

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor(BaseRetryExecutor):
    """Executes HTTP requests with automatic retry logic.

    Example:
        ```pycon
        >>> import httpx
        >>> from retryx.retry import RetryExecutor
        >>> from retryx.core.config import RetryOptions
        >>> executor = RetryExecutor(RetryOptions(max=3, retry_statuses={503}))
        >>> transport = httpx.MockTransport(lambda request: httpx.Response(200))
        >>> request = httpx.Request("GET", "https://example.com")
        >>> executor.execute(request, transport.handle_request).status_code
        200

        ```
    """

    def execute(
        self,
        request: httpx.Request,
        send: Callable[[httpx.Request], httpx.Response],
    ) -> httpx.Response:
        """Send the request, retrying retryable failures.

        The request is sent at most ``max + 1`` times. Between attempts the
        executor sleeps for the computed backoff, then rewinds the request
        body.

        Args:
            request: The request to send.
            send: The transport operation. It returns a response or raises.

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
                response = send(request)
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
                response.close()

            remaining -= 1
            retry_count += 1
            time.sleep(sleep_time)
            rewind_request(request)

r"""Callback manager for the retry lifecycle events.

This module provides the CallbackManager class that invokes the
user-defined retry and exhaustion callbacks and logs the matching
structured events.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

import logging
from typing import TYPE_CHECKING

from retryx.callbacks import invoke_callback
from retryx.utils.structured_logging import log_structured

if TYPE_CHECKING:
    import httpx

    from retryx.core.config import RetryOptions

logger: logging.Logger = logging.getLogger(__name__)


def _status_code(response: httpx.Response | None) -> int | None:
    return None if response is None else response.status_code


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    Attributes:
        options: The retry options holding the callbacks.
    """

    def __init__(self, options: RetryOptions) -> None:
        self.options = options

    def on_retry(
        self,
        request: httpx.Request,
        response: httpx.Response | None,
        exception: Exception | None,
        retry_count: int,
        sleep_time: float,
    ) -> None:
        """Invoke the retry callback.

        Args:
            request: The request about to be retried.
            response: The failing response (if any).
            exception: The failing exception (if any).
            retry_count: The number of retries already performed.
            sleep_time: The wait before the retry.
        """
        log_structured(
            logger,
            logging.DEBUG,
            f"{request.method} request to {request.url} failed, "
            f"retry {retry_count + 1}/{self.options.max_retries} in {sleep_time:.2f}s",
            event="retry",
            method=request.method,
            url=str(request.url),
            retry_count=retry_count,
            wait=sleep_time,
            status_code=_status_code(response),
            error=None if exception is None else type(exception).__name__,
        )
        invoke_callback(
            self.options.retry_block,
            request=request,
            response=response,
            exception=exception,
            options=self.options,
            retry_count=retry_count,
            will_retry_in=sleep_time,
        )

    def on_exhausted(
        self,
        request: httpx.Request,
        response: httpx.Response | None,
        exception: Exception | None,
        retry_count: int,
    ) -> None:
        """Invoke the exhaustion callback.

        Args:
            request: The request whose retries are exhausted.
            response: The final response (if any).
            exception: The final exception (if any).
            retry_count: The number of retries performed.
        """
        log_structured(
            logger,
            logging.DEBUG,
            f"{request.method} request to {request.url} failed after "
            f"{retry_count + 1} attempts, retries exhausted",
            event="exhausted",
            method=request.method,
            url=str(request.url),
            retry_count=retry_count,
            status_code=_status_code(response),
            error=None if exception is None else type(exception).__name__,
        )
        invoke_callback(
            self.options.exhausted_retries_block,
            request=request,
            response=response,
            exception=exception,
            options=self.options,
            retry_count=retry_count,
        )

r"""Callback payload for the retry lifecycle hooks.

Two hooks can be configured on ``RetryOptions``:
- retry_block: Called before each retry, once the wait is known
- exhausted_retries_block: Called once when a retryable failure remains
  and no retry is left

Both receive a ``RetryInfo``.

Example:
    ```pycon
    >>> from retryx import RetryClient, RetryOptions
    >>> from retryx.callbacks import RetryInfo
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"Retry #{info.retry_count + 1} in {info.will_retry_in:.1f}s")
    ...
    >>> with RetryClient(options=RetryOptions(retry_block=log_retry)) as client:  # doctest: +SKIP
    ...     response = client.get("https://api.example.com/data")
    ...

    ```
"""

from __future__ import annotations

__all__ = ["RetryInfo", "invoke_callback"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from retryx.core.config import RetryOptions


@dataclass(frozen=True)
class RetryInfo:
    """Information passed to the retry and exhaustion callbacks.

    Attributes:
        request: The request being retried.
        response: The response with a retryable status, if the failure was
            a status failure.
        exception: The exception raised by the transport, if the failure
            was an exception.
        options: The active retry options.
        retry_count: The number of retries already performed (0 on the
            first failure).
        will_retry_in: The wait in seconds before the next attempt, or None
            when retries are exhausted.
    """

    request: httpx.Request
    response: httpx.Response | None
    exception: Exception | None
    options: RetryOptions
    retry_count: int
    will_retry_in: float | None = None


def invoke_callback(
    callback: Callable[[RetryInfo], None] | None,
    *,
    request: httpx.Request,
    response: httpx.Response | None,
    exception: Exception | None,
    options: RetryOptions,
    retry_count: int,
    will_retry_in: float | None = None,
) -> None:
    """Invoke a retry lifecycle callback if provided.

    Args:
        callback: Optional callback to invoke.
        request: The request being retried.
        response: The failing response (if any).
        exception: The failing exception (if any).
        options: The active retry options.
        retry_count: The number of retries already performed.
        will_retry_in: The wait before the next attempt (if any).
    """
    if callback is not None:
        callback(
            RetryInfo(
                request=request,
                response=response,
                exception=exception,
                options=options,
                retry_count=retry_count,
                will_retry_in=will_retry_in,
            )
        )

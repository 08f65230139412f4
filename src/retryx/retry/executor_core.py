r"""Shared core logic for retry executors.

This module provides the base class shared by the synchronous and
asynchronous retry executors. It owns the strategy objects and the
decision taken after each failed attempt; the subclasses only differ in
how they send, sleep and release responses.
"""

from __future__ import annotations

__all__ = ["BaseRetryExecutor"]

from typing import TYPE_CHECKING

from retryx.core.config import RetryOptions
from retryx.retry.decider import RetryDecider
from retryx.retry.manager import CallbackManager
from retryx.retry.strategy import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    import httpx


class BaseRetryExecutor:
    """Base class of the retry executors.

    The executor orchestrates the following components:
    - RetryDecider: Classifies failures and decides eligibility
    - RetryStrategy: Calculates the wait before each retry
    - CallbackManager: Invokes the retry and exhaustion callbacks

    Args:
        options: The retry options. Any form accepted by
            ``RetryOptions.from_value`` (None, a legacy integer, a mapping)
            is accepted.

    Attributes:
        options: The retry options.
        decider: Logic for deciding whether to retry.
        strategy: Strategy for calculating retry delays.
        callbacks: Manager for invoking callbacks.
    """

    def __init__(self, options: RetryOptions | Mapping[str, Any] | int | None = None) -> None:
        self.options: RetryOptions = RetryOptions.from_value(options)
        self.decider: RetryDecider = RetryDecider(
            exceptions=self.options.exceptions,
            retry_statuses=self.options.retry_statuses,
            methods=self.options.methods,
            retry_if=self.options.retry_if,
        )
        self.strategy: RetryStrategy = RetryStrategy(
            max_retries=self.options.max_retries,
            interval=self.options.interval,
            backoff_factor=self.options.backoff_factor,
            max_interval=self.options.max_interval,
            interval_randomness=self.options.interval_randomness,
            retry_header=self.options.rate_limit_retry_header,
            reset_header=self.options.rate_limit_reset_header,
            header_parser=self.options.header_parser_block,
        )
        self.callbacks: CallbackManager = CallbackManager(self.options)

    def is_status_failure(self, response: httpx.Response) -> bool:
        """Return whether the response must be handled as a failure.

        A retryable status is returned as-is when no retry is configured
        at all.
        """
        return self.options.max_retries > 0 and self.decider.is_retryable_status(response)

    def plan_retry(
        self,
        request: httpx.Request,
        response: httpx.Response | None,
        exception: Exception | None,
        remaining: int,
        retry_count: int,
    ) -> float | None:
        """Decide what happens after a classified failure.

        Args:
            request: The failed request.
            response: The response with a retryable status (if any).
            exception: The retryable exception (if any).
            remaining: The number of retries remaining.
            retry_count: The number of retries already performed.

        Returns:
            The wait in seconds before retrying, or None if the failure is
            final. The exhaustion callback is invoked when the failure is
            eligible but no retry remains.
        """
        if not self.decider.should_retry(request, exception):
            return None

        if remaining <= 0:
            self.callbacks.on_exhausted(request, response, exception, retry_count)
            return None

        sleep_time = self.strategy.calculate_delay(remaining, response)
        if sleep_time is None:
            return None

        self.callbacks.on_retry(request, response, exception, retry_count, sleep_time)
        return sleep_time

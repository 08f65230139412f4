r"""Retry strategy for calculating backoff delays.

This module provides the RetryStrategy class that turns the number of
remaining retries and the failing response into a wait duration.
"""

from __future__ import annotations

__all__ = ["RetryStrategy"]

import logging
import random
from typing import TYPE_CHECKING

from retryx.backoff.exponential import ExponentialBackoff
from retryx.core.config import DEFAULT_RESET_HEADER, DEFAULT_RETRY_HEADER
from retryx.utils.retry_after import parse_wait_hint

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


class RetryStrategy:
    """Strategy for calculating retry delays with backoff, jitter and
    server wait hints.

    Args:
        max_retries: Maximum number of retries (already clamped to >= 0).
        interval: Wait in seconds before the first retry.
        backoff_factor: Multiplier applied after each retry.
        max_interval: Optional ceiling for a single wait in seconds.
        interval_randomness: Fraction of ``interval`` added as jitter.
        retry_header: Header holding a retry-after hint.
        reset_header: Header holding a rate-limit reset hint.
        header_parser: Optional function replacing the default header
            value parser.

    Example:
        ```pycon
        >>> from retryx.retry import RetryStrategy
        >>> strategy = RetryStrategy(max_retries=5, interval=0.1, backoff_factor=2)
        >>> strategy.calculate_retry_interval(5)
        0.1
        >>> strategy.calculate_retry_interval(4)
        0.2
        >>> strategy.calculate_retry_interval(3)
        0.4

        ```
    """

    def __init__(
        self,
        max_retries: int,
        interval: float = 0.0,
        backoff_factor: float = 2.0,
        max_interval: float | None = None,
        interval_randomness: float = 0.0,
        retry_header: str = DEFAULT_RETRY_HEADER,
        reset_header: str = DEFAULT_RESET_HEADER,
        header_parser: Callable[[str], float] | None = None,
    ) -> None:
        self.max_retries = max_retries
        self.interval = interval
        self.max_interval = max_interval
        self.interval_randomness = interval_randomness
        self.header_names = (retry_header, reset_header)
        self.header_parser = header_parser
        self.backoff_strategy: ExponentialBackoff = ExponentialBackoff(
            interval=interval, backoff_factor=backoff_factor, max_interval=max_interval
        )

    def calculate_retry_interval(self, remaining: int) -> float:
        """Calculate the exponential wait for the next retry.

        Args:
            remaining: The number of retries remaining before this retry
                is performed (``max_retries`` for the first retry).

        Returns:
            The backoff delay capped at ``max_interval``, plus a random
            jitter in ``[0, interval * interval_randomness]``.
        """
        delay = self.backoff_strategy.calculate(self.max_retries - remaining)
        if self.interval_randomness > 0:
            delay += random.uniform(0, self.interval_randomness * self.interval)  # noqa: S311
        return delay

    def calculate_delay(
        self,
        remaining: int,
        response: httpx.Response | None = None,
    ) -> float | None:
        """Calculate the wait before the next retry.

        A wait hint from the response headers replaces the exponential
        wait when it is larger. A hint larger than ``max_interval`` is not
        clamped: the retry is abandoned instead.

        Args:
            remaining: The number of retries remaining before this retry.
            response: The failing response, if any.

        Returns:
            The sleep time in seconds, or None if the retry must not be
            performed.
        """
        retry_interval = self.calculate_retry_interval(remaining)
        hint = parse_wait_hint(response, self.header_names, self.header_parser)
        if hint is None:
            logger.debug(f"Waiting {retry_interval:.2f}s before retry")
            return retry_interval

        if self.max_interval is not None and hint > self.max_interval:
            logger.debug(
                f"Server wait hint {hint:.2f}s exceeds max_interval={self.max_interval:.2f}s, "
                "abandoning retry"
            )
            return None

        sleep_time = max(hint, retry_interval)
        logger.debug(
            f"Waiting {sleep_time:.2f}s before retry (hint={hint:.2f}s, "
            f"backoff={retry_interval:.2f}s)"
        )
        return sleep_time

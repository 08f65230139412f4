r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from retryx.backoff.base import BaseBackoffStrategy


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: interval * (backoff_factor ** retry_index), with
    an optional max_interval cap.

    Args:
        interval: The wait in seconds before the first retry.
        backoff_factor: The multiplier applied after each retry.
        max_interval: Optional maximum delay cap in seconds. If specified,
            delays will not exceed this value.

    Example:
        ```pycon
        >>> from retryx.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(interval=0.1, backoff_factor=2)
        >>> backoff.calculate(0)  # First retry
        0.1
        >>> backoff.calculate(1)  # Second retry
        0.2
        >>> backoff.calculate(2)  # Third retry
        0.4
        >>> # With max_interval cap
        >>> backoff = ExponentialBackoff(interval=0.1, backoff_factor=2, max_interval=0.3)
        >>> backoff.calculate(3)  # Would be 0.8, but capped
        0.3

        ```
    """

    def __init__(
        self,
        interval: float = 0.0,
        backoff_factor: float = 2.0,
        max_interval: float | None = None,
    ) -> None:
        if interval < 0:
            msg = f"interval must be non-negative, got {interval}"
            raise ValueError(msg)
        if backoff_factor < 0:
            msg = f"backoff_factor must be non-negative, got {backoff_factor}"
            raise ValueError(msg)
        if max_interval is not None and max_interval <= 0:
            msg = f"max_interval must be positive if specified, got {max_interval}"
            raise ValueError(msg)

        self.interval = interval
        self.backoff_factor = backoff_factor
        self.max_interval = max_interval

    def calculate(self, retry_index: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            retry_index: The number of retries already performed (0-indexed).

        Returns:
            The calculated delay: interval * (backoff_factor ** retry_index),
            capped at max_interval if set.
        """
        delay = self.interval * (self.backoff_factor**retry_index)
        if self.max_interval is not None:
            delay = min(delay, self.max_interval)
        return delay

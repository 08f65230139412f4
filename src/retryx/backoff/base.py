r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before retrying a
    failed request based on the number of retries already performed.
    """

    @abstractmethod
    def calculate(self, retry_index: int) -> float:
        """Calculate the backoff delay for a given retry.

        Args:
            retry_index: The number of retries already performed
                (0-indexed). For example, retry_index=0 is the first retry,
                retry_index=1 is the second retry, etc.

        Returns:
            The calculated delay in seconds before the retry.
        """

r"""Retry decision logic for determining whether to retry requests.

This module provides the RetryDecider class that classifies failures
(configured exception types and retryable statuses) and decides whether
a failed request is eligible for a retry, regardless of how many
retries remain.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

import logging
from typing import TYPE_CHECKING

from retryx.core.exceptions import resolve_exceptions

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


class RetryDecider:
    """Decides whether a failed request should be retried.

    Args:
        exceptions: Exception classes or names that are retryable. Names
            are resolved once here; unresolvable names are dropped.
        retry_statuses: Retryable response status codes.
        methods: Methods eligible without consulting ``retry_if``. An
            empty collection means every method is eligible.
        retry_if: Optional predicate ``(request, exception) -> bool``
            deciding for methods outside ``methods``.

    Example:
        ```pycon
        >>> import httpx
        >>> from retryx.retry import RetryDecider
        >>> decider = RetryDecider(
        ...     exceptions=["TimeoutError"], retry_statuses={503}, methods={"GET"}
        ... )
        >>> decider.is_retryable_exception(TimeoutError())
        True
        >>> decider.should_retry(httpx.Request("GET", "https://example.com"), TimeoutError())
        True
        >>> decider.should_retry(httpx.Request("POST", "https://example.com"), TimeoutError())
        False

        ```
    """

    def __init__(
        self,
        exceptions: Iterable[type[Exception] | str],
        retry_statuses: Iterable[int],
        methods: Iterable[str],
        retry_if: Callable[[httpx.Request, Exception | None], bool] | None = None,
    ) -> None:
        self.exception_types: tuple[type[Exception], ...] = resolve_exceptions(exceptions)
        self.retry_statuses = frozenset(retry_statuses)
        self.methods = frozenset(method.upper() for method in methods)
        self.retry_if = retry_if

    def is_retryable_exception(self, exception: BaseException) -> bool:
        """Return whether the exception type is configured as retryable.

        Subclasses of a configured type match too.
        """
        return isinstance(exception, self.exception_types)

    def is_retryable_status(self, response: httpx.Response) -> bool:
        """Return whether the response status is configured as retryable."""
        return response.status_code in self.retry_statuses

    def should_retry(self, request: httpx.Request, exception: Exception | None) -> bool:
        """Determine whether a classified failure is eligible for a retry.

        Methods listed in ``methods`` are always eligible and the
        ``retry_if`` predicate is not consulted for them. For any other
        method, the predicate decides when configured; without it, only
        an empty ``methods`` collection makes the request eligible.

        Args:
            request: The failed request.
            exception: The exception raised by the transport, or None for
                a retryable status.

        Returns:
            True if the request may be retried.
        """
        if self.methods and request.method.upper() in self.methods:
            return True
        if self.retry_if is not None:
            should_retry = bool(self.retry_if(request, exception))
            logger.debug(
                f"{request.method} request to {request.url}: retry_if returned {should_retry}"
            )
            return should_retry
        if not self.methods:
            return True
        logger.debug(
            f"{request.method} request to {request.url} is not retried "
            f"(method not in {sorted(self.methods)})"
        )
        return False

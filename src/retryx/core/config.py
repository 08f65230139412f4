r"""Retry options and default configuration tables.

This module provides the configuration constants and the immutable
``RetryOptions`` dataclass shared by the retry executors, the retry
transports and the clients.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_FACTOR",
    "DEFAULT_EXCEPTIONS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RESET_HEADER",
    "DEFAULT_RETRY_HEADER",
    "DEFAULT_TIMEOUT",
    "IDEMPOTENT_METHODS",
    "RetryOptions",
]

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any

import httpx

from retryx.core.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable

    from retryx.callbacks import RetryInfo


# Default timeout in seconds used by the clients
DEFAULT_TIMEOUT = 10.0

# Default maximum number of retries
# Total attempts = max + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 2

# Wait before retry n (0-indexed) = interval * (backoff_factor ** n)
DEFAULT_BACKOFF_FACTOR = 2.0

# Methods that are retried without a custom retry_if predicate
IDEMPOTENT_METHODS: frozenset[str] = frozenset({"DELETE", "GET", "HEAD", "OPTIONS", "PUT"})

# Exceptions retried by default: OS level timeouts and httpx timeouts
DEFAULT_EXCEPTIONS: tuple[type[Exception], ...] = (TimeoutError, httpx.TimeoutException)

# Response headers carrying a server-mandated wait
DEFAULT_RETRY_HEADER = "Retry-After"
DEFAULT_RESET_HEADER = "RateLimit-Reset"


def _as_tuple(value: Any) -> tuple:
    if value is None:
        return ()
    if isinstance(value, (str, type)) or not isinstance(value, Iterable):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class RetryOptions:
    """Configuration of the retry behavior for one request chain.

    Instances are immutable and can be shared between concurrent
    requests. Collection-valued options accept a single value or an
    iterable and are normalized at construction time.

    Args:
        max: Maximum number of retries. A negative value means no retry.
        interval: Base wait in seconds before the first retry.
        max_interval: Optional ceiling for a single wait in seconds.
        backoff_factor: Multiplier applied to the wait after each retry.
        interval_randomness: Fraction of ``interval`` added as random jitter.
        exceptions: Exception classes or names that trigger a retry.
        retry_statuses: Response status codes that trigger a retry.
        methods: Methods retried without consulting ``retry_if``.
            An empty collection means every method.
        retry_if: Optional predicate ``(request, exception) -> bool``
            consulted for methods outside ``methods``. ``exception`` is
            ``None`` for status-based failures.
        retry_block: Optional callback invoked before each retry.
        exhausted_retries_block: Optional callback invoked once when the
            retries are exhausted.
        rate_limit_retry_header: Name of the header holding a
            retry-after hint.
        rate_limit_reset_header: Name of the header holding a rate-limit
            reset hint.
        header_parser_block: Optional function turning a raw header value
            into a wait in seconds. It replaces the default parser.

    Example:
        ```pycon
        >>> from retryx.core.config import RetryOptions
        >>> options = RetryOptions(max=3, interval=0.5, retry_statuses=429)
        >>> options.retry_statuses
        frozenset({429})
        >>> options.merge(max=5).max
        5
        >>> RetryOptions.from_value(1).max
        1

        ```
    """

    max: int = DEFAULT_MAX_RETRIES
    interval: float = 0.0
    max_interval: float | None = None
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR
    interval_randomness: float = 0.0
    exceptions: tuple[type[Exception] | str, ...] = DEFAULT_EXCEPTIONS
    retry_statuses: frozenset[int] = field(default_factory=frozenset)
    methods: frozenset[str] = IDEMPOTENT_METHODS
    retry_if: Callable[[httpx.Request, Exception | None], bool] | None = None
    retry_block: Callable[[RetryInfo], None] | None = None
    exhausted_retries_block: Callable[[RetryInfo], None] | None = None
    rate_limit_retry_header: str = DEFAULT_RETRY_HEADER
    rate_limit_reset_header: str = DEFAULT_RESET_HEADER
    header_parser_block: Callable[[str], float] | None = None

    def __post_init__(self) -> None:
        """Normalize and validate the options.

        Raises:
            ValueError: If a numeric option is out of range.
        """
        object.__setattr__(self, "exceptions", _as_tuple(self.exceptions))
        object.__setattr__(
            self, "retry_statuses", frozenset(int(s) for s in _as_tuple(self.retry_statuses))
        )
        object.__setattr__(
            self, "methods", frozenset(str(m).upper() for m in _as_tuple(self.methods))
        )
        validate_retry_params(
            interval=self.interval,
            backoff_factor=self.backoff_factor,
            interval_randomness=self.interval_randomness,
            max_interval=self.max_interval,
        )

    @classmethod
    def from_value(
        cls, value: RetryOptions | Mapping[str, Any] | int | None = None
    ) -> RetryOptions:
        """Build options from any of the accepted configuration forms.

        Args:
            value: ``None`` for the defaults, a bare integer (legacy form,
                sets ``max`` only), a mapping of option names, or an
                existing ``RetryOptions`` returned unchanged.

        Returns:
            The retry options.

        Raises:
            TypeError: If the value has an unsupported type.

        Example:
            ```pycon
            >>> from retryx.core.config import RetryOptions
            >>> RetryOptions.from_value({"max": 4, "interval": 0.1}).interval
            0.1
            >>> RetryOptions.from_value(-9).max
            -9

            ```
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            msg = f"Unsupported retry options value: {value!r}"
            raise TypeError(msg)
        if isinstance(value, int):
            return cls(max=value)
        if isinstance(value, Mapping):
            return cls(**value)
        msg = f"Unsupported retry options value: {value!r}"
        raise TypeError(msg)

    @property
    def max_retries(self) -> int:
        """The number of retries actually allowed, never negative."""
        return max(self.max, 0)

    def merge(self, **overrides: Any) -> RetryOptions:
        """Create new options with the given values overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Option values to override.

        Returns:
            A new ``RetryOptions`` instance.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the options to a dictionary of option names."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

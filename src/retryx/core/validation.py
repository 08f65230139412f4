r"""Parameter validation utilities for retry options.

This module provides validation functions for retry parameters to ensure
they meet the required constraints before being used by the retry
executors.
"""

from __future__ import annotations

__all__ = ["validate_retry_params"]


def validate_retry_params(
    interval: float = 0.0,
    backoff_factor: float = 2.0,
    interval_randomness: float = 0.0,
    max_interval: float | None = None,
) -> None:
    """Validate retry parameters.

    Note that the maximum number of retries is not validated: a negative
    value is accepted and means no retries at all.

    Args:
        interval: Base wait in seconds before the first retry. Must be >= 0.
        backoff_factor: Multiplier applied to the wait after each retry.
            Must be >= 0.
        interval_randomness: Fraction of ``interval`` added as random
            jitter. Must be in ``[0, 1]``.
        max_interval: Ceiling for a single wait in seconds.
            Must be > 0 if provided.

    Raises:
        ValueError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from retryx.core.validation import validate_retry_params
        >>> validate_retry_params(interval=0.5)
        >>> validate_retry_params(interval=0.5, interval_randomness=0.1)
        >>> validate_retry_params(max_interval=0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_interval must be > 0, got 0

        ```
    """
    if interval < 0:
        msg = f"interval must be >= 0, got {interval}"
        raise ValueError(msg)
    if backoff_factor < 0:
        msg = f"backoff_factor must be >= 0, got {backoff_factor}"
        raise ValueError(msg)
    if not 0 <= interval_randomness <= 1:
        msg = f"interval_randomness must be in [0, 1], got {interval_randomness}"
        raise ValueError(msg)
    if max_interval is not None and max_interval <= 0:
        msg = f"max_interval must be > 0, got {max_interval}"
        raise ValueError(msg)

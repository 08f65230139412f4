r"""Core configuration of the retry engine.

This package contains the retry options, their default values and
validation, and the resolution of configured exception types.
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
    "resolve_exceptions",
    "validate_retry_params",
]

from retryx.core.config import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_EXCEPTIONS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RESET_HEADER,
    DEFAULT_RETRY_HEADER,
    DEFAULT_TIMEOUT,
    IDEMPOTENT_METHODS,
    RetryOptions,
)
from retryx.core.exceptions import resolve_exceptions
from retryx.core.validation import validate_retry_params

r"""retryx - Retry decision engine for httpx.

This package retries failed outbound HTTP requests. It plugs into httpx as
a transport wrapper and decides, for each failure, whether to send the
request again, how long to wait first and when to give up.

Key Features:
    - Retries on configured exception types (by class or by name) and
      response statuses
    - Exponential backoff with optional ceiling and jitter
    - Retry-After and RateLimit-Reset header support (seconds or HTTP-date)
    - Idempotent methods only by default, with a custom retry_if predicate
    - Multipart and file bodies rewound before each retry
    - Retry and exhaustion callbacks
    - Sync and async support
    - Failures are never wrapped: callers see the original exception or response

Example:
    ```pycon
    >>> import httpx
    >>> from retryx import RetryOptions, RetryTransport
    >>> options = RetryOptions(max=3, interval=0.2, retry_statuses={429, 503})
    >>> with httpx.Client(transport=RetryTransport(options=options)) as client:  # doctest: +SKIP
    ...     response = client.get("https://api.example.com/data")
    ...
    >>> from retryx import RetryClient
    >>> with RetryClient(options=options) as client:  # doctest: +SKIP
    ...     response = client.get("https://api.example.com/data")
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryClient",
    "AsyncRetryExecutor",
    "AsyncRetryTransport",
    "RetryClient",
    "RetryExecutor",
    "RetryInfo",
    "RetryOptions",
    "RetryTransport",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from retryx.callbacks import RetryInfo
from retryx.client import RetryClient
from retryx.client_async import AsyncRetryClient
from retryx.core.config import RetryOptions
from retryx.retry import AsyncRetryExecutor, RetryExecutor
from retryx.transport import AsyncRetryTransport, RetryTransport

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"

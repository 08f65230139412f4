r"""Structured logging of retry events.

Every retry and every exhaustion is logged at debug level with the
fields listed in ``RETRY_EVENT_FIELDS``. With the default logging setup
they are plain messages; attaching ``StructuredFormatter`` renders each
event as one JSON line:

```json
{"timestamp": "2015-10-21T07:28:00.000Z", "level": "DEBUG",
 "logger": "retryx.retry.manager", "event": "retry",
 "message": "GET request to https://api.example.com/data failed, retry 1/2 in 0.50s",
 "retry": {"method": "GET", "url": "https://api.example.com/data",
           "retry_count": 0, "attempt": 1, "wait": 0.5, "status_code": 503,
           "error": null}}
```

Example:
    ```python
    import logging
    from retryx import RetryClient
    from retryx.utils.structured_logging import StructuredFormatter, correlation_scope

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("retryx")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    with correlation_scope("request-123"), RetryClient() as client:
        client.get("https://api.example.com/data")
    ```

"""

from __future__ import annotations

__all__ = [
    "RETRY_EVENT_FIELDS",
    "StructuredFormatter",
    "correlation_scope",
    "get_correlation_id",
    "log_structured",
]

import contextvars
import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

RETRY_EVENT_FIELDS: tuple[str, ...] = (
    "method",
    "url",
    "retry_count",
    "wait",
    "status_code",
    "error",
)

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "retryx_correlation_id", default=None
)


def get_correlation_id() -> str | None:
    """Return the correlation ID of the current context, if any."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[None]:
    """Tag the retry events logged inside the block with an ID.

    The ID lives in a context variable, so concurrent tasks each keep
    their own value. The previous value is restored on exit.

    Args:
        correlation_id: The ID to attach (e.g. a request or trace ID).

    Example:
        ```pycon
        >>> from retryx.utils.structured_logging import correlation_scope, get_correlation_id
        >>> with correlation_scope("request-456"):
        ...     get_correlation_id()
        ...
        'request-456'
        >>> get_correlation_id() is None
        True

        ```
    """
    token = _correlation_id.set(correlation_id)
    try:
        yield
    finally:
        _correlation_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """Render log records as JSON lines.

    The retry fields carried by a record are grouped under ``retry``,
    with the 1-based ``attempt`` number derived from ``retry_count``.
    Records without retry fields (e.g. other libraries' logs) only get
    the base keys. Values that are not JSON serializable are rendered
    with ``str``.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
        }
        event = getattr(record, "event", None)
        if event is not None:
            payload["event"] = event
        payload["message"] = record.getMessage()

        retry = {name: getattr(record, name) for name in RETRY_EVENT_FIELDS if hasattr(record, name)}
        if retry:
            if retry.get("retry_count") is not None:
                retry["attempt"] = retry["retry_count"] + 1
            payload["retry"] = retry

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id is not None:
            payload["correlation_id"] = correlation_id
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    *,
    event: str,
    **fields: Any,
) -> None:
    """Log a retry event with structured fields.

    The correlation ID of the current context is attached to the record.

    Args:
        logger: Logger to use.
        level: Log level (e.g. ``logging.DEBUG``).
        message: Human readable message.
        event: Event name (``"retry"`` or ``"exhausted"``).
        **fields: Retry fields (see ``RETRY_EVENT_FIELDS``).

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from retryx.utils.structured_logging import StructuredFormatter, log_structured
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("retryx.doctest")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.DEBUG)
        >>> log_structured(logger, logging.DEBUG, "retrying", event="retry", retry_count=0)
        >>> '"attempt": 1' in stream.getvalue()
        True

        ```
    """
    if logger.isEnabledFor(level):
        extra = {"event": event, "correlation_id": get_correlation_id(), **fields}
        logger.log(level, message, extra=extra)

r"""Server wait hint parsing utilities.

This module provides functions for parsing the wait hints that servers
send in ``Retry-After`` and ``RateLimit-Reset`` style response headers.
"""

from __future__ import annotations

__all__ = ["parse_retry_after", "parse_wait_hint"]

import logging
import math
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(retry_after_header: str | None) -> float | None:
    """Parse a wait hint header value.

    The value can be specified in two formats:
    1. A number of seconds to wait (e.g., "120" or "0.5")
    2. An HTTP-date in RFC 5322 format (e.g., "Wed, 21 Oct 2015 07:28:00 GMT")

    Args:
        retry_after_header: The header value as a string, or None if the
            header is not present in the response.

    Returns:
        The number of seconds to wait before retrying, or None if:
        - The header is not present (retry_after_header is None)
        - The header value cannot be parsed as either a number or HTTP-date
        - The number is not finite (e.g. "nan" or "inf")
        For HTTP-date format, negative values (dates in the past) are clamped to 0.0.

    Example:
        ```pycon
        >>> from retryx.utils import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after("0.5")
        0.5
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("invalid") is None
        True

        ```
    """
    if retry_after_header is None:
        return None

    with suppress(ValueError):
        seconds = float(retry_after_header)
        if not math.isfinite(seconds):
            logger.debug(f"Ignoring non-finite wait hint header: {retry_after_header!r}")
            return None
        return seconds

    try:
        retry_date: datetime = parsedate_to_datetime(retry_after_header)
        now = datetime.now(timezone.utc)
        delta_seconds = (retry_date - now).total_seconds()
        return max(0.0, delta_seconds)
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Failed to parse wait hint header: {retry_after_header!r}")
        return None


def parse_wait_hint(
    response: httpx.Response | None,
    header_names: Iterable[str],
    header_parser: Callable[[str], float] | None = None,
) -> float | None:
    """Extract the largest wait hint from the response headers.

    Args:
        response: The failing response, or None for exception failures.
        header_names: The names of the headers to inspect. Missing headers
            are skipped.
        header_parser: Optional function replacing ``parse_retry_after``.
            It receives the raw header value and returns seconds.

    Returns:
        The largest hint in seconds, or None if no header yields a hint.

    Example:
        ```pycon
        >>> import httpx
        >>> from retryx.utils import parse_wait_hint
        >>> response = httpx.Response(429, headers={"Retry-After": "2", "RateLimit-Reset": "5"})
        >>> parse_wait_hint(response, ["Retry-After", "RateLimit-Reset"])
        5.0
        >>> parse_wait_hint(None, ["Retry-After"]) is None
        True

        ```
    """
    if response is None:
        return None

    parser = header_parser if header_parser is not None else parse_retry_after
    hints = []
    for name in header_names:
        value = response.headers.get(name)
        if value is None:
            continue
        hint = parser(value)
        if hint is not None and math.isfinite(hint):
            hints.append(float(hint))
    return max(hints) if hints else None

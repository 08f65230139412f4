r"""Utility functions for the retry engine.

This package provides helpers for parsing server wait hints, rewinding
request bodies before a retry, and structured logging of retry events.
"""

from __future__ import annotations

__all__ = [
    "arewind_request",
    "log_structured",
    "parse_retry_after",
    "parse_wait_hint",
    "rewind_request",
]

from retryx.utils.retry_after import parse_retry_after, parse_wait_hint
from retryx.utils.rewind import arewind_request, rewind_request
from retryx.utils.structured_logging import log_structured

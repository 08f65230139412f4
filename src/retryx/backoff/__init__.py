r"""Backoff strategies for retry delays.

This package provides the backoff strategies used to calculate the wait
before each retry.
"""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ExponentialBackoff"]

from retryx.backoff.base import BaseBackoffStrategy
from retryx.backoff.exponential import ExponentialBackoff

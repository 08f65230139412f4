r"""Retry package implementing class-based composition pattern.

Public API:
    - RetryStrategy: Strategy for calculating retry delays
    - RetryDecider: Logic for deciding whether to retry
    - CallbackManager: Manager for callback invocations
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "CallbackManager",
    "RetryDecider",
    "RetryExecutor",
    "RetryStrategy",
]

from retryx.retry.decider import RetryDecider
from retryx.retry.executor import RetryExecutor
from retryx.retry.executor_async import AsyncRetryExecutor
from retryx.retry.manager import CallbackManager
from retryx.retry.strategy import RetryStrategy

r"""Unit tests for RetryOptions dataclass.

This file contains tests for the RetryOptions dataclass in
core/config.py.
"""

from __future__ import annotations

import dataclasses

import httpx
import pytest
from coola.equality import objects_are_equal

from retryx.core import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_EXCEPTIONS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RESET_HEADER,
    DEFAULT_RETRY_HEADER,
    IDEMPOTENT_METHODS,
    RetryOptions,
)

##################################
#     Tests for RetryOptions     #
##################################


def test_retry_options_defaults() -> None:
    """Test that RetryOptions uses correct default values."""
    options = RetryOptions()

    assert options.max == DEFAULT_MAX_RETRIES == 2
    assert options.interval == 0.0
    assert options.max_interval is None
    assert options.backoff_factor == DEFAULT_BACKOFF_FACTOR == 2.0
    assert options.interval_randomness == 0.0
    assert options.exceptions == DEFAULT_EXCEPTIONS
    assert options.retry_statuses == frozenset()
    assert options.methods == IDEMPOTENT_METHODS
    assert options.retry_if is None
    assert options.retry_block is None
    assert options.exhausted_retries_block is None
    assert options.rate_limit_retry_header == DEFAULT_RETRY_HEADER == "Retry-After"
    assert options.rate_limit_reset_header == DEFAULT_RESET_HEADER == "RateLimit-Reset"
    assert options.header_parser_block is None


def test_retry_options_default_exceptions_include_httpx_timeouts() -> None:
    assert TimeoutError in DEFAULT_EXCEPTIONS
    assert httpx.TimeoutException in DEFAULT_EXCEPTIONS


def test_idempotent_methods_exclude_post_and_patch() -> None:
    assert IDEMPOTENT_METHODS == frozenset({"DELETE", "GET", "HEAD", "OPTIONS", "PUT"})


def test_retry_options_is_frozen() -> None:
    options = RetryOptions()
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.max = 5  # type: ignore[misc]


@pytest.mark.parametrize(("value", "expected"), [(429, {429}), ([429, 503], {429, 503})])
def test_retry_options_normalizes_retry_statuses(value: object, expected: set[int]) -> None:
    assert RetryOptions(retry_statuses=value).retry_statuses == frozenset(expected)


def test_retry_options_normalizes_methods() -> None:
    assert RetryOptions(methods=["post", "Get"]).methods == frozenset({"POST", "GET"})
    assert RetryOptions(methods="post").methods == frozenset({"POST"})
    assert RetryOptions(methods=[]).methods == frozenset()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (ValueError, (ValueError,)),
        ("StandardError", ("StandardError",)),
        ([ValueError, "KeyError"], (ValueError, "KeyError")),
        (None, ()),
    ],
)
def test_retry_options_normalizes_exceptions(value: object, expected: tuple) -> None:
    assert RetryOptions(exceptions=value).exceptions == expected


def test_retry_options_negative_max_allowed() -> None:
    options = RetryOptions(max=-9)
    assert options.max == -9
    assert options.max_retries == 0


@pytest.mark.parametrize(("max_value", "max_retries"), [(0, 0), (1, 1), (5, 5)])
def test_retry_options_max_retries(max_value: int, max_retries: int) -> None:
    assert RetryOptions(max=max_value).max_retries == max_retries


def test_retry_options_invalid_interval() -> None:
    with pytest.raises(ValueError, match=r"interval must be >= 0"):
        RetryOptions(interval=-1)


def test_retry_options_invalid_max_interval() -> None:
    with pytest.raises(ValueError, match=r"max_interval must be > 0"):
        RetryOptions(max_interval=0)


def test_retry_options_invalid_interval_randomness() -> None:
    with pytest.raises(ValueError, match=r"interval_randomness must be in \[0, 1\]"):
        RetryOptions(interval_randomness=1.5)


#################################
#     Tests for from_value      #
#################################


def test_from_value_none() -> None:
    assert RetryOptions.from_value(None) == RetryOptions()


@pytest.mark.parametrize("value", [1, 3, -9, 0])
def test_from_value_legacy_int(value: int) -> None:
    options = RetryOptions.from_value(value)
    assert options.max == value
    assert options.interval == 0.0
    assert options.methods == IDEMPOTENT_METHODS


def test_from_value_mapping() -> None:
    options = RetryOptions.from_value({"max": 3, "interval": 0.1, "retry_statuses": 429})
    assert options == RetryOptions(max=3, interval=0.1, retry_statuses={429})


def test_from_value_options_returned_unchanged() -> None:
    options = RetryOptions(max=4)
    assert RetryOptions.from_value(options) is options


@pytest.mark.parametrize("value", [True, "3", 1.5])
def test_from_value_unsupported(value: object) -> None:
    with pytest.raises(TypeError, match=r"Unsupported retry options value"):
        RetryOptions.from_value(value)


#########################################
#     Tests for merge and to_dict       #
#########################################


def test_merge_overrides_values() -> None:
    options = RetryOptions(max=3)
    merged = options.merge(max=5, interval=0.5)
    assert merged.max == 5
    assert merged.interval == 0.5
    assert options.max == 3


def test_merge_ignores_none_values() -> None:
    options = RetryOptions(max=3, max_interval=2.0)
    assert options.merge(max=None, max_interval=None) == options


def test_merge_normalizes_values() -> None:
    assert RetryOptions().merge(retry_statuses=503).retry_statuses == frozenset({503})


def test_to_dict() -> None:
    assert objects_are_equal(
        RetryOptions(max=3, retry_statuses={429}).to_dict(),
        {
            "max": 3,
            "interval": 0.0,
            "max_interval": None,
            "backoff_factor": 2.0,
            "interval_randomness": 0.0,
            "exceptions": DEFAULT_EXCEPTIONS,
            "retry_statuses": frozenset({429}),
            "methods": IDEMPOTENT_METHODS,
            "retry_if": None,
            "retry_block": None,
            "exhausted_retries_block": None,
            "rate_limit_retry_header": "Retry-After",
            "rate_limit_reset_header": "RateLimit-Reset",
            "header_parser_block": None,
        },
    )

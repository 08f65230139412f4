from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import httpx
import pytest

if TYPE_CHECKING:
    from collections.abc import Generator

TEST_URL = "https://api.example.com/unstable"


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def get_request() -> httpx.Request:
    """Create a GET request for testing."""
    return httpx.Request("GET", TEST_URL)


@pytest.fixture
def post_request() -> httpx.Request:
    """Create a POST request with a JSON body for testing."""
    return httpx.Request("POST", TEST_URL, json={"foo": "bar"})


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()

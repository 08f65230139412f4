r"""Unit tests for AsyncRetryClient context manager.

This file contains tests for the asynchronous context manager client.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from retryx import AsyncRetryClient, RetryOptions
from retryx.core.config import DEFAULT_TIMEOUT
from retryx.transport import AsyncRetryTransport

TEST_URL = "https://api.example.com/data"


def ok_transport() -> tuple[httpx.MockTransport, Mock]:
    handler = Mock(side_effect=lambda request: httpx.Response(200, json={"method": request.method}))
    return httpx.MockTransport(handler), handler


######################################
#     Tests for AsyncRetryClient     #
######################################


@pytest.mark.asyncio
async def test_async_client_default_options() -> None:
    async with AsyncRetryClient(transport=ok_transport()[0]) as client:
        assert client.retry_options == RetryOptions()


def test_async_client_default_timeout() -> None:
    with patch("httpx.AsyncClient") as mock_client_class:
        AsyncRetryClient()
    kwargs = mock_client_class.call_args.kwargs
    assert kwargs["timeout"] == DEFAULT_TIMEOUT
    assert isinstance(kwargs["transport"], AsyncRetryTransport)


@pytest.mark.asyncio
async def test_async_client_closes_on_exception() -> None:
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = Mock(__aenter__=AsyncMock(), __aexit__=AsyncMock())
        mock_client_class.return_value = mock_client
        msg = "test error"

        with pytest.raises(ValueError, match=r"test error"):
            async with AsyncRetryClient():
                raise ValueError(msg)

        mock_client.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_async_client_aclose() -> None:
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client_class.return_value = Mock(aclose=AsyncMock())
        client = AsyncRetryClient()
        await client.aclose()
    mock_client_class.return_value.aclose.assert_awaited_once_with()


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["get", "post", "put", "patch", "delete", "options"])
async def test_async_client_http_methods(method: str) -> None:
    transport, handler = ok_transport()
    async with AsyncRetryClient(transport=transport) as client:
        response = await getattr(client, method)(TEST_URL)

    assert response.status_code == 200
    assert response.json() == {"method": method.upper()}
    handler.assert_called_once()


@pytest.mark.asyncio
async def test_async_client_head() -> None:
    transport, handler = ok_transport()
    async with AsyncRetryClient(transport=transport) as client:
        assert (await client.head(TEST_URL)).status_code == 200
    assert handler.call_args.args[0].method == "HEAD"


@pytest.mark.asyncio
async def test_async_client_retries(mock_asleep: Mock) -> None:
    handler = Mock(side_effect=[httpx.ReadTimeout("timed out"), httpx.Response(200)])

    async with AsyncRetryClient(transport=httpx.MockTransport(handler)) as client:
        response = await client.get(TEST_URL)

    assert response.status_code == 200
    assert handler.call_count == 2
    mock_asleep.assert_awaited_once()


@pytest.mark.asyncio
async def test_async_client_retry_statuses(mock_asleep: Mock) -> None:
    handler = Mock(side_effect=lambda request: httpx.Response(503))
    options = RetryOptions(max=3, retry_statuses={503})

    async with AsyncRetryClient(options=options, transport=httpx.MockTransport(handler)) as client:
        response = await client.request("GET", TEST_URL)

    assert response.status_code == 503
    assert handler.call_count == 4
    assert mock_asleep.await_count == 3


@pytest.mark.asyncio
async def test_async_client_post_retry_if(mock_asleep: Mock) -> None:
    handler = Mock(side_effect=[TimeoutError(), httpx.Response(201)])
    options = RetryOptions(retry_if=lambda request, exc: isinstance(exc, TimeoutError))

    async with AsyncRetryClient(options=options, transport=httpx.MockTransport(handler)) as client:
        response = await client.post(TEST_URL, json={"foo": "bar"})

    assert response.status_code == 201
    assert handler.call_count == 2

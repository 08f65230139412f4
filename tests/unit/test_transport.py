r"""Unit tests for the retry transports."""

from __future__ import annotations

import io
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from retryx import AsyncRetryTransport, RetryOptions, RetryTransport

TEST_URL = "https://api.example.com/unstable"


class RewindableFile(io.BytesIO):
    """In-memory file counting calls to ``rewind``."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.rewound = 0

    def rewind(self) -> None:
        self.rewound += 1
        self.seek(0)


class RecordingTransport(httpx.BaseTransport):
    """Transport consuming the request body and replaying outcomes.

    Each outcome is either a response or an exception to raise.
    """

    def __init__(self, *outcomes: httpx.Response | Exception) -> None:
        self.outcomes = list(outcomes)
        self.bodies: list[bytes] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.bodies.append(b"".join(request.stream))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


#####################################
#     Tests for RetryTransport      #
#####################################


def test_retry_transport_default_transport() -> None:
    transport = RetryTransport()
    assert isinstance(transport._transport, httpx.HTTPTransport)
    assert transport.options == RetryOptions()


def test_retry_transport_options_forms() -> None:
    assert RetryTransport(httpx.MockTransport(Mock()), options=4).options.max == 4
    assert RetryTransport(httpx.MockTransport(Mock()), options={"max": 1}).options.max == 1


def test_retry_transport_retries_exception(mock_sleep: Mock) -> None:
    inner = RecordingTransport(httpx.ReadTimeout("timed out"), httpx.Response(200))

    with httpx.Client(transport=RetryTransport(inner)) as client:
        response = client.get(TEST_URL)

    assert response.status_code == 200
    assert len(inner.bodies) == 2
    mock_sleep.assert_called_once()


def test_retry_transport_raises_original_exception(mock_sleep: Mock) -> None:
    handler = Mock(side_effect=TimeoutError("timed out"))

    with (
        httpx.Client(transport=RetryTransport(httpx.MockTransport(handler))) as client,
        pytest.raises(TimeoutError, match=r"timed out"),
    ):
        client.get(TEST_URL)

    assert handler.call_count == 3


def test_retry_transport_retries_status(mock_sleep: Mock) -> None:
    handler = Mock(side_effect=[httpx.Response(429), httpx.Response(200, text="ok")])
    transport = RetryTransport(
        httpx.MockTransport(handler), options=RetryOptions(max=1, retry_statuses={429})
    )

    with httpx.Client(transport=transport) as client:
        response = client.get(TEST_URL)

    assert response.status_code == 200
    assert response.text == "ok"
    assert handler.call_count == 2


def test_retry_transport_returns_last_status(mock_sleep: Mock) -> None:
    handler = Mock(side_effect=lambda request: httpx.Response(503))
    transport = RetryTransport(httpx.MockTransport(handler), options={"retry_statuses": [503]})

    with httpx.Client(transport=transport) as client:
        response = client.get(TEST_URL)

    assert response.status_code == 503
    assert handler.call_count == 3


def test_retry_transport_rewinds_multipart_body(mock_sleep: Mock) -> None:
    upload = RewindableFile(b"Test data")
    inner = RecordingTransport(TimeoutError(), TimeoutError(), httpx.Response(201))
    transport = RetryTransport(inner, options=RetryOptions(methods=["POST"]))

    with httpx.Client(transport=transport) as client:
        response = client.post(TEST_URL, files={"file": upload})

    assert response.status_code == 201
    assert upload.rewound == 2
    assert len(inner.bodies) == 3
    assert inner.bodies[0] == inner.bodies[1] == inner.bodies[2]
    assert b"Test data" in inner.bodies[0]


def test_retry_transport_rewinds_file_body(mock_sleep: Mock) -> None:
    upload = io.BytesIO(b"Test data")
    inner = RecordingTransport(TimeoutError(), httpx.Response(200))
    transport = RetryTransport(inner, options=RetryOptions(retry_if=lambda request, exc: True))

    with httpx.Client(transport=transport) as client:
        client.post(TEST_URL, content=upload)

    assert inner.bodies == [b"Test data", b"Test data"]


def test_retry_transport_close() -> None:
    inner = Mock(spec=httpx.BaseTransport)
    RetryTransport(inner).close()
    inner.close.assert_called_once_with()


##########################################
#     Tests for AsyncRetryTransport      #
##########################################


def test_async_retry_transport_default_transport() -> None:
    transport = AsyncRetryTransport()
    assert isinstance(transport._transport, httpx.AsyncHTTPTransport)


@pytest.mark.asyncio
async def test_async_retry_transport_retries_exception(mock_asleep: Mock) -> None:
    handler = Mock(side_effect=[httpx.ConnectTimeout("timed out"), httpx.Response(200)])

    async with httpx.AsyncClient(
        transport=AsyncRetryTransport(httpx.MockTransport(handler))
    ) as client:
        response = await client.get(TEST_URL)

    assert response.status_code == 200
    assert handler.call_count == 2
    mock_asleep.assert_awaited_once()


@pytest.mark.asyncio
async def test_async_retry_transport_retries_status(mock_asleep: Mock) -> None:
    handler = Mock(side_effect=[httpx.Response(503), httpx.Response(200)])
    transport = AsyncRetryTransport(
        httpx.MockTransport(handler), options=RetryOptions(max=1, retry_statuses={503})
    )

    async with httpx.AsyncClient(transport=transport) as client:
        response = await client.get(TEST_URL)

    assert response.status_code == 200
    assert handler.call_count == 2


@pytest.mark.asyncio
async def test_async_retry_transport_non_retryable_exception(mock_asleep: Mock) -> None:
    handler = Mock(side_effect=httpx.ConnectError("refused"))

    async with httpx.AsyncClient(
        transport=AsyncRetryTransport(httpx.MockTransport(handler))
    ) as client:
        with pytest.raises(httpx.ConnectError, match=r"refused"):
            await client.get(TEST_URL)

    handler.assert_called_once()


@pytest.mark.asyncio
async def test_async_retry_transport_aclose() -> None:
    inner = Mock(spec=httpx.AsyncBaseTransport, aclose=AsyncMock())
    await AsyncRetryTransport(inner).aclose()
    inner.aclose.assert_awaited_once_with()

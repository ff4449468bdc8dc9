r"""Tests of AsyncRetryingRequestExecutor over a real httpx client with a
mock transport."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from reqretry import (
    AsyncRetryingRequestExecutor,
    ExhaustedRetriesError,
    RequestDescriptor,
    TransportError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

TEST_URL = "https://api.example.com/items"


@pytest.mark.asyncio
async def test_async_execute_recovers_from_server_error(mock_asleep: Mock) -> None:
    statuses = iter([503, 200])
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        status = next(statuses)
        if status != 200:
            return httpx.Response(status, text="Service Unavailable")
        return httpx.Response(200, json=[{"id": 1}, {"id": 2}])

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await AsyncRetryingRequestExecutor(delay_millis=20, client=client).execute(
            RequestDescriptor(url=TEST_URL, method="GET")
        )

    assert result == [{"id": 1}, {"id": 2}]
    assert len(requests) == 2
    mock_asleep.assert_called_once_with(0.02)


@pytest.mark.asyncio
async def test_async_execute_always_failing(mock_asleep: Mock) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        msg = "timed out"
        raise httpx.ReadTimeout(msg, request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ExhaustedRetriesError, match=r"failed after 2 attempts"):
            await AsyncRetryingRequestExecutor(retry_limit=2, client=client).execute(
                RequestDescriptor(url=TEST_URL, method="DELETE")
            )

    assert mock_asleep.call_count == 1


@pytest.mark.asyncio
async def test_async_execute_raw_body(mock_asleep: Mock) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=request.content, headers={"Content-Type": "text/csv"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await AsyncRetryingRequestExecutor(client=client).execute(
            RequestDescriptor(url=TEST_URL, method="POST", body=b"a,b\n1,2\n")
        )

    assert result == b"a,b\n1,2\n"
    mock_asleep.assert_not_called()


class AsyncTrickleStream(httpx.AsyncByteStream):
    r"""Send a body one byte at a time, ``delay`` seconds apart."""

    def __init__(self, size: int, delay: float) -> None:
        self.size = size
        self.delay = delay

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for _ in range(self.size):
            await asyncio.sleep(self.delay)
            yield b"x"


@pytest.mark.asyncio
async def test_async_execute_slow_body_exceeds_total_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, stream=AsyncTrickleStream(size=100, delay=0.02))

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        executor = AsyncRetryingRequestExecutor(retry_limit=1, client=client, timeout=0.2)
        start = time.monotonic()
        with pytest.raises(ExhaustedRetriesError) as exc_info:
            await executor.execute(RequestDescriptor(url=TEST_URL, method="GET"))

    assert time.monotonic() - start < 1.5
    assert isinstance(exc_info.value.last_error, TransportError)
    assert isinstance(exc_info.value.last_error.cause, httpx.ReadTimeout)

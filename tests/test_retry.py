"""Tests for phonics_story.utils.retry."""

import asyncio
import json

import httpx
import pytest
from unittest.mock import patch

from phonics_story.errors import CancellationError, TransportError
from phonics_story.utils.cancellation import CancellationToken
from phonics_story.utils.retry import backoff_delay, default_should_retry, fetch_with_retry

URL = "http://llm.test/llm"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def no_backoff():
    """Skip real backoff sleeps."""
    with patch("phonics_story.utils.retry.backoff_delay", return_value=0):
        yield


class Recorder:
    """MockTransport handler that replays a scripted list of outcomes."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes[min(len(self.requests), len(self.outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        status, body = outcome
        return httpx.Response(status, text=body)


def make_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# backoff_delay / default_should_retry
# ---------------------------------------------------------------------------


class TestBackoffDelay:
    def test_first_attempt_uses_base(self):
        for _ in range(20):
            assert 0.2 <= backoff_delay(1) < 0.3

    def test_doubles_per_attempt(self):
        for _ in range(20):
            assert 0.4 <= backoff_delay(2) < 0.5
            assert 0.8 <= backoff_delay(3) < 0.9

    def test_capped(self):
        for _ in range(20):
            assert 2.0 <= backoff_delay(10) < 2.1


class TestDefaultShouldRetry:
    def test_error_is_retryable(self):
        assert default_should_retry(None, httpx.ConnectError("down")) is True

    def test_missing_response_is_retryable(self):
        assert default_should_retry(None, None) is True

    @pytest.mark.parametrize("status", [500, 502, 503, 429])
    def test_server_errors_and_rate_limits(self, status):
        assert default_should_retry(httpx.Response(status), None) is True

    @pytest.mark.parametrize("status", [200, 201, 400, 401, 404])
    def test_other_statuses_are_final(self, status):
        assert default_should_retry(httpx.Response(status), None) is False


# ---------------------------------------------------------------------------
# fetch_with_retry
# ---------------------------------------------------------------------------


class TestFetchWithRetry:
    @pytest.mark.asyncio
    async def test_success_first_attempt(self):
        handler = Recorder((200, '{"ok": true}'))
        async with make_client(handler) as client:
            response = await fetch_with_retry(
                client, URL, headers={"Authorization": "Bearer t"}, json={"a": 1}
            )

        assert response.status_code == 200
        assert len(handler.requests) == 1
        request = handler.requests[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer t"
        assert json.loads(request.content) == {"a": 1}

    @pytest.mark.asyncio
    async def test_always_500_exhausts_attempts(self):
        handler = Recorder((500, "boom"))
        async with make_client(handler) as client:
            with pytest.raises(TransportError) as exc_info:
                await fetch_with_retry(client, URL, max_attempts=3)

        assert len(handler.requests) == 3
        assert exc_info.value.status_code == 500
        assert "after 3 attempts" in str(exc_info.value)
        assert "boom" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_custom_attempt_count(self):
        handler = Recorder((503, ""))
        async with make_client(handler) as client:
            with pytest.raises(TransportError):
                await fetch_with_retry(client, URL, max_attempts=5)
        assert len(handler.requests) == 5

    @pytest.mark.asyncio
    async def test_recovers_after_rate_limit(self):
        handler = Recorder((429, "slow down"), (200, "{}"))
        async with make_client(handler) as client:
            response = await fetch_with_retry(client, URL)

        assert response.status_code == 200
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_client_error_returned_without_retry(self):
        handler = Recorder((400, "bad request"))
        async with make_client(handler) as client:
            response = await fetch_with_retry(client, URL)

        assert response.status_code == 400
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_network_error_retried_then_wrapped(self):
        handler = Recorder(httpx.ConnectError("connection refused"))
        async with make_client(handler) as client:
            with pytest.raises(TransportError) as exc_info:
                await fetch_with_retry(client, URL, max_attempts=2)

        assert len(handler.requests) == 2
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_network_error_then_success(self):
        handler = Recorder(httpx.ReadTimeout("slow"), (200, "{}"))
        async with make_client(handler) as client:
            response = await fetch_with_retry(client, URL)
        assert response.status_code == 200
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_custom_should_retry(self):
        handler = Recorder((404, ""), (200, "{}"))
        async with make_client(handler) as client:
            response = await fetch_with_retry(
                client, URL, should_retry=lambda resp, err: resp is None or resp.status_code == 404
            )
        assert response.status_code == 200
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_rejects_zero_attempts(self):
        async with make_client(Recorder((200, "{}"))) as client:
            with pytest.raises(ValueError):
                await fetch_with_retry(client, URL, max_attempts=0)


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class TestFetchWithRetryCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_before_first_attempt(self):
        handler = Recorder((500, ""))
        token = CancellationToken()
        token.cancel()

        async with make_client(handler) as client:
            with pytest.raises(CancellationError):
                await fetch_with_retry(client, URL, token=token, max_attempts=5)

        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_cancelled_during_request(self):
        calls = []

        async def slow_handler(request):
            calls.append(request)
            await asyncio.sleep(10)
            return httpx.Response(200, text="{}")

        token = CancellationToken()
        token.cancel_after(0.01)

        async with make_client(slow_handler) as client:
            with pytest.raises(CancellationError):
                await fetch_with_retry(client, URL, token=token, max_attempts=5)

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_cancelled_between_attempts(self):
        token = CancellationToken()
        calls = []

        def handler(request):
            calls.append(request)
            token.cancel()
            return httpx.Response(500)

        async with make_client(handler) as client:
            with pytest.raises(CancellationError):
                await fetch_with_retry(client, URL, token=token, max_attempts=5)

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_cancellation_is_not_a_transport_error(self):
        token = CancellationToken()
        token.cancel("stop")
        async with make_client(Recorder((200, "{}"))) as client:
            with pytest.raises(CancellationError) as exc_info:
                await fetch_with_retry(client, URL, token=token)
        assert not isinstance(exc_info.value, TransportError)
        assert str(exc_info.value) == "stop"

    @pytest.mark.asyncio
    async def test_uncancelled_token_does_not_interfere(self):
        handler = Recorder((502, ""), (200, "{}"))
        async with make_client(handler) as client:
            response = await fetch_with_retry(client, URL, token=CancellationToken())
        assert response.status_code == 200
        assert len(handler.requests) == 2

"""Tests for the rate-limit backoff invoker."""

import asyncio

import pytest

from resume_analysis.errors import AuthenticationFailedError, RateLimitedError, UpstreamError
from resume_analysis.retry import RetryConfig, retry_with_backoff


class FakeSleep:
    """Records requested waits instead of sleeping."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


class UpstreamRateLimit(Exception):
    """Mimics an SDK error carrying an HTTP status code."""

    def __init__(self):
        super().__init__("Resource has been exhausted")
        self.code = 429
        self.status = "RESOURCE_EXHAUSTED"


class TestRetryLogic:
    """Test exponential backoff retry logic."""

    @pytest.mark.asyncio
    async def test_retry_success_on_first_attempt(self):
        """Test successful execution on first attempt."""
        call_count = 0
        sleep = FakeSleep()

        async def success_func():
            nonlocal call_count
            call_count += 1
            return "success"

        result = await retry_with_backoff(success_func, RetryConfig(), sleep=sleep)

        assert result == "success"
        assert call_count == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_rate_limited_twice_then_succeeds(self):
        """Two rate limits wait 1s then 2s before the third call succeeds."""
        call_count = 0
        sleep = FakeSleep()

        async def flaky_func():
            nonlocal call_count
            call_count += 1
            if call_count <= 2:
                raise RateLimitedError("API rate limit exceeded. Please try again later.")
            return "success"

        config = RetryConfig(max_attempts=3, base_delay=1.0)
        result = await retry_with_backoff(flaky_func, config, sleep=sleep)

        assert result == "success"
        assert call_count == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_authentication_failure_not_retried(self):
        """Terminal failures are raised on the first attempt, unchanged."""
        call_count = 0
        sleep = FakeSleep()
        error = AuthenticationFailedError("Gemini API authentication failed. Check your API key.")

        async def auth_failure():
            nonlocal call_count
            call_count += 1
            raise error

        with pytest.raises(AuthenticationFailedError) as exc_info:
            await retry_with_backoff(auth_failure, RetryConfig(max_attempts=3), sleep=sleep)

        assert exc_info.value is error
        assert call_count == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_unknown_failure_not_retried(self):
        call_count = 0

        async def timeout_failure():
            nonlocal call_count
            call_count += 1
            raise UpstreamError("Gemini API error: request timed out after 30s")

        with pytest.raises(UpstreamError):
            await retry_with_backoff(timeout_failure, RetryConfig(), sleep=FakeSleep())

        assert call_count == 1

    @pytest.mark.asyncio
    async def test_retries_exhausted_raises_rate_limit(self):
        """max_attempts counts retries, so 3 retries means 4 calls."""
        call_count = 0
        sleep = FakeSleep()

        async def always_limited():
            nonlocal call_count
            call_count += 1
            raise RateLimitedError("API rate limit exceeded. Please try again later.")

        with pytest.raises(RateLimitedError):
            await retry_with_backoff(always_limited, RetryConfig(max_attempts=3, base_delay=1.0), sleep=sleep)

        assert call_count == 4
        assert sleep.delays == [1.0, 2.0, 4.0]

    @pytest.mark.asyncio
    async def test_zero_retries_calls_once(self):
        call_count = 0

        async def always_limited():
            nonlocal call_count
            call_count += 1
            raise RateLimitedError("limited")

        with pytest.raises(RateLimitedError):
            await retry_with_backoff(always_limited, RetryConfig(max_attempts=0), sleep=FakeSleep())

        assert call_count == 1

    @pytest.mark.asyncio
    async def test_raw_sdk_rate_limit_is_retried(self):
        """Unclassified exceptions with a 429 code count as rate limits."""
        attempts = []

        def sync_func():
            attempts.append(1)
            if len(attempts) == 1:
                raise UpstreamRateLimit()
            return 42

        result = await retry_with_backoff(sync_func, RetryConfig(), sleep=FakeSleep())

        assert result == 42
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_delay_capped_by_max_delay(self):
        sleep = FakeSleep()

        async def always_limited():
            raise RateLimitedError("limited")

        config = RetryConfig(max_attempts=4, base_delay=1.0, max_delay=3.0)
        with pytest.raises(RateLimitedError):
            await retry_with_backoff(always_limited, config, sleep=sleep)

        assert sleep.delays == [1.0, 2.0, 3.0, 3.0]

    @pytest.mark.asyncio
    async def test_on_retry_receives_attempt_and_delay(self):
        events = []
        calls = 0

        async def flaky():
            nonlocal calls
            calls += 1
            if calls < 3:
                raise RateLimitedError("limited")
            return "ok"

        await retry_with_backoff(
            flaky,
            RetryConfig(base_delay=0.5),
            on_retry=lambda attempt, delay, error: events.append((attempt, delay, type(error))),
            sleep=FakeSleep(),
        )

        assert events == [(1, 0.5, RateLimitedError), (2, 1.0, RateLimitedError)]

    @pytest.mark.asyncio
    async def test_arguments_forwarded(self):
        async def add(a, b, scale=1):
            return (a + b) * scale

        result = await retry_with_backoff(add, RetryConfig(), 2, 3, scale=10)

        assert result == 50

    @pytest.mark.asyncio
    async def test_cancellation_not_retried(self):
        calls = 0

        async def cancelled():
            nonlocal calls
            calls += 1
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await retry_with_backoff(cancelled, RetryConfig(), sleep=FakeSleep())

        assert calls == 1

    @pytest.mark.asyncio
    async def test_retry_logs_warning(self, caplog):
        calls = 0

        async def flaky():
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RateLimitedError("limited")
            return "ok"

        with caplog.at_level("WARNING", logger="resume_analysis.retry"):
            await retry_with_backoff(flaky, RetryConfig(), sleep=FakeSleep())

        assert any("Retrying in 1.00s" in record.message for record in caplog.records)

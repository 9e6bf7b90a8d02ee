# tests/test_resilience.py
"""Tests for retry with backoff."""

import pytest

from quarry.resilience import (
    RetryPolicy,
    compute_delay_ms,
    extract_retry_delay_ms,
    is_quota_exceeded_error,
    is_rate_limit_error,
    with_retry,
    with_retry_sync,
)

RETRY_INFO = "type.googleapis.com/google.rpc.RetryInfo"


class StatusError(Exception):
    def __init__(self, message="error", status=None, status_code=None, error_details=None):
        super().__init__(message)
        self.status = status
        self.status_code = status_code
        self.error_details = error_details


class Flaky:
    """Fails a fixed number of times, then returns a value."""

    def __init__(self, failures: list[BaseException], value="ok"):
        self.failures = list(failures)
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return self.value

    async def acall(self):
        return self()


class TestRateLimitClassification:
    def test_status_429(self):
        assert is_rate_limit_error(StatusError(status=429))

    def test_status_code_429(self):
        assert is_rate_limit_error(StatusError(status_code=429))

    def test_quota_message(self):
        assert is_rate_limit_error(RuntimeError("Resource has been exhausted (check quota)."))

    def test_rate_limit_message(self):
        assert is_rate_limit_error(RuntimeError("you hit the rate limit"))

    def test_message_match_is_case_sensitive(self):
        assert not is_rate_limit_error(RuntimeError("Rate Limit exceeded"))

    def test_other_errors(self):
        assert not is_rate_limit_error(StatusError("server error", status=500))
        assert not is_rate_limit_error(ValueError("bad input"))


class TestRetryDelayExtraction:
    def test_reads_retry_info(self):
        error = StatusError(
            status=429, error_details=[{"@type": RETRY_INFO, "retryDelay": "2.5s"}]
        )
        assert extract_retry_delay_ms(error) == 2500

    def test_ignores_other_detail_types(self):
        error = StatusError(error_details=[{"@type": "type.googleapis.com/google.rpc.Help"}])
        assert extract_retry_delay_ms(error) is None

    def test_nested_error_details(self):
        error = StatusError(status=429)
        error.details = {"error": {"details": [{"@type": RETRY_INFO, "retryDelay": "7s"}]}}
        assert extract_retry_delay_ms(error) == 7000

    def test_unparseable_delay(self):
        error = StatusError(error_details=[{"@type": RETRY_INFO, "retryDelay": "soon"}])
        assert extract_retry_delay_ms(error) is None

    def test_retry_info_in_message_json(self):
        body = (
            '{"error": {"code": 429, "status": "RESOURCE_EXHAUSTED", "details": ['
            '{"@type": "type.googleapis.com/google.rpc.RetryInfo", "retryDelay": "33s"}]}}'
        )
        error = StatusError(f"litellm.RateLimitError: VertexAIException - {body}", status_code=429)

        assert extract_retry_delay_ms(error) == 33_000
        assert compute_delay_ms(error, 1, 1000) == 33_000

    def test_message_with_invalid_json(self):
        error = RuntimeError("quota exceeded {not json}")
        assert extract_retry_delay_ms(error) is None

    def test_no_details(self):
        assert extract_retry_delay_ms(RuntimeError("quota")) is None

    def test_quota_exceeded(self):
        error = StatusError(
            status=429,
            error_details=[{"@type": "type.googleapis.com/google.rpc.QuotaFailure"}],
        )
        assert is_quota_exceeded_error(error)
        assert not is_quota_exceeded_error(StatusError(status=429))


class TestComputeDelay:
    def test_linear_for_ordinary_errors(self):
        error = RuntimeError("boom")
        assert [compute_delay_ms(error, n, 1000) for n in (1, 2, 3)] == [1000, 2000, 3000]

    def test_exponential_for_rate_limits(self):
        error = StatusError(status=429)
        assert [compute_delay_ms(error, n, 1000) for n in (1, 2, 3)] == [1000, 2000, 4000]

    def test_server_hint_wins(self):
        error = StatusError(status=429, error_details=[{"@type": RETRY_INFO, "retryDelay": "2.5s"}])
        assert compute_delay_ms(error, 3, 1000) == 2500

    def test_rate_limit_delay_capped(self):
        error = StatusError(status=429)
        assert compute_delay_ms(error, 10, 1000) == 60_000

    def test_hint_capped(self):
        error = StatusError(status=429, error_details=[{"@type": RETRY_INFO, "retryDelay": "300s"}])
        assert compute_delay_ms(error, 1, 1000) == 60_000


class TestWithRetry:
    @pytest.mark.asyncio
    async def test_success_first_try(self, no_retry_sleep):
        op = Flaky([])
        assert await with_retry(op.acall) == "ok"
        assert op.calls == 1
        assert no_retry_sleep == []

    @pytest.mark.asyncio
    async def test_recovers_after_failures(self, no_retry_sleep):
        op = Flaky([RuntimeError("a"), RuntimeError("b")])

        assert await with_retry(op.acall, max_retries=3, base_delay_ms=1000) == "ok"
        assert op.calls == 3
        assert no_retry_sleep == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_exhaustion_reraises_last_error(self):
        last = RuntimeError("third")
        op = Flaky([RuntimeError("first"), RuntimeError("second"), last])

        with pytest.raises(RuntimeError) as exc_info:
            await with_retry(op.acall, max_retries=3)

        assert exc_info.value is last
        assert op.calls == 3

    @pytest.mark.asyncio
    async def test_lambda_returning_coroutine_is_awaited(self, no_retry_sleep):
        calls = 0

        async def flaky():
            nonlocal calls
            calls += 1
            if calls < 3:
                raise RuntimeError(f"attempt {calls}")
            return "done"

        result = await with_retry(lambda: flaky(), max_retries=3, base_delay_ms=1000)

        assert result == "done"
        assert calls == 3
        assert no_retry_sleep == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_lambda_errors_propagate_after_retries(self):
        error = RuntimeError("always")
        calls = 0

        async def failing():
            nonlocal calls
            calls += 1
            raise error

        with pytest.raises(RuntimeError) as exc_info:
            await RetryPolicy(max_retries=2).acall(lambda: failing())

        assert exc_info.value is error
        assert calls == 2

    @pytest.mark.asyncio
    async def test_rate_limit_exhaustion_reraises_same_object(self, no_retry_sleep):
        error = StatusError("quota exceeded", status=429)
        calls = 0

        async def always_limited():
            nonlocal calls
            calls += 1
            raise error

        with pytest.raises(StatusError) as exc_info:
            await with_retry(always_limited, max_retries=4, base_delay_ms=100)

        assert exc_info.value is error
        assert calls == 4
        assert no_retry_sleep == [0.1, 0.2, 0.4]

    @pytest.mark.asyncio
    async def test_rejects_zero_retries(self):
        with pytest.raises(ValueError):
            await with_retry(Flaky([]).acall, max_retries=0)

    @pytest.mark.asyncio
    async def test_rate_limit_backoff_uses_hint(self, no_retry_sleep):
        hinted = StatusError(
            status=429, error_details=[{"@type": RETRY_INFO, "retryDelay": "2.5s"}]
        )
        op = Flaky([StatusError(status=429), hinted])

        await with_retry(op.acall, max_retries=3, base_delay_ms=1000)

        assert no_retry_sleep == [1.0, 2.5]

    @pytest.mark.asyncio
    async def test_single_attempt_does_not_sleep(self, no_retry_sleep):
        op = Flaky([RuntimeError("once")])

        with pytest.raises(RuntimeError):
            await with_retry(op.acall, max_retries=1)
        assert no_retry_sleep == []

    def test_sync_variant(self, no_retry_sleep):
        op = Flaky([StatusError(status=429)])

        assert with_retry_sync(op, max_retries=2, base_delay_ms=500) == "ok"
        assert no_retry_sleep == [0.5]


class TestRetryPolicy:
    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.max_retries == 3
        assert policy.base_delay_ms == 1000
        assert policy.max_delay_ms == 60_000

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_retries=0)

    def test_custom_cap(self, no_retry_sleep):
        policy = RetryPolicy(max_retries=3, base_delay_ms=1000, max_delay_ms=1500)
        op = Flaky([StatusError(status=429), StatusError(status=429)])

        policy.call(op)

        assert no_retry_sleep == [1.0, 1.5]

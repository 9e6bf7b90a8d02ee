# src/quarry/resilience.py
"""Retry with backoff for calls to rate-limited model APIs.

Errors are split into two classes:

- Rate-limit errors (HTTP 429, or a message mentioning "quota" / "rate limit").
  These honor a server-supplied RetryInfo delay when present, otherwise back off
  exponentially: base * 2^(attempt-1), capped at max_delay_ms.
- Everything else backs off linearly: base * attempt.

After max_retries attempts the last error is re-raised unchanged.

Example:
    from quarry.resilience import with_retry

    text = await with_retry(lambda: client.acomplete(messages), max_retries=3)
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, Field
from tenacity import AsyncRetrying, RetryCallState, Retrying, stop_after_attempt
from tenacity.wait import wait_base

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRY_INFO_TYPE = "type.googleapis.com/google.rpc.RetryInfo"
RATE_LIMIT_MARKERS = ("quota", "rate limit")


def _status_of(error: BaseException) -> Any:
    status = getattr(error, "status", None)
    if status is None:
        status = getattr(error, "status_code", None)
    return status


def is_rate_limit_error(error: BaseException) -> bool:
    """Check whether an error signals rate limiting or an exhausted quota.

    Matches an HTTP 429 on `status` or `status_code`, or the literal substrings
    "quota" / "rate limit" in the error message (case-sensitive).
    """
    if _status_of(error) == 429:
        return True
    message = str(error)
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


def _details_list(details: Any) -> list[Any] | None:
    if isinstance(details, Mapping):
        # google-genai style: {"error": {"details": [...]}}
        error_body = details.get("error")
        details = error_body.get("details") if isinstance(error_body, Mapping) else None
    if isinstance(details, Iterable) and not isinstance(details, (str, bytes)):
        return list(details)
    return None


def _message_details(message: str) -> list[Any]:
    """Read error details from a JSON body embedded in an error message.

    litellm wraps provider errors as text, e.g.
    'litellm.RateLimitError: VertexAIException - {"error": {"code": 429, "details": [...]}}'.
    """
    start = message.find("{")
    end = message.rfind("}")
    if start == -1 or end < start:
        return []
    try:
        body = json.loads(message[start : end + 1])
    except json.JSONDecodeError:
        return []
    return _details_list(body) or []


def _error_details(error: BaseException) -> list[Any]:
    """Collect structured error details from SDK attributes or the error message."""
    for attr in ("error_details", "errorDetails", "details"):
        details = _details_list(getattr(error, attr, None))
        if details is not None:
            return details
    return _message_details(str(error))


def extract_retry_delay_ms(error: BaseException) -> float | None:
    """Read a server-specified retry delay from a RetryInfo error detail.

    Returns:
        Delay in milliseconds (e.g. "2.5s" -> 2500.0), or None if absent or unparseable.
    """
    for detail in _error_details(error):
        if not isinstance(detail, Mapping):
            continue
        if detail.get("@type") != RETRY_INFO_TYPE or not detail.get("retryDelay"):
            continue
        try:
            seconds = float(str(detail["retryDelay"]).replace("s", ""))
        except ValueError:
            logger.warning("Failed to parse retry delay %r", detail["retryDelay"])
            return None
        return seconds * 1000
    return None


def is_quota_exceeded_error(error: BaseException) -> bool:
    """Check for a hard quota failure (429 carrying a QuotaFailure detail).

    Unlike a transient rate limit, a quota failure usually will not clear by retrying
    within the same minute, so hosts may want to surface it directly.
    """
    if _status_of(error) != 429:
        return False
    return any("QuotaFailure" in str(detail) for detail in _error_details(error))


def compute_delay_ms(
    error: BaseException,
    attempt: int,
    base_delay_ms: float,
    max_delay_ms: float = 60_000,
) -> float:
    """Backoff delay after a failed attempt (1-based)."""
    if is_rate_limit_error(error):
        hinted = extract_retry_delay_ms(error)
        delay = hinted if hinted else base_delay_ms * 2 ** (attempt - 1)
        return min(delay, max_delay_ms)
    return base_delay_ms * attempt


class wait_for_error(wait_base):  # noqa: N801 - tenacity naming convention
    """Tenacity wait strategy that picks a backoff from the failed attempt's error."""

    def __init__(self, base_delay_ms: float, max_delay_ms: float) -> None:
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    def __call__(self, retry_state: RetryCallState) -> float:
        if retry_state.outcome is None:
            return 0.0
        error = retry_state.outcome.exception()
        if error is None:
            return 0.0
        delay_ms = compute_delay_ms(
            error, retry_state.attempt_number, self.base_delay_ms, self.max_delay_ms
        )
        return delay_ms / 1000


def _log_before_sleep(max_retries: int) -> Callable[[RetryCallState], None]:
    def log(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        delay_ms = (retry_state.next_action.sleep * 1000) if retry_state.next_action else 0
        if error is not None and is_rate_limit_error(error):
            logger.warning(
                "Rate limited. Retrying in %dms (attempt %d/%d)",
                delay_ms,
                retry_state.attempt_number,
                max_retries,
            )
        else:
            logger.warning(
                "Call failed (%s). Retrying in %dms (attempt %d/%d)",
                error,
                delay_ms,
                retry_state.attempt_number,
                max_retries,
            )

    return log


def _sleep(seconds: float) -> None:
    time.sleep(seconds)


async def _asleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


class RetryPolicy(BaseModel):
    """Retry configuration for model API calls.

    Example:
        policy = RetryPolicy(max_retries=5, base_delay_ms=500)
        vector = await policy.acall(lambda: client.aembed([text]))
    """

    max_retries: int = Field(default=3, ge=1)  # Total attempts, including the first
    base_delay_ms: float = Field(default=1000, ge=0)
    max_delay_ms: float = Field(default=60_000, ge=0)

    def _retrying_kwargs(self) -> dict[str, Any]:
        return {
            "stop": stop_after_attempt(self.max_retries),
            "wait": wait_for_error(self.base_delay_ms, self.max_delay_ms),
            "before_sleep": _log_before_sleep(self.max_retries),
            "reraise": True,
        }

    async def acall(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run an async operation, retrying failures with backoff.

        operation may be a coroutine function or any callable returning an
        awaitable (e.g. a lambda around a client call); each attempt awaits it.
        """
        async for attempt in AsyncRetrying(sleep=_asleep, **self._retrying_kwargs()):
            with attempt:
                return await operation()
        raise AssertionError("unreachable: tenacity reraises on the final attempt")

    def call(self, operation: Callable[[], T]) -> T:
        """Run a blocking operation, retrying failures with backoff."""
        for attempt in Retrying(sleep=_sleep, **self._retrying_kwargs()):
            with attempt:
                return operation()
        raise AssertionError("unreachable: tenacity reraises on the final attempt")


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    base_delay_ms: float = 1000,
) -> T:
    """Await operation(), retrying on failure up to max_retries total attempts.

    Knows nothing about what the operation does; wrap any fallible async call.

    Raises:
        The last error raised by operation, unchanged.
    """
    policy = RetryPolicy(max_retries=max_retries, base_delay_ms=base_delay_ms)
    return await policy.acall(operation)


def with_retry_sync(
    operation: Callable[[], T],
    max_retries: int = 3,
    base_delay_ms: float = 1000,
) -> T:
    """Blocking counterpart of with_retry for synchronous callables."""
    policy = RetryPolicy(max_retries=max_retries, base_delay_ms=base_delay_ms)
    return policy.call(operation)

"""
Tests for RetryPolicy using scripted executors instead of HTTP.
"""
import random

import httpx
import pytest

from shyft_sdk.exceptions import TransportError
from shyft_sdk.retry import RetryPolicy, is_retryable_status


class ScriptedExecutor:
    """Returns (or raises) the scripted outcomes in order, counting calls"""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def __call__(self):
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome)


@pytest.mark.parametrize("status, expected", [
    (408, True),
    (429, True),
    (500, True),
    (502, True),
    (503, True),
    (504, True),
    (599, True),
    (400, False),
    (401, False),
    (403, False),
    (404, False),
    (200, False),
    (301, False),
])
def test_is_retryable_status(status, expected):
    assert is_retryable_status(status) is expected


@pytest.mark.parametrize("max_retries", [0, 1, 3, 5])
async def test_always_retryable_uses_whole_budget(max_retries, recording_sleep):
    policy = RetryPolicy(0.5, 1.0, max_retries, sleep=recording_sleep)
    executor = ScriptedExecutor(503)

    response = await policy.execute(executor)

    assert response.status_code == 503
    assert executor.calls == max_retries + 1
    assert len(recording_sleep.delays) == max_retries


async def test_non_retryable_status_attempted_once(recording_sleep):
    policy = RetryPolicy(0.5, 1.0, 3, sleep=recording_sleep)
    executor = ScriptedExecutor(404)

    response = await policy.execute(executor)

    assert response.status_code == 404
    assert executor.calls == 1
    assert recording_sleep.delays == []


async def test_success_after_failures(recording_sleep):
    policy = RetryPolicy(0.5, 1.0, 3, sleep=recording_sleep)
    executor = ScriptedExecutor(500, 429, 200)

    response = await policy.execute(executor)

    assert response.status_code == 200
    assert executor.calls == 3


async def test_transport_error_surfaces_last_failure(recording_sleep):
    first = TransportError("first")
    last = TransportError("last")
    policy = RetryPolicy(0.5, 1.0, 1, sleep=recording_sleep)
    executor = ScriptedExecutor(first, last)

    with pytest.raises(TransportError) as exc_info:
        await policy.execute(executor)

    assert exc_info.value is last
    assert executor.calls == 2


async def test_transport_error_then_status_returns_status(recording_sleep):
    policy = RetryPolicy(0.5, 1.0, 2, sleep=recording_sleep)
    executor = ScriptedExecutor(TransportError("reset"), 500, 500)

    response = await policy.execute(executor)

    assert response.status_code == 500
    assert executor.calls == 3


async def test_other_exceptions_are_not_retried(recording_sleep):
    policy = RetryPolicy(0.5, 1.0, 3, sleep=recording_sleep)
    executor = ScriptedExecutor(RuntimeError("bug"))

    with pytest.raises(RuntimeError):
        await policy.execute(executor)
    assert executor.calls == 1


def test_backoff_stays_within_bounds():
    policy = RetryPolicy(0.5, 1.0, 10, rng=random.Random(1234))
    for attempt in range(10):
        delay = policy.backoff(attempt)
        assert 0.5 <= delay <= 1.0


def test_backoff_grows_exponentially_until_cap():
    policy = RetryPolicy(0.1, 10.0, 10, rng=random.Random(0))
    ceilings = []
    for attempt in range(8):
        ceilings.append(min(10.0, 0.1 * 2 ** attempt))
        assert policy.backoff(attempt) <= ceilings[-1]
    assert policy.backoff(0) == 0.1
    assert ceilings[-1] == 10.0


def test_backoff_after_many_attempts_stays_capped():
    policy = RetryPolicy(0.5, 1.0, 5000, rng=random.Random(7))
    for attempt in (63, 64, 1023, 1024, 5000):
        assert 0.5 <= policy.backoff(attempt) <= 1.0


async def test_large_retry_budget_is_exhausted_without_overflow(recording_sleep):
    policy = RetryPolicy(0.5, 1.0, 1100, sleep=recording_sleep)
    executor = ScriptedExecutor(503)

    response = await policy.execute(executor)

    assert response.status_code == 503
    assert executor.calls == 1101
    assert all(0.5 <= delay <= 1.0 for delay in recording_sleep.delays)


def test_backoff_is_jittered():
    policy = RetryPolicy(0.1, 10.0, 10, rng=random.Random(42))
    delays = {policy.backoff(5) for _ in range(20)}
    assert len(delays) > 1


def test_backoff_fixed_when_bounds_equal():
    policy = RetryPolicy(0.25, 0.25, 3)
    assert [policy.backoff(n) for n in range(4)] == [0.25, 0.25, 0.25, 0.25]


@pytest.mark.parametrize("args", [(-1, 1, 3), (2, 1, 3), (0.5, 1.0, -1)])
def test_invalid_bounds_rejected(args):
    with pytest.raises(ValueError):
        RetryPolicy(*args)


async def test_retry_warning_is_rate_limited(recording_sleep, caplog):
    policy = RetryPolicy(0.5, 1.0, 3, sleep=recording_sleep)
    caplog.set_level("WARNING")

    await policy.execute(ScriptedExecutor(503), description="GET transaction/parsed")

    warnings = [r for r in caplog.records if r.levelname == "WARNING"]
    assert len(warnings) == 1
    assert "status 503" in warnings[0].getMessage()
    errors = [r for r in caplog.records if r.levelname == "ERROR"]
    assert len(errors) == 1

from __future__ import annotations

import asyncio

import pytest

from ai_content_generator.client.retry import RetryPolicy


def _counter(results: list[int]):
    calls = {"n": 0}

    async def attempt() -> int:
        value = results[min(calls["n"], len(results) - 1)]
        calls["n"] += 1
        return value

    return attempt, calls


def test_stops_on_first_non_retryable_result(recording_sleep) -> None:
    attempt, calls = _counter([200])
    policy = RetryPolicy(max_attempts=3, delay_s=3.0, sleep=recording_sleep)
    result, attempts = asyncio.run(policy.run(attempt, lambda r: r == 429))
    assert (result, attempts) == (200, 1)
    assert calls["n"] == 1
    assert recording_sleep.delays == []


def test_retries_until_success(recording_sleep) -> None:
    attempt, calls = _counter([429, 429, 200])
    policy = RetryPolicy(max_attempts=3, delay_s=3.0, sleep=recording_sleep)
    result, attempts = asyncio.run(policy.run(attempt, lambda r: r == 429))
    assert (result, attempts) == (200, 3)
    assert recording_sleep.delays == [3.0, 3.0]


def test_exhaustion_returns_last_result_without_trailing_sleep(recording_sleep) -> None:
    attempt, calls = _counter([429])
    policy = RetryPolicy(max_attempts=3, delay_s=0.5, sleep=recording_sleep)
    result, attempts = asyncio.run(policy.run(attempt, lambda r: r == 429))
    assert (result, attempts) == (429, 3)
    assert calls["n"] == 3
    assert recording_sleep.delays == [0.5, 0.5]


def test_single_attempt_policy_never_sleeps(recording_sleep) -> None:
    attempt, _ = _counter([429])
    policy = RetryPolicy(max_attempts=1, sleep=recording_sleep)
    _, attempts = asyncio.run(policy.run(attempt, lambda r: r == 429))
    assert attempts == 1
    assert recording_sleep.delays == []


def test_rejects_invalid_parameters() -> None:
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)
    with pytest.raises(ValueError):
        RetryPolicy(delay_s=-1)

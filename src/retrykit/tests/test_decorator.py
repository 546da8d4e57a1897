"""Tests for the retrying decorator."""

from __future__ import annotations

import pytest

from retrykit import SECOND, Constant, ErrorStop, LimitAttempts, retrying
from retrykit.testing import FakeClock


def test_sync_function_is_retried() -> None:
    calls: list[str] = []

    @retrying(Constant(SECOND).limit_attempts(5), clock=FakeClock())
    def greet(name: str, *, punctuation: str = "!") -> str:
        calls.append(name)
        if len(calls) < 3:
            raise TimeoutError("slow")
        return f"hello {name}{punctuation}"

    assert greet("ada", punctuation="?") == "hello ada?"
    assert calls == ["ada"] * 3
    assert greet.__name__ == "greet"


def test_each_call_is_an_independent_run() -> None:
    clock = FakeClock()
    calls = 0

    @retrying(LimitAttempts(2, Constant(SECOND)), clock=clock)
    def always_fails() -> None:
        nonlocal calls
        calls += 1
        raise RuntimeError("nope")

    for _ in range(3):
        with pytest.raises(RuntimeError):
            always_fails()
    assert calls == 6
    assert len(clock.countdowns) == 3


def test_filter_is_applied() -> None:
    @retrying(Constant(SECOND), clock=FakeClock(), filter=lambda err: ErrorStop(err) if err else None)
    def broken() -> None:
        raise LookupError("gone")

    with pytest.raises(LookupError, match="gone"):
        broken()


@pytest.mark.asyncio
async def test_async_function_is_retried() -> None:
    attempts: list[int] = []

    @retrying(Constant(SECOND), clock=FakeClock(), notify=lambda err, attempt, wait: attempts.append(attempt))
    async def fetch(key: str) -> str:
        if len(attempts) < 2:
            raise ConnectionError(key)
        return key.upper()

    assert await fetch("abc") == "ABC"
    assert attempts == [1, 2]

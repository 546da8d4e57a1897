"""Tests for the async retry loop."""

from __future__ import annotations

import asyncio
import time

import pytest

from retrykit import HOUR, MILLISECOND, SECOND, CancelToken, Constant, ErrorStop, LimitAttempts, Immediate, arun
from retrykit.foundation.duration import Duration
from retrykit.testing import FakeClock


class AsyncFlaky:
    """Coroutine operation that fails until its final call."""

    def __init__(self, attempts: int, value: object = "ok") -> None:
        self.attempts = attempts
        self.value = value
        self.calls = 0

    async def __call__(self) -> object:
        self.calls += 1
        await asyncio.sleep(0)
        if self.calls >= self.attempts:
            return self.value
        raise ConnectionError("unreachable")


@pytest.mark.asyncio
async def test_async_succeeds_after_failures() -> None:
    op, clock = AsyncFlaky(5), FakeClock()
    notified: list[tuple[int, Duration]] = []

    result = await arun(op, Constant(100 * MILLISECOND), clock=clock,
                        notify=lambda err, attempt, wait: notified.append((attempt, wait)))

    assert result == "ok"
    assert op.calls == 5
    assert notified == [(a, 100 * MILLISECOND) for a in range(1, 5)]
    assert clock.waits == [100 * MILLISECOND] * 4


@pytest.mark.asyncio
async def test_async_policy_stop() -> None:
    op = AsyncFlaky(10)
    with pytest.raises(ConnectionError, match="unreachable"):
        await arun(op, LimitAttempts(2, Immediate()), clock=FakeClock())
    assert op.calls == 2


@pytest.mark.asyncio
async def test_async_accepts_sync_operation() -> None:
    calls = 0

    def op() -> int:
        nonlocal calls
        calls += 1
        if calls < 3:
            raise ValueError("again")
        return calls

    assert await arun(op, Constant(SECOND), clock=FakeClock()) == 3


@pytest.mark.asyncio
async def test_async_error_stop() -> None:
    original = PermissionError("denied")

    async def op() -> None:
        raise ErrorStop(original)

    with pytest.raises(PermissionError) as excinfo:
        await arun(op, Constant(SECOND), clock=FakeClock())
    assert excinfo.value is original


@pytest.mark.asyncio
async def test_async_pre_cancelled() -> None:
    token = CancelToken()
    token.cancel()
    op = AsyncFlaky(10)

    with pytest.raises(ConnectionError):
        await arun(op, Constant(SECOND), cancel=token, clock=FakeClock())
    assert op.calls == 1


@pytest.mark.asyncio
async def test_async_custom_cancel_cause_is_not_retried() -> None:
    token = CancelToken()
    shutdown = ConnectionAbortedError("shutdown")
    token.cancel(shutdown)
    calls = 0

    async def op() -> None:
        nonlocal calls
        calls += 1
        token.raise_if_cancelled()

    with pytest.raises(ConnectionAbortedError) as excinfo:
        await arun(op, Immediate().limit_attempts(5), cancel=token, clock=FakeClock())
    assert excinfo.value is shutdown
    assert calls == 1


@pytest.mark.asyncio
async def test_async_deadline_interrupts_wait() -> None:
    token = CancelToken(timeout=0.05)
    op = AsyncFlaky(10)

    started = time.monotonic()
    with pytest.raises(ConnectionError):
        await arun(op, Constant(HOUR), cancel=token)
    assert time.monotonic() - started < 5
    assert op.calls == 1


@pytest.mark.asyncio
async def test_async_real_loop_clock() -> None:
    op = AsyncFlaky(3)
    assert await arun(op, Constant(MILLISECOND)) == "ok"
    assert op.calls == 3


@pytest.mark.asyncio
async def test_task_cancellation_propagates() -> None:
    op = AsyncFlaky(10)
    task = asyncio.create_task(arun(op, Constant(HOUR)))
    while op.calls == 0:
        await asyncio.sleep(0)
    await asyncio.sleep(0.01)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert op.calls == 1

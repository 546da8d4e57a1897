"""The retry control loop.

run() drives a blocking operation and arun() an async one. Both:

1. Call the operation, then the filter (if any) with the raised error or None
2. Return the operation's value when no error remains
3. Raise the wrapped error of an ErrorStop, or a cancellation error, at once
4. Ask the policy for the next wait; STOP raises the current error
5. Call notify (if any), then wait for the countdown or the cancellation
   source, whichever comes first; cancellation raises the current error

Only Exception subclasses raised by the operation are retried, so
KeyboardInterrupt, SystemExit and asyncio.CancelledError propagate untouched.
Errors are raised as produced, never wrapped.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from collections.abc import Awaitable
from typing import Callable, TypeVar

from retrykit.foundation.config import get_settings
from retrykit.foundation.duration import STOP, Duration, format_duration
from retrykit.foundation.errors import ErrorStop, is_cancellation
from retrykit.runtime.concurrency import SYSTEM_CLOCK, CancellationSource, Clock, LoopClock, background
from retrykit.runtime.policy import Policy

T = TypeVar("T")

Filter = Callable[[BaseException | None], BaseException | None]
Notify = Callable[[BaseException, int, Duration], None]

logger = logging.getLogger("retrykit.retry")


def _name_of(operation: Callable[..., object]) -> str:
    return getattr(operation, "__qualname__", None) or getattr(operation, "__name__", None) or repr(operation)


def _resolve(policy: Policy | None, log_retries: bool | None) -> tuple[Policy, bool]:
    """Fill in defaults once, before the first attempt.

    Settings are only read when no policy is given; an explicit policy never
    depends on the environment.
    """
    if policy is not None:
        return policy, True if log_retries is None else log_retries
    settings = get_settings().retry
    return settings.build_policy(), settings.log_retries if log_retries is None else log_retries


def _filtered(result: T | None, err: BaseException | None, filter: Filter | None) -> tuple[T | None, BaseException | None]:
    if filter is not None:
        err = filter(err)
    return (result, None) if err is None else (None, err)


def _decide(
    policy: Policy, source: CancellationSource, err: BaseException, attempt: int, elapsed: Duration, label: str,
) -> tuple[BaseException, Duration]:
    """Classify a failed attempt. Returns the error to surface and the wait; wait <= STOP ends the run."""
    # ErrorStop is never looked through: even when it wraps a cancellation,
    # the wrapped error is what surfaces.
    if isinstance(err, ErrorStop):
        logger.debug(f"[{label}] Attempt {attempt} stopped the run: {err.error!r}")
        return err.error, STOP

    # No point in retrying once the cancellation source itself has failed.
    if is_cancellation(err, source.cause):
        logger.debug(f"[{label}] Attempt {attempt} was cancelled: {err!r}")
        return err, STOP

    wait = policy.wait(attempt, elapsed)
    if wait <= STOP:
        logger.info(f"[{label}] Giving up after attempt {attempt}: {err!r}")
    return err, wait


def _announce(
    err: BaseException, attempt: int, wait: Duration, label: str, notify: Notify | None, log_retries: bool,
) -> None:
    if log_retries:
        logger.info(f"[{label}] Attempt {attempt} failed: {err!r}. Retrying in {format_duration(wait)}")
    if notify is not None:
        notify(err, attempt, wait)


def run(
    operation: Callable[[], T],
    policy: Policy | None = None,
    *,
    cancel: CancellationSource | None = None,
    filter: Filter | None = None,
    notify: Notify | None = None,
    clock: Clock | None = None,
    name: str | None = None,
    log_retries: bool | None = None,
) -> T | None:
    """Call operation until it succeeds, the policy stops, or the run is cancelled.

    Args:
        operation: Zero-argument callable to retry
        policy: Wait policy (default: built from RetrySettings)
        cancel: Cancellation source watched between attempts (default: never fires)
        filter: Called after each attempt with the raised error or None; returns
            the error to act on, None to treat the attempt as a success, or an
            ErrorStop to end the run
        notify: Called with (error, attempt, wait) before each wait
        clock: Time source and countdown factory (default: SystemClock)
        name: Label for log lines (default: the operation's qualified name)
        log_retries: Log each scheduled retry at INFO (default: True, or
            RetrySettings.log_retries when policy is None)

    Returns:
        The operation's return value, or None if the filter suppressed an error

    Raises:
        The last (filtered) error when the policy stops or cancellation arrives
        during a wait; a cancellation error raised by the operation; or the
        error wrapped by an ErrorStop.
    """
    policy, log_retries = _resolve(policy, log_retries)
    source = cancel if cancel is not None else background()
    clock = clock if clock is not None else SYSTEM_CLOCK
    label = name or _name_of(operation)

    wake = threading.Event()
    countdown = clock.countdown(0, wake.set)
    source.add_done_callback(wake.set)
    try:
        start = clock.now()
        attempt = 0
        while True:
            try:
                result, err = operation(), None
            except Exception as exc:
                result, err = None, exc
            result, err = _filtered(result, err, filter)
            if err is None:
                return result
            attempt += 1

            err, wait = _decide(policy, source, err, attempt, clock.now() - start, label)
            if wait <= STOP:
                raise err
            _announce(err, attempt, wait, label, notify, log_retries)
            if wait == 0:
                continue

            countdown.reset(wait)
            while True:
                wake.wait()
                wake.clear()
                if source.done:
                    raise err
                if countdown.expired:
                    break
    finally:
        countdown.stop()
        source.remove_done_callback(wake.set)


async def arun(
    operation: Callable[[], Awaitable[T] | T],
    policy: Policy | None = None,
    *,
    cancel: CancellationSource | None = None,
    filter: Filter | None = None,
    notify: Notify | None = None,
    clock: Clock | None = None,
    name: str | None = None,
    log_retries: bool | None = None,
) -> T | None:
    """Async twin of run(). Awaits the operation's result when it is awaitable.

    Waits suspend the task instead of blocking the thread. The default clock
    is a LoopClock on the running loop. Cancelling the awaiting task raises
    asyncio.CancelledError after the countdown is released.
    """
    loop = asyncio.get_running_loop()
    policy, log_retries = _resolve(policy, log_retries)
    source = cancel if cancel is not None else background()
    clock = clock if clock is not None else LoopClock(loop)
    label = name or _name_of(operation)

    wake = asyncio.Event()

    def _wake() -> None:
        if not loop.is_closed():
            loop.call_soon_threadsafe(wake.set)

    countdown = clock.countdown(0, _wake)
    source.add_done_callback(_wake)
    try:
        start = clock.now()
        attempt = 0
        while True:
            try:
                result = operation()
                if inspect.isawaitable(result):
                    result = await result
                err = None
            except Exception as exc:
                result, err = None, exc
            result, err = _filtered(result, err, filter)
            if err is None:
                return result
            attempt += 1

            err, wait = _decide(policy, source, err, attempt, clock.now() - start, label)
            if wait <= STOP:
                raise err
            _announce(err, attempt, wait, label, notify, log_retries)
            if wait == 0:
                continue

            countdown.reset(wait)
            while True:
                await wake.wait()
                wake.clear()
                if source.done:
                    raise err
                if countdown.expired:
                    break
    finally:
        countdown.stop()
        source.remove_done_callback(_wake)

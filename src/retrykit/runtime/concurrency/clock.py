"""Clocks and countdowns: the time seam of the retry loop.

The loop reads elapsed time from Clock.now() and realizes waits with a
single Countdown per run. Production clocks bind to real timers; tests pass
retrykit.testing.FakeClock instead, so nothing swaps a global time source.

Countdown semantics:
    - Single-shot: fires once per arming, calling on_expire
    - reset() re-arms and clears `expired`; firings of an earlier arming are dropped
    - stop() disarms; stopping an expired or stopped countdown is not an error
    - A delay <= 0 fires inline during creation or reset
"""

from __future__ import annotations

import asyncio
import threading
import time
from typing import Callable, Protocol, runtime_checkable

from retrykit.foundation.duration import SECOND, Duration, to_seconds

Callback = Callable[[], None]


@runtime_checkable
class Countdown(Protocol):
    """Resettable, stoppable, single-shot expiry notifier."""

    @property
    def expired(self) -> bool: ...

    def reset(self, delay: Duration) -> None: ...

    def stop(self) -> bool: ...


@runtime_checkable
class Clock(Protocol):
    """Source of monotonic time and countdowns."""

    def now(self) -> Duration: ...

    def countdown(self, delay: Duration, on_expire: Callback) -> Countdown: ...


class ThreadCountdown:
    """Countdown backed by threading.Timer. on_expire runs on the timer thread."""

    __slots__ = ("_on_expire", "_lock", "_timer", "_generation", "_expired")

    def __init__(self, delay: Duration, on_expire: Callback) -> None:
        self._on_expire = on_expire
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._expired = False
        self.reset(delay)

    @property
    def expired(self) -> bool:
        return self._expired

    def reset(self, delay: Duration) -> None:
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._expired = False
            old, self._timer = self._timer, None
            if delay > 0:
                self._timer = threading.Timer(
                    min(to_seconds(delay), threading.TIMEOUT_MAX), self._fire, args=(generation,)
                )
                self._timer.daemon = True
                self._timer.start()
        if old is not None:
            old.cancel()
        if delay <= 0:
            self._fire(generation)

    def stop(self) -> bool:
        """Disarm. Returns True if a pending expiry was prevented."""
        with self._lock:
            self._generation += 1
            timer, self._timer = self._timer, None
            pending = timer is not None and not self._expired
        if timer is not None:
            timer.cancel()
        return pending

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._expired = True
            self._timer = None
        self._on_expire()


class LoopCountdown:
    """Countdown backed by loop.call_later. Must be used from the loop's thread."""

    __slots__ = ("_loop", "_on_expire", "_handle", "_generation", "_expired")

    def __init__(self, loop: asyncio.AbstractEventLoop, delay: Duration, on_expire: Callback) -> None:
        self._loop = loop
        self._on_expire = on_expire
        self._handle: asyncio.TimerHandle | None = None
        self._generation = 0
        self._expired = False
        self.reset(delay)

    @property
    def expired(self) -> bool:
        return self._expired

    def reset(self, delay: Duration) -> None:
        self._generation += 1
        self._expired = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if delay <= 0:
            self._fire(self._generation)
        else:
            self._handle = self._loop.call_later(to_seconds(delay), self._fire, self._generation)

    def stop(self) -> bool:
        self._generation += 1
        handle, self._handle = self._handle, None
        if handle is None:
            return False
        handle.cancel()
        return not self._expired

    def _fire(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._expired = True
        self._handle = None
        self._on_expire()


class SystemClock:
    """Wall clock for blocking runs: time.monotonic_ns and thread timers."""

    __slots__ = ()

    def now(self) -> Duration:
        return time.monotonic_ns()

    def countdown(self, delay: Duration, on_expire: Callback) -> Countdown:
        return ThreadCountdown(delay, on_expire)

    def __repr__(self) -> str:
        return "SystemClock()"


class LoopClock:
    """Event-loop clock for async runs. Binds to the running loop when none is given."""

    __slots__ = ("_loop",)

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def now(self) -> Duration:
        return int(self.loop.time() * SECOND)

    def countdown(self, delay: Duration, on_expire: Callback) -> Countdown:
        return LoopCountdown(self.loop, delay, on_expire)

    def __repr__(self) -> str:
        return f"LoopClock({self._loop!r})"


SYSTEM_CLOCK = SystemClock()

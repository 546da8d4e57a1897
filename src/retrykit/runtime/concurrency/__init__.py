"""Concurrency seams for the retry loop: cancellation sources and clocks.

Key Components:
    - CancelToken: thread-safe cancellation with cause, deadline and parent
    - background: a source that never fires
    - Clock / Countdown: time and single-shot expiry, injected into runs
    - SystemClock / LoopClock: thread-timer and event-loop implementations
"""

from __future__ import annotations

from .cancel import CancellationSource, CancelToken, background
from .clock import SYSTEM_CLOCK, Clock, Countdown, LoopClock, LoopCountdown, SystemClock, ThreadCountdown

__all__ = [
    # Cancellation
    "CancellationSource",
    "CancelToken",
    "background",
    # Time
    "Clock",
    "Countdown",
    "SystemClock",
    "LoopClock",
    "ThreadCountdown",
    "LoopCountdown",
    "SYSTEM_CLOCK",
]

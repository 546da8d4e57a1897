"""Runtime layer: wait policies, concurrency seams, and the retry loop."""

from .concurrency import CancellationSource, CancelToken, Clock, Countdown, LoopClock, SystemClock, background
from .policy import (
    Constant,
    Exponential,
    Immediate,
    LimitAttempts,
    LimitTotal,
    Linear,
    Max,
    Policy,
    Randomize,
    load_policy,
)
from .retry import arun, retrying, run

__all__ = [
    # Policies
    "Policy", "Immediate", "Constant", "Linear", "Exponential",
    "LimitAttempts", "LimitTotal", "Max", "Randomize", "load_policy",
    # Concurrency
    "CancellationSource", "CancelToken", "background", "Clock", "Countdown", "SystemClock", "LoopClock",
    # Retry
    "run", "arun", "retrying",
]

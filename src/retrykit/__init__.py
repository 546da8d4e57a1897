"""retrykit: composable wait policies and a cancellable retry loop.

Quick Start:
    >>> from retrykit import run, Exponential, SECOND, MINUTE
    >>> policy = Exponential(SECOND, 2).jittered(0.5).capped(MINUTE).limit_attempts(10)
    >>> value = run(fetch, policy)

Policies:
    Immediate, Constant, Linear, Exponential        leaf waits
    LimitAttempts, LimitTotal, Max, Randomize       decorators

Control:
    STOP          returned by a policy to end the run
    ErrorStop     raised or returned by a filter to end the run with the wrapped error
    CancelToken   cancels waits and refuses further retries
"""

from retrykit.foundation import (
    HOUR,
    MAX_DURATION,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    NANOSECOND,
    SECOND,
    STOP,
    Cancelled,
    DeadlineExceeded,
    Duration,
    ErrorStop,
    RetrySettings,
    clear_settings_cache,
    format_duration,
    get_settings,
    is_cancellation,
    seconds,
)
from retrykit.runtime import (
    CancellationSource,
    CancelToken,
    Clock,
    Constant,
    Countdown,
    Exponential,
    Immediate,
    LimitAttempts,
    LimitTotal,
    Linear,
    LoopClock,
    Max,
    Policy,
    Randomize,
    SystemClock,
    arun,
    background,
    load_policy,
    retrying,
    run,
)

__version__ = "0.1.0"

__all__ = [
    # Retry loop
    "run", "arun", "retrying",
    # Policies
    "Policy", "Immediate", "Constant", "Linear", "Exponential",
    "LimitAttempts", "LimitTotal", "Max", "Randomize", "load_policy",
    # Durations
    "Duration", "NANOSECOND", "MICROSECOND", "MILLISECOND", "SECOND", "MINUTE", "HOUR",
    "MAX_DURATION", "STOP", "seconds", "format_duration",
    # Errors
    "ErrorStop", "Cancelled", "DeadlineExceeded", "is_cancellation",
    # Cancellation and time
    "CancellationSource", "CancelToken", "background", "Clock", "Countdown", "SystemClock", "LoopClock",
    # Settings
    "RetrySettings", "get_settings", "clear_settings_cache",
]

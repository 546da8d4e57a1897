"""Integer nanosecond durations with 64-bit saturation.

Wait times are plain ints counting nanoseconds, matching time.monotonic_ns().
The representable range is that of a signed 64-bit integer so policies can
saturate instead of growing without bound.

Example:
    >>> from retrykit.foundation.duration import SECOND, MILLISECOND, format_duration
    >>> format_duration(90 * SECOND)
    '1m30s'
    >>> format_duration(250 * MILLISECOND)
    '250ms'
"""

from __future__ import annotations

from typing import TypeAlias

Duration: TypeAlias = int

NANOSECOND: Duration = 1
MICROSECOND: Duration = 1_000 * NANOSECOND
MILLISECOND: Duration = 1_000 * MICROSECOND
SECOND: Duration = 1_000 * MILLISECOND
MINUTE: Duration = 60 * SECOND
HOUR: Duration = 60 * MINUTE

MAX_DURATION: Duration = 2**63 - 1
MIN_DURATION: Duration = -(2**63)

# Returned by Policy.wait to end a run; any wait <= STOP means give up
STOP: Duration = -1


def saturate(value: int | float) -> Duration:
    """Clamp value into the 64-bit duration range, truncating floats toward zero."""
    if value != value:  # NaN
        return MAX_DURATION
    if value >= MAX_DURATION:
        return MAX_DURATION
    if value <= MIN_DURATION:
        return MIN_DURATION
    return int(value)


def checked_mul(a: Duration, b: int) -> Duration | None:
    """Product of a and b, or None if it leaves the 64-bit range."""
    product = a * b
    return product if MIN_DURATION <= product <= MAX_DURATION else None


def checked_add(a: Duration, b: Duration) -> Duration | None:
    """Sum of a and b, or None if it leaves the 64-bit range."""
    total = a + b
    return total if MIN_DURATION <= total <= MAX_DURATION else None


def seconds(value: float) -> Duration:
    """Convert seconds to a saturated duration."""
    return saturate(value * SECOND)


def to_seconds(d: Duration) -> float:
    return d / SECOND


_SUB_SECOND_UNITS: tuple[tuple[Duration, str], ...] = (
    (MILLISECOND, "ms"),
    (MICROSECOND, "µs"),
    (NANOSECOND, "ns"),
)


def _trim(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


def format_duration(d: Duration) -> str:
    """Render a wait for log lines ('0s', '100ms', '1m30s', '2h0m0s').

    Negative values are policy stop signals and render as 'stop'.
    """
    if d < 0:
        return "stop"
    if d == 0:
        return "0s"
    if d < SECOND:
        for unit, suffix in _SUB_SECOND_UNITS:
            if d >= unit:
                return f"{_trim(d / unit)}{suffix}"
    hours, rest = divmod(d, HOUR)
    minutes, rest = divmod(rest, MINUTE)
    secs = _trim(rest / SECOND)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"

"""Leaf wait policies.

- Immediate: retry without waiting
- Constant: fixed wait
- Linear: initial + (attempts - 1) * increment
- Exponential: initial * multiplier ** (attempts - 1)

All arithmetic saturates at MAX_DURATION; an overflow never yields a shorter wait.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from retrykit.foundation.duration import MAX_DURATION, Duration, checked_add, checked_mul, saturate

from .base import Composable


@dataclass(frozen=True, slots=True)
class Immediate(Composable):
    """Always retry immediately."""

    def wait(self, attempts: int, elapsed: Duration) -> Duration:
        return 0


@dataclass(frozen=True, slots=True)
class Constant(Composable):
    """Always wait the same amount.

    Attributes:
        delay: Wait in nanoseconds
    """

    delay: Duration

    def wait(self, attempts: int, elapsed: Duration) -> Duration:
        return self.delay


@dataclass(frozen=True, slots=True)
class Linear(Composable):
    """Wait grows by a fixed increment per attempt.

    Delay = initial + (attempts - 1) * increment, or MAX_DURATION if either
    the multiplication or the addition overflows.

    Attributes:
        initial: First wait in nanoseconds
        increment: Added per additional attempt
    """

    initial: Duration
    increment: Duration

    def wait(self, attempts: int, elapsed: Duration) -> Duration:
        if (step := checked_mul(self.increment, attempts - 1)) is not None:
            if (delay := checked_add(self.initial, step)) is not None:
                return delay
        return MAX_DURATION


@dataclass(frozen=True, slots=True)
class Exponential(Composable):
    """Wait is multiplied by a fixed factor per attempt.

    Delay = initial * multiplier ** (attempts - 1), computed one multiplication
    at a time. The loop stops as soon as the running value is zero or the next
    multiplication would pass MAX_DURATION, and returns the last value that
    fits. initial must be non-zero and multiplier above 1 for the wait to grow.

    Attributes:
        initial: First wait in nanoseconds
        multiplier: Growth factor per attempt
    """

    initial: Duration
    multiplier: float

    def wait(self, attempts: int, elapsed: Duration) -> Duration:
        delay = float(self.initial)
        limit = MAX_DURATION / self.multiplier if self.multiplier else math.inf
        for _ in range(1, attempts):
            if delay == 0 or delay > limit:
                break
            delay *= self.multiplier
        return saturate(delay)

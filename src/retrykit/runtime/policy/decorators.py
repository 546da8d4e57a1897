"""Policies that wrap another policy and transform its decision.

Decorators compose by delegation, and order matters:
Max(cap, Randomize(f, p)) clamps after jitter, while Randomize(f, Max(cap, p))
jitters around the clamped value.

Example:
    >>> policy = LimitTotal(25 * MINUTE,
    ...     LimitAttempts(10,
    ...         Max(10 * MINUTE,
    ...             Randomize(0.5,
    ...                 Exponential(5 * SECOND, 2)))))
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from retrykit.foundation.duration import MAX_DURATION, STOP, Duration, saturate

from .base import Composable, Policy


@dataclass(frozen=True, slots=True)
class LimitAttempts(Composable):
    """Stop once attempts reaches limit.

    A limit of 2 retries the first failure once, then stops before a third call.
    """

    limit: int
    policy: Policy

    def wait(self, attempts: int, elapsed: Duration) -> Duration:
        if attempts >= self.limit:
            return STOP
        return self.policy.wait(attempts, elapsed)


@dataclass(frozen=True, slots=True)
class LimitTotal(Composable):
    """Stop once the time elapsed in the run reaches limit."""

    limit: Duration
    policy: Policy

    def wait(self, attempts: int, elapsed: Duration) -> Duration:
        if elapsed >= self.limit:
            return STOP
        return self.policy.wait(attempts, elapsed)


@dataclass(frozen=True, slots=True)
class Max(Composable):
    """Clamp the inner wait down to cap. Never raises a wait, STOP passes through."""

    cap: Duration
    policy: Policy

    def wait(self, attempts: int, elapsed: Duration) -> Duration:
        delay = self.policy.wait(attempts, elapsed)
        return self.cap if delay > self.cap else delay


@dataclass(frozen=True, slots=True)
class Randomize(Composable):
    """Jitter the inner wait uniformly within [wait * (1 - factor), wait * (1 + factor)].

    The upper bound is clamped to MAX_DURATION before sampling. A zero wait
    or STOP is returned unchanged. Draws come from rng when given, otherwise
    from the shared module-level random source.

    Attributes:
        factor: Relative spread, in [0, 1]
        policy: Inner policy
        rng: Optional random source
    """

    factor: float
    policy: Policy
    rng: random.Random | None = field(default=None, compare=False, repr=False)

    def wait(self, attempts: int, elapsed: Duration) -> Duration:
        delay = self.policy.wait(attempts, elapsed)
        if delay <= 0:
            return delay

        low = delay * (1 - self.factor)
        high = min(delay * (1 + self.factor), float(MAX_DURATION))

        # +1 compensates for truncation so that every integer in
        # [low, high] is drawn with equal probability.
        draw = (self.rng or random).random()
        return saturate(low + draw * (high - low + 1))

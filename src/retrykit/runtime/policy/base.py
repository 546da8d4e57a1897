"""Policy protocol and the fluent composition mixin shared by all policies."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from retrykit.foundation.duration import Duration

if TYPE_CHECKING:
    from .decorators import LimitAttempts, LimitTotal, Max, Randomize


@runtime_checkable
class Policy(Protocol):
    """Tells run() how long to wait before the next attempt.

    wait() receives the number of failed attempts so far in the current run
    (1 on the first call) and the nanoseconds elapsed since the run began.
    It returns a wait in nanoseconds, 0 to retry immediately, or STOP to end
    the run and surface the last error.

    A policy is shared across concurrent runs, so wait() must not mutate
    state. The one exception is Randomize drawing from a random source.
    """

    def wait(self, attempts: int, elapsed: Duration) -> Duration:
        ...


class Composable:
    """Fluent helpers that wrap self in a decorator policy.

    Example:
        >>> policy = Exponential(SECOND, 2).jittered(0.5).capped(MINUTE).limit_attempts(5)
    """

    __slots__ = ()

    def limit_attempts(self, limit: int) -> LimitAttempts:
        from .decorators import LimitAttempts
        return LimitAttempts(limit, self)  # type: ignore[arg-type]

    def limit_total(self, limit: Duration) -> LimitTotal:
        from .decorators import LimitTotal
        return LimitTotal(limit, self)  # type: ignore[arg-type]

    def capped(self, cap: Duration) -> Max:
        from .decorators import Max
        return Max(cap, self)  # type: ignore[arg-type]

    def jittered(self, factor: float, rng: random.Random | None = None) -> Randomize:
        from .decorators import Randomize
        return Randomize(factor, self, rng)  # type: ignore[arg-type]

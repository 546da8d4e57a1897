"""Testing helpers: a deterministic clock for runs that would otherwise sleep."""

from .clock import FakeClock, FakeCountdown

__all__ = ["FakeClock", "FakeCountdown"]

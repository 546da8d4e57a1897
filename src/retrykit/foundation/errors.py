"""Errors that steer the retry loop.

- ErrorStop: wrap an error to end a run immediately and surface the original
- Cancelled / DeadlineExceeded: causes reported by a cancelled CancelToken
- is_cancellation: whether an error is, or explicitly wraps, a cancellation
"""

from __future__ import annotations

import asyncio


class ErrorStop(Exception):
    """Wraps an error so that the retry loop stops and raises the original.

    Raise it from an operation, or return it from a filter:

        >>> def filter(exc):
        ...     if isinstance(exc, PermissionError):
        ...         return ErrorStop(exc)
        ...     return exc

    The wrapper itself never escapes run(); the wrapped error does, unchanged.
    """

    __slots__ = ("error",)

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__(str(error))

    def __str__(self) -> str:
        return str(self.error)

    def __repr__(self) -> str:
        return f"ErrorStop({self.error!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorStop):
            return self.error is other.error or self.error == other.error
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.error)


class Cancelled(Exception):
    """Raised (or reported as a cause) when a CancelToken is cancelled."""

    def __init__(self, message: str = "operation cancelled") -> None:
        super().__init__(message)


class DeadlineExceeded(TimeoutError):
    """Reported as a cause when a CancelToken's deadline passes."""

    def __init__(self, message: str = "deadline exceeded") -> None:
        super().__init__(message)


_CANCELLATION_TYPES: tuple[type[BaseException], ...] = (Cancelled, DeadlineExceeded, asyncio.CancelledError)


def is_cancellation(exc: BaseException | None, cause: BaseException | None = None) -> bool:
    """True if exc or any error on its explicit __cause__ chain is a cancellation.

    cause is a cancellation source's own reason; it counts whatever its type.
    """
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, _CANCELLATION_TYPES) or (cause is not None and exc is cause):
            return True
        seen.add(id(exc))
        exc = exc.__cause__
    return False

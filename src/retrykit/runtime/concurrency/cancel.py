"""Cancellation sources consumed by the retry loop.

A cancellation source reports whether it is done, why, and notifies
callbacks when it becomes done. CancelToken is the thread-safe
implementation; background() returns a shared source that never fires.

Example:
    >>> token = CancelToken(timeout=30.0)
    >>> child = CancelToken(parent=token)
    >>> token.cancel()
    >>> child.done, type(child.cause).__name__
    (True, 'Cancelled')
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol, runtime_checkable

from retrykit.foundation.errors import Cancelled, DeadlineExceeded

logger = logging.getLogger("retrykit.cancel")

Callback = Callable[[], None]


@runtime_checkable
class CancellationSource(Protocol):
    """What the retry loop needs from a cancellation signal."""

    @property
    def done(self) -> bool: ...

    @property
    def cause(self) -> BaseException | None: ...

    def add_done_callback(self, fn: Callback) -> None: ...

    def remove_done_callback(self, fn: Callback) -> int: ...


class CancelToken:
    """Thread-safe, one-shot cancellation signal with an optional deadline.

    - cancel() is idempotent; the first cause wins
    - A timeout cancels with DeadlineExceeded once it elapses
    - A child token is cancelled with its parent's cause
    - Callbacks registered after cancellation run immediately

    Args:
        parent: Source whose cancellation propagates to this token
        timeout: Seconds until the token cancels itself with DeadlineExceeded
    """

    __slots__ = ("_lock", "_cause", "_callbacks", "_timer", "_parent")

    def __init__(self, *, parent: CancellationSource | None = None, timeout: float | None = None) -> None:
        self._lock = threading.Lock()
        self._cause: BaseException | None = None
        self._callbacks: list[Callback] = []
        self._timer: threading.Timer | None = None
        self._parent = parent

        if timeout is not None:
            if timeout <= 0:
                self.cancel(DeadlineExceeded())
                return
            self._timer = threading.Timer(timeout, self._expire)
            self._timer.daemon = True
            self._timer.start()
        if parent is not None:
            parent.add_done_callback(self._from_parent)

    @property
    def done(self) -> bool:
        return self._cause is not None

    @property
    def cause(self) -> BaseException | None:
        """Why the token is done: Cancelled, DeadlineExceeded, or a custom error."""
        return self._cause

    def cancel(self, cause: BaseException | None = None) -> bool:
        """Cancel the token. Returns False if it was already done."""
        with self._lock:
            if self._cause is not None:
                return False
            self._cause = cause if cause is not None else Cancelled()
            callbacks, self._callbacks = self._callbacks, []
            timer, self._timer = self._timer, None

        if timer is not None:
            timer.cancel()
        if self._parent is not None:
            self._parent.remove_done_callback(self._from_parent)
        logger.debug(f"Token cancelled: {self._cause!r}")
        for fn in callbacks:
            fn()
        return True

    def raise_if_cancelled(self) -> None:
        """Raise the cause if the token is done."""
        if (cause := self._cause) is not None:
            raise cause

    def add_done_callback(self, fn: Callback) -> None:
        with self._lock:
            if self._cause is None:
                self._callbacks.append(fn)
                return
        fn()

    def remove_done_callback(self, fn: Callback) -> int:
        """Unregister fn. Returns the number of registrations removed."""
        with self._lock:
            before = len(self._callbacks)
            self._callbacks = [cb for cb in self._callbacks if cb != fn]
            return before - len(self._callbacks)

    def _expire(self) -> None:
        self.cancel(DeadlineExceeded())

    def _from_parent(self) -> None:
        self.cancel(self._parent.cause if self._parent is not None else None)

    def __repr__(self) -> str:
        state = f"cancelled({self._cause!r})" if self._cause is not None else "active"
        return f"CancelToken({state})"


class _Background:
    """Source that is never done."""

    __slots__ = ()

    @property
    def done(self) -> bool:
        return False

    @property
    def cause(self) -> BaseException | None:
        return None

    def add_done_callback(self, fn: Callback) -> None:
        pass

    def remove_done_callback(self, fn: Callback) -> int:
        return 0

    def __repr__(self) -> str:
        return "background()"


_BACKGROUND = _Background()


def background() -> CancellationSource:
    """Shared source that never fires, used when no cancellation is supplied."""
    return _BACKGROUND

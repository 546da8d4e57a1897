"""Decorator form of run() / arun().

Example:
    >>> @retrying(Constant(100 * MILLISECOND).limit_attempts(3))
    ... def fetch(url: str) -> bytes:
    ...     return urlopen(url).read()

    >>> @retrying(Exponential(SECOND, 2).capped(MINUTE))
    ... async def publish(msg: str) -> None:
    ...     await broker.send(msg)
"""

from __future__ import annotations

import inspect
from functools import wraps
from typing import Callable, ParamSpec, TypeVar

from retrykit.runtime.concurrency import CancellationSource, Clock
from retrykit.runtime.policy import Policy

from .loop import Filter, Notify, arun, run

P = ParamSpec("P")
T = TypeVar("T")


def retrying(
    policy: Policy | None = None,
    *,
    cancel: CancellationSource | None = None,
    filter: Filter | None = None,
    notify: Notify | None = None,
    clock: Clock | None = None,
    log_retries: bool | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Retry every call of the decorated function with the given policy.

    Coroutine functions are retried with arun(), everything else with run().
    Each call is an independent run; the policy is shared between them.
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        name = func.__qualname__

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return run(  # type: ignore[return-value]
                lambda: func(*args, **kwargs), policy,
                cancel=cancel, filter=filter, notify=notify, clock=clock, name=name, log_retries=log_retries,
            )

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await arun(  # type: ignore[return-value]
                lambda: func(*args, **kwargs), policy,
                cancel=cancel, filter=filter, notify=notify, clock=clock, name=name, log_retries=log_retries,
            )

        return async_wrapper if inspect.iscoroutinefunction(func) else wrapper  # type: ignore[return-value]

    return decorator

"""Retry loop for fallible operations.

Example:
    >>> from retrykit import run, ErrorStop, Exponential, SECOND, MINUTE
    >>>
    >>> policy = Exponential(SECOND, 2).jittered(0.5).capped(MINUTE).limit_attempts(10)
    >>>
    >>> def filter(exc):
    ...     if isinstance(exc, PermissionError):
    ...         return ErrorStop(exc)
    ...     return exc
    >>>
    >>> run(fetch_report, policy, filter=filter,
    ...     notify=lambda exc, attempt, wait: print(f"attempt {attempt}: {exc}"))
"""

from .decorator import retrying
from .loop import Filter, Notify, arun, run

__all__ = [
    "run",
    "arun",
    "retrying",
    "Filter",
    "Notify",
]

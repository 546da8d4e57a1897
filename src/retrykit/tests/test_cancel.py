"""Tests for cancellation tokens."""

from __future__ import annotations

import threading

import pytest

from retrykit import Cancelled, CancelToken, DeadlineExceeded, background
from retrykit.runtime.concurrency import CancellationSource


def test_cancel_sets_cause_once() -> None:
    token = CancelToken()
    assert not token.done and token.cause is None

    assert token.cancel() is True
    assert token.cancel(ValueError("late")) is False
    assert token.done
    assert isinstance(token.cause, Cancelled)


def test_custom_cause() -> None:
    token = CancelToken()
    reason = RuntimeError("shutdown")
    token.cancel(reason)
    assert token.cause is reason
    with pytest.raises(RuntimeError, match="shutdown"):
        token.raise_if_cancelled()


def test_callbacks_run_once_on_cancel() -> None:
    token = CancelToken()
    hits: list[str] = []
    token.add_done_callback(lambda: hits.append("a"))
    token.add_done_callback(lambda: hits.append("b"))

    token.cancel()
    token.cancel()
    assert hits == ["a", "b"]


def test_callback_added_after_cancel_runs_immediately() -> None:
    token = CancelToken()
    token.cancel()
    hits: list[int] = []
    token.add_done_callback(lambda: hits.append(1))
    assert hits == [1]


def test_remove_callback() -> None:
    token = CancelToken()
    hits: list[int] = []

    def cb() -> None:
        hits.append(1)

    token.add_done_callback(cb)
    assert token.remove_done_callback(cb) == 1
    assert token.remove_done_callback(cb) == 0
    token.cancel()
    assert hits == []


def test_timeout_cancels_with_deadline_exceeded() -> None:
    token = CancelToken(timeout=0.01)
    fired = threading.Event()
    token.add_done_callback(fired.set)

    assert fired.wait(5)
    assert isinstance(token.cause, DeadlineExceeded)
    assert isinstance(token.cause, TimeoutError)


def test_non_positive_timeout_is_already_expired() -> None:
    token = CancelToken(timeout=0)
    assert token.done
    assert isinstance(token.cause, DeadlineExceeded)


def test_parent_cancels_child_with_its_cause() -> None:
    parent = CancelToken()
    child = CancelToken(parent=parent)
    reason = Cancelled("parent stopped")

    parent.cancel(reason)
    assert child.done
    assert child.cause is reason


def test_child_cancel_does_not_touch_parent() -> None:
    parent = CancelToken()
    child = CancelToken(parent=parent)
    child.cancel()
    assert not parent.done
    assert parent.remove_done_callback(child._from_parent) == 0


def test_child_of_cancelled_parent_starts_done() -> None:
    parent = CancelToken()
    parent.cancel()
    assert CancelToken(parent=parent).done


def test_background_never_fires() -> None:
    source = background()
    assert source is background()
    assert not source.done and source.cause is None
    source.add_done_callback(lambda: pytest.fail("background fired"))
    assert source.remove_done_callback(print) == 0
    assert isinstance(source, CancellationSource)
    assert isinstance(CancelToken(), CancellationSource)

"""Tests for duration helpers."""

from __future__ import annotations

import pytest

from retrykit.foundation.duration import (
    HOUR,
    MAX_DURATION,
    MICROSECOND,
    MILLISECOND,
    MIN_DURATION,
    MINUTE,
    SECOND,
    STOP,
    checked_add,
    checked_mul,
    format_duration,
    saturate,
    seconds,
    to_seconds,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "0s"),
        (STOP, "stop"),
        (750, "750ns"),
        (12 * MICROSECOND, "12µs"),
        (100 * MILLISECOND, "100ms"),
        (1500 * MILLISECOND, "1.5s"),
        (90 * SECOND, "1m30s"),
        (2 * HOUR, "2h0m0s"),
    ],
)
def test_format_duration(value: int, expected: str) -> None:
    assert format_duration(value) == expected


def test_saturate() -> None:
    assert saturate(1.9) == 1
    assert saturate(2.0**63) == MAX_DURATION
    assert saturate(-(2.0**64)) == MIN_DURATION
    assert saturate(float("inf")) == MAX_DURATION
    assert saturate(float("nan")) == MAX_DURATION


def test_checked_arithmetic() -> None:
    assert checked_mul(MINUTE, 3) == 3 * MINUTE
    assert checked_mul(MAX_DURATION, 2) is None
    assert checked_mul(MAX_DURATION, -2) is None
    assert checked_add(MAX_DURATION, 0) == MAX_DURATION
    assert checked_add(MAX_DURATION, 1) is None


def test_seconds_round_trip() -> None:
    assert seconds(1.5) == 1500 * MILLISECOND
    assert seconds(1e30) == MAX_DURATION
    assert to_seconds(250 * MILLISECOND) == 0.25

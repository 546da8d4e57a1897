"""Foundation layer: durations, errors, configuration."""

from .config import RetrykitSettings, RetrySettings, clear_settings_cache, get_settings
from .duration import (
    HOUR,
    MAX_DURATION,
    MICROSECOND,
    MILLISECOND,
    MIN_DURATION,
    MINUTE,
    NANOSECOND,
    SECOND,
    STOP,
    Duration,
    format_duration,
    seconds,
    to_seconds,
)
from .errors import Cancelled, DeadlineExceeded, ErrorStop, is_cancellation

__all__ = [
    # Durations
    "Duration", "NANOSECOND", "MICROSECOND", "MILLISECOND", "SECOND", "MINUTE", "HOUR",
    "MAX_DURATION", "MIN_DURATION", "STOP", "seconds", "to_seconds", "format_duration",
    # Errors
    "ErrorStop", "Cancelled", "DeadlineExceeded", "is_cancellation",
    # Settings
    "RetrySettings", "RetrykitSettings", "get_settings", "clear_settings_cache",
]

"""Configuration management using pydantic-settings.

Provides environment-based retry defaults with type safety and validation.
"""

from .settings import RetrykitSettings, RetrySettings, clear_settings_cache, get_settings

__all__ = [
    "RetrySettings",
    "RetrykitSettings",
    "clear_settings_cache",
    "get_settings",
]

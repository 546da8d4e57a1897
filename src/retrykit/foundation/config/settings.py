"""Environment-based configuration using pydantic-settings.

Provides the default retry policy used when run() is called without one,
built from environment variables with validated defaults.

Example:
    >>> from retrykit.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.max_attempts
    10

    # Or with environment variables:
    # RETRYKIT_RETRY_MAX_ATTEMPTS=5
    # RETRYKIT_RETRY_JITTER=0
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import Field, NonNegativeFloat, PositiveFloat, PositiveInt, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from retrykit.runtime.policy import Policy


class RetrySettings(BaseSettings):
    """Default retry configuration.

    Durations are in seconds. The built policy is, outermost first:
    LimitTotal (if max_elapsed) -> LimitAttempts -> Max -> Randomize (if jitter) -> Exponential.
    """

    model_config = SettingsConfigDict(
        env_prefix="RETRYKIT_RETRY_",
        extra="ignore",
    )

    initial_delay: NonNegativeFloat = Field(default=0.1, description="First wait in seconds")
    multiplier: PositiveFloat = Field(default=2.0, description="Exponential growth factor")
    max_delay: PositiveFloat = Field(default=30.0, description="Cap on a single wait in seconds")
    jitter: Annotated[float, Field(ge=0.0, le=1.0)] = 0.5
    max_attempts: PositiveInt = Field(default=10, description="Attempt count at which the policy stops")
    max_elapsed: PositiveFloat | None = Field(default=None, description="Total time budget in seconds")
    log_retries: bool = Field(default=True, description="Log each scheduled retry at INFO")

    @model_validator(mode="after")
    def _check_bounds(self) -> RetrySettings:
        if self.initial_delay > self.max_delay:
            raise ValueError("initial_delay must not exceed max_delay")
        return self

    def build_policy(self) -> Policy:
        """Compose the configured policy chain."""
        from retrykit.foundation.duration import seconds
        from retrykit.runtime.policy import Exponential, LimitAttempts, LimitTotal, Max, Randomize

        policy: Policy = Exponential(seconds(self.initial_delay), self.multiplier)
        if self.jitter:
            policy = Randomize(self.jitter, policy)
        policy = LimitAttempts(self.max_attempts, Max(seconds(self.max_delay), policy))
        if self.max_elapsed is not None:
            policy = LimitTotal(seconds(self.max_elapsed), policy)
        return policy


class RetrykitSettings(BaseSettings):
    """Root settings, loaded from RETRYKIT_ prefixed variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="RETRYKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    retry: RetrySettings = Field(default_factory=RetrySettings)


@lru_cache(maxsize=1)
def get_settings() -> RetrykitSettings:
    """Get the global settings instance (cached)."""
    return RetrykitSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()

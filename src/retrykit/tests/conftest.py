"""Shared fixtures: isolate settings from the host environment."""

from __future__ import annotations

import os

import pytest

from retrykit.foundation.config import clear_settings_cache


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> object:
    """Drop RETRYKIT_ variables and reset the cached settings around each test."""
    for key in list(os.environ):
        if key.startswith("RETRYKIT_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()

"""Tests for the settings loader and logger factory.

These tests verify four guarantees:
1) Importing the module-level `settings` yields a `Settings` instance.
2) Environment variables override defaults after clearing the loader cache.
3) Playback tunables validate their ranges.
4) `get_logger()` respects the configured LOG_LEVEL when constructing loggers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import pytest
from pydantic import ValidationError

from algoplay.core.settings import (
    Settings,
    get_logger,
    load_settings,
    settings,
)


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop the cached instance so env changes never leak into other tests."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


def test_settings_instance_type() -> None:
    """`settings` should be an instance of the typed `Settings` model."""
    assert isinstance(settings, Settings)


def test_playback_defaults(monkeypatch: Any) -> None:
    for name in ("ALGOPLAY_BASE_DELAY_MS", "ALGOPLAY_SPEED_OPTIONS", "ALGOPLAY_SAMPLE_SIZE"):
        monkeypatch.delenv(name, raising=False)
    s = load_settings()
    assert s.base_delay_ms == 1500.0
    assert s.speed_options == [0.5, 1.0, 1.5, 2.0]
    assert s.sample_size == 10


def test_env_overrides_with_cache_clear(monkeypatch: Any) -> None:
    """Changing env vars should take effect after `load_settings.cache_clear()`."""
    monkeypatch.setenv("ALGOPLAY_ENV", "test")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("ALGOPLAY_BASE_DELAY_MS", "250")
    monkeypatch.setenv("ALGOPLAY_SPEED_OPTIONS", "[4, 1, 0.25]")

    s = load_settings()

    assert s.environment == "test"
    assert s.is_test and not s.is_prod
    assert s.log_level == "DEBUG"
    assert s.base_delay_ms == 250.0
    assert s.speed_options == [0.25, 1.0, 4.0]


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("ALGOPLAY_BASE_DELAY_MS", "0"),
        ("ALGOPLAY_SPEED_OPTIONS", "[1, -2]"),
        ("ALGOPLAY_SPEED_OPTIONS", "[]"),
        ("ALGOPLAY_SAMPLE_SIZE", "0"),
    ],
)
def test_invalid_playback_values_are_rejected(monkeypatch: Any, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings()


def test_get_logger_respects_level(monkeypatch: Any) -> None:
    """`get_logger()` should apply the numeric level derived from `LOG_LEVEL`.

    A unique logger name avoids side effects between tests.
    """
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    logger = get_logger("algoplay.tests.settings")

    assert logger.level == logging.ERROR
    assert logger.handlers, "Expected at least one StreamHandler to be attached."
    assert logger.propagate is False

"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `ALGOPLAY_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    base_delay_ms : float
        Autoplay delay between two steps at speed 1x; maps from
        `ALGOPLAY_BASE_DELAY_MS`.
    speed_options : list[float]
        Speed multipliers advertised by the CLI and the API; maps from
        `ALGOPLAY_SPEED_OPTIONS` (JSON list).
    sample_size : int
        Length of randomly generated sample arrays; maps from
        `ALGOPLAY_SAMPLE_SIZE`.
    """

    environment: EnvName = Field(default="dev", alias="ALGOPLAY_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    base_delay_ms: float = Field(default=1500.0, gt=0, alias="ALGOPLAY_BASE_DELAY_MS")
    speed_options: list[float] = Field(
        default_factory=lambda: [0.5, 1.0, 1.5, 2.0], alias="ALGOPLAY_SPEED_OPTIONS"
    )
    sample_size: int = Field(default=10, ge=1, le=64, alias="ALGOPLAY_SAMPLE_SIZE")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("speed_options")
    @classmethod
    def _positive_speeds(cls, v: list[float]) -> list[float]:
        """Reject empty or non-positive speed lists."""
        if not v or any(s <= 0 for s in v):
            raise ValueError("speed_options must be a non-empty list of positive numbers")
        return sorted(v)

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests can force a rebuild via `load_settings.cache_clear()` after
    mutating `os.environ`.
    """
    os.environ.setdefault("ALGOPLAY_ENV", "dev")
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "algoplay") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger

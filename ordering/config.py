"""Package settings using pydantic-settings."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

LevelName = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"]

PACKAGE_LOGGER = "ordering"


class OrderingSettings(BaseSettings):
    """Settings for the ordering package.

    All settings can be configured via environment variables with the
    ORDERING_ prefix, for example ``ORDERING_LOG_LEVEL=debug``. Level
    names are case-insensitive.

    Attributes:
        log_level: Level applied to the package logger by
            ``configure_logging``.
        rejection_log_level: Level at which orders log rejected items.

    Example:
        >>> settings = OrderingSettings(rejection_log_level="info")
        >>> order = Order(settings=settings)
    """

    log_level: LevelName = "WARNING"
    rejection_log_level: LevelName = "WARNING"

    model_config = {"env_prefix": "ORDERING_"}

    @field_validator("log_level", "rejection_log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)

    @property
    def rejection_level(self) -> int:
        return getattr(logging, self.rejection_log_level)


@lru_cache(maxsize=1)
def get_settings() -> OrderingSettings:
    """Return the process-wide settings, read from the environment once."""
    return OrderingSettings()


def configure_logging(settings: OrderingSettings | None = None) -> logging.Logger:
    """Set the package logger's level from ``settings``.

    Handlers and formatting are left to the application.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.level)
    return logger

"""Runtime configuration.

Configuration is loaded from:
- environment variables prefixed with ``ACTION_EVENTS_``
- and a local `.env` file (if present)
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from action_events.logging import configure_logging

_LEVEL_NAMES = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class ActionEventsSettings(BaseSettings):
    """Logging settings for applications embedding the dispatcher.

    Environment variables:
    - ACTION_EVENTS_LOG_LEVEL   (optional)
    - ACTION_EVENTS_LOG_FORMAT  (optional, "json" or "text")
    - ACTION_EVENTS_DEBUG       (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ActionEventsSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )
    debug: bool = Field(
        default=False,
        description="Log every registration and retirement at DEBUG level",
    )

    model_config = SettingsConfigDict(
        env_prefix="ACTION_EVENTS_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        configure_logging(self.log_level, fmt=self.log_format)

        if self.debug:
            logging.getLogger("action_events").setLevel(logging.DEBUG)

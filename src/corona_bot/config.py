"""
Configuration management for the Corona Stats Slack Bot.

Loads and validates all required environment variables with clear error messages.
Uses Pydantic Settings for type safety and validation.
"""

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from corona_bot.models import SpamStrategy

DEFAULT_STATS_URL = "https://redutv-api.vg.no/corona/v1/sheets/norway-region-data"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    CHANNEL, BOT_NAME and SLACK_KEY must be set, or the application will
    fail fast with a clear error message indicating which variables are missing.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Slack Configuration
    channel: str = Field(
        ...,
        min_length=1,
        description="Slack channel ID to post updates to"
    )
    bot_name: str = Field(
        ...,
        min_length=1,
        description="Display name of the bot, used to recognize its own messages"
    )
    slack_key: str = Field(
        ...,
        min_length=1,
        description="Slack bot token"
    )
    spam_strategy: SpamStrategy = Field(
        default=SpamStrategy.EDIT,
        description="EDIT overwrites the last bot message, THREAD replies under it"
    )

    # Polling Configuration
    new_limit: int = Field(
        default=50,
        ge=0,
        description="Minimum number of new cases before posting an update"
    )
    delay: int = Field(
        default=60,
        gt=0,
        description="Seconds between polls"
    )
    max_wait: int = Field(
        default=4 * 60 * 60,
        ge=0,
        description="Post anyway after this many seconds without an update (0 disables)"
    )

    # Stats API Configuration
    stats_url: str = Field(
        default=DEFAULT_STATS_URL,
        description="URL of the corona statistics endpoint"
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for the statistics request"
    )

    # Optional Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("spam_strategy", mode="before")
    @classmethod
    def validate_spam_strategy(cls, v):
        """Accept the strategy name in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return upper

    @property
    def poll_interval(self) -> timedelta:
        """Delay between two ticks."""
        return timedelta(seconds=self.delay)

    @property
    def max_wait_time(self) -> Optional[timedelta]:
        """Max-wait override window, or None when the override is disabled."""
        if self.max_wait == 0:
            return None
        return timedelta(seconds=self.max_wait)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Validated application settings

    Raises:
        ValidationError: If required environment variables are missing or invalid
    """
    return Settings()


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure application logging.

    Args:
        settings: Optional settings instance, will be loaded if not provided

    Returns:
        logging.Logger: Configured logger instance
    """
    if settings is None:
        settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("slack_sdk").setLevel(logging.WARNING)

    return logging.getLogger("corona_bot")

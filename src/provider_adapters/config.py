"""Configuration management using Pydantic settings."""

import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Adapter settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Provider API base URLs
    DISCORD_API_BASE: str = Field(default="https://discord.com/api/v10")
    GITHUB_API_BASE: str = Field(default="https://api.github.com")
    OPENAI_API_BASE: str = Field(default="https://api.openai.com/v1")

    # Transport
    ADAPTER_TIMEOUT_SECONDS: float = Field(default=30.0)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()


_settings: Optional[Settings] = None

def get_cached_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_cached_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format=settings.LOG_FORMAT
    )

"""Configuration using Pydantic Settings.

Values come from environment variables (``GRAPHWALK_*``) and an optional
``.env`` file in the working directory.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="GRAPHWALK_LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"
    include_timestamp: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


class Settings(BaseSettings):
    """Top-level Graphwalk settings."""

    model_config = SettingsConfigDict(
        env_prefix="GRAPHWALK_",
        env_file=".env",
        extra="ignore",
    )

    default_order: Literal["bfs", "dfs"] = "bfs"
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""Application settings loaded from environment variables.

Hey future me - every section reads its OWN env prefix (CATALOG_, PLAYER_, LOG_).
Nothing here talks to the network; empty base URLs are allowed at load time and
only rejected when a client is actually built (see integrations/base_client.py).
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseSettings):
    """Catalog server connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_", env_file=".env", extra="ignore"
    )

    base_url: str = Field(default="", description="Catalog server root URL")
    timeout: float = Field(default=10.0, gt=0, description="Per-call timeout (s)")
    search_size: int = Field(
        default=30, gt=0, description="Max rows for free-text song search"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")


class PlayerSettings(BaseSettings):
    """Playback server connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="PLAYER_", env_file=".env", extra="ignore"
    )

    base_url: str = Field(default="", description="Player server root URL")
    timeout: float = Field(default=10.0, gt=0, description="Per-call timeout (s)")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")


class LogSettings(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_", env_file=".env", extra="ignore"
    )

    level: str = Field(default="INFO", description="Root log level")
    json_format: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


class Settings(BaseSettings):
    """Top-level settings container."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    player: PlayerSettings = Field(default_factory=PlayerSettings)
    log: LogSettings = Field(default_factory=LogSettings)


# Cached so every module sees the same instance. Tests that tweak the env
# must call get_settings.cache_clear().
@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()

"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.messages import ErrorMessages
from ..domain.shared.validators import validate_discord_snowflake


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    guild_id: int | None = Field(
        default=None, validation_alias=AliasChoices("guild_id", "guild", "guildid")
    )

    @field_validator("guild_id")
    @classmethod
    def validate_guild_id(cls, v: int | None) -> int | None:
        """Validate the command registration guild as a Discord snowflake."""
        if v is None:
            return v
        return validate_discord_snowflake(v)


class LavalinkSettings(BaseModel):
    """Lavalink audio node configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    uri: str = Field(
        default="http://localhost:2333",
        validation_alias=AliasChoices("uri", "rest_uri", "url"),
    )
    password: SecretStr = Field(
        default=SecretStr("youshallnotpass"),
        validation_alias=AliasChoices("password", "authorization"),
    )
    identifier: str = Field(default="main", min_length=1)
    inactive_player_timeout: int | None = Field(default=300, ge=1)

    @field_validator("uri")
    @classmethod
    def validate_uri(cls, v: str) -> str:
        """Lavalink v4 nodes are addressed by their HTTP base URI."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(ErrorMessages.INVALID_LAVALINK_URI)
        return v.rstrip("/")


class StartupSettings(BaseModel):
    """Process lifecycle configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    ready_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        le=600.0,
        validation_alias=AliasChoices("ready_timeout_seconds", "ready_timeout"),
    )
    shutdown_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        le=300.0,
        validation_alias=AliasChoices("shutdown_timeout_seconds", "shutdown_timeout"),
    )


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, DISCORD__GUILD_ID
    - LAVALINK__URI, LAVALINK__PASSWORD, LAVALINK__IDENTIFIER
    - STARTUP__READY_TIMEOUT_SECONDS, STARTUP__SHUTDOWN_TIMEOUT_SECONDS
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    log_level: str = "INFO"

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    lavalink: LavalinkSettings = Field(default_factory=LavalinkSettings)
    startup: StartupSettings = Field(default_factory=StartupSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels)
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()

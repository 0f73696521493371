"""Decoded interaction request and the typed arguments of each command."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lavalink_music_bot.domain.music.value_objects import TrackSearchMode
from lavalink_music_bot.domain.shared.types import DiscordSnowflake, NonEmptyStr

OptionValue = str | int | float | bool


class InteractionRequest(BaseModel):
    """One slash-command invocation as received from the gateway."""

    model_config = ConfigDict(frozen=True)

    command_name: NonEmptyStr
    user_id: DiscordSnowflake
    guild_id: DiscordSnowflake | None = None
    user_voice_channel_id: DiscordSnowflake | None = None
    options: dict[str, OptionValue] = Field(default_factory=dict)

    @property
    def in_guild(self) -> bool:
        return self.guild_id is not None


class NoArguments(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class PlayArguments(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    query: NonEmptyStr
    source: TrackSearchMode = TrackSearchMode.YOUTUBE

    @field_validator("query", mode="before")
    @classmethod
    def _strip_query(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("source", mode="before")
    @classmethod
    def _lenient_source(cls, v: object) -> object:
        if v is None or isinstance(v, str):
            return TrackSearchMode.from_source(v)
        return v


class VolumeArguments(BaseModel):
    """Volume level is range-checked by the handler so it can answer with the valid range."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    level: int = 50

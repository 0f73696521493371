"""Immutable value objects for the music context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import ClassVar

from lavalink_music_bot.domain.shared.exceptions import ValidationError
from lavalink_music_bot.domain.shared.messages import DiscordUIMessages, ErrorMessages
from lavalink_music_bot.utils.reply import format_timestamp


class TrackSearchMode(StrEnum):
    """Streaming platform searched when a query is not a direct URL."""

    YOUTUBE = "youtube"
    SOUNDCLOUD = "soundcloud"
    SPOTIFY = "spotify"

    @classmethod
    def from_source(cls, source: str | None) -> TrackSearchMode:
        """Map a user-supplied source name to a search mode, defaulting to YouTube."""
        if not source:
            return cls.YOUTUBE
        try:
            return cls(source.strip().lower())
        except ValueError:
            return cls.YOUTUBE


class PlayerState(Enum):
    DISCONNECTED = "disconnected"
    NOT_PLAYING = "not_playing"
    PLAYING = "playing"
    PAUSED = "paused"


class PlayerChannelBehavior(Enum):
    """Whether retrieving a player may join the caller's voice channel."""

    JOIN = "join"
    NONE = "none"


class GuardFailure(Enum):
    """Reasons the player guard refuses to hand out a player."""

    USER_NOT_IN_VOICE_CHANNEL = "user_not_in_voice_channel"
    BOT_NOT_CONNECTED = "bot_not_connected"
    UNKNOWN = "unknown"

    @property
    def message(self) -> str:
        return _GUARD_FAILURE_MESSAGES[self]


_GUARD_FAILURE_MESSAGES: dict[GuardFailure, str] = {
    GuardFailure.USER_NOT_IN_VOICE_CHANNEL: DiscordUIMessages.GUARD_USER_NOT_IN_VOICE,
    GuardFailure.BOT_NOT_CONNECTED: DiscordUIMessages.GUARD_BOT_NOT_CONNECTED,
    GuardFailure.UNKNOWN: DiscordUIMessages.GUARD_UNKNOWN,
}


@dataclass(frozen=True)
class Volume:
    """Player volume as a whole percentage in [0, 100]."""

    MIN: ClassVar[int] = 0
    MAX: ClassVar[int] = 100

    level: int

    def __post_init__(self) -> None:
        if not self.is_valid(self.level):
            raise ValidationError(
                ErrorMessages.VOLUME_OUT_OF_RANGE.format(
                    minimum=self.MIN, maximum=self.MAX, level=self.level
                ),
                field="level",
            )

    @classmethod
    def is_valid(cls, level: int) -> bool:
        return cls.MIN <= level <= cls.MAX

    @property
    def fraction(self) -> float:
        return self.level / 100

    def __str__(self) -> str:
        return f"{self.level}%"


@dataclass(frozen=True)
class PlaybackPosition:
    """Offset into the current track alongside the track's total length."""

    offset_ms: int
    duration_ms: int

    def format(self) -> str:
        """Render as ``M:SS / MM:SS``."""
        elapsed = format_timestamp(self.offset_ms)
        total = format_timestamp(self.duration_ms, pad_minutes=True)
        return f"{elapsed} / {total}"

"""Core domain entities for the music context."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from lavalink_music_bot.domain.music.value_objects import TrackSearchMode
from lavalink_music_bot.domain.shared.types import NonEmptyStr, NonNegativeInt


class Track(BaseModel):
    """Immutable reference to a track resolved by the audio node."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    identifier: NonEmptyStr
    title: str = ""
    uri: str | None = None
    author: str | None = None
    duration_ms: NonNegativeInt = 0
    source: TrackSearchMode | str | None = None

    # Backend object the audio service plays; opaque to everything else.
    playable: Any = Field(default=None, exclude=True, repr=False)

    @property
    def display_uri(self) -> str:
        return self.uri or self.title or self.identifier

"""Music context: tracks, player state, search modes and guard outcomes."""

from lavalink_music_bot.domain.music.entities import Track
from lavalink_music_bot.domain.music.value_objects import (
    GuardFailure,
    PlaybackPosition,
    PlayerChannelBehavior,
    PlayerState,
    TrackSearchMode,
    Volume,
)

__all__ = [
    "GuardFailure",
    "PlaybackPosition",
    "PlayerChannelBehavior",
    "PlayerState",
    "Track",
    "TrackSearchMode",
    "Volume",
]

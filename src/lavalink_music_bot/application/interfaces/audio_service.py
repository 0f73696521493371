"""Port interfaces for the remote audio node and its per-guild players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lavalink_music_bot.domain.shared.types import DiscordSnowflake, NonEmptyStr, UnitInterval

if TYPE_CHECKING:
    from ...domain.music.entities import Track
    from ...domain.music.value_objects import PlayerState, TrackSearchMode


class PlayerHandle(ABC):
    """Borrowed reference to a guild's player, valid for a single interaction.

    The audio service owns the player and serializes access to it; callers
    must not keep a handle beyond the interaction that acquired it.
    """

    @property
    @abstractmethod
    def guild_id(self) -> DiscordSnowflake:
        ...

    @property
    @abstractmethod
    def state(self) -> PlayerState:
        ...

    @property
    @abstractmethod
    def current_track(self) -> Track | None:
        """The queue head currently loaded into the player, if any."""
        ...

    @property
    @abstractmethod
    def position(self) -> int:
        """Playback offset into the current track, in milliseconds."""
        ...

    @abstractmethod
    async def play(self, track: Track) -> int:
        """Play *track* now or enqueue it.

        Returns 0 when playback started immediately, otherwise the track's
        1-based position in the queue.
        """
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Halt playback and clear the current track."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Leave the voice channel and destroy the player."""
        ...

    @abstractmethod
    async def set_volume(self, volume: UnitInterval) -> None:
        """Set the volume as a fraction in [0.0, 1.0]."""
        ...

    @abstractmethod
    async def skip(self) -> Track | None:
        """Advance to the next queued track and return it, or None if the queue is empty."""
        ...

    @abstractmethod
    async def pause(self) -> None:
        ...

    @abstractmethod
    async def resume(self) -> None:
        ...


class AudioService(ABC):
    """Interface for the external audio node client."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection to the audio node."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the connection to the audio node."""
        ...

    @abstractmethod
    async def search_track(self, query: NonEmptyStr, mode: TrackSearchMode) -> Track | None:
        """Resolve *query* to a single playable track, or None when nothing matches."""
        ...

    @abstractmethod
    async def get_player(self, guild_id: DiscordSnowflake) -> PlayerHandle | None:
        """Return the guild's existing player without creating one."""
        ...

    @abstractmethod
    async def join_player(
        self, guild_id: DiscordSnowflake, channel_id: DiscordSnowflake
    ) -> PlayerHandle:
        """Return the guild's player, joining *channel_id* to create it when absent."""
        ...

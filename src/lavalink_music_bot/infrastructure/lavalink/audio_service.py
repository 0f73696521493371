"""Lavalink audio service implementing AudioService on top of wavelink."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
import wavelink

from lavalink_music_bot.application.interfaces.audio_service import AudioService, PlayerHandle
from lavalink_music_bot.domain.music.entities import Track
from lavalink_music_bot.domain.music.value_objects import PlayerState, TrackSearchMode
from lavalink_music_bot.domain.shared.exceptions import EntityNotFoundError, InvalidOperationError
from lavalink_music_bot.domain.shared.messages import ErrorMessages, LogTemplates
from lavalink_music_bot.utils.reply import truncate

if TYPE_CHECKING:
    from ...config.settings import LavalinkSettings

logger = logging.getLogger(__name__)

# Spotify search needs the LavaSrc plugin on the node.
SEARCH_SOURCES: dict[TrackSearchMode, wavelink.TrackSource | str] = {
    TrackSearchMode.YOUTUBE: wavelink.TrackSource.YouTube,
    TrackSearchMode.SOUNDCLOUD: wavelink.TrackSource.SoundCloud,
    TrackSearchMode.SPOTIFY: "spsearch",
}


def track_from_playable(playable: wavelink.Playable) -> Track:
    return Track(
        identifier=playable.identifier,
        title=playable.title,
        uri=playable.uri,
        author=playable.author,
        duration_ms=max(playable.length, 0),
        source=playable.source,
        playable=playable,
    )


class WavelinkPlayerHandle(PlayerHandle):
    """Queue-backed view over a ``wavelink.Player``."""

    def __init__(self, player: wavelink.Player) -> None:
        self._player = player

    @property
    def guild_id(self) -> int:
        guild = self._player.guild
        return guild.id if guild is not None else 0

    @property
    def state(self) -> PlayerState:
        if not self._player.connected:
            return PlayerState.DISCONNECTED
        if self._player.paused:
            return PlayerState.PAUSED
        if self._player.playing:
            return PlayerState.PLAYING
        return PlayerState.NOT_PLAYING

    @property
    def current_track(self) -> Track | None:
        current = self._player.current
        return track_from_playable(current) if current is not None else None

    @property
    def position(self) -> int:
        return int(self._player.position or 0)

    async def play(self, track: Track) -> int:
        playable = self._playable(track)
        if self._player.current is not None:
            self._player.queue.put(playable)
            return len(self._player.queue)

        await self._player.play(playable)
        return 0

    async def stop(self) -> None:
        self._player.queue.clear()
        await self._player.stop(force=True)

    async def disconnect(self) -> None:
        await self._player.disconnect()

    async def set_volume(self, volume: float) -> None:
        # Lavalink expresses volume as an integer percentage.
        await self._player.set_volume(round(volume * 100))

    async def skip(self) -> Track | None:
        if self._player.queue.is_empty:
            await self._player.stop(force=True)
            return None

        playable = self._player.queue.get()
        await self._player.play(playable, replace=True)
        return track_from_playable(playable)

    async def pause(self) -> None:
        await self._player.pause(True)

    async def resume(self) -> None:
        await self._player.pause(False)

    @staticmethod
    def _playable(track: Track) -> wavelink.Playable:
        if not isinstance(track.playable, wavelink.Playable):
            raise InvalidOperationError(
                "play", "unresolved", f"Track {track.identifier} was not resolved by Lavalink"
            )
        return track.playable


class WavelinkAudioService(AudioService):
    def __init__(self, client: discord.Client, settings: LavalinkSettings) -> None:
        self._client = client
        self._settings = settings

    async def connect(self) -> None:
        logger.info(LogTemplates.LAVALINK_CONNECTING, self._settings.identifier, self._settings.uri)
        node = wavelink.Node(
            identifier=self._settings.identifier,
            uri=self._settings.uri,
            password=self._settings.password.get_secret_value(),
            inactive_player_timeout=self._settings.inactive_player_timeout,
        )
        await wavelink.Pool.connect(nodes=[node], client=self._client)
        logger.info(LogTemplates.LAVALINK_CONNECTED, self._settings.identifier)

    async def close(self) -> None:
        await wavelink.Pool.close()
        logger.info(LogTemplates.LAVALINK_CLOSED)

    async def search_track(self, query: str, mode: TrackSearchMode) -> Track | None:
        try:
            results = await wavelink.Playable.search(query, source=SEARCH_SOURCES[mode])
        except wavelink.LavalinkLoadException as e:
            logger.warning(LogTemplates.LAVALINK_LOAD_FAILED, truncate(query, 80), e)
            return None

        if isinstance(results, wavelink.Playlist):
            playables = results.tracks
        else:
            playables = results

        if not playables:
            logger.debug(LogTemplates.LAVALINK_NO_RESULTS, truncate(query, 80), mode)
            return None
        return track_from_playable(playables[0])

    async def get_player(self, guild_id: int) -> PlayerHandle | None:
        guild = self._client.get_guild(guild_id)
        if guild is None:
            return None

        voice_client = guild.voice_client
        if not isinstance(voice_client, wavelink.Player):
            return None
        return WavelinkPlayerHandle(voice_client)

    async def join_player(self, guild_id: int, channel_id: int) -> PlayerHandle:
        existing = await self.get_player(guild_id)
        if existing is not None:
            return existing

        guild = self._client.get_guild(guild_id)
        if guild is None:
            raise EntityNotFoundError(
                "Guild", guild_id, ErrorMessages.GUILD_NOT_FOUND.format(guild_id=guild_id)
            )

        channel = guild.get_channel(channel_id)
        if not isinstance(channel, discord.VoiceChannel | discord.StageChannel):
            raise EntityNotFoundError(
                "VoiceChannel",
                channel_id,
                ErrorMessages.CHANNEL_NOT_VOICE.format(channel_id=channel_id),
            )

        player = await channel.connect(cls=wavelink.Player, self_deaf=True)
        player.autoplay = wavelink.AutoPlayMode.partial
        logger.info(LogTemplates.PLAYER_JOINED, channel.name, guild_id)
        return WavelinkPlayerHandle(player)

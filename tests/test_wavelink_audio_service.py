"""Tests for the wavelink-backed AudioService and PlayerHandle."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import discord
import pytest
import wavelink
from pydantic import SecretStr

from lavalink_music_bot.config.settings import LavalinkSettings
from lavalink_music_bot.domain.music.value_objects import PlayerState, TrackSearchMode
from lavalink_music_bot.domain.shared.exceptions import (
    EntityNotFoundError,
    InvalidOperationError,
)
from lavalink_music_bot.infrastructure.lavalink.audio_service import (
    SEARCH_SOURCES,
    WavelinkAudioService,
    WavelinkPlayerHandle,
    track_from_playable,
)

GUILD_ID = 111111111111111111
VOICE_CHANNEL_ID = 333333333333333333


class _LoadError(wavelink.LavalinkLoadException):
    def __init__(self) -> None:
        Exception.__init__(self, "load failed")


def _playable(identifier: str = "abc123", length: int = 180_000) -> MagicMock:
    playable = MagicMock(spec=wavelink.Playable)
    playable.identifier = identifier
    playable.title = f"Track {identifier}"
    playable.uri = f"https://youtube.com/watch?v={identifier}"
    playable.author = "Artist"
    playable.length = length
    playable.source = "youtube"
    return playable


def _player(
    *,
    connected: bool = True,
    paused: bool = False,
    playing: bool = False,
    current=None,
    queue_items: list | None = None,
) -> MagicMock:
    player = MagicMock(spec=wavelink.Player)
    player.guild = MagicMock()
    player.guild.id = GUILD_ID
    player.connected = connected
    player.paused = paused
    player.playing = playing
    player.current = current
    player.position = 0
    player.play = AsyncMock()
    player.stop = AsyncMock()
    player.pause = AsyncMock()
    player.set_volume = AsyncMock()
    player.disconnect = AsyncMock()

    items = list(queue_items or [])
    queue = MagicMock()
    queue.put = MagicMock(side_effect=items.append)
    queue.get = MagicMock(side_effect=lambda: items.pop(0))
    queue.clear = MagicMock(side_effect=items.clear)
    type(queue).is_empty = property(lambda self: not items)
    queue.__len__ = lambda self: len(items)
    player.queue = queue
    return player


def _client(guild=None) -> MagicMock:
    client = MagicMock(spec=discord.Client)
    client.get_guild = MagicMock(return_value=guild)
    return client


# =============================================================================
# Track mapping
# =============================================================================


class TestTrackFromPlayable:
    def test_maps_fields(self):
        playable = _playable("xyz")

        track = track_from_playable(playable)

        assert track.identifier == "xyz"
        assert track.uri == "https://youtube.com/watch?v=xyz"
        assert track.duration_ms == 180_000
        assert track.playable is playable

    def test_stream_length_clamped(self):
        assert track_from_playable(_playable(length=-1)).duration_ms == 0

    def test_search_sources(self):
        assert SEARCH_SOURCES[TrackSearchMode.YOUTUBE] is wavelink.TrackSource.YouTube
        assert SEARCH_SOURCES[TrackSearchMode.SOUNDCLOUD] is wavelink.TrackSource.SoundCloud
        assert SEARCH_SOURCES[TrackSearchMode.SPOTIFY] == "spsearch"


# =============================================================================
# WavelinkPlayerHandle
# =============================================================================


class TestPlayerHandleState:
    @pytest.mark.parametrize(
        ("flags", "expected"),
        [
            ({"connected": False}, PlayerState.DISCONNECTED),
            ({"paused": True, "playing": True}, PlayerState.PAUSED),
            ({"playing": True}, PlayerState.PLAYING),
            ({}, PlayerState.NOT_PLAYING),
        ],
    )
    def test_state(self, flags, expected):
        assert WavelinkPlayerHandle(_player(**flags)).state is expected

    def test_current_track_and_position(self):
        player = _player(current=_playable("now"))
        player.position = 12_345.0

        handle = WavelinkPlayerHandle(player)

        assert handle.current_track.identifier == "now"
        assert handle.position == 12_345
        assert handle.guild_id == GUILD_ID

    def test_no_current_track(self):
        assert WavelinkPlayerHandle(_player()).current_track is None


class TestPlayerHandlePlayback:
    @pytest.mark.asyncio
    async def test_play_starts_when_idle(self):
        player = _player()
        track = track_from_playable(_playable())

        position = await WavelinkPlayerHandle(player).play(track)

        assert position == 0
        player.play.assert_awaited_once_with(track.playable)
        player.queue.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_play_enqueues_when_busy(self):
        player = _player(current=_playable("now"), queue_items=["queued"])
        track = track_from_playable(_playable("later"))

        position = await WavelinkPlayerHandle(player).play(track)

        assert position == 2
        player.queue.put.assert_called_once_with(track.playable)
        player.play.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_play_requires_resolved_track(self, sample_track):
        with pytest.raises(InvalidOperationError):
            await WavelinkPlayerHandle(_player()).play(sample_track)

    @pytest.mark.asyncio
    async def test_stop_clears_queue(self):
        player = _player(current=_playable(), queue_items=["a", "b"])

        await WavelinkPlayerHandle(player).stop()

        player.queue.clear.assert_called_once()
        player.stop.assert_awaited_once_with(force=True)

    @pytest.mark.asyncio
    async def test_skip_plays_next(self):
        upcoming = _playable("next")
        player = _player(current=_playable("now"), queue_items=[upcoming])

        track = await WavelinkPlayerHandle(player).skip()

        assert track.identifier == "next"
        player.play.assert_awaited_once_with(upcoming, replace=True)

    @pytest.mark.asyncio
    async def test_skip_with_empty_queue_stops(self):
        player = _player(current=_playable("now"))

        assert await WavelinkPlayerHandle(player).skip() is None
        player.stop.assert_awaited_once_with(force=True)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("fraction", "percent"), [(0.0, 0), (0.42, 42), (1.0, 100)])
    async def test_set_volume_percent(self, fraction, percent):
        player = _player()

        await WavelinkPlayerHandle(player).set_volume(fraction)

        player.set_volume.assert_awaited_once_with(percent)

    @pytest.mark.asyncio
    async def test_pause_and_resume(self):
        player = _player(playing=True)
        handle = WavelinkPlayerHandle(player)

        await handle.pause()
        await handle.resume()

        assert [c.args for c in player.pause.await_args_list] == [(True,), (False,)]

    @pytest.mark.asyncio
    async def test_disconnect(self):
        player = _player()

        await WavelinkPlayerHandle(player).disconnect()

        player.disconnect.assert_awaited_once()


# =============================================================================
# WavelinkAudioService
# =============================================================================


@pytest.fixture
def lavalink_settings() -> LavalinkSettings:
    return LavalinkSettings(
        uri="http://lavalink:2333", password=SecretStr("pw"), identifier="node-1"
    )


class TestNodeConnection:
    @pytest.mark.asyncio
    async def test_connect(self, lavalink_settings):
        client = _client()
        service = WavelinkAudioService(client, lavalink_settings)

        with (
            patch.object(wavelink, "Node") as mock_node,
            patch.object(wavelink.Pool, "connect", new_callable=AsyncMock) as mock_connect,
        ):
            await service.connect()

        mock_node.assert_called_once_with(
            identifier="node-1",
            uri="http://lavalink:2333",
            password="pw",
            inactive_player_timeout=300,
        )
        mock_connect.assert_awaited_once_with(nodes=[mock_node.return_value], client=client)

    @pytest.mark.asyncio
    async def test_close(self, lavalink_settings):
        service = WavelinkAudioService(_client(), lavalink_settings)

        with patch.object(wavelink.Pool, "close", new_callable=AsyncMock) as mock_close:
            await service.close()

        mock_close.assert_awaited_once()


class TestSearch:
    @pytest.mark.asyncio
    async def test_returns_first_result(self, lavalink_settings):
        service = WavelinkAudioService(_client(), lavalink_settings)
        results = [_playable("first"), _playable("second")]

        with patch.object(
            wavelink.Playable, "search", new_callable=AsyncMock, return_value=results
        ) as mock_search:
            track = await service.search_track("song", TrackSearchMode.SOUNDCLOUD)

        assert track.identifier == "first"
        mock_search.assert_awaited_once_with("song", source=wavelink.TrackSource.SoundCloud)

    @pytest.mark.asyncio
    async def test_playlist_uses_first_track(self, lavalink_settings):
        service = WavelinkAudioService(_client(), lavalink_settings)
        playlist = MagicMock(spec=wavelink.Playlist)
        playlist.tracks = [_playable("pl-1"), _playable("pl-2")]

        with patch.object(
            wavelink.Playable, "search", new_callable=AsyncMock, return_value=playlist
        ):
            track = await service.search_track(
                "https://youtube.com/playlist?list=x", TrackSearchMode.YOUTUBE
            )

        assert track.identifier == "pl-1"

    @pytest.mark.asyncio
    async def test_no_results(self, lavalink_settings):
        service = WavelinkAudioService(_client(), lavalink_settings)

        with patch.object(wavelink.Playable, "search", new_callable=AsyncMock, return_value=[]):
            assert await service.search_track("nothing", TrackSearchMode.SPOTIFY) is None

    @pytest.mark.asyncio
    async def test_load_failure_is_no_result(self, lavalink_settings):
        service = WavelinkAudioService(_client(), lavalink_settings)

        with patch.object(
            wavelink.Playable, "search", new_callable=AsyncMock, side_effect=_LoadError()
        ):
            assert await service.search_track("broken", TrackSearchMode.YOUTUBE) is None


class TestPlayerLookup:
    @pytest.mark.asyncio
    async def test_get_player_unknown_guild(self, lavalink_settings):
        service = WavelinkAudioService(_client(None), lavalink_settings)

        assert await service.get_player(GUILD_ID) is None

    @pytest.mark.asyncio
    async def test_get_player_not_connected(self, lavalink_settings):
        guild = MagicMock()
        guild.voice_client = None
        service = WavelinkAudioService(_client(guild), lavalink_settings)

        assert await service.get_player(GUILD_ID) is None

    @pytest.mark.asyncio
    async def test_get_player_wraps_wavelink_player(self, lavalink_settings):
        guild = MagicMock()
        guild.voice_client = _player()
        service = WavelinkAudioService(_client(guild), lavalink_settings)

        handle = await service.get_player(GUILD_ID)

        assert isinstance(handle, WavelinkPlayerHandle)
        assert handle.guild_id == GUILD_ID


class TestJoinPlayer:
    @pytest.mark.asyncio
    async def test_joins_voice_channel(self, lavalink_settings):
        player = _player()
        channel = MagicMock(spec=discord.VoiceChannel)
        channel.name = "General"
        channel.connect = AsyncMock(return_value=player)
        guild = MagicMock()
        guild.voice_client = None
        guild.get_channel = MagicMock(return_value=channel)
        service = WavelinkAudioService(_client(guild), lavalink_settings)

        handle = await service.join_player(GUILD_ID, VOICE_CHANNEL_ID)

        assert isinstance(handle, WavelinkPlayerHandle)
        guild.get_channel.assert_called_once_with(VOICE_CHANNEL_ID)
        channel.connect.assert_awaited_once_with(cls=wavelink.Player, self_deaf=True)
        assert player.autoplay == wavelink.AutoPlayMode.partial

    @pytest.mark.asyncio
    async def test_existing_player_reused(self, lavalink_settings):
        guild = MagicMock()
        guild.voice_client = _player()
        service = WavelinkAudioService(_client(guild), lavalink_settings)

        await service.join_player(GUILD_ID, VOICE_CHANNEL_ID)

        guild.get_channel.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_guild(self, lavalink_settings):
        service = WavelinkAudioService(_client(None), lavalink_settings)

        with pytest.raises(EntityNotFoundError):
            await service.join_player(GUILD_ID, VOICE_CHANNEL_ID)

    @pytest.mark.asyncio
    async def test_channel_is_not_voice(self, lavalink_settings):
        guild = MagicMock()
        guild.voice_client = None
        guild.get_channel = MagicMock(return_value=MagicMock(spec=discord.TextChannel))
        service = WavelinkAudioService(_client(guild), lavalink_settings)

        with pytest.raises(EntityNotFoundError):
            await service.join_player(GUILD_ID, VOICE_CHANNEL_ID)

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from lavalink_music_bot.application.interfaces.audio_service import AudioService, PlayerHandle
from lavalink_music_bot.application.interfaces.responder import InteractionResponder
from lavalink_music_bot.domain.music.entities import Track
from lavalink_music_bot.domain.music.value_objects import PlayerState

GUILD_ID = 111111111111111111


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


def make_track(identifier: str = "abc123", **overrides) -> Track:
    data = {
        "identifier": identifier,
        "title": "Test Track",
        "uri": f"https://youtube.com/watch?v={identifier}",
        "author": "Test Artist",
        "duration_ms": 180_000,
        "source": "youtube",
    }
    data.update(overrides)
    return Track(**data)


@pytest.fixture
def sample_track() -> Track:
    """Create a sample track for testing."""
    return make_track()


@pytest.fixture
def track_factory():
    return make_track


# ============================================================================
# Port Fixtures
# ============================================================================


def make_player(
    *,
    state: PlayerState = PlayerState.NOT_PLAYING,
    current_track: Track | None = None,
    position: int = 0,
    play_returns: int = 0,
    skip_returns: Track | None = None,
) -> MagicMock:
    player = MagicMock(spec=PlayerHandle)
    player.guild_id = GUILD_ID
    player.state = state
    player.current_track = current_track
    player.position = position
    player.play = AsyncMock(return_value=play_returns)
    player.stop = AsyncMock()
    player.disconnect = AsyncMock()
    player.set_volume = AsyncMock()
    player.skip = AsyncMock(return_value=skip_returns)
    player.pause = AsyncMock()
    player.resume = AsyncMock()
    return player


@pytest.fixture
def player_factory():
    return make_player


@pytest.fixture
def player() -> MagicMock:
    return make_player()


@pytest.fixture
def audio_service(player) -> MagicMock:
    """AudioService whose guild already has a connected player."""
    service = MagicMock(spec=AudioService)
    service.connect = AsyncMock()
    service.close = AsyncMock()
    service.search_track = AsyncMock(return_value=None)
    service.get_player = AsyncMock(return_value=player)
    service.join_player = AsyncMock(return_value=player)
    return service


@pytest.fixture
def responder() -> MagicMock:
    mock = MagicMock(spec=InteractionResponder)
    mock.defer = AsyncMock()
    mock.respond = AsyncMock()
    mock.follow_up = AsyncMock()
    return mock


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def settings():
    """Settings built without reading the process environment or .env file."""
    from lavalink_music_bot.config.settings import Settings

    return Settings(
        _env_file=None,
        environment="test",
        discord={"token": "test-token", "guild_id": GUILD_ID},
        startup={"ready_timeout_seconds": 0.2, "shutdown_timeout_seconds": 1.0},
    )

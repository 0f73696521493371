"""Port interfaces implemented by the infrastructure layer."""

from lavalink_music_bot.application.interfaces.audio_service import AudioService, PlayerHandle
from lavalink_music_bot.application.interfaces.responder import InteractionResponder

__all__ = ["AudioService", "InteractionResponder", "PlayerHandle"]

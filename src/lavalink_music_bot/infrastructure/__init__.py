"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Discord (bot, cog, interaction adapter, lifecycle supervisor)
- Lavalink (wavelink node pool and player handles)
"""

from lavalink_music_bot.infrastructure.discord.bot import create_bot
from lavalink_music_bot.infrastructure.discord.lifecycle import LifecycleSupervisor
from lavalink_music_bot.infrastructure.lavalink.audio_service import WavelinkAudioService

__all__ = [
    "create_bot",
    "LifecycleSupervisor",
    "WavelinkAudioService",
]

"""Discord cogs - slash-command surface."""

from lavalink_music_bot.infrastructure.discord.cogs.music_cog import MusicCog

__all__ = ["MusicCog"]

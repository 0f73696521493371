"""Slash-command cog forwarding every music command to the command router."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

import discord
from discord import app_commands
from discord.ext import commands

from lavalink_music_bot.application.services.command_router import COMMANDS
from lavalink_music_bot.domain.shared.messages import ErrorMessages
from lavalink_music_bot.infrastructure.discord.adapters.interaction_adapter import (
    DiscordInteractionResponder,
    to_interaction_request,
)

if TYPE_CHECKING:
    from ....config.container import Container

SourceChoice = Literal["youtube", "soundcloud", "spotify"]


class MusicCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def _dispatch(
        self, interaction: discord.Interaction, command_name: str, **options: Any
    ) -> None:
        request = to_interaction_request(interaction, command_name, **options)
        await self.container.command_router.dispatch(
            request, DiscordInteractionResponder(interaction)
        )

    @app_commands.command(name="play", description=COMMANDS["play"].description)
    @app_commands.describe(
        query="Search query or direct URL",
        source="The source to search (youtube, soundcloud, spotify)",
    )
    @app_commands.guild_only()
    async def play(
        self,
        interaction: discord.Interaction,
        query: str,
        source: SourceChoice = "youtube",
    ) -> None:
        await self._dispatch(interaction, "play", query=query, source=source)

    @app_commands.command(name="position", description=COMMANDS["position"].description)
    @app_commands.guild_only()
    async def position(self, interaction: discord.Interaction) -> None:
        await self._dispatch(interaction, "position")

    @app_commands.command(name="stop", description=COMMANDS["stop"].description)
    @app_commands.guild_only()
    async def stop(self, interaction: discord.Interaction) -> None:
        await self._dispatch(interaction, "stop")

    @app_commands.command(name="disconnect", description=COMMANDS["disconnect"].description)
    @app_commands.guild_only()
    async def disconnect(self, interaction: discord.Interaction) -> None:
        await self._dispatch(interaction, "disconnect")

    @app_commands.command(name="volume", description=COMMANDS["volume"].description)
    @app_commands.describe(volume="Volume level between 0 and 100")
    @app_commands.guild_only()
    async def volume(self, interaction: discord.Interaction, volume: int = 50) -> None:
        await self._dispatch(interaction, "volume", level=volume)

    @app_commands.command(name="skip", description=COMMANDS["skip"].description)
    @app_commands.guild_only()
    async def skip(self, interaction: discord.Interaction) -> None:
        await self._dispatch(interaction, "skip")

    @app_commands.command(name="pause", description=COMMANDS["pause"].description)
    @app_commands.guild_only()
    async def pause(self, interaction: discord.Interaction) -> None:
        await self._dispatch(interaction, "pause")

    @app_commands.command(name="resume", description=COMMANDS["resume"].description)
    @app_commands.guild_only()
    async def resume(self, interaction: discord.Interaction) -> None:
        await self._dispatch(interaction, "resume")


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(MusicCog(bot, container))

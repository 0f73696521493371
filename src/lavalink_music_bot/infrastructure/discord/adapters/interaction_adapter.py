"""Bridges ``discord.Interaction`` to the application's request and responder types."""

from __future__ import annotations

from typing import Any

import discord

from lavalink_music_bot.application.commands.arguments import InteractionRequest
from lavalink_music_bot.application.interfaces.responder import InteractionResponder


class DiscordInteractionResponder(InteractionResponder):
    def __init__(self, interaction: discord.Interaction) -> None:
        self._interaction = interaction

    async def defer(self) -> None:
        await self._interaction.response.defer()

    async def respond(self, text: str) -> None:
        await self._interaction.response.send_message(text)

    async def follow_up(self, text: str) -> None:
        await self._interaction.followup.send(text)


def user_voice_channel_id(interaction: discord.Interaction) -> int | None:
    """Voice channel the invoking member is in, or None outside voice or guilds."""
    user = interaction.user
    if not isinstance(user, discord.Member):
        return None

    voice = user.voice
    if voice is None or voice.channel is None:
        return None
    return voice.channel.id


def to_interaction_request(
    interaction: discord.Interaction,
    command_name: str,
    **options: Any,
) -> InteractionRequest:
    return InteractionRequest(
        command_name=command_name,
        user_id=interaction.user.id,
        guild_id=interaction.guild_id,
        user_voice_channel_id=user_voice_channel_id(interaction),
        options={name: value for name, value in options.items() if value is not None},
    )

"""Slash-command requests, typed arguments and handlers."""

from lavalink_music_bot.application.commands.arguments import (
    InteractionRequest,
    NoArguments,
    PlayArguments,
    VolumeArguments,
)

__all__ = [
    "InteractionRequest",
    "NoArguments",
    "PlayArguments",
    "VolumeArguments",
]

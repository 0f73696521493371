"""Command routing: interaction -> handler -> exactly one reply.

Commands are registered in an explicit table. Each entry names the pydantic
model its options decode into and whether the platform acknowledgement must be
deferred before the handler runs. Handlers for different interactions run
concurrently; the router keeps no mutable state between dispatches.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from lavalink_music_bot.application.commands import handlers
from lavalink_music_bot.application.commands.arguments import (
    NoArguments,
    PlayArguments,
    VolumeArguments,
)
from lavalink_music_bot.domain.shared.exceptions import InvalidOperationError
from lavalink_music_bot.domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from ..commands.arguments import InteractionRequest
    from ..interfaces.audio_service import AudioService
    from ..interfaces.responder import InteractionResponder
    from .player_guard import GuildPlayerGuard

logger = logging.getLogger(__name__)

Handler = Callable[["CommandContext", Any], Awaitable[str]]


@dataclass(frozen=True)
class CommandContext:
    """Per-interaction collaborators passed to a handler."""

    request: InteractionRequest
    guard: GuildPlayerGuard
    audio_service: AudioService


@dataclass(frozen=True)
class CommandEntry:
    name: str
    description: str
    arguments: type[BaseModel]
    handler: Handler
    defer: bool = False


COMMANDS: Mapping[str, CommandEntry] = {
    entry.name: entry
    for entry in (
        CommandEntry("play", "Plays music", PlayArguments, handlers.handle_play, defer=True),
        CommandEntry("position", "Shows the track position", NoArguments, handlers.handle_position),
        CommandEntry("stop", "Stops the current track", NoArguments, handlers.handle_stop),
        CommandEntry(
            "disconnect",
            "Disconnects from the current voice channel connected to",
            NoArguments,
            handlers.handle_disconnect,
        ),
        CommandEntry(
            "volume",
            "Sets the player volume, possible values are: 0 - 100",
            VolumeArguments,
            handlers.handle_volume,
        ),
        CommandEntry("skip", "Skips the current track", NoArguments, handlers.handle_skip),
        CommandEntry("pause", "Pauses the player.", NoArguments, handlers.handle_pause),
        CommandEntry("resume", "Resumes the player.", NoArguments, handlers.handle_resume),
    )
}


class ReplyGate:
    """Allows at most one terminal reply per interaction.

    ``send`` answers with a follow-up when the interaction was deferred and with
    an immediate response otherwise.
    """

    def __init__(self, responder: InteractionResponder) -> None:
        self._responder = responder
        self._deferred = False
        self._replied = False

    @property
    def deferred(self) -> bool:
        return self._deferred

    @property
    def replied(self) -> bool:
        return self._replied

    async def defer(self) -> None:
        if self._deferred or self._replied:
            raise InvalidOperationError("defer", self._state())
        await self._responder.defer()
        self._deferred = True

    async def send(self, text: str) -> None:
        if self._replied:
            raise InvalidOperationError("reply", self._state())
        # Marked before awaiting so a concurrent second send is refused too.
        self._replied = True
        if self._deferred:
            await self._responder.follow_up(text)
        else:
            await self._responder.respond(text)

    def _state(self) -> str:
        if self._replied:
            return "replied"
        return "deferred" if self._deferred else "pending"


class CommandRouter:
    def __init__(
        self,
        guard: GuildPlayerGuard,
        audio_service: AudioService,
        commands: Mapping[str, CommandEntry] = COMMANDS,
    ) -> None:
        self._guard = guard
        self._audio_service = audio_service
        self._commands = commands

    @property
    def commands(self) -> Mapping[str, CommandEntry]:
        return self._commands

    async def dispatch(self, request: InteractionRequest, responder: InteractionResponder) -> None:
        """Run the command for *request* and deliver its single reply through *responder*.

        Never raises: handler and delivery failures are logged and, where a reply
        is still possible, answered with a generic message.
        """
        gate = ReplyGate(responder)
        text = await self._execute(request, gate)

        try:
            await gate.send(text)
        except Exception:
            logger.exception(LogTemplates.REPLY_SEND_FAILED, request.command_name)

    async def _execute(self, request: InteractionRequest, gate: ReplyGate) -> str:
        entry = self._commands.get(request.command_name)
        if entry is None:
            logger.warning(LogTemplates.COMMAND_UNKNOWN, request.command_name)
            return DiscordUIMessages.ERROR_UNKNOWN

        if not request.in_guild:
            logger.debug(LogTemplates.COMMAND_NO_GUILD, request.command_name)
            return DiscordUIMessages.STATE_SERVER_ONLY

        logger.debug(
            LogTemplates.COMMAND_DISPATCH, request.command_name, request.user_id, request.guild_id
        )

        context = CommandContext(
            request=request, guard=self._guard, audio_service=self._audio_service
        )
        try:
            if entry.defer:
                await gate.defer()
            arguments = entry.arguments.model_validate(request.options)
            return await entry.handler(context, arguments)
        except Exception:
            logger.exception(LogTemplates.COMMAND_FAILED, request.command_name)
            return DiscordUIMessages.ERROR_UNKNOWN

"""Precondition checks in front of the audio service's player lookup."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lavalink_music_bot.domain.music.value_objects import GuardFailure, PlayerChannelBehavior
from lavalink_music_bot.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..interfaces.audio_service import AudioService, PlayerHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerRetrieveResult:
    """Outcome of a guard check: a borrowed player or the reason there is none."""

    player: PlayerHandle | None = None
    failure: GuardFailure | None = None

    @property
    def is_success(self) -> bool:
        return self.player is not None and self.failure is None

    @classmethod
    def success(cls, player: PlayerHandle) -> PlayerRetrieveResult:
        return cls(player=player)

    @classmethod
    def failed(cls, failure: GuardFailure) -> PlayerRetrieveResult:
        return cls(failure=failure)


class GuildPlayerGuard:
    """Hands out a guild's player only when the command's preconditions hold.

    Consulted once per interaction. A failure is terminal for that interaction;
    nothing is retried.
    """

    def __init__(self, audio_service: AudioService) -> None:
        self._audio_service = audio_service

    async def acquire(
        self,
        guild_id: int,
        user_voice_channel_id: int | None,
        *,
        join_if_absent: bool,
    ) -> PlayerRetrieveResult:
        behavior = PlayerChannelBehavior.JOIN if join_if_absent else PlayerChannelBehavior.NONE

        if behavior is PlayerChannelBehavior.JOIN and user_voice_channel_id is None:
            return self._reject(guild_id, GuardFailure.USER_NOT_IN_VOICE_CHANNEL)

        try:
            player = await self._audio_service.get_player(guild_id)
            if player is None:
                # A join request without a voice channel was rejected above.
                if behavior is PlayerChannelBehavior.NONE or user_voice_channel_id is None:
                    return self._reject(guild_id, GuardFailure.BOT_NOT_CONNECTED)
                player = await self._audio_service.join_player(guild_id, user_voice_channel_id)
        except Exception:
            logger.exception(LogTemplates.GUARD_BACKEND_ERROR, guild_id)
            return PlayerRetrieveResult.failed(GuardFailure.UNKNOWN)

        return PlayerRetrieveResult.success(player)

    @staticmethod
    def _reject(guild_id: int, failure: GuardFailure) -> PlayerRetrieveResult:
        logger.debug(LogTemplates.GUARD_REJECTED, guild_id, failure.value)
        return PlayerRetrieveResult.failed(failure)

"""Handlers for each slash command.

Every handler returns the text of the single terminal reply; the router is
responsible for delivering it. The guard check always precedes the backend
operation, and validation that needs no player precedes the guard.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lavalink_music_bot.domain.music.value_objects import PlaybackPosition, PlayerState, Volume
from lavalink_music_bot.domain.shared.exceptions import InvalidOperationError
from lavalink_music_bot.domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from ..services.command_router import CommandContext
    from ..services.player_guard import PlayerRetrieveResult
    from .arguments import NoArguments, PlayArguments, VolumeArguments

logger = logging.getLogger(__name__)


async def _acquire(ctx: CommandContext, *, join: bool = False) -> PlayerRetrieveResult:
    request = ctx.request
    if request.guild_id is None:
        raise InvalidOperationError("acquire_player", "outside_guild")
    return await ctx.guard.acquire(
        request.guild_id,
        request.user_voice_channel_id,
        join_if_absent=join,
    )


async def handle_play(ctx: CommandContext, args: PlayArguments) -> str:
    result = await _acquire(ctx, join=True)
    if not result.is_success:
        return result.failure.message

    player = result.player
    track = await ctx.audio_service.search_track(args.query, args.source)
    if track is None:
        return DiscordUIMessages.PLAY_NO_RESULTS

    position = await player.play(track)
    if position == 0:
        logger.info(LogTemplates.PLAYER_STARTED, track.display_uri, player.guild_id)
        return DiscordUIMessages.PLAY_STARTED.format(uri=track.uri or "")

    logger.info(LogTemplates.PLAYER_QUEUED, track.display_uri, position, player.guild_id)
    return DiscordUIMessages.PLAY_QUEUED.format(uri=track.uri or "")


async def handle_position(ctx: CommandContext, args: NoArguments) -> str:
    result = await _acquire(ctx)
    if not result.is_success:
        return result.failure.message

    track = result.player.current_track
    if track is None:
        return DiscordUIMessages.STATE_NOTHING_PLAYING

    position = PlaybackPosition(offset_ms=result.player.position, duration_ms=track.duration_ms)
    return DiscordUIMessages.POSITION.format(position=position.format())


async def handle_stop(ctx: CommandContext, args: NoArguments) -> str:
    result = await _acquire(ctx)
    if not result.is_success:
        return result.failure.message

    player = result.player
    if player.current_track is None:
        return DiscordUIMessages.STATE_NOTHING_PLAYING

    await player.stop()
    logger.info(LogTemplates.PLAYER_STOPPED, player.guild_id)
    return DiscordUIMessages.ACTION_STOPPED


async def handle_disconnect(ctx: CommandContext, args: NoArguments) -> str:
    result = await _acquire(ctx)
    if not result.is_success:
        return result.failure.message

    await result.player.disconnect()
    logger.info(LogTemplates.PLAYER_DISCONNECTED, result.player.guild_id)
    return DiscordUIMessages.ACTION_DISCONNECTED


async def handle_volume(ctx: CommandContext, args: VolumeArguments) -> str:
    if not Volume.is_valid(args.level):
        return DiscordUIMessages.VOLUME_OUT_OF_RANGE

    result = await _acquire(ctx)
    if not result.is_success:
        return result.failure.message

    volume = Volume(args.level)
    await result.player.set_volume(volume.fraction)
    logger.info(LogTemplates.PLAYER_VOLUME_SET, volume, result.player.guild_id)
    return DiscordUIMessages.VOLUME_UPDATED.format(level=volume.level)


async def handle_skip(ctx: CommandContext, args: NoArguments) -> str:
    result = await _acquire(ctx)
    if not result.is_success:
        return result.failure.message

    player = result.player
    if player.current_track is None:
        return DiscordUIMessages.STATE_NOTHING_CURRENTLY_PLAYING

    next_track = await player.skip()
    logger.info(
        LogTemplates.PLAYER_SKIPPED,
        player.guild_id,
        next_track.display_uri if next_track else None,
    )
    if next_track is None:
        return DiscordUIMessages.ACTION_SKIPPED_QUEUE_EMPTY
    return DiscordUIMessages.ACTION_SKIPPED_NOW_PLAYING.format(uri=next_track.uri or "")


async def handle_pause(ctx: CommandContext, args: NoArguments) -> str:
    result = await _acquire(ctx)
    if not result.is_success:
        return result.failure.message

    player = result.player
    if player.state is PlayerState.PAUSED:
        return DiscordUIMessages.STATE_ALREADY_PAUSED

    await player.pause()
    logger.info(LogTemplates.PLAYER_PAUSED, player.guild_id)
    return DiscordUIMessages.ACTION_PAUSED


async def handle_resume(ctx: CommandContext, args: NoArguments) -> str:
    result = await _acquire(ctx)
    if not result.is_success:
        return result.failure.message

    player = result.player
    if player.state is not PlayerState.PAUSED:
        return DiscordUIMessages.STATE_NOT_PAUSED

    await player.resume()
    logger.info(LogTemplates.PLAYER_RESUMED, player.guild_id)
    return DiscordUIMessages.ACTION_RESUMED

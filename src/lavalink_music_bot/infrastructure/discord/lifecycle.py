"""Process lifecycle supervisor for the gateway connection.

State machine::

    STOPPED -> CONNECTING -> AWAITING_READY -> READY -> STOPPED

``start`` logs in, launches the gateway connection and blocks until the
one-shot readiness future resolves (commands registered for the configured
guild) or the startup deadline elapses. Listener subscriptions are acquired on
start and released by ``stop`` on every exit path.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import Callable, Coroutine
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import discord

from lavalink_music_bot.domain.shared.exceptions import (
    ConfigurationError,
    InvalidOperationError,
    StartupTimeoutError,
)
from lavalink_music_bot.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ...config.settings import Settings
    from .bot import MusicBot

logger = logging.getLogger(__name__)

Listener = Callable[..., Coroutine[Any, Any, None]]


class LifecycleState(StrEnum):
    STOPPED = "stopped"
    CONNECTING = "connecting"
    AWAITING_READY = "awaiting_ready"
    READY = "ready"


class LifecycleSupervisor:
    def __init__(self, bot: MusicBot, settings: Settings) -> None:
        self._bot = bot
        self._guild_id = settings.discord.guild_id
        self._ready_timeout = settings.startup.ready_timeout_seconds
        self._shutdown_timeout = settings.startup.shutdown_timeout_seconds

        self._state = LifecycleState.STOPPED
        self._ready: asyncio.Future[None] | None = None
        self._gateway_task: asyncio.Task[None] | None = None
        self._subscriptions: list[tuple[Listener, str]] = []

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def ready_timeout(self) -> float:
        return self._ready_timeout

    # ─────────────────────────────────────────────────────────────────
    # Start
    # ─────────────────────────────────────────────────────────────────

    async def start(self, token: str) -> None:
        if self._state is not LifecycleState.STOPPED:
            raise InvalidOperationError("start", self._state.value)
        if not token:
            raise ConfigurationError(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        if self._guild_id is None:
            raise ConfigurationError(ErrorMessages.DISCORD_GUILD_ID_REQUIRED)

        ready: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._ready = ready
        self._subscribe()
        self._state = LifecycleState.CONNECTING

        try:
            logger.info(LogTemplates.LIFECYCLE_LOGGING_IN)
            try:
                await self._bot.login(token)
            except Exception:
                logger.exception(LogTemplates.LIFECYCLE_LOGIN_FAILED)
                raise

            logger.info(LogTemplates.LIFECYCLE_STARTING)
            gateway_task = asyncio.create_task(self._bot.connect(), name="discord-gateway")
            self._gateway_task = gateway_task
            self._state = LifecycleState.AWAITING_READY

            logger.info(LogTemplates.LIFECYCLE_WAITING_READY, self._ready_timeout)
            await self._wait_until_ready(ready, gateway_task)
        except BaseException:
            await self.stop()
            raise

        self._state = LifecycleState.READY
        logger.info(LogTemplates.LIFECYCLE_READY)

    async def _wait_until_ready(
        self, ready: asyncio.Future[None], gateway_task: asyncio.Task[None]
    ) -> None:
        done, _ = await asyncio.wait(
            {ready, gateway_task},
            timeout=self._ready_timeout,
            return_when=asyncio.FIRST_COMPLETED,
        )

        if ready in done:
            # Re-raises a command registration failure.
            ready.result()
            return

        if gateway_task in done:
            logger.error(LogTemplates.LIFECYCLE_GATEWAY_FAILED)
            gateway_task.result()
            raise ConnectionError(ErrorMessages.GATEWAY_CLOSED_BEFORE_READY)

        logger.error(LogTemplates.LIFECYCLE_READY_TIMEOUT, self._ready_timeout)
        raise StartupTimeoutError(
            self._ready_timeout,
            ErrorMessages.READY_TIMEOUT.format(timeout=self._ready_timeout),
        )

    # ─────────────────────────────────────────────────────────────────
    # Event subscriptions
    # ─────────────────────────────────────────────────────────────────

    def _subscribe(self) -> None:
        for listener, event in (
            (self._on_ready, "on_ready"),
            (self._on_interaction, "on_interaction"),
        ):
            self._bot.add_listener(listener, event)
            self._subscriptions.append((listener, event))

    def _unsubscribe(self) -> None:
        while self._subscriptions:
            listener, event = self._subscriptions.pop()
            self._bot.remove_listener(listener, event)

    async def _on_ready(self) -> None:
        ready = self._ready
        guild_id = self._guild_id
        # on_ready fires again after gateway reconnects; registration happens once.
        if ready is None or ready.done():
            return
        if guild_id is None:
            ready.set_exception(ConfigurationError(ErrorMessages.DISCORD_GUILD_ID_REQUIRED))
            return

        logger.info(LogTemplates.LIFECYCLE_REGISTERING, guild_id)
        try:
            count = await self._bot.register_commands(guild_id)
        except Exception as e:
            logger.exception(LogTemplates.LIFECYCLE_REGISTRATION_FAILED)
            if not ready.done():
                ready.set_exception(e)
            return

        logger.info(LogTemplates.LIFECYCLE_REGISTERED, count, guild_id)
        if not ready.done():
            ready.set_result(None)

    async def _on_interaction(self, interaction: discord.Interaction) -> None:
        """Debug trace of inbound interactions only.

        Slash commands are dispatched by the app command tree, not by this listener.
        """
        logger.debug(
            LogTemplates.LIFECYCLE_INTERACTION,
            getattr(interaction.command, "name", interaction.type),
            interaction.user.id,
            interaction.guild_id,
        )

    # ─────────────────────────────────────────────────────────────────
    # Stop
    # ─────────────────────────────────────────────────────────────────

    async def stop(self) -> None:
        """Release subscriptions and close the gateway session. Safe to call repeatedly."""
        if (
            self._state is LifecycleState.STOPPED
            and self._gateway_task is None
            and not self._subscriptions
        ):
            return

        logger.info(LogTemplates.LIFECYCLE_STOPPING)
        self._unsubscribe()
        try:
            if not self._bot.is_closed():
                await self._bot.close()
        finally:
            await self._finish_gateway_task()
            if self._ready is not None and not self._ready.done():
                self._ready.cancel()
            self._ready = None
            self._state = LifecycleState.STOPPED

    async def _finish_gateway_task(self) -> None:
        task, self._gateway_task = self._gateway_task, None
        if task is None:
            return

        if not task.done():
            task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.warning(LogTemplates.LIFECYCLE_GATEWAY_TASK_ERROR, e)

    # ─────────────────────────────────────────────────────────────────
    # Process entry
    # ─────────────────────────────────────────────────────────────────

    async def wait_until_stopped(self) -> None:
        """Block while the gateway connection is being served."""
        task = self._gateway_task
        if task is None:
            return
        await asyncio.wait({task})
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            raise error

    async def serve(self, token: str) -> None:
        await self.start(token)
        try:
            await self.wait_until_stopped()
        finally:
            await self.stop()

    def run(self, token: str) -> None:
        """Run the bot until SIGINT/SIGTERM, raising on fatal startup errors."""

        async def runner() -> None:
            async with self._bot:
                loop = asyncio.get_running_loop()

                async def _graceful_stop() -> None:
                    try:
                        await asyncio.wait_for(self.stop(), timeout=self._shutdown_timeout)
                    except TimeoutError:
                        logger.warning(
                            LogTemplates.LIFECYCLE_SHUTDOWN_TIMEOUT, self._shutdown_timeout
                        )

                for sig in (signal.SIGINT, signal.SIGTERM):
                    loop.add_signal_handler(sig, lambda: asyncio.create_task(_graceful_stop()))
                await self.serve(token)

        asyncio.run(runner())

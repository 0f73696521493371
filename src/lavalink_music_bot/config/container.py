"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the audio service, player guard and command router.
Components are created on-demand and cached for reuse throughout the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.interfaces.audio_service import AudioService
    from ..application.services.command_router import CommandRouter
    from ..application.services.player_guard import GuildPlayerGuard
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    # Infrastructure adapters
    _audio_service: AudioService | None = None

    # Application services
    _player_guard: GuildPlayerGuard | None = None
    _command_router: CommandRouter | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Infrastructure ===

    @property
    def audio_service(self) -> AudioService:
        """Get the Lavalink audio service."""
        if self._audio_service is None:
            from ..infrastructure.lavalink.audio_service import WavelinkAudioService

            self._audio_service = WavelinkAudioService(self.bot, self.settings.lavalink)
        return self._audio_service

    # === Application Services ===

    @property
    def player_guard(self) -> GuildPlayerGuard:
        if self._player_guard is None:
            from ..application.services.player_guard import GuildPlayerGuard

            self._player_guard = GuildPlayerGuard(self.audio_service)
        return self._player_guard

    @property
    def command_router(self) -> CommandRouter:
        if self._command_router is None:
            from ..application.services.command_router import CommandRouter

            self._command_router = CommandRouter(
                guard=self.player_guard,
                audio_service=self.audio_service,
            )
        return self._command_router

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.audio_service.connect()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._audio_service is not None:
            try:
                await self._audio_service.close()
            except Exception as exc:
                logger.warning("Failed closing audio service: %r", exc)


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)

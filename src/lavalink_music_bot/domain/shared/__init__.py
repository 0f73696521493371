"""
Shared Domain Kernel

Contains messages, constrained types and exceptions shared across the bot.
"""

from lavalink_music_bot.domain.shared.exceptions import (
    ConfigurationError,
    DomainError,
    EntityNotFoundError,
    InvalidOperationError,
    StartupTimeoutError,
    ValidationError,
)

__all__ = [
    "ConfigurationError",
    "DomainError",
    "EntityNotFoundError",
    "InvalidOperationError",
    "StartupTimeoutError",
    "ValidationError",
]

"""
Domain Layer

Contains pure value types organized by context:
- shared/: Cross-cutting messages, types and exceptions
- music/: Tracks, player state, search modes and guard outcomes
"""

from lavalink_music_bot.domain.shared.exceptions import DomainError

__all__ = ["DomainError"]

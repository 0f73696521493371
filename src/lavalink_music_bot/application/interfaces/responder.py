"""Port interface for answering a single chat interaction."""

from __future__ import annotations

from abc import ABC, abstractmethod


class InteractionResponder(ABC):
    """Raw reply primitives of the chat platform for one interaction."""

    @abstractmethod
    async def defer(self) -> None:
        """Acknowledge the interaction now and answer later with a follow-up."""
        ...

    @abstractmethod
    async def respond(self, text: str) -> None:
        """Answer the interaction immediately."""
        ...

    @abstractmethod
    async def follow_up(self, text: str) -> None:
        """Answer a previously deferred interaction."""
        ...

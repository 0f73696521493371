"""Utility functions for formatting Discord replies."""

from __future__ import annotations

from functools import lru_cache


@lru_cache(maxsize=256)
def format_timestamp(milliseconds: int | float | None, *, pad_minutes: bool = False) -> str:
    """Format a millisecond offset as ``M:SS`` (or ``MM:SS`` with *pad_minutes*).

    Minutes are not wrapped at the hour, so a 75 minute track renders as ``75:00``.
    """
    total_seconds = max(int(milliseconds or 0) // 1000, 0)
    minutes, seconds = divmod(total_seconds, 60)

    if pad_minutes:
        return f"{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


@lru_cache(maxsize=256)
def truncate(text: str, max_length: int = 90) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"

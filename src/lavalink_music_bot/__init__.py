"""Discord slash-command music bot backed by a Lavalink audio node."""

__version__ = "0.1.0"

"""Communication adapter implementations."""

from .discord_adapter import DiscordAdapter

__all__ = ["DiscordAdapter"]

"""Protocol definitions for external collaborators."""

from .connection import BotConnection, ChannelHandle, GuildHandle

__all__ = ["BotConnection", "ChannelHandle", "GuildHandle"]

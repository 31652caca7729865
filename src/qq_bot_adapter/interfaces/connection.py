"""Abstract interface for the bot connection collaborator."""

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..models.event import MessageEvent


class ChannelHandle(Protocol):
    """A guild channel the bot can act on."""

    channel_id: str

    def pin_message(self, message_id: str) -> Awaitable[Any]:
        """
        Pin a message in this channel.

        Args:
            message_id: Message to pin

        Returns:
            Pending result of the platform call
        """
        ...

    def set_announce(self, message_id: str) -> Awaitable[Any]:
        """
        Mark a message as the channel announcement.

        Args:
            message_id: Message to announce

        Returns:
            Pending result of the platform call
        """
        ...


class GuildHandle(Protocol):
    """A guild the bot is a member of."""

    guild_id: str


class BotConnection(Protocol):
    """Connection to the bot platform.

    Owns the websocket session and REST client. Events never hold a
    reference to it; helpers in ``core.actions`` take it explicitly.
    """

    def send_private_message(
        self,
        user_id: str,
        message: Any,
        source: "MessageEvent | None" = None,
    ) -> Awaitable[Any]:
        """
        Send a one-to-one message.

        Args:
            user_id: Recipient
            message: Content to send
            source: Event being replied to, for passive replies

        Returns:
            Pending result of the platform call
        """
        ...

    def send_group_message(
        self,
        group_id: str,
        message: Any,
        source: "MessageEvent | None" = None,
    ) -> Awaitable[Any]:
        """Send a message to a group."""
        ...

    def send_direct_message(
        self,
        guild_id: str,
        message: Any,
        source: "MessageEvent | None" = None,
    ) -> Awaitable[Any]:
        """Send a guild direct message, addressed by the DM session's guild."""
        ...

    def send_guild_message(
        self,
        channel_id: str,
        message: Any,
        source: "MessageEvent | None" = None,
    ) -> Awaitable[Any]:
        """Send a message to a guild channel."""
        ...

    def pick_guild(self, guild_id: str) -> GuildHandle:
        """
        Look up a guild.

        Raises:
            Exception: Any error when the guild is unknown
        """
        ...

    def pick_channel(self, channel_id: str) -> ChannelHandle:
        """
        Look up a channel.

        Raises:
            Exception: Any error when the channel is unknown
        """
        ...

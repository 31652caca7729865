"""Reply and channel helpers for message events.

Events carry no reference to the connection that produced them, so every
helper takes it explicitly. The helpers hand back the connection's pending
result without awaiting it; retry and timeout policy belong to the
connection.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any

import structlog

from qq_bot_adapter.models.event import (
    DirectMessageEvent,
    GroupMessageEvent,
    GuildMessageEvent,
    MessageEvent,
    PrivateMessageEvent,
)
from qq_bot_adapter.utils.errors import ChannelUnavailableError

if TYPE_CHECKING:
    from qq_bot_adapter.interfaces.connection import BotConnection, ChannelHandle, GuildHandle

log = structlog.get_logger()


def reply(event: MessageEvent, connection: BotConnection, content: Any) -> Awaitable[Any]:
    """Send ``content`` back to where ``event`` came from.

    Args:
        event: The message being replied to
        connection: Connection used to send
        content: Message content

    Returns:
        The connection's pending send result
    """
    if isinstance(event, PrivateMessageEvent):
        return connection.send_private_message(event.user_id, content, event)
    if isinstance(event, GroupMessageEvent):
        return connection.send_group_message(event.group_id, content, event)
    if isinstance(event, DirectMessageEvent):
        return connection.send_direct_message(event.guild_id, content, event)
    if isinstance(event, GuildMessageEvent):
        return connection.send_guild_message(event.channel_id, content, event)
    raise TypeError(f"Not a message event: {type(event).__name__}")


def guild_of(event: GuildMessageEvent, connection: BotConnection) -> GuildHandle | None:
    """The guild a message was posted in, or None if the lookup fails."""
    try:
        return connection.pick_guild(event.guild_id)
    except Exception as e:
        log.debug("guild_lookup_failed", guild_id=event.guild_id, error=str(e))
        return None


def channel_of(event: GuildMessageEvent, connection: BotConnection) -> ChannelHandle | None:
    """The channel a message was posted in, or None if the lookup fails."""
    try:
        return connection.pick_channel(event.channel_id)
    except Exception as e:
        log.debug("channel_lookup_failed", channel_id=event.channel_id, error=str(e))
        return None


def pin(event: GuildMessageEvent, connection: BotConnection) -> Awaitable[Any]:
    """Pin the message in its channel.

    Raises:
        ChannelUnavailableError: If the channel cannot be resolved
    """
    return _require_channel(event, connection).pin_message(event.message_id)


def as_announce(event: GuildMessageEvent, connection: BotConnection) -> Awaitable[Any]:
    """Make the message its channel's announcement.

    Raises:
        ChannelUnavailableError: If the channel cannot be resolved
    """
    return _require_channel(event, connection).set_announce(event.message_id)


def _require_channel(event: GuildMessageEvent, connection: BotConnection) -> ChannelHandle:
    channel = channel_of(event, connection)
    if channel is None:
        raise ChannelUnavailableError(f"Channel {event.channel_id} is not available")
    return channel

"""Tests for event reply and channel helpers."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from qq_bot_adapter.core.actions import as_announce, channel_of, guild_of, pin, reply
from qq_bot_adapter.models.event import (
    DirectMessageEvent,
    GroupMessageEvent,
    GuildMessageEvent,
    PrivateMessageEvent,
    Sender,
)
from qq_bot_adapter.utils.errors import ChannelUnavailableError

SENDER = Sender(user_id="u1", user_name="ann")


@pytest.fixture
def connection() -> MagicMock:
    """Create a mock bot connection."""
    conn = MagicMock()
    conn.send_private_message = AsyncMock(return_value="private-sent")
    conn.send_group_message = AsyncMock(return_value="group-sent")
    conn.send_direct_message = AsyncMock(return_value="direct-sent")
    conn.send_guild_message = AsyncMock(return_value="guild-sent")
    return conn


@pytest.fixture
def guild_event() -> GuildMessageEvent:
    """Create a guild message event."""
    return GuildMessageEvent(
        message_id="m1",
        user_id="u1",
        sender=SENDER,
        guild_id="g1",
        channel_id="c1",
    )


class TestReply:
    """Tests for reply routing."""

    @pytest.mark.asyncio
    async def test_private_reply(self, connection: MagicMock) -> None:
        """Test that private replies go to the user."""
        event = PrivateMessageEvent(message_id="m1", user_id="u1", sender=SENDER)

        result = await reply(event, connection, "pong")

        assert result == "private-sent"
        connection.send_private_message.assert_awaited_once_with("u1", "pong", event)

    @pytest.mark.asyncio
    async def test_group_reply(self, connection: MagicMock) -> None:
        """Test that group replies go to the group."""
        event = GroupMessageEvent(message_id="m1", user_id="u1", sender=SENDER, group_id="g9")

        assert await reply(event, connection, "pong") == "group-sent"
        connection.send_group_message.assert_awaited_once_with("g9", "pong", event)

    @pytest.mark.asyncio
    async def test_direct_reply(self, connection: MagicMock) -> None:
        """Test that direct replies are addressed by guild id."""
        event = DirectMessageEvent(
            message_id="m1", user_id="u1", sender=SENDER, guild_id="dm-g", channel_id="dm-c"
        )

        assert await reply(event, connection, "pong") == "direct-sent"
        connection.send_direct_message.assert_awaited_once_with("dm-g", "pong", event)

    @pytest.mark.asyncio
    async def test_guild_reply(
        self,
        connection: MagicMock,
        guild_event: GuildMessageEvent,
    ) -> None:
        """Test that guild replies go to the channel."""
        assert await reply(guild_event, connection, "pong") == "guild-sent"
        connection.send_guild_message.assert_awaited_once_with("c1", "pong", guild_event)

    def test_reply_is_not_awaited(self, connection: MagicMock) -> None:
        """Test that reply hands back the pending result."""
        event = PrivateMessageEvent(message_id="m1", user_id="u1", sender=SENDER)

        pending = reply(event, connection, "pong")

        connection.send_private_message.assert_called_once()
        connection.send_private_message.assert_not_awaited()
        pending.close()  # type: ignore[attr-defined]

    def test_reply_rejects_other_objects(self, connection: MagicMock) -> None:
        """Test that non-events raise TypeError."""
        with pytest.raises(TypeError):
            reply(object(), connection, "pong")  # type: ignore[arg-type]


class TestLookups:
    """Tests for guild and channel lookups."""

    def test_guild_of(self, connection: MagicMock, guild_event: GuildMessageEvent) -> None:
        """Test a successful guild lookup."""
        guild = MagicMock(guild_id="g1")
        connection.pick_guild.return_value = guild

        assert guild_of(guild_event, connection) is guild
        connection.pick_guild.assert_called_once_with("g1")

    def test_guild_lookup_failure(
        self,
        connection: MagicMock,
        guild_event: GuildMessageEvent,
    ) -> None:
        """Test that a failing lookup returns None."""
        connection.pick_guild.side_effect = KeyError("g1")

        assert guild_of(guild_event, connection) is None

    def test_channel_of(self, connection: MagicMock, guild_event: GuildMessageEvent) -> None:
        """Test a successful channel lookup."""
        channel = MagicMock(channel_id="c1")
        connection.pick_channel.return_value = channel

        assert channel_of(guild_event, connection) is channel
        connection.pick_channel.assert_called_once_with("c1")

    def test_channel_lookup_failure(
        self,
        connection: MagicMock,
        guild_event: GuildMessageEvent,
    ) -> None:
        """Test that a failing lookup returns None."""
        connection.pick_channel.side_effect = RuntimeError("not cached")

        assert channel_of(guild_event, connection) is None


class TestChannelActions:
    """Tests for pin and announce."""

    @pytest.mark.asyncio
    async def test_pin(self, connection: MagicMock, guild_event: GuildMessageEvent) -> None:
        """Test that pin delegates to the channel by message id."""
        channel = MagicMock()
        channel.pin_message = AsyncMock(return_value=True)
        connection.pick_channel.return_value = channel

        assert await pin(guild_event, connection) is True
        channel.pin_message.assert_awaited_once_with("m1")

    @pytest.mark.asyncio
    async def test_as_announce(
        self,
        connection: MagicMock,
        guild_event: GuildMessageEvent,
    ) -> None:
        """Test that as_announce delegates to the channel by message id."""
        channel = MagicMock()
        channel.set_announce = AsyncMock(return_value={"message_id": "m1"})
        connection.pick_channel.return_value = channel

        assert await as_announce(guild_event, connection) == {"message_id": "m1"}
        channel.set_announce.assert_awaited_once_with("m1")

    def test_pin_without_channel(
        self,
        connection: MagicMock,
        guild_event: GuildMessageEvent,
    ) -> None:
        """Test that pin raises when the channel is unavailable."""
        connection.pick_channel.side_effect = KeyError("c1")

        with pytest.raises(ChannelUnavailableError, match="c1"):
            pin(guild_event, connection)

    def test_announce_without_channel(
        self,
        connection: MagicMock,
        guild_event: GuildMessageEvent,
    ) -> None:
        """Test that as_announce raises when the channel is unavailable."""
        connection.pick_channel.side_effect = KeyError("c1")

        with pytest.raises(ChannelUnavailableError):
            as_announce(guild_event, connection)

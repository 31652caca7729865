"""Tests for collaborator protocol interfaces."""

from dataclasses import dataclass, field
from typing import Any

import pytest

from qq_bot_adapter.core.actions import channel_of, guild_of, pin, reply
from qq_bot_adapter.interfaces.connection import BotConnection, ChannelHandle, GuildHandle
from qq_bot_adapter.models.event import GuildMessageEvent, MessageEvent, Sender


@dataclass
class FakeGuild:
    """Guild implementing GuildHandle."""

    guild_id: str


@dataclass
class FakeChannel:
    """Channel implementing ChannelHandle."""

    channel_id: str
    pinned: list[str] = field(default_factory=list)

    async def pin_message(self, message_id: str) -> Any:
        self.pinned.append(message_id)
        return {"pinned": message_id}

    async def set_announce(self, message_id: str) -> Any:
        return {"announced": message_id}


class FakeConnection:
    """Connection implementing BotConnection with in-memory state."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, Any]] = []
        self.channels = {"c1": FakeChannel(channel_id="c1")}

    async def _send(self, kind: str, target: str, message: Any) -> str:
        self.sent.append((kind, target, message))
        return f"{kind}:{target}"

    def send_private_message(self, user_id: str, message: Any, source: MessageEvent | None = None):
        return self._send("private", user_id, message)

    def send_group_message(self, group_id: str, message: Any, source: MessageEvent | None = None):
        return self._send("group", group_id, message)

    def send_direct_message(self, guild_id: str, message: Any, source: MessageEvent | None = None):
        return self._send("direct", guild_id, message)

    def send_guild_message(self, channel_id: str, message: Any, source: MessageEvent | None = None):
        return self._send("guild", channel_id, message)

    def pick_guild(self, guild_id: str) -> GuildHandle:
        return FakeGuild(guild_id=guild_id)

    def pick_channel(self, channel_id: str) -> ChannelHandle:
        return self.channels[channel_id]


@pytest.fixture
def connection() -> FakeConnection:
    """Create a fake connection."""
    return FakeConnection()


def make_event(channel_id: str = "c1") -> GuildMessageEvent:
    return GuildMessageEvent(
        message_id="m1",
        user_id="u1",
        sender=Sender(user_id="u1"),
        guild_id="g1",
        channel_id=channel_id,
    )


class TestProtocolCompliance:
    """Test that a plain class satisfies the connection protocol."""

    @pytest.mark.asyncio
    async def test_reply_through_protocol(self, connection: FakeConnection) -> None:
        """Test replying through a protocol-typed connection."""
        conn: BotConnection = connection

        assert await reply(make_event(), conn, "pong") == "guild:c1"
        assert connection.sent == [("guild", "c1", "pong")]

    @pytest.mark.asyncio
    async def test_pin_through_protocol(self, connection: FakeConnection) -> None:
        """Test pinning through a protocol-typed channel."""
        conn: BotConnection = connection

        assert await pin(make_event(), conn) == {"pinned": "m1"}
        assert connection.channels["c1"].pinned == ["m1"]

    def test_lookups(self, connection: FakeConnection) -> None:
        """Test lookups, including an unknown channel."""
        guild = guild_of(make_event(), connection)

        assert guild is not None
        assert guild.guild_id == "g1"
        assert channel_of(make_event("missing"), connection) is None

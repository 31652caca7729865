"""Data models for inbound message events.

A message event is one of four immutable variants, keyed by the kind of
conversation it came from. Routing ids differ per variant:

- ``PrivateMessageEvent``: ``user_id``
- ``GroupMessageEvent``: ``group_id``
- ``DirectMessageEvent``: ``guild_id`` and ``channel_id`` (guild DM)
- ``GuildMessageEvent``: ``guild_id`` and ``channel_id`` (channel post)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields
from datetime import datetime
from enum import IntEnum, StrEnum
from typing import Any, ClassVar

from .segment import Segment


class MessageType(StrEnum):
    """Conversation kind a message was received in."""

    PRIVATE = "private"
    GROUP = "group"
    DIRECT = "direct"
    GUILD = "guild"


class Permission(IntEnum):
    """Guild roles granted to a message sender."""

    NORMAL = 1
    ADMIN = 2
    OWNER = 4
    CHANNEL_ADMIN = 5

    @classmethod
    def from_roles(cls, roles: Iterable[str | int]) -> frozenset[Permission]:
        """Map platform role ids to permissions, skipping custom roles."""
        known = {member.value for member in cls}
        result: set[Permission] = set()
        for role in roles:
            try:
                value = int(role)
            except (TypeError, ValueError):
                continue
            if value in known:
                result.add(cls(value))
        return frozenset(result)


@dataclass(frozen=True)
class Sender:
    """The user who sent a message."""

    user_id: str
    user_name: str = ""
    permissions: frozenset[Permission] = frozenset()


@dataclass(frozen=True)
class MessageReference:
    """The message being quoted by a reply."""

    message_id: str


@dataclass(frozen=True, kw_only=True)
class BaseMessageEvent:
    """Fields shared by every message event variant."""

    message_id: str
    user_id: str
    sender: Sender
    raw_message: str = ""  # brief of the parsed message
    message: tuple[Segment, ...] = ()
    message_reference: MessageReference | None = None
    timestamp: datetime | None = None

    message_type: ClassVar[MessageType]

    def to_dict(self) -> dict[str, Any]:
        """Serialize the event to JSON-ready data."""
        data: dict[str, Any] = {"message_type": self.message_type.value}
        for f in fields(self):
            data[f.name] = _serialize(getattr(self, f.name))
        return data


@dataclass(frozen=True, kw_only=True)
class PrivateMessageEvent(BaseMessageEvent):
    """A one-to-one message outside any group or guild."""

    message_type: ClassVar[MessageType] = MessageType.PRIVATE


@dataclass(frozen=True, kw_only=True)
class GroupMessageEvent(BaseMessageEvent):
    """A message posted in a group chat."""

    group_id: str
    group_name: str = ""

    message_type: ClassVar[MessageType] = MessageType.GROUP


@dataclass(frozen=True, kw_only=True)
class DirectMessageEvent(BaseMessageEvent):
    """A direct message sent through a guild."""

    guild_id: str
    channel_id: str

    message_type: ClassVar[MessageType] = MessageType.DIRECT


@dataclass(frozen=True, kw_only=True)
class GuildMessageEvent(BaseMessageEvent):
    """A message posted in a guild channel."""

    guild_id: str
    channel_id: str
    guild_name: str = ""
    channel_name: str = ""

    message_type: ClassVar[MessageType] = MessageType.GUILD


MessageEvent = PrivateMessageEvent | GroupMessageEvent | DirectMessageEvent | GuildMessageEvent

EVENT_CLASSES: dict[MessageType, type[BaseMessageEvent]] = {
    MessageType.PRIVATE: PrivateMessageEvent,
    MessageType.GROUP: GroupMessageEvent,
    MessageType.DIRECT: DirectMessageEvent,
    MessageType.GUILD: GuildMessageEvent,
}


def _serialize(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Sender):
        return {
            "user_id": value.user_id,
            "user_name": value.user_name,
            "permissions": sorted(p.name.lower() for p in value.permissions),
        }
    if isinstance(value, MessageReference):
        return {"message_id": value.message_id}
    if isinstance(value, datetime):
        return value.isoformat()
    return value

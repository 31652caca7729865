"""Data models for parsed messages and events."""

from .event import (
    BaseMessageEvent,
    DirectMessageEvent,
    GroupMessageEvent,
    GuildMessageEvent,
    MessageEvent,
    MessageReference,
    MessageType,
    Permission,
    PrivateMessageEvent,
    Sender,
)
from .segment import (
    AtSegment,
    AttachmentSegment,
    FaceSegment,
    ParsedMessage,
    Segment,
    TagSegment,
    TextSegment,
)

__all__ = [
    # Segment models
    "TextSegment",
    "FaceSegment",
    "AtSegment",
    "AttachmentSegment",
    "TagSegment",
    "Segment",
    "ParsedMessage",
    # Event models
    "MessageType",
    "Permission",
    "Sender",
    "MessageReference",
    "BaseMessageEvent",
    "PrivateMessageEvent",
    "GroupMessageEvent",
    "DirectMessageEvent",
    "GuildMessageEvent",
    "MessageEvent",
]

"""Core parsing and event logic.

This module exports:
- MarkupScanner: Splits inline markup into ordered segments
- MessageAssembler: Combines scanned content and attachments
- create_event / build_message_event: Build typed message events
- reply, pin, as_announce, guild_of, channel_of: Event helpers
"""

from qq_bot_adapter.core.actions import as_announce, channel_of, guild_of, pin, reply
from qq_bot_adapter.core.event_builder import (
    DISPATCH_MESSAGE_TYPES,
    build_message_event,
    create_event,
)
from qq_bot_adapter.core.markup_scanner import MarkupScanner
from qq_bot_adapter.core.message_assembler import MessageAssembler, parse_message

__all__ = [
    "DISPATCH_MESSAGE_TYPES",
    "MarkupScanner",
    "MessageAssembler",
    "as_announce",
    "build_message_event",
    "channel_of",
    "create_event",
    "guild_of",
    "parse_message",
    "pin",
    "reply",
]

"""Construction of typed message events.

``create_event`` turns a partial attribute bag into the event variant for a
message type. ``build_message_event`` is what the connection layer calls for
each inbound dispatch: it extracts routing ids and sender details from the
raw payload, assembles the message and builds the event.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import MISSING, fields
from datetime import UTC, datetime
from typing import Any, cast

import structlog

from qq_bot_adapter.core.message_assembler import MessageAssembler
from qq_bot_adapter.models.event import (
    EVENT_CLASSES,
    MessageEvent,
    MessageReference,
    MessageType,
    Permission,
    Sender,
)
from qq_bot_adapter.utils.errors import EventBuildError, UnsupportedEventError

log = structlog.get_logger()

# Platform dispatch names that carry a message
DISPATCH_MESSAGE_TYPES: dict[str, MessageType] = {
    "C2C_MESSAGE_CREATE": MessageType.PRIVATE,
    "GROUP_AT_MESSAGE_CREATE": MessageType.GROUP,
    "GROUP_MESSAGE_CREATE": MessageType.GROUP,
    "DIRECT_MESSAGE_CREATE": MessageType.DIRECT,
    "AT_MESSAGE_CREATE": MessageType.GUILD,
    "MESSAGE_CREATE": MessageType.GUILD,
}


def create_event(message_type: MessageType | str, attrs: Mapping[str, Any]) -> MessageEvent:
    """Build the event variant for ``message_type`` from ``attrs``.

    Every field the variant knows is copied from ``attrs``; anything else is
    ignored, ``message_type`` included. A missing ``sender`` defaults to one
    built from ``user_id``.

    Args:
        message_type: Conversation kind, as a MessageType or its value
        attrs: Partial attribute bag

    Returns:
        The matching event variant

    Raises:
        EventBuildError: If the message type is unknown or required fields
            are missing
    """
    try:
        kind = MessageType(message_type)
    except ValueError as e:
        raise EventBuildError(f"Unknown message type: {message_type}") from e

    event_cls = EVENT_CLASSES[kind]
    init_fields = [f for f in fields(event_cls) if f.init]
    names = {f.name for f in init_fields}

    values = {key: value for key, value in attrs.items() if key in names}
    ignored = sorted(set(attrs) - names - {"message_type"})
    if ignored:
        log.debug("event_attrs_ignored", message_type=kind.value, keys=ignored)

    if "message" in values:
        values["message"] = tuple(values["message"])
    if "sender" not in values and "user_id" in values:
        values["sender"] = Sender(user_id=values["user_id"])

    missing = [
        f.name
        for f in init_fields
        if f.name not in values and f.default is MISSING and f.default_factory is MISSING
    ]
    if missing:
        raise EventBuildError(f"Missing fields for {kind.value} event: {', '.join(missing)}")

    return cast(MessageEvent, event_cls(**values))


def build_message_event(
    dispatch_type: str,
    payload: Mapping[str, Any],
    assembler: MessageAssembler | None = None,
) -> MessageEvent:
    """Build an event from a raw dispatch payload.

    Args:
        dispatch_type: Platform event name, e.g. ``AT_MESSAGE_CREATE``
        payload: The dispatch's data object
        assembler: Assembler for the message content (default settings if None)

    Returns:
        The event variant for the dispatch type

    Raises:
        UnsupportedEventError: If the dispatch type is not a message event
        EventBuildError: If the payload lacks the routing ids of its variant
    """
    message_type = DISPATCH_MESSAGE_TYPES.get(dispatch_type)
    if message_type is None:
        raise UnsupportedEventError(dispatch_type)

    parsed = (assembler or MessageAssembler()).assemble(payload)
    sender = _extract_sender(payload)

    attrs: dict[str, Any] = {
        "message_id": str(payload.get("id") or ""),
        "user_id": sender.user_id,
        "sender": sender,
        "raw_message": parsed.brief,
        "message": parsed.segments,
        "message_reference": _extract_reference(payload),
        "timestamp": _parse_timestamp(payload.get("timestamp")),
    }

    routing = {
        "group_id": payload.get("group_openid") or payload.get("group_id"),
        "guild_id": payload.get("guild_id"),
        "channel_id": payload.get("channel_id"),
    }
    attrs.update({key: str(value) for key, value in routing.items() if value})

    event = create_event(message_type, attrs)
    log.debug(
        "event_built",
        dispatch_type=dispatch_type,
        message_type=message_type.value,
        message_id=attrs["message_id"],
    )
    return event


def _extract_sender(payload: Mapping[str, Any]) -> Sender:
    """Read the sender from ``author`` and, in guilds, ``member``."""
    author = payload.get("author") or {}
    member = payload.get("member") or {}

    user_id = author.get("id") or author.get("user_openid") or author.get("member_openid") or ""
    return Sender(
        user_id=str(user_id),
        user_name=member.get("nick") or author.get("username") or "",
        permissions=Permission.from_roles(member.get("roles") or ()),
    )


def _extract_reference(payload: Mapping[str, Any]) -> MessageReference | None:
    reference = payload.get("message_reference") or {}
    message_id = reference.get("message_id")
    if not message_id:
        return None
    return MessageReference(message_id=str(message_id))


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string or epoch seconds; anything else is None."""
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=UTC)
        if isinstance(value, str) and value:
            if value.isascii() and value.isdigit():
                return datetime.fromtimestamp(int(value), tz=UTC)
            return datetime.fromisoformat(value)
    except (OverflowError, OSError, ValueError):
        log.debug("timestamp_unparseable", value=value)
    return None

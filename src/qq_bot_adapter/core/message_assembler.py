"""Assembly of inbound payloads into parsed messages.

The assembler runs the MarkupScanner over a payload's content, then appends
one segment per attachment. The payload itself is never modified.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from qq_bot_adapter.core.markup_scanner import MarkupScanner, format_attr_value, render_tag
from qq_bot_adapter.models.segment import AttachmentSegment, ParsedMessage, Segment

log = structlog.get_logger()


class MessageAssembler:
    """Builds a ParsedMessage from a raw message payload.

    Example:
        assembler = MessageAssembler()
        parsed = assembler.assemble({"content": "hi", "attachments": [...]})
        print(parsed.brief)
    """

    DEFAULT_CATEGORY = "file"

    def __init__(
        self,
        scanner: MarkupScanner | None = None,
        attachment_scheme: str = "https",
    ) -> None:
        """Initialize the MessageAssembler.

        Args:
            scanner: Scanner used for the message content
            attachment_scheme: URL scheme prepended to attachment locations
        """
        self._scanner = scanner or MarkupScanner()
        self._attachment_scheme = attachment_scheme

    def assemble(self, payload: Mapping[str, Any]) -> ParsedMessage:
        """Parse a payload's content and attachments.

        Args:
            payload: Inbound message payload with ``content`` and optional
                ``attachments`` and ``mentions``

        Returns:
            ParsedMessage with text and tag segments first, then attachments
        """
        content = payload.get("content") or ""
        segments, brief = self._scanner.scan(content, payload.get("mentions"))

        parts = [brief]
        attachments = payload.get("attachments") or ()
        for attachment in attachments:
            segment, rendered = self._build_attachment(attachment)
            segments.append(segment)
            parts.append(rendered)

        log.debug(
            "message_assembled",
            segment_count=len(segments),
            attachment_count=len(attachments),
        )
        return ParsedMessage(segments=tuple(segments), brief="".join(parts))

    def _build_attachment(self, attachment: Mapping[str, Any]) -> tuple[Segment, str]:
        """Build the segment and brief for one attachment.

        The category is the part of ``content_type`` before ``/``. The brief
        lists every other field with its stored value.
        """
        content_type = attachment.get("content_type") or ""
        category = content_type.split("/")[0] or self.DEFAULT_CATEGORY

        data = {key: value for key, value in attachment.items() if key != "content_type"}
        attrs = {key: value for key, value in data.items() if key not in ("src", "url")}

        segment = AttachmentSegment(
            type=category,
            src=self._absolute_url(data.get("src")),
            url=self._absolute_url(data.get("url")),
            attrs=attrs,
        )
        tokens = [f"{key}={format_attr_value(value)}" for key, value in data.items()]
        return segment, render_tag(category, tokens)

    def _absolute_url(self, location: str | None) -> str | None:
        """Prefix a stored host+path location with the URL scheme."""
        if not location:
            return location
        if location.startswith(("http://", "https://")):
            return location
        return f"{self._attachment_scheme}://{location}"


_default_assembler = MessageAssembler()


def parse_message(payload: Mapping[str, Any]) -> ParsedMessage:
    """Parse a payload with the default assembler."""
    return _default_assembler.assemble(payload)

"""Scanner for the platform's inline message markup.

Message content mixes plain text with bracket tags such as
``<faceType=1,faceId="13">``, ``<@!1234>`` or ``<@everyone>``. This module
implements the MarkupScanner class which walks the content left to right and
splits it into ordered segments, along with a flattened "brief" rendering.

Quoted spans (``"..."``, ``'...'``, backticks and full-width curly quotes)
protect their content from being read as a tag and are kept verbatim,
quote characters included.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import structlog

from qq_bot_adapter.models.segment import (
    AtSegment,
    FaceSegment,
    Segment,
    TagSegment,
    TextSegment,
)

log = structlog.get_logger()

# Opening quote -> closing quote
QUOTE_PAIRS: dict[str, str] = {
    '"': '"',
    "'": "'",
    "`": "`",
    "“": "”",
    "‘": "’",
}


def trim_quote(value: str) -> str:
    """Strip one layer of matching quotes from ``value``."""
    if len(value) >= 2 and QUOTE_PAIRS.get(value[0]) == value[-1]:
        return value[1:-1]
    return value


def format_attr_value(value: Any) -> str:
    """Render an attribute value the way it appears inside a tag."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def render_tag(tag_type: str, tokens: Iterable[str]) -> str:
    """Render a bracket tag for the brief, e.g. ``<face,id=7>``.

    The comma after the type is always written, so a tag without
    attributes renders as ``<hr,>``.
    """
    return f"<{tag_type},{','.join(tokens)}>"


class MarkupScanner:
    """Tokenizer for inline message markup.

    Responsibilities:
    - Split content into text, quoted-text and bracket-tag matches
    - Normalize face and mention tags to ``face`` / ``at`` segments
    - Resolve ``<@!id>`` mentions against the payload's mention records
    - Build the brief alongside the segments

    Example:
        scanner = MarkupScanner()
        segments, brief = scanner.scan("hi <@!42>", [{"id": "42", "username": "ann"}])
    """

    # A quoted span or a bracket tag, whichever starts first
    TOKEN_PATTERN = re.compile(r"(\"[^\"]*?\"|'[^']*?'|`[^`]*?`|“[^”]*?”|‘[^’]*?’|<[^>]+?>)")
    # Namespaced numeric face code, e.g. ``<f:42>``
    FACE_SHORTHAND_PATTERN = re.compile(r"[a-z]+:[0-9]+")

    FACE_TYPE_PREFIX = "faceType"
    MENTION_PREFIX = "@!"
    MENTION_ALL = "@everyone"

    def scan(
        self,
        template: str,
        mentions: Sequence[Mapping[str, Any]] | None = None,
    ) -> tuple[list[Segment], str]:
        """Split markup into ordered segments.

        Args:
            template: Raw message content
            mentions: User records used to resolve ``<@!id>`` tags

        Returns:
            Tuple of (segments, brief)
        """
        segments: list[Segment] = []
        brief: list[str] = []

        if not template:
            return segments, ""

        lookup = self._index_mentions(mentions)
        cursor = 0

        for match in self.TOKEN_PATTERN.finditer(template):
            prev_text = template[cursor : match.start()]
            if prev_text:
                segments.append(TextSegment(text=prev_text))
                brief.append(prev_text)
            cursor = match.end()

            token = match.group(0)
            if token.startswith("<"):
                segment, rendered = self._scan_tag(token[1:-1], lookup)
                segments.append(segment)
                brief.append(rendered)
            else:
                segments.append(TextSegment(text=token))
                brief.append(token)

        rest = template[cursor:]
        if rest:
            segments.append(TextSegment(text=rest))
            brief.append(rest)

        log.debug("markup_scanned", segment_count=len(segments))
        return segments, "".join(brief)

    def _index_mentions(
        self,
        mentions: Sequence[Mapping[str, Any]] | None,
    ) -> dict[str, Mapping[str, Any]]:
        """Index mention records by id, first record winning."""
        lookup: dict[str, Mapping[str, Any]] = {}
        for record in mentions or ():
            user_id = record.get("id")
            if isinstance(user_id, str):
                lookup.setdefault(user_id, record)
        return lookup

    def _scan_tag(
        self,
        inner: str,
        lookup: Mapping[str, Mapping[str, Any]],
    ) -> tuple[Segment, str]:
        """Classify one bracket tag.

        Args:
            inner: Tag text without the angle brackets
            lookup: Mention records keyed by user id

        Returns:
            Tuple of (segment, brief rendering)
        """
        tag_type, *tokens = inner.split(",")
        segment: Segment

        if tag_type.startswith(self.FACE_TYPE_PREFIX):
            tag_type = "face"
            tokens = [self._rename_key(token, "faceId", "id") for token in tokens]
            attrs = self._parse_attrs(tokens)
            segment = FaceSegment(id=attrs.pop("id", None), attrs=attrs)
        elif tag_type.startswith(self.MENTION_PREFIX):
            user_id = tag_type[len(self.MENTION_PREFIX) :]
            tag_type = "at"
            record = lookup.get(user_id)
            if record is None:
                log.debug("mention_unresolved", user_id=user_id)
                tokens = []
            else:
                tokens = [f"{key}={format_attr_value(value)}" for key, value in record.items()]
            attrs = self._parse_attrs(tokens)
            segment = AtSegment(id=attrs.pop("id", None), attrs=attrs)
        elif tag_type == self.MENTION_ALL:
            tag_type = "at"
            tokens = ["all=true"]
            segment = AtSegment(all=True)
        elif self.FACE_SHORTHAND_PATTERN.fullmatch(tag_type):
            face_id = tag_type.split(":")[1]
            tag_type = "face"
            tokens = [f"id={face_id}"]
            segment = FaceSegment(id=face_id)
        else:
            # Unknown tags, other ``@`` forms included, pass through
            segment = TagSegment(type=tag_type, attrs=self._parse_attrs(tokens))

        return segment, render_tag(tag_type, tokens)

    @staticmethod
    def _rename_key(token: str, old: str, new: str) -> str:
        key, sep, value = token.partition("=")
        if key == old:
            return f"{new}{sep}{value}"
        return token

    @staticmethod
    def _parse_attrs(tokens: Iterable[str]) -> dict[str, str]:
        """Turn ``key=value`` tokens into a mapping.

        Keys are lowercased and values lose one layer of matching quotes.
        A token without ``=`` becomes a key with an empty value; tokens with
        an empty key are dropped.
        """
        attrs: dict[str, str] = {}
        for token in tokens:
            key, _, value = token.partition("=")
            if not key:
                continue
            attrs[key.lower()] = trim_quote(value)
        return attrs

"""Data models for parsed message segments."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass(frozen=True)
class TextSegment:
    """A run of plain text, quoted spans included verbatim."""

    text: str

    type: ClassVar[str] = "text"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class FaceSegment:
    """A platform emoji."""

    id: str | None = None
    attrs: Mapping[str, str] = field(default_factory=dict)  # e.g. ext

    type: ClassVar[str] = "face"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.id is not None:
            data["id"] = self.id
        data.update(self.attrs)
        return data


@dataclass(frozen=True)
class AtSegment:
    """A mention of one user, or of everyone when ``all`` is set.

    Unresolved mentions carry neither an id nor attrs.
    """

    id: str | None = None
    all: bool = False
    attrs: Mapping[str, str] = field(default_factory=dict)  # resolved user fields

    type: ClassVar[str] = "at"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.id is not None:
            data["id"] = self.id
        if self.all:
            data["all"] = True
        data.update(self.attrs)
        return data


@dataclass(frozen=True)
class AttachmentSegment:
    """A file delivered alongside the message text.

    ``type`` is the content category (``image``, ``video``, ...) and
    ``src``/``url`` are absolute URLs.
    """

    type: str
    src: str | None = None
    url: str | None = None
    attrs: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, **self.attrs}
        if self.src is not None:
            data["src"] = self.src
        if self.url is not None:
            data["url"] = self.url
        return data


@dataclass(frozen=True)
class TagSegment:
    """A bracket tag with no dedicated segment type."""

    type: str
    attrs: Mapping[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, **self.attrs}


Segment = TextSegment | FaceSegment | AtSegment | AttachmentSegment | TagSegment


@dataclass(frozen=True)
class ParsedMessage:
    """Ordered segments of a message plus its flattened brief."""

    segments: tuple[Segment, ...]
    brief: str

    @property
    def text(self) -> str:
        """Concatenated text segments, markup and attachments dropped."""
        return "".join(seg.text for seg in self.segments if isinstance(seg, TextSegment))

    def to_list(self) -> list[dict[str, Any]]:
        """Segments in their flat ``{type, ...attrs}`` form."""
        return [seg.to_dict() for seg in self.segments]

    def __str__(self) -> str:
        return self.brief

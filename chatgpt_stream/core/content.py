"""Typed chat message content: roles, content segments, and messages.

WHY: The completion service sends message content either as a bare string
or as a list of tagged segments (text, image URL). Callers should not have
to care which form arrived: they need one stored representation, a way
to render it for display, and a way to send it back on the wire.

HOW: Three building blocks:
  Role            : sender class, ordered by declaration, valued by wire name
  TextContent /
  ImageUrlContent : the two segment kinds (a tagged union)
  ChatMessage     : role + ordered list of segments
parse_content() is the single decode step for inbound content: scalar
string first, then list of tagged segments.

RULES:
- A string and a one-element [{"type": "text", "text": s}] list decode
  to the same stored representation
- A null text value becomes "" (never an error)
- Unknown "type" discriminators are a ContentParseError, never skipped
- Rendering concatenates segment renders with no separator
- ChatMessage copies its input sequence; messages share no mutable state
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Tuple, Union

from chatgpt_stream.errors import ContentParseError


class Role(str, enum.Enum):
    """Sender class of a chat message.

    WHY: Sorting messages or grouping them by sender needs a deterministic
    order that does not depend on the alphabetical order of wire names.

    HOW: Inherits from str so values serialize cleanly to JSON. The
    rich comparisons use declaration order instead of string order.

    RULES:
    - Order: SYSTEM < ASSISTANT < USER < FUNCTION
    - Equality is by value ("user" == Role.USER)
    - Wire-name strings compare by role order as well; unknown names
      raise ContentParseError
    """

    SYSTEM = "system"
    ASSISTANT = "assistant"
    USER = "user"
    FUNCTION = "function"

    def _rank(self) -> int:
        return list(type(self)).index(self)

    @staticmethod
    def _coerce(other: object) -> Role | None:
        # Wire names compare by role order too, never alphabetically.
        if isinstance(other, Role):
            return other
        if isinstance(other, str):
            return parse_role(other)
        return None

    def __lt__(self, other: object) -> bool:
        role = self._coerce(other)
        if role is None:
            return NotImplemented
        return self._rank() < role._rank()

    def __le__(self, other: object) -> bool:
        role = self._coerce(other)
        if role is None:
            return NotImplemented
        return self._rank() <= role._rank()

    def __gt__(self, other: object) -> bool:
        role = self._coerce(other)
        if role is None:
            return NotImplemented
        return self._rank() > role._rank()

    def __ge__(self, other: object) -> bool:
        role = self._coerce(other)
        if role is None:
            return NotImplemented
        return self._rank() >= role._rank()


def parse_role(value: Any) -> Role:
    """Decode a wire role name, raising ContentParseError on unknown names."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        raise ContentParseError("Unknown message role: {!r}".format(value)) from None


@dataclass
class TextContent:
    """A plain text segment.

    RULES:
    - text is never None; None is normalized to "" at construction
    """

    text: str = ""

    def __post_init__(self) -> None:
        if self.text is None:
            self.text = ""

    def render(self) -> str:
        return self.text

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}

    def __str__(self) -> str:
        return self.render()


@dataclass
class ImageUrlContent:
    """An image reference segment; renders as its URL."""

    url: str

    def render(self) -> str:
        return self.url

    def to_dict(self) -> dict[str, Any]:
        return {"type": "image_url", "image_url": {"url": self.url}}

    def __str__(self) -> str:
        return self.render()


ContentSegment = Union[TextContent, ImageUrlContent]


def text(value: str | None) -> TextContent:
    """Create a text segment."""
    return TextContent(value)


def image_url(url: str) -> ImageUrlContent:
    """Create an image URL segment."""
    return ImageUrlContent(url)


def parse_segment(data: Any) -> ContentSegment:
    """Decode one tagged content object by its ``type`` discriminator.

    RULES:
    - "text"      → TextContent, null/missing text → ""
    - "image_url" → ImageUrlContent from the nested image_url.url field
    - anything else → ContentParseError
    """
    if not isinstance(data, dict):
        raise ContentParseError(
            "Content segment must be an object, got {}".format(type(data).__name__)
        )

    segment_type = data.get("type")
    if segment_type == "text":
        value = data.get("text")
        if value is not None and not isinstance(value, str):
            raise ContentParseError(
                "Text segment 'text' must be a string or null, got {}".format(
                    type(value).__name__
                )
            )
        return TextContent(value)

    if segment_type == "image_url":
        nested = data.get("image_url")
        url = nested.get("url") if isinstance(nested, dict) else None
        if not isinstance(url, str):
            raise ContentParseError("Image segment requires a string image_url.url field")
        return ImageUrlContent(url)

    raise ContentParseError("Unknown content segment type: {!r}".format(segment_type))


def parse_content(value: Any) -> List[ContentSegment]:
    """Decode inbound message content into an ordered list of segments.

    WHY: The service sends short messages as bare strings and multi-part
    messages as lists. Both must land in the same stored form.

    HOW: Try the scalar string form first, then the list-of-tagged-objects
    form. Each list element goes through parse_segment().

    RULES:
    - str  → [TextContent(value)]
    - list → [parse_segment(item) for item in value]
    - any other type (including None) → ContentParseError
    """
    if isinstance(value, str):
        return [TextContent(value)]
    if isinstance(value, list):
        return [parse_segment(item) for item in value]
    raise ContentParseError(
        "Message content must be a string or a list of segments, got {}".format(
            type(value).__name__
        )
    )


def _coerce_segments(content: Union[str, Iterable[Any]]) -> List[ContentSegment]:
    if isinstance(content, str):
        return [TextContent(content)]
    if isinstance(content, Mapping):
        # Iterating a mapping would yield its keys as text.
        raise TypeError(
            "ChatMessage content must be a string or a sequence of segments, not a mapping"
        )

    segments: List[ContentSegment] = []
    for item in content:
        if isinstance(item, (TextContent, ImageUrlContent)):
            segments.append(item)
        elif isinstance(item, str):
            segments.append(TextContent(item))
        else:
            raise TypeError(
                "ChatMessage content items must be segments or strings, got {}".format(
                    type(item).__name__
                )
            )
    return segments


@dataclass
class ChatMessage:
    """A complete chat message: sender role plus ordered content segments.

    WHY: This is the value the reassembler hands to consumers and the value
    applications keep in their history. It has to render for display and
    serialize back to the wire shape the service accepts.

    HOW: Accepts a bare string or an iterable of segments at construction
    and always stores a fresh list. A role given as its wire name is
    coerced to Role.

    RULES:
    - render() concatenates segment renders in order, no separator
    - raw_content() is a read-only tuple view of the segments
    - to_dict() always emits content as a list of tagged segment objects
    """

    role: Role
    content: List[ContentSegment] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.role = parse_role(self.role)
        self.content = _coerce_segments(self.content)

    def render(self) -> str:
        return "".join(segment.render() for segment in self.content)

    def raw_content(self) -> Tuple[ContentSegment, ...]:
        return tuple(self.content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role.value,
            "content": [segment.to_dict() for segment in self.content],
        }

    @classmethod
    def from_dict(cls, data: Any) -> ChatMessage:
        """Parse a message object received from the service.

        RULES:
        - role and content are both required
        - content follows the parse_content() contract
        """
        if not isinstance(data, dict):
            raise ContentParseError(
                "Message must be an object, got {}".format(type(data).__name__)
            )
        if "role" not in data:
            raise ContentParseError("Message is missing the 'role' field")
        if "content" not in data:
            raise ContentParseError("Message is missing the 'content' field")
        return cls(role=parse_role(data["role"]), content=parse_content(data["content"]))

    def __str__(self) -> str:
        return self.render()

"""Inbound streamed-frame dataclasses and their mapping to chunk events.

WHY: Each streamed frame from the completion service is a small object
with a "choices" list. Every choice carries an "index" and a "delta"
whose shape tells what happened: a role announcement, a text fragment,
or an empty object closing that response. The reassembler works on typed
chunk events, so something has to translate one into the other.

HOW: InboundResponseChunk / InboundChunkChoice map 1:1 to the frame JSON
and are built with from_dict(). InboundChunkChoice.to_event() decodes the
delta by which field is present, in priority order.

RULES:
- "role" present            → BeginResponse
- else "content" is a string → ContentDelta
- else "content" is null, or the delta has neither field → CloseResponse
- Unknown role, non-string content, non-object delta, or non-integer
  index → StreamFormatError
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from chatgpt_stream.core.content import parse_role
from chatgpt_stream.core.reassembler import (
    BeginResponse,
    CloseResponse,
    ContentDelta,
    ResponseChunk,
)
from chatgpt_stream.errors import ContentParseError, StreamFormatError


@dataclass
class InboundChunkChoice:
    """One choice entry of a streamed frame.

    RULES:
    - delta is the raw payload object (role / content / empty)
    - index is the response_index used by the reassembler
    """

    delta: Dict[str, Any]
    index: int

    @classmethod
    def from_dict(cls, data: Any) -> InboundChunkChoice:
        if not isinstance(data, dict):
            raise StreamFormatError("Choice must be an object")

        delta = data.get("delta")
        if not isinstance(delta, dict):
            raise StreamFormatError("Choice 'delta' must be an object")

        index = data.get("index")
        # bool is an int subclass but never a valid index
        if not isinstance(index, int) or isinstance(index, bool):
            raise StreamFormatError("Choice 'index' must be an integer, got {!r}".format(index))

        return cls(delta=delta, index=index)

    def to_event(self) -> ResponseChunk:
        """Decode the delta payload into a chunk event.

        WHY: The three payload shapes carry no explicit tag; the field
        that is present is the tag.

        HOW: Checks "role" first, then "content", then falls back to a
        close marker.
        """
        if "role" in self.delta:
            try:
                role = parse_role(self.delta["role"])
            except ContentParseError as exc:
                raise StreamFormatError(str(exc)) from exc
            return BeginResponse(role=role, response_index=self.index)

        content = self.delta.get("content")
        if isinstance(content, str):
            return ContentDelta(delta=content, response_index=self.index)
        if content is not None:
            raise StreamFormatError(
                "Delta 'content' must be a string, got {}".format(type(content).__name__)
            )

        return CloseResponse(response_index=self.index)


@dataclass
class InboundResponseChunk:
    """A single streamed frame (usually carrying one choice)."""

    choices: List[InboundChunkChoice]

    @classmethod
    def from_dict(cls, data: Any) -> InboundResponseChunk:
        if not isinstance(data, dict):
            raise StreamFormatError("Frame must be an object")
        choices = data.get("choices")
        if not isinstance(choices, list):
            raise StreamFormatError("Frame is missing the 'choices' list")
        return cls(choices=[InboundChunkChoice.from_dict(c) for c in choices])

    def to_events(self) -> List[ResponseChunk]:
        return [choice.to_event() for choice in self.choices]


def chunk_events_from_frame(frame: Any) -> List[ResponseChunk]:
    """Decode one parsed frame object into its chunk events, in choice order."""
    return InboundResponseChunk.from_dict(frame).to_events()

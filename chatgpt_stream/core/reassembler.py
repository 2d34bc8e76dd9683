"""Chunk events and the stream reassembler.

WHY: A streamed completion arrives as many small events: a role
announcement that opens a response, text fragments, a close marker, and a
final end-of-stream marker. When several candidate replies are requested
(reply count > 1) the service interleaves fragments of different
candidates, so "append to the latest message" is wrong. Consumers need
one complete ChatMessage per candidate.

HOW: StreamReassembler keeps an append-only list of response slots, one
per BeginResponse, addressed by response_index. ContentDelta appends to
the addressed slot. At the end each slot becomes a ChatMessage holding a
single text segment with the full accumulated text. The same fold backs
the batch (from_response_chunks) and live (from_response_chunks_async)
entry points.

RULES:
- Slots are only ever appended; never reordered or compacted
- A delta for an index with no slot raises ChunkSequenceError
- CloseResponse and Done do not change the output
- Output order is slot order (ascending response_index)
- Strict mode also checks BeginResponse indices are 0, 1, 2, ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AsyncIterable, Iterable, List, Optional, Union

from chatgpt_stream.config import STRICT_RESPONSE_INDEXES
from chatgpt_stream.core.content import ChatMessage, Role, TextContent, parse_role
from chatgpt_stream.errors import ChunkSequenceError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Chunk events
# ---------------------------------------------------------------------------


@dataclass
class BeginResponse:
    """Opens a new response slot with the announced role."""

    role: Role
    response_index: int

    def __post_init__(self) -> None:
        self.role = parse_role(self.role)


@dataclass
class ContentDelta:
    """A fragment of text for an already-open response slot."""

    delta: str
    response_index: int


@dataclass
class CloseResponse:
    """Marks a response slot as finished."""

    response_index: int


@dataclass
class Done:
    """End-of-stream marker."""


ResponseChunk = Union[BeginResponse, ContentDelta, CloseResponse, Done]


# ---------------------------------------------------------------------------
# Reassembler
# ---------------------------------------------------------------------------


@dataclass
class _ResponseSlot:
    role: Role
    parts: List[str] = field(default_factory=list)
    closed: bool = False

    def to_message(self) -> ChatMessage:
        return ChatMessage(self.role, [TextContent("".join(self.parts))])


class StreamReassembler:
    """Incremental fold from chunk events to complete chat messages.

    WHY: The batch and live entry points share the same matching logic;
    only the way events arrive differs. Holding the slot state in one
    object lets a live consumer suspend between events.

    HOW: feed() processes one event against the slot list; finish()
    builds the output messages. One instance per stream.

    RULES:
    - Not thread-safe; one logical consumer drives it
    - strict_indexes=None falls back to STRICT_RESPONSE_INDEXES from config
    """

    def __init__(self, strict_indexes: Optional[bool] = None) -> None:
        self._strict = STRICT_RESPONSE_INDEXES if strict_indexes is None else strict_indexes
        self._slots: List[_ResponseSlot] = []
        self._done = False

    @property
    def done(self) -> bool:
        """True once the Done marker has been fed."""
        return self._done

    @property
    def response_count(self) -> int:
        return len(self._slots)

    def feed(self, chunk: ResponseChunk) -> None:
        """Apply one chunk event to the slot list.

        Raises:
            ChunkSequenceError: A delta addresses an unopened slot, or (strict
                mode) a BeginResponse/CloseResponse index is out of sequence.
            TypeError: The object is not a chunk event.
        """
        if isinstance(chunk, ContentDelta):
            self._slot_for(chunk.response_index, "Content delta").parts.append(chunk.delta)
        elif isinstance(chunk, BeginResponse):
            self._open(chunk)
        elif isinstance(chunk, CloseResponse):
            self._close(chunk)
        elif isinstance(chunk, Done):
            self._done = True
            logger.debug("Stream done after %d response(s)", len(self._slots))
        else:
            raise TypeError("Unsupported chunk event: {!r}".format(chunk))

    def _open(self, chunk: BeginResponse) -> None:
        expected = len(self._slots)
        if self._strict and chunk.response_index != expected:
            self._fail(
                "BeginResponse for index {} out of sequence (expected {})".format(
                    chunk.response_index, expected
                ),
                chunk.response_index,
            )
        self._slots.append(_ResponseSlot(role=chunk.role))
        logger.debug("Opened response %d (%s)", expected, chunk.role.value)

    def _close(self, chunk: CloseResponse) -> None:
        if not self._has_slot(chunk.response_index):
            if self._strict:
                self._fail(
                    "CloseResponse for unopened index {}".format(chunk.response_index),
                    chunk.response_index,
                )
            return
        self._slots[chunk.response_index].closed = True
        logger.debug("Closed response %d", chunk.response_index)

    def _has_slot(self, index: int) -> bool:
        return 0 <= index < len(self._slots)

    def _slot_for(self, index: int, what: str) -> _ResponseSlot:
        # Negative indices would otherwise address slots from the end.
        if not self._has_slot(index):
            self._fail(
                "{} for unopened response index {} ({} open)".format(
                    what, index, len(self._slots)
                ),
                index,
            )
        return self._slots[index]

    def _fail(self, message: str, index: int) -> None:
        logger.error("Invalid response chunk sequence: %s", message)
        raise ChunkSequenceError(message, response_index=index)

    def partial_messages(self) -> List[ChatMessage]:
        """Messages for the text accumulated so far, in slot order."""
        return [slot.to_message() for slot in self._slots]

    def finish(self) -> List[ChatMessage]:
        """Build the final messages, one per slot, in response_index order."""
        open_slots = sum(1 for slot in self._slots if not slot.closed)
        if open_slots:
            logger.debug("Finishing with %d response(s) never closed", open_slots)
        return self.partial_messages()


def from_response_chunks(
    chunks: Iterable[ResponseChunk],
    strict_indexes: Optional[bool] = None,
) -> List[ChatMessage]:
    """Reassemble a finite sequence of chunk events into chat messages.

    Args:
        chunks: Chunk events in arrival order.
        strict_indexes: Validate BeginResponse index ordering; None uses
            the configured default.

    Returns:
        One ChatMessage per BeginResponse, in response_index order, each
        with exactly one text segment.

    Raises:
        ChunkSequenceError: The sequence is not well-formed. No messages
            are returned in that case.
    """
    reassembler = StreamReassembler(strict_indexes=strict_indexes)
    for chunk in chunks:
        reassembler.feed(chunk)
    return reassembler.finish()


async def from_response_chunks_async(
    chunks: AsyncIterable[ResponseChunk],
    strict_indexes: Optional[bool] = None,
) -> List[ChatMessage]:
    """Same as from_response_chunks, for events arriving from a live stream."""
    reassembler = StreamReassembler(strict_indexes=strict_indexes)
    async for chunk in chunks:
        reassembler.feed(chunk)
    return reassembler.finish()

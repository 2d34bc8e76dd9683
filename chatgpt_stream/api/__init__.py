"""Inbound stream decoding: frames and lines to chunk events.

WHY: The reassembler consumes typed chunk events. Something has to turn
the service's streamed frames (and recorded SSE lines) into those events
without the core knowing about wire shapes.

HOW: models.py decodes one parsed frame object; stream.py walks text
lines, handles the data prefix and the DONE sentinel, and parses JSON.

RULES:
- No network I/O here; callers supply frames or lines
- Malformed input raises StreamFormatError
"""

from chatgpt_stream.api.models import (
    InboundChunkChoice,
    InboundResponseChunk,
    chunk_events_from_frame,
)
from chatgpt_stream.api.stream import iter_chunk_events

__all__ = [
    "InboundChunkChoice",
    "InboundResponseChunk",
    "chunk_events_from_frame",
    "iter_chunk_events",
]

"""chatgpt_stream: reassembly of streamed chat completions.

WHY: A streamed chat completion arrives as many small chunks: a role
announcement per candidate reply, text fragments interleaved across
candidates, close markers, and an end-of-stream sentinel. Applications
want complete, typed messages instead.

HOW: Three stages: decode (api: lines and frames to chunk events),
reassemble (core: chunk events to ChatMessage values), render
(formatters). Each stage is independently testable.

RULES:
- ChatMessage is the stable contract between reassembly and rendering
- Transport (HTTP, auth, retries) stays outside this package
- Any decode or sequence error aborts the stream; no partial output
"""

from chatgpt_stream.core.content import (
    ChatMessage,
    ImageUrlContent,
    Role,
    TextContent,
    image_url,
    parse_content,
    text,
)
from chatgpt_stream.core.reassembler import (
    BeginResponse,
    CloseResponse,
    ContentDelta,
    Done,
    StreamReassembler,
    from_response_chunks,
    from_response_chunks_async,
)
from chatgpt_stream.errors import (
    ChatStreamError,
    ChunkSequenceError,
    ContentParseError,
    StreamFormatError,
)

__version__ = "0.1.0"

__all__ = [
    "BeginResponse",
    "ChatMessage",
    "ChatStreamError",
    "ChunkSequenceError",
    "CloseResponse",
    "ContentDelta",
    "ContentParseError",
    "Done",
    "ImageUrlContent",
    "Role",
    "StreamFormatError",
    "StreamReassembler",
    "TextContent",
    "from_response_chunks",
    "from_response_chunks_async",
    "image_url",
    "parse_content",
    "text",
]

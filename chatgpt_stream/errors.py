"""Exception hierarchy shared by parsing, framing, and reassembly.

WHY: Callers (the CLI, or an application consuming a live stream) need to
tell "this stream is broken" apart from programming errors, and need a
single base class to catch when they want to abort one stream and move on.

HOW: ChatStreamError is the common base. Parse/format errors additionally
subclass ValueError since they describe bad input data.

RULES:
- Every error aborts the whole stream; no partial result accompanies it
- ChunkSequenceError carries the offending response_index
- StreamFormatError carries the 1-based line number when known
"""

from __future__ import annotations


class ChatStreamError(Exception):
    """Base class for all errors raised by chatgpt_stream."""


class ContentParseError(ChatStreamError, ValueError):
    """Raised when inbound message content or a role cannot be decoded.

    WHY: Content arrives either as a bare string or as a list of tagged
    segments. Anything else (unknown ``type`` discriminator, wrong shape)
    must be reported rather than silently dropped.
    """


class ChunkSequenceError(ChatStreamError):
    """Raised when the chunk sequence violates the reassembly contract.

    WHY: A content delta for a response that was never opened has no role
    to attach to. Misattributing or dropping it would corrupt the output,
    so reassembly stops instead.

    RULES:
    - response_index is the index named by the offending chunk
    """

    def __init__(self, message: str, response_index: int | None = None) -> None:
        self.response_index = response_index
        super().__init__(message)


class StreamFormatError(ChatStreamError, ValueError):
    """Raised when a recorded line or a decoded frame has an unexpected shape."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = "line {}: {}".format(line_number, message)
        super().__init__(message)

"""Line framing for recorded or live server-sent-event streams.

WHY: Streamed completions arrive as server-sent events: one
``data: {json}`` line per frame, blank separator lines, and a final
``data: [DONE]``. Replaying a captured stream (and consuming any
transport that yields text lines, such as ``httpx.Response.iter_lines()``)
needs those lines turned into chunk events.

HOW: iter_chunk_events() walks the lines lazily, strips the ``data:``
prefix, maps the DONE sentinel to Done, parses each remaining payload
with json, and hands the object to chunk_events_from_frame().

RULES:
- Blank lines and SSE comment lines (starting with ":") are skipped
- event:, id: and retry: field lines are skipped
- Other lines without the data prefix are accepted only as bare JSON
  objects or the [DONE] sentinel
- Nothing after [DONE] is read
- Invalid JSON, non-object payloads, and error frames raise
  StreamFormatError with the 1-based line number
"""

from __future__ import annotations

import json
import re
from typing import Iterable, Iterator

from chatgpt_stream.api.models import chunk_events_from_frame
from chatgpt_stream.config import DONE_SENTINEL, SSE_DATA_PREFIX
from chatgpt_stream.core.reassembler import Done, ResponseChunk
from chatgpt_stream.errors import StreamFormatError


# SSE fields other than data carry no frame content.
_SSE_OTHER_FIELD_RE = re.compile(r"^(event|id|retry)\s*:")


def _payload(line: str, line_number: int) -> str | None:
    """Return the data payload of a line, or None when it carries none."""
    stripped = line.strip()
    if not stripped or stripped.startswith(":"):
        return None
    if stripped.startswith(SSE_DATA_PREFIX):
        return stripped[len(SSE_DATA_PREFIX):].strip()
    if _SSE_OTHER_FIELD_RE.match(stripped):
        return None
    if stripped.startswith("{") or stripped == DONE_SENTINEL:
        return stripped
    raise StreamFormatError("unrecognized line {!r}".format(stripped[:40]), line_number)


def iter_chunk_events(lines: Iterable[str]) -> Iterator[ResponseChunk]:
    """Yield chunk events from stream lines, stopping at the DONE sentinel.

    Args:
        lines: Text lines of the stream, with or without trailing newlines.

    Yields:
        Chunk events in stream order, ending with Done if the sentinel
        was present.

    Raises:
        StreamFormatError: A payload is not a JSON object, reports an
            error, or does not decode into chunk events.
    """
    for line_number, line in enumerate(lines, start=1):
        payload = _payload(line, line_number)
        if payload is None:
            continue

        if payload == DONE_SENTINEL:
            yield Done()
            return

        try:
            frame = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise StreamFormatError("invalid JSON ({})".format(exc.msg), line_number) from exc

        if isinstance(frame, dict) and "error" in frame:
            error = frame["error"]
            message = error.get("message") if isinstance(error, dict) else error
            raise StreamFormatError("service reported an error: {}".format(message), line_number)

        try:
            events = chunk_events_from_frame(frame)
        except StreamFormatError as exc:
            raise StreamFormatError(str(exc), line_number) from exc

        yield from events

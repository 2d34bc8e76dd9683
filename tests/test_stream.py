"""Tests for SSE line framing.

WHY: Recorded streams and live transports both hand over text lines.
Blank separators, comments, the data prefix, and the [DONE] sentinel all
have to be handled before a frame reaches the decoder.

HOW: Feeds line lists directly, and once through an httpx streamed
response backed by MockTransport to check the iter_lines() integration.
"""

import httpx
import pytest

from chatgpt_stream.api.stream import iter_chunk_events
from chatgpt_stream.core.content import Role
from chatgpt_stream.core.reassembler import (
    BeginResponse,
    ContentDelta,
    Done,
    from_response_chunks,
)
from chatgpt_stream.errors import StreamFormatError


class TestFraming:
    """Line handling rules."""

    def test_recorded_stream(self, interleaved_lines, interleaved_events):
        assert list(iter_chunk_events(interleaved_lines)) == interleaved_events

    def test_blank_and_comment_lines_skipped(self):
        lines = [
            ": keep-alive",
            "",
            'data: {"choices":[{"delta":{"role":"user"},"index":0}]}',
            "   ",
        ]
        assert list(iter_chunk_events(lines)) == [BeginResponse(Role.USER, 0)]

    def test_event_id_and_retry_fields_skipped(self):
        lines = [
            "event: message",
            'data: {"choices":[{"delta":{"role":"assistant"},"index":0}]}',
            "id: 1",
            "retry: 1000",
            "",
            "event: message",
            'data: {"choices":[{"delta":{"content":"ok"},"index":0}]}',
            "id: 2",
            "data: [DONE]",
        ]
        events = list(iter_chunk_events(lines))
        assert events == [BeginResponse(Role.ASSISTANT, 0), ContentDelta("ok", 0), Done()]
        assert [m.render() for m in from_response_chunks(events)] == ["ok"]

    def test_unrecognized_bare_line_is_error(self):
        with pytest.raises(StreamFormatError) as exc_info:
            list(iter_chunk_events(["", "garbage here"]))
        assert exc_info.value.line_number == 2

    def test_bare_json_lines_accepted(self):
        lines = ['{"choices":[{"delta":{"content":"x"},"index":0}]}', "[DONE]"]
        assert list(iter_chunk_events(lines)) == [ContentDelta("x", 0), Done()]

    def test_data_prefix_without_space(self):
        lines = ['data:{"choices":[{"delta":{"content":"x"},"index":0}]}']
        assert list(iter_chunk_events(lines)) == [ContentDelta("x", 0)]

    def test_trailing_newlines_tolerated(self):
        lines = ['data: {"choices":[{"delta":{"content":"x"},"index":0}]}\n', "data: [DONE]\n"]
        assert list(iter_chunk_events(lines)) == [ContentDelta("x", 0), Done()]

    def test_nothing_read_after_done(self):
        lines = ["data: [DONE]", "data: not json at all"]
        assert list(iter_chunk_events(lines)) == [Done()]

    def test_stream_without_done(self):
        lines = ['data: {"choices":[{"delta":{"content":"x"},"index":0}]}']
        events = list(iter_chunk_events(lines))
        assert Done() not in events


class TestFramingErrors:
    """Malformed lines report their line number."""

    def test_invalid_json(self):
        lines = ["", "data: {not json"]
        with pytest.raises(StreamFormatError) as exc_info:
            list(iter_chunk_events(lines))
        assert exc_info.value.line_number == 2
        assert "line 2" in str(exc_info.value)

    def test_non_object_payload(self):
        with pytest.raises(StreamFormatError) as exc_info:
            list(iter_chunk_events(["data: [1, 2]"]))
        assert exc_info.value.line_number == 1

    def test_error_frame(self):
        lines = ['data: {"error": {"message": "The server is overloaded", "type": "server_error"}}']
        with pytest.raises(StreamFormatError, match="overloaded"):
            list(iter_chunk_events(lines))

    def test_events_before_error_are_yielded(self):
        lines = [
            'data: {"choices":[{"delta":{"role":"assistant"},"index":0}]}',
            "data: oops",
        ]
        events = iter_chunk_events(lines)
        assert next(events) == BeginResponse(Role.ASSISTANT, 0)
        with pytest.raises(StreamFormatError):
            next(events)


class TestHttpxLines:
    """iter_chunk_events consumes an httpx streamed response directly."""

    def test_mock_transport_stream(self, interleaved_lines):
        body = "\n".join(interleaved_lines)

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                text=body,
                headers={"content-type": "text/event-stream"},
            )

        transport = httpx.MockTransport(handler)
        with httpx.Client(transport=transport) as client:
            with client.stream("POST", "https://api.example.test/v1/chat/completions") as response:
                messages = from_response_chunks(iter_chunk_events(response.iter_lines()))

        assert [m.render() for m in messages] == ["Hello there", "Hi"]

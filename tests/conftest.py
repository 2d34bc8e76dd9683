"""Shared test fixtures for the chatgpt_stream test suite.

WHY: Several test modules need the same recorded stream: two candidate
replies whose fragments are interleaved, the way the service sends them
when more than one reply is requested.

HOW: Pytest fixtures provide the recorded SSE lines, the parsed frames,
and the equivalent chunk event sequence.

RULES:
- Candidate 0 says "Hello there", candidate 1 says "Hi"
- The recording ends with the [DONE] sentinel
"""

from typing import Any, Dict, List

import pytest

from chatgpt_stream.core.content import Role
from chatgpt_stream.core.reassembler import (
    BeginResponse,
    CloseResponse,
    ContentDelta,
    Done,
)


# ---------------------------------------------------------------------------
# Recorded two-candidate stream
# ---------------------------------------------------------------------------

INTERLEAVED_FRAMES: List[Dict[str, Any]] = [
    {"choices": [{"delta": {"role": "assistant"}, "index": 0}]},
    {"choices": [{"delta": {"role": "assistant"}, "index": 1}]},
    {"choices": [{"delta": {"content": "Hi"}, "index": 1}]},
    {"choices": [{"delta": {"content": "Hello"}, "index": 0}]},
    {"choices": [{"delta": {"content": " there"}, "index": 0}]},
    {"choices": [{"delta": {}, "index": 0}]},
    {"choices": [{"delta": {}, "index": 1}]},
]

INTERLEAVED_LINES: List[str] = [
    'data: {"choices":[{"delta":{"role":"assistant"},"index":0}]}',
    "",
    'data: {"choices":[{"delta":{"role":"assistant"},"index":1}]}',
    "",
    'data: {"choices":[{"delta":{"content":"Hi"},"index":1}]}',
    "",
    'data: {"choices":[{"delta":{"content":"Hello"},"index":0}]}',
    "",
    'data: {"choices":[{"delta":{"content":" there"},"index":0}]}',
    "",
    'data: {"choices":[{"delta":{},"index":0}]}',
    "",
    'data: {"choices":[{"delta":{},"index":1}]}',
    "",
    "data: [DONE]",
    "",
]


@pytest.fixture
def interleaved_frames():
    """Parsed frames of the two-candidate recording."""
    return list(INTERLEAVED_FRAMES)


@pytest.fixture
def interleaved_lines():
    """Raw SSE lines of the two-candidate recording."""
    return list(INTERLEAVED_LINES)


@pytest.fixture
def interleaved_events():
    """Chunk events equivalent to the two-candidate recording."""
    return [
        BeginResponse(role=Role.ASSISTANT, response_index=0),
        BeginResponse(role=Role.ASSISTANT, response_index=1),
        ContentDelta(delta="Hi", response_index=1),
        ContentDelta(delta="Hello", response_index=0),
        ContentDelta(delta=" there", response_index=0),
        CloseResponse(response_index=0),
        CloseResponse(response_index=1),
        Done(),
    ]


@pytest.fixture
def recording_file(tmp_path, interleaved_lines):
    """The two-candidate recording saved to a temporary file."""
    path = tmp_path / "stream.sse"
    path.write_text("\n".join(interleaved_lines), encoding="utf-8")
    return path

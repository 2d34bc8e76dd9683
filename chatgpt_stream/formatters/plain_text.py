"""Plain text rendering of reassembled messages.

WHY: When replaying a captured stream the quickest check is to read what
each candidate reply said. No JSON, just the text under a short header.

HOW: One block per message: a ``[index] role:`` header line, then the
rendered content. Blocks are separated by a blank line.

RULES:
- Index is the message position (= response_index)
- Content is ChatMessage.render(), unchanged
- Output ends with a single newline; empty input gives ""
- Output suffix: "-messages.txt", media type "text/plain"
"""

from __future__ import annotations

from typing import List

from chatgpt_stream.core.content import ChatMessage
from chatgpt_stream.formatters.base import BaseFormatter, FormatterOutput


class PlainTextFormatter(BaseFormatter):
    """Human-readable text, one header + body block per message."""

    @property
    def name(self) -> str:
        return "Plain text"

    def format(self, messages: List[ChatMessage]) -> list[FormatterOutput]:
        blocks = [
            "[{}] {}:\n{}".format(index, message.role.value, message.render())
            for index, message in enumerate(messages)
        ]
        content = "\n\n".join(blocks)
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix="-messages.txt",
                content=content,
                media_type="text/plain",
            )
        ]

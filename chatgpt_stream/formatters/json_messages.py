"""Wire-shaped JSON output of reassembled messages.

WHY: Reassembled replies are usually fed back to the service as history
or stored by another tool. Both want the same message shape the service
accepts: role name plus a list of tagged content segments.

HOW: Serializes each message with ChatMessage.to_dict() under a
top-level "messages" key and validates the result with jsonschema
against chat_messages_schema.json before returning.

RULES:
- Message order is preserved (response_index order)
- Content is always a list of tagged segments, never a bare string
- Schema validation is mandatory; raises on invalid output
- Output suffix: "-messages.json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

import jsonschema

from chatgpt_stream.core.content import ChatMessage
from chatgpt_stream.formatters.base import BaseFormatter, FormatterOutput

SCHEMA_PATH = Path(__file__).resolve().parent / "chat_messages_schema.json"

_CACHED_SCHEMA: dict[str, Any] | None = None


def get_schema() -> dict[str, Any]:
    """Load the message schema, cached after the first call."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


class JsonMessagesFormatter(BaseFormatter):
    """JSON document with the messages in their wire shape."""

    @property
    def name(self) -> str:
        return "Chat messages JSON"

    def format(self, messages: List[ChatMessage]) -> list[FormatterOutput]:
        """Serialize messages to JSON.

        Raises:
            jsonschema.ValidationError: If the generated JSON does not
                conform to the message schema.
        """
        output = {"messages": [message.to_dict() for message in messages]}
        jsonschema.validate(instance=output, schema=get_schema())

        return [
            FormatterOutput(
                suffix="-messages.json",
                content=json.dumps(output, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]

"""Output formatter registry.

WHY: The CLI needs a single lookup to find a formatter by name. A central
dict makes adding a format trivial: write the class, import it here, add
one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["plain_text"]()``.

RULES:
- Keys are snake_case identifiers (used in the --format flag and config)
- Values are BaseFormatter subclasses (not instances)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chatgpt_stream.formatters.json_messages import JsonMessagesFormatter
from chatgpt_stream.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from chatgpt_stream.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "plain_text": PlainTextFormatter,
    "json_messages": JsonMessagesFormatter,
}

"""Abstract base formatter and output container.

WHY: Reassembled messages are printed for humans, saved as JSON, or piped
to other tools. A common interface lets the CLI pick a formatter by key
without knowing how each one renders.

HOW: BaseFormatter is an ABC with a ``name`` property and a ``format()``
method. FormatterOutput bundles a file suffix with its content and MIME
type.

RULES:
- Subclasses MUST implement ``name`` and ``format()``
- ``format()`` returns a list; current formatters return one item
- ``suffix`` starts with a hyphen, e.g. ``"-messages.json"``
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from chatgpt_stream.core.content import ChatMessage


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the recording stem,
                e.g. ``"-messages.txt"``.
        content: The rendered content.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all message formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Plain text'."""

    @abstractmethod
    def format(self, messages: List[ChatMessage]) -> list[FormatterOutput]:
        """Render reassembled messages (in response_index order)."""

"""Content model and stream reassembly.

WHY: The core package holds the only stateful logic in the project: the
typed message model and the fold from chunk events to messages. Both are
transport-agnostic and consumed by the CLI and formatters alike.

HOW: content.py defines roles, segments, and ChatMessage along with
inbound content parsing. reassembler.py defines the chunk events and
the StreamReassembler.

RULES:
- No I/O in this package
- Wire-frame decoding belongs to chatgpt_stream.api, not here
"""

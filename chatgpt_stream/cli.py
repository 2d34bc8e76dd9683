"""Command-line interface for replaying recorded completion streams.

WHY: Debugging a streaming integration usually starts from a captured
stream: "what did each candidate actually say?" The CLI wires together
line framing, frame decoding, reassembly, and a formatter behind a single
command so a recording can be checked without writing code.

HOW: Uses argparse to accept a recording path (or "-" for stdin), the
output format, an optional output file, and the strict-index switch.
Lines go through iter_chunk_events() into from_response_chunks(); the
selected formatter renders the messages to stdout or to --output.

RULES:
- Positional argument: recording file path, or "-" for stdin
- --format: one formatter key (default: DEFAULT_OUTPUT_FORMAT from config)
- --strict-indexes/--no-strict-indexes: default from config
- Status and error output goes to stderr (not stdout)
- Exit code 1 on missing or unreadable input, unwritable output,
  unknown format, or any ChatStreamError
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from chatgpt_stream.api.stream import iter_chunk_events
from chatgpt_stream.config import DEFAULT_OUTPUT_FORMAT, resolve_log_level
from chatgpt_stream.core.content import ChatMessage
from chatgpt_stream.core.reassembler import from_response_chunks
from chatgpt_stream.errors import ChatStreamError
from chatgpt_stream.formatters import FORMATTERS

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    _status("Error: {}".format(msg))
    sys.exit(1)


def _read_lines(source: str) -> List[str]:
    try:
        if source == "-":
            return sys.stdin.read().splitlines()

        path = Path(source)
        if not path.is_file():
            _fail("File not found: {}".format(path))
        return path.read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as e:
        _fail("Recording is not valid UTF-8: {}".format(e))
    except OSError as e:
        _fail("Could not read recording: {}".format(e))


def reassemble_lines(
    lines: List[str],
    strict_indexes: Optional[bool] = None,
) -> List[ChatMessage]:
    """Decode recorded stream lines and reassemble them into messages.

    Raises:
        ChatStreamError: The recording is malformed or the chunk sequence
            is inconsistent.
    """
    return from_response_chunks(iter_chunk_events(lines), strict_indexes=strict_indexes)


def _run(args: argparse.Namespace) -> None:
    if args.format not in FORMATTERS:
        available = ", ".join(sorted(FORMATTERS.keys()))
        _fail("Unknown format '{}'. Available formats: {}".format(args.format, available))

    lines = _read_lines(args.recording)

    try:
        messages = reassemble_lines(lines, strict_indexes=args.strict_indexes)
    except ChatStreamError as e:
        logger.debug("Reassembly failed", exc_info=True)
        _fail("Could not reassemble stream: {}".format(e))

    _status("Reassembled {} message(s).".format(len(messages)))

    formatter = FORMATTERS[args.format]()
    outputs = formatter.format(messages)
    content = "".join(output.content for output in outputs)

    if args.output:
        out_path = Path(args.output)
        try:
            out_path.write_text(content, encoding="utf-8")
        except OSError as e:
            _fail("Could not write output: {}".format(e))
        _status("Saved: {}".format(out_path))
    else:
        sys.stdout.write(content)
        sys.stdout.flush()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="chatgpt_stream",
        description="Reassemble a recorded streamed chat completion into "
                    "complete messages, one per candidate reply.",
    )

    parser.add_argument(
        "recording",
        help="Recorded stream lines (\"data: {...}\" per frame), or '-' for stdin.",
    )

    parser.add_argument(
        "--format",
        default=DEFAULT_OUTPUT_FORMAT,
        help="Output format. Available: {} (default: %(default)s).".format(
            ", ".join(sorted(FORMATTERS.keys()))
        ),
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Write the output to this file instead of stdout.",
    )

    parser.add_argument(
        "--strict-indexes",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Reject response indices that are not 0, 1, 2, ... in order "
             "(default: CHATGPT_STREAM_STRICT_INDEXES).",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m chatgpt_stream``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=resolve_log_level(args.verbose),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    _run(args)


if __name__ == "__main__":
    main()

"""Configuration constants, wire sentinels, and .env loading.

WHY: Centralizes the few knobs the reassembler and the replay CLI expose
so they are easy to find and override per deployment without touching
code. Wire-level constants live here too so the framing code and the
tests agree on them.

HOW: python-dotenv loads the .env file on import. Constants are plain
module-level values; boolean flags are parsed from "true"/"false" strings.

RULES:
- Every default can be overridden via environment variables
- STRICT_RESPONSE_INDEXES is off by default: the upstream service's
  index ordering is trusted unless explicitly asked otherwise
- DONE_SENTINEL and SSE_DATA_PREFIX are wire constants, not settings
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the working directory (where the command is run from)
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Reassembly behaviour
# ---------------------------------------------------------------------------

STRICT_RESPONSE_INDEXES = _env_flag("CHATGPT_STREAM_STRICT_INDEXES", "false")
"""Validate that BeginResponse indices arrive ascending and gap-free from 0."""

# ---------------------------------------------------------------------------
# CLI defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_FORMAT = os.getenv("CHATGPT_STREAM_OUTPUT_FORMAT", "plain_text")
LOG_LEVEL = os.getenv("CHATGPT_STREAM_LOG_LEVEL", "WARNING").upper()

# ---------------------------------------------------------------------------
# Wire constants
# ---------------------------------------------------------------------------

DONE_SENTINEL = "[DONE]"
"""Out-of-band end-of-stream marker sent as the last data line."""

SSE_DATA_PREFIX = "data:"


def resolve_log_level(verbose: bool = False) -> int:
    """Map LOG_LEVEL (or --verbose) to a logging level number.

    Unknown level names fall back to WARNING rather than failing startup.
    """
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName(LOG_LEVEL)
    return level if isinstance(level, int) else logging.WARNING

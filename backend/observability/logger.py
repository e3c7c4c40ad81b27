"""
JSONL event logger.

- Write one JSON object per line
- Output to stdout
- No buffering, no batching
- No side effects beyond logging
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any, Mapping, Callable


_LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()

_print: Callable[[str], None] = _stdout_print

_min_level: int = _LEVELS["INFO"]
_json_lines: bool = True


def configure(*, level: str = "INFO", json_lines: bool = True) -> None:
    """
    Set the process-wide minimum level and output format.

    Called once by the app factory. Unknown level names fall back to INFO.
    """
    global _min_level, _json_lines  # pylint: disable=global-statement
    _min_level = _LEVELS.get(level.upper(), _LEVELS["INFO"])
    _json_lines = json_lines


def now_ms() -> int:
    """Wall-clock milliseconds, used for ts_ms fields."""
    return time.time_ns() // 1_000_000


def log_event(event: Mapping[str, Any], *, level: str = "INFO") -> None:
    """
    Write a single event line to stdout.

    The caller supplies a fully-formed event dict (event_type, session_id, ...).
    ts_ms is added when missing.

    This function:
    - Drops events below the configured level
    - Serializes to JSON (or key=value text when JSON logs are disabled)
    - Writes exactly one line
    - Never raises
    """
    if _LEVELS.get(level, _LEVELS["INFO"]) < _min_level:
        return

    payload: dict[str, Any] = dict(event)
    payload.setdefault("ts_ms", now_ms())
    if level != "INFO":
        payload.setdefault("level", level)

    if not _json_lines:
        _print(" ".join(f"{k}={v}" for k, v in payload.items()))
        return

    try:
        line = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        # Last-resort fallback, logging must never crash the runtime
        fallback: dict[str, Any] = {
            "ts_ms": payload.get("ts_ms"),
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)

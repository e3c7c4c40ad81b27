"""
Timing helpers for observability.

Responsibilities:
- Measure external-call durations using monotonic time
- Emit one METRIC_TIMER event per measured block via observability.logger
- Never aggregate

Design notes:
- Durations use monotonic time
- Event timestamps (ts_ms) use wall-clock time for readability
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from observability import logger


@contextmanager
def timed(
    name: str,
    *,
    session_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> Iterator[dict[str, Any]]:
    """
    Measure the enclosed block and emit a METRIC_TIMER event.

    Yields a mutable details dict so the block can attach an outcome
    (e.g. ``metric["outcome"] = "timeout"``). If the block raises, the
    outcome defaults to the exception class name and the exception
    propagates unchanged.

    Usage:
        with timed("transcription", session_id=session.session_id) as metric:
            text = await adapter.transcribe(chunks)
            metric["chars"] = len(text)
    """
    fields: dict[str, Any] = dict(details or {})
    start_ns = time.monotonic_ns()
    try:
        yield fields
    except BaseException as exc:
        fields.setdefault("outcome", type(exc).__name__)
        raise
    finally:
        fields.setdefault("outcome", "ok")
        logger.log_event({
            "event_type": "METRIC_TIMER",
            "metric": name,
            "value_ms": (time.monotonic_ns() - start_ns) // 1_000_000,
            "session_id": session_id,
            "details": fields,
        })

"""
Voice session container.

- One instance per WebSocket connection
- Owns the chunk buffer and the busy flag
- Mutated only by DispatchPipeline, driven by this session's own events
- NOT a state machine
- Contains no dispatch logic
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from audio.buffer import ChunkBuffer


# Delivers one outbound JSON message to the session's client.
OutboundSink = Callable[[dict[str, Any]], Awaitable[None]]


# ---------------------------------------------------------------------
# VoiceSession
# ---------------------------------------------------------------------


@dataclass
class VoiceSession:
    """Mutable runtime container for a single client connection."""

    # ------------------------------------------------------------------
    # Identity / lifecycle
    # ------------------------------------------------------------------

    session_id: str
    send: OutboundSink | None = None
    created_at: float = field(default_factory=time.time)
    closed: bool = False

    # ------------------------------------------------------------------
    # Buffering & dispatch state
    # ------------------------------------------------------------------

    buffer: ChunkBuffer = field(default_factory=ChunkBuffer)
    busy: bool = False
    rounds_started: int = 0

    # ------------------------------------------------------------------
    # Observability helpers (read-only)
    # ------------------------------------------------------------------

    def log_context(self) -> dict[str, Any]:
        """
        Return standard logging context for this session.
        """
        return {
            "session_id": self.session_id,
            "busy": self.busy,
            "buffered_chunks": len(self.buffer),
            "rounds_started": self.rounds_started,
        }

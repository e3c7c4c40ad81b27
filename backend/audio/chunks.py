"""
Audio chunk primitives.

Pure data containers only.
No behavior beyond concatenation, no queues, no timing logic.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AudioChunk:
    """
    One captured slice of microphone audio (~100ms).

    sequence_num:
        Per-session arrival counter assigned by the server (starts at 1).
        Used for ordering assertions and debugging only.

    data:
        Raw bytes exactly as sent by the client. Never inspected or decoded.

    ts_ms:
        Wall-clock timestamp (milliseconds) when the chunk was received.
        Observability only.
    """
    sequence_num: int
    data: bytes
    ts_ms: int


@dataclass(frozen=True)
class ChunkBatch:
    """
    Immutable snapshot of a session buffer taken at flush time.

    Chunks keep their arrival order.
    """
    chunks: tuple[AudioChunk, ...]

    def __len__(self) -> int:
        return len(self.chunks)

    @property
    def payloads(self) -> tuple[bytes, ...]:
        """Chunk bytes in arrival order."""
        return tuple(c.data for c in self.chunks)

    @property
    def sequence_range(self) -> tuple[int, int] | None:
        """(first, last) sequence numbers, or None for an empty batch."""
        if not self.chunks:
            return None
        return (self.chunks[0].sequence_num, self.chunks[-1].sequence_num)

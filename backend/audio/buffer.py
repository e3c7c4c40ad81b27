"""
Per-session chunk buffer with atomic flush.

Requirements:
- Insertion order preserved (temporal order of speech)
- Append-only until flushed
- flush() returns an exact, exclusive snapshot and empties the buffer
  in the same synchronous step
- Drop reasons distinguishable (busy vs empty) for observability
- Deterministic, synchronous behavior
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from audio.chunks import AudioChunk, ChunkBatch
from spec import chunks_to_seconds


class DropReason(str, Enum):
    """
    Reason an inbound chunk was not buffered.
    """
    BUSY = "busy"
    EMPTY = "empty"


@dataclass
class DropCounters:
    """
    Drop counters for observability.
    """
    busy: int = 0
    empty: int = 0


class ChunkBuffer:
    """
    Ordered accumulation of AudioChunks for one session.

    The buffer never decides when to flush; the dispatch pipeline
    compares len(buffer) against its threshold.
    """

    def __init__(self) -> None:
        self._chunks: list[AudioChunk] = []
        self._next_seq: int = 1
        self.drops: DropCounters = DropCounters()

    # -------------------------
    # Core operations
    # -------------------------

    def append(self, data: bytes, *, ts_ms: int) -> AudioChunk:
        """
        Wrap raw bytes in an AudioChunk and append it.

        Returns the appended chunk.
        """
        chunk = AudioChunk(sequence_num=self._next_seq, data=data, ts_ms=ts_ms)
        self._next_seq += 1
        self._chunks.append(chunk)
        return chunk

    def flush(self) -> ChunkBatch:
        """
        Snapshot and clear the buffer.

        The live list is swapped out rather than copied, so a chunk
        appended after this call always starts the next batch.
        """
        taken, self._chunks = self._chunks, []
        return ChunkBatch(chunks=tuple(taken))

    def record_drop(self, reason: DropReason) -> None:
        """Count a chunk that was rejected before reaching the buffer."""
        if reason is DropReason.BUSY:
            self.drops.busy += 1
        else:
            self.drops.empty += 1

    def clear(self) -> int:
        """
        Discard all buffered chunks without dispatching them.

        Returns the number of chunks discarded.
        """
        discarded = len(self._chunks)
        self._chunks = []
        return discarded

    # -------------------------
    # Introspection helpers
    # -------------------------

    def __len__(self) -> int:
        return len(self._chunks)

    def depth_seconds(self) -> float:
        """Approximate buffered audio duration."""
        return chunks_to_seconds(len(self._chunks))

    def total_drops(self) -> int:
        """Total chunks rejected for any reason."""
        return self.drops.busy + self.drops.empty

    def snapshot(self) -> dict[str, float | int]:
        """
        Lightweight snapshot for logging.
        """
        return {
            "chunks": len(self._chunks),
            "depth_s": self.depth_seconds(),
            "dropped_busy": self.drops.busy,
            "dropped_empty": self.drops.empty,
            "dropped_total": self.total_drops(),
        }

# pylint: disable=missing-module-docstring,missing-function-docstring

from audio.buffer import ChunkBuffer, DropReason
from audio.chunks import ChunkBatch
from spec import AUDIO_CHUNK_MS


# ---------------------------------------------------------------------
# Append / flush
# ---------------------------------------------------------------------

def test_append_assigns_increasing_sequence_numbers():
    buf = ChunkBuffer()

    first = buf.append(b"a", ts_ms=1)
    second = buf.append(b"b", ts_ms=2)

    assert (first.sequence_num, second.sequence_num) == (1, 2)
    assert len(buf) == 2


def test_flush_returns_snapshot_in_arrival_order_and_empties_buffer():
    buf = ChunkBuffer()
    for i in range(5):
        buf.append(bytes([i]), ts_ms=i)

    batch = buf.flush()

    assert isinstance(batch, ChunkBatch)
    assert batch.payloads == tuple(bytes([i]) for i in range(5))
    assert batch.sequence_range == (1, 5)
    assert len(buf) == 0


def test_chunk_appended_after_flush_starts_next_batch():
    buf = ChunkBuffer()
    buf.append(b"old", ts_ms=0)

    first = buf.flush()
    buf.append(b"new", ts_ms=1)
    second = buf.flush()

    assert first.payloads == (b"old",)
    assert second.payloads == (b"new",)
    # Sequence numbers keep counting across flushes
    assert second.sequence_range == (2, 2)


def test_flush_of_empty_buffer_is_empty_batch():
    batch = ChunkBuffer().flush()

    assert len(batch) == 0
    assert batch.sequence_range is None
    assert batch.payloads == ()


# ---------------------------------------------------------------------
# Drops / clear
# ---------------------------------------------------------------------

def test_drop_reasons_accounted_separately():
    buf = ChunkBuffer()

    buf.record_drop(DropReason.BUSY)
    buf.record_drop(DropReason.BUSY)
    buf.record_drop(DropReason.EMPTY)

    assert buf.drops.busy == 2
    assert buf.drops.empty == 1
    assert buf.total_drops() == 3
    assert len(buf) == 0


def test_clear_discards_without_counting_drops():
    buf = ChunkBuffer()
    buf.append(b"x", ts_ms=0)
    buf.append(b"y", ts_ms=0)

    assert buf.clear() == 2
    assert len(buf) == 0
    assert buf.total_drops() == 0


def test_snapshot_reports_depth_in_seconds():
    buf = ChunkBuffer()
    for _ in range(3):
        buf.append(b"x", ts_ms=0)

    snap = buf.snapshot()

    assert snap["chunks"] == 3
    assert snap["depth_s"] == 3 * AUDIO_CHUNK_MS / 1000.0

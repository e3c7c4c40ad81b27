"""
Buffering & dispatch pipeline.

Responsibilities:
- Create / discard sessions in the registry
- Decide, per inbound chunk, whether to drop, buffer, or flush-and-dispatch
- Run one transcription round per flush as a background task:
  transcribe -> transcription msg -> responder -> ai-response msg
- Detach speech synthesis after the text answer was sent
- Release the busy flag on every exit path of a round

Guarantees:
- At most one in-flight round per session
- Append + threshold check + flush happen in one synchronous step, so
  chunks are never lost, duplicated, or reordered across a flush boundary
- Chunks arriving while the session is busy are dropped, not buffered
- Every external call is bounded by timeout_s
- One session's failure never touches another session's state
"""

from __future__ import annotations

import asyncio
import math
from typing import Any

from adapters.asr.base import TranscriptionAdapter
from adapters.tts.base import SpeechSynthesisAdapter
from audio.buffer import DropReason
from audio.chunks import ChunkBatch
from observability.logger import log_event, now_ms
from observability.metrics import timed
from protocol.messages import (
    Answer,
    TranscriptEntry,
    ai_response_message,
    error_message,
    transcription_message,
    tts_audio_message,
)
from responder.responder import Responder
from session.registry import SessionExists, SessionRegistry
from session.voice_session import OutboundSink, VoiceSession
from spec import (
    DISPATCH_THRESHOLD_CHUNKS,
    EXTERNAL_CALL_TIMEOUT_S,
    TRANSCRIPTION_FAILED_MESSAGE,
)


class DispatchPipeline:
    """
    Process-wide dispatcher shared by all connections.

    Adapters and the responder are injected; the pipeline never builds
    provider clients itself.
    """

    def __init__(
        self,
        *,
        registry: SessionRegistry,
        transcriber: TranscriptionAdapter,
        responder: Responder,
        synthesizer: SpeechSynthesisAdapter | None = None,
        threshold: int = DISPATCH_THRESHOLD_CHUNKS,
        timeout_s: float = EXTERNAL_CALL_TIMEOUT_S,
    ) -> None:
        if threshold < 1:
            raise ValueError("threshold must be >= 1")
        if not math.isfinite(timeout_s) or timeout_s <= 0:
            raise ValueError("timeout_s must be a finite number > 0")

        self._registry = registry
        self._transcriber = transcriber
        self._responder = responder
        self._synthesizer = synthesizer
        self._threshold = threshold
        self._timeout_s = timeout_s

        # Background task -> owning session_id
        self._tasks: dict[asyncio.Task[None], str] = {}

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    @property
    def threshold(self) -> int:
        return self._threshold

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def on_session_start(
        self, session_id: str, send: OutboundSink | None = None
    ) -> VoiceSession:
        """Register a fresh session (empty buffer, not busy)."""
        try:
            session = self._registry.create(session_id, send=send)
        except SessionExists:
            log_event({
                "event_type": "SESSION_ALREADY_STARTED",
                "session_id": session_id,
            }, level="WARNING")
            existing = self._registry.get(session_id)
            assert existing is not None
            return existing

        log_event({
            "event_type": "SESSION_STARTED",
            "session_id": session_id,
            "active_sessions": len(self._registry),
        })
        return session

    async def on_session_end(self, session_id: str) -> None:
        """
        Discard the session and any unflushed chunks.

        In-flight rounds and synthesis tasks for the session are cancelled.
        No partial flush is attempted.
        """
        session = self._registry.remove(session_id)
        if session is None:
            log_event({
                "event_type": "SESSION_END_UNKNOWN",
                "session_id": session_id,
            }, level="DEBUG")
            return

        buffer_state = session.buffer.snapshot()
        discarded = session.buffer.clear()
        cancelled = await self._cancel_session_tasks(session_id)

        log_event({
            "event_type": "SESSION_ENDED",
            "session_id": session_id,
            "discarded_chunks": discarded,
            "cancelled_tasks": cancelled,
            "rounds_started": session.rounds_started,
            "buffer": buffer_state,
            "active_sessions": len(self._registry),
        })

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------

    def on_chunk_received(self, session_id: str, chunk: Any) -> bool:
        """
        Handle one inbound audio chunk.

        Synchronous on purpose: nothing can interleave between the append,
        the threshold check and the flush for this session.

        Returns:
            True if the chunk was buffered, False if it was discarded.
        """
        session = self._registry.get(session_id)
        if session is None:
            log_event({
                "event_type": "CHUNK_FOR_UNKNOWN_SESSION",
                "session_id": session_id,
            }, level="DEBUG")
            return False

        if not isinstance(chunk, (bytes, bytearray, memoryview)) or len(chunk) == 0:
            session.buffer.record_drop(DropReason.EMPTY)
            log_event({
                "event_type": "CHUNK_DISCARDED_EMPTY",
                "session_id": session_id,
            }, level="DEBUG")
            return False

        if session.busy:
            session.buffer.record_drop(DropReason.BUSY)
            log_event({
                "event_type": "CHUNK_DROPPED_BUSY",
                "session_id": session_id,
                "dropped_busy": session.buffer.drops.busy,
            }, level="DEBUG")
            return False

        session.buffer.append(bytes(chunk), ts_ms=now_ms())

        if len(session.buffer) >= self._threshold:
            self._dispatch(session)

        return True

    def on_wake_word(self, session_id: str) -> None:
        """Advisory client signal. Logged only; no state change."""
        log_event({
            "event_type": "WAKE_WORD_DETECTED",
            "session_id": session_id,
            "known_session": session_id in self._registry,
        })

    # ------------------------------------------------------------------
    # Task management
    # ------------------------------------------------------------------

    async def join(self) -> None:
        """
        Wait until no background task is in flight.

        Rounds spawn synthesis tasks, so this loops until the set drains.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel every background task (process shutdown)."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def in_flight(self, session_id: str | None = None) -> int:
        if session_id is None:
            return len(self._tasks)
        return sum(1 for sid in self._tasks.values() if sid == session_id)

    def _spawn(self, session: VoiceSession, coro: Any) -> asyncio.Task[None]:
        task: asyncio.Task[None] = asyncio.create_task(coro)
        self._tasks[task] = session.session_id

        # Cleanup when done
        def _cleanup(t: asyncio.Task[None]) -> None:
            self._tasks.pop(t, None)

        task.add_done_callback(_cleanup)
        return task

    async def _cancel_session_tasks(self, session_id: str) -> int:
        tasks = [t for t, sid in self._tasks.items() if sid == session_id]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        return len(tasks)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _dispatch(self, session: VoiceSession) -> None:
        """Flush the buffer, mark busy, and start a round."""
        buffer_state = session.buffer.snapshot()
        batch = session.buffer.flush()
        session.busy = True
        session.rounds_started += 1

        log_event({
            "event_type": "BATCH_DISPATCHED",
            "session_id": session.session_id,
            "round": session.rounds_started,
            "chunks": len(batch),
            "sequence_range": batch.sequence_range,
            "buffer": buffer_state,
        })

        self._spawn(session, self._run_round(session, batch))

    async def _run_round(self, session: VoiceSession, batch: ChunkBatch) -> None:
        try:
            await self._process_batch(session, batch)
        except asyncio.CancelledError:
            log_event({
                "event_type": "ROUND_CANCELLED",
                "session_id": session.session_id,
                "round": session.rounds_started,
            })
            raise
        finally:
            session.busy = False
            log_event({
                "event_type": "ROUND_COMPLETE",
                **session.log_context(),
            }, level="DEBUG")

    async def _process_batch(self, session: VoiceSession, batch: ChunkBatch) -> None:
        sid = session.session_id

        try:
            with timed("transcription", session_id=sid, details={"chunks": len(batch)}):
                text = await asyncio.wait_for(
                    self._transcriber.transcribe(batch.payloads),
                    timeout=self._timeout_s,
                )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_event({
                "event_type": "TRANSCRIPTION_FAILED",
                "session_id": sid,
                "exception": type(exc).__name__,
                "message": str(exc),
            }, level="ERROR")
            await self._emit(session, error_message(TRANSCRIPTION_FAILED_MESSAGE))
            return

        question = text.strip()
        if not question:
            log_event({
                "event_type": "TRANSCRIPT_EMPTY",
                "session_id": sid,
            }, level="DEBUG")
            return

        await self._emit(session, transcription_message(TranscriptEntry(text=question)))

        answer = Answer(
            question=question,
            text=await self._responder.answer(question, session_id=sid),
        )
        await self._emit(session, ai_response_message(answer))

        if self._synthesizer is not None:
            self._spawn(session, self._run_synthesis(session, answer))

    async def _run_synthesis(self, session: VoiceSession, answer: Answer) -> None:
        """
        Detached TTS for an answer that was already delivered as text.

        Failures are logged only; the client never sees an error for them.
        """
        assert self._synthesizer is not None
        try:
            with timed("tts", session_id=session.session_id, details={"chars": len(answer.text)}):
                audio = await asyncio.wait_for(
                    self._synthesizer.synthesize(answer.text),
                    timeout=self._timeout_s,
                )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_event({
                "event_type": "TTS_FAILED",
                "session_id": session.session_id,
                "exception": type(exc).__name__,
                "message": str(exc),
            }, level="WARNING")
            return

        await self._emit(session, tts_audio_message(audio))

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    async def _emit(self, session: VoiceSession, msg: dict[str, Any]) -> None:
        """Deliver to the session's client. Never raises."""
        if session.closed or session.send is None:
            log_event({
                "event_type": "OUTBOUND_DROPPED",
                "session_id": session.session_id,
                "msg_type": msg.get("type"),
            }, level="DEBUG")
            return

        try:
            await session.send(msg)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_event({
                "event_type": "OUTBOUND_SEND_FAILED",
                "session_id": session.session_id,
                "msg_type": msg.get("type"),
                "exception": type(exc).__name__,
                "message": str(exc),
            }, level="WARNING")

"""
OpenAI Whisper transcription adapter.

Role in the system:
- Receives a flushed batch of opaque chunk payloads.
- Writes their concatenation to a named temporary file for the duration of
  one provider call (the provider API takes a file upload).
- Returns the recognized text.

Architectural constraints:
- No codec work: bytes are written exactly as received.
- The temporary file is removed in a finally block; removal failures are
  logged, never raised.
- File creation, writes and removal run in a worker thread so the event
  loop keeps serving other sessions.
- Provider errors are wrapped in TranscriptionError.
"""

from __future__ import annotations

import asyncio
import os
import tempfile
from typing import Any, Sequence

from adapters.asr.base import TranscriptionAdapter
from adapters.errors import TranscriptionError
from observability.logger import log_event
from spec import AUDIO_CHUNK_CONTAINER_SUFFIX, DEFAULT_TRANSCRIPTION_MODEL


class OpenAITranscriptionAdapter(TranscriptionAdapter):
    """
    Batch transcription via ``client.audio.transcriptions.create``.

    One instance is shared by all sessions; it holds no per-call state.
    """

    def __init__(
        self,
        *,
        client: Any,  # Type: openai.AsyncOpenAI
        model: str = DEFAULT_TRANSCRIPTION_MODEL,
        temp_dir: str | None = None,
        suffix: str = AUDIO_CHUNK_CONTAINER_SUFFIX,
    ) -> None:
        self._client = client
        self._model = model
        self._temp_dir = temp_dir
        self._suffix = suffix

    async def transcribe(self, chunks: Sequence[bytes]) -> str:
        audio = b"".join(chunks)
        if not audio:
            return ""

        write = asyncio.ensure_future(asyncio.to_thread(self._write_temp_file, audio))
        try:
            path = await asyncio.shield(write)
        except asyncio.CancelledError:
            # The worker thread still finishes the write; remove its file then.
            write.add_done_callback(self._discard_orphan)
            raise

        try:
            with open(path, "rb") as f:
                response = await self._client.audio.transcriptions.create(
                    model=self._model,
                    file=f,
                )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise TranscriptionError(f"{type(exc).__name__}: {exc}") from exc
        finally:
            await asyncio.to_thread(self._remove_temp_file, path)

        return self._extract_text(response)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _write_temp_file(self, audio: bytes) -> str:
        try:
            fd, path = tempfile.mkstemp(suffix=self._suffix, dir=self._temp_dir)
        except OSError as exc:
            raise TranscriptionError(f"temp file unavailable: {exc}") from exc

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(audio)
        except OSError as exc:
            self._remove_temp_file(path)
            raise TranscriptionError(f"temp file write failed: {exc}") from exc
        return path

    @staticmethod
    def _remove_temp_file(path: str) -> None:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            log_event({
                "event_type": "TEMP_FILE_CLEANUP_FAILED",
                "path": path,
                "error": str(exc),
            }, level="WARNING")

    @classmethod
    def _discard_orphan(cls, write: asyncio.Future[str]) -> None:
        if write.cancelled() or write.exception() is not None:
            return
        cls._remove_temp_file(write.result())

    @staticmethod
    def _extract_text(response: Any) -> str:
        """
        Pull text from the provider response.

        The SDK returns an object with ``.text`` for JSON formats and a
        plain string for ``response_format="text"``.
        """
        if isinstance(response, str):
            return response
        text = getattr(response, "text", None)
        if not isinstance(text, str):
            raise TranscriptionError("transcription response has no text")
        return text

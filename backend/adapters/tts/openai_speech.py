"""
OpenAI speech adapter.

Implements one-shot text-to-speech via ``client.audio.speech.create``.

Role in the system:
- Receives a complete answer string.
- Performs one synthesis call.
- Returns the encoded audio (mp3 by provider default) as bytes.

Architectural constraints:
- No chunking, retries, timers, or scheduling.
- No direct interaction with the WebSocket.
"""
from __future__ import annotations

from typing import Any

from adapters.errors import SpeechSynthesisError
from adapters.tts.base import SpeechSynthesisAdapter
from spec import DEFAULT_TTS_MODEL, DEFAULT_TTS_VOICE


class OpenAISpeechAdapter(SpeechSynthesisAdapter):
    """OpenAI TTS adapter, shared by all sessions."""

    def __init__(
        self,
        *,
        client: Any,  # Type: openai.AsyncOpenAI
        model: str = DEFAULT_TTS_MODEL,
        voice: str = DEFAULT_TTS_VOICE,
    ) -> None:
        self._client = client
        self._model = model
        self._voice = voice

    async def synthesize(self, text: str) -> bytes:
        try:
            response = await self._client.audio.speech.create(
                model=self._model,
                voice=self._voice,
                input=text,
            )
            audio = response.content
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise SpeechSynthesisError(f"{type(exc).__name__}: {exc}") from exc

        if not audio:
            raise SpeechSynthesisError("empty audio")
        return bytes(audio)

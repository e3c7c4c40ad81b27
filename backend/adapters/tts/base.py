"""
Speech synthesis adapter contract.

This module defines the *interface only*: no scheduling, retries, timers, or
client delivery live here.

Key invariants:
- The caller invokes synthesis only after the text answer was delivered.
- The adapter returns audio bytes or raises SpeechSynthesisError; the caller
  decides that failures are logged and never surfaced.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SpeechSynthesisAdapter(ABC):
    """
    Abstract interface for a one-shot (non-streaming) TTS adapter.

    Non-responsibilities:
    - No background task management (the pipeline detaches the call)
    - No timeout (the pipeline bounds every call)
    - No base64 / wire encoding
    """

    @abstractmethod
    async def synthesize(self, text: str) -> bytes:
        """
        Synthesize speech for a complete answer.

        Args:
            text: Non-empty answer text.

        Returns:
            Encoded audio bytes in the provider's output format.

        Raises:
            SpeechSynthesisError on provider failure or empty audio.
        """
        raise NotImplementedError

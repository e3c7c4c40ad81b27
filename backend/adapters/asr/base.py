"""
Transcription adapter contract.

This module defines the *interface only*: no buffering, thresholds, retries,
timeouts, or session state live here.

Key invariants:
- The adapter receives an already-flushed, ordered batch of chunk payloads.
- The adapter returns text or raises TranscriptionError; it never emits
  messages to the client.
- Any temporary storage is scoped to a single call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class TranscriptionAdapter(ABC):
    """
    Abstract interface for a batch speech-to-text adapter.

    Implementations are responsible for:
    - Concatenating chunk payloads in the given order
    - Calling the provider
    - Cleaning up any per-call resources on every exit path

    Non-responsibilities:
    - No busy flag / round tracking
    - No timeout (the pipeline bounds every call)
    - No empty-transcript policy (the pipeline decides)
    """

    @abstractmethod
    async def transcribe(self, chunks: Sequence[bytes]) -> str:
        """
        Transcribe one batch of audio chunks.

        Args:
            chunks: Raw chunk payloads in arrival order.

        Returns:
            Recognized text (may be empty).

        Raises:
            TranscriptionError if the provider call fails.
        """
        raise NotImplementedError

"""
Text-generation adapter contract.

Purpose:
- Define the interface for a single, non-streaming completion.
- Keep fallback, timeouts and prompt construction OUT of the adapter.

Rules:
- This file contains NO logic.
- No retries.
- No knowledge of sessions, TTS, or the client protocol.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TextGenerationAdapter(ABC):
    """
    Abstract base class for text-generation adapters.

    The adapter is a *dumb pipe*:
    (system prompt, question) -> vendor -> answer text.

    Responder responsibilities (NOT here):
    - Timeouts
    - Fallback on failure
    - Prompt content
    """

    @abstractmethod
    async def complete(self, *, system_prompt: str, user_message: str) -> str:
        """
        Run one completion.

        Contract:
        - Returns the stripped answer text.
        - Raises TextGenerationError on provider failure or empty output.
        - Must NOT retry internally.
        """
        raise NotImplementedError

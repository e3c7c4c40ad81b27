"""OpenAI chat-completions adapter."""
from __future__ import annotations

from typing import Any

from adapters.errors import TextGenerationError
from adapters.llm.base import TextGenerationAdapter
from spec import DEFAULT_LLM_MODEL, LLM_MAX_TOKENS, LLM_TEMPERATURE


class OpenAIChatAdapter(TextGenerationAdapter):
    """
    Concrete non-streaming chat adapter.

    Design notes:
    - One adapter instance is shared by all sessions.
    - Sampling parameters are fixed constants (spec.py), not per-request.
    - Adapter does NOT:
        - Retry
        - Apply timeouts
        - Fall back to local answers
    """

    def __init__(
        self,
        *,
        client: Any,  # Type: openai.AsyncOpenAI
        model: str = DEFAULT_LLM_MODEL,
        max_tokens: int = LLM_MAX_TOKENS,
        temperature: float = LLM_TEMPERATURE,
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def complete(self, *, system_prompt: str, user_message: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise TextGenerationError(f"{type(exc).__name__}: {exc}") from exc

        text = self._extract_content(response).strip()
        if not text:
            raise TextGenerationError("empty completion")
        return text

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_content(response: Any) -> str:
        """
        Extract message content from vendor response (OpenAI format).
        """
        try:
            return response.choices[0].message.content or ""
        except (AttributeError, IndexError):
            return ""

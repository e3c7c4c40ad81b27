"""
Question -> answer.

Primary path: text-generation adapter with the game's system prompt.
Fallback path: deterministic keyword rules (responder.fallback).

The responder never raises to its caller: any primary-path failure,
including a timeout, is logged and answered locally.
"""

from __future__ import annotations

import asyncio
from typing import Any

from adapters.llm.base import TextGenerationAdapter
from adapters.llm.prompts import build_system_prompt
from games.base import GameProfile
from observability.logger import log_event
from observability.metrics import timed
from responder.fallback import fallback_answer, match_topic
from spec import EXTERNAL_CALL_TIMEOUT_S


class Responder:
    """
    Answers rules questions for one game.

    Shared by all sessions; holds no per-session state.
    """

    def __init__(
        self,
        *,
        profile: GameProfile,
        generator: TextGenerationAdapter | None = None,
        timeout_s: float = EXTERNAL_CALL_TIMEOUT_S,
    ) -> None:
        self._profile = profile
        self._generator = generator
        self._timeout_s = timeout_s
        self._system_prompt = build_system_prompt(profile)

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    async def answer(self, question: str, *, session_id: str | None = None) -> str:
        """
        Produce an answer for a question. Never raises.

        CancelledError is a BaseException and still propagates, so
        session teardown can stop an in-flight round.
        """
        if self._generator is None:
            return self.fallback(question, session_id=session_id, reason="no_generator")

        try:
            with timed("llm_completion", session_id=session_id):
                return await asyncio.wait_for(
                    self._generator.complete(
                        system_prompt=self._system_prompt,
                        user_message=question,
                    ),
                    timeout=self._timeout_s,
                )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            return self.fallback(
                question,
                session_id=session_id,
                reason=f"{type(exc).__name__}: {exc}",
            )

    def fallback(
        self,
        question: str,
        *,
        session_id: str | None = None,
        reason: str | None = None,
    ) -> str:
        """Local keyword answer; pure apart from logging."""
        topic = match_topic(self._profile, question)
        log_event({
            "event_type": "RESPONDER_FALLBACK",
            "session_id": session_id,
            "reason": reason,
            "topic": topic.name if topic is not None else None,
        }, level="WARNING" if reason != "no_generator" else "INFO")
        return fallback_answer(self._profile, question)

    def game_info(self) -> dict[str, Any]:
        return self._profile.info()
